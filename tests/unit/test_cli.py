"""Smoke tests for the Typer-based CLI."""

import pytest
from typer.testing import CliRunner

from gleaner._version import __version__
from gleaner.cli.main import app


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner):
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert f"Gleaner v{__version__}" in result.stdout


def test_catalog_default(runner):
    result = runner.invoke(app, ["catalog"])
    assert result.exit_code == 0
    assert "computer_science" in result.stdout
    assert "18" in result.stdout


def test_catalog_missing_file(runner, tmp_path):
    result = runner.invoke(app, ["catalog", "--catalog", str(tmp_path / "nope.yaml")])
    assert result.exit_code == 1


def test_score_text_file(runner, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("A short note on theory and analysis.")

    result = runner.invoke(app, ["score", str(path), "--url", "https://www.example.com/notes"])

    assert result.exit_code == 0
    assert "Would be rejected" in result.stdout


def test_score_html_from_academic_host(runner, tmp_path, long_article_html):
    path = tmp_path / "article.html"
    path.write_text(long_article_html)

    result = runner.invoke(app, ["score", str(path), "--url", "https://cs.example.edu/article"])

    assert result.exit_code == 0
    assert "academic" in result.stdout
    assert "Would be accepted" in result.stdout


def test_score_missing_file(runner, tmp_path):
    result = runner.invoke(app, ["score", str(tmp_path / "missing.html")])
    assert result.exit_code == 1


def test_status_empty_root(runner, tmp_path):
    result = runner.invoke(app, ["status", "--root", str(tmp_path / "corpus")])
    assert result.exit_code == 0
    assert "Current Size" in result.stdout
