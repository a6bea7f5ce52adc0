"""Tests for configuration module."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gleaner.core.config import DEFAULT_USER_AGENT, GleanerSettings, configure, get_settings


class TestGleanerSettings:
    """Tests for the GleanerSettings class."""

    def test_default_settings(self):
        """Test default settings creation."""
        settings = GleanerSettings()
        assert settings.corpus_root == Path("./training-content")
        assert settings.target_size_bytes == 1024 * 1024 * 1024
        assert settings.quality_threshold == 0.6
        assert settings.request_delay == 2.0
        assert settings.request_timeout == 60
        assert settings.robots_timeout == 10
        assert settings.min_line_length == 10
        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.log_format == "plain"

    def test_custom_settings(self):
        """Test custom settings."""
        settings = GleanerSettings(quality_threshold=0.8, request_delay=0.5)
        assert settings.quality_threshold == 0.8
        assert settings.request_delay == 0.5

    def test_settings_from_env(self, monkeypatch):
        """Test settings from environment variables."""
        monkeypatch.setenv("GLEANER_QUALITY_THRESHOLD", "0.75")
        monkeypatch.setenv("GLEANER_TARGET_SIZE_BYTES", "5000")

        settings = GleanerSettings()
        assert settings.quality_threshold == 0.75
        assert settings.target_size_bytes == 5000

    def test_summary_path(self, tmp_path):
        """Test the summary file lives under the corpus root."""
        settings = GleanerSettings(corpus_root=tmp_path)
        assert settings.summary_path == tmp_path / "acquisition_summary.json"

    def test_configure_replaces_global(self):
        """Test configure() installs new global settings."""
        original = get_settings()
        try:
            settings = configure(quality_threshold=0.9)
            assert get_settings() is settings
            assert get_settings().quality_threshold == 0.9
        finally:
            configure(**original.model_dump())


class TestConfigValidation:
    """Tests for configuration validation."""

    def test_threshold_bounds(self):
        """Test quality threshold must be between 0 and 1."""
        with pytest.raises(ValidationError):
            GleanerSettings(quality_threshold=1.5)

        with pytest.raises(ValidationError):
            GleanerSettings(quality_threshold=-0.1)

    def test_target_must_be_positive(self):
        """Test the size budget must be at least one byte."""
        with pytest.raises(ValidationError):
            GleanerSettings(target_size_bytes=0)

    def test_delay_cannot_be_negative(self):
        with pytest.raises(ValidationError):
            GleanerSettings(request_delay=-1)

    def test_timeouts_must_be_positive(self):
        with pytest.raises(ValidationError):
            GleanerSettings(request_timeout=0)

        with pytest.raises(ValidationError):
            GleanerSettings(robots_timeout=0)
