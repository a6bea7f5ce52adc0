"""Configuration management for Gleaner.

This module provides the GleanerSettings class holding the run
parameters of an acquisition run, supporting both environment
variables and .env files.
"""

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (compatible; Educational-Content-Collector/2.0; "
    "+https://ethical-scraper.example.com/bot)"
)


class GleanerSettings(BaseSettings):
    """Global configuration for Gleaner.

    Settings can be configured via:
    - Environment variables (prefixed with GLEANER_)
    - .env file
    - Direct instantiation

    Example:
        >>> settings = GleanerSettings(quality_threshold=0.7)
        >>> # Or via environment: GLEANER_QUALITY_THRESHOLD=0.7
    """

    # Corpus settings
    corpus_root: Path = Field(
        default=Path("./training-content"),
        description="Root directory of the persisted corpus",
    )
    target_size_bytes: int = Field(
        default=1024 * 1024 * 1024,
        ge=1,
        description="Corpus size at which the run stops",
    )
    summary_filename: str = Field(
        default="acquisition_summary.json",
        min_length=1,
        description="File name of the end-of-run summary under the corpus root",
    )
    catalog_path: Path | None = Field(
        default=None,
        description="Path to a YAML source catalog (built-in catalog if unset)",
    )

    # Quality settings
    quality_threshold: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Minimum quality score for a document to be persisted",
    )
    min_line_length: int = Field(
        default=10,
        ge=0,
        description="Extracted lines shorter than this are dropped as noise",
    )

    # Politeness and network settings
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="Agent identity sent with requests and tested against robots.txt",
    )
    request_delay: float = Field(
        default=2.0,
        ge=0.0,
        description="Seconds to wait after each successful fetch",
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0.0,
        description="Deadline for a content fetch in seconds",
    )
    robots_timeout: float = Field(
        default=10.0,
        gt=0.0,
        description="Deadline for a robots.txt fetch in seconds",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    log_format: str = Field(
        default="plain",
        description="Log format: 'structured' or 'plain'",
    )

    model_config = SettingsConfigDict(
        env_prefix="GLEANER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def summary_path(self) -> Path:
        """Location of the end-of-run summary file."""
        return self.corpus_root / self.summary_filename

    def to_dict(self) -> dict[str, Any]:
        """Convert settings to dictionary."""
        return self.model_dump()


# Global settings instance (lazy-loaded)
_settings: GleanerSettings | None = None


def get_settings() -> GleanerSettings:
    """Get the global settings instance.

    Returns:
        The global GleanerSettings instance, creating it if needed.
    """
    global _settings
    if _settings is None:
        _settings = GleanerSettings()
    return _settings


def configure(**kwargs: Any) -> GleanerSettings:
    """Configure global settings.

    Args:
        **kwargs: Settings to override

    Returns:
        The updated global settings instance

    Example:
        >>> configure(quality_threshold=0.8, log_level="DEBUG")
    """
    global _settings
    _settings = GleanerSettings(**kwargs)
    return _settings
