"""Custom exceptions for Gleaner.

This module defines the exception hierarchy used throughout Gleaner.
Per-source failures (fetch, persistence) are caught by the
orchestrator and never abort a run; CorpusRootError is the only
error that does.
"""

from enum import Enum


class GleanerError(Exception):
    """Base exception for all Gleaner errors.

    All Gleaner-specific exceptions inherit from this class,
    allowing users to catch all Gleaner errors with a single except clause.
    """

    def __init__(self, message: str, details: dict | None = None) -> None:
        """Initialize GleanerError.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(GleanerError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        setting_name: str | None = None,
        setting_value: str | None = None,
    ) -> None:
        """Initialize ConfigurationError.

        Args:
            message: Human-readable error message
            setting_name: Name of the problematic setting
            setting_value: Value that caused the error
        """
        details = {}
        if setting_name:
            details["setting_name"] = setting_name
        if setting_value:
            details["setting_value"] = setting_value
        super().__init__(message, details)
        self.setting_name = setting_name
        self.setting_value = setting_value


class CatalogError(ConfigurationError):
    """Raised when a source catalog file is missing or malformed."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message, setting_name="catalog_path", setting_value=path)
        self.path = path


class AcquisitionError(GleanerError):
    """Raised when acquiring a single source fails.

    Acquisition errors are local to one source: the orchestrator
    records them and moves on to the next catalog entry.
    """

    def __init__(
        self,
        message: str,
        source: str | None = None,
        source_type: str | None = None,
    ) -> None:
        """Initialize AcquisitionError.

        Args:
            message: Human-readable error message
            source: The source URL
            source_type: Type of resource being acquired (content, robots)
        """
        details = {}
        if source:
            details["source"] = source
        if source_type:
            details["source_type"] = source_type
        super().__init__(message, details)
        self.source = source
        self.source_type = source_type


class FetchErrorKind(str, Enum):
    """Why a content fetch failed."""

    TIMEOUT = "timeout"
    NETWORK = "network"
    HTTP_STATUS = "http_status"


class FetchError(AcquisitionError):
    """Raised when fetching a source's content fails.

    Never retried. The kind tells timeouts, transport failures and
    non-success HTTP statuses apart.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        kind: FetchErrorKind = FetchErrorKind.NETWORK,
        status_code: int | None = None,
    ) -> None:
        """Initialize FetchError.

        Args:
            message: Human-readable error message
            url: The URL that failed
            kind: Failure class
            status_code: HTTP status code for HTTP_STATUS failures
        """
        super().__init__(message, source=url, source_type="content")
        self.details["kind"] = kind.value
        if status_code:
            self.details["status_code"] = status_code
        self.url = url
        self.kind = kind
        self.status_code = status_code


class PermissionResolutionError(AcquisitionError):
    """Raised when robots.txt for a host cannot be resolved.

    The permission cache converts this into an allow-all decision;
    it never reaches the orchestrator.
    """

    def __init__(self, message: str, url: str | None = None) -> None:
        super().__init__(message, source=url, source_type="robots")
        self.url = url


class PersistenceError(GleanerError):
    """Raised when writing a document artifact to the corpus fails."""

    def __init__(self, message: str, path: str | None = None) -> None:
        details = {"path": path} if path else {}
        super().__init__(message, details)
        self.path = path


class CorpusRootError(GleanerError):
    """Raised when the corpus root cannot be created or read.

    This aborts the run before any source is processed.
    """

    def __init__(self, message: str, path: str | None = None) -> None:
        details = {"path": path} if path else {}
        super().__init__(message, details)
        self.path = path
