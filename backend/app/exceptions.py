"""Error types surfaced to callers of the SEO and ad-intel pipelines."""

from typing import Any


class SerpIntelError(Exception):
    """Base class for all caller-visible errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InputValidationError(SerpIntelError):
    """Request input is unusable (e.g. empty keyword). Raised before any upstream call."""


class ProviderConfigurationError(SerpIntelError):
    """A required provider credential is missing."""


class UpstreamProviderError(SerpIntelError):
    """The search provider failed or reported an error; the primary data source is unusable."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        super().__init__(message, details)
