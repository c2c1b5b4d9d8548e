"""
Error taxonomy of the book metadata providers.

Every error carries the information a web layer needs to answer the
request: an HTTP status to respond with, whether trying again later can
help, and a user-facing fallback hint. The client never retries on its own.
"""

from __future__ import annotations

from typing import ClassVar, TypedDict

MANUAL_ENTRY_HINT = "Manual book entry is available"


class ErrorPayload(TypedDict):
    error: str
    details: str
    fallback: str


class MetadataError(Exception):
    """Base class for provider failures."""

    http_status: ClassVar[int] = 500
    summary: ClassVar[str] = "Book lookup failed"

    def __init__(
        self,
        message: str,
        *,
        fallback: str = MANUAL_ENTRY_HINT,
    ) -> None:
        super().__init__(message)
        self.fallback = fallback

    @property
    def retryable(self) -> bool:
        """Whether the same request may succeed later."""
        return False

    @property
    def status_code(self) -> int:
        """HTTP status the boundary layer should answer with."""
        return self.http_status

    @property
    def title(self) -> str:
        """Short, user-facing description of the failure."""
        return self.summary

    def to_payload(self) -> ErrorPayload:
        return ErrorPayload(error=self.title, details=str(self), fallback=self.fallback)


class ConfigurationError(MetadataError):
    """The provider credential (or other required setting) is missing."""

    summary = "Book metadata provider not configured"


class InvalidSearchParams(MetadataError, ValueError):
    """Search parameters failed validation."""

    http_status = 400
    summary = "Invalid search parameters"

    def __init__(
        self,
        message: str,
        *,
        fallback: str = "Try different search terms",
    ) -> None:
        super().__init__(message, fallback=fallback)


class RateLimitExceeded(MetadataError):
    """The local outbound quota is exhausted.

    Attributes:
        retry_after: Seconds until the current quota window resets.
    """

    http_status = 429
    summary = "Too many requests"

    def __init__(self, retry_after: int, *, fallback: str = MANUAL_ENTRY_HINT) -> None:
        super().__init__(
            f"Rate limit exceeded. Try again in {retry_after} seconds.",
            fallback=fallback,
        )
        self.retry_after = retry_after

    @property
    def retryable(self) -> bool:
        return True


class ProviderError(MetadataError):
    """The provider answered with a non-success status.

    Attributes:
        status: HTTP status returned by the provider.
        status_text: Reason phrase returned by the provider.
    """

    def __init__(
        self,
        status: int,
        status_text: str = "",
        *,
        fallback: str = MANUAL_ENTRY_HINT,
    ) -> None:
        super().__init__(
            f"Provider API error: {status} {status_text}".rstrip(),
            fallback=fallback,
        )
        self.status = status
        self.status_text = status_text

    @property
    def retryable(self) -> bool:
        return self.status >= 500 or self.status == 429

    @property
    def status_code(self) -> int:
        if self.status in (400, 404):
            return self.status
        if self.status in (401, 403, 429) or self.status >= 500:
            # quota, credential or provider outage: the service is unavailable
            return 503
        return 500

    @property
    def title(self) -> str:
        if self.status in (401, 403):
            return "Provider quota exceeded or invalid API key"
        if self.status == 400:
            return "Invalid search parameters"
        if self.status == 404:
            return "Book not found"
        return "Book metadata provider error"


class NetworkError(MetadataError):
    """The provider could not be reached."""

    http_status = 503
    summary = "Network error"

    @property
    def retryable(self) -> bool:
        return True
