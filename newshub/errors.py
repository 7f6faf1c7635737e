# File: newshub/errors.py
"""newshub.errors: exception taxonomy shared by the provider clients and the reader pipeline."""

from __future__ import annotations

from typing import Optional

__all__ = (
    "NewsHubError",
    "UpstreamError",
    "NewsApiError",
    "EmptyContentError",
    "ExtractionError",
)


class NewsHubError(Exception):
    """Base class for every error raised by NewsHub."""


class UpstreamError(NewsHubError):
    """A third-party service answered with a non-success HTTP status."""

    def __init__(self, status: Optional[int], reason: str = "") -> None:
        self.status = status
        self.reason = reason
        super().__init__(f"HTTP {status}: {reason}" if status is not None else reason)

    @property
    def is_auth_error(self) -> bool:
        return self.status == 401

    @property
    def is_rate_limited(self) -> bool:
        return self.status == 429


class NewsApiError(UpstreamError):
    """Headline/search provider failure: bad status, ``status != "ok"`` or transport error."""

    def __init__(
        self,
        status: Optional[int],
        reason: str = "",
        *,
        code: Optional[str] = None,
    ) -> None:
        super().__init__(status, reason)
        self.code = code


class EmptyContentError(NewsHubError):
    """The reader service answered successfully but the body was blank."""


class ExtractionError(NewsHubError):
    """Unexpected failure while classifying or transforming article content."""
