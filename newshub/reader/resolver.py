# newshub/reader/resolver.py
"""
Content resolver: article URL in, displayable HTML out.

Failure handling is the whole point of this module: whatever goes wrong,
the caller receives a non-empty block of markup that explains what
happened and points at the embedded view or the original article.
"""
from __future__ import annotations

from typing import Callable, Optional, Protocol

from newshub.logger import get_logger
from newshub.reader.models import ContentFailure, ContentResult, ContentSuccess
from newshub.reader.normalizer import normalize
from newshub.rendering import render_template

log = get_logger("reader")


class SupportsFetch(Protocol):
    """Anything that can fetch article content the way :class:`ContentFetcher` does."""

    @property
    def has_credential(self) -> bool: ...

    async def fetch(self, article_url: str) -> ContentResult: ...


def render_failure(failure: ContentFailure, *, has_credential: bool) -> str:
    return render_template(
        "reader_error.html.j2",
        reason=failure.reason,
        show_credential_tip=not has_credential,
    )


def render_extraction_failed(exc: BaseException) -> str:
    return render_template("extraction_failed.html.j2", message=str(exc) or type(exc).__name__)


def render_invalid_content() -> str:
    return render_template("invalid_content.html.j2")


def render_loading() -> str:
    return render_template("loading.html.j2")


class ContentResolver:
    """Fetcher + normalizer behind a boundary that never raises."""

    def __init__(
        self,
        fetcher: SupportsFetch,
        normalizer: Callable[[Optional[str]], str] = normalize,
    ) -> None:
        self.fetcher = fetcher
        self.normalizer = normalizer

    async def resolve_content(self, article_url: str) -> str:
        try:
            result = await self.fetcher.fetch(article_url)
            return self._format(result)
        except Exception as exc:  # pylint: disable=broad-exception-caught
            log.error("Content extraction failed for %s: %s", article_url, exc)
            return render_extraction_failed(exc)

    def _format(self, result: ContentResult) -> str:
        if isinstance(result, ContentFailure):
            return render_failure(result, has_credential=self.fetcher.has_credential)
        if not isinstance(result, ContentSuccess) or not isinstance(result.raw_text, str):
            log.warning("Unexpected payload from the reader service: %r", type(result).__name__)
            return render_invalid_content()
        return self.normalizer(result.raw_text)


__all__ = [
    "ContentResolver",
    "SupportsFetch",
    "render_failure",
    "render_extraction_failed",
    "render_invalid_content",
    "render_loading",
]
