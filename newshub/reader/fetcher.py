# newshub/reader/fetcher.py
"""
Fetcher module: asks the readability service for a simplified version of an article.

The article URL is percent-encoded and appended to the service endpoint.
``Accept: text/plain`` biases the service towards markdown instead of a full
HTML document. A bearer credential is attached only when one is configured;
the service also works unauthenticated, with lower rate limits.

:meth:`ContentFetcher.fetch` never raises: every failure path ends up as a
:class:`~newshub.reader.models.ContentFailure`.
"""
from __future__ import annotations

import asyncio
from typing import Dict, Optional
from urllib.parse import quote

from aiohttp import ClientError, ClientSession, ClientTimeout
from yarl import URL

from newshub.config import NewsHubConfig
from newshub.errors import EmptyContentError, UpstreamError
from newshub.logger import get_logger
from newshub.reader.models import ContentFailure, ContentResult, ContentSuccess, FailureKind
from newshub.utils import is_absolute_url

log = get_logger("reader")

AUTH_FAILED_MESSAGE = (
    "Authentication failed. Check your reader API key or remove it to use the free tier."
)
RATE_LIMITED_MESSAGE = (
    "Rate limit exceeded. Try configuring a free reader API key for higher limits."
)
EMPTY_RESPONSE_MESSAGE = "Empty response from the reader service"


def build_reader_url(base_url: str, article_url: str) -> str:
    """``https://r.jina.ai`` + ``https://ex.com/a?b=1`` → ``https://r.jina.ai/https%3A%2F%2Fex.com%2Fa%3Fb%3D1``."""
    return f"{base_url.rstrip('/')}/{quote(article_url, safe='')}"


class ContentFetcher:
    """One outbound request per article, no retries."""

    def __init__(self, config: NewsHubConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "ContentFetcher":
        if self.session is None:
            self.session = ClientSession(timeout=ClientTimeout(total=self.config.timeout))
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None

    @property
    def has_credential(self) -> bool:
        return self.config.has_reader_credential()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "text/plain",
            "User-Agent": self.config.user_agent,
        }
        if self.has_credential:
            headers["Authorization"] = f"Bearer {self.config.reader_api_key.strip()}"
        return headers

    async def fetch(self, article_url: str) -> ContentResult:
        """Return :class:`ContentSuccess` with the raw body or :class:`ContentFailure`."""
        if not isinstance(article_url, str) or not is_absolute_url(article_url.strip()):
            return ContentFailure(f"Invalid article URL: {article_url!r}", FailureKind.INVALID_URL)
        if self.session is None:
            log.error("ContentFetcher used outside of its async context")
            return ContentFailure("Reader session is not open", FailureKind.NETWORK)

        try:
            text = await self._request(article_url.strip())
        except UpstreamError as exc:
            log.warning("Reader service rejected %s: HTTP %s", article_url, exc.status)
            return _failure_for_status(exc)
        except EmptyContentError:
            log.warning("Reader service returned an empty body for %s", article_url)
            return ContentFailure(EMPTY_RESPONSE_MESSAGE, FailureKind.EMPTY)
        except asyncio.TimeoutError:
            log.warning("Reader service timed out for %s", article_url)
            return ContentFailure("The reader service did not answer in time", FailureKind.NETWORK)
        except ClientError as exc:
            log.warning("Network error fetching %s: %s", article_url, exc)
            return ContentFailure(f"Network error: {exc}", FailureKind.NETWORK)

        return ContentSuccess(text)

    async def _request(self, article_url: str) -> str:
        if self.session is None:
            raise RuntimeError("Session not initialized")
        reader_url = build_reader_url(self.config.reader_url, article_url)
        log.debug("GET %s", reader_url)
        # encoded=True keeps the article URL percent-encoded exactly as built
        request_url = URL(reader_url, encoded=True)
        async with self.session.get(request_url, headers=self._headers(), raise_for_status=False) as resp:
            if not 200 <= resp.status < 300:
                raise UpstreamError(resp.status, resp.reason or "")
            text = await resp.text(errors="replace")
        if not text or not text.strip():
            raise EmptyContentError(reader_url)
        return text


def _failure_for_status(exc: UpstreamError) -> ContentFailure:
    if exc.is_auth_error:
        return ContentFailure(AUTH_FAILED_MESSAGE, FailureKind.AUTH, exc.status)
    if exc.is_rate_limited:
        return ContentFailure(RATE_LIMITED_MESSAGE, FailureKind.RATE_LIMIT, exc.status)
    reason = f"HTTP {exc.status}: {exc.reason}" if exc.reason else f"HTTP {exc.status}"
    return ContentFailure(reason, FailureKind.HTTP, exc.status)


__all__ = [
    "ContentFetcher",
    "build_reader_url",
    "AUTH_FAILED_MESSAGE",
    "RATE_LIMITED_MESSAGE",
    "EMPTY_RESPONSE_MESSAGE",
]
