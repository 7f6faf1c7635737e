# newshub/news/client.py
"""
Client for the headline/search provider (NewsAPI-compatible).

Two endpoints are consumed: ``/top-headlines`` (by country/category) and
``/everything`` (full-text search sorted by publish time). Both are
authenticated with an ``apiKey`` query parameter and paginated to the
configured page size.
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, Optional

from aiohttp import ClientError, ClientSession, ClientTimeout, ContentTypeError
from pydantic import ValidationError

from newshub.config import NewsHubConfig
from newshub.errors import NewsApiError
from newshub.logger import get_logger
from newshub.news.models import HeadlinesPayload

log = get_logger("news")

CATEGORIES = (
    "business",
    "entertainment",
    "general",
    "health",
    "science",
    "sports",
    "technology",
)


class NewsClient:
    """Fetches headline and search pages; raises :class:`NewsApiError` on any failure."""

    def __init__(self, config: NewsHubConfig, session: Optional[ClientSession] = None) -> None:
        self.config = config
        self.session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "NewsClient":
        if self.session is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
            )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None

    async def fetch_top_headlines(self, category: str = "") -> HeadlinesPayload:
        """Top headlines for the configured country, optionally narrowed to *category*."""
        params: Dict[str, Any] = {"country": self.config.country}
        if category:
            params["category"] = category
        params["pageSize"] = self.config.page_size
        return await self._get("top-headlines", params)

    async def search_news(self, query: str) -> HeadlinesPayload:
        """Search everything for *query*, newest first."""
        params: Dict[str, Any] = {
            "q": query,
            "sortBy": "publishedAt",
            "pageSize": self.config.page_size,
            "language": self.config.language,
        }
        return await self._get("everything", params)

    async def _get(self, endpoint: str, params: Dict[str, Any]) -> HeadlinesPayload:
        if self.session is None:
            raise RuntimeError("Session not initialized")
        url = f"{self.config.news_api_url}/{endpoint}"
        query = {**params, "apiKey": self.config.news_api_key}
        log.debug("GET %s %s", url, params)

        try:
            async with self.session.get(url, params=query, raise_for_status=False) as resp:
                try:
                    data = await resp.json(content_type=None)
                except (ContentTypeError, ValueError):
                    data = None
                if resp.status >= 400:
                    message = data.get("message") if isinstance(data, dict) else None
                    code = data.get("code") if isinstance(data, dict) else None
                    raise NewsApiError(resp.status, message or resp.reason or "", code=code)
        except asyncio.TimeoutError as exc:
            log.error("Timeout requesting %s", endpoint)
            raise NewsApiError(None, "request timed out") from exc
        except ClientError as exc:
            log.error("Network error requesting %s: %s", endpoint, exc)
            raise NewsApiError(None, f"network error: {exc}") from exc

        if not isinstance(data, dict):
            raise NewsApiError(resp.status, "malformed response from news provider")
        try:
            payload = HeadlinesPayload.model_validate(data)
        except ValidationError as exc:
            raise NewsApiError(resp.status, f"malformed response from news provider: {exc}") from exc

        if not payload.ok:
            # the provider can answer 200 with status "error"
            raise NewsApiError(
                resp.status, payload.message or "Failed to load news", code=payload.code
            )
        return payload


__all__ = ["NewsClient", "CATEGORIES"]
