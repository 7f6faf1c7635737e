# File: newshub/app.py
"""newshub.app: фасад приложения: состояние ленты, загрузка новостей, открытие статьи."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from newshub.config import NewsHubConfig
from newshub.errors import NewsApiError
from newshub.history import SearchHistory
from newshub.logger import logger
from newshub.news.client import NewsClient
from newshub.news.models import ArticleRef
from newshub.presentation.controller import PresentationController
from newshub.presentation.state import ModalState, ViewMode
from newshub.reader.fetcher import ContentFetcher
from newshub.reader.resolver import ContentResolver

__all__ = ["FeedState", "FeedPage", "NewsHub", "describe_news_error"]


@dataclass(frozen=True, slots=True)
class FeedState:
    """Что сейчас показывает лента: категорию или поисковый запрос (но не оба сразу)."""

    category: str = ""
    query: str = ""

    def with_category(self, category: str) -> FeedState:
        return FeedState(category=category.strip().lower(), query="")

    def with_query(self, query: str) -> FeedState:
        trimmed = (query or "").strip()
        if not trimmed:
            raise ValueError("Please enter a search term")
        return FeedState(category="", query=trimmed)

    @property
    def title(self) -> str:
        if self.query:
            return f'Search: "{self.query}"'
        name = self.category.capitalize() if self.category else "Top"
        return f"{name} Headlines"


@dataclass(slots=True)
class FeedPage:
    """Результат загрузки ленты: заголовок секции и валидные статьи."""

    title: str
    articles: List[ArticleRef] = field(default_factory=list)
    total_results: int = 0

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "total_results": self.total_results,
            "articles": [a.to_dict() for a in self.articles],
        }


def describe_news_error(exc: NewsApiError, config: NewsHubConfig) -> str:
    """Сообщение для пользователя по ошибке провайдера новостей."""
    if not config.is_news_api_key_configured():
        return (
            "Please add your NewsAPI key (news_api_key in the config or NEWSHUB_API_KEY) "
            "to fetch news. Get a free key at NewsAPI.org"
        )
    if exc.is_rate_limited:
        return "Rate limit exceeded. Please try again later."
    if exc.is_auth_error:
        return "Invalid API key. Please check your NewsAPI key."
    return f"Error: {exc.reason or exc}"


class NewsHub:
    """Фасад для CLI и тестов: лента, история поиска и окно статьи.

    Сетевые клиенты создаются в ``__aenter__`` и закрываются в ``__aexit__``;
    для тестов их можно передать готовыми.
    """

    def __init__(
        self,
        config: NewsHubConfig,
        *,
        history: Optional[SearchHistory] = None,
        news_client: Optional[NewsClient] = None,
        fetcher: Optional[ContentFetcher] = None,
    ) -> None:
        self.config = config
        self.history = (
            history if history is not None else SearchHistory(config.history_file, config.history_limit)
        )
        self.news_client = news_client or NewsClient(config)
        self.fetcher = fetcher or ContentFetcher(config)
        self.resolver = ContentResolver(self.fetcher)
        self.presenter = PresentationController(self.resolver)
        self.feed = FeedState()

    async def __aenter__(self) -> NewsHub:
        await self.news_client.__aenter__()
        await self.fetcher.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.fetcher.__aexit__(exc_type, exc, tb)
        await self.news_client.__aexit__(exc_type, exc, tb)

    # ------------------------------------------------------------------ feed

    def select_category(self, category: str) -> FeedState:
        self.feed = self.feed.with_category(category)
        return self.feed

    def search(self, query: str) -> FeedState:
        self.feed = self.feed.with_query(query)
        return self.feed

    async def load_news(self, state: Optional[FeedState] = None) -> FeedPage:
        """Загружает ленту для state (по умолчанию текущей); ошибки провайдера пробрасываются."""
        state = state or self.feed
        self.feed = state
        if state.query:
            logger.info("Searching news for %r", state.query)
            payload = await self.news_client.search_news(state.query)
            self.history.add(state.query)
        else:
            logger.info("Loading %s", state.title.lower())
            payload = await self.news_client.fetch_top_headlines(state.category)

        articles = payload.parse_articles()
        dropped = len(payload.articles) - len(articles)
        if dropped:
            logger.info("Dropped %d malformed article(s)", dropped)
        return FeedPage(title=state.title, articles=articles, total_results=payload.total_results)

    # --------------------------------------------------------------- article

    async def open_article(self, article: ArticleRef, mode: ViewMode = ViewMode.READER) -> ModalState:
        state = await self.presenter.open_article(article)
        if mode is ViewMode.EMBED:
            state = self.presenter.show_embed()
        return state

    def close_article(self) -> ModalState:
        return self.presenter.close()
