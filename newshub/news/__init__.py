# File: newshub/news/__init__.py
"""newshub.news: клиент провайдера заголовков/поиска и схемы его ответов."""

from newshub.news.client import CATEGORIES, NewsClient
from newshub.news.models import ArticleRef, HeadlinesPayload

__all__ = ["NewsClient", "CATEGORIES", "ArticleRef", "HeadlinesPayload"]
