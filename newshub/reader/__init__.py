# File: newshub/reader/__init__.py
"""newshub.reader: получение упрощённого текста статьи и его превращение в безопасный HTML."""

from newshub.reader.fetcher import ContentFetcher
from newshub.reader.models import ContentFailure, ContentResult, ContentSuccess, FailureKind
from newshub.reader.normalizer import NO_CONTENT_PLACEHOLDER, normalize
from newshub.reader.resolver import ContentResolver

__all__ = [
    "ContentFetcher",
    "ContentResolver",
    "ContentResult",
    "ContentSuccess",
    "ContentFailure",
    "FailureKind",
    "normalize",
    "NO_CONTENT_PLACEHOLDER",
]
