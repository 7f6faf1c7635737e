# newshub/reader/models.py
"""
Data models for the reader pipeline.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union


class FailureKind(str, enum.Enum):
    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    HTTP = "http"
    EMPTY = "empty"
    NETWORK = "network"
    INVALID_URL = "invalid_url"


@dataclass(frozen=True, slots=True)
class ContentSuccess:
    """Raw text (markdown or HTML) returned by the reader service."""

    raw_text: str

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class ContentFailure:
    """Why the reader service could not provide content."""

    reason: str
    kind: FailureKind = FailureKind.HTTP
    status: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


ContentResult = Union[ContentSuccess, ContentFailure]

__all__ = ["ContentResult", "ContentSuccess", "ContentFailure", "FailureKind"]
