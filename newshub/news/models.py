# newshub/news/models.py
"""
Schemas for the headline/search provider responses.

Entries are validated one at a time so that a single malformed article
(missing title, relative URL, ``"[Removed]"`` placeholder) is dropped and
logged instead of taking the whole page down.
"""
from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional
from urllib.parse import urlparse

from pydantic import (
    AliasChoices,
    AliasPath,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from newshub.logger import get_logger

log = get_logger("news")

REMOVED_MARKER = "[Removed]"


def _require_absolute_http(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"not an absolute http(s) URL: {url!r}")
    return url


class ArticleRef(BaseModel):
    """A single article as listed by the provider; identified by ``url``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    source_name: str = Field(
        "", validation_alias=AliasChoices(AliasPath("source", "name"), "source_name")
    )
    published_at: Optional[datetime] = Field(
        None, validation_alias=AliasChoices("publishedAt", "published_at")
    )
    image_url: Optional[str] = Field(
        None, validation_alias=AliasChoices("urlToImage", "image_url")
    )

    @field_validator("url", mode="after")
    def _check_url(cls, v: str) -> str:
        return _require_absolute_http(v.strip())

    @field_validator("title", mode="after")
    def _check_title(cls, v: str) -> str:
        v = v.strip()
        if not v or v == REMOVED_MARKER:
            raise ValueError("article has no usable title")
        return v

    @field_validator("source_name", mode="before")
    def _none_source(cls, v: Any) -> Any:
        return "" if v is None else v

    @field_validator("image_url", mode="after")
    def _drop_bad_image(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        try:
            return _require_absolute_http(v)
        except ValueError:
            return None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class HeadlinesPayload(BaseModel):
    """Envelope returned by both provider endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    total_results: int = Field(0, validation_alias=AliasChoices("totalResults", "total_results"))
    articles: List[Any] = Field(default_factory=list)
    code: Optional[str] = None
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def parse_articles(self) -> List[ArticleRef]:
        """Validate raw entries, skipping (and logging) the malformed ones."""
        result: List[ArticleRef] = []
        for index, raw in enumerate(self.articles):
            if not isinstance(raw, dict):
                log.warning("Skipping article #%d: expected object, got %s", index, type(raw).__name__)
                continue
            try:
                result.append(ArticleRef.model_validate(raw))
            except ValidationError as exc:
                log.debug("Skipping article #%d: %s", index, exc.errors()[0].get("msg", exc))
        return result


__all__ = ["ArticleRef", "HeadlinesPayload", "REMOVED_MARKER"]
