# newshub/presentation/controller.py
"""
Presentation controller: owns the modal state and feeds it resolved content.
"""
from __future__ import annotations

from typing import Dict, Optional, Protocol

from newshub.logger import get_logger
from newshub.news.models import ArticleRef
from newshub.presentation.state import (
    ModalState,
    ViewMode,
    apply_content,
    close_article,
    select_article,
    switch_mode,
)
from newshub.reader.resolver import render_loading

log = get_logger("presentation")


class SupportsResolve(Protocol):
    async def resolve_content(self, article_url: str) -> str: ...


class PresentationController:
    """Holds the current :class:`ModalState`; all mutation goes through state transitions."""

    def __init__(self, resolver: SupportsResolve) -> None:
        self.resolver = resolver
        self.state = ModalState()

    @property
    def current_article(self) -> Optional[ArticleRef]:
        return self.state.article

    async def open_article(self, article: ArticleRef) -> ModalState:
        """Select *article*, resolve its content and return the resulting state.

        If another article was opened (or the modal closed) while this one was
        resolving, the late result is dropped.
        """
        self.state = select_article(self.state, article, render_loading())
        generation = self.state.generation

        html = await self.resolver.resolve_content(article.url)

        if generation != self.state.generation:
            log.debug("Discarding stale content for %s (generation %d)", article.url, generation)
        self.state = apply_content(self.state, generation, html)
        return self.state

    def show_reader(self) -> ModalState:
        self.state = switch_mode(self.state, ViewMode.READER)
        return self.state

    def show_embed(self) -> ModalState:
        self.state = switch_mode(self.state, ViewMode.EMBED)
        return self.state

    def close(self) -> ModalState:
        self.state = close_article(self.state)
        return self.state

    def share_payload(self) -> Optional[Dict[str, str]]:
        """What a share sheet or the clipboard would get for the current article."""
        article = self.state.article
        if article is None:
            return None
        return {
            "title": article.title,
            "text": article.description or "",
            "url": article.url,
        }


__all__ = ["PresentationController", "SupportsResolve"]
