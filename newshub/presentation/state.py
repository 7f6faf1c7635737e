# newshub/presentation/state.py
"""
View state of the article modal, as an immutable value.

Every transition takes a :class:`ModalState` and returns a new one. The
``generation`` counter is bumped whenever the open article changes (select
or close); content resolved for an older generation is ignored by
:func:`apply_content`.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Optional

from newshub.news.models import ArticleRef

BLANK_FRAME = "about:blank"


class ViewMode(str, enum.Enum):
    READER = "reader"
    EMBED = "embed"


@dataclass(frozen=True, slots=True)
class ModalState:
    article: Optional[ArticleRef] = None
    mode: ViewMode = ViewMode.READER
    reader_html: str = ""
    frame_src: str = BLANK_FRAME
    generation: int = 0

    @property
    def is_open(self) -> bool:
        return self.article is not None

    @property
    def frame_loaded(self) -> bool:
        return bool(self.frame_src) and self.frame_src != BLANK_FRAME


def select_article(state: ModalState, article: ArticleRef, placeholder: str) -> ModalState:
    """Open *article* in reader mode with a loading placeholder."""
    return ModalState(
        article=article,
        mode=ViewMode.READER,
        reader_html=placeholder,
        frame_src=BLANK_FRAME,
        generation=state.generation + 1,
    )


def apply_content(state: ModalState, generation: int, html: str) -> ModalState:
    """Put resolved *html* into the reader pane unless it belongs to a stale generation."""
    if generation != state.generation or not state.is_open:
        return state
    return replace(state, reader_html=html)


def switch_mode(state: ModalState, mode: ViewMode) -> ModalState:
    """Toggle reader/embed; the frame source is assigned at most once per open article."""
    if not state.is_open:
        return state
    if mode is ViewMode.EMBED and not state.frame_loaded:
        return replace(state, mode=mode, frame_src=state.article.url)
    return replace(state, mode=mode)


def close_article(state: ModalState) -> ModalState:
    return ModalState(generation=state.generation + 1)


__all__ = [
    "BLANK_FRAME",
    "ViewMode",
    "ModalState",
    "select_article",
    "apply_content",
    "switch_mode",
    "close_article",
]
