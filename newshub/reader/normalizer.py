# newshub/reader/normalizer.py
"""
Turns the raw text returned by the reader service into displayable HTML.

Classification, first match wins:

1. full HTML document (``<html`` or a doctype) → scripts/styles stripped;
2. HTML fragment (``<p>``, ``<div>``, ``<article>``) → same stripping;
3. anything else is markdown → :mod:`newshub.reader.markdown`.

Blank input, or a branch that leaves nothing behind, yields
:data:`NO_CONTENT_PLACEHOLDER`. :func:`normalize` does no I/O.
"""
from __future__ import annotations

import enum
import re
from typing import Optional

from newshub.errors import ExtractionError
from newshub.reader.markdown import markdown_to_html
from newshub.reader.sanitizer import strip_scripts_and_styles

NO_CONTENT_PLACEHOLDER = "<p>No content available</p>"

_DOCUMENT_RE = re.compile(r"<html|<!doctype", re.IGNORECASE)
_FRAGMENT_RE = re.compile(r"<(?:p|div|article)(?:\s[^>]*)?>", re.IGNORECASE)


class ContentKind(str, enum.Enum):
    EMPTY = "empty"
    DOCUMENT = "document"
    FRAGMENT = "fragment"
    MARKDOWN = "markdown"


def classify(raw_text: Optional[str]) -> ContentKind:
    if not raw_text or not raw_text.strip():
        return ContentKind.EMPTY
    if _DOCUMENT_RE.search(raw_text):
        return ContentKind.DOCUMENT
    if _FRAGMENT_RE.search(raw_text):
        return ContentKind.FRAGMENT
    return ContentKind.MARKDOWN


def normalize(raw_text: Optional[str]) -> str:
    """Raw reader output → sanitized HTML, never an empty string.

    Raises :class:`~newshub.errors.ExtractionError` if a parser blows up;
    the resolver turns that into an error block.
    """
    kind = classify(raw_text)
    if kind is ContentKind.EMPTY:
        return NO_CONTENT_PLACEHOLDER

    try:
        if kind is ContentKind.MARKDOWN:
            html = markdown_to_html(raw_text)
        else:
            html = strip_scripts_and_styles(raw_text, document=kind is ContentKind.DOCUMENT)
    except Exception as exc:
        raise ExtractionError(f"could not convert {kind.value} content: {exc}") from exc

    return html if html.strip() else NO_CONTENT_PLACEHOLDER


__all__ = ["normalize", "classify", "ContentKind", "NO_CONTENT_PLACEHOLDER"]
