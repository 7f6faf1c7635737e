# newshub/reader/sanitizer.py
"""
Script/style stripping for HTML returned by the reader service.

Full documents are parsed with the ``lxml`` backend (it repairs broken
``<html>``/``<head>``/``<body>`` structure); fragments use ``html.parser``,
which does not wrap them into a document. ``<script>`` and ``<style>``
elements, comments and other markup declarations are removed; elements with
malformed names (``<scr<script>``) are unwrapped so only their text remains,
and malformed attribute names are dropped. Everything else is kept as is.
Running :func:`strip_scripts_and_styles` on its own output returns the same
markup.
"""
from __future__ import annotations

import re
from typing import Sequence

from bs4 import BeautifulSoup, Doctype
from bs4.element import PreformattedString

__all__: Sequence[str] = ("strip_scripts_and_styles", "STRIPPED_TAGS")

STRIPPED_TAGS: tuple[str, ...] = ("script", "style")

_TAG_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_.:-]*$")
_ATTR_NAME_RE = re.compile(r"^[^\s\"'<>/=]+$")


def _drop_special_strings(soup: BeautifulSoup) -> None:
    # every PreformattedString except a plain doctype
    for node in soup.find_all(string=lambda s: isinstance(s, PreformattedString)):
        if isinstance(node, Doctype) and "<" not in node:
            continue
        node.extract()


def _repair_names(soup: BeautifulSoup) -> None:
    for tag in list(soup.find_all(True)):
        if not _TAG_NAME_RE.match(tag.name):
            tag.unwrap()
            continue
        for attr in [name for name in tag.attrs if not _ATTR_NAME_RE.match(name)]:
            del tag[attr]


def strip_scripts_and_styles(markup: str, *, document: bool = False) -> str:
    """Remove every ``<script>``/``<style>`` element (and anything that hides one) from *markup*."""
    if not markup:
        return ""
    soup = BeautifulSoup(markup, "lxml" if document else "html.parser")
    for element in soup(list(STRIPPED_TAGS)):
        element.decompose()
    _drop_special_strings(soup)
    _repair_names(soup)
    return str(soup).strip()
