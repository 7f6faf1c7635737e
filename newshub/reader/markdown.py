# newshub/reader/markdown.py
"""Small markdown reader for the text returned by the readability service.

Only the subset that service actually emits is understood:

* ``#``, ``##``, ``###`` headings (hash marks, one space, text);
* ``**strong**`` and ``*emphasis*``;
* ``[label](url)`` links, opened in a new tab with ``rel="noopener noreferrer"``;
* ``![alt](url)`` images, lazily loaded;
* blank lines separate paragraphs, a single newline is a line break.

Parsing is two-step. :func:`parse_markdown` turns text into a tree of
:class:`Document` / block / inline nodes; :func:`render_html` turns the tree
into markup. Text nodes are always escaped, so raw HTML inside markdown
(``<script>`` included) is displayed, never executed. Links and images with
``javascript:``/``vbscript:``/``data:`` targets degrade to their text.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Tuple, Union
from urllib.parse import urlparse

from markupsafe import escape

__all__ = (
    "Text",
    "Strong",
    "Emphasis",
    "Link",
    "Image",
    "LineBreak",
    "Heading",
    "Paragraph",
    "Document",
    "parse_markdown",
    "parse_inline",
    "render_html",
    "markdown_to_html",
)


# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Text:
    value: str


@dataclass(frozen=True, slots=True)
class Strong:
    children: Tuple["Inline", ...]


@dataclass(frozen=True, slots=True)
class Emphasis:
    children: Tuple["Inline", ...]


@dataclass(frozen=True, slots=True)
class Link:
    href: str
    children: Tuple["Inline", ...]


@dataclass(frozen=True, slots=True)
class Image:
    src: str
    alt: str


@dataclass(frozen=True, slots=True)
class LineBreak:
    pass


Inline = Union[Text, Strong, Emphasis, Link, Image, LineBreak]


@dataclass(frozen=True, slots=True)
class Heading:
    level: int
    children: Tuple[Inline, ...]


@dataclass(frozen=True, slots=True)
class Paragraph:
    children: Tuple[Inline, ...]


Block = Union[Heading, Paragraph]


@dataclass(frozen=True, slots=True)
class Document:
    blocks: Tuple[Block, ...]

    def __bool__(self) -> bool:
        return bool(self.blocks)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

_HEADING_RE = re.compile(r"^(#{1,3}) (.*)$")
# targets may hold one level of balanced parentheses: wiki/Foo_(bar)
_TARGET = r"\(((?:[^()]|\([^()]*\))+)\)"
_IMAGE_RE = re.compile(r"!\[([^\]]*)\]" + _TARGET)
_LINK_RE = re.compile(r"\[([^\]]+)\]" + _TARGET)

_UNSAFE_SCHEMES = frozenset({"javascript", "vbscript", "data"})


def _is_safe_url(url: str) -> bool:
    try:
        scheme = urlparse(url.strip()).scheme.lower()
    except ValueError:
        return False
    return scheme not in _UNSAFE_SCHEMES


def _find_single_star(text: str, start: int) -> int:
    """Index of the ``*`` closing an emphasis opened before *start*, or -1.

    Balanced ``**…**`` pairs inside the emphasis are skipped over.
    """
    pos = start
    while pos < len(text):
        if text.startswith("**", pos):
            close = text.find("**", pos + 2)
            if close == -1:
                return pos
            pos = close + 2
            continue
        if text[pos] == "*":
            return pos
        pos += 1
    return -1


def parse_inline(text: str) -> Tuple[Inline, ...]:
    """Tokenize one line of markdown into inline nodes."""
    nodes: List[Inline] = []
    buf: List[str] = []

    def flush() -> None:
        if buf:
            nodes.append(Text("".join(buf)))
            buf.clear()

    pos = 0
    while pos < len(text):
        if text.startswith("![", pos):
            match = _IMAGE_RE.match(text, pos)
            if match and match.group(2).strip():
                flush()
                alt, src = match.group(1), match.group(2).strip()
                if _is_safe_url(src):
                    nodes.append(Image(src=src, alt=alt))
                elif alt:
                    nodes.append(Text(alt))
                pos = match.end()
                continue

        if text[pos] == "[":
            match = _LINK_RE.match(text, pos)
            if match and match.group(2).strip():
                flush()
                label, href = parse_inline(match.group(1)), match.group(2).strip()
                if _is_safe_url(href):
                    nodes.append(Link(href=href, children=label))
                else:
                    nodes.extend(label)
                pos = match.end()
                continue

        if text.startswith("**", pos):
            close = text.find("**", pos + 2)
            if close > pos + 2:
                flush()
                nodes.append(Strong(parse_inline(text[pos + 2 : close])))
                pos = close + 2
                continue

        if text[pos] == "*" and not text.startswith("**", pos):
            close = _find_single_star(text, pos + 1)
            if close > pos + 1:
                flush()
                nodes.append(Emphasis(parse_inline(text[pos + 1 : close])))
                pos = close + 1
                continue

        buf.append(text[pos])
        pos += 1

    flush()
    return tuple(nodes)


def _paragraph(lines: List[str]) -> Paragraph:
    children: List[Inline] = []
    for index, line in enumerate(lines):
        if index:
            children.append(LineBreak())
        children.extend(parse_inline(line))
    return Paragraph(tuple(children))


def parse_markdown(text: str) -> Document:
    """Split *text* into heading and paragraph blocks."""
    blocks: List[Block] = []
    pending: List[str] = []

    for line in text.replace("\r\n", "\n").replace("\r", "\n").split("\n"):
        heading = _HEADING_RE.match(line)
        if heading and heading.group(2).strip():
            if pending:
                blocks.append(_paragraph(pending))
                pending = []
            blocks.append(Heading(len(heading.group(1)), parse_inline(heading.group(2).strip())))
        elif not line.strip():
            if pending:
                blocks.append(_paragraph(pending))
                pending = []
        else:
            pending.append(line.rstrip())

    if pending:
        blocks.append(_paragraph(pending))
    return Document(tuple(blocks))


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_inline(nodes: Tuple[Inline, ...]) -> str:
    parts: List[str] = []
    for node in nodes:
        if isinstance(node, Text):
            parts.append(str(escape(node.value)))
        elif isinstance(node, Strong):
            parts.append(f"<strong>{_render_inline(node.children)}</strong>")
        elif isinstance(node, Emphasis):
            parts.append(f"<em>{_render_inline(node.children)}</em>")
        elif isinstance(node, Link):
            parts.append(
                f'<a href="{escape(node.href)}" target="_blank" rel="noopener noreferrer">'
                f"{_render_inline(node.children)}</a>"
            )
        elif isinstance(node, Image):
            parts.append(f'<img src="{escape(node.src)}" alt="{escape(node.alt)}" loading="lazy">')
        elif isinstance(node, LineBreak):
            parts.append("<br>")
        else:  # pragma: no cover
            raise TypeError(f"unknown inline node {node!r}")
    return "".join(parts)


def render_html(document: Document) -> str:
    blocks: List[str] = []
    for block in document.blocks:
        if isinstance(block, Heading):
            blocks.append(f"<h{block.level}>{_render_inline(block.children)}</h{block.level}>")
        else:
            blocks.append(f"<p>{_render_inline(block.children)}</p>")
    return "\n".join(blocks)


def markdown_to_html(text: str) -> str:
    """Shortcut: ``render_html(parse_markdown(text))``; ``""`` for blank input."""
    if not text or not text.strip():
        return ""
    return render_html(parse_markdown(text))
