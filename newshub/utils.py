# File: newshub/utils.py
"""newshub.utils: Утилиты для URL и для оформления карточек статей (обрезка текста, относительные даты)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Sequence
from urllib.parse import urlparse

__all__: Sequence[str] = (
    "is_absolute_url",
    "truncate_text",
    "format_relative_date",
)


def is_absolute_url(url: str) -> bool:
    """Проверяет, что URL абсолютный и использует http(s)."""
    if not url:
        return False
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def truncate_text(text: Optional[str], max_length: int) -> str:
    """Обрезает текст до max_length символов и добавляет '...'."""
    if not text:
        return ""
    if len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_relative_date(published: Optional[datetime], now: Optional[datetime] = None) -> str:
    """Форматирует дату публикации относительно now: '5m ago', '3h ago', '2d ago', 'Mar 4'."""
    if published is None:
        return ""
    now = now or datetime.now(timezone.utc)
    if published.tzinfo is None:
        published = published.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    diff_minutes = int((now - published).total_seconds() // 60)
    diff_hours = diff_minutes // 60
    diff_days = diff_hours // 24

    if diff_minutes < 60:
        return f"{max(diff_minutes, 0)}m ago"
    if diff_hours < 24:
        return f"{diff_hours}h ago"
    if diff_days < 7:
        return f"{diff_days}d ago"

    label = f"{published.strftime('%b')} {published.day}"
    if published.year != now.year:
        label += f", {published.year}"
    return label
