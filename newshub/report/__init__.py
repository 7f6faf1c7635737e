# File: newshub/report/__init__.py
"""newshub.report: Сохранение ленты и статьи в JSON/HTML, используется CLI и тестами."""

from __future__ import annotations

from newshub.report.html_report import render_article_html, render_feed_html
from newshub.report.json_report import render_json

__all__ = ["render_json", "render_feed_html", "render_article_html"]
