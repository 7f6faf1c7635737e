# File: newshub/report/html_report.py
"""newshub.report.html_report: Генерация HTML-страниц ленты и статьи с помощью Jinja2."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional, Union

from newshub.app import FeedPage
from newshub.presentation.state import ModalState
from newshub.rendering import render_template


def _write(html_content: str, output_path: Union[Path, str]) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html_content, encoding="utf-8")
    return output_path


def render_feed_html(
    page: FeedPage,
    output_path: Union[Path, str],
    template_dir: Union[Path, str, None] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Рендерит ленту карточек из шаблона и сохраняет её по указанному пути.

    Args:
        page: объект FeedPage.
        output_path: путь к итоговому HTML-файлу.
        template_dir: директория с Jinja2-шаблонами (по умолчанию шаблоны пакета).
        now: момент, относительно которого считаются "5m ago" и т.п.

    Returns:
        Path до сохранённого HTML-файла.

    Пример:
    ```python
    from newshub.report.html_report import render_feed_html
    html_path = render_feed_html(page, output_path='reports/feed.html')
    ```
    """
    context: dict[str, Any] = {
        "page": page,
        "now": now or datetime.now(timezone.utc),
    }
    return _write(render_template("feed.html.j2", template_dir, **context), output_path)


def render_article_html(
    state: ModalState,
    output_path: Union[Path, str],
    template_dir: Union[Path, str, None] = None,
    now: Optional[datetime] = None,
) -> Path:
    """Сохраняет открытую статью (reader или embed) как отдельную HTML-страницу."""
    if state.article is None:
        raise ValueError("Нет открытой статьи для сохранения")
    context: dict[str, Any] = {
        "article": state.article,
        "mode": state.mode.value,
        "reader_html": state.reader_html,
        "frame_src": state.frame_src,
        "now": now or datetime.now(timezone.utc),
    }
    return _write(render_template("article.html.j2", template_dir, **context), output_path)
