# File: newshub/rendering.py
"""newshub.rendering: общий Jinja2-окружение для HTML-блоков и экспортируемых страниц."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from newshub.utils import format_relative_date, truncate_text

TEMPLATE_DIR = Path(__file__).parent / "templates"


@lru_cache(maxsize=None)
def get_environment(template_dir: Union[str, Path, None] = None) -> Environment:
    """Окружение с автоэкранированием; по умолчанию шаблоны пакета."""
    env = Environment(
        loader=FileSystemLoader(str(template_dir or TEMPLATE_DIR)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["truncate_text"] = truncate_text
    env.filters["relative_date"] = format_relative_date
    return env


def render_template(name: str, template_dir: Union[str, Path, None] = None, **context: Any) -> str:
    return get_environment(template_dir).get_template(name).render(**context)


__all__ = ["get_environment", "render_template", "TEMPLATE_DIR"]
