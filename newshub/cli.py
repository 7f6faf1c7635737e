# === FILE: newshub/cli.py ===
#!/usr/bin/env python3
"""
Точка входа NewsHub для командной строки.

Команды:
  headlines   Главные новости (по категории)
  search      Поиск по всем новостям, свежие первыми
  read        Открыть статью: упрощённый текст (reader) или исходная страница (embed)
  history     Показать / очистить / изменить историю поиска
  config      Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Дополнительно:
  --version, -v       Показать версию NewsHub

Пример:
  newshub search "open source" --json reports/search.json
  newshub read https://example.com/story --html reports/story.html
"""
import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import click

from newshub import __version__
from newshub.app import FeedPage, FeedState, NewsHub, describe_news_error
from newshub.config import NewsHubConfig, default_config, load_config
from newshub.errors import NewsApiError
from newshub.history import SearchHistory
from newshub.logger import init_logging
from newshub.news.client import CATEGORIES
from newshub.news.models import ArticleRef
from newshub.presentation.state import ModalState, ViewMode
from newshub.report.html_report import render_article_html, render_feed_html
from newshub.report.json_report import render_json
from newshub.utils import format_relative_date, truncate_text

CONTEXT_SETTINGS = dict(help_option_names=["--help"])
DEFAULT_CONFIG = Path("configs/default.yaml")


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


async def fetch_feed(cfg: NewsHubConfig, state: FeedState) -> FeedPage:
    """Загружает ленту для state в рамках одной HTTP-сессии."""
    async with NewsHub(cfg) as hub:
        return await hub.load_news(state)


async def read_article(cfg: NewsHubConfig, article: ArticleRef, mode: ViewMode) -> ModalState:
    """Открывает статью и возвращает состояние окна после загрузки контента."""
    async with NewsHub(cfg) as hub:
        return await hub.open_article(article, mode)


def _emit_feed(page: FeedPage, json_output: Optional[Path], html_output: Optional[Path]) -> None:
    if not json_output and not html_output:
        click.secho(page.title, bold=True)
        if not page.articles:
            click.echo('No articles found.')
            return
        count = len(page.articles)
        click.echo(f"{count} article{'' if count == 1 else 's'}")
        for index, article in enumerate(page.articles, start=1):
            meta = " · ".join(
                part for part in (article.source_name, format_relative_date(article.published_at)) if part
            )
            click.echo(f"{index:>2}. {truncate_text(article.title, 100)}")
            if meta:
                click.echo(f"    {meta}")
            click.echo(f"    {article.url}")
        return

    if json_output:
        try:
            saved_json = render_json(page, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_feed_html(page, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


def _run_feed(cfg: NewsHubConfig, state: FeedState) -> FeedPage:
    try:
        return asyncio.run(fetch_feed(cfg, state))
    except NewsApiError as e:
        print_error(describe_news_error(e, cfg))


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='NewsHub, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=str(DEFAULT_CONFIG),
    show_default=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(name)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """NewsHub: заголовки, поиск и чтение статей из терминала."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        if config_path.exists():
            cfg = load_config(config_path)
        elif config_path == DEFAULT_CONFIG:
            cfg = default_config()
        else:
            raise FileNotFoundError(f'Файл конфигурации не найден: {config_path}')
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('headlines', context_settings=CONTEXT_SETTINGS)
@click.option(
    '--category', '-k', 'category',
    default='',
    type=click.Choice(('',) + CATEGORIES, case_sensitive=False),
    help='Категория новостей'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить ленту в JSON'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить ленту в HTML'
)
@click.pass_context
def headlines(ctx, category, json_output, html_output):
    """Показать главные новости."""
    cfg = ctx.obj['config']
    page = _run_feed(cfg, FeedState().with_category(category))
    _emit_feed(page, json_output, html_output)


@cli.command('search', context_settings=CONTEXT_SETTINGS)
@click.argument('query')
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить результаты в JSON'
)
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить результаты в HTML'
)
@click.pass_context
def search(ctx, query, json_output, html_output):
    """Искать новости по запросу QUERY."""
    cfg = ctx.obj['config']
    try:
        state = FeedState().with_query(query)
    except ValueError as e:
        print_error(str(e))
    page = _run_feed(cfg, state)
    _emit_feed(page, json_output, html_output)


@cli.command('read', context_settings=CONTEXT_SETTINGS)
@click.argument('url')
@click.option('--title', default=None, help='Заголовок статьи (по умолчанию — URL)')
@click.option('--embed', is_flag=True, help='Режим embed: исходная страница во фрейме')
@click.option(
    '--html', '-h', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить статью как HTML-страницу'
)
@click.pass_context
def read(ctx, url, title, embed, html_output):
    """Открыть статью по URL в режиме reader (или embed)."""
    cfg = ctx.obj['config']
    try:
        article = ArticleRef(url=url, title=title or url)
    except Exception as e:
        print_error(f'Некорректный URL статьи: {e}')

    mode = ViewMode.EMBED if embed else ViewMode.READER
    state = asyncio.run(read_article(cfg, article, mode))

    if html_output:
        try:
            saved_html = render_article_html(state, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')
        return

    if state.mode is ViewMode.EMBED:
        click.echo(state.frame_src)
    else:
        click.echo(state.reader_html)


@cli.group('history', invoke_without_command=True, context_settings=CONTEXT_SETTINGS)
@click.pass_context
def history(ctx):
    """История поиска (без подкоманды — список)."""
    cfg = ctx.obj['config']
    ctx.obj['history'] = SearchHistory(cfg.history_file, cfg.history_limit)
    if ctx.invoked_subcommand is None:
        ctx.invoke(history_list)


@history.command('list', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def history_list(ctx):
    """Показать последние запросы, самые свежие первыми."""
    for term in ctx.obj['history']:
        click.echo(term)


@history.command('remove', context_settings=CONTEXT_SETTINGS)
@click.argument('term')
@click.pass_context
def history_remove(ctx, term):
    """Удалить запрос TERM из истории."""
    ctx.obj['history'].remove(term)


@history.command('clear', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def history_clear(ctx):
    """Очистить историю поиска."""
    ctx.obj['history'].clear()
    click.echo('Search history cleared')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON (ключи замаскированы)."""
    cfg = ctx.obj['config']
    click.echo(json.dumps(cfg.masked(), indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
