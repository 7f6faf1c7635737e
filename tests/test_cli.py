# File: tests/test_cli.py
"""Тесты для CLI (`newshub/cli.py`) с использованием click.testing.CliRunner.
Сеть не используется: fetch_feed и read_article подменяются.
"""
import importlib
import json
import types

import pytest
import yaml
from click.testing import CliRunner

from newshub.app import FeedPage
from newshub.cli import cli
from newshub.errors import NewsApiError
from newshub.history import SearchHistory
from newshub.news.models import ArticleRef
from newshub.presentation.state import ModalState, ViewMode

cli_module = importlib.import_module("newshub.cli")


@pytest.fixture()
def cfg_file(tmp_path, history_file):
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "news_api_key": "secret-key",
                "history_file": str(history_file),
                "timeout": 1.0,
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture()
def feed_calls(monkeypatch):
    """Подменяем fetch_feed: возвращаем одну статью и запоминаем состояние ленты."""
    calls = []

    async def fake_fetch(cfg, state):
        calls.append(state)
        if state.query:
            SearchHistory(cfg.history_file, cfg.history_limit).add(state.query)
        return FeedPage(
            title=state.title,
            articles=[
                ArticleRef(
                    url="https://example.com/story",
                    title="A story",
                    source_name="Example News",
                )
            ],
            total_results=1,
        )

    monkeypatch.setattr(cli_module, "fetch_feed", fake_fetch)
    return calls


@pytest.fixture()
def read_calls(monkeypatch):
    calls = []

    async def fake_read(cfg, article, mode):
        calls.append((article, mode))
        frame = article.url if mode is ViewMode.EMBED else "about:blank"
        return ModalState(article=article, mode=mode, reader_html="<h1>Story</h1>", frame_src=frame, generation=1)

    monkeypatch.setattr(cli_module, "read_article", fake_read)
    return calls


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "NewsHub" in result.output


def test_show_config_masks_keys(cfg_file):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["news_api_key"] == "secr…"
    assert data["timeout"] == 1.0


def test_missing_config_file(tmp_path):
    result = CliRunner().invoke(cli, ["--config", str(tmp_path / "nope.yaml"), "config"])
    assert result.exit_code == 1


def test_headlines_stdout(cfg_file, feed_calls):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "headlines", "--category", "science"])
    assert result.exit_code == 0
    assert "Science Headlines" in result.stdout
    assert "1 article" in result.stdout
    assert " 1. A story" in result.stdout
    assert "https://example.com/story" in result.stdout
    assert feed_calls[0].category == "science"


def test_search_writes_reports(tmp_path, cfg_file, feed_calls, history_file):
    json_path = tmp_path / "out" / "search.json"
    html_path = tmp_path / "out" / "search.html"
    result = CliRunner().invoke(
        cli,
        ["--config", str(cfg_file), "search", "open source", "--json", str(json_path), "--html", str(html_path)],
    )
    assert result.exit_code == 0
    assert f"JSON report: {json_path}" in result.stdout
    assert f"HTML report: {html_path}" in result.stdout

    data = json.loads(json_path.read_text(encoding="utf-8"))
    assert data["title"] == 'Search: "open source"'
    assert data["articles"][0]["url"] == "https://example.com/story"
    assert "A story" in html_path.read_text(encoding="utf-8")
    assert SearchHistory(history_file).terms == ["open source"]


def test_blank_search_is_rejected(cfg_file, feed_calls):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "search", "   "])
    assert result.exit_code == 1
    assert "Please enter a search term" in result.output
    assert feed_calls == []


def test_provider_error_exits_with_message(cfg_file, monkeypatch):
    async def failing(cfg, state):
        raise NewsApiError(429, "rateLimited")

    monkeypatch.setattr(cli_module, "fetch_feed", failing)
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "headlines"])
    assert result.exit_code == 1
    assert "Rate limit exceeded" in result.output


def test_read_prints_reader_html(cfg_file, read_calls):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "read", "https://example.com/story"])
    assert result.exit_code == 0
    assert "<h1>Story</h1>" in result.stdout
    article, mode = read_calls[0]
    assert article.title == "https://example.com/story"
    assert mode is ViewMode.READER


def test_read_embed_prints_frame_source(cfg_file, read_calls):
    result = CliRunner().invoke(
        cli, ["--config", str(cfg_file), "read", "https://example.com/story", "--embed", "--title", "T"]
    )
    assert result.exit_code == 0
    assert result.stdout.strip() == "https://example.com/story"
    assert read_calls[0][1] is ViewMode.EMBED


def test_read_html_export(tmp_path, cfg_file, read_calls):
    out = tmp_path / "story.html"
    result = CliRunner().invoke(
        cli, ["--config", str(cfg_file), "read", "https://example.com/story", "--html", str(out)]
    )
    assert result.exit_code == 0
    page = out.read_text(encoding="utf-8")
    assert "<h1>Story</h1>" in page
    assert "<iframe" not in page


def test_read_rejects_relative_url(cfg_file, read_calls):
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "read", "/just/a/path"])
    assert result.exit_code == 1
    assert read_calls == []


def test_history_commands(cfg_file, history_file):
    history = SearchHistory(history_file)
    history.add("mars")
    history.add("venus")
    runner = CliRunner()

    listed = runner.invoke(cli, ["--config", str(cfg_file), "history"])
    assert listed.exit_code == 0
    assert listed.stdout.splitlines() == ["venus", "mars"]

    removed = runner.invoke(cli, ["--config", str(cfg_file), "history", "remove", "mars"])
    assert removed.exit_code == 0
    assert SearchHistory(history_file).terms == ["venus"]

    cleared = runner.invoke(cli, ["--config", str(cfg_file), "history", "clear"])
    assert cleared.exit_code == 0
    assert "Search history cleared" in cleared.stdout
    assert SearchHistory(history_file).terms == []


def test_package_keeps_cli_submodule():
    import newshub

    assert isinstance(newshub.cli, types.ModuleType)
    assert newshub.cli is cli_module
    assert newshub.main_cli is cli
    assert callable(cli_module.fetch_feed)
