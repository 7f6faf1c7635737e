# File: tests/conftest.py
from collections.abc import AsyncIterator, Awaitable, Callable
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web

from newshub.config import NewsHubConfig
from newshub.news.models import ArticleRef


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keys from the developer's shell must not leak into tests."""
    monkeypatch.delenv("NEWSHUB_API_KEY", raising=False)
    monkeypatch.delenv("NEWSHUB_READER_API_KEY", raising=False)


@pytest.fixture()
def history_file(tmp_path) -> Path:
    return tmp_path / "history.json"


@pytest.fixture()
def config(history_file) -> NewsHubConfig:
    """
    Return a basic valid NewsHubConfig pointing at nothing in particular.
    """
    return NewsHubConfig(
        news_api_key="test-key",
        timeout=2.0,
        user_agent="TestAgent/1.0",
        history_file=history_file,
    )


@pytest.fixture()
def article() -> ArticleRef:
    return ArticleRef(
        url="https://example.com/story",
        title="A story",
        description="Something happened",
        source_name="Example News",
    )


@pytest_asyncio.fixture
async def serve_app(
    unused_tcp_port_factory,
) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start aiohttp apps on free ports, return their base URLs, clean up afterwards."""
    runners: list[web.AppRunner] = []

    async def _start(app: web.Application) -> str:
        port = unused_tcp_port_factory()
        runner = web.AppRunner(app)
        await runner.setup()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    yield _start

    for runner in runners:
        await runner.cleanup()
