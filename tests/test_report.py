import json
from datetime import datetime, timezone

import pytest

from newshub.app import FeedPage
from newshub.news.models import ArticleRef
from newshub.presentation.state import ModalState, ViewMode, select_article, switch_mode
from newshub.report import render_article_html, render_feed_html, render_json

NOW = datetime(2024, 3, 4, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def page():
    return FeedPage(
        title="Top Headlines",
        articles=[
            ArticleRef(
                url="https://example.com/a",
                title="<Breaking> news",
                description="x" * 200,
                source_name="Wire",
                published_at=datetime(2024, 3, 4, 9, 0, tzinfo=timezone.utc),
                image_url="https://example.com/a.jpg",
            ),
            ArticleRef(url="https://example.com/b", title="Quiet day"),
        ],
        total_results=2,
    )


def test_render_json(tmp_path, page):
    out = render_json(page, tmp_path / "nested" / "feed.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["title"] == "Top Headlines"
    assert data["total_results"] == 2
    assert [a["url"] for a in data["articles"]] == ["https://example.com/a", "https://example.com/b"]


def test_render_feed_html(tmp_path, page):
    html = render_feed_html(page, tmp_path / "feed.html", now=NOW).read_text(encoding="utf-8")
    assert "<h1>Top Headlines</h1>" in html
    assert "2 articles" in html
    assert "&lt;Breaking&gt; news" in html
    assert "3h ago" in html
    assert "x" * 150 + "..." in html
    assert "No description available" in html
    assert 'loading="lazy"' in html


def test_render_empty_feed(tmp_path):
    html = render_feed_html(FeedPage(title="Top Headlines"), tmp_path / "feed.html", now=NOW)
    assert "No articles found." in html.read_text(encoding="utf-8")


def test_render_article_reader(tmp_path, page):
    state = select_article(ModalState(), page.articles[0], "<p>Body <b>bold</b></p>")
    html = render_article_html(state, tmp_path / "a.html", now=NOW).read_text(encoding="utf-8")
    assert "<p>Body <b>bold</b></p>" in html
    assert "<iframe" not in html


def test_render_article_embed(tmp_path, page):
    state = switch_mode(select_article(ModalState(), page.articles[1], "<p>x</p>"), ViewMode.EMBED)
    html = render_article_html(state, tmp_path / "b.html", now=NOW).read_text(encoding="utf-8")
    assert '<iframe class="article-frame" src="https://example.com/b"' in html


def test_render_article_requires_open_article(tmp_path):
    with pytest.raises(ValueError):
        render_article_html(ModalState(), tmp_path / "none.html")
