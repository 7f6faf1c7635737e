# File: tests/test_resolver.py
"""ContentResolver: every outcome becomes a non-empty block of markup."""
import pytest

from newshub.errors import ExtractionError
from newshub.reader.fetcher import AUTH_FAILED_MESSAGE, RATE_LIMITED_MESSAGE
from newshub.reader.models import ContentFailure, ContentSuccess, FailureKind
from newshub.reader.resolver import ContentResolver, render_loading


class FakeFetcher:
    def __init__(self, result=None, exc=None, has_credential=False):
        self.result = result
        self.exc = exc
        self.has_credential = has_credential
        self.calls = []

    async def fetch(self, article_url):
        self.calls.append(article_url)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.mark.asyncio()
async def test_markdown_success_is_converted():
    resolver = ContentResolver(FakeFetcher(ContentSuccess("# Title\n\nBody")))
    html = await resolver.resolve_content("https://example.com/a")
    assert html == "<h1>Title</h1>\n<p>Body</p>"


@pytest.mark.asyncio()
async def test_rate_limit_message_differs_from_generic_http():
    limited = ContentResolver(
        FakeFetcher(ContentFailure(RATE_LIMITED_MESSAGE, FailureKind.RATE_LIMIT, 429))
    )
    generic = ContentResolver(FakeFetcher(ContentFailure("HTTP 500: Internal Server Error", FailureKind.HTTP, 500)))

    limited_html = await limited.resolve_content("https://example.com/a")
    generic_html = await generic.resolve_content("https://example.com/a")

    assert "Rate limit exceeded" in limited_html
    assert "HTTP 500" not in limited_html
    assert "HTTP 500" in generic_html
    assert "Rate limit exceeded" not in generic_html


@pytest.mark.asyncio()
async def test_auth_failure_points_at_embedded_view():
    resolver = ContentResolver(FakeFetcher(ContentFailure(AUTH_FAILED_MESSAGE, FailureKind.AUTH, 401)))
    html = await resolver.resolve_content("https://example.com/a")
    assert "Authentication" in html
    assert "embedded view" in html
    assert "Unable to load article content" in html


@pytest.mark.asyncio()
@pytest.mark.parametrize("has_credential,tip_shown", [(False, True), (True, False)])
async def test_credential_tip_only_without_credential(has_credential, tip_shown):
    failure = ContentFailure("HTTP 502: Bad Gateway", FailureKind.HTTP, 502)
    resolver = ContentResolver(FakeFetcher(failure, has_credential=has_credential))
    html = await resolver.resolve_content("https://example.com/a")
    assert ("Tip:" in html) is tip_shown


@pytest.mark.asyncio()
async def test_failure_reason_is_escaped():
    failure = ContentFailure("<b>bad</b>", FailureKind.HTTP, 500)
    html = await ContentResolver(FakeFetcher(failure)).resolve_content("https://example.com/a")
    assert "<b>bad</b>" not in html
    assert "&lt;b&gt;bad&lt;/b&gt;" in html


@pytest.mark.asyncio()
async def test_unexpected_exception_becomes_extraction_failed_block():
    resolver = ContentResolver(FakeFetcher(exc=RuntimeError("boom <x>")))
    html = await resolver.resolve_content("https://example.com/a")
    assert "Content Extraction Failed" in html
    assert "boom &lt;x&gt;" in html


@pytest.mark.asyncio()
async def test_normalizer_error_becomes_extraction_failed_block():
    def broken(raw):
        raise ExtractionError("cannot parse")

    resolver = ContentResolver(FakeFetcher(ContentSuccess("text")), normalizer=broken)
    html = await resolver.resolve_content("https://example.com/a")
    assert "Content Extraction Failed" in html
    assert "cannot parse" in html


@pytest.mark.asyncio()
@pytest.mark.parametrize("result", [ContentSuccess(None), object(), None])
async def test_invalid_payload_is_reported(result):
    html = await ContentResolver(FakeFetcher(result)).resolve_content("https://example.com/a")
    assert "Invalid content format" in html


@pytest.mark.asyncio()
async def test_fetcher_receives_article_url():
    fetcher = FakeFetcher(ContentSuccess("x"))
    await ContentResolver(fetcher).resolve_content("https://example.com/deep/link")
    assert fetcher.calls == ["https://example.com/deep/link"]


def test_loading_block():
    assert "Loading article content..." in render_loading()
