"""Tests for RSS parsing and the news tools."""

import httpx
import pytest
from pydantic import ValidationError

from xibo_server.models.news import GetGoogleNewsRequest, GetXiboNewsRequest
from xibo_server.tools.news import (
    XIBO_NEWS_URL,
    get_google_news,
    get_xibo_news,
    google_news_url,
    parse_rss,
)

RSS = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Xibo Signage</title>
    <link>https://xibosignage.com</link>
    <item>
      <title>Xibo 4.1 released</title>
      <link>https://xibosignage.com/blog/xibo-41</link>
      <pubDate>Mon, 01 Sep 2025 09:00:00 GMT</pubDate>
      <description>New features</description>
    </item>
    <item><title>Second</title></item>
    <item><title>Third</title></item>
  </channel>
</rss>
"""


class TestParseRss:
    def test_items_and_channel(self) -> None:
        feed = parse_rss(RSS, limit=10)

        assert feed.title == "Xibo Signage"
        assert [item.title for item in feed.items] == ["Xibo 4.1 released", "Second", "Third"]
        assert feed.items[0].link == "https://xibosignage.com/blog/xibo-41"
        assert feed.items[1].link is None

    def test_limit(self) -> None:
        assert len(parse_rss(RSS, limit=2).items) == 2

    @pytest.mark.parametrize(
        "text",
        [
            "not xml",
            "<html><body/></html>",
            '<feed xmlns="http://www.w3.org/2005/Atom"><entry/></feed>',
        ],
    )
    def test_invalid_documents_raise(self, text: str) -> None:
        with pytest.raises(ValueError):
            parse_rss(text, limit=5)


class TestGoogleNewsRequest:
    def test_topic_url(self) -> None:
        url = google_news_url(GetGoogleNewsRequest(topic="TECHNOLOGY", language="ja"))
        assert url == (
            "https://news.google.com/rss/headlines/section/topic/TECHNOLOGY?hl=ja&gl=JP&ceid=JP:ja"
        )

    def test_query_url_is_encoded(self) -> None:
        url = google_news_url(GetGoogleNewsRequest(searchType="query", query="digital signage"))
        assert url == (
            "https://news.google.com/rss/search?q=digital%20signage&hl=en-US&gl=US&ceid=US:en"
        )

    def test_geo_url(self) -> None:
        url = google_news_url(GetGoogleNewsRequest(searchType="geo", location="Tokyo"))
        assert "/headlines/section/geo/Tokyo?" in url

    @pytest.mark.parametrize(
        ("search_type", "missing"), [("topic", "topic"), ("geo", "location"), ("query", "query")]
    )
    def test_search_value_required(self, search_type: str, missing: str) -> None:
        with pytest.raises(ValidationError, match=f"'{missing}' is required"):
            GetGoogleNewsRequest(searchType=search_type)


class TestNewsTools:
    @pytest.mark.asyncio
    async def test_xibo_news_defaults_to_five_items(self, mock_external) -> None:
        seen: list[str] = []
        many_items = RSS.replace(
            "<item><title>Third</title></item>",
            "".join(f"<item><title>Item {i}</title></item>" for i in range(10)),
        )

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(str(request.url))
            return httpx.Response(200, text=many_items)

        mock_external("xibo_server.tools.news", handler)

        result = await get_xibo_news(GetXiboNewsRequest())

        assert result.success, f"Expected success: {result}"
        assert seen == [XIBO_NEWS_URL]
        assert len(result.data["items"]) == 5

    @pytest.mark.asyncio
    async def test_http_error(self, mock_external) -> None:
        mock_external("xibo_server.tools.news", lambda r: httpx.Response(503))

        result = await get_google_news(GetGoogleNewsRequest(topic="WORLD"))

        assert not result.success
        assert result.message.startswith("[HTTP_ERROR]"), result.message

    @pytest.mark.asyncio
    async def test_unparseable_feed(self, mock_external) -> None:
        mock_external("xibo_server.tools.news", lambda r: httpx.Response(200, text="<oops"))

        result = await get_xibo_news(GetXiboNewsRequest())

        assert not result.success
        assert result.message.startswith("[RESPONSE_VALIDATION_ERROR]"), result.message
