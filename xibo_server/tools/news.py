"""RSS news tools (xibosignage.com and Google News)."""

import xml.etree.ElementTree as ET
from urllib.parse import quote

import httpx
from loguru import logger

from xibo_server.models.envelope import ToolResult
from xibo_server.models.news import (
    GetGoogleNewsRequest,
    GetXiboNewsRequest,
    NewsFeed,
    NewsItem,
)
from xibo_server.utils.errors import ErrorCode
from xibo_server.utils.http_client import external_client

XIBO_NEWS_URL = "https://xibosignage.com/rss.xml"
GOOGLE_NEWS_URL = "https://news.google.com/rss"

GOOGLE_NEWS_EDITIONS = {
    "ja": "hl=ja&gl=JP&ceid=JP:ja",
    "en-US": "hl=en-US&gl=US&ceid=US:en",
    "en-GB": "hl=en-GB&gl=GB&ceid=GB:en",
    "zh-CN": "hl=zh-CN&gl=CN&ceid=CN:zh-Hans",
    "de": "hl=de&gl=DE&ceid=DE:de",
    "es-419": "hl=es-419&gl=US&ceid=US:es-419",
    "ar": "hl=ar&gl=EG&ceid=EG:ar",
}


def _text(element: ET.Element, tag: str) -> str | None:
    child = element.find(tag)
    if child is None or child.text is None:
        return None
    return child.text.strip()


def parse_rss(xml_text: str, limit: int) -> NewsFeed:
    """Parse an RSS 2.0 document, keeping the first ``limit`` items.

    Raises:
        ValueError: the document is not RSS or has no channel
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise ValueError(f"Malformed RSS: {e}") from e
    channel = root.find("channel")
    if channel is None:
        raise ValueError("RSS document has no <channel>")

    items = []
    for item in channel.findall("item")[:limit]:
        items.append(
            NewsItem(
                title=_text(item, "title") or "",
                link=_text(item, "link"),
                pubDate=_text(item, "pubDate"),
                description=_text(item, "description"),
                source=_text(item, "source"),
            )
        )
    return NewsFeed(title=_text(channel, "title"), link=_text(channel, "link"), items=items)


def google_news_url(request: GetGoogleNewsRequest) -> str:
    match request.searchType:
        case "topic":
            path = f"/headlines/section/topic/{request.topic}"
        case "geo":
            path = f"/headlines/section/geo/{quote(request.location or '', safe='')}"
        case _:
            path = f"/search?q={quote(request.query or '', safe='')}"
    separator = "&" if "?" in path else "?"
    return f"{GOOGLE_NEWS_URL}{path}{separator}{GOOGLE_NEWS_EDITIONS[request.language]}"


async def fetch_feed(url: str, limit: int) -> ToolResult:
    logger.info(f"Fetching RSS feed {url} (limit {limit})")
    async with external_client() as client:
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            return ToolResult.fail(ErrorCode.NETWORK_ERROR, "RSS request failed", error=repr(e))
    if not response.is_success:
        return ToolResult.fail(
            ErrorCode.HTTP_ERROR,
            f"HTTP error! status: {response.status_code}",
            error=response.reason_phrase,
        )
    try:
        feed = parse_rss(response.text, limit)
    except ValueError as e:
        return ToolResult.fail(
            ErrorCode.RESPONSE_VALIDATION_ERROR,
            "RSS feed could not be parsed",
            error=str(e),
            error_data=response.text[:2000],
        )
    return ToolResult.ok(feed.model_dump(mode="json"), f"Retrieved {len(feed.items)} news items")


async def get_xibo_news(request: GetXiboNewsRequest) -> ToolResult:
    """Latest posts from the xibosignage.com news feed."""
    return await fetch_feed(XIBO_NEWS_URL, request.limit)


async def get_google_news(request: GetGoogleNewsRequest) -> ToolResult:
    """Google News headlines for a topic section, a location, or a search query."""
    return await fetch_feed(google_news_url(request), request.limit)


TOOLS = [get_xibo_news, get_google_news]
