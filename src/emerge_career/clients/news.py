"""Google News RSS search for career trend headlines."""

import httpx
import structlog
from bs4 import BeautifulSoup
from defusedxml import DefusedXmlException
from defusedxml import ElementTree as ET

from emerge_career.errors import UpstreamError
from emerge_career.models.content import Trend

logger = structlog.get_logger()

GOOGLE_NEWS_RSS_URL = "https://news.google.com/rss/search"
DESCRIPTION_CHARS = 150


def _plain_text(html: str) -> str:
    return BeautifulSoup(html, "html.parser").get_text(" ", strip=True)


def parse_rss_items(xml_text: str, limit: int) -> list[Trend]:
    """Turn an RSS document into at most ``limit`` article trends.

    Raises:
        UpstreamError: The document is not RSS with a channel, or it
            declares XML entities.
    """
    try:
        root = ET.fromstring(xml_text)
    except (ET.ParseError, DefusedXmlException) as exc:
        raise UpstreamError(f"Invalid RSS feed: {exc}") from exc

    channel = root.find("channel")
    if root.tag != "rss" or channel is None:
        raise UpstreamError("Invalid RSS feed format")

    trends = []
    for index, item in enumerate(channel.findall("item")[:limit]):
        title = (item.findtext("title") or "").strip()
        link = (item.findtext("link") or "").strip()
        if not title or not link:
            continue
        raw = item.findtext("description")
        if raw:
            description = _plain_text(raw)[:DESCRIPTION_CHARS] + "..."
        else:
            description = "Click to read full article"
        trends.append(
            Trend(id=f"news-{index}", title=title, description=description, url=link, type="article")
        )
    return trends


class NewsFeedClient:
    """Fetches news headlines for a search query.

    Args:
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(self, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout = timeout
        self._transport = transport

    async def search(self, query: str, limit: int = 5) -> list[Trend]:
        params = {"q": query, "hl": "en-US", "gl": "US", "ceid": "US:en"}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(GOOGLE_NEWS_RSS_URL, params=params)
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamError(f"News feed request failed: {exc}") from exc

        trends = parse_rss_items(response.text, limit)
        logger.debug("news_feed_parsed", query=query, count=len(trends))
        return trends
