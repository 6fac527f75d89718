"""YouTube Data API video search."""

import httpx
import structlog

from emerge_career.errors import UpstreamError
from emerge_career.models.content import VideoSuggestion

logger = structlog.get_logger()

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v="


class YouTubeClient:
    """Looks up the single most relevant embeddable video for a query.

    Args:
        api_key: YouTube Data API key; None makes every search fail.
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(
        self,
        api_key: str | None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    async def search_video(self, query: str) -> VideoSuggestion:
        if not self.api_key:
            raise UpstreamError("YouTube API key is not configured")

        params = {
            "part": "snippet",
            "q": query,
            "type": "video",
            "maxResults": 1,
            "relevanceLanguage": "en",
            "videoEmbeddable": "true",
            "order": "relevance",
            "key": self.api_key,
        }
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(YOUTUBE_SEARCH_URL, params=params)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise UpstreamError(f"YouTube search failed: {exc}") from exc

        items = data.get("items") or []
        if not items:
            raise UpstreamError(f"No videos found for {query!r}")

        try:
            video = items[0]
            snippet = video["snippet"]
            thumbnail = snippet.get("thumbnails", {}).get("medium", {}).get("url")
            result = VideoSuggestion(
                title=snippet["title"],
                description=snippet.get("description", ""),
                url=f"{YOUTUBE_WATCH_URL}{video['id']['videoId']}",
                thumbnail_url=thumbnail,
                channel_title=snippet.get("channelTitle"),
            )
        except (KeyError, TypeError) as exc:
            raise UpstreamError(f"Unexpected YouTube response shape: {exc}") from exc

        logger.debug("youtube_video_found", query=query, url=result.url)
        return result
