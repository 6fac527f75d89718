"""Class Central course search (HTML scrape)."""

import httpx
import structlog
from bs4 import BeautifulSoup

from emerge_career.errors import UpstreamError
from emerge_career.models.content import CourseSuggestion

logger = structlog.get_logger()

CLASSCENTRAL_BASE_URL = "https://www.classcentral.com"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


def parse_first_course(html: str) -> CourseSuggestion | None:
    """Return the first search-result card with both a title and a link."""
    soup = BeautifulSoup(html, "html.parser")
    for card in soup.select(".bg-white"):
        heading = card.find("h2")
        link = card.find("a", href=True)
        title = heading.get_text(strip=True) if heading else ""
        if not title or link is None:
            continue
        href = link["href"]
        url = href if href.startswith("http") else CLASSCENTRAL_BASE_URL + href
        provider_tag = card.select_one(".text-2")
        provider = provider_tag.get_text(strip=True) if provider_tag else ""
        description_tag = card.select_one(".text-1")
        description = description_tag.get_text(strip=True) if description_tag else ""
        return CourseSuggestion(
            title=title,
            description=description or f"Course by {provider or 'Class Central'}",
            url=url,
            duration="Self-paced",
            level="All levels",
            platform=provider or "Class Central",
        )
    return None


class ClassCentralClient:
    """Searches Class Central and scrapes the first matching course.

    Args:
        timeout: Request timeout in seconds.
        transport: Optional httpx transport, used by tests.
    """

    def __init__(self, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout = timeout
        self._transport = transport

    async def search_course(self, subject: str) -> CourseSuggestion:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
            ) as client:
                response = await client.get(f"{CLASSCENTRAL_BASE_URL}/search", params={"q": subject})
                response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamError(f"Class Central request failed: {exc}") from exc

        course = parse_first_course(response.text)
        if course is None:
            raise UpstreamError(f"No Class Central courses found for {subject!r}")
        logger.debug("classcentral_course_found", subject=subject, url=course.url)
        return course
