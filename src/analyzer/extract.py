"""Website fetching and HTML content extraction."""

from __future__ import annotations

import logging
import re

import httpx
from bs4 import BeautifulSoup, Tag

from src.config import DEFAULT_USER_AGENT

from .errors import ContentError, FetchError
from .models import ScrapedContent

logger = logging.getLogger(__name__)

NOISE_TAGS = ["script", "style", "noscript", "nav", "header", "footer"]
SERVICE_SELECTOR = '.service, .product, [class*="service"], [class*="product"]'

MAX_PARAGRAPHS = 5
MAX_SERVICES = 3


def _clean_text(element: Tag) -> str:
    text = element.get_text(separator=" ", strip=True)
    return re.sub(r"\s+", " ", text).strip()


def _meta_content(soup: BeautifulSoup, **attrs: str) -> str:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return ""
    return (tag.get("content") or "").strip()


def _first_texts(elements: list[Tag], limit: int) -> list[str]:
    texts: list[str] = []
    for element in elements:
        text = _clean_text(element)
        if text:
            texts.append(text)
            if len(texts) >= limit:
                break
    return texts


def extract_content(html: str) -> ScrapedContent:
    """Parse *html* into a ScrapedContent record.

    Raises ContentError when neither a description nor paragraph text is found.
    """
    soup = BeautifulSoup(html, "html.parser")

    for element in soup.find_all(NOISE_TAGS):
        # Nested noise (e.g. nav inside header) is gone with its parent
        if not element.decomposed:
            element.decompose()

    title = ""
    for tag_name in ("title", "h1"):
        tag = soup.find(tag_name)
        if tag is not None:
            title = _clean_text(tag)
        if title:
            break

    description = (
        _meta_content(soup, name="description")
        or _meta_content(soup, property="og:description")
    )

    paragraphs = _first_texts(soup.find_all("p"), MAX_PARAGRAPHS)
    services = _first_texts(soup.select(SERVICE_SELECTOR), MAX_SERVICES)

    content = ScrapedContent(
        title=title,
        description=description,
        main_content=" ".join(paragraphs),
        services=" ".join(services),
    )

    if not content.main_content and not content.description:
        raise ContentError("No meaningful content found on the webpage")

    logger.debug(
        "content extracted",
        extra={
            "title": title[:80],
            "paragraphs": len(paragraphs),
            "services": len(services),
            "has_description": bool(description),
        },
    )
    return content


async def scrape_website(
    url: str,
    *,
    timeout: float = 15.0,
    user_agent: str = DEFAULT_USER_AGENT,
) -> ScrapedContent:
    """Fetch *url* and extract its content record."""
    logger.info("scraping website", extra={"url": url})
    try:
        async with httpx.AsyncClient(
            follow_redirects=True,
            headers={
                "User-Agent": user_agent,
                "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            },
        ) as client:
            resp = await client.get(url, timeout=timeout)
    except httpx.TimeoutException as exc:
        raise FetchError("Failed to fetch website: request timed out") from exc
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        raise FetchError(f"Failed to fetch website: {exc}") from exc

    if not resp.is_success:
        logger.warning(
            "website fetch rejected",
            extra={"url": url, "status_code": resp.status_code},
        )
        raise FetchError(f"Failed to fetch website: {resp.reason_phrase or resp.status_code}")

    content = extract_content(resp.text)
    logger.info(
        "website scraped",
        extra={"url": url, "content_length": len(content.main_content)},
    )
    return content
