"""Folha de S.Paulo front-page headline crawler"""
import enum
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
from urllib.parse import urljoin

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from ...config_loader import DEFAULT_HEADLINE_SELECTOR, DEFAULT_SOURCE_URL
from ...domain.models import ArticleRecord

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
FETCH_TIMEOUT = 10.0


class ScrapeStatus(str, enum.Enum):
    OK = "ok"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class ScrapeResult:
    status: ScrapeStatus
    articles: Tuple[ArticleRecord, ...] = field(default_factory=tuple)
    reason: Optional[str] = None


def parse_headlines(
    html: str,
    limit: int,
    base_url: str = DEFAULT_SOURCE_URL,
    selector: str = DEFAULT_HEADLINE_SELECTOR,
) -> List[ArticleRecord]:
    """
    Extract up to ``limit`` headline links from ``html``, in document order.

    Relative hrefs are resolved against ``base_url``; anchors without an href
    are skipped. Whitespace inside a title collapses to single spaces.
    """
    soup = BeautifulSoup(html, "html.parser")
    articles: List[ArticleRecord] = []

    for anchor in soup.select(selector):
        if len(articles) >= limit:
            break
        href = (anchor.get("href") or "").strip()
        if not href:
            continue
        articles.append(
            ArticleRecord(
                title=" ".join(anchor.get_text().split()),
                link=urljoin(base_url, href),
            )
        )

    return articles


async def fetch_headlines(
    limit: int,
    url: str = DEFAULT_SOURCE_URL,
    selector: str = DEFAULT_HEADLINE_SELECTOR,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ScrapeResult:
    """Fetch ``url`` once and parse it; never raises."""
    logger.info(f"[Scrape] Starting scrape of {url} (limit={limit})")
    try:
        async with httpx.AsyncClient(
            timeout=FETCH_TIMEOUT,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
            transport=transport,
        ) as client:
            resp = await client.get(url)
            resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        return ScrapeResult(ScrapeStatus.FAILED, reason=f"HTTP {e.response.status_code}")
    except httpx.HTTPError as e:
        return ScrapeResult(ScrapeStatus.FAILED, reason=f"{type(e).__name__}: {e}")

    if not resp.text.strip():
        return ScrapeResult(ScrapeStatus.EMPTY, reason="empty document")

    try:
        articles = parse_headlines(resp.text, limit, base_url=str(resp.url), selector=selector)
    except Exception as e:  # noqa: BLE001
        return ScrapeResult(ScrapeStatus.FAILED, reason=f"parse error: {e}")

    if not articles:
        return ScrapeResult(ScrapeStatus.EMPTY, reason=f"no elements match {selector!r}")

    return ScrapeResult(ScrapeStatus.OK, articles=tuple(articles))


async def scrape(
    limit: int,
    url: str = DEFAULT_SOURCE_URL,
    selector: str = DEFAULT_HEADLINE_SELECTOR,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[ArticleRecord]:
    """
    Scrape the front page headlines.

    Returns:
        At most ``limit`` articles; an empty list when the fetch or parse fails
    """
    result = await fetch_headlines(limit, url=url, selector=selector, transport=transport)
    if result.status is ScrapeStatus.OK:
        logger.info(f"[Scrape] Scrape succeeded: {len(result.articles)} articles")
    else:
        logger.error(f"[Scrape] Scrape returned no data ({result.status.value}): {result.reason}")
    return list(result.articles)
