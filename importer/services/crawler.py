import asyncio
import logging
import re
from urllib.parse import urljoin, urlparse

import httpx
from bs4 import BeautifulSoup

from importer.exceptions.custom import ImporterError
from importer.extractors.registry import extract_with_fallback, get_extractor_for_platform
from importer.mappers.urls import is_same_site
from importer.schemas.platform import SitePlatform
from importer.schemas.site import ScrapedPage, ScrapeOptions
from importer.services.fetcher import DEFAULT_MAX_BODY, fetch_page

logger = logging.getLogger(__name__)

DEFAULT_CRAWL_DELAY = 0.5  # seconds between requests

# Admin, feed, asset and transactional paths never hold site content
_SKIP_PATTERNS = tuple(re.compile(p, re.IGNORECASE) for p in (
    r"^/wp-",
    r"/wp-admin",
    r"/wp-login",
    r"/feed/?$",
    r"/rss/?$",
    r"\.(pdf|jpe?g|png|gif|svg|webp|css|js|xml|zip)$",
    r"^/cdn-cgi/",
    r"^/api/",
    r"/cart\b",
    r"/checkout\b",
    r"/login\b",
    r"/account\b",
))


def _normalize_path(path: str) -> str:
    path = path or "/"
    return path.rstrip("/") or "/"


def _should_skip(path: str) -> bool:
    return any(p.search(path) for p in _SKIP_PATTERNS)


class SiteCrawler:
    """Fetches a bounded number of same-site pages one after another."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        delay: float = DEFAULT_CRAWL_DELAY,
        max_body: int = DEFAULT_MAX_BODY,
    ) -> None:
        self._client = client
        self._delay = delay
        self._max_body = max_body

    def select_candidates(self, base_url: str, seed_links: list[str], max_pages: int) -> list[str]:
        """Absolute URLs worth crawling, at most ``max_pages - 1``.

        The seed page and the site root count as already visited.
        """
        limit = max_pages - 1
        if limit <= 0:
            return []

        visited = {"/", _normalize_path(urlparse(base_url).path)}
        candidates: list[str] = []
        for link in seed_links:
            try:
                absolute = urljoin(base_url, link)
                parsed = urlparse(absolute)
            except ValueError:
                logger.debug("Ignoring malformed link %r", link)
                continue
            if parsed.scheme not in ("http", "https") or not is_same_site(absolute, base_url):
                continue
            path = _normalize_path(parsed.path)
            if _should_skip(path) or path in visited:
                continue
            visited.add(path)
            candidates.append(absolute.split("#", 1)[0])
            if len(candidates) >= limit:
                break
        return candidates

    async def crawl_additional(
        self,
        base_url: str,
        seed_links: list[str],
        options: ScrapeOptions,
        platform: SitePlatform,
        errors: list[str] | None = None,
    ) -> list[ScrapedPage]:
        if errors is None:
            errors = []
        candidates = self.select_candidates(base_url, seed_links, options.maxPages)
        extractor = get_extractor_for_platform(platform)
        logger.info("Crawling %d additional pages from %s", len(candidates), base_url)

        pages: list[ScrapedPage] = []
        for i, url in enumerate(candidates):
            if i and self._delay > 0:
                await asyncio.sleep(self._delay)
            try:
                fetched = await fetch_page(
                    self._client, url, options.timeout, options.userAgent, self._max_body,
                )
                soup = BeautifulSoup(fetched.html, "html.parser")
                result = extract_with_fallback(extractor, soup, fetched.url, fetched.html, errors)
            except ImporterError as exc:
                logger.warning("Skipping %s: %s", url, exc.message)
                errors.append(f"Failed to scrape {url}: {exc.message}")
                continue

            pages.extend(result.pages)

        return pages
