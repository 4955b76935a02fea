import asyncio
import logging
import time
from datetime import datetime, timezone

import httpx
from bs4 import BeautifulSoup

from importer.config import Settings
from importer.exceptions.custom import ImporterError, RenderFallbackError
from importer.extractors.registry import extract_with_fallback, get_extractor_for_platform
from importer.schemas.site import ScrapedSiteData, ScrapeOptions, ScrapeResult
from importer.services.crawler import DEFAULT_CRAWL_DELAY, SiteCrawler
from importer.services.fetcher import DEFAULT_MAX_BODY, fetch_page
from importer.services.platform_detector import detect_platform, get_platform_info
from importer.services.renderer import BODY_WAIT_MS, PlaywrightRenderer, Renderer, needs_headless_render

logger = logging.getLogger(__name__)


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


class ScraperService:
    """Turns one seed URL into a ScrapedSiteData.

    Pipeline: fetch, classify the platform, re-render headless when the
    static HTML is an empty shell, extract with the platform's extractor,
    then optionally crawl a few more same-site pages. scrape() never raises;
    failures come back as ``success=False`` with the reason first in errors.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        renderer: Renderer | None = None,
        default_options: ScrapeOptions | None = None,
        crawl_delay: float = DEFAULT_CRAWL_DELAY,
        headless_enabled: bool = True,
        headless_timeout_ms: int = 30000,
        max_body: int = DEFAULT_MAX_BODY,
    ) -> None:
        self._client = client
        self._renderer = renderer
        self._defaults = default_options or ScrapeOptions()
        self._headless_enabled = headless_enabled
        self._headless_timeout_ms = headless_timeout_ms
        self._max_body = max_body
        self._crawler = SiteCrawler(client, delay=crawl_delay, max_body=max_body)

    @classmethod
    def from_settings(
        cls,
        client: httpx.AsyncClient,
        settings: Settings,
        renderer: Renderer | None = None,
    ) -> "ScraperService":
        return cls(
            client,
            renderer=renderer,
            default_options=ScrapeOptions(
                timeout=settings.scrape_timeout_ms,
                maxPages=settings.scrape_max_pages,
                userAgent=settings.scrape_user_agent,
            ),
            crawl_delay=settings.crawl_delay,
            headless_enabled=settings.headless_enabled,
            headless_timeout_ms=settings.headless_timeout_ms,
            max_body=settings.max_body_bytes,
        )

    def resolve_options(self, options: ScrapeOptions | None) -> ScrapeOptions:
        """Service defaults overlaid with the fields the caller actually set."""
        if options is None:
            return self._defaults
        return self._defaults.model_copy(update=options.model_dump(exclude_unset=True))

    async def scrape(self, url: str, options: ScrapeOptions | None = None) -> ScrapeResult:
        start = time.monotonic()
        opts = self.resolve_options(options)
        errors: list[str] = []

        try:
            data = await self._run(url, opts, errors)
        except ImporterError as exc:
            logger.warning("Scrape of %s failed: %s", url, exc.message)
            return ScrapeResult(success=False, errors=[exc.message, *errors], duration=_elapsed_ms(start))
        except Exception as exc:
            logger.exception("Unexpected error scraping %s", url)
            message = str(exc) or type(exc).__name__
            return ScrapeResult(success=False, errors=[message, *errors], duration=_elapsed_ms(start))

        duration = _elapsed_ms(start)
        logger.info(
            "Scrape of %s completed in %dms (%d pages, %d errors)",
            url, duration, len(data.pages), len(errors),
        )
        return ScrapeResult(success=True, data=data, errors=errors, duration=duration)

    async def _run(self, url: str, opts: ScrapeOptions, errors: list[str]) -> ScrapedSiteData:
        logger.info("Starting scrape of %s", url)
        fetched = await fetch_page(self._client, url, opts.timeout, opts.userAgent, self._max_body)
        html = fetched.html
        soup = BeautifulSoup(html, "html.parser")

        detection = detect_platform(soup, html, fetched.headers)
        platform_info = get_platform_info(detection.platform)
        logger.info(
            "Detected %s (%s confidence) for %s",
            detection.platform, detection.confidence, url,
        )

        if needs_headless_render(soup, platform_info):
            rendered = await self._render(fetched.url, errors)
            if rendered is not None:
                html = rendered
                soup = BeautifulSoup(html, "html.parser")

        extractor = get_extractor_for_platform(detection.platform)
        logger.info("Using %s extractor for %s", extractor.name, url)
        extracted = extract_with_fallback(extractor, soup, fetched.url, html, errors)

        assets = extracted.assets
        if not opts.includeImages:
            assets = assets.model_copy(update={"images": [], "videos": []})

        pages = list(extracted.pages)
        if opts.followLinks and opts.maxPages > 1:
            pages.extend(
                await self._crawler.crawl_additional(
                    fetched.url, pages[0].links, opts, detection.platform, errors,
                )
            )

        return ScrapedSiteData(
            url=url,
            platform=detection.platform,
            business=extracted.business,
            content=extracted.content,
            assets=assets,
            seo=extracted.seo,
            social=extracted.social,
            pages=pages,
            scrapedAt=datetime.now(timezone.utc),
            scrapeErrors=errors,
        )

    async def _render(self, url: str, errors: list[str]) -> str | None:
        """Rendered HTML, or None after recording why the fallback did not run."""
        if self._renderer is None or not self._headless_enabled:
            logger.warning("%s looks client-rendered but headless rendering is disabled", url)
            errors.append("Headless render skipped: page appears to need JavaScript but rendering is disabled")
            return None

        logger.info("Static HTML for %s is nearly empty, rendering headless", url)
        deadline = (self._headless_timeout_ms + BODY_WAIT_MS) / 1000
        try:
            async with asyncio.timeout(deadline):
                return await self._renderer.render(url, self._headless_timeout_ms)
        except TimeoutError:
            message = f"Timed out after {self._headless_timeout_ms}ms"
        except RenderFallbackError as exc:
            message = exc.message
        except Exception as exc:
            logger.exception("Headless renderer crashed on %s", url)
            message = str(exc) or type(exc).__name__

        logger.warning("Headless render of %s failed: %s", url, message)
        errors.append(f"Headless render fallback failed: {message}")
        return None


async def scrape(
    url: str,
    options: ScrapeOptions | None = None,
    settings: Settings | None = None,
) -> ScrapeResult:
    """One-shot scrape with a private HTTP client, for use outside the API."""
    settings = settings or Settings()
    renderer = PlaywrightRenderer() if settings.headless_enabled else None
    async with httpx.AsyncClient() as client:
        service = ScraperService.from_settings(client, settings, renderer=renderer)
        return await service.scrape(url, options)
