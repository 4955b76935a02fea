"""Render strategy selection and the headless-browser escape hatch."""

import logging
from typing import Protocol

from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from importer.exceptions.custom import RenderFallbackError
from importer.schemas.platform import PlatformInfo

logger = logging.getLogger(__name__)

MIN_BODY_TEXT = 500
MIN_HEADINGS = 2
BODY_WAIT_MS = 5000

_BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36"
)
_BROWSER_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


def is_content_empty(soup: BeautifulSoup) -> bool:
    """True when the static HTML looks like an unrendered client-side shell."""
    body = soup.body
    body_text = body.get_text(strip=True) if body else ""
    has_main_content = bool(soup.select_one("main, article, .content, #content"))
    heading_count = len(soup.select("h1, h2, h3"))
    return len(body_text) < MIN_BODY_TEXT and not has_main_content and heading_count < MIN_HEADINGS


def needs_headless_render(soup: BeautifulSoup, platform_info: PlatformInfo) -> bool:
    return platform_info.requiresJavaScript and is_content_empty(soup)


class Renderer(Protocol):
    async def render(self, url: str, timeout_ms: int) -> str: ...


class PlaywrightRenderer:
    """Renders a page in headless Chromium and returns the resulting HTML.

    A fresh browser is launched per call and closed on every exit path.
    """

    def __init__(self, user_agent: str = _BROWSER_USER_AGENT):
        self._user_agent = user_agent

    async def render(self, url: str, timeout_ms: int) -> str:
        try:
            async with async_playwright() as pw:
                browser = await pw.chromium.launch(headless=True, args=_BROWSER_ARGS)
                try:
                    page = await browser.new_page(user_agent=self._user_agent)
                    await page.goto(url, wait_until="networkidle", timeout=timeout_ms)
                    try:
                        await page.wait_for_selector("body", timeout=BODY_WAIT_MS)
                    except PlaywrightTimeoutError:
                        logger.debug("No <body> after %dms on %s, using what rendered", BODY_WAIT_MS, url)
                    return await page.content()
                finally:
                    await browser.close()
        except PlaywrightError as exc:
            # Playwright messages carry a multi-line call log; keep the headline
            lines = str(exc).splitlines()
            raise RenderFallbackError(lines[0] if lines else "Headless render failed")
