from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bs4 import BeautifulSoup
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from importer.exceptions.custom import RenderFallbackError
from importer.schemas.platform import SitePlatform
from importer.services.platform_detector import get_platform_info
from importer.services.renderer import PlaywrightRenderer, is_content_empty, needs_headless_render


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


# --- Heuristics ---


def test_empty_shell_is_content_empty():
    assert is_content_empty(_soup('<html><body><div id="root"></div></body></html>'))


def test_long_body_text_is_not_empty():
    assert not is_content_empty(_soup(f"<html><body><div>{'word ' * 150}</div></body></html>"))


def test_main_element_is_not_empty():
    assert not is_content_empty(_soup("<html><body><main></main></body></html>"))


def test_two_headings_are_not_empty():
    assert not is_content_empty(_soup("<html><body><h1>A</h1><h2>B</h2></body></html>"))


def test_one_heading_still_empty():
    assert is_content_empty(_soup("<html><body><h1>Loading</h1></body></html>"))


def test_needs_headless_only_for_javascript_platforms():
    shell = _soup("<html><body></body></html>")
    assert needs_headless_render(shell, get_platform_info(SitePlatform.wix))
    assert needs_headless_render(shell, get_platform_info(SitePlatform.godaddy))
    assert not needs_headless_render(shell, get_platform_info(SitePlatform.wordpress))


# --- PlaywrightRenderer ---


def _fake_playwright(page: AsyncMock) -> tuple[MagicMock, AsyncMock]:
    browser = AsyncMock()
    browser.new_page.return_value = page

    pw = MagicMock()
    pw.chromium.launch = AsyncMock(return_value=browser)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=pw)
    context.__aexit__ = AsyncMock(return_value=False)
    return MagicMock(return_value=context), browser


async def test_render_returns_page_content_and_closes_browser():
    page = AsyncMock()
    page.content.return_value = "<html><body><h1>Rendered</h1></body></html>"
    factory, browser = _fake_playwright(page)

    with patch("importer.services.renderer.async_playwright", factory):
        html = await PlaywrightRenderer().render("https://wix-site.com/", 15000)

    assert "Rendered" in html
    page.goto.assert_awaited_once_with("https://wix-site.com/", wait_until="networkidle", timeout=15000)
    browser.close.assert_awaited_once()


async def test_render_tolerates_missing_body():
    page = AsyncMock()
    page.wait_for_selector.side_effect = PlaywrightTimeoutError("Timeout 5000ms exceeded")
    page.content.return_value = "<html></html>"
    factory, browser = _fake_playwright(page)

    with patch("importer.services.renderer.async_playwright", factory):
        html = await PlaywrightRenderer().render("https://wix-site.com/", 15000)

    assert html == "<html></html>"
    browser.close.assert_awaited_once()


async def test_render_failure_raises_and_still_closes_browser():
    page = AsyncMock()
    page.goto.side_effect = PlaywrightError("net::ERR_NAME_NOT_RESOLVED\nCall log:\n  navigating...")
    factory, browser = _fake_playwright(page)

    with patch("importer.services.renderer.async_playwright", factory):
        with pytest.raises(RenderFallbackError) as exc_info:
            await PlaywrightRenderer().render("https://nope.invalid/", 15000)

    assert exc_info.value.message == "net::ERR_NAME_NOT_RESOLVED"
    browser.close.assert_awaited_once()
