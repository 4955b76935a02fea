import asyncio
import logging
from dataclasses import dataclass, field
from urllib.parse import urlparse

import httpx

from importer.exceptions.custom import FetchError, InvalidUrlError, UnsupportedContentError
from importer.mappers.urls import validate_external_url

logger = logging.getLogger(__name__)

DEFAULT_MAX_BODY = 5 * 1024 * 1024  # 5 MB

_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
_ACCEPT_LANGUAGE = "en-US,en;q=0.5"

BLOCKED_EXTENSIONS = (
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".zip", ".rar", ".exe", ".dmg",
)


@dataclass
class FetchedPage:
    url: str
    html: str
    status_code: int
    headers: dict[str, str] = field(default_factory=dict)


def validate_scrape_url(url: str) -> str:
    """Check scheme and file type before touching the network."""
    try:
        parsed = urlparse(url)
    except ValueError:
        raise InvalidUrlError(f"Invalid URL: {url}")

    if parsed.scheme not in ("http", "https"):
        raise InvalidUrlError("Invalid URL protocol. Must be http or https.")
    if not parsed.netloc:
        raise InvalidUrlError(f"Invalid URL: {url}")

    if parsed.path.lower().endswith(BLOCKED_EXTENSIONS):
        raise UnsupportedContentError("URL points to a file, not a webpage.")
    return url


async def reject_internal_hosts(request: httpx.Request) -> None:
    """httpx request hook applying the SSRF guard to every hop, redirects included."""
    validate_external_url(str(request.url))


async def fetch_page(
    client: httpx.AsyncClient,
    url: str,
    timeout_ms: int,
    user_agent: str,
    max_body: int = DEFAULT_MAX_BODY,
) -> FetchedPage:
    """GET *url* and return its HTML.

    The whole exchange runs under one deadline of *timeout_ms*; on expiry the
    request task is cancelled, which closes the in-flight connection.

    Raises:
        InvalidUrlError / UnsupportedContentError: before any network call,
            or from a request hook refusing a redirect target.
        FetchError: non-2xx status, non-HTML body, oversized body, timeout
            or transport failure.
    """
    validate_scrape_url(url)

    try:
        async with asyncio.timeout(timeout_ms / 1000):
            resp = await client.get(
                url,
                follow_redirects=True,
                timeout=timeout_ms / 1000,
                headers={
                    "User-Agent": user_agent,
                    "Accept": _ACCEPT,
                    "Accept-Language": _ACCEPT_LANGUAGE,
                },
            )
    except (TimeoutError, httpx.TimeoutException):
        logger.debug("Timed out fetching %s after %dms", url, timeout_ms)
        raise FetchError(f"Request timed out after {timeout_ms}ms")
    except httpx.HTTPError as exc:
        logger.debug("Failed to fetch %s: %s", url, exc)
        raise FetchError(f"Request failed: {exc}")

    if not resp.is_success:
        raise FetchError(
            f"HTTP {resp.status_code}: {resp.reason_phrase}", status_code=resp.status_code
        )

    content_type = resp.headers.get("content-type", "")
    if "text/html" not in content_type:
        raise FetchError(f"Invalid content type: {content_type}", status_code=resp.status_code)

    if len(resp.content) > max_body:
        raise FetchError(
            f"Page too large: {len(resp.content)} bytes", status_code=resp.status_code
        )

    return FetchedPage(
        url=str(resp.url),
        html=resp.text,
        status_code=resp.status_code,
        headers={k.lower(): v for k, v in resp.headers.items()},
    )
