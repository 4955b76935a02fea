import ipaddress
from urllib.parse import urljoin, urlparse

from importer.exceptions.custom import InvalidUrlError

_IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".avif")

_BLOCKED_HOSTNAMES = frozenset({
    "localhost", "internal", "intranet", "private", "metadata",
    "metadata.google.internal",
})


def normalize_url(candidate: str, base_url: str) -> str:
    """Resolve a relative or protocol-relative URL against the page URL.

    Absolute http(s) URLs are returned unchanged, so the function is
    idempotent.
    """
    candidate = candidate.strip()
    if candidate.startswith(("http://", "https://")):
        return candidate
    try:
        return urljoin(base_url, candidate)
    except ValueError:
        return candidate


def is_valid_image_url(url: str) -> bool:
    lower = url.lower()
    if lower.startswith("data:"):
        return False
    path = urlparse(lower).path
    return (
        any(ext in path for ext in _IMAGE_EXTENSIONS)
        or "/image" in lower
        or "img" in lower
    )


def strip_www(host: str) -> str:
    host = host.lower()
    return host[4:] if host.startswith("www.") else host


def is_same_site(url: str, base_url: str) -> bool:
    """Same host as base_url, treating www and non-www as one site."""
    return strip_www(urlparse(url).netloc) == strip_www(urlparse(base_url).netloc)


def to_site_path(href: str, base_url: str) -> str | None:
    """Reduce an internal href to path (+query). None for external or non-page links."""
    href = href.strip()
    if not href or href.startswith(("#", "mailto:", "tel:", "javascript:", "data:")):
        return None
    if href.startswith("/") and not href.startswith("//"):
        parsed = urlparse(href)
    else:
        absolute = normalize_url(href, base_url)
        parsed = urlparse(absolute)
        if parsed.scheme not in ("http", "https") or not is_same_site(absolute, base_url):
            return None
    path = parsed.path or "/"
    return f"{path}?{parsed.query}" if parsed.query else path


def validate_external_url(url: str) -> str:
    """Reject URLs pointing at loopback, private or metadata addresses.

    Returns the URL unchanged when it is safe to fetch.
    """
    try:
        parsed = urlparse(url)
        hostname = (parsed.hostname or "").lower()
    except ValueError:
        raise InvalidUrlError("Invalid URL format")

    if parsed.scheme not in ("http", "https"):
        raise InvalidUrlError("Only HTTP and HTTPS protocols are allowed")
    if not hostname:
        raise InvalidUrlError("Invalid URL format")

    try:
        ip = ipaddress.ip_address(hostname)
    except ValueError:
        ip = None
    if ip is not None and (
        ip.is_loopback or ip.is_private or ip.is_link_local
        or ip.is_unspecified or ip.is_reserved
    ):
        raise InvalidUrlError("Internal network addresses are not allowed")

    if any(hostname == h or hostname.endswith(f".{h}") for h in _BLOCKED_HOSTNAMES):
        raise InvalidUrlError("This hostname is not allowed")

    return url
