"""JSON-LD (schema.org) helpers shared by every extractor."""

import json
import logging
from collections.abc import Iterator

from bs4 import BeautifulSoup

from importer.mappers.text import clean_text

logger = logging.getLogger(__name__)

_ADDRESS_PARTS = ("streetAddress", "addressLocality", "addressRegion", "postalCode")


def _walk(node) -> Iterator[dict]:
    if isinstance(node, list):
        for item in node:
            yield from _walk(item)
    elif isinstance(node, dict):
        yield node
        if "@graph" in node:
            yield from _walk(node["@graph"])


def iter_ld_json(soup: BeautifulSoup) -> Iterator[dict]:
    """Yield every JSON-LD object on the page, flattening lists and @graph."""
    for script in soup.find_all("script", type="application/ld+json"):
        raw = script.string or script.get_text()
        if not raw or not raw.strip():
            continue
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.debug("Ignoring invalid JSON-LD block")
            continue
        yield from _walk(data)


def format_address(address) -> str | None:
    if isinstance(address, str):
        return clean_text(address)
    if isinstance(address, dict):
        parts = [str(address[k]).strip() for k in _ADDRESS_PARTS if address.get(k)]
        return ", ".join(parts) or None
    if isinstance(address, list) and address:
        return format_address(address[0])
    return None


def ld_json_address(soup: BeautifulSoup) -> str | None:
    for node in iter_ld_json(soup):
        if "address" in node:
            address = format_address(node["address"])
            if address:
                return address
    return None


def ld_json_hours(soup: BeautifulSoup) -> str | None:
    for node in iter_ld_json(soup):
        hours = node.get("openingHours")
        if isinstance(hours, list):
            joined = ", ".join(str(h).strip() for h in hours if h)
            if joined:
                return joined
        elif isinstance(hours, str) and hours.strip():
            return hours.strip()
    return None
