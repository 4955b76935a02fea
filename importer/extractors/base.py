"""Extractor contract plus the selector-cascade and harvesting helpers every
platform extractor is built from.

A cascade is a tuple of probes, each a pure ``(soup) -> str | None``. They are
tried in order and the first non-empty result wins, which is how one extractor
copes with the many DOM shapes a single platform's themes produce.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Sequence
from urllib.parse import urlparse

from bs4 import BeautifulSoup, Comment, Doctype, Tag

from importer.mappers.page_type import determine_page_type
from importer.mappers.social import extract_social_links
from importer.mappers.text import clean_text
from importer.mappers.urls import is_valid_image_url, normalize_url, to_site_path
from importer.schemas.site import (
    MAX_HEADINGS,
    MAX_IMAGES,
    MAX_LINKS,
    MAX_PAGE_CONTENT,
    MAX_VIDEOS,
    ExtractorResult,
    Feature,
    ScrapedAssets,
    ScrapedBusiness,
    ScrapedContent,
    ScrapedPage,
    ScrapedSeo,
    ScrapedSocial,
    Testimonial,
)

Probe = Callable[[BeautifulSoup], str | None]

_BG_URL_RE = re.compile(r"url\(['\"]?([^'\")\s]+)['\"]?\)")
_INVISIBLE_TAGS = frozenset({"script", "style", "noscript", "template"})

# Never content: tracking pixels, avatars, icons
_COMMON_IMAGE_SKIPS = ("favicon", "gravatar.com", "/avatar")
ICON_MAX_WIDTH = 100


# --- Probes -----------------------------------------------------------------


def text_of(selector: str) -> Probe:
    """Cleaned text of the first element matching *selector*."""
    def probe(soup: BeautifulSoup) -> str | None:
        el = soup.select_one(selector)
        return clean_text(el.get_text(" ")) if el else None
    return probe


def attr_of(selector: str, attr: str) -> Probe:
    def probe(soup: BeautifulSoup) -> str | None:
        el = soup.select_one(selector)
        if el is None:
            return None
        value = el.get(attr)
        return clean_text(value) if isinstance(value, str) else None
    return probe


def long_text_of(selector: str, min_length: int) -> Probe:
    """Cleaned text of the first match whose text is longer than *min_length*."""
    def probe(soup: BeautifulSoup) -> str | None:
        for el in soup.select(selector):
            text = clean_text(el.get_text(" "))
            if text and len(text) > min_length:
                return text
        return None
    return probe


def title_prefix(soup: BeautifulSoup) -> str | None:
    """'Acme Corp | Home' -> 'Acme Corp'."""
    title = soup.title.get_text() if soup.title else ""
    return clean_text(re.split(r"\s[|\-–—]\s|\|", title, maxsplit=1)[0])


def first_match(soup: BeautifulSoup, probes: Iterable[Probe]) -> str | None:
    for probe in probes:
        value = probe(soup)
        if value:
            return value
    return None


# --- Text pooling -------------------------------------------------------------


def visible_text(el: Tag | None) -> str:
    """Text of *el* without script/style contents."""
    if el is None:
        return ""
    parts = [
        s for s in el.find_all(string=True)
        if not isinstance(s, (Comment, Doctype))
        and s.parent is not None
        and s.parent.name not in _INVISIBLE_TAGS
    ]
    return " ".join(parts)


def pooled_text(soup: BeautifulSoup, selectors: Sequence[str]) -> str:
    """Concatenated visible text of every element matching any selector."""
    chunks: list[str] = []
    for selector in selectors:
        chunks.extend(visible_text(el) for el in soup.select(selector))
    return " ".join(chunks)


def tel_link(soup: BeautifulSoup) -> str | None:
    a = soup.select_one('a[href^="tel:"]')
    return clean_text(a["href"][4:]) if a else None


def mailto_link(soup: BeautifulSoup) -> str | None:
    a = soup.select_one('a[href^="mailto:"]')
    if a is None:
        return None
    return clean_text(a["href"][7:].split("?")[0])


# --- Content collection -------------------------------------------------------


def collect_texts(
    soup: BeautifulSoup,
    selectors: Sequence[str],
    max_length: int = 100,
) -> list[str]:
    """Unique short texts from the first selector that yields any."""
    items: list[str] = []
    for selector in selectors:
        for el in soup.select(selector):
            text = clean_text(el.get_text(" "))
            if text and len(text) < max_length and text not in items:
                items.append(text)
        if items:
            break
    return items


def _first_text(el: Tag, selector: str | None) -> str | None:
    if not selector:
        return None
    found = el.select_one(selector)
    return clean_text(found.get_text(" ")) if found else None


def collect_testimonials(
    soup: BeautifulSoup,
    selectors: Sequence[str],
    text_selector: str,
    author_selector: str,
    role_selector: str | None = None,
    company_selector: str | None = None,
    max_length: int = 500,
) -> list[Testimonial]:
    testimonials: list[Testimonial] = []
    seen: set[str] = set()
    for selector in selectors:
        for el in soup.select(selector):
            text = _first_text(el, text_selector) or clean_text(el.get_text(" "))
            if not text or not (20 < len(text) < max_length) or text in seen:
                continue
            seen.add(text)
            testimonials.append(
                Testimonial(
                    text=text,
                    author=_first_text(el, author_selector),
                    role=_first_text(el, role_selector),
                    company=_first_text(el, company_selector),
                )
            )
        if testimonials:
            break
    return testimonials


def collect_features(
    soup: BeautifulSoup,
    selectors: Sequence[str],
    title_selector: str,
    description_selector: str,
) -> list[Feature]:
    features: list[Feature] = []
    for selector in selectors:
        for el in soup.select(selector):
            title = _first_text(el, title_selector)
            description = _first_text(el, description_selector)
            if title and description and all(f.title != title for f in features):
                features.append(Feature(title=title, description=description))
        if features:
            break
    return features


# --- Assets -------------------------------------------------------------------


def image_src(el: Tag) -> str | None:
    for attr in ("src", "data-src"):
        value = el.get(attr)
        if isinstance(value, str) and value.strip() and not value.startswith("data:"):
            return value.strip()
    return None


def first_image(soup: BeautifulSoup, selectors: Sequence[str], base_url: str) -> str | None:
    for selector in selectors:
        el = soup.select_one(selector)
        if el is not None:
            src = image_src(el)
            if src:
                return normalize_url(src, base_url)
    return None


def background_image(soup: BeautifulSoup, selectors: Sequence[str], base_url: str) -> str | None:
    """First CSS ``url(...)`` found in the style attribute of a matching element."""
    for selector in selectors:
        for el in soup.select(selector):
            match = _BG_URL_RE.search(el.get("style") or "")
            if match:
                return normalize_url(match.group(1), base_url)
    return None


def _width(el: Tag) -> int | None:
    raw = el.get("width")
    if not isinstance(raw, str):
        return None
    digits = re.match(r"\s*(\d+)", raw)
    return int(digits.group(1)) if digits else None


def harvest_images(
    soup: BeautifulSoup,
    base_url: str,
    skip: Sequence[str] = (),
    require_image_url: bool = False,
    extra_selectors: Sequence[str] = (),
) -> list[str]:
    """Up to MAX_IMAGES unique absolute image URLs, icons and avatars excluded."""
    images: list[str] = []
    skips = tuple(skip) + _COMMON_IMAGE_SKIPS
    candidates = soup.select(", ".join(("img", *extra_selectors)))
    for el in candidates:
        src = image_src(el)
        if not src:
            continue
        width = _width(el)
        if width is not None and width <= ICON_MAX_WIDTH:
            continue
        url = normalize_url(src, base_url)
        lower = url.lower()
        if any(s in lower for s in skips):
            continue
        if require_image_url and not is_valid_image_url(url):
            continue
        if url not in images:
            images.append(url)
        if len(images) >= MAX_IMAGES:
            break
    return images


def harvest_videos(soup: BeautifulSoup, base_url: str, selector: str) -> list[str]:
    videos: list[str] = []
    for el in soup.select(selector):
        src = el.get("src")
        if not isinstance(src, str) or not src.strip():
            continue
        url = normalize_url(src, base_url)
        if url not in videos:
            videos.append(url)
        if len(videos) >= MAX_VIDEOS:
            break
    return videos


def favicon(soup: BeautifulSoup, base_url: str) -> str | None:
    href = first_match(soup, (
        attr_of('link[rel~="icon"]', "href"),
        attr_of('link[rel="apple-touch-icon"]', "href"),
    ))
    return normalize_url(href, base_url) if href else None


# --- SEO ----------------------------------------------------------------------


def meta_keywords(soup: BeautifulSoup) -> list[str]:
    meta = soup.find("meta", attrs={"name": "keywords"})
    raw = meta.get("content") if meta else None
    if not isinstance(raw, str):
        return []
    return [k.strip() for k in raw.split(",") if k.strip()]


def absolute_or_none(value: str | None, base_url: str) -> str | None:
    return normalize_url(value, base_url) if value else None


# --- Page ---------------------------------------------------------------------


def page_headings(soup: BeautifulSoup) -> list[str]:
    headings: list[str] = []
    for el in soup.select("h1, h2, h3"):
        text = clean_text(el.get_text(" "))
        if text and text not in headings:
            headings.append(text)
        if len(headings) >= MAX_HEADINGS:
            break
    return headings


def internal_links(
    soup: BeautifulSoup,
    base_url: str,
    exclude: Sequence[str] = (),
) -> list[str]:
    links: list[str] = []
    for a in soup.find_all("a", href=True):
        path = to_site_path(a["href"], base_url)
        if path is None or any(x in path for x in exclude):
            continue
        if path not in links:
            links.append(path)
        if len(links) >= MAX_LINKS:
            break
    return links


def build_page(
    soup: BeautifulSoup,
    url: str,
    content_selectors: Sequence[str],
    link_exclude: Sequence[str] = (),
) -> ScrapedPage:
    """ScrapedPage for the current document.

    Main content is the text of the first selector that yields any, falling
    back to the whole body.
    """
    path = urlparse(url).path or "/"
    title = clean_text(soup.title.get_text()) if soup.title else None

    content = None
    for selector in (*content_selectors, "body"):
        content = clean_text(pooled_text(soup, (selector,)))
        if content:
            break

    return ScrapedPage(
        url=url,
        path=path,
        title=title,
        type=determine_page_type(path, title, content),
        content=content[:MAX_PAGE_CONTENT] if content else None,
        headings=page_headings(soup),
        links=internal_links(soup, url, link_exclude),
    )


# --- Contract -----------------------------------------------------------------


class Extractor(ABC):
    """Strategy turning one platform's parsed HTML into structured site data.

    Implementations must never raise on missing data: absent fields stay
    None or empty.
    """

    name: str = "base"

    def extract(self, soup: BeautifulSoup, url: str, html: str) -> ExtractorResult:
        return ExtractorResult(
            business=self.extract_business(soup, html),
            content=self.extract_content(soup),
            assets=self.extract_assets(soup, url),
            seo=self.extract_seo(soup, url),
            social=self.extract_social(soup),
            pages=[self.extract_current_page(soup, url)],
        )

    @abstractmethod
    def extract_business(self, soup: BeautifulSoup, html: str) -> ScrapedBusiness: ...

    @abstractmethod
    def extract_content(self, soup: BeautifulSoup) -> ScrapedContent: ...

    @abstractmethod
    def extract_assets(self, soup: BeautifulSoup, url: str) -> ScrapedAssets: ...

    @abstractmethod
    def extract_seo(self, soup: BeautifulSoup, url: str) -> ScrapedSeo: ...

    def extract_social(self, soup: BeautifulSoup) -> ScrapedSocial:
        return extract_social_links(soup)

    @abstractmethod
    def extract_current_page(self, soup: BeautifulSoup, url: str) -> ScrapedPage: ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"
