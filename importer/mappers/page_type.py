import re

from importer.schemas.site import PageType

_HOME_PATHS = frozenset({"", "/", "/index", "/index.html", "/home"})

# Checked in order; the first type whose path keyword or title keyword hits wins
_RULES: tuple[tuple[PageType, tuple[str, ...], tuple[str, ...]], ...] = (
    (PageType.about, ("about", "our-story", "who-we-are", "team"), ("about",)),
    (PageType.services, ("service", "what-we-do", "offerings"), ("service",)),
    (PageType.contact, ("contact", "get-in-touch", "location"), ("contact",)),
    (PageType.blog, ("blog", "news", "post", "article"), ("blog",)),
    (PageType.portfolio, ("portfolio", "work", "projects", "gallery", "case-stud"), ("portfolio",)),
    (PageType.pricing, ("pricing", "plans"), ("pricing",)),
)

_PRICE_PER_PERIOD_RE = re.compile(
    r"[$€£]\s?\d+(?:[.,]\d{2})?\s*(?:/|per\s+)\s*(?:mo|month|yr|year|week)\b",
    re.IGNORECASE,
)


def determine_page_type(path: str, title: str | None, body_text: str | None) -> PageType:
    lower_path = path.lower().rstrip("/") if path != "/" else "/"
    if lower_path in _HOME_PATHS:
        return PageType.home

    lower_title = (title or "").lower()
    for page_type, path_keywords, title_keywords in _RULES:
        if any(k in lower_path for k in path_keywords):
            return page_type
        if any(k in lower_title for k in title_keywords):
            return page_type

    if body_text and _PRICE_PER_PERIOD_RE.search(body_text[:2000]):
        return PageType.pricing
    return PageType.other
