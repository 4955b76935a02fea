import re

from bs4 import BeautifulSoup

from importer.schemas.site import ScrapedSocial

_SOCIAL_PATTERNS: dict[str, re.Pattern[str]] = {
    "facebook": re.compile(r"(?:^|[/.])(?:facebook\.com|fb\.com)/", re.IGNORECASE),
    "instagram": re.compile(r"(?:^|[/.])instagram\.com/", re.IGNORECASE),
    "twitter": re.compile(r"(?:^|[/.])(?:twitter\.com|x\.com)/", re.IGNORECASE),
    "linkedin": re.compile(r"(?:^|[/.])linkedin\.com/", re.IGNORECASE),
    "youtube": re.compile(r"(?:^|[/.])(?:youtube\.com|youtu\.be)/", re.IGNORECASE),
    "tiktok": re.compile(r"(?:^|[/.])tiktok\.com/", re.IGNORECASE),
    "pinterest": re.compile(r"(?:^|[/.])pinterest\.com/", re.IGNORECASE),
    "yelp": re.compile(r"(?:^|[/.])yelp\.com/", re.IGNORECASE),
    "googleBusiness": re.compile(r"google\.com/maps|business\.google\.com|g\.page/", re.IGNORECASE),
}

# Share buttons point at the platform but are not the business's profile
_SHARE_RE = re.compile(r"/sharer|/share\?|/intent/|/shareArticle|/pin/create", re.IGNORECASE)


def extract_social_links(soup: BeautifulSoup) -> ScrapedSocial:
    """Scan every anchor for known social profiles. First match per platform wins."""
    found: dict[str, str] = {}
    for a in soup.find_all("a", href=True):
        href = a["href"].strip()
        if not href or _SHARE_RE.search(href):
            continue
        for platform, pattern in _SOCIAL_PATTERNS.items():
            if platform not in found and pattern.search(href):
                found[platform] = href
    return ScrapedSocial(**found)
