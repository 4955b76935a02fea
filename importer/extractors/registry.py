import logging

from bs4 import BeautifulSoup

from importer.exceptions.custom import ExtractionError
from importer.extractors.base import Extractor
from importer.extractors.generic import generic_extractor
from importer.extractors.godaddy import godaddy_extractor
from importer.extractors.squarespace import squarespace_extractor
from importer.extractors.wix import wix_extractor
from importer.extractors.wordpress import wordpress_extractor
from importer.schemas.platform import SitePlatform
from importer.schemas.site import ExtractorResult

logger = logging.getLogger(__name__)

# Shopify, Weebly and Webflow have no dedicated extractor yet
_EXTRACTORS: dict[SitePlatform, Extractor] = {
    SitePlatform.squarespace: squarespace_extractor,
    SitePlatform.wix: wix_extractor,
    SitePlatform.wordpress: wordpress_extractor,
    SitePlatform.shopify: generic_extractor,
    SitePlatform.godaddy: godaddy_extractor,
    SitePlatform.weebly: generic_extractor,
    SitePlatform.webflow: generic_extractor,
    SitePlatform.unknown: generic_extractor,
}


def get_extractor_for_platform(platform: SitePlatform) -> Extractor:
    return _EXTRACTORS.get(platform, generic_extractor)


def get_all_extractors() -> list[Extractor]:
    """Every distinct extractor, generic first."""
    return [
        generic_extractor,
        squarespace_extractor,
        wix_extractor,
        wordpress_extractor,
        godaddy_extractor,
    ]


def extract_with_fallback(
    extractor: Extractor,
    soup: BeautifulSoup,
    url: str,
    html: str,
    errors: list[str],
) -> ExtractorResult:
    """Run *extractor*, degrading to the generic extractor if it blows up.

    The failure is appended to *errors* so the caller can surface it.
    """
    try:
        return extractor.extract(soup, url, html)
    except Exception as exc:
        if extractor is generic_extractor:
            logger.exception("Generic extractor failed on %s", url)
            raise ExtractionError(f"Extraction failed: {exc}") from exc
        logger.exception("%s extractor failed on %s", extractor.name, url)
        errors.append(f"{extractor.name} extractor failed ({exc}); used generic extractor")
        return generic_extractor.extract(soup, url, html)
