from bs4 import BeautifulSoup

from importer.extractors.base import (
    Extractor,
    absolute_or_none,
    attr_of,
    background_image,
    build_page,
    collect_features,
    collect_testimonials,
    collect_texts,
    favicon,
    first_image,
    first_match,
    harvest_images,
    harvest_videos,
    long_text_of,
    mailto_link,
    meta_keywords,
    pooled_text,
    tel_link,
    text_of,
)
from importer.mappers.structured_data import ld_json_address, ld_json_hours
from importer.mappers.text import extract_address, extract_email, extract_phone
from importer.schemas.site import (
    ScrapedAssets,
    ScrapedBusiness,
    ScrapedContent,
    ScrapedPage,
    ScrapedSeo,
)

NAME_PROBES = (
    text_of(".site-title, .header-title, .site-branding-text"),
    attr_of('meta[property="og:site_name"]', "content"),
    attr_of(".header-title-logo img", "alt"),
)

TAGLINE_PROBES = (
    text_of(".site-tagline, .header-tagline"),
    text_of(".sqs-block-html p"),
)

# Footer sections plus form blocks (block type 2)
CONTACT_AREAS = (
    ".footer-section",
    ".site-footer",
    '[data-section-type="footer"]',
    ".sqs-block-form",
    '[data-block-type="2"]',
)

HERO_PROBES = (
    text_of('.sqs-block-banner h1, .sqs-block-banner .sqsrte-large, [data-block-type="1"] h1'),
    text_of(".section-wrapper:first-child h1"),
    text_of("h1"),
)

HERO_SUBTEXT_PROBES = (
    text_of(".sqs-block-banner p, .sqs-block-banner .sqsrte-small"),
)

SERVICE_SELECTORS = (
    ".sqs-block-summary-v2 .summary-title",
    ".sqs-block-list li",
    ".list-item-content__title",
)

TESTIMONIAL_SELECTORS = (".sqs-block-quote", ".sqs-block-testimonial", "blockquote")

FEATURE_SELECTORS = (
    ".sqs-block-image + .sqs-block-html",
    ".sqs-gallery-design-list .sqs-gallery-meta-container",
    ".list-item",
)

LOGO_SELECTORS = (".site-logo img", ".header-logo img", ".site-branding-logo img", ".header-title-logo img")

HERO_IMAGE_SELECTORS = (".sqs-block-banner img", '[data-block-type="1"] img', ".section-background img")

VIDEO_SELECTOR = (
    ".sqs-block-video iframe, .sqs-video-wrapper iframe, video source[src], "
    'iframe[src*="youtube"], iframe[src*="vimeo"]'
)

# Platform chrome served from the shared static host
IMAGE_SKIPS = ("static.squarespace.com/universal", "static1.squarespace.com/static/ta/")

LINK_EXCLUDE = ("/config", "/cart", "/account", "/commerce/")


class SquarespaceExtractor(Extractor):
    name = "squarespace"

    def extract_business(self, soup: BeautifulSoup, html: str) -> ScrapedBusiness:
        contact_text = pooled_text(soup, CONTACT_AREAS)
        return ScrapedBusiness(
            name=first_match(soup, NAME_PROBES),
            tagline=first_match(soup, TAGLINE_PROBES),
            description=attr_of('meta[name="description"]', "content")(soup),
            phone=extract_phone(contact_text) or tel_link(soup),
            email=extract_email(contact_text) or mailto_link(soup),
            address=ld_json_address(soup) or extract_address(contact_text),
            hours=ld_json_hours(soup),
        )

    def extract_content(self, soup: BeautifulSoup) -> ScrapedContent:
        return ScrapedContent(
            heroText=first_match(soup, HERO_PROBES),
            heroSubtext=first_match(soup, HERO_SUBTEXT_PROBES),
            aboutText=long_text_of(".sqs-block-html p", 100)(soup),
            services=collect_texts(soup, SERVICE_SELECTORS),
            testimonials=collect_testimonials(
                soup,
                TESTIMONIAL_SELECTORS,
                text_selector=".quote-text, .sqsrte-large, p",
                author_selector=".quote-author, .source, cite, figcaption",
            ),
            features=collect_features(
                soup, FEATURE_SELECTORS, title_selector="h3, h4", description_selector="p",
            ),
            ctaText=text_of(".sqs-block-button a, .sqs-block-button-element")(soup),
        )

    def extract_assets(self, soup: BeautifulSoup, url: str) -> ScrapedAssets:
        hero_image = first_image(soup, HERO_IMAGE_SELECTORS, url) or background_image(
            soup, (".section-background", ".sqs-section-background", ".banner-thumbnail-wrapper"), url,
        )
        return ScrapedAssets(
            logo=first_image(soup, LOGO_SELECTORS, url),
            favicon=favicon(soup, url),
            heroImage=hero_image,
            images=harvest_images(soup, url, skip=IMAGE_SKIPS),
            videos=harvest_videos(soup, url, VIDEO_SELECTOR),
        )

    def extract_seo(self, soup: BeautifulSoup, url: str) -> ScrapedSeo:
        return ScrapedSeo(
            title=text_of("title")(soup),
            description=attr_of('meta[name="description"]', "content")(soup),
            keywords=meta_keywords(soup),
            ogImage=absolute_or_none(attr_of('meta[property="og:image"]', "content")(soup), url),
            canonicalUrl=absolute_or_none(attr_of('link[rel="canonical"]', "href")(soup), url),
        )

    def extract_current_page(self, soup: BeautifulSoup, url: str) -> ScrapedPage:
        return build_page(
            soup,
            url,
            content_selectors=(".sqs-layout", ".sqs-block-content", "main"),
            link_exclude=LINK_EXCLUDE,
        )


squarespace_extractor = SquarespaceExtractor()
