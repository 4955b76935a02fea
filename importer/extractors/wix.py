from bs4 import BeautifulSoup

from importer.extractors.base import (
    Extractor,
    absolute_or_none,
    attr_of,
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

# Wix components are addressed through data-testid / data-hook, class names are hashed
NAME_PROBES = (
    text_of('[data-testid="logo"] span, [data-hook="site-name"]'),
    attr_of('meta[property="og:site_name"]', "content"),
    text_of('[class*="siteHeader"] [class*="logo"]'),
)

TAGLINE_PROBES = (
    text_of('[data-testid="tagline"], [data-hook="tagline"]'),
)

CONTACT_AREAS = (
    '[data-testid*="footer"]',
    '[class*="footer"]',
    "footer",
    '[data-testid*="contact"]',
    '[class*="contact"]',
)

HERO_PROBES = (
    text_of('[data-testid*="header"] h1, [class*="hero"] h1, [data-hook="heading"]'),
    text_of("h1"),
)

HERO_SUBTEXT_PROBES = (
    text_of('[data-testid*="header"] p, [class*="hero"] p'),
)

ABOUT_PROBES = (
    text_of('[data-testid*="about"] p, [class*="about"] p'),
    long_text_of("p", 100),
)

SERVICE_SELECTORS = (
    '[data-testid*="service"] h3',
    '[class*="service"] h3',
    '[data-hook="repeater-item"] h3',
)

TESTIMONIAL_SELECTORS = ('[data-testid*="testimonial"]', '[class*="testimonial"]', "blockquote")

FEATURE_SELECTORS = ('[data-testid*="feature"]', '[class*="feature"]')

CTA_PROBES = (
    text_of('[data-testid="linkElement"] span, [data-testid*="button"]'),
    text_of('[class*="cta"] button, [class*="button"]'),
)

LOGO_SELECTORS = ('[data-testid="logo"] img', '[data-hook="logo"] img', '[class*="logo"] img')

HERO_IMAGE_SELECTORS = (
    '[data-testid*="header"] img',
    '[class*="hero"] img',
    "wix-image",
    '[data-testid*="bg-image"] img',
    '[data-testid*="bg-image"]',
)

VIDEO_SELECTOR = (
    'wix-video video[src], video source[src], [data-testid*="video"] iframe, '
    'iframe[src*="youtube"], iframe[src*="vimeo"]'
)

# Editor chrome and UI sprites; real uploads live under static.wixstatic.com/media
IMAGE_SKIPS = ("static.parastorage.com", "/services/editor-elements")


class WixExtractor(Extractor):
    name = "wix"

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
            aboutText=first_match(soup, ABOUT_PROBES),
            services=collect_texts(soup, SERVICE_SELECTORS),
            testimonials=collect_testimonials(
                soup,
                TESTIMONIAL_SELECTORS,
                text_selector='p, [class*="text"]',
                author_selector='[class*="name"], [class*="author"]',
            ),
            features=collect_features(
                soup,
                FEATURE_SELECTORS,
                title_selector='h3, h4, [class*="title"]',
                description_selector='p, [class*="description"]',
            ),
            ctaText=first_match(soup, CTA_PROBES),
        )

    def extract_assets(self, soup: BeautifulSoup, url: str) -> ScrapedAssets:
        return ScrapedAssets(
            logo=first_image(soup, LOGO_SELECTORS, url),
            favicon=favicon(soup, url),
            heroImage=first_image(soup, HERO_IMAGE_SELECTORS, url),
            images=harvest_images(soup, url, skip=IMAGE_SKIPS, extra_selectors=("wix-image[src]",)),
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
        return build_page(soup, url, content_selectors=("main", '[role="main"]', '[data-testid="page"]'))


wix_extractor = WixExtractor()
