import re

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
    title_prefix,
)
from importer.mappers.structured_data import ld_json_address, ld_json_hours
from importer.mappers.text import clean_text, extract_address, extract_email, extract_phone
from importer.schemas.site import (
    ScrapedAssets,
    ScrapedBusiness,
    ScrapedContent,
    ScrapedPage,
    ScrapedSeo,
)

_HOME_SUFFIX_RE = re.compile(r"\s*[-|]\s*Home$", re.IGNORECASE)

NAME_PROBES = (
    attr_of('meta[property="og:site_name"]', "content"),
    text_of('.logo, .site-logo, [class*="logo"]'),
    text_of("header .brand, header .site-name, .navbar-brand"),
    title_prefix,
)

TAGLINE_PROBES = (
    attr_of('meta[property="og:description"]', "content"),
    text_of('.tagline, .slogan, [class*="tagline"]'),
    text_of("header p, .hero p"),
)

DESCRIPTION_PROBES = (
    attr_of('meta[name="description"]', "content"),
    text_of('.about-text, .about p, [class*="about"] p'),
)

CONTACT_AREAS = ("footer", ".contact", ".contact-info", '[class*="contact"]', "header", ".footer")

HERO_SELECTORS = (
    ".hero h1",
    ".hero-title",
    '[class*="hero"] h1',
    "header h1",
    ".banner h1",
    "main h1",
    "h1",
)

ABOUT_PROBES = (
    long_text_of(".about p", 50),
    long_text_of('[class*="about"] p', 50),
    long_text_of("#about p", 50),
    long_text_of('section[data-section="about"] p', 50),
    long_text_of("p", 100),
)

SERVICE_SELECTORS = (
    ".services li",
    '[class*="service"] h3',
    '[class*="service"] h4',
    ".service-item h3",
    ".service-card h3",
)

TESTIMONIAL_SELECTORS = (
    ".testimonial",
    '[class*="testimonial"]',
    ".review",
    '[class*="review"]',
    "blockquote",
)

FEATURE_SELECTORS = (".feature", '[class*="feature"]', ".benefit", '[class*="benefit"]')

CTA_SELECTORS = (".cta a", '[class*="cta"] a', ".hero a.button", ".hero a.btn", "a.cta")

LOGO_SELECTORS = (".logo img", '[class*="logo"] img', "header img", ".navbar-brand img")

HERO_IMAGE_SELECTORS = (".hero img", '[class*="hero"] img', ".banner img", 'header img[class*="background"]')

VIDEO_SELECTOR = 'video[src], video source[src], iframe[src*="youtube"], iframe[src*="vimeo"]'


class GenericExtractor(Extractor):
    """Framework-agnostic extraction used for unknown and unmatched platforms."""

    name = "generic"

    def extract_business(self, soup: BeautifulSoup, html: str) -> ScrapedBusiness:
        name = first_match(soup, NAME_PROBES)
        if name:
            name = clean_text(_HOME_SUFFIX_RE.sub("", name))

        contact_text = pooled_text(soup, CONTACT_AREAS)

        return ScrapedBusiness(
            name=name,
            tagline=first_match(soup, TAGLINE_PROBES),
            description=first_match(soup, DESCRIPTION_PROBES),
            phone=tel_link(soup) or extract_phone(contact_text),
            email=mailto_link(soup) or extract_email(contact_text),
            address=extract_address(contact_text) or ld_json_address(soup),
            hours=ld_json_hours(soup),
        )

    def extract_content(self, soup: BeautifulSoup) -> ScrapedContent:
        hero_text = None
        hero_subtext = None
        for selector in HERO_SELECTORS:
            el = soup.select_one(selector)
            if el is None:
                continue
            hero_text = clean_text(el.get_text(" "))
            if not hero_text:
                continue
            sibling = el.find_next_sibling("p")
            parent_p = el.parent.find("p") if el.parent is not None else None
            hero_subtext = (
                (clean_text(sibling.get_text(" ")) if sibling else None)
                or (clean_text(parent_p.get_text(" ")) if parent_p else None)
            )
            break

        cta = None
        for selector in CTA_SELECTORS:
            text = text_of(selector)(soup)
            if text and len(text) < 50:
                cta = text
                break

        return ScrapedContent(
            heroText=hero_text,
            heroSubtext=hero_subtext,
            aboutText=first_match(soup, ABOUT_PROBES),
            services=collect_texts(soup, SERVICE_SELECTORS),
            testimonials=collect_testimonials(
                soup,
                TESTIMONIAL_SELECTORS,
                text_selector='p, .text, .quote, [class*="text"]',
                author_selector='.author, .name, [class*="author"], cite',
                role_selector='.role, .position, [class*="role"]',
                company_selector='.company, [class*="company"]',
            ),
            features=collect_features(
                soup, FEATURE_SELECTORS, title_selector="h3, h4, .title", description_selector="p, .description",
            ),
            ctaText=cta,
        )

    def extract_assets(self, soup: BeautifulSoup, url: str) -> ScrapedAssets:
        hero_image = first_image(soup, HERO_IMAGE_SELECTORS, url) or background_image(
            soup, (".hero", '[class*="hero"]', ".banner"), url,
        )
        return ScrapedAssets(
            logo=first_image(soup, LOGO_SELECTORS, url),
            favicon=favicon(soup, url),
            heroImage=hero_image,
            images=harvest_images(soup, url, require_image_url=True),
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
        return build_page(soup, url, content_selectors=("main", "article"))


generic_extractor = GenericExtractor()
