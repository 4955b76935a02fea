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

# Theme-dependent; classic themes first, then block themes
NAME_PROBES = (
    text_of(".site-title a, .site-title"),
    text_of(".custom-logo-link"),
    attr_of('meta[property="og:site_name"]', "content"),
    text_of(".wp-block-site-title"),
    attr_of(".custom-logo", "alt"),
)

TAGLINE_PROBES = (
    text_of(".site-description, .site-tagline"),
    text_of(".wp-block-site-tagline"),
)

DESCRIPTION_PROBES = (
    attr_of('meta[name="description"]', "content"),
    attr_of('meta[property="og:description"]', "content"),
)

# Footer widgets, sidebars and contact-form plugins
CONTACT_AREAS = ("footer", ".site-footer", "#footer", ".widget", ".sidebar", ".contact-info", ".wpcf7", ".wpforms")

HERO_PROBES = (
    text_of(".wp-block-cover h1, .hero h1, .hero-section h1"),
    text_of(".entry-title, .page-title, article h1"),
    text_of("h1"),
)

HERO_SUBTEXT_PROBES = (
    text_of(".wp-block-cover p, .hero p"),
    text_of(".entry-content > p"),
)

ABOUT_PROBES = (
    text_of("#about p, .about-section p"),
    long_text_of(".wp-block-group p", 50),
    long_text_of(".entry-content p", 100),
)

SERVICE_SELECTORS = (
    ".wp-block-columns .wp-block-column h3",
    ".services-section h3",
    ".service-item h3",
    "h2.wp-block-heading, h3.wp-block-heading",
)

TESTIMONIAL_SELECTORS = (
    ".wp-block-testimonial",
    ".testimonial-item",
    ".testimonial-content",
    ".review-item",
    ".wp-block-quote",
    "blockquote",
)

FEATURE_SELECTORS = (".wp-block-column", ".feature-item", ".benefit-item")

CTA_PROBES = (
    text_of(".wp-block-button a, .wp-block-button__link"),
    text_of(".cta-button, .btn-primary"),
)

LOGO_SELECTORS = ("img.custom-logo", ".site-logo img", ".logo img", ".wp-block-site-logo img")

HERO_IMAGE_SELECTORS = (".wp-block-cover img", ".hero-image img", "img.wp-post-image")

VIDEO_SELECTOR = (
    ".wp-block-video video[src], video source[src], "
    ".wp-block-embed-youtube iframe, .wp-block-embed-vimeo iframe, "
    'iframe[src*="youtube"], iframe[src*="vimeo"]'
)

# Admin, login and uploaded media are never pages worth crawling
LINK_EXCLUDE = ("/wp-admin", "/wp-login", "/wp-content", "/wp-json", "/xmlrpc.php")


class WordPressExtractor(Extractor):
    name = "wordpress"

    def extract_business(self, soup: BeautifulSoup, html: str) -> ScrapedBusiness:
        contact_text = pooled_text(soup, CONTACT_AREAS)
        return ScrapedBusiness(
            name=first_match(soup, NAME_PROBES),
            tagline=first_match(soup, TAGLINE_PROBES),
            description=first_match(soup, DESCRIPTION_PROBES),
            phone=extract_phone(contact_text) or tel_link(soup),
            email=extract_email(contact_text) or mailto_link(soup),
            address=extract_address(contact_text) or ld_json_address(soup),
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
                text_selector="p, .content, .quote",
                author_selector=".author, .name, cite, .testimonial-author",
                role_selector=".position, .testimonial-role",
            ),
            features=collect_features(
                soup, FEATURE_SELECTORS, title_selector="h3, h4, .feature-title", description_selector="p",
            ),
            ctaText=first_match(soup, CTA_PROBES),
        )

    def extract_assets(self, soup: BeautifulSoup, url: str) -> ScrapedAssets:
        hero_image = first_image(soup, HERO_IMAGE_SELECTORS, url) or background_image(
            soup, (".wp-block-cover", ".wp-block-cover__image-background"), url,
        )
        return ScrapedAssets(
            logo=first_image(soup, LOGO_SELECTORS, url),
            favicon=favicon(soup, url),
            heroImage=hero_image,
            images=harvest_images(soup, url, skip=("/themes/", "/plugins/", "emoji")),
            videos=harvest_videos(soup, url, VIDEO_SELECTOR),
        )

    def extract_seo(self, soup: BeautifulSoup, url: str) -> ScrapedSeo:
        # Yoast and Rank Math fill og: tags when the plain ones are missing
        return ScrapedSeo(
            title=text_of("title")(soup),
            description=first_match(soup, DESCRIPTION_PROBES),
            keywords=meta_keywords(soup),
            ogImage=absolute_or_none(attr_of('meta[property="og:image"]', "content")(soup), url),
            canonicalUrl=absolute_or_none(
                first_match(soup, (
                    attr_of('link[rel="canonical"]', "href"),
                    attr_of('meta[property="og:url"]', "content"),
                )),
                url,
            ),
        )

    def extract_current_page(self, soup: BeautifulSoup, url: str) -> ScrapedPage:
        return build_page(
            soup,
            url,
            content_selectors=(".entry-content", ".page-content", "main article", "main"),
            link_exclude=LINK_EXCLUDE,
        )


wordpress_extractor = WordPressExtractor()
