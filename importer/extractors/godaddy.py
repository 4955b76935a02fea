import re

from bs4 import BeautifulSoup

from importer.extractors.base import (
    Extractor,
    Probe,
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
from importer.mappers.text import clean_text, extract_address, extract_email, extract_phone
from importer.schemas.site import (
    ScrapedAssets,
    ScrapedBusiness,
    ScrapedContent,
    ScrapedPage,
    ScrapedSeo,
)

_STREETISH_RE = re.compile(r"\d+.*\b(street|st\.|ave|avenue|road|rd\.|blvd|drive|lane)\b", re.IGNORECASE)


def _streetish_content_text(soup: BeautifulSoup) -> str | None:
    """A ContentText block that reads like a street address."""
    for el in soup.select('[data-ux="ContentText"]'):
        text = clean_text(el.get_text(" "))
        if text and _STREETISH_RE.search(text):
            return text
    return None


# Website Builder marks every component with data-ux
NAME_PROBES: tuple[Probe, ...] = (
    text_of('[data-ux="Logo"] span, [data-ux="SiteName"]'),
    attr_of('meta[property="og:site_name"]', "content"),
    text_of('[class*="Logo"] span'),
    attr_of('[data-ux="Logo"] img, [data-ux="ImageLogo"]', "alt"),
)

TAGLINE_PROBES = (
    text_of('[data-ux="Tagline"], [data-ux="HeroText"]'),
)

CONTACT_AREAS = ('[data-ux="Footer"]', "footer", '[data-ux*="Contact"]', '[class*="contact"]')

HERO_PROBES = (
    text_of('[data-ux="HeroHeading"], [data-ux="HeroText"] h1'),
    text_of("h1"),
)

HERO_SUBTEXT_PROBES = (
    text_of('[data-ux="HeroText"] p, [data-ux="HeroSubheading"]'),
)

ABOUT_PROBES = (
    long_text_of('[data-ux="ContentText"]', 100),
    text_of('[data-ux="AboutDescription"]'),
)

SERVICE_SELECTORS = ('[data-ux="ContentCardHeading"], [data-ux="ServiceTitle"]',)

TESTIMONIAL_SELECTORS = ('[data-ux="Testimonial"]', '[data-ux="TestimonialCard"]')

FEATURE_SELECTORS = ('[data-ux="ContentCard"]', '[data-ux="Feature"]')

LOGO_SELECTORS = ('[data-ux="Logo"] img', '[data-ux="LogoImage"]', '[data-ux="ImageLogo"]', '[class*="Logo"] img')

HERO_IMAGE_SELECTORS = ('[data-ux="HeroMedia"] img', '[data-ux="HeroImage"]')

VIDEO_SELECTOR = 'video source[src], [data-ux="Video"] source, [data-ux="Video"] iframe'


class GoDaddyExtractor(Extractor):
    name = "godaddy"

    def extract_business(self, soup: BeautifulSoup, html: str) -> ScrapedBusiness:
        contact_text = pooled_text(soup, CONTACT_AREAS)
        return ScrapedBusiness(
            name=first_match(soup, NAME_PROBES),
            tagline=first_match(soup, TAGLINE_PROBES),
            description=attr_of('meta[name="description"]', "content")(soup),
            phone=extract_phone(contact_text) or tel_link(soup),
            email=extract_email(contact_text) or mailto_link(soup),
            address=(
                extract_address(contact_text)
                or _streetish_content_text(soup)
                or ld_json_address(soup)
            ),
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
                text_selector='[data-ux="ContentText"], p',
                author_selector='[data-ux="AuthorName"], [data-ux="TestimonialAuthor"]',
            ),
            features=collect_features(
                soup,
                FEATURE_SELECTORS,
                title_selector='[data-ux="ContentCardHeading"], h3, h4',
                description_selector='[data-ux="ContentCardText"], p',
            ),
            ctaText=text_of('[data-ux="Button"], [data-ux="ButtonPrimary"]')(soup),
        )

    def extract_assets(self, soup: BeautifulSoup, url: str) -> ScrapedAssets:
        # Heroes are usually CSS backgrounds rather than <img>
        hero_image = first_image(soup, HERO_IMAGE_SELECTORS, url) or background_image(
            soup, ('[data-ux="Hero"]', '[data-ux="HeroMedia"]', '[data-ux="Background"]'), url,
        )
        return ScrapedAssets(
            logo=first_image(soup, LOGO_SELECTORS, url),
            favicon=favicon(soup, url),
            heroImage=hero_image,
            images=harvest_images(soup, url),
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
        return build_page(soup, url, content_selectors=('[data-ux="Page"]', "main", '[role="main"]'))


godaddy_extractor = GoDaddyExtractor()
