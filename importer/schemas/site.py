from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field

from importer.config import DEFAULT_USER_AGENT
from importer.schemas.platform import SitePlatform

MAX_PAGE_CONTENT = 5000
MAX_HEADINGS = 20
MAX_LINKS = 50
MAX_IMAGES = 20
MAX_VIDEOS = 5


class PageType(StrEnum):
    home = "home"
    about = "about"
    services = "services"
    contact = "contact"
    blog = "blog"
    portfolio = "portfolio"
    pricing = "pricing"
    other = "other"


class ScrapeOptions(BaseModel):
    timeout: int = Field(default=30000, gt=0)  # milliseconds
    maxPages: int = Field(default=5, ge=1)
    includeImages: bool = True
    followLinks: bool = False
    userAgent: str = DEFAULT_USER_AGENT


class ScrapeRequest(BaseModel):
    url: str
    options: ScrapeOptions | None = None


class ScrapedBusiness(BaseModel):
    name: str | None = None
    tagline: str | None = None
    description: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    hours: str | None = None


class Testimonial(BaseModel):
    text: str
    author: str | None = None
    role: str | None = None
    company: str | None = None


class Feature(BaseModel):
    title: str
    description: str


class ScrapedContent(BaseModel):
    heroText: str | None = None
    heroSubtext: str | None = None
    aboutText: str | None = None
    services: list[str] = []
    testimonials: list[Testimonial] = []
    features: list[Feature] = []
    ctaText: str | None = None


class ScrapedAssets(BaseModel):
    logo: str | None = None
    favicon: str | None = None
    heroImage: str | None = None
    images: list[str] = Field(default_factory=list, max_length=MAX_IMAGES)
    videos: list[str] = Field(default_factory=list, max_length=MAX_VIDEOS)


class ScrapedSeo(BaseModel):
    title: str | None = None
    description: str | None = None
    keywords: list[str] = []
    ogImage: str | None = None
    canonicalUrl: str | None = None


class ScrapedSocial(BaseModel):
    facebook: str | None = None
    instagram: str | None = None
    twitter: str | None = None
    linkedin: str | None = None
    youtube: str | None = None
    tiktok: str | None = None
    pinterest: str | None = None
    yelp: str | None = None
    googleBusiness: str | None = None


class ScrapedPage(BaseModel):
    url: str
    path: str
    title: str | None = None
    type: PageType = PageType.other
    content: str | None = Field(default=None, max_length=MAX_PAGE_CONTENT)
    headings: list[str] = Field(default_factory=list, max_length=MAX_HEADINGS)
    links: list[str] = Field(default_factory=list, max_length=MAX_LINKS)


class ExtractorResult(BaseModel):
    business: ScrapedBusiness = Field(default_factory=ScrapedBusiness)
    content: ScrapedContent = Field(default_factory=ScrapedContent)
    assets: ScrapedAssets = Field(default_factory=ScrapedAssets)
    seo: ScrapedSeo = Field(default_factory=ScrapedSeo)
    social: ScrapedSocial = Field(default_factory=ScrapedSocial)
    pages: list[ScrapedPage] = []


class ScrapedSiteData(BaseModel):
    url: str
    platform: SitePlatform
    business: ScrapedBusiness
    content: ScrapedContent
    assets: ScrapedAssets
    seo: ScrapedSeo
    social: ScrapedSocial
    pages: list[ScrapedPage] = Field(min_length=1)
    scrapedAt: datetime
    scrapeErrors: list[str] = []


class ScrapeResult(BaseModel):
    model_config = {"frozen": True}

    success: bool
    data: ScrapedSiteData | None = None
    errors: list[str] = []
    duration: int  # milliseconds
