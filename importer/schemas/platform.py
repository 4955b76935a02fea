from enum import StrEnum

from pydantic import BaseModel


class SitePlatform(StrEnum):
    squarespace = "squarespace"
    wix = "wix"
    wordpress = "wordpress"
    shopify = "shopify"
    godaddy = "godaddy"
    weebly = "weebly"
    webflow = "webflow"
    unknown = "unknown"


class Confidence(StrEnum):
    high = "high"
    medium = "medium"
    low = "low"


class PlatformDetectionResult(BaseModel):
    model_config = {"frozen": True}

    platform: SitePlatform
    confidence: Confidence
    indicators: tuple[str, ...] = ()


class PlatformInfo(BaseModel):
    model_config = {"frozen": True}

    name: str
    requiresJavaScript: bool
    scraperNotes: str
