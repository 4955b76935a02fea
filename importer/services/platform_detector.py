from collections.abc import Mapping, Sequence

from bs4 import BeautifulSoup

from importer.schemas.platform import (
    Confidence,
    PlatformDetectionResult,
    PlatformInfo,
    SitePlatform,
)
from importer.signatures import (
    HEADER_WEIGHT,
    HTML_WEIGHT,
    LINK_WEIGHT,
    META_WEIGHT,
    PLATFORM_INFO,
    PLATFORM_SIGNATURES,
    SCRIPT_WEIGHT,
    PlatformSignature,
)


HIGH_CONFIDENCE_SCORE = 10
MEDIUM_CONFIDENCE_SCORE = 5


def _score_signature(
    signature: PlatformSignature,
    soup: BeautifulSoup,
    html: str,
    headers: Mapping[str, str],
) -> tuple[int, list[str]]:
    score = 0
    indicators: list[str] = []

    if signature.scripts:
        for script in soup.find_all("script", src=True):
            src = script["src"]
            for pattern in signature.scripts:
                if pattern.search(src):
                    score += SCRIPT_WEIGHT
                    indicators.append(f"Script: {src[:50]}")

    for name, pattern in signature.meta:
        for meta in soup.find_all("meta", attrs={"name": name}):
            content = meta.get("content") or ""
            if pattern.search(content):
                score += META_WEIGHT
                indicators.append(f"Meta {name}: {content}")

    if signature.links:
        for link in soup.find_all("link", href=True):
            href = link["href"]
            for pattern in signature.links:
                if pattern.search(href):
                    score += LINK_WEIGHT
                    indicators.append(f"Link: {href[:50]}")

    for pattern in signature.html:
        if pattern.search(html):
            score += HTML_WEIGHT
            indicators.append(f"HTML pattern: {pattern.pattern}")

    for name, pattern in signature.headers:
        value = headers.get(name, "")
        if value and pattern.search(value):
            score += HEADER_WEIGHT
            indicators.append(f"Header {name}: {value}")

    return score, indicators


def _confidence(score: int) -> Confidence:
    if score >= HIGH_CONFIDENCE_SCORE:
        return Confidence.high
    if score >= MEDIUM_CONFIDENCE_SCORE:
        return Confidence.medium
    return Confidence.low


def detect_platform(
    soup: BeautifulSoup,
    html: str,
    headers: Mapping[str, str] | None = None,
    signatures: Sequence[PlatformSignature] = PLATFORM_SIGNATURES,
) -> PlatformDetectionResult:
    """Pick the website builder that most likely produced *html*.

    Every signature is scored; the strictly highest total wins, so on a tie
    the signature registered first is kept. Pure function of its inputs.
    """
    lowered = {k.lower(): v for k, v in (headers or {}).items()}

    best_platform = SitePlatform.unknown
    best_score = 0
    best_indicators: list[str] = []

    for signature in signatures:
        score, indicators = _score_signature(signature, soup, html, lowered)
        if score > best_score:
            best_platform = signature.platform
            best_score = score
            best_indicators = indicators

    return PlatformDetectionResult(
        platform=best_platform,
        confidence=_confidence(best_score),
        indicators=tuple(best_indicators),
    )


def get_platform_info(platform: SitePlatform) -> PlatformInfo:
    return PLATFORM_INFO.get(platform, PLATFORM_INFO[SitePlatform.unknown])
