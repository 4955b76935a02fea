from unittest.mock import patch

import pytest
from bs4 import BeautifulSoup

from importer.exceptions.custom import ExtractionError
from importer.extractors.generic import GenericExtractor, generic_extractor
from importer.extractors.registry import extract_with_fallback, get_all_extractors, get_extractor_for_platform
from importer.extractors.squarespace import squarespace_extractor
from importer.extractors.wix import WixExtractor
from importer.schemas.platform import SitePlatform

HTML = "<html><head><title>Fallback Co | Home</title></head><body><h1>Hello there</h1></body></html>"
URL = "https://fallback.example/"


def _soup() -> BeautifulSoup:
    return BeautifulSoup(HTML, "html.parser")


@pytest.mark.parametrize(
    ("platform", "name"),
    [
        (SitePlatform.squarespace, "squarespace"),
        (SitePlatform.wix, "wix"),
        (SitePlatform.wordpress, "wordpress"),
        (SitePlatform.godaddy, "godaddy"),
        (SitePlatform.shopify, "generic"),
        (SitePlatform.weebly, "generic"),
        (SitePlatform.webflow, "generic"),
        (SitePlatform.unknown, "generic"),
    ],
)
def test_extractor_for_platform(platform, name):
    assert get_extractor_for_platform(platform).name == name


def test_all_extractors_are_distinct_generic_first():
    extractors = get_all_extractors()
    assert extractors[0] is generic_extractor
    assert squarespace_extractor in extractors
    assert len({e.name for e in extractors}) == len(extractors) == 5


def test_working_extractor_records_nothing():
    errors: list[str] = []
    result = extract_with_fallback(generic_extractor, _soup(), URL, HTML, errors)
    assert result.business.name == "Fallback Co"
    assert errors == []


def test_failing_platform_extractor_falls_back_to_generic():
    errors: list[str] = []
    wix = get_extractor_for_platform(SitePlatform.wix)

    with patch.object(WixExtractor, "extract_assets", side_effect=KeyError("src")):
        result = extract_with_fallback(wix, _soup(), URL, HTML, errors)

    assert result.content.heroText == "Hello there"
    assert errors == ["wix extractor failed ('src'); used generic extractor"]


def test_failing_generic_extractor_raises():
    with patch.object(GenericExtractor, "extract_seo", side_effect=RuntimeError("parser exploded")):
        with pytest.raises(ExtractionError) as exc_info:
            extract_with_fallback(generic_extractor, _soup(), URL, HTML, [])

    assert exc_info.value.message == "Extraction failed: parser exploded"


@pytest.mark.parametrize("extractor", get_all_extractors(), ids=lambda e: e.name)
def test_empty_body_yields_empty_result(extractor):
    html = "<html><head></head><body></body></html>"

    result = extractor.extract(BeautifulSoup(html, "html.parser"), URL, html)

    assert all(value is None for value in result.business.model_dump().values())
    assert result.assets.images == []
    assert result.assets.videos == []
    assert len(result.pages) == 1
