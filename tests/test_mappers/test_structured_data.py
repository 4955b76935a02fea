import json

from bs4 import BeautifulSoup

from importer.mappers.structured_data import (
    format_address,
    iter_ld_json,
    ld_json_address,
    ld_json_hours,
)


def _soup(*blocks: str) -> BeautifulSoup:
    scripts = "".join(f'<script type="application/ld+json">{b}</script>' for b in blocks)
    return BeautifulSoup(f"<html><head>{scripts}</head><body></body></html>", "html.parser")


def test_iter_ld_json_flattens_lists_and_graph():
    graph = json.dumps({"@graph": [{"@type": "WebSite"}, {"@type": "LocalBusiness"}]})
    listing = json.dumps([{"@type": "Organization"}])
    types = [node.get("@type") for node in iter_ld_json(_soup(graph, listing))]
    assert types == [None, "WebSite", "LocalBusiness", "Organization"]


def test_invalid_json_is_ignored():
    soup = _soup("{not json", json.dumps({"openingHours": "Mo-Fr 09:00-17:00"}))
    assert ld_json_hours(soup) == "Mo-Fr 09:00-17:00"


def test_ld_json_address_from_postal_address():
    soup = _soup(json.dumps({
        "@type": "LocalBusiness",
        "address": {
            "@type": "PostalAddress",
            "streetAddress": "12 Rose Ave",
            "addressLocality": "Portland",
            "addressRegion": "OR",
            "postalCode": "97201",
        },
    }))
    assert ld_json_address(soup) == "12 Rose Ave, Portland, OR, 97201"


def test_format_address_variants():
    assert format_address("  1 Main St,  Town ") == "1 Main St, Town"
    assert format_address([{"streetAddress": "9 Elm St"}]) == "9 Elm St"
    assert format_address({}) is None
    assert format_address(None) is None


def test_ld_json_hours_joins_lists():
    soup = _soup(json.dumps({"openingHours": ["Mo-Fr 09:00-17:00", "Sa 10:00-14:00"]}))
    assert ld_json_hours(soup) == "Mo-Fr 09:00-17:00, Sa 10:00-14:00"


def test_no_structured_data():
    soup = _soup()
    assert ld_json_address(soup) is None
    assert ld_json_hours(soup) is None
