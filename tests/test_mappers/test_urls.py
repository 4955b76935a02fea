import pytest

from importer.exceptions.custom import InvalidUrlError
from importer.mappers.urls import (
    is_same_site,
    is_valid_image_url,
    normalize_url,
    to_site_path,
    validate_external_url,
)


# --- normalize_url ---


def test_normalize_root_relative():
    assert normalize_url("/img/a.png", "https://ex.com/blog/") == "https://ex.com/img/a.png"


def test_normalize_document_relative():
    assert normalize_url("img/a.png", "https://ex.com/blog/") == "https://ex.com/blog/img/a.png"


def test_normalize_protocol_relative_takes_base_scheme():
    assert normalize_url("//cdn.ex.com/a.png", "https://ex.com/") == "https://cdn.ex.com/a.png"


def test_normalize_is_idempotent():
    once = normalize_url("/img/a.png", "https://ex.com/blog/")
    assert normalize_url(once, "https://other.com/") == once


# --- is_valid_image_url ---


def test_is_valid_image_url():
    assert is_valid_image_url("https://ex.com/photo.JPG")
    assert is_valid_image_url("https://ex.com/images/12345")
    assert not is_valid_image_url("https://ex.com/about")
    assert not is_valid_image_url("data:image/png;base64,AAAA")


# --- same site / site paths ---


def test_is_same_site_ignores_www():
    assert is_same_site("https://www.acme.com/about", "https://acme.com/")
    assert not is_same_site("https://blog.acme.com/", "https://acme.com/")


def test_to_site_path_root_relative():
    assert to_site_path("/about", "https://acme.com/") == "/about"


def test_to_site_path_keeps_query_drops_fragment():
    assert to_site_path("/search?q=roof#top", "https://acme.com/") == "/search?q=roof"


def test_to_site_path_absolute_same_host():
    assert to_site_path("https://www.acme.com/team", "https://acme.com/") == "/team"


def test_to_site_path_rejects_external_and_non_page_links():
    base = "https://acme.com/"
    assert to_site_path("https://other.com/x", base) is None
    assert to_site_path("#pricing", base) is None
    assert to_site_path("mailto:hi@acme.com", base) is None
    assert to_site_path("tel:+15551234567", base) is None
    assert to_site_path("javascript:void(0)", base) is None


# --- validate_external_url ---


def test_validate_external_url_allows_public_hosts():
    assert validate_external_url("https://acme.com/") == "https://acme.com/"


@pytest.mark.parametrize(
    "url, message",
    [
        ("ftp://acme.com/file", "Only HTTP and HTTPS protocols are allowed"),
        ("not a url", "Only HTTP and HTTPS protocols are allowed"),
        ("http://127.0.0.1/", "Internal network addresses are not allowed"),
        ("http://10.0.0.5/admin", "Internal network addresses are not allowed"),
        ("http://192.168.1.1/", "Internal network addresses are not allowed"),
        ("http://169.254.169.254/latest/meta-data", "Internal network addresses are not allowed"),
        ("http://[::1]/", "Internal network addresses are not allowed"),
        ("http://localhost:8000/", "This hostname is not allowed"),
        ("http://metadata.google.internal/", "This hostname is not allowed"),
        ("http://db.internal/", "This hostname is not allowed"),
    ],
)
def test_validate_external_url_rejects(url, message):
    with pytest.raises(InvalidUrlError) as exc_info:
        validate_external_url(url)
    assert exc_info.value.message == message
