"""Static platform signature table.

Registration order matters: when two platforms reach the same score the one
registered first wins.
"""

import re
from dataclasses import dataclass

from importer.schemas.platform import PlatformInfo, SitePlatform

SCRIPT_WEIGHT = 3
LINK_WEIGHT = 2
HTML_WEIGHT = 2
META_WEIGHT = 5
HEADER_WEIGHT = 4


def _re(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


@dataclass(frozen=True)
class PlatformSignature:
    platform: SitePlatform
    scripts: tuple[re.Pattern[str], ...] = ()
    meta: tuple[tuple[str, re.Pattern[str]], ...] = ()
    links: tuple[re.Pattern[str], ...] = ()
    html: tuple[re.Pattern[str], ...] = ()
    headers: tuple[tuple[str, re.Pattern[str]], ...] = ()


PLATFORM_SIGNATURES: tuple[PlatformSignature, ...] = (
    PlatformSignature(
        platform=SitePlatform.squarespace,
        scripts=(
            _re(r"static\.squarespace\.com"),
            _re(r"squarespace\.com/universal"),
            _re(r"squarespace-cdn\.com"),
        ),
        meta=(("generator", _re(r"squarespace")),),
        html=(_re(r'class="sqs-'), _re(r"data-squarespace"), _re(r"sqsp-")),
        headers=(("server", _re(r"squarespace")),),
    ),
    PlatformSignature(
        platform=SitePlatform.wix,
        scripts=(
            _re(r"static\.wixstatic\.com"),
            _re(r"wix\.com/wix-labs"),
            _re(r"parastorage\.com"),
        ),
        meta=(("generator", _re(r"wix\.com")),),
        html=(_re(r"wix-dropdown"), _re(r'data-testid="[^"]*wix'), _re(r"comp-[a-z0-9]{8,}")),
        headers=(("x-wix-request-id", _re(r".+")),),
    ),
    PlatformSignature(
        platform=SitePlatform.wordpress,
        scripts=(_re(r"wp-content/"), _re(r"wp-includes/"), _re(r"wp-json")),
        meta=(("generator", _re(r"wordpress")),),
        links=(_re(r"wp-content/themes"), _re(r"wp-content/plugins")),
        html=(_re(r'class="wp-'), _re(r'id="wp-')),
        headers=(("link", _re(r"wp-json")), ("x-pingback", _re(r"xmlrpc\.php"))),
    ),
    PlatformSignature(
        platform=SitePlatform.shopify,
        scripts=(_re(r"cdn\.shopify\.com"), _re(r"shopify\.com/s/files")),
        meta=(("shopify-checkout-api-token", _re(r".+")),),
        html=(_re(r"Shopify\.theme"), _re(r"shopify-section")),
        headers=(("x-shopid", _re(r".+")), ("powered-by", _re(r"shopify"))),
    ),
    PlatformSignature(
        platform=SitePlatform.godaddy,
        scripts=(_re(r"godaddy\.com"), _re(r"secureserver\.net"), _re(r"wsimg\.com")),
        meta=(("generator", _re(r"godaddy")), ("generator", _re(r"website builder"))),
        html=(_re(r"data-ux="), _re(r'class="x-el')),
    ),
    PlatformSignature(
        platform=SitePlatform.weebly,
        scripts=(_re(r"weebly\.com"), _re(r"editmysite\.com")),
        meta=(("generator", _re(r"weebly")),),
        html=(_re(r"wsite-"), _re(r"weebly-")),
    ),
    PlatformSignature(
        platform=SitePlatform.webflow,
        scripts=(
            _re(r"webflow\.com"),
            _re(r"assets\.website-files\.com"),
            _re(r"uploads-ssl\.webflow\.com"),
        ),
        meta=(("generator", _re(r"webflow")),),
        html=(_re(r'class="w-'), _re(r"data-wf-"), _re(r"\bw-nav\b")),
    ),
)


PLATFORM_INFO: dict[SitePlatform, PlatformInfo] = {
    SitePlatform.squarespace: PlatformInfo(
        name="Squarespace", requiresJavaScript=False, scraperNotes="Static HTML, images on CDN",
    ),
    SitePlatform.wix: PlatformInfo(
        name="Wix", requiresJavaScript=True, scraperNotes="Heavy JavaScript, needs a headless browser",
    ),
    SitePlatform.wordpress: PlatformInfo(
        name="WordPress", requiresJavaScript=False, scraperNotes="Static HTML, check for REST API",
    ),
    SitePlatform.shopify: PlatformInfo(
        name="Shopify", requiresJavaScript=False, scraperNotes="Static HTML with Liquid templates",
    ),
    SitePlatform.godaddy: PlatformInfo(
        name="GoDaddy Website Builder", requiresJavaScript=True,
        scraperNotes="React-based, may need a headless browser",
    ),
    SitePlatform.weebly: PlatformInfo(
        name="Weebly", requiresJavaScript=False, scraperNotes="Static HTML",
    ),
    SitePlatform.webflow: PlatformInfo(
        name="Webflow", requiresJavaScript=False, scraperNotes="Static HTML, clean structure",
    ),
    SitePlatform.unknown: PlatformInfo(
        name="Unknown Platform", requiresJavaScript=False, scraperNotes="Use generic extractor",
    ),
}
