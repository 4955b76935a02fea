import pytest
from bs4 import BeautifulSoup

from importer.extractors.squarespace import squarespace_extractor

URL = "https://bloom.example/"

HTML = """
<html><head>
  <title>Bloom Florist</title>
  <meta name="description" content="Fresh flowers in Portland">
  <script type="application/ld+json">
    {"@type": "LocalBusiness", "address": "400 Rose Ave, Portland, OR 97201"}
  </script>
</head><body>
  <header>
    <div class="header-title"><div class="header-title-logo">
      <a href="/"><img src="https://images.squarespace-cdn.com/content/logo.png" alt="Bloom Florist"></a>
    </div></div>
    <div class="header-tagline">Flowers for every occasion</div>
  </header>
  <main><div class="sqs-layout">
    <div class="sqs-block sqs-block-banner">
      <h1>Flowers that say it for you</h1>
      <p>Same-day delivery in Portland</p>
      <img src="https://images.squarespace-cdn.com/content/hero.jpg">
    </div>
    <div class="sqs-block sqs-block-html"><div class="sqs-block-content">
      <p>Bloom has been arranging seasonal bouquets for weddings, birthdays and everyday moments in Portland for over fifteen years.</p>
    </div></div>
    <div class="sqs-block sqs-block-quote">
      <blockquote><span class="quote-text">The centerpieces for our wedding were absolutely stunning.</span></blockquote>
      <figcaption class="source">Priya and Sam</figcaption>
    </div>
    <div class="sqs-block sqs-block-button"><a class="sqs-block-button-element" href="/shop">Order flowers</a></div>
    <img src="https://static1.squarespace.com/static/ta/5a1/sprite.png">
    <img src="https://images.squarespace-cdn.com/content/bouquet.jpg">
  </div></main>
  <footer class="footer-section">
    <p>Call 503-555-0199</p>
    <a href="mailto:hello@bloom.example">Email us</a>
    <a href="/cart">Cart</a>
    <a href="/about">About</a>
  </footer>
</body></html>
"""


@pytest.fixture(scope="module")
def result():
    return squarespace_extractor.extract(BeautifulSoup(HTML, "html.parser"), URL, HTML)


def test_name_falls_back_to_logo_alt(result):
    assert result.business.name == "Bloom Florist"
    assert result.business.tagline == "Flowers for every occasion"


def test_contact_details(result):
    business = result.business
    assert business.phone == "503-555-0199"
    assert business.email == "hello@bloom.example"
    assert business.address == "400 Rose Ave, Portland, OR 97201"


def test_content_blocks(result):
    content = result.content
    assert content.heroText == "Flowers that say it for you"
    assert content.heroSubtext == "Same-day delivery in Portland"
    assert content.aboutText.startswith("Bloom has been arranging")
    assert content.ctaText == "Order flowers"
    assert [(t.text, t.author) for t in content.testimonials] == [
        ("The centerpieces for our wedding were absolutely stunning.", "Priya and Sam"),
    ]


def test_assets_skip_platform_sprites(result):
    assets = result.assets
    assert assets.logo == "https://images.squarespace-cdn.com/content/logo.png"
    assert assets.heroImage == "https://images.squarespace-cdn.com/content/hero.jpg"
    assert assets.images == [
        "https://images.squarespace-cdn.com/content/logo.png",
        "https://images.squarespace-cdn.com/content/hero.jpg",
        "https://images.squarespace-cdn.com/content/bouquet.jpg",
    ]


def test_page_excludes_commerce_links(result):
    page = result.pages[0]
    assert page.links == ["/", "/shop", "/about"]
    assert "Bloom has been arranging" in page.content
