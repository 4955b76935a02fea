from bs4 import BeautifulSoup

from importer.extractors.generic import generic_extractor


def _extract(html: str, url: str = "https://example.com/"):
    return generic_extractor.extract(BeautifulSoup(html, "html.parser"), url, html)


def test_business_name_from_og_site_name():
    html = """
    <html><head>
      <meta property="og:site_name" content="Acme Corp">
      <title>Acme Corp | Home</title>
    </head><body></body></html>
    """
    assert _extract(html).business.name == "Acme Corp"


def test_business_name_falls_back_to_title():
    html = "<html><head><title>My Business - Home Page</title></head><body></body></html>"
    assert _extract(html).business.name == "My Business"


def test_contact_information():
    html = """
    <html><head><title>Test</title></head><body>
      <footer>
        <a href="tel:+15551234567">(555) 123-4567</a>
        <a href="mailto:info@example.com">info@example.com</a>
      </footer>
    </body></html>
    """
    business = _extract(html).business
    assert "555" in business.phone
    assert business.email == "info@example.com"


def test_address_from_footer_text():
    html = """
    <html><head><title>Test</title></head><body>
      <footer><p>Visit us at 123 Main Street, Springfield, IL 62704</p></footer>
    </body></html>
    """
    assert _extract(html).business.address == "123 Main Street, Springfield, IL 62704"


def test_hero_content():
    html = """
    <html><head><title>Test</title></head><body>
      <div class="hero">
        <h1>Welcome to Our Amazing Service</h1>
        <p>We help businesses grow with innovative solutions.</p>
      </div>
    </body></html>
    """
    content = _extract(html).content
    assert content.heroText == "Welcome to Our Amazing Service"
    assert content.heroSubtext == "We help businesses grow with innovative solutions."


def test_services_list():
    html = """
    <html><head><title>Test</title></head><body>
      <section class="services"><ul>
        <li>Web Design</li><li>SEO Optimization</li><li>Content Marketing</li>
      </ul></section>
    </body></html>
    """
    assert _extract(html).content.services == ["Web Design", "SEO Optimization", "Content Marketing"]


def test_testimonials():
    html = """
    <html><head><title>Test</title></head><body>
      <div class="testimonial">
        <p class="text">Great service! Highly recommend.</p>
        <span class="author">John Smith</span>
      </div>
    </body></html>
    """
    testimonials = _extract(html).content.testimonials
    assert len(testimonials) == 1
    assert "Great service" in testimonials[0].text
    assert testimonials[0].author == "John Smith"


def test_logo_url():
    html = """
    <html><head><title>Test</title></head><body>
      <header><div class="logo"><img src="/images/logo.png" alt="Company Logo"></div></header>
    </body></html>
    """
    assert _extract(html).assets.logo == "https://example.com/images/logo.png"


def test_images_are_absolute():
    html = """
    <html><head><title>Test</title></head><body>
      <img src="/images/hero.jpg" alt="Hero">
      <img src="https://cdn.example.com/photo.png" alt="Photo">
    </body></html>
    """
    images = _extract(html).assets.images
    assert "https://example.com/images/hero.jpg" in images
    assert "https://cdn.example.com/photo.png" in images


def test_seo_metadata():
    html = """
    <html><head>
      <title>Acme Corp | Professional Services</title>
      <meta name="description" content="Leading provider of professional services">
      <meta name="keywords" content="services, professional, acme">
      <meta property="og:image" content="https://example.com/og.jpg">
      <link rel="canonical" href="https://example.com/">
    </head><body></body></html>
    """
    seo = _extract(html).seo
    assert seo.title == "Acme Corp | Professional Services"
    assert seo.description == "Leading provider of professional services"
    assert seo.keywords == ["services", "professional", "acme"]
    assert seo.ogImage == "https://example.com/og.jpg"
    assert seo.canonicalUrl == "https://example.com/"


def test_social_links():
    html = """
    <html><head><title>Test</title></head><body>
      <footer>
        <a href="https://facebook.com/company">Facebook</a>
        <a href="https://twitter.com/company">Twitter</a>
        <a href="https://linkedin.com/company/test">LinkedIn</a>
        <a href="https://instagram.com/company">Instagram</a>
      </footer>
    </body></html>
    """
    social = _extract(html).social
    assert "facebook.com" in social.facebook
    assert "twitter.com" in social.twitter
    assert "linkedin.com" in social.linkedin
    assert "instagram.com" in social.instagram


def test_internal_links():
    html = """
    <html><head><title>Test</title></head><body>
      <nav>
        <a href="/">Home</a><a href="/about">About</a>
        <a href="/services">Services</a><a href="/contact">Contact</a>
        <a href="https://elsewhere.example/">Partner</a>
      </nav>
    </body></html>
    """
    assert _extract(html).pages[0].links == ["/", "/about", "/services", "/contact"]


def test_page_type():
    home = "<html><head><title>Test</title></head><body><h1>Welcome Home</h1></body></html>"
    assert _extract(home).pages[0].type == "home"

    about = "<html><head><title>About Us</title></head><body><h1>About Our Company</h1></body></html>"
    assert _extract(about, "https://example.com/about").pages[0].type == "about"


def test_empty_document_yields_empty_result():
    result = _extract("<html><head></head><body></body></html>")

    assert all(v is None for v in result.business.model_dump().values())
    assert result.content.heroText is None
    assert result.content.services == []
    assert result.assets.images == []
    assert result.assets.logo is None
    assert result.seo.title is None
    assert len(result.pages) == 1
    assert result.pages[0].path == "/"
    assert result.pages[0].content is None
