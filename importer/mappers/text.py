import re

_WHITESPACE_RE = re.compile(r"\s+")

_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")

# Asset filenames like logo@2x.png look like emails to the regex above
_ASSET_SUFFIXES = (".png", ".jpg", ".jpeg", ".gif", ".webp", ".svg", ".avif")

# Ordered from most to least specific; only matches with 10+ digits count
_PHONE_PATTERNS = (
    re.compile(r"\+?1?\s*\(?[0-9]{3}\)?[-.\s]?[0-9]{3}[-.\s]?[0-9]{4}"),
    re.compile(r"\+\d{1,3}[\s.\-]?(?:\(?\d{1,4}\)?[\s.\-]?){2,4}\d{2,4}"),
)

_STREET_SUFFIX = (
    r"(?:street|st|avenue|ave|road|rd|boulevard|blvd|drive|dr|lane|ln|way|court|ct|place|pl|parkway|pkwy|highway|hwy)"
)

# "123 Main Street, Springfield, IL 62704"
_STREET_ADDRESS_RE = re.compile(
    r"\d{1,6}\s+[\w .'\-]{1,60}?\b" + _STREET_SUFFIX + r"\b\.?"
    r"(?:[,\s]+(?:suite|ste|unit|#)\s*[\w\-]+)?"
    r"[,\s]+[A-Za-z][\w .'\-]{1,40}?,?\s+[A-Za-z]{2}\s+\d{5}(?:-\d{4})?",
    re.IGNORECASE,
)

# "Springfield, IL 62704"
_CITY_STATE_ZIP_RE = re.compile(r"\b[A-Z][A-Za-z .'\-]{1,40},\s*[A-Z]{2}\s+\d{5}(?:-\d{4})?\b")


def clean_text(value: str | None) -> str | None:
    """Collapse runs of whitespace and strip. Empty results become None."""
    if not value:
        return None
    cleaned = _WHITESPACE_RE.sub(" ", value).strip()
    return cleaned or None


def digits_only(value: str) -> str:
    return "".join(c for c in value if c.isdigit())


def extract_email(text: str | None) -> str | None:
    if not text:
        return None
    for match in _EMAIL_RE.finditer(text):
        email = match.group(0).rstrip(".")
        if email.lower().endswith(_ASSET_SUFFIXES):
            continue
        return email
    return None


def extract_phone(text: str | None) -> str | None:
    """Return the first phone-looking substring with at least 10 digits."""
    if not text:
        return None
    for pattern in _PHONE_PATTERNS:
        for match in pattern.finditer(text):
            if len(digits_only(match.group(0))) >= 10:
                return match.group(0).strip()
    return None


def extract_address(text: str | None) -> str | None:
    if not text:
        return None
    for pattern in (_STREET_ADDRESS_RE, _CITY_STATE_ZIP_RE):
        match = pattern.search(text)
        if match:
            return clean_text(match.group(0))
    return None
