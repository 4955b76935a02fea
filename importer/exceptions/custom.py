class ImporterError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class InvalidUrlError(ImporterError):
    """URL rejected before any network call (bad scheme, unparseable, private host)."""


class UnsupportedContentError(InvalidUrlError):
    """URL points at a downloadable file rather than a web page."""


class FetchError(ImporterError):
    """Non-2xx status, non-HTML response, timeout or transport failure."""


class RenderFallbackError(ImporterError):
    """Headless browser render failed. Always non-fatal."""


class ExtractionError(ImporterError):
    pass
