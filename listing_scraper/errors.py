"""
Failure taxonomy for the extraction engine.

Fetch and parse code raises these; ListingScraper catches them at its boundary and turns each one
into a Failure outcome whose kind is the exception's ``kind``.
"""

from .config import MAX_RESPONSE_BYTES, REQUEST_TIMEOUT


class ScrapeError(Exception):
    kind = "error"


class InvalidURL(ScrapeError):
    kind = "invalid_url"

    def __init__(self, url: str | None = None):
        self.url = url
        super().__init__("Invalid URL provided")


class FetchTimeout(ScrapeError):
    kind = "timeout"

    def __init__(self, seconds: int = REQUEST_TIMEOUT):
        self.seconds = seconds
        super().__init__(f"Request timed out after {seconds} seconds")


class NetworkUnreachable(ScrapeError):
    kind = "network"

    def __init__(self, detail: str = ""):
        msg = "Failed to fetch the URL"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class UpstreamHTTPError(ScrapeError):
    kind = "http_error"

    def __init__(self, status_code: int, reason: str = ""):
        self.status_code = status_code
        if status_code == 403:
            self.kind = "blocked"
            msg = (
                "Failed to fetch URL: 403 Forbidden. The site is blocking automated requests; "
                "add this listing manually instead."
            )
        else:
            msg = f"Failed to fetch URL: {status_code} {reason}".strip()
        super().__init__(msg)


class OversizedResponse(ScrapeError):
    kind = "oversized"

    def __init__(self, size: int | None = None, limit: int = MAX_RESPONSE_BYTES):
        self.size = size
        self.limit = limit
        mb = limit // (1024 * 1024)
        super().__init__(f"Page is too large to process (limit {mb} MB)")


class UnparseableMarkup(ScrapeError):
    kind = "unparseable"

    def __init__(self, detail: str = ""):
        msg = "Could not parse the page markup"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)


class NoMatchFound(ScrapeError):
    kind = "no_match"

    def __init__(self, editorial: bool = False, detail: bool = False):
        self.editorial = editorial
        if editorial:
            self.kind = "editorial"
            msg = (
                "This looks like an editorial page (reviews, news or 'best of' lists), "
                "not a car listing page. Failed to extract car listings."
            )
        elif detail:
            msg = "Failed to extract required car data (title, price, images) from the page. Page structure not supported."
        else:
            msg = "No car listings found. Page structure not supported."
        super().__init__(msg)
