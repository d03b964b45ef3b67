"""
Car listing extraction engine: classify a third-party page as a catalog or a detail page and recover
normalized car records from its static markup.
"""

from .errors import ScrapeError
from .models import ExtractionOutcome, Failure, Listing, PageType, Success
from .page_type import classify
from .scraper import ListingScraper, extract, extract_catalog, extract_detail

__version__ = "0.1.0"

__all__ = [
    "ExtractionOutcome",
    "Failure",
    "Listing",
    "ListingScraper",
    "PageType",
    "ScrapeError",
    "Success",
    "classify",
    "extract",
    "extract_catalog",
    "extract_detail",
]
