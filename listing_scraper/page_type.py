"""
Catalog vs detail page detection.

URL patterns are trusted first (a detail URL beats a catalog URL), then the markup is inspected for
repeated card elements and gallery layouts.
"""

import re

from bs4 import BeautifulSoup

from .models import PageType

# Detail pages: one listing, usually a slug followed by a numeric id
DETAIL_URL_PATTERNS = (
    re.compile(r"/used-car-details/", re.I),
    re.compile(r"/(?:buy-)?used-[^/?#]+/\d{3,}(?:[/?#]|$)", re.I),
    re.compile(r"/cars?/[^/?#]+/\d{3,}(?:[/?#]|$)", re.I),
    re.compile(r"/(?:listing|listings|vehicle|vehicles|ad|ads|item)/\d+(?:[/?#]|$)", re.I),
    re.compile(r"/[^/?#]*-(?:iid-)?\d{4,}\.html?(?:[?#]|$)", re.I),
    re.compile(r"/[^/?#]+-\d{5,}/?(?:[?#]|$)", re.I),
)

# Catalog pages: search results and browse listings
CATALOG_URL_PATTERNS = (
    re.compile(r"/used-cars(?:[+/?#\-_]|$)", re.I),
    re.compile(r"/buy-used-cars?(?:[/?#\-_]|$)", re.I),
    re.compile(r"/(?:second-hand|pre-owned)-cars?(?:[/?#\-_]|$)", re.I),
    re.compile(r"/search(?:[/?#\-_]|$)", re.I),
    re.compile(r"/browse(?:[/?#\-_]|$)", re.I),
    re.compile(r"/listings/?(?:[?#]|$)", re.I),
    re.compile(r"/cars-for-sale(?:[/?#\-_]|$)", re.I),
    re.compile(r"/cars_c\d+", re.I),
    re.compile(r"used-cars\+in\+", re.I),
)

# Repeated elements that usually hold one catalog entry each
CARD_SELECTORS = (
    ".car-card",
    ".listing-card",
    ".vehicle-card",
    ".car-item",
    ".listing-item",
    ".vehicle-item",
    ".used-car",
    ".gsc_col",
    ".usedCarTile",
    "[data-car]",
    "[data-vehicle-id]",
    "[data-aut-id='itemBox']",
    "li[data-listing-id]",
)

GALLERY_SELECTORS = (
    ".gallery",
    ".image-gallery",
    ".car-gallery",
    ".photo-gallery",
    ".image-carousel",
    ".carousel",
    ".slider",
    ".swiper",
    "[data-gallery]",
)
GALLERY_MIN_IMAGES = 3


def matches_any(url: str, patterns) -> bool:
    return any(p.search(url) for p in patterns)


def is_detail_url(url: str) -> bool:
    return matches_any(url or "", DETAIL_URL_PATTERNS)


def is_catalog_url(url: str) -> bool:
    return matches_any(url or "", CATALOG_URL_PATTERNS)


def card_count(soup: BeautifulSoup, selectors=CARD_SELECTORS) -> int:
    """Largest number of elements matched by any single card selector."""
    best = 0
    for sel in selectors:
        n = len(soup.select(sel))
        if n > best:
            best = n
    return best


def find_cards(soup: BeautifulSoup, selectors=CARD_SELECTORS) -> list:
    """Elements of the card selector with the most matches (first selector wins ties)."""
    best: list = []
    for sel in selectors:
        found = soup.select(sel)
        if len(found) > len(best):
            best = found
    return best


def has_detail_layout(soup: BeautifulSoup) -> bool:
    """Gallery/carousel container, or a single container holding at least three images."""
    for sel in GALLERY_SELECTORS:
        if soup.select_one(sel) is not None:
            return True
    for container in soup.find_all(["div", "section", "ul", "figure"]):
        if len(container.find_all("img", recursive=False)) >= GALLERY_MIN_IMAGES:
            return True
    return False


def classify(url: str, soup: BeautifulSoup) -> PageType:
    """CATALOG / DETAIL / UNKNOWN for a page. Pure and deterministic."""
    # 1) explicit URL patterns, detail first
    if is_detail_url(url):
        return PageType.DETAIL
    if is_catalog_url(url):
        return PageType.CATALOG

    # 2) structure
    cards = card_count(soup)
    if cards > 1:
        return PageType.CATALOG
    if has_detail_layout(soup):
        return PageType.DETAIL
    if cards == 1:
        return PageType.DETAIL
    return PageType.UNKNOWN
