"""
Site-agnostic fallback extractor.

Broad selector lists, plus a document-wide text pass when a page holds a single record. When no known
card selector matches, cards are discovered by walking up from links that wrap an image to the
smallest block that carries exactly one price.
"""

import re
from dataclasses import replace

from bs4 import BeautifulSoup, Tag

from ..models import Listing
from ..page_type import CARD_SELECTORS
from .base import (
    SiteLayout,
    element_text,
    extract_card_listing,
    extract_detail_listing,
    find_layout_cards,
)

BLOCK_TAGS = ["div", "article", "section", "li"]
MAX_BLOCK_TEXT = 2000
MIN_BLOCK_TEXT = 20
PRICE_TOKEN_RE = re.compile(r"(?:₹|\bRs\.?|\bINR)\s*\d", re.I)

LAYOUT = SiteLayout(
    key="generic",
    card_selectors=CARD_SELECTORS,
    title_selectors=(
        "h2", "h3", "h4", ".car-title", ".title", ".car-name", ".name",
        "[itemprop='name']", "a[title]", "strong",
    ),
    price_selectors=(
        ".price", ".car-price", ".listing-price", "[itemprop='price']", "[data-price]", ".amount",
    ),
    model_selectors=(".car-model", ".model-name", ".model", "[data-model]"),
    city_selectors=(".city", ".location", ".car-location", "[itemprop='addressLocality']"),
    owner_selectors=(".owner-name", ".seller-name"),
    detail_title_selectors=(
        "h1.car-title", "h1.listing-title", "h1[itemprop='name']", ".car-name", "h1", ".car-title", ".heading",
    ),
    detail_price_selectors=(
        ".price-section", "[itemprop='price']", ".price", ".car-price", ".listing-price",
        ".priceInfo", ".amount", "[data-price]",
    ),
    detail_model_selectors=(".car-model", ".model-name", "[data-model]"),
    detail_city_selectors=(".city", ".location", ".car-location", "[itemprop='addressLocality']"),
    detail_owner_selectors=(".owner-name", ".seller-name", "[itemprop='seller']"),
    description_selectors=(".description", ".car-description", "[data-description]", "[itemprop='description']"),
    gallery_selectors=(
        ".gallery", ".image-gallery", ".car-gallery", ".photo-gallery", ".car-images", ".image-carousel",
        ".carousel", ".slider", ".swiper-slide", "[data-gallery]", ".photos",
    ),
    feature_selectors=(
        ".features li", ".feature-list li", ".amenities li", ".car-features li", ".highlights li",
        "[data-features] li",
    ),
    spec_selectors=("table", ".specs-table", ".specifications"),
    scan_document=False,
)

# One record on the page: the whole body is fair game for price/year/km/owners/city
SINGLE_CARD_LAYOUT = replace(LAYOUT, scan_document=True)


def _price_tokens(text: str) -> int:
    return len(PRICE_TOKEN_RE.findall(text))


def _block_for_link(a: Tag, soup: BeautifulSoup) -> Tag | None:
    """Smallest enclosing block with exactly one price; else the first enclosing block with any price."""
    parent = a.find_parent(BLOCK_TAGS)
    candidate = None
    while parent is not None and parent is not soup:
        text = element_text(parent)
        if len(text) > MAX_BLOCK_TEXT:
            break
        prices = _price_tokens(text)
        if prices and candidate is None:
            candidate = parent
        if prices == 1 and len(text) >= MIN_BLOCK_TEXT:
            return parent
        if prices > 1:
            break
        parent = parent.find_parent(BLOCK_TAGS)
    return candidate


def discover_cards(soup: BeautifulSoup) -> list:
    """Repeated blocks built around image links, for pages with no recognizable card markup."""
    blocks: list = []
    seen: set[int] = set()
    for a in soup.find_all("a", href=True):
        if a.find("img") is None:
            continue
        block = _block_for_link(a, soup)
        if block is None or id(block) in seen:
            continue
        # Nested blocks: keep the outermost one already collected
        if any(p is b for p in block.parents for b in blocks):
            continue
        seen.add(id(block))
        blocks.append(block)
    return blocks


def find_cards(soup: BeautifulSoup) -> list:
    cards = find_layout_cards(LAYOUT, soup)
    if cards:
        return cards
    return discover_cards(soup)


def extract_card(card: Tag, base_url: str, single: bool = False) -> Listing | None:
    layout = SINGLE_CARD_LAYOUT if single else LAYOUT
    return extract_card_listing(layout, card, base_url)


def extract_detail(soup: BeautifulSoup, url: str) -> Listing | None:
    return extract_detail_listing(LAYOUT, soup, url)
