"""
Cars24 (cars24.com) catalog cards and detail pages.
"""

import re

from bs4 import BeautifulSoup, Tag

from ..config import OWNERS_MAX, OWNERS_MIN
from ..models import Listing
from .base import (
    SiteLayout,
    element_text,
    extract_card_listing,
    extract_detail_listing,
    find_layout_cards,
    url_slug_city,
)

# /buy-used-honda-city-2018-cars-mumbai-10589432/
CITY_IN_URL_RE = re.compile(r"-cars-([a-z]+(?:-[a-z]+)?)-\d+", re.I)
# Cars24 prints ownership as "Owner 1" / "1st Owner" in the detail chips
OWNER_CHIP_RE = re.compile(r"\bOwner\s*[:\-]?\s*(\d{1,2})\b", re.I)


def owner_chip(root: Tag, page_url: str) -> int | None:
    m = OWNER_CHIP_RE.search(element_text(root))
    if not m:
        return None
    n = int(m.group(1))
    return n if OWNERS_MIN <= n <= OWNERS_MAX else None


LAYOUT = SiteLayout(
    key="cars24",
    hosts=("cars24.com",),
    origin="https://www.cars24.com",
    card_selectors=("[data-testid='car-card']", ".carCard", "a[href*='/buy-used-'][href*='-cars-']"),
    title_selectors=("h3", "h2", ".carName", "[data-testid='car-name']"),
    price_selectors=("[data-testid='car-price']", ".price", "strong"),
    model_selectors=("[data-testid='car-variant']", ".variant"),
    city_selectors=("[data-testid='car-location']", ".location"),
    link_selectors=("a[href*='/buy-used-']", "a[href]"),
    detail_title_selectors=("h1", "[data-testid='car-title']"),
    detail_price_selectors=("[data-testid='car-price']", ".price", "[itemprop='price']"),
    detail_model_selectors=("[data-testid='car-variant']",),
    detail_city_selectors=("[data-testid='car-location']", ".location"),
    description_selectors=("[data-testid='car-description']", ".description"),
    gallery_selectors=("[data-testid='gallery']", ".gallery", ".slick-track", ".carousel"),
    feature_selectors=("[data-testid='features'] li", ".features li"),
    spec_selectors=("table", "[data-testid='specifications']"),
    default_owner="Cars24",
    extra_city=(url_slug_city(CITY_IN_URL_RE),),
    extra_owners=(owner_chip,),
)


def find_cards(soup: BeautifulSoup) -> list:
    return find_layout_cards(LAYOUT, soup)


def extract_card(card: Tag, base_url: str = LAYOUT.origin) -> Listing | None:
    return extract_card_listing(LAYOUT, card, base_url)


def extract_detail(soup: BeautifulSoup, url: str) -> Listing | None:
    return extract_detail_listing(LAYOUT, soup, url)
