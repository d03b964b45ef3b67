"""
CarDekho (cardekho.com) used-car catalog cards and detail pages.
"""

import re

from bs4 import BeautifulSoup, Tag

from ..models import Listing
from .base import SiteLayout, extract_card_listing, extract_detail_listing, find_layout_cards, url_slug_city

# Detail URLs carry the city before the ad id: .../used-jeep-compass-...-cars-Pune_eef3cf20.htm
CITY_IN_URL_RE = re.compile(r"cars?-([A-Za-z]+)(?:_|\.)")

LAYOUT = SiteLayout(
    key="cardekho",
    hosts=("cardekho.com",),
    origin="https://www.cardekho.com",
    card_selectors=(".usedCarTile", ".gsc_col-md-12 .card", ".gsc_col"),
    title_selectors=("h3 a", "h3", ".title a", ".title", "a[title]"),
    price_selectors=(".Price", ".price", "[data-price]"),
    model_selectors=(".variant", ".modelName"),
    city_selectors=(".cityName", ".dotlist .location", ".location"),
    link_selectors=("h3 a[href]", "a[href*='used-car-details']", "a[href]"),
    detail_title_selectors=("h1", ".car-title", ".heading"),
    detail_price_selectors=(".price-section", ".priceInfo", "[itemprop='price']", ".price", ".amount", "[data-price]"),
    detail_model_selectors=(".variant-name", ".modelName"),
    detail_city_selectors=(".cityName", ".location", "[itemprop='addressLocality']"),
    detail_owner_selectors=(".sellerName", ".seller-name", ".dealerName"),
    description_selectors=(".description", ".car-description", "[data-description]"),
    gallery_selectors=(".gallery", ".image-gallery", ".car-images", ".slider", ".carousel", "[data-gallery]", ".photos"),
    feature_selectors=(".features li", ".feature-list li", ".car-features li", ".highlights li"),
    spec_selectors=("table", ".specs-table", ".specifications"),
    default_owner="CarDekho Seller",
    extra_city=(url_slug_city(CITY_IN_URL_RE),),
)


def find_cards(soup: BeautifulSoup) -> list:
    return find_layout_cards(LAYOUT, soup)


def extract_card(card: Tag, base_url: str = LAYOUT.origin) -> Listing | None:
    return extract_card_listing(LAYOUT, card, base_url)


def extract_detail(soup: BeautifulSoup, url: str) -> Listing | None:
    return extract_detail_listing(LAYOUT, soup, url)
