"""
CarWale (carwale.com) used-car catalog cards and detail pages.
"""

from bs4 import BeautifulSoup, Tag

from ..models import Listing
from ..normalizers import parse_price
from .base import SiteLayout, extract_card_listing, extract_detail_listing, find_layout_cards


def price_attribute(root: Tag, page_url: str) -> int | None:
    """CarWale cards carry the raw rupee price on the card element itself."""
    value = root.get("data-price") or root.get("data-car-price")
    if not value:
        return None
    return parse_price(str(value)) or None


LAYOUT = SiteLayout(
    key="carwale",
    hosts=("carwale.com",),
    origin="https://www.carwale.com",
    card_selectors=("[data-testid='used-car-card']", "li.stock-card", ".card-detail-block", "[data-car]"),
    title_selectors=("h3", "h2", ".card-title", "a[title]"),
    price_selectors=("[data-testid='price']", ".price", ".o-price"),
    model_selectors=(".version-name",),
    city_selectors=("[data-testid='city']", ".city", ".location"),
    link_selectors=("a[href*='/used/']", "a[href]"),
    detail_title_selectors=("h1", ".car-title"),
    detail_price_selectors=("[data-testid='price']", ".price", "[itemprop='price']"),
    detail_model_selectors=(".version-name",),
    detail_city_selectors=("[data-testid='city']", ".city", ".location"),
    detail_owner_selectors=(".seller-name", ".dealer-name"),
    description_selectors=(".seller-comments", ".description"),
    gallery_selectors=(".gallery", ".image-carousel", ".swiper-wrapper", ".carousel"),
    feature_selectors=(".features li", ".feature-list li"),
    spec_selectors=("table", ".specifications"),
    default_owner="CarWale Seller",
    extra_price=(price_attribute,),
)


def find_cards(soup: BeautifulSoup) -> list:
    return find_layout_cards(LAYOUT, soup)


def extract_card(card: Tag, base_url: str = LAYOUT.origin) -> Listing | None:
    return extract_card_listing(LAYOUT, card, base_url)


def extract_detail(soup: BeautifulSoup, url: str) -> Listing | None:
    return extract_detail_listing(LAYOUT, soup, url)
