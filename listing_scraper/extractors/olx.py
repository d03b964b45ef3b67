"""
OLX India (olx.in) car listings. OLX marks almost every field with a data-aut-id attribute.
"""

from bs4 import BeautifulSoup, Tag

from ..models import Listing
from ..normalizers import extract_ownership_count
from .base import SiteLayout, element_text, extract_card_listing, extract_detail_listing, find_layout_cards


def owners_field(root: Tag, page_url: str) -> int | None:
    """Detail pages list ownership as a bare ordinal ("1st") under value_owners."""
    el = root.select_one("[data-aut-id='value_owners'], [data-aut-id='value_first_owner']")
    if el is None:
        return None
    return extract_ownership_count(element_text(el) + " owner")


LAYOUT = SiteLayout(
    key="olx",
    hosts=("olx.in",),
    origin="https://www.olx.in",
    card_selectors=("li[data-aut-id='itemBox']", "[data-aut-id='itemBox']"),
    title_selectors=("[data-aut-id='itemTitle']", "span[title]", "a[title]"),
    price_selectors=("[data-aut-id='itemPrice']",),
    city_selectors=("[data-aut-id='item-location']",),
    link_selectors=("a[href*='/item/']", "a[href]"),
    detail_title_selectors=("h1[data-aut-id='itemTitle']", "[data-aut-id='itemTitle']", "h1"),
    detail_price_selectors=("[data-aut-id='itemPrice']",),
    detail_city_selectors=("[data-aut-id='itemLocation']", "[data-aut-id='item-location']"),
    detail_owner_selectors=("[data-aut-id='profileCard'] .name", "[data-aut-id='profileCard'] a"),
    description_selectors=("[data-aut-id='itemDescriptionContent']", "[data-aut-id='itemDescription']"),
    gallery_selectors=("[data-aut-id='imageGallery']", ".slick-track", "figure"),
    feature_selectors=("[data-aut-id='itemFeatures'] li",),
    spec_selectors=("table",),
    default_owner="OLX Seller",
    extra_owners=(owners_field,),
)


def find_cards(soup: BeautifulSoup) -> list:
    return find_layout_cards(LAYOUT, soup)


def extract_card(card: Tag, base_url: str = LAYOUT.origin) -> Listing | None:
    return extract_card_listing(LAYOUT, card, base_url)


def extract_detail(soup: BeautifulSoup, url: str) -> Listing | None:
    return extract_detail_listing(LAYOUT, soup, url)
