"""Catalog / detail / unknown classification."""
import pytest
from bs4 import BeautifulSoup

from conftest import DETAIL_HTML, catalog_page
from listing_scraper.models import PageType
from listing_scraper.page_type import card_count, classify, find_cards, is_catalog_url, is_detail_url

NEUTRAL_URL = "https://www.example.com/page"
EMPTY = BeautifulSoup("<html><body></body></html>", "html.parser")


@pytest.mark.parametrize("url", [
    "https://www.cardekho.com/used-car-details/used-maruti-swift-vxi-2019-cars-Delhi_abc123.htm",
    "https://www.cars24.com/buy-used-honda-city-2018-cars-mumbai-10589432/",
    "https://www.olx.in/item/maruti-suzuki-baleno-delta-iid-1734567890",
    "https://www.example.com/listing/12345",
    "https://www.example.com/vehicle/987",
    "https://www.example.com/car/honda-city-vx/20451",
    "https://www.example.com/used-honda-city/55512",
    "https://www.example.com/swift-dzire-vxi-2019-4455.html",
])
def test_detail_urls(url):
    assert is_detail_url(url)
    assert classify(url, EMPTY) is PageType.DETAIL


@pytest.mark.parametrize("url", [
    "https://www.cardekho.com/used-cars+in+mumbai",
    "https://www.cars24.com/buy-used-cars-mumbai/",
    "https://www.example.com/search?q=swift",
    "https://www.example.com/browse/hatchbacks",
    "https://www.example.com/cars-for-sale",
    "https://www.example.com/used-cars",
])
def test_catalog_urls(url):
    assert is_catalog_url(url)
    assert not is_detail_url(url)
    assert classify(url, EMPTY) is PageType.CATALOG


def test_detail_url_beats_catalog_url():
    url = "https://www.example.com/used-cars/listing/123456"
    assert is_catalog_url(url) and is_detail_url(url)
    assert classify(url, EMPTY) is PageType.DETAIL


def test_url_pattern_beats_structure():
    soup = BeautifulSoup(catalog_page(5), "html.parser")
    assert classify("https://www.example.com/listing/12345", soup) is PageType.DETAIL


def test_repeated_cards_mean_catalog():
    soup = BeautifulSoup(catalog_page(3), "html.parser")
    assert card_count(soup) == 3
    assert len(find_cards(soup)) == 3
    assert classify(NEUTRAL_URL, soup) is PageType.CATALOG


def test_gallery_means_detail():
    soup = BeautifulSoup(DETAIL_HTML, "html.parser")
    assert classify(NEUTRAL_URL, soup) is PageType.DETAIL


def test_three_images_in_one_container_mean_detail():
    soup = BeautifulSoup(
        '<div><img src="/a.jpg"><img src="/b.jpg"><img src="/c.jpg"></div>', "html.parser"
    )
    assert classify(NEUTRAL_URL, soup) is PageType.DETAIL


def test_single_card_means_detail():
    soup = BeautifulSoup(catalog_page(1), "html.parser")
    assert classify(NEUTRAL_URL, soup) is PageType.DETAIL


def test_nothing_recognizable_is_unknown():
    soup = BeautifulSoup("<html><body><p>About us</p></body></html>", "html.parser")
    assert classify(NEUTRAL_URL, soup) is PageType.UNKNOWN
    assert classify(NEUTRAL_URL, soup) is classify(NEUTRAL_URL, soup)
