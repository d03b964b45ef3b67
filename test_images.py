"""Image candidate filter, URL resolution and collection."""
from bs4 import BeautifulSoup

from listing_scraper.images import (
    candidate_sources,
    collect_images,
    first_srcset_url,
    image_from_element,
    is_content_image,
    resolve_url,
    site_origin,
)

ORIGIN = "https://www.example.com"


def img(markup: str):
    return BeautifulSoup(markup, "html.parser").img


def test_svg_and_logo_always_rejected():
    assert not is_content_image("https://cdn.example.com/img/swift-front.svg")
    assert not is_content_image("https://cdn.example.com/assets/site-logo.png")
    assert not is_content_image("https://logo.clearbit.com/cardekho.com")
    assert not is_content_image("https://cdn.example.com/photos/car.jpg?type=logo")
    assert not is_content_image("https://cdn.example.com/photos/car.svg?w=800")
    # other attributes cannot rescue them
    assert not is_content_image("https://cdn.example.com/cars/logo-swift.jpg", img('<img alt="Maruti Swift" width="800">'))


def test_photo_accepted():
    assert is_content_image("https://cdn.example.com/photos/swift-front.jpg")
    assert is_content_image("https://cdn.example.com/uploads/creta.webp", img('<img alt="Hyundai Creta">'))


def test_decorative_markers_in_alt_class_and_size():
    url = "https://cdn.example.com/photos/a1.jpg"
    assert not is_content_image(url, img('<img alt="Company logo">'))
    assert not is_content_image(url, img('<img class="nav-icon">'))
    assert not is_content_image(url, img('<img width="1" height="1">'))
    assert not is_content_image("https://cdn.example.com/ads/banner-300.jpg")


def test_short_tokens_match_whole_words_only():
    # "ad" must not reject "upload" or "road"
    assert is_content_image("https://cdn.example.com/upload/road-trip-car.jpg")


def test_relative_and_protocol_relative_urls():
    assert resolve_url("//cdn.example.com/a.jpg", ORIGIN) == "https://cdn.example.com/a.jpg"
    assert resolve_url("/photos/a.jpg", ORIGIN) == "https://www.example.com/photos/a.jpg"
    assert resolve_url("photos/a.jpg", ORIGIN) == "https://www.example.com/photos/a.jpg"
    assert resolve_url("data:image/png;base64,AAAA", ORIGIN) is None
    assert resolve_url("/photos/a.jpg", "") is None


def test_site_origin():
    assert site_origin("https://www.cardekho.com/used-cars+in+mumbai") == "https://www.cardekho.com"
    assert site_origin("not a url") == ""


def test_lazy_placeholder_falls_through_to_data_src():
    el = img('<img src="/static/placeholder.png" data-src="/photos/car1.jpg">')
    assert image_from_element(el, ORIGIN) == "https://www.example.com/photos/car1.jpg"


def test_srcset_first_entry():
    assert first_srcset_url("/photos/a-400.jpg 400w, /photos/a-800.jpg 800w") == "/photos/a-400.jpg"
    el = img('<img srcset="/photos/a-400.jpg 400w, /photos/a-800.jpg 800w">')
    assert candidate_sources(el) == ["/photos/a-400.jpg"]
    assert image_from_element(el, ORIGIN) == "https://www.example.com/photos/a-400.jpg"


def test_boolean_lazy_attributes_are_not_sources():
    el = img('<img data-lazy="true" src="/photos/b.jpg">')
    assert candidate_sources(el) == ["/photos/b.jpg"]


def test_collect_images_dedupes_and_caps():
    soup = BeautifulSoup(
        "".join(f'<img src="/photos/car{i % 6}.jpg">' for i in range(20)) + '<img src="/img/logo.png">',
        "html.parser",
    )
    images = collect_images(soup.find_all("img"), ORIGIN, limit=4)
    assert images == [f"https://www.example.com/photos/car{i}.jpg" for i in range(4)]
    everything = collect_images(soup.find_all("img"), ORIGIN, limit=15)
    assert len(everything) == 6
