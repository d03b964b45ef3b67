"""
Shared extraction template for catalog cards and detail pages.

Each field is recovered by an ordered list of strategies; a strategy takes (root, page_url) and
returns a value or None, and the first non-empty value wins. Site modules describe themselves with a
SiteLayout (selector lists plus optional extra strategies) and call extract_card_listing /
extract_detail_listing. Both return None when the record would fail the completeness gate
(title, model, price > 0, at least one image).
"""

import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional

from bs4 import BeautifulSoup, Tag

from ..config import (
    CITY_MAX_LEN,
    DEFAULT_CITY,
    DEFAULT_OWNER_NAME,
    MAX_CARD_IMAGES,
    MAX_DETAIL_IMAGES,
)
from ..images import collect_images, is_content_image, resolve_url, site_origin
from ..models import Listing
from ..normalizers import (
    clean_text,
    current_year,
    extract_body_type,
    extract_distance,
    extract_fuel_type,
    extract_labelled_city,
    extract_ownership_count,
    extract_transmission,
    extract_year,
    find_currency_price,
    is_noise_title,
    model_from_title,
    normalize_city,
    parse_price,
)

logger = logging.getLogger(__name__)

Strategy = Callable[[Tag, str], Optional[object]]

PRICE_ATTRS = ("content", "data-price", "value")
MAX_FEATURES = 40
MAX_SPECIFICATIONS = 60


@dataclass
class SiteLayout:
    """Selectors and extra strategies for one external site (or the generic fallback)."""

    key: str
    hosts: tuple = ()
    origin: str = ""

    # Catalog cards
    card_selectors: tuple = ()
    title_selectors: tuple = ("h2", "h3", "h4", "a[title]")
    price_selectors: tuple = (".price", "[itemprop='price']")
    model_selectors: tuple = ()
    city_selectors: tuple = (".city", ".location")
    owner_selectors: tuple = ()
    link_selectors: tuple = ("a[href]",)

    # Detail pages
    detail_title_selectors: tuple = ("h1",)
    detail_price_selectors: tuple = (".price", "[itemprop='price']")
    detail_model_selectors: tuple = ()
    detail_city_selectors: tuple = (".city", ".location", "[itemprop='addressLocality']")
    detail_owner_selectors: tuple = (".seller-name", ".owner-name")
    description_selectors: tuple = (".description", "[itemprop='description']")
    gallery_selectors: tuple = (".gallery", ".carousel", ".slider")
    feature_selectors: tuple = (".features li",)
    spec_selectors: tuple = ("table",)

    default_owner: str = DEFAULT_OWNER_NAME

    # Site-specific strategies, tried before the selector-driven ones
    extra_city: tuple = ()
    extra_price: tuple = ()
    extra_owners: tuple = ()
    # Try the whole document body as a last resort (generic fallback only)
    scan_document: bool = False


def first_match(strategies, *args):
    """Run strategies in order; return the first truthy result (None if none)."""
    for strategy in strategies:
        value = strategy(*args)
        if value:
            return value
    return None


def element_text(el: Tag | None) -> str:
    if el is None:
        return ""
    return clean_text(el.get_text(" ", strip=True))


def _select(root: Tag, selector: str) -> list:
    try:
        return root.select(selector)
    except ValueError:
        # soupsieve rejects malformed selectors; treat them as "no match"
        logger.debug(f"Bad selector skipped: {selector}")
        return []


# --- Strategy builders ---

def selector_text(selectors, max_len: int | None = None) -> Strategy:
    """First non-empty element text among the selectors (shorter than max_len if given)."""
    def strategy(root, page_url):
        for sel in selectors:
            for el in _select(root, sel):
                t = element_text(el)
                if t and (max_len is None or len(t) < max_len):
                    return t
        return None
    return strategy


def selector_price(selectors) -> Strategy:
    """Price from the first matching element's price attribute or text."""
    def strategy(root, page_url):
        for sel in selectors:
            for el in _select(root, sel):
                for attr in PRICE_ATTRS:
                    value = el.get(attr)
                    if value:
                        p = parse_price(str(value))
                        if p > 0:
                            return p
                p = parse_price(element_text(el))
                if p > 0:
                    return p
        return None
    return strategy


def selector_city(selectors) -> Strategy:
    """First short location text, reduced to its first comma-separated segment."""
    def strategy(root, page_url):
        for sel in selectors:
            for el in _select(root, sel):
                t = element_text(el)
                if t and len(t) < CITY_MAX_LEN:
                    city = normalize_city(t)
                    if city:
                        return city
        return None
    return strategy


def text_price(root, page_url):
    return find_currency_price(element_text(root)) or None


def text_city(root, page_url):
    return extract_labelled_city(root.get_text("\n", strip=True))


def url_slug_city(pattern: re.Pattern) -> Strategy:
    """City captured from the page (or card link) URL by a site-specific pattern."""
    def strategy(root, page_url):
        m = pattern.search(page_url or "")
        if not m:
            return None
        return normalize_city(m.group(1).replace("-", " ").title())
    return strategy


def pick_title(root: Tag, selectors) -> str | None:
    """
    Title from the first selector that yields text.

    If that first candidate reads like an article teaser ("Best cars under 5 lakh", reviews, upcoming
    launches) or is over 100 characters, the element is not a listing and no title is returned.
    """
    for sel in selectors:
        for el in _select(root, sel):
            t = element_text(el)
            if not t and el.name == "a":
                t = clean_text(el.get("title"))
            if not t:
                continue
            if is_noise_title(t):
                logger.debug(f"Rejected title (noise): {t[:80]}")
                return None
            return t
    return None


def _document_body(root: Tag) -> Tag:
    doc = root
    while doc.parent is not None:
        doc = doc.parent
    return doc.body or doc


# --- Field helpers ---

def pick_price(layout: SiteLayout, root: Tag, page_url: str, selectors) -> int:
    strategies = list(layout.extra_price) + [selector_price(selectors), text_price]
    price = first_match(strategies, root, page_url)
    return int(price) if price else 0


def pick_year(text: str) -> int:
    return extract_year(text) or current_year()


def pick_distance(text: str) -> int:
    km = extract_distance(text)
    return km if km is not None else 0


def pick_owners(layout: SiteLayout, root: Tag, page_url: str, text: str) -> int:
    n = first_match(list(layout.extra_owners), root, page_url)
    if n:
        return int(n)
    return extract_ownership_count(text) or 1


def pick_city(layout: SiteLayout, root: Tag, page_url: str, selectors) -> str:
    strategies = list(layout.extra_city) + [selector_city(selectors), text_city]
    return first_match(strategies, root, page_url) or DEFAULT_CITY


def pick_model(root: Tag, page_url: str, selectors, title: str) -> str:
    model = first_match([selector_text(selectors, max_len=80)], root, page_url)
    return model or model_from_title(title)


def card_link(layout: SiteLayout, card: Tag, base_url: str) -> str | None:
    """Absolute URL of the card's own listing page, if the card links to one."""
    for sel in layout.link_selectors:
        for a in _select(card, sel):
            href = (a.get("href") or "").strip()
            if not href or href.startswith("#") or href.startswith("javascript:"):
                continue
            return resolve_url(href, layout.origin or site_origin(base_url))
    if card.name == "a" and card.get("href"):
        return resolve_url(card["href"], layout.origin or site_origin(base_url))
    return None


def gallery_images(layout: SiteLayout, soup: Tag, origin: str, limit: int) -> list[str]:
    """Images from gallery containers first, then every image on the page, then og:image."""
    seen: set[str] = set()
    for sel in layout.gallery_selectors:
        imgs = []
        for container in _select(soup, sel):
            imgs.extend(container.find_all("img"))
        images = collect_images(imgs, origin, limit, seen)
        if images:
            return images
    images = collect_images(soup.find_all("img"), origin, limit, seen)
    if images:
        return images
    for meta in _select(soup, "meta[property='og:image'], meta[name='og:image']"):
        url = resolve_url(meta.get("content"), origin)
        if url and is_content_image(url):
            return [url]
    return []


def extract_features(soup: Tag, selectors) -> list[str]:
    features: list[str] = []
    for sel in selectors:
        for el in _select(soup, sel):
            t = element_text(el)
            if 3 < len(t) < 100 and t not in features:
                features.append(t)
                if len(features) >= MAX_FEATURES:
                    return features
    return features


def extract_specifications(soup: Tag, selectors) -> dict[str, str]:
    """Key/value pairs from two-cell table rows and definition lists."""
    specs: dict[str, str] = {}
    for sel in selectors:
        for table in _select(soup, sel):
            for row in table.find_all("tr"):
                cells = row.find_all(["td", "th"])
                if len(cells) < 2:
                    continue
                key, value = element_text(cells[0]), element_text(cells[1])
                if key and value and len(key) < 50 and len(value) < 100:
                    specs.setdefault(key, value)
    for dl in soup.find_all("dl"):
        for dt in dl.find_all("dt"):
            dd = dt.find_next_sibling("dd")
            key, value = element_text(dt), element_text(dd)
            if key and value and len(key) < 50 and len(value) < 100:
                specs.setdefault(key, value)
    return dict(list(specs.items())[:MAX_SPECIFICATIONS])


def _spec_value(specs: dict[str, str], *needles: str) -> str | None:
    for key, value in specs.items():
        k = key.lower()
        if any(n in k for n in needles):
            return value
    return None


def description_text(layout: SiteLayout, soup: Tag) -> str | None:
    for sel in layout.description_selectors:
        for el in _select(soup, sel):
            t = element_text(el)
            if t:
                return t
    meta = soup.find("meta", attrs={"name": "description"})
    if meta and clean_text(meta.get("content")):
        return clean_text(meta.get("content"))
    return None


def _complete(title: str, model: str, price: int, images: list[str]) -> bool:
    return bool(title) and bool(model) and price > 0 and len(images) > 0


# --- Templates ---

def extract_card_listing(layout: SiteLayout, card: Tag, base_url: str) -> Listing | None:
    """One catalog card -> Listing, or None if title, price or images cannot be recovered."""
    title = pick_title(card, layout.title_selectors)
    if not title:
        return None

    text = element_text(card)
    doc_text = ""
    if layout.scan_document:
        doc_text = element_text(_document_body(card))

    link = card_link(layout, card, base_url)
    page_url = link or base_url

    price = pick_price(layout, card, page_url, layout.price_selectors)
    if price <= 0 and doc_text:
        price = find_currency_price(doc_text)
    if price <= 0:
        logger.debug(f"Card skipped, no price: {title[:60]}")
        return None

    origin = layout.origin or site_origin(base_url)
    images = collect_images(card.find_all("img"), origin, MAX_CARD_IMAGES)
    if not images:
        logger.debug(f"Card skipped, no images: {title[:60]}")
        return None

    model = pick_model(card, page_url, layout.model_selectors, title)
    if not _complete(title, model, price, images):
        return None

    year = extract_year(title) or extract_year(text) or (extract_year(doc_text) if doc_text else None)
    distance = extract_distance(text)
    if distance is None and doc_text:
        distance = extract_distance(doc_text)
    owners = pick_owners(layout, card, page_url, text)
    if owners == 1 and doc_text:
        owners = extract_ownership_count(doc_text) or 1

    city = pick_city(layout, card, page_url, layout.city_selectors)
    if city == DEFAULT_CITY and doc_text:
        city = extract_labelled_city(doc_text) or DEFAULT_CITY

    owner = first_match([selector_text(layout.owner_selectors, max_len=60)], card, page_url)

    return Listing(
        title=title,
        model=model,
        price=price,
        year_of_purchase=year or current_year(),
        images=images,
        owner_name=owner or layout.default_owner,
        distance_driven=distance if distance is not None else 0,
        ownership_count=owners,
        city=city,
        source=layout.key,
        url=link,
    )


def extract_detail_listing(layout: SiteLayout, soup: BeautifulSoup, url: str) -> Listing | None:
    """A whole detail page -> Listing with description and extras, or None if incomplete."""
    body = soup.body or soup
    title = pick_title(body, layout.detail_title_selectors)
    if not title:
        return None

    page_text = body.get_text(" ", strip=True)
    page_text = clean_text(page_text)

    price = pick_price(layout, body, url, layout.detail_price_selectors)
    if price <= 0:
        logger.debug(f"Detail page has no price: {title[:60]}")
        return None

    origin = layout.origin or site_origin(url)
    images = gallery_images(layout, soup, origin, MAX_DETAIL_IMAGES)
    if not images:
        logger.debug(f"Detail page has no images: {title[:60]}")
        return None

    model = pick_model(body, url, layout.detail_model_selectors, title)
    if not _complete(title, model, price, images):
        return None

    specs = extract_specifications(body, layout.spec_selectors)
    spec_text = " ".join(f"{k} {v}" for k, v in specs.items())
    fuel = _spec_value(specs, "fuel")
    transmission = _spec_value(specs, "transmission", "gearbox")
    body_type = _spec_value(specs, "body")

    year = extract_year(title) or extract_year(spec_text) or pick_year(page_text)
    owner = first_match([selector_text(layout.detail_owner_selectors, max_len=60)], body, url)

    return Listing(
        title=title,
        model=model,
        price=price,
        year_of_purchase=year,
        images=images,
        owner_name=owner or layout.default_owner,
        distance_driven=pick_distance(spec_text) or pick_distance(page_text),
        ownership_count=pick_owners(layout, body, url, spec_text + " " + page_text),
        city=pick_city(layout, body, url, layout.detail_city_selectors),
        description=description_text(layout, soup),
        source=layout.key,
        url=url,
        fuel_type=fuel or extract_fuel_type(page_text),
        transmission=transmission or extract_transmission(page_text),
        body_type=body_type or extract_body_type(page_text),
        features=extract_features(body, layout.feature_selectors),
        specifications=specs,
    )


def find_layout_cards(layout: SiteLayout, soup: BeautifulSoup) -> list:
    """Elements of the layout's card selector with the most matches."""
    best: list = []
    for sel in layout.card_selectors:
        found = _select(soup, sel)
        if len(found) > len(best):
            best = found
    return best
