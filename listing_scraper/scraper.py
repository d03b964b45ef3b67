"""
Extraction orchestrator: URL in, Success or Failure out.

    with ListingScraper() as scraper:
        outcome = scraper.extract("https://www.cardekho.com/used-cars+in+mumbai")
        if outcome.ok:
            for listing in outcome.records:
                ...

Each call makes at most one GET through the session it was given. Card extraction walks at most
MAX_CARDS elements; a card that cannot be completed yields None and the walk moves on. Every
ScrapeError raised below this layer is turned into a Failure here, and nothing is cached between calls.
"""

import logging

import requests

from . import demo
from .config import MAX_CARDS, TITLE_MAX_LEN
from .errors import NoMatchFound, ScrapeError
from .extractors import generic, site_for_url
from .extractors.base import element_text
from .fetch import fetch_html, parse_html, validate_url
from .models import ExtractionOutcome, Failure, Listing, PageType, Success
from .normalizers import is_noise_title
from .page_type import classify

logger = logging.getLogger(__name__)

# At least this many card headings, most of them teasers, before a page counts as editorial
EDITORIAL_MIN_HEADINGS = 2


def _is_teaser(text: str) -> bool:
    return bool(text) and len(text) <= TITLE_MAX_LEN and is_noise_title(text)


def looks_editorial(soup) -> bool:
    """True for "best cars under 5 lakh" style articles: teaser page heading, or mostly teaser subheadings."""
    # <title> is left out: catalog titles read like teasers ("Used Cars in Pune at Best Prices")
    for el in soup.select("h1"):
        if _is_teaser(element_text(el)):
            return True
    headings = [element_text(h) for h in soup.select("h2, h3")[:MAX_CARDS]]
    headings = [h for h in headings if h]
    if len(headings) < EDITORIAL_MIN_HEADINGS:
        return False
    teasers = sum(1 for h in headings if _is_teaser(h))
    return teasers * 2 > len(headings)


def _walk_cards(site, cards: list, url: str, budget: int) -> tuple[list[Listing], int]:
    """Extract at most `budget` cards; returns the records and how many cards were walked."""
    records: list[Listing] = []
    single = len(cards) == 1
    walked = cards[:budget]
    for card in walked:
        if site is generic:
            listing = generic.extract_card(card, url, single=single)
        else:
            listing = site.extract_card(card, url)
        if listing is None:
            continue
        records.append(listing)
    return records, len(walked)


def catalog_records(soup, url: str) -> list[Listing]:
    """
    Site card family by hostname, then the generic family if the site one recovers nothing.

    Both passes share one budget of MAX_CARDS card extractions per call.
    """
    budget = MAX_CARDS
    site = site_for_url(url)
    cards = site.find_cards(soup)
    logger.debug(f"{site.LAYOUT.key}: {len(cards)} card(s)")
    if len(cards) > budget:
        logger.info(f"Page has {len(cards)} cards; only the first {budget} are extracted")
    records, walked = _walk_cards(site, cards, url, budget)
    budget -= walked
    if records or site is generic:
        return records
    if budget <= 0:
        logger.info(f"Card budget spent on {site.LAYOUT.key} cards; skipping generic retry")
        return records
    cards = generic.find_cards(soup)
    logger.debug(f"generic retry: {len(cards)} card(s), {budget} left in budget")
    records, _ = _walk_cards(generic, cards, url, budget)
    return records


def detail_records(soup, url: str) -> list[Listing]:
    """Site detail extractor, then the generic one; at most one record."""
    site = site_for_url(url)
    listing = site.extract_detail(soup, url)
    if listing is None and site is not generic:
        logger.debug(f"{site.LAYOUT.key} detail extractor found nothing; trying generic")
        listing = generic.extract_detail(soup, url)
    return [listing] if listing is not None else []


def _catalog_success(records: list[Listing]) -> Success:
    return Success(records, message=f"Successfully scraped {len(records)} car listings")


def _detail_success(records: list[Listing]) -> Success:
    return Success(records[:1], message="Listing scraped successfully")


class ListingScraper:
    """
    Entry points for catalog, detail and auto-detected extraction.

    Pass a requests.Session to reuse connections across calls; the caller keeps ownership and closes
    it. Without one, the scraper opens its own and closes it in close() / on leaving a with block.
    """

    def __init__(self, session: requests.Session | None = None):
        self._owns_session = session is None
        self.session = session if session is not None else requests.Session()

    def close(self):
        if self._owns_session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
        return False

    def _fetch_soup(self, url: str):
        return parse_html(fetch_html(self.session, url))

    def _run(self, url, action) -> ExtractionOutcome:
        try:
            return action(url)
        except ScrapeError as e:
            logger.info(f"Extraction failed for {url}: [{e.kind}] {e}")
            return Failure(str(e), e.kind)
        except Exception as e:
            logger.exception(f"Unexpected scraping error for {url}")
            return Failure(f"Unexpected scraping error: {e}", "error")

    # --- Catalog ---

    def _catalog_from_soup(self, soup, url: str) -> Success:
        records = catalog_records(soup, url)
        if not records:
            raise NoMatchFound(editorial=looks_editorial(soup))
        logger.info(f"Extracted {len(records)} listing(s) from {url}")
        return _catalog_success(records)

    def extract_catalog(self, url: str) -> ExtractionOutcome:
        """Every complete card on a catalog page (at most MAX_CARDS)."""
        def action(u):
            u = validate_url(u)
            if demo.is_demo_url(u):
                logger.info("Demo URL; returning sample listings")
                return _catalog_success(demo.demo_listings())
            return self._catalog_from_soup(self._fetch_soup(u), u)
        return self._run(url, action)

    def extract_catalog_from_html(self, html: str, url: str) -> ExtractionOutcome:
        """Catalog extraction over markup the caller already has; url is used for hostname and link resolution."""
        def action(u):
            u = validate_url(u)
            return self._catalog_from_soup(parse_html(html), u)
        return self._run(url, action)

    # --- Detail ---

    def _detail_from_soup(self, soup, url: str) -> Success:
        records = detail_records(soup, url)
        if not records:
            raise NoMatchFound(editorial=looks_editorial(soup), detail=True)
        logger.info(f"Extracted listing '{records[0].title}' from {url}")
        return _detail_success(records)

    def extract_detail(self, url: str) -> ExtractionOutcome:
        """The single listing on a detail page, as a one-element Success."""
        def action(u):
            u = validate_url(u)
            if demo.is_demo_url(u):
                logger.info("Demo URL; returning first sample listing")
                return _detail_success(demo.demo_listings())
            return self._detail_from_soup(self._fetch_soup(u), u)
        return self._run(url, action)

    def extract_detail_from_html(self, html: str, url: str) -> ExtractionOutcome:
        def action(u):
            u = validate_url(u)
            return self._detail_from_soup(parse_html(html), u)
        return self._run(url, action)

    # --- Auto ---

    def _auto_from_soup(self, soup, url: str) -> Success:
        page_type = classify(url, soup)
        logger.info(f"Detected page type: {page_type.value}")
        if page_type is PageType.CATALOG:
            records = catalog_records(soup, url)
            if records:
                return _catalog_success(records)
            logger.info("No cards recovered; trying the page as a detail page")
            records = detail_records(soup, url)
            if records:
                return _detail_success(records)
        else:
            records = detail_records(soup, url)
            if records:
                return _detail_success(records)
            logger.info("No detail record recovered; trying the page as a catalog")
            records = catalog_records(soup, url)
            if records:
                return _catalog_success(records)
        raise NoMatchFound(editorial=looks_editorial(soup), detail=page_type is not PageType.CATALOG)

    def extract(self, url: str) -> ExtractionOutcome:
        """Fetch once, classify, run the matching family, then the other one if the first finds nothing."""
        def action(u):
            u = validate_url(u)
            if demo.is_demo_url(u):
                logger.info("Demo URL; returning sample listings")
                return _catalog_success(demo.demo_listings())
            return self._auto_from_soup(self._fetch_soup(u), u)
        return self._run(url, action)

    def extract_from_html(self, html: str, url: str) -> ExtractionOutcome:
        def action(u):
            u = validate_url(u)
            return self._auto_from_soup(parse_html(html), u)
        return self._run(url, action)


def extract_catalog(url: str, session: requests.Session | None = None) -> ExtractionOutcome:
    with ListingScraper(session) as scraper:
        return scraper.extract_catalog(url)


def extract_detail(url: str, session: requests.Session | None = None) -> ExtractionOutcome:
    with ListingScraper(session) as scraper:
        return scraper.extract_detail(url)


def extract(url: str, session: requests.Session | None = None) -> ExtractionOutcome:
    with ListingScraper(session) as scraper:
        return scraper.extract(url)
