"""Orchestrator: fetch discipline, fallback chain, failure taxonomy and the demo fixture."""
import json
import logging

import pytest
import requests

from conftest import (
    CATALOG_URL,
    DETAIL_URL,
    EDITORIAL_HTML,
    PLAIN_HTML,
    car_card,
    catalog_page,
    make_response,
    make_session,
)
from listing_scraper import fetch
from listing_scraper.__main__ import main
from listing_scraper.config import MAX_CARDS, MAX_RESPONSE_BYTES, REQUEST_TIMEOUT
from listing_scraper.demo import demo_listings, is_demo_url
from listing_scraper.extractors import cardekho, generic
from listing_scraper.log import init_logger
from listing_scraper.models import Failure, Listing, Success
from listing_scraper.scraper import ListingScraper, extract_catalog


# --- Demo fixture ---

def test_demo_token_short_circuits_network():
    session = make_session()
    outcome = ListingScraper(session).extract_catalog("https://www.example.com/demo")
    assert outcome.ok
    assert outcome.count == 5
    assert all(r.is_complete() for r in outcome.records)
    session.get.assert_not_called()


def test_demo_is_idempotent():
    scraper = ListingScraper(make_session())
    first = json.dumps(scraper.extract_catalog("https://cars.example.com/TEST-page").to_dict(), ensure_ascii=False)
    second = json.dumps(scraper.extract_catalog("https://cars.example.com/TEST-page").to_dict(), ensure_ascii=False)
    assert first == second


def test_demo_records_are_fresh_objects():
    a, b = demo_listings(), demo_listings()
    a[0].images.append("https://example.com/x.jpg")
    assert len(b[0].images) == 2
    assert is_demo_url("HTTPS://EXAMPLE.COM/Demo")
    assert not is_demo_url("https://www.cardekho.com/used-cars+in+pune")


def test_demo_detail_is_one_record():
    outcome = ListingScraper(make_session()).extract_detail("https://www.example.com/demo/car")
    assert outcome.ok and outcome.count == 1


# --- Invalid URL and fetch failures ---

@pytest.mark.parametrize("url", ["", None, "ftp://files.example.com/cars", "not a url", "https://"])
def test_invalid_url(url):
    session = make_session()
    outcome = ListingScraper(session).extract_catalog(url)
    assert not outcome.ok
    assert outcome.kind == "invalid_url"
    assert outcome.reason == "Invalid URL provided"
    session.get.assert_not_called()


def test_timeout():
    session = make_session(error=requests.Timeout("read timed out"))
    outcome = ListingScraper(session).extract_catalog(CATALOG_URL)
    assert outcome.kind == "timeout"
    assert outcome.reason == "Request timed out after 15 seconds"


def test_slow_trickle_hits_overall_timeout(monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr(fetch, "monotonic", lambda: clock[0])

    def trickle(chunk_size=1):
        # each chunk arrives 6 seconds after the last, well inside any per-read timeout
        for _ in range(10):
            clock[0] += 6
            yield b"<p>car</p>"

    resp = make_response()
    resp.iter_content.side_effect = trickle
    outcome = ListingScraper(make_session(resp)).extract_catalog(CATALOG_URL)
    assert outcome.kind == "timeout"
    assert outcome.reason == "Request timed out after 15 seconds"
    # abandoned on the third chunk, not after all ten
    assert clock[0] == 1018.0
    resp.close.assert_called_once()


def test_slow_headers_hit_overall_timeout(monkeypatch):
    clock = [1000.0]
    monkeypatch.setattr(fetch, "monotonic", lambda: clock[0])
    resp = make_response(catalog_page(1))
    session = make_session()

    def slow_get(*args, **kwargs):
        clock[0] += 16
        return resp

    session.get.side_effect = slow_get
    outcome = ListingScraper(session).extract_catalog(CATALOG_URL)
    assert outcome.kind == "timeout"
    resp.iter_content.assert_not_called()


def test_network_failure():
    session = make_session(error=requests.ConnectionError("name resolution failed"))
    outcome = ListingScraper(session).extract_detail(DETAIL_URL)
    assert outcome.kind == "network"
    assert outcome.reason.startswith("Failed to fetch the URL")


def test_forbidden_is_reported_as_blocked():
    session = make_session(make_response("denied", status=403, reason="Forbidden"))
    outcome = ListingScraper(session).extract_catalog(CATALOG_URL)
    assert outcome.kind == "blocked"
    assert "403" in outcome.reason
    assert "blocking automated requests" in outcome.reason


def test_server_error():
    session = make_session(make_response("oops", status=500, reason="Internal Server Error"))
    outcome = ListingScraper(session).extract(CATALOG_URL)
    assert outcome.kind == "http_error"
    assert outcome.reason == "Failed to fetch URL: 500 Internal Server Error"


def test_declared_oversize_rejected_before_reading(monkeypatch):
    parsed = []
    monkeypatch.setattr("listing_scraper.scraper.parse_html", lambda html: parsed.append(html))
    resp = make_response("", headers={"Content-Length": str(11 * 1024 * 1024)})
    outcome = ListingScraper(make_session(resp)).extract_catalog(CATALOG_URL)
    assert outcome.kind == "oversized"
    assert "too large" in outcome.reason
    resp.iter_content.assert_not_called()
    resp.close.assert_called_once()
    assert parsed == []


def test_streamed_oversize_is_cut_off():
    chunk = b"a" * (1024 * 1024)
    resp = make_response(chunks=[chunk] * 11)
    outcome = ListingScraper(make_session(resp)).extract_catalog(CATALOG_URL)
    assert outcome.kind == "oversized"


def test_unparseable_markup(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("parser exploded")

    monkeypatch.setattr(fetch, "BeautifulSoup", boom)
    outcome = ListingScraper(make_session()).extract_catalog_from_html("<html>", CATALOG_URL)
    assert outcome.kind == "unparseable"


def test_fetch_sends_browser_headers_and_bounds():
    session = make_session(make_response(catalog_page(3)))
    ListingScraper(session).extract_catalog(CATALOG_URL)
    session.get.assert_called_once()
    args, kwargs = session.get.call_args
    assert args == (CATALOG_URL,)
    assert kwargs["timeout"] == REQUEST_TIMEOUT
    assert kwargs["stream"] is True
    assert kwargs["headers"]["User-Agent"].startswith("Mozilla/5.0")
    assert "Accept-Language" in kwargs["headers"]


def test_fetch_html_decodes_body():
    session = make_session(make_response("<p>₹ 5 Lakh</p>"))
    assert fetch.fetch_html(session, CATALOG_URL) == "<p>₹ 5 Lakh</p>"
    assert MAX_RESPONSE_BYTES == 10 * 1024 * 1024


# --- Catalog ---

def test_catalog_success():
    session = make_session(make_response(catalog_page(3)))
    outcome = ListingScraper(session).extract_catalog(CATALOG_URL)
    assert isinstance(outcome, Success)
    assert outcome.count == 3 == len(outcome.records)
    assert [r.price for r in outcome.records] == [850000] * 3
    assert "3 car listings" in outcome.message


def test_card_cap():
    outcome = ListingScraper(make_session()).extract_catalog_from_html(catalog_page(25), CATALOG_URL)
    assert outcome.ok
    assert outcome.count == MAX_CARDS == 20


def test_editorial_page():
    outcome = ListingScraper(make_session()).extract_catalog_from_html(EDITORIAL_HTML, CATALOG_URL)
    assert isinstance(outcome, Failure)
    assert outcome.kind == "editorial"
    assert "editorial" in outcome.reason


def test_unsupported_structure():
    outcome = ListingScraper(make_session()).extract_catalog_from_html(PLAIN_HTML, CATALOG_URL)
    assert outcome.kind == "no_match"
    assert "Page structure not supported" in outcome.reason


def test_site_without_cards_retries_generic():
    # cardekho host, but only generic .car-card markup on the page
    outcome = ListingScraper(make_session()).extract_catalog_from_html(
        catalog_page(2), "https://www.cardekho.com/used-cars+in+mumbai"
    )
    assert outcome.count == 2
    assert {r.source for r in outcome.records} == {"generic"}


def _count_card_extractions(monkeypatch):
    calls = []
    for module in (cardekho, generic):
        original = module.extract_card

        def counted(*args, _original=original, **kwargs):
            calls.append(1)
            return _original(*args, **kwargs)

        monkeypatch.setattr(module, "extract_card", counted)
    return calls


def _tiles_then_cards(tiles: int, cards: int) -> str:
    # CarDekho tiles with a title but no price, followed by complete generic cards
    tile_html = '<div class="usedCarTile"><h3>2019 Maruti Swift VXI</h3></div>' * tiles
    card_html = "".join(car_card(i) for i in range(1, cards + 1))
    return f"<html><body>{tile_html}<div class='results'>{card_html}</div></body></html>"


def test_generic_retry_shares_card_budget(monkeypatch):
    calls = _count_card_extractions(monkeypatch)
    outcome = ListingScraper(make_session()).extract_catalog_from_html(
        _tiles_then_cards(25, 25), "https://www.cardekho.com/used-cars+in+mumbai"
    )
    assert len(calls) == MAX_CARDS
    assert outcome.kind == "no_match"


def test_generic_retry_gets_what_is_left_of_budget(monkeypatch):
    calls = _count_card_extractions(monkeypatch)
    outcome = ListingScraper(make_session()).extract_catalog_from_html(
        _tiles_then_cards(5, 25), "https://www.cardekho.com/used-cars+in+mumbai"
    )
    assert len(calls) == MAX_CARDS
    assert outcome.count == MAX_CARDS - 5
    assert {r.source for r in outcome.records} == {"generic"}


def test_catalog_title_is_not_editorial():
    html = "<html><head><title>Used Cars in Pune at Best Prices</title></head><body><p>Nothing here.</p></body></html>"
    outcome = ListingScraper(make_session()).extract_catalog_from_html(html, "https://www.example.com/used-cars/pune")
    assert outcome.kind == "no_match"
    assert "Page structure not supported" in outcome.reason


# --- Detail ---

def test_detail_success(detail_html):
    session = make_session(make_response(detail_html))
    outcome = ListingScraper(session).extract_detail(DETAIL_URL)
    assert outcome.ok and outcome.count == 1
    listing = outcome.records[0]
    assert listing.title == "2019 Hyundai Creta SX"
    assert listing.price == 1125000


def test_detail_failure_message():
    outcome = ListingScraper(make_session()).extract_detail_from_html(PLAIN_HTML, DETAIL_URL)
    assert outcome.kind == "no_match"
    assert outcome.reason.startswith("Failed to extract required car data")


# --- Auto ---

def test_auto_detail(detail_html):
    outcome = ListingScraper(make_session(make_response(detail_html))).extract(DETAIL_URL)
    assert outcome.count == 1


def test_auto_catalog(catalog_html):
    outcome = ListingScraper(make_session(make_response(catalog_html))).extract(CATALOG_URL)
    assert outcome.count == 3


def test_auto_recovers_from_misclassification():
    # detail-looking URL, catalog markup: detail family finds nothing, catalog family does
    outcome = ListingScraper(make_session()).extract_from_html(catalog_page(3), "https://www.example.com/listing/12345")
    assert outcome.ok
    assert outcome.count == 3


def test_auto_editorial():
    outcome = ListingScraper(make_session()).extract_from_html(EDITORIAL_HTML, "https://www.example.com/news/cheap-cars")
    assert outcome.kind == "editorial"


# --- Outcome shapes and resources ---

def test_outcome_dicts():
    listing = Listing(title="2019 Maruti Swift VXI", model="Swift VXI", price=550000, year_of_purchase=2019,
                      images=["https://cdn.example.com/a.jpg"])
    d = Success([listing]).to_dict()
    assert d["success"] is True and d["count"] == 1
    row = d["data"][0]
    assert row["ownerName"] == "Unknown Owner"
    assert row["yearOfPurchase"] == 2019
    assert row["distanceDriven"] == 0
    assert row["ownershipCount"] == 1
    assert "description" not in row
    assert Failure("nope", "timeout").to_dict() == {"success": False, "error": "nope", "kind": "timeout"}


def test_caller_owns_session():
    session = make_session()
    with ListingScraper(session):
        pass
    session.close.assert_not_called()

    own = ListingScraper()
    own.session = make_session()
    own.close()
    own.session.close.assert_called_once()


def test_module_helper_uses_given_session(catalog_html):
    session = make_session(make_response(catalog_html))
    assert extract_catalog(CATALOG_URL, session=session).count == 3
    session.close.assert_not_called()


def test_unexpected_errors_become_failures(monkeypatch):
    def broken(soup, url):
        raise KeyError("boom")

    monkeypatch.setattr("listing_scraper.scraper.catalog_records", broken)
    outcome = ListingScraper(make_session()).extract_catalog_from_html(catalog_page(2), CATALOG_URL)
    assert outcome.kind == "error"


# --- CLI ---

def test_cli_writes_json(tmp_path):
    out = tmp_path / "cars.json"
    assert main(["https://www.example.com/demo", "--out", str(out), "--log-level", "WARNING"]) == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["success"] is True
    assert data["count"] == 5


def test_cli_failure_exit_code(capsys):
    assert main(["ftp://nowhere", "--mode", "catalog"]) == 1
    printed = json.loads(capsys.readouterr().out)
    assert printed["kind"] == "invalid_url"


def test_init_logger_creates_log_dir_and_does_not_stack(tmp_path):
    log_file = tmp_path / "logs" / "run" / "scrape.log"
    logger = init_logger("listing_scraper.test_run", console_level="WARNING", log_file=str(log_file))
    init_logger("listing_scraper.test_run", console_level="ERROR", log_file=str(log_file))
    logger.debug("tried 3 title strategies")
    for h in logger.handlers:
        h.flush()
    assert "tried 3 title strategies" in log_file.read_text(encoding="utf-8")
    assert len(logger.handlers) == 2
    console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
    assert console[0].level == logging.ERROR
    for h in list(logger.handlers):
        h.close()
        logger.removeHandler(h)
