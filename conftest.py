# Shared fixtures: canned listing markup and a fake requests session (no network in tests)
from unittest import mock

import pytest
import requests

CATALOG_URL = "https://www.example.com/used-cars/mumbai"
DETAIL_URL = "https://www.example.com/cars/hyundai-creta-sx/20451"


def car_card(i: int, title: str | None = None, price: str = "₹ 8.5 Lakh") -> str:
    """One generic catalog card with a unique photo and link."""
    title = title or f"2018 Honda City VX {i}"
    return f"""
    <div class="car-card">
      <a href="/cars/honda-city-2018/{1000 + i}"><img src="/images/cars/honda-city-{i}.jpg" alt="Honda City"></a>
      <h3>{title}</h3>
      <div class="price">{price}</div>
      <p>45,000 km · Petrol · 2nd Owner</p>
      <span class="location">Mumbai, Maharashtra</span>
    </div>"""


def catalog_page(n: int = 3) -> str:
    cards = "".join(car_card(i) for i in range(1, n + 1))
    return f"""<html><head><title>Used cars in Mumbai</title></head>
    <body><div class="page-head">Used cars in Mumbai</div><div class="results">{cards}</div></body></html>"""


DETAIL_HTML = """<html><head>
<title>2019 Hyundai Creta SX for sale</title>
<meta name="description" content="Well kept Creta">
</head><body>
<header><img src="/static/site-logo.png" alt="Site logo"></header>
<h1 class="car-title">2019 Hyundai Creta SX</h1>
<div class="car-model">Creta SX 1.6 CRDi</div>
<div class="price-section">₹ 11,25,000</div>
<div class="gallery">
  <img src="/uploads/creta-front.jpg">
  <img src="data:image/gif;base64,R0lGODlhAQABAAAAACw=" data-src="/uploads/creta-side.jpg">
  <img src="/uploads/creta-rear.jpg">
  <img src="/icons/zoom.svg">
</div>
<div class="location">Pune, Maharashtra</div>
<div class="seller-name">Anita Desai</div>
<table class="specs">
  <tr><td>Fuel Type</td><td>Diesel</td></tr>
  <tr><td>Transmission</td><td>Manual</td></tr>
  <tr><td>Kms Driven</td><td>52,000 km</td></tr>
  <tr><td>Ownership</td><td>Second Owner</td></tr>
  <tr><td>Body Type</td><td>SUV</td></tr>
</table>
<div class="description">Single careful driver, all service records.</div>
<ul class="features"><li>Sunroof</li><li>Rear Camera</li><li>ABS</li></ul>
</body></html>"""

EDITORIAL_HTML = """<html><head><title>Best Cars Under 5 Lakh in Delhi</title></head><body>
<h1>Best Cars Under 5 Lakh in Delhi</h1>
<div class="car-card"><img src="/photos/alto.jpg"><h3>Best Cars Under 5 Lakh in Delhi</h3><div class="price">₹ 3.5 Lakh</div></div>
<div class="car-card"><img src="/photos/kwid.jpg"><h3>Top 5 Hatchbacks to Buy</h3><div class="price">₹ 4.2 Lakh</div></div>
</body></html>"""

PLAIN_HTML = "<html><body><p>Hello there, nothing to see.</p></body></html>"


def make_response(body: str | bytes = "", status: int = 200, reason: str = "OK", headers: dict | None = None,
                  chunks: list | None = None):
    """Mock of a streamed requests.Response."""
    data = body.encode("utf-8") if isinstance(body, str) else body
    resp = mock.Mock()
    resp.status_code = status
    resp.reason = reason
    resp.headers = headers or {}
    resp.encoding = "utf-8"
    resp.iter_content.side_effect = lambda chunk_size=1: iter(chunks if chunks is not None else [data])
    return resp


def make_session(response=None, error: Exception | None = None):
    session = mock.Mock(spec=requests.Session)
    if error is not None:
        session.get.side_effect = error
    else:
        session.get.return_value = response
    return session


@pytest.fixture
def catalog_html():
    return catalog_page(3)


@pytest.fixture
def detail_html():
    return DETAIL_HTML


@pytest.fixture
def editorial_html():
    return EDITORIAL_HTML
