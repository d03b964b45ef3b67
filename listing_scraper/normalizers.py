"""
Text normalizers: turn raw text fragments from listing markup into typed values.

Everything here is a pure function. Mining functions return None when nothing plausible is found;
callers pick the default (current year, 0 km, 1 owner).
"""

import re
from datetime import datetime

from .config import (
    CITY_MAX_LEN,
    DISTANCE_MAX_KM,
    OWNERS_MAX,
    OWNERS_MIN,
    TITLE_MAX_LEN,
    YEAR_MIN,
)

LAKH = 100_000
CRORE = 10_000_000

_UNIT_MULTIPLIERS = (
    (re.compile(r"^(?:crores?|cr)$", re.I), CRORE),
    (re.compile(r"^(?:lakhs?|lacs?|lac|l)$", re.I), LAKH),
    (re.compile(r"^k$", re.I), 1_000),
)

# "₹ 5.5 Lakh", "Rs. 12,50,000", "INR 4.2 Cr"
_CURRENCY_PRICE_RE = re.compile(
    r"(?:₹|\brs\.?|\binr)\s*(\d+(?:\.\d+)?)\s*(crores?|cr|lakhs?|lacs?|lac|l|k)?\b",
    re.I,
)
# bare "5 lakh" / "1250000"
_BARE_PRICE_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(crores?|cr|lakhs?|lacs?|lac|l|k)?\b", re.I)

_LABELLED_YEAR_RE = re.compile(
    r"(?:year|model|registration|reg\.?|manufactur\w*|mfg)\D{0,25}?\b(19\d{2}|20\d{2})\b", re.I
)
_YEAR_RE = re.compile(r"\b(19\d{2}|20\d{2})\b")

# "45,000 km", "45000 kms", "45k km", "1.2 lakh km"; not "18 km/l" or "kmpl"
_DISTANCE_RE = re.compile(
    r"(\d[\d,]*(?:\.\d+)?)\s*(k|lakhs?|lacs?)?\s*(?:kms?|kilomet(?:er|re)s?)\b(?!\s*/\s*l)",
    re.I,
)
_LABELLED_DISTANCE_RE = re.compile(r"(?:kms?|kilomet\w+)\s+driven\s*[:\-]?\s*(\d[\d,]*)", re.I)

_OWNER_ORDINALS = {
    "first": 1,
    "second": 2,
    "third": 3,
    "fourth": 4,
    "fifth": 5,
    "sixth": 6,
    "seventh": 7,
    "eighth": 8,
    "ninth": 9,
    "tenth": 10,
}
_OWNER_NUMERIC_RE = re.compile(r"\b(\d{1,2})\s*(?:st|nd|rd|th)?\s*(?:owners?|ownership)\b", re.I)
_OWNER_WORD_RE = re.compile(r"\b(" + "|".join(_OWNER_ORDINALS) + r")\s+owner\b", re.I)
_OWNER_LABEL_RE = re.compile(r"\b(?:owners?|ownership)\s*[:\-]\s*(\d{1,2}|" + "|".join(_OWNER_ORDINALS) + r")\b", re.I)

_LABELLED_CITY_RE = re.compile(
    r"\b(?:City|Location|Car Location|Registered in|RTO)\s*[:\-]?\s*([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)"
)

# Titles that belong to articles/teasers rather than listings
NOISE_TITLE_PATTERNS = (
    re.compile(r"\bbest\b", re.I),
    re.compile(r"\btop\s+\d+\b", re.I),
    re.compile(r"\breviews?\b", re.I),
    re.compile(r"\bupcoming\b", re.I),
    re.compile(r"\bnews\b", re.I),
    re.compile(r"\bcompare\b", re.I),
    re.compile(r"\bvs\.?\b", re.I),
    re.compile(r"\blaunch(?:ed|es)?\b", re.I),
    re.compile(r"\bprice\s+list\b", re.I),
    re.compile(r"\bunder\s+(?:₹|rs\.?\s*)?\d+(?:\.\d+)?\s*(?:lakhs?|lacs?|crores?|cr|l)\b", re.I),
)

_FUEL_RE = re.compile(r"\b(Petrol|Diesel|CNG|LPG|Electric|Hybrid)\b", re.I)
_TRANSMISSION_RE = re.compile(r"\b(Manual|Automatic|AMT|CVT|DCT)\b", re.I)
_BODY_RE = re.compile(r"\b(Hatchback|Sedan|SUV|MUV|Coupe|Convertible|Wagon|Pickup|Minivan)\b", re.I)


def current_year() -> int:
    return datetime.now().year


def clean_text(s: str | None) -> str:
    """Collapse whitespace and strip. None -> ''."""
    if not s:
        return ""
    return re.sub(r"\s+", " ", s).strip()


def _to_amount(number: str, unit: str | None) -> int:
    try:
        value = float(number)
    except ValueError:
        return 0
    if unit:
        for pattern, multiplier in _UNIT_MULTIPLIERS:
            if pattern.match(unit):
                value *= multiplier
                break
    return int(round(value))


def parse_price(text: str | None) -> int:
    """
    Parse an Indian price string into whole rupees. Returns 0 when nothing usable is found.

    "₹5.5 Lakh" -> 550000, "₹12,50,000" -> 1250000, "2 crore" -> 20000000.
    A currency-prefixed amount wins over any bare number in the same text.
    """
    if not text:
        return 0
    s = text.replace(",", "").replace("\xa0", " ")
    m = _CURRENCY_PRICE_RE.search(s) or _BARE_PRICE_RE.search(s)
    if not m:
        return 0
    amount = _to_amount(m.group(1), m.group(2))
    return amount if amount > 0 else 0


def find_currency_price(text: str | None) -> int:
    """Scan free text for the first currency-symbol-prefixed amount (₹ / Rs / INR). 0 if none."""
    if not text:
        return 0
    s = text.replace(",", "").replace("\xa0", " ")
    for m in _CURRENCY_PRICE_RE.finditer(s):
        amount = _to_amount(m.group(1), m.group(2))
        if amount > 0:
            return amount
    return 0


def _plausible_year(year: int) -> bool:
    return YEAR_MIN <= year <= current_year()


def extract_year(text: str | None) -> int | None:
    """Model/registration year in 1990..current year. Labelled years ("Registration 2019") win."""
    if not text:
        return None
    for m in _LABELLED_YEAR_RE.finditer(text):
        year = int(m.group(1))
        if _plausible_year(year):
            return year
    for m in _YEAR_RE.finditer(text):
        year = int(m.group(1))
        if _plausible_year(year):
            return year
    return None


def extract_distance(text: str | None) -> int | None:
    """Kilometres driven, 0 <= km < 1,000,000."""
    if not text:
        return None
    for m in _LABELLED_DISTANCE_RE.finditer(text):
        km = _to_amount(m.group(1).replace(",", ""), None)
        if 0 <= km < DISTANCE_MAX_KM:
            return km
    for m in _DISTANCE_RE.finditer(text):
        km = _to_amount(m.group(1).replace(",", ""), m.group(2))
        if 0 <= km < DISTANCE_MAX_KM:
            return km
    return None


def _owner_value(token: str) -> int | None:
    token = token.lower()
    if token in _OWNER_ORDINALS:
        return _OWNER_ORDINALS[token]
    try:
        return int(token)
    except ValueError:
        return None


def extract_ownership_count(text: str | None) -> int | None:
    """Number of previous owners, 1..10 ("2nd Owner", "First owner", "Owners: 3")."""
    if not text:
        return None
    for pattern in (_OWNER_LABEL_RE, _OWNER_NUMERIC_RE, _OWNER_WORD_RE):
        for m in pattern.finditer(text):
            n = _owner_value(m.group(1))
            if n is not None and OWNERS_MIN <= n <= OWNERS_MAX:
                return n
    return None


def extract_labelled_city(text: str | None) -> str | None:
    """City from "City: Pune" / "Location Mumbai" / "RTO Delhi" style labels."""
    if not text:
        return None
    m = _LABELLED_CITY_RE.search(text)
    if not m:
        return None
    return normalize_city(m.group(1))


def normalize_city(text: str | None) -> str | None:
    """First comma-separated segment of a short location string. None if too long or empty."""
    t = clean_text(text)
    if not t or len(t) >= CITY_MAX_LEN:
        return None
    first = t.split(",")[0].strip()
    return first or None


def is_noise_title(title: str | None) -> bool:
    """True for titles of articles/teasers ("Best cars under 5 lakh", reviews, upcoming launches)."""
    t = clean_text(title)
    if not t:
        return True
    if len(t) > TITLE_MAX_LEN:
        return True
    return any(p.search(t) for p in NOISE_TITLE_PATTERNS)


def model_from_title(title: str | None) -> str:
    """Heuristic: first word of a listing title is the brand (e.g. 'Maruti Swift VXi' -> 'Swift VXi')."""
    words = clean_text(title).split()
    if len(words) > 1:
        return " ".join(words[1:])
    return words[0] if words else ""


def _first_group(pattern: re.Pattern, text: str | None) -> str | None:
    if not text:
        return None
    m = pattern.search(text)
    return m.group(1).strip() if m else None


def extract_fuel_type(text: str | None) -> str | None:
    value = _first_group(_FUEL_RE, text)
    if value and value.upper() in ("CNG", "LPG"):
        return value.upper()
    return value.title() if value else None


def extract_transmission(text: str | None) -> str | None:
    value = _first_group(_TRANSMISSION_RE, text)
    if value and value.upper() in ("AMT", "CVT", "DCT"):
        return value.upper()
    return value.title() if value else None


def extract_body_type(text: str | None) -> str | None:
    value = _first_group(_BODY_RE, text)
    if value and value.upper() in ("SUV", "MUV"):
        return value.upper()
    return value.title() if value else None
