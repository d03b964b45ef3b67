"""
Shared settings for the car listing extraction engine.
Request headers, resource limits and plausibility bounds live here so every module reads the same values.
"""

# --- Config ---
REQUEST_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8",
    "Accept-Language": "en-IN,en;q=0.9",
}
# One request per call, abandoned after this many seconds (connect + read). Never retried here.
REQUEST_TIMEOUT = 15
MAX_RESPONSE_BYTES = 10 * 1024 * 1024  # 10 MB
DOWNLOAD_CHUNK_BYTES = 64 * 1024

# Hard cap on card elements walked per catalog page (bounds CPU on pathological markup)
MAX_CARDS = 20
MAX_CARD_IMAGES = 10
MAX_DETAIL_IMAGES = 15

# Any URL containing one of these (case-insensitive) gets the offline fixture
DEMO_TOKENS = ("demo", "test")

# Plausibility bounds for free-text mining
YEAR_MIN = 1990
DISTANCE_MAX_KM = 1_000_000
OWNERS_MIN = 1
OWNERS_MAX = 10
TITLE_MAX_LEN = 100
CITY_MAX_LEN = 50

DEFAULT_CITY = "Unknown"
DEFAULT_OWNER_NAME = "Unknown Owner"
