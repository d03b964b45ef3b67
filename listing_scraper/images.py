"""
Image candidate filter and image collection for listing markup.
"""

import re
from urllib.parse import urljoin, urlparse

from bs4 import Tag

from .normalizers import clean_text

# Lazy-load attributes come after src; srcset-style attributes contribute their first entry only
IMAGE_ATTRS = ("src", "data-src", "data-lazy-src", "data-original", "data-lazy")
SRCSET_ATTRS = ("srcset", "data-srcset")

# Substrings that mark decorative images anywhere in the URL, alt text or class
DECORATIVE_SUBSTRINGS = (
    "logo", "icon", "sprite", "placeholder", "avatar", "banner", "advert",
    "youtube", "social", "footer", "header", "badge", "tracking", "pixel",
    "1x1", "spacer", "loader", "loading", "emoji",
)
# Short words only rejected as whole tokens ("ad" must not match "upload")
DECORATIVE_TOKENS = {"ad", "ads", "tag", "nav", "menu", "play", "video", "button", "arrow", "blank"}
DECORATIVE_EXTENSIONS = (".svg", ".ico", ".gif")
LAZY_BOOLEAN_VALUES = {"", "true", "false", "lazy"}
MIN_DIMENSION = 50

_TOKEN_SPLIT_RE = re.compile(r"[^a-z0-9]+")


def site_origin(url: str) -> str:
    """scheme://host of a page URL, used to absolutize relative image paths."""
    parts = urlparse(url)
    if not parts.scheme or not parts.netloc:
        return ""
    return f"{parts.scheme}://{parts.netloc}"


def first_srcset_url(value: str | None) -> str | None:
    """'a.jpg 1x, b.jpg 2x' -> 'a.jpg'."""
    if not value:
        return None
    first = value.split(",")[0].strip()
    if not first:
        return None
    return first.split()[0]


def candidate_sources(img: Tag) -> list[str]:
    """Raw image references on one element, in priority order."""
    out = []
    for attr in IMAGE_ATTRS:
        value = (img.get(attr) or "").strip()
        if value.lower() in LAZY_BOOLEAN_VALUES:
            continue
        out.append(value)
    for attr in SRCSET_ATTRS:
        value = first_srcset_url(img.get(attr))
        if value:
            out.append(value)
    return out


def resolve_url(src: str | None, origin: str) -> str | None:
    """Make an image reference absolute. data: URIs and unresolvable paths -> None."""
    if not src:
        return None
    src = src.strip()
    if src.startswith("data:") or src.startswith("javascript:"):
        return None
    if src.startswith("//"):
        return "https:" + src
    if src.startswith("http://") or src.startswith("https://"):
        return src
    if not origin:
        return None
    return urljoin(origin + "/", src)


def _tokens(text: str) -> set[str]:
    return {t for t in _TOKEN_SPLIT_RE.split(text.lower()) if t}


def _too_small(img: Tag | None) -> bool:
    if img is None:
        return False
    for attr in ("width", "height"):
        value = (img.get(attr) or "").strip().lower().replace("px", "")
        if value.isdigit() and int(value) < MIN_DIMENSION:
            return True
    return False


def is_content_image(url: str | None, img: Tag | None = None) -> bool:
    """
    True if the reference looks like a photo of the item rather than a logo, icon or tracker.

    SVG files and anything mentioning "logo" are always rejected, whatever the other attributes say.
    """
    if not url or len(url) < 10:
        return False
    lower_url = url.lower()
    if not (lower_url.startswith("http://") or lower_url.startswith("https://")):
        return False
    path = urlparse(lower_url).path
    if path.endswith(DECORATIVE_EXTENSIONS):
        return False

    alt = clean_text(img.get("alt")) if img is not None else ""
    classes = img.get("class") if img is not None else None
    class_text = " ".join(classes) if isinstance(classes, list) else (classes or "")
    # Substrings count anywhere in the URL (host, query); short tokens only in the path
    for text in (lower_url, alt.lower(), class_text.lower()):
        if any(s in text for s in DECORATIVE_SUBSTRINGS):
            return False
    for text in (path, alt.lower(), class_text.lower()):
        if _tokens(text) & DECORATIVE_TOKENS:
            return False
    return not _too_small(img)


def image_from_element(img: Tag, origin: str) -> str | None:
    """First candidate on one element that resolves and passes the filter."""
    for src in candidate_sources(img):
        url = resolve_url(src, origin)
        if url and is_content_image(url, img):
            return url
    return None


def collect_images(imgs, origin: str, limit: int, seen: set[str] | None = None) -> list[str]:
    """Filter, absolutize and dedupe image elements in document order, stopping at limit."""
    seen = set() if seen is None else seen
    out = []
    for img in imgs:
        if len(out) >= limit:
            break
        url = image_from_element(img, origin)
        if url and url not in seen:
            seen.add(url)
            out.append(url)
    return out
