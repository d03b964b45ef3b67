"""
Card and detail extractors, one module per known external site plus the generic fallback.
"""

import logging
from urllib.parse import urlparse

from . import cardekho, cars24, carwale, generic, olx

logger = logging.getLogger(__name__)

SITE_EXTRACTORS = (cardekho, cars24, olx, carwale)


def site_for_url(url: str):
    """
    Extractor module for a URL's hostname (cardekho, cars24, olx, carwale), or the generic module.

    Every module exposes find_cards(soup), extract_card(card, base_url) and extract_detail(soup, url).
    """
    host = urlparse(url or "").netloc.lower()
    for site in SITE_EXTRACTORS:
        if any(host == h or host.endswith("." + h) for h in site.LAYOUT.hosts):
            logger.debug(f"Using {site.LAYOUT.key} extractor for {host}")
            return site
    logger.debug(f"No site extractor for {host}; using generic")
    return generic


__all__ = ["SITE_EXTRACTORS", "site_for_url", "cardekho", "cars24", "carwale", "generic", "olx"]
