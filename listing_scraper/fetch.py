"""
One bounded GET per call, and markup parsing.

Every fault is raised as a ScrapeError subclass; nothing here retries. The caller decides whether a
timeout or network failure is worth another attempt.
"""

import logging
from time import monotonic
from urllib.parse import urlparse

import requests
from bs4 import BeautifulSoup

from .config import DOWNLOAD_CHUNK_BYTES, MAX_RESPONSE_BYTES, REQUEST_HEADERS, REQUEST_TIMEOUT
from .errors import (
    FetchTimeout,
    InvalidURL,
    NetworkUnreachable,
    OversizedResponse,
    UnparseableMarkup,
    UpstreamHTTPError,
)

logger = logging.getLogger(__name__)


def validate_url(url) -> str:
    """Return the stripped URL if it is http(s) with a host; raise InvalidURL otherwise."""
    if not url or not isinstance(url, str):
        raise InvalidURL(url)
    url = url.strip()
    try:
        parsed = urlparse(url)
    except ValueError:
        raise InvalidURL(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise InvalidURL(url)
    return url


def _declared_length(resp) -> int | None:
    value = resp.headers.get("Content-Length")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


def _check_deadline(deadline: float, timeout: int):
    if monotonic() > deadline:
        raise FetchTimeout(timeout)


def _read_capped(resp, limit: int, deadline: float, timeout: int) -> bytes:
    """Read the streamed body, giving up once it grows past limit or the call runs past deadline."""
    buf = bytearray()
    for chunk in resp.iter_content(chunk_size=DOWNLOAD_CHUNK_BYTES):
        # requests' timeout bounds each socket read; a slow trickle needs the overall deadline
        _check_deadline(deadline, timeout)
        if not chunk:
            continue
        buf.extend(chunk)
        if len(buf) > limit:
            raise OversizedResponse(len(buf), limit)
    return bytes(buf)


def fetch_html(session, url: str, timeout: int = REQUEST_TIMEOUT, limit: int = MAX_RESPONSE_BYTES) -> str:
    """
    GET url with browser-like headers and return the decoded body.

    A Content-Length over the limit is rejected before any of the body is read; bodies without one
    are streamed and cut off once they pass the limit. The whole call, headers and body, is abandoned
    as a timeout once it runs past `timeout` seconds.
    """
    logger.info(f"Fetching {url}")
    deadline = monotonic() + timeout
    try:
        resp = session.get(url, headers=REQUEST_HEADERS, timeout=timeout, stream=True)
    except requests.Timeout:
        raise FetchTimeout(timeout)
    except requests.RequestException as e:
        logger.debug(f"Fetch error {url}: {e}")
        raise NetworkUnreachable(type(e).__name__)

    try:
        _check_deadline(deadline, timeout)
        if not 200 <= resp.status_code < 300:
            logger.info(f"Upstream returned {resp.status_code} for {url}")
            raise UpstreamHTTPError(resp.status_code, resp.reason or "")
        declared = _declared_length(resp)
        if declared is not None and declared > limit:
            logger.info(f"Rejected {url}: Content-Length {declared} over {limit}")
            raise OversizedResponse(declared, limit)
        try:
            body = _read_capped(resp, limit, deadline, timeout)
        except requests.Timeout:
            raise FetchTimeout(timeout)
        except requests.RequestException as e:
            raise NetworkUnreachable(type(e).__name__)
        # apparent_encoding would re-read the consumed stream; fall back to utf-8 instead
        encoding = resp.encoding or "utf-8"
        logger.debug(f"Read {len(body)} bytes from {url} ({encoding})")
        try:
            return body.decode(encoding, errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")
    finally:
        resp.close()


def parse_html(html: str) -> BeautifulSoup:
    try:
        return BeautifulSoup(html, "html.parser")
    except Exception as e:
        raise UnparseableMarkup(str(e))
