"""
Secondary lookups: resources a page links to that carry extra metadata.

Both lookups issue their own blocking fetch on every call. Any failure
(no link, fetch error, invalid JSON, wrong shape) yields None and the
calling strategy simply misses.
"""
import json
from typing import Any, Dict, Optional
from urllib.parse import urljoin

from pagespy.adapters.document import Document
from pagespy.adapters.fetcher import Fetcher
from pagespy.exceptions import FetchError
from pagespy.utils.logger import LayerLogger

OEMBED_JSON_TYPE = "application/json+oembed"

logger = LayerLogger("secondary")


def fetch_json_object(fetcher: Fetcher, url: str) -> Optional[Dict[str, Any]]:
    """Fetch ``url`` and parse it as a JSON object, or return None."""
    try:
        body = fetcher.fetch(url)
        data = json.loads(body)
    except (FetchError, ValueError) as e:
        logger.log_fallback(from_source=url, to_source="next_strategy", reason=type(e).__name__)
        return None
    if not isinstance(data, dict):
        logger.log_fallback(from_source=url, to_source="next_strategy", reason="not_a_json_object")
        return None
    return data


def _join(base_url: str, href: str) -> Optional[str]:
    """
    Resolve a link href against the page URL; None for hrefs that cannot be
    parsed, such as a malformed IPv6 host.
    """
    try:
        return urljoin(base_url, href)
    except ValueError:
        logger.log_fallback(from_source=href, to_source="next_strategy", reason="invalid_href")
        return None


def manifest_url(document: Document, base_url: str) -> Optional[str]:
    """Absolute URL of the first ``<link rel="manifest">`` with an href."""
    for link in document.select('link[rel~="manifest"]'):
        href = link.get("href")
        if href and href.strip():
            return _join(base_url, href.strip())
    return None


def fetch_manifest(document: Document, base_url: str, fetcher: Fetcher) -> Optional[Dict[str, Any]]:
    """The page's web app manifest, fetched fresh."""
    url = manifest_url(document, base_url)
    if url is None:
        return None
    return fetch_json_object(fetcher, url)


def oembed_url(document: Document, base_url: str) -> Optional[str]:
    """Absolute URL of the first JSON oEmbed endpoint advertised by the page."""
    for link in document.select('link[rel~="alternate"]'):
        link_type = (link.get("type") or "").strip().lower()
        href = (link.get("href") or "").strip()
        if link_type == OEMBED_JSON_TYPE and href:
            return _join(base_url, href)
    return None


def fetch_oembed(document: Document, base_url: str, fetcher: Fetcher) -> Optional[Dict[str, Any]]:
    """The page's JSON oEmbed descriptor, fetched fresh."""
    url = oembed_url(document, base_url)
    if url is None:
        return None
    return fetch_json_object(fetcher, url)
