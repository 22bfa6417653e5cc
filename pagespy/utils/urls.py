"""URL absolutization used by every thumbnail strategy."""
from typing import Optional
from urllib.parse import quote, urljoin, urlsplit, urlunsplit

WEB_SCHEMES = ("http", "https")

# Reserved characters and existing escapes are left alone
_PATH_SAFE = "/:@!$&'()*+,;=%~"
_QUERY_SAFE = _PATH_SAFE + "?"


def _is_web_url(url: str) -> bool:
    parts = urlsplit(url)
    return parts.scheme in WEB_SCHEMES and bool(parts.netloc)


def _encode(url: str) -> str:
    """Percent-encode spaces and other unsafe characters outside the host."""
    parts = urlsplit(url)
    return urlunsplit((
        parts.scheme,
        parts.netloc,
        quote(parts.path, safe=_PATH_SAFE),
        quote(parts.query, safe=_QUERY_SAFE),
        quote(parts.fragment, safe=_QUERY_SAFE),
    ))


def absolutize(base: str, candidate: Optional[str]) -> Optional[str]:
    """
    Turn ``candidate`` into an absolute http(s) URL relative to ``base``.

    Rules, in order:
    1. ``data:`` URIs and bare fragments are rejected.
    2. An absolute http/https URL with a host is kept.
    3. Any other absolute URL is rejected, including ``http:/path`` with no
       host.
    4. Anything else is joined against ``base``; the join must produce an
       http/https URL with a host.

    The accepted URL has unsafe path, query and fragment characters
    percent-encoded.

    Returns:
        The absolute URL, or None when the candidate is rejected.
    """
    if candidate is None:
        return None
    value = candidate.strip()
    if not value or value.startswith("data:") or value.startswith("#"):
        return None

    try:
        parts = urlsplit(value)
        if parts.scheme:
            # Already absolute: only web schemes are usable as thumbnails
            if parts.scheme in WEB_SCHEMES and parts.netloc:
                return _encode(value)
            return None

        joined = urljoin(base, value)
        return _encode(joined) if _is_web_url(joined) else None
    except ValueError:
        return None
