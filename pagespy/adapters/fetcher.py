"""
HTTP fetch adapter for pagespy.
Used for the primary page and for the manifest/oEmbed secondary lookups.
"""
from typing import Optional, Protocol

import httpx

from pagespy.config import Config, config as default_config
from pagespy.exceptions import FetchError
from pagespy.utils.logger import LayerLogger


class Fetcher(Protocol):
    """Anything that can turn a URL into response bytes."""

    def fetch(self, url: str) -> bytes:
        """Return the body of ``url`` or raise :class:`FetchError`."""
        ...


class HttpFetcher:
    """
    httpx-backed fetcher.

    One client is shared by every request made through this fetcher; its
    user agent and timeout are fixed at construction.
    """

    def __init__(self, timeout: float = 10, user_agent: Optional[str] = None):
        self.timeout = timeout
        self.user_agent = user_agent or default_config.USER_AGENT
        self.logger = LayerLogger("fetcher")
        self._client = httpx.Client(
            headers=self._get_headers(),
            timeout=self.timeout,
            follow_redirects=True,
        )

    @classmethod
    def from_config(cls, cfg: Config = default_config) -> "HttpFetcher":
        """Build a fetcher from application configuration."""
        return cls(timeout=cfg.REQUEST_TIMEOUT, user_agent=cfg.USER_AGENT)

    def _get_headers(self) -> dict:
        """Get request headers mimicking a browser."""
        return {
            "User-Agent": self.user_agent,
            "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
            "Accept-Language": "en-US,en;q=0.5",
        }

    def fetch(self, url: str) -> bytes:
        """
        Fetch ``url`` and return the raw response body.

        Raises:
            FetchError: On transport failures and 4xx/5xx responses.
        """
        self.logger.log_action("fetch", "started", url=url)

        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            self.logger.log_http_fetch(url, status_code, "http_error")
            raise FetchError(url, f"HTTP {status_code}", status_code=status_code) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self.logger.log_http_fetch(url, None, "transport_error", error=str(e))
            raise FetchError(url, str(e) or type(e).__name__) from e

        self.logger.log_http_fetch(
            url,
            response.status_code,
            "ok",
            content_length=len(response.content),
        )
        return response.content

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "HttpFetcher":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
