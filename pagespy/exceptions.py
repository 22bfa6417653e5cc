"""
Errors raised by pagespy.

Only the primary page fetch and the decoding of its body are fatal; every
other failure inside the resolvers is a soft miss and never surfaces here.
"""
from typing import Optional


class PageSpyError(Exception):
    """Base class for errors propagated to callers of the assembler."""


class FetchError(PageSpyError):
    """A URL could not be fetched (transport failure or HTTP error status)."""

    def __init__(self, url: str, reason: str, status_code: Optional[int] = None):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Failed to fetch URL {url}: {reason}")


class BodyReadError(PageSpyError):
    """A fetched body could not be decoded to text."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Failed to read response body as text: {url}")
