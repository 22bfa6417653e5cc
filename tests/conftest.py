"""Shared fixtures: a dict-backed fetcher and resolution-context builders."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Union

import pytest

from pagespy.adapters.document import Document
from pagespy.exceptions import FetchError
from pagespy.layers.resolver import ResolutionContext

BASE_URL = "https://example.com/articles/post"

Body = Union[bytes, str, Dict[str, Any], Exception]


class FakeFetcher:
    """Serves canned bodies by URL; unknown URLs fail like a 404.

    Dict bodies are served as JSON, exceptions are raised.
    """

    def __init__(self, responses: Optional[Dict[str, Body]] = None) -> None:
        self.responses: Dict[str, Body] = dict(responses or {})
        self.calls: List[str] = []

    def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        if url not in self.responses:
            raise FetchError(url, "HTTP 404", status_code=404)
        body = self.responses[url]
        if isinstance(body, Exception):
            raise body
        if isinstance(body, dict):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode("utf-8")
        return body


def page(head: str = "", body: str = "") -> str:
    """A minimal HTML document with the given head and body markup."""
    return f"<!DOCTYPE html><html><head>{head}</head><body>{body}</body></html>"


def jsonld_script(data: Any) -> str:
    return f'<script type="application/ld+json">{json.dumps(data)}</script>'


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def make_ctx(fetcher):
    """Build a ResolutionContext for an HTML string (defaults to BASE_URL)."""

    def _make(html: str, url: str = BASE_URL) -> ResolutionContext:
        return ResolutionContext(url=url, document=Document(html), fetcher=fetcher)

    return _make
