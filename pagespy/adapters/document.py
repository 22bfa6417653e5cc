"""
Document accessor for pagespy.
Wraps a parsed HTML page and answers the selector queries the field
resolvers are built from.
"""
import json
from typing import Any, Iterable, List, Optional, Set

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from pagespy.utils.text import normalize

JSONLD_SELECTOR = 'script[type="application/ld+json"]'


def _attr(element: Tag, name: str) -> Optional[str]:
    """Read an attribute as a string (multi-valued attributes are joined)."""
    value = element.get(name)
    if isinstance(value, list):
        return " ".join(value)
    return value


def element_text(element: Tag) -> str:
    """Concatenated text content of ``element``, normalized."""
    return normalize(element.get_text())


class Document:
    """
    A parsed HTML document.

    Every query takes a CSS selector and an optional ``scope`` element; with
    no scope the whole document is searched. Selectors that fail to parse
    behave as if they matched nothing.
    """

    def __init__(self, html: str, parser: str = "lxml"):
        self.soup = BeautifulSoup(html, parser)
        self._jsonld: Optional[List[Any]] = None

    def select(self, selector: str, scope: Optional[Tag] = None) -> List[Tag]:
        """All elements matching ``selector`` in document order."""
        root = scope if scope is not None else self.soup
        try:
            return root.select(selector)
        except (SelectorSyntaxError, NotImplementedError):
            return []

    def first_text(self, selector: str, scope: Optional[Tag] = None) -> Optional[str]:
        """Normalized text of the first match, or None if it is empty."""
        root = scope if scope is not None else self.soup
        try:
            element = root.select_one(selector)
        except (SelectorSyntaxError, NotImplementedError):
            return None
        if element is None:
            return None
        return element_text(element) or None

    def attr_values(self, selector: str, attr: str, scope: Optional[Tag] = None) -> List[str]:
        """Non-empty normalized ``attr`` values across all matches, in order."""
        values = []
        for element in self.select(selector, scope):
            value = normalize(_attr(element, attr))
            if value:
                values.append(value)
        return values

    def first_attr(self, selector: str, attr: str, scope: Optional[Tag] = None) -> Optional[str]:
        """First non-empty normalized ``attr`` value across all matches."""
        for value in self.attr_values(selector, attr, scope):
            return value
        return None

    def all_attrs(self, selector: str, attr: str, scope: Optional[Tag] = None) -> Set[str]:
        """Deduplicated set of non-empty ``attr`` values across all matches."""
        return set(self.attr_values(selector, attr, scope))

    def texts(self, selector: str, scope: Optional[Tag] = None) -> List[str]:
        """Non-empty normalized texts of every match, in order."""
        return [text for text in map(element_text, self.select(selector, scope)) if text]

    def raw_attr_values(self, selector: str, attrs: Iterable[str], scope: Optional[Tag] = None) -> List[str]:
        """
        For each match, the first of ``attrs`` holding a non-blank value.

        Values are only stripped, not whitespace-collapsed, since they are
        URLs rather than prose.
        """
        attrs = tuple(attrs)
        values = []
        for element in self.select(selector, scope):
            for name in attrs:
                value = (_attr(element, name) or "").strip()
                if value:
                    values.append(value)
                    break
        return values

    def head_meta(self, names: Iterable[str]) -> List[str]:
        """
        ``content`` of every ``<head><meta name=...>`` whose name matches one
        of ``names`` case-insensitively, in document order.
        """
        wanted = {name.lower() for name in names}
        values = []
        for meta in self.select("head meta"):
            name = (_attr(meta, "name") or "").lower()
            if name in wanted:
                content = normalize(_attr(meta, "content"))
                if content:
                    values.append(content)
        return values

    def jsonld_blocks(self) -> List[Any]:
        """
        Every JSON-LD script block parsed independently.

        Blocks that are not valid JSON, or nest too deeply to decode, are
        skipped. The result is computed once per document.
        """
        if self._jsonld is None:
            blocks = []
            for script in self.select(JSONLD_SELECTOR):
                raw = script.string if script.string is not None else script.get_text()
                try:
                    blocks.append(json.loads(raw))
                except (ValueError, RecursionError):
                    continue
            self._jsonld = blocks
        return self._jsonld
