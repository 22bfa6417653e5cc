"""
JSON-LD walker for pagespy.

Collects candidate values for one logical field out of every JSON-LD block
on a page. Blocks are walked by recursive descent:

- on an object, the field's property rule runs first, then ``@graph`` is
  walked, then every remaining member value (structured data is often nested
  under unrelated properties such as ``publisher`` or ``mainEntity``);
- on an array, every element is walked in order.

Candidates therefore come out in traversal order: script blocks in document
order, then key order within a block.
"""
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Set

from pagespy.utils.text import normalize

Node = Dict[str, Any]
Visitor = Callable[[Node, Any], Optional[Iterable[str]]]

TITLE_KEYS = ("headline", "name", "alternativeHeadline")
DESCRIPTION_KEYS = ("description", "abstract")
AUTHOR_KEYS = ("author", "creator")

# Nodes nested deeper than this are not visited
MAX_DEPTH = 64


class SchemaType(str, Enum):
    """schema.org types that gate a property rule."""
    WEB_SITE = "WebSite"
    WEB_PAGE = "WebPage"


def type_names(node: Node) -> List[str]:
    """The ``@type`` of a node as a list of strings."""
    value = node.get("@type")
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [item for item in value if isinstance(item, str)]
    return []


def has_type(node: Node, schema_type: SchemaType) -> bool:
    """Whether ``node`` declares ``schema_type``."""
    names = type_names(node)
    if schema_type is SchemaType.WEB_SITE:
        # Prefixed and IRI forms ("schema:WebSite", "https://schema.org/WebSite") count too
        return any(schema_type.value in name for name in names)
    if schema_type is SchemaType.WEB_PAGE:
        return schema_type.value in names
    return False


def walk(value: Any, visit: Visitor, out: Any, depth: int = 0) -> None:
    """
    Recursively visit every object in ``value``.

    ``visit`` receives each object and the accumulator; it may return member
    keys to walk straight after it, ahead of ``@graph`` and the remaining
    members. Anything nested deeper than ``MAX_DEPTH`` is ignored.
    """
    if depth > MAX_DEPTH:
        return
    if isinstance(value, dict):
        first = tuple(visit(value, out) or ())
        for key in first:
            if key in value:
                walk(value[key], visit, out, depth + 1)
        graph = value.get("@graph")
        if graph is not None:
            walk(graph, visit, out, depth + 1)
        for key, member in value.items():
            if key == "@graph" or key in first:
                continue
            walk(member, visit, out, depth + 1)
    elif isinstance(value, list):
        for item in value:
            walk(item, visit, out, depth + 1)


def _collect(blocks: Iterable[Any], visit: Visitor) -> List[str]:
    out: List[str] = []
    for block in blocks:
        walk(block, visit, out)
    return out


def _push_text(value: Any, out: List[str]) -> None:
    if isinstance(value, str):
        text = normalize(value)
        if text:
            out.append(text)


# =========================================================================
# TEXT FIELDS
# =========================================================================

def _visit_title(node: Node, out: List[str]) -> None:
    for key in TITLE_KEYS:
        _push_text(node.get(key), out)


def _visit_site_name(node: Node, out: List[str]) -> Iterable[str]:
    if has_type(node, SchemaType.WEB_SITE):
        _push_text(node.get("name"), out)

    publisher = node.get("publisher")
    if isinstance(publisher, dict):
        _push_text(publisher.get("name"), out)
    return ("publisher",)


def _visit_description(node: Node, out: List[str]) -> None:
    for key in DESCRIPTION_KEYS:
        _push_text(node.get(key), out)


def titles(blocks: Iterable[Any]) -> List[str]:
    """``headline``, ``name`` and ``alternativeHeadline`` candidates."""
    return _collect(blocks, _visit_title)


def site_names(blocks: Iterable[Any]) -> List[str]:
    """``WebSite.name`` and ``publisher.name`` candidates."""
    return _collect(blocks, _visit_site_name)


def descriptions(blocks: Iterable[Any]) -> List[str]:
    """``description`` and ``abstract`` candidates."""
    return _collect(blocks, _visit_description)


# =========================================================================
# AUTHORS
# =========================================================================

def looks_like_url(value: str) -> bool:
    lowered = value.lower()
    return lowered.startswith("http://") or lowered.startswith("https://")


def _add_author(value: Any, out: Set[str]) -> None:
    """Add the name(s) held by an ``author``/``creator`` value to ``out``."""
    if isinstance(value, str):
        name = normalize(value)
        if name and not looks_like_url(name):
            out.add(name)
    elif isinstance(value, dict):
        name = value.get("name")
        if isinstance(name, str) and normalize(name):
            out.add(normalize(name))
            return
        parts = [
            normalize(part)
            for part in (value.get("givenName"), value.get("familyName"))
            if isinstance(part, str)
        ]
        full_name = " ".join(part for part in parts if part)
        if full_name:
            out.add(full_name)
    elif isinstance(value, list):
        for item in value:
            _add_author(item, out)


def _visit_authors(node: Node, out: Set[str]) -> None:
    for key in AUTHOR_KEYS:
        if key in node:
            _add_author(node[key], out)


def authors(blocks: Iterable[Any]) -> Set[str]:
    """Every author and creator name found anywhere in the blocks."""
    out: Set[str] = set()
    for block in blocks:
        walk(block, _visit_authors, out)
    return out


# =========================================================================
# IMAGES
# =========================================================================

def _push_image(value: Any, out: List[str]) -> None:
    """Append the URL(s) held by an image value: a string, ImageObject or list."""
    if isinstance(value, str):
        url = value.strip()
        if url:
            out.append(url)
    elif isinstance(value, dict):
        url = value.get("contentUrl")
        if not isinstance(url, str) or not url.strip():
            url = value.get("url")
        if isinstance(url, str) and url.strip():
            out.append(url.strip())
    elif isinstance(value, list):
        for item in value:
            _push_image(item, out)


def _visit_primary_image(node: Node, out: List[str]) -> None:
    if has_type(node, SchemaType.WEB_PAGE) and "primaryImageOfPage" in node:
        _push_image(node["primaryImageOfPage"], out)


def _visit_image(node: Node, out: List[str]) -> None:
    image = node.get("image")
    if image is None:
        return
    if isinstance(image, dict) and image.get("representativeOfPage") is True:
        preferred: List[str] = []
        _push_image(image, preferred)
        out[0:0] = preferred
    else:
        _push_image(image, out)


def primary_images(blocks: Iterable[Any]) -> List[str]:
    """``primaryImageOfPage`` URLs of WebPage nodes only."""
    return _collect(blocks, _visit_primary_image)


def images(blocks: Iterable[Any]) -> List[str]:
    """
    ``image`` URLs. An ImageObject marked ``representativeOfPage`` is
    inserted at the front of the candidates found so far instead of being
    appended.
    """
    return _collect(blocks, _visit_image)
