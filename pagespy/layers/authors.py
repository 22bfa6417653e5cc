"""
Author resolver.

Unlike the scalar fields, each strategy gathers every author it can find
on the page into a set; the first strategy whose set is non-empty wins.
"""
from typing import Set

from pagespy.adapters.document import element_text
from pagespy.layers import jsonld
from pagespy.layers.resolver import FieldResolver, ResolutionContext
from pagespy.utils.text import normalize

MICROFORMATS_AUTHOR_SELECTORS = (
    ".h-entry .p-author",
    ".p-author",
    ".h-entry .author",
    ".author.vcard",
)
ADDRESS_SELECTORS = ("article address", "footer address", "address")


def meta_author(ctx: ResolutionContext) -> Set[str]:
    return ctx.document.all_attrs('head meta[name="author"]', "content")


def rel_author(ctx: ResolutionContext) -> Set[str]:
    """Text of ``rel=author`` anchors and links, else their ``title``."""
    found: Set[str] = set()
    for selector in ('a[rel~="author"]', 'link[rel~="author"]'):
        for element in ctx.document.select(selector):
            name = element_text(element) or normalize(element.get("title"))
            if name:
                found.add(name)
    return found


def jsonld_authors(ctx: ResolutionContext) -> Set[str]:
    return jsonld.authors(ctx.document.jsonld_blocks())


def _itemprop_authors(ctx: ResolutionContext, author_selector: str, name_selector: str) -> Set[str]:
    """
    Authors from an attribute-based scheme: the author element's ``content``
    and text, plus any name property nested inside it.
    """
    document = ctx.document
    found = document.all_attrs(author_selector, "content")
    for element in document.select(author_selector):
        text = element_text(element)
        if text:
            found.add(text)
        found |= document.all_attrs(name_selector, "content", scope=element)
        found.update(document.texts(name_selector, scope=element))
    return found


def microdata_authors(ctx: ResolutionContext) -> Set[str]:
    return _itemprop_authors(ctx, '[itemprop="author"]', '[itemprop="name"]')


def rdfa_authors(ctx: ResolutionContext) -> Set[str]:
    return _itemprop_authors(ctx, '[property="schema:author"]', '[property="schema:name"]')


def microformats_authors(ctx: ResolutionContext) -> Set[str]:
    found: Set[str] = set()
    for selector in MICROFORMATS_AUTHOR_SELECTORS:
        for element in ctx.document.select(selector):
            name = ctx.document.first_text(".p-name", scope=element)
            if name:
                found.add(name)
            text = element_text(element)
            if text:
                found.add(text)
    return found


def og_article_authors(ctx: ResolutionContext) -> Set[str]:
    return ctx.document.all_attrs('head meta[property="article:author"]', "content")


def twitter_creator(ctx: ResolutionContext) -> Set[str]:
    """``twitter:creator`` handles without their leading ``@``."""
    handles = ctx.document.all_attrs('head meta[name="twitter:creator"]', "content")
    return {handle.lstrip("@") for handle in handles if handle.lstrip("@")}


def dublin_core_creators(ctx: ResolutionContext) -> Set[str]:
    return set(ctx.document.head_meta(["dc.creator", "dcterms.creator"]))


def address_authors(ctx: ResolutionContext) -> Set[str]:
    """``<address>`` inside ``<article>``, else inside ``<footer>``, else anywhere."""
    for selector in ADDRESS_SELECTORS:
        found = set(ctx.document.texts(selector))
        if found:
            return found
    return set()


authors_resolver: FieldResolver[Set[str]] = FieldResolver(
    "authors",
    [
        meta_author,
        rel_author,
        jsonld_authors,
        microdata_authors,
        rdfa_authors,
        microformats_authors,
        og_article_authors,
        twitter_creator,
        dublin_core_creators,
        address_authors,
    ],
)
