"""Page title resolver."""
from typing import Optional

from pagespy.layers import jsonld
from pagespy.layers.resolver import (
    FieldResolver,
    Resolution,
    ResolutionContext,
    content_or_text,
    first,
    first_text_of,
)
from pagespy.utils.text import normalize


def head_title(ctx: ResolutionContext) -> Optional[str]:
    return ctx.document.first_text("head > title")


def og_title(ctx: ResolutionContext) -> Optional[str]:
    return ctx.document.first_attr('head meta[property="og:title"]', "content")


def twitter_title(ctx: ResolutionContext) -> Optional[str]:
    return ctx.document.first_attr('head meta[name="twitter:title"]', "content")


def jsonld_title(ctx: ResolutionContext) -> Optional[str]:
    return first(jsonld.titles(ctx.document.jsonld_blocks()))


def microdata_title(ctx: ResolutionContext) -> Optional[str]:
    return content_or_text(ctx.document, ['[itemprop="headline"]', '[itemprop="name"]'])


def microformats_title(ctx: ResolutionContext) -> Optional[str]:
    return first_text_of(ctx.document, [".h-entry .p-name", ".p-name", ".h-entry .entry-title"])


def rdfa_title(ctx: ResolutionContext) -> Optional[str]:
    return content_or_text(
        ctx.document,
        ['[property="schema:headline"]', '[property="schema:name"]', '[property="dcterms:title"]'],
    )


def dublin_core_title(ctx: ResolutionContext) -> Optional[str]:
    return first(ctx.document.head_meta(["dc.title", "dcterms.title"]))


title_resolver: FieldResolver[str] = FieldResolver(
    "title",
    [
        head_title,
        og_title,
        twitter_title,
        jsonld_title,
        microdata_title,
        microformats_title,
        rdfa_title,
        dublin_core_title,
    ],
)


def resolve_title(ctx: ResolutionContext, override: Optional[str] = None) -> Resolution[str]:
    """A caller-supplied title wins over every strategy."""
    title = normalize(override)
    if title:
        return Resolution(value=title, strategy="override")
    return title_resolver.resolve(ctx)
