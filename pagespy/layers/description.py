"""Description resolver."""
from typing import Optional

from pagespy.layers import jsonld
from pagespy.layers.resolver import (
    FieldResolver,
    ResolutionContext,
    content_or_text,
    first,
    first_text_of,
)
from pagespy.layers.secondary import fetch_manifest
from pagespy.utils.text import clean


def meta_description(ctx: ResolutionContext) -> Optional[str]:
    return first(ctx.document.head_meta(["description"]))


def og_description(ctx: ResolutionContext) -> Optional[str]:
    return ctx.document.first_attr('head meta[property="og:description"]', "content")


def twitter_description(ctx: ResolutionContext) -> Optional[str]:
    return ctx.document.first_attr('head meta[name="twitter:description"]', "content")


def jsonld_description(ctx: ResolutionContext) -> Optional[str]:
    return first(jsonld.descriptions(ctx.document.jsonld_blocks()))


def microdata_description(ctx: ResolutionContext) -> Optional[str]:
    return content_or_text(
        ctx.document,
        ['[itemprop="description"]', '[itemprop="abstract"]', '[property="schema:description"]'],
    )


def microformats_summary(ctx: ResolutionContext) -> Optional[str]:
    return first_text_of(ctx.document, [".h-entry .p-summary", ".p-summary"])


def dublin_core_description(ctx: ResolutionContext) -> Optional[str]:
    return first(ctx.document.head_meta(["dc.description", "dcterms.description", "dcterms.abstract"]))


def manifest_description(ctx: ResolutionContext) -> Optional[str]:
    manifest = fetch_manifest(ctx.document, ctx.url, ctx.fetcher)
    if manifest is None:
        return None
    value = manifest.get("description")
    return clean(value) if isinstance(value, str) else None


description_resolver: FieldResolver[str] = FieldResolver(
    "description",
    [
        meta_description,
        og_description,
        twitter_description,
        jsonld_description,
        microdata_description,
        microformats_summary,
        dublin_core_description,
        manifest_description,
    ],
)
