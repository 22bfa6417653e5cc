"""Site (publisher) name resolver."""
from typing import Optional
from urllib.parse import urlsplit

from pagespy.layers import jsonld
from pagespy.layers.resolver import (
    FieldResolver,
    ResolutionContext,
    content_or_text,
    first,
    first_text_of,
)
from pagespy.layers.secondary import fetch_manifest
from pagespy.utils.text import normalize


def og_site_name(ctx: ResolutionContext) -> Optional[str]:
    return ctx.document.first_attr('head meta[property="og:site_name"]', "content")


def manifest_site_name(ctx: ResolutionContext) -> Optional[str]:
    """``name``, else ``short_name``, from the linked web app manifest."""
    manifest = fetch_manifest(ctx.document, ctx.url, ctx.fetcher)
    if manifest is None:
        return None
    for key in ("name", "short_name"):
        value = manifest.get(key)
        if isinstance(value, str) and normalize(value):
            return normalize(value)
    return None


def jsonld_site_name(ctx: ResolutionContext) -> Optional[str]:
    return first(jsonld.site_names(ctx.document.jsonld_blocks()))


def microdata_site_name(ctx: ResolutionContext) -> Optional[str]:
    return content_or_text(
        ctx.document,
        [
            '[itemscope][itemtype*="schema.org/WebSite"] [itemprop="name"]',
            '[itemscope][itemtype*="schema.org/Organization"] [itemprop="name"]',
            '[property="schema:name"]',
        ],
    )


def microformats_site_name(ctx: ResolutionContext) -> Optional[str]:
    return first_text_of(ctx.document, [".h-card .p-name", ".p-name"])


def application_name(ctx: ResolutionContext) -> Optional[str]:
    return ctx.document.first_attr('head meta[name="application-name"]', "content")


def url_host(ctx: ResolutionContext) -> Optional[str]:
    return urlsplit(ctx.url).hostname


site_name_resolver: FieldResolver[str] = FieldResolver(
    "site_name",
    [
        og_site_name,
        manifest_site_name,
        jsonld_site_name,
        microdata_site_name,
        microformats_site_name,
        application_name,
        url_host,
    ],
)
