"""
Thumbnail resolver.

Every candidate URL goes through :func:`absolutize`; a candidate that is
rejected counts as a miss and the next candidate, then the next strategy,
is tried.
"""
from typing import Optional

from pagespy.layers import jsonld
from pagespy.layers.resolver import FieldResolver, ResolutionContext, first_absolute
from pagespy.layers.secondary import fetch_oembed

# Attributes an element may carry its image URL in, by preference
IMAGE_URL_ATTRS = ("content", "src", "href", "data-src")
AMP_POSTER_ATTRS = ("poster-portrait-src", "poster-landscape-src", "poster-square-src")
MICROFORMATS_IMAGE_SELECTORS = (".h-entry .u-featured", ".u-featured", ".h-entry .u-photo", ".u-photo")


def _meta_image(ctx: ResolutionContext, *selectors: str) -> Optional[str]:
    for selector in selectors:
        url = first_absolute(ctx.url, ctx.document.attr_values(selector, "content"))
        if url:
            return url
    return None


def _element_image(ctx: ResolutionContext, *selectors: str) -> Optional[str]:
    for selector in selectors:
        url = first_absolute(ctx.url, ctx.document.raw_attr_values(selector, IMAGE_URL_ATTRS))
        if url:
            return url
    return None


def og_image_secure_url(ctx: ResolutionContext) -> Optional[str]:
    return _meta_image(ctx, 'head meta[property="og:image:secure_url"]')


def og_image_url(ctx: ResolutionContext) -> Optional[str]:
    return _meta_image(ctx, 'head meta[property="og:image:url"]')


def og_image(ctx: ResolutionContext) -> Optional[str]:
    return _meta_image(ctx, 'head meta[property="og:image"]')


def twitter_image(ctx: ResolutionContext) -> Optional[str]:
    return _meta_image(ctx, 'head meta[name="twitter:image"]', 'head meta[name="twitter:image:src"]')


def jsonld_primary_image(ctx: ResolutionContext) -> Optional[str]:
    return first_absolute(ctx.url, jsonld.primary_images(ctx.document.jsonld_blocks()))


def microdata_primary_image(ctx: ResolutionContext) -> Optional[str]:
    return _element_image(ctx, '[itemprop="primaryImageOfPage"]', '[property="schema:primaryImageOfPage"]')


def jsonld_image(ctx: ResolutionContext) -> Optional[str]:
    return first_absolute(ctx.url, jsonld.images(ctx.document.jsonld_blocks()))


def microdata_image(ctx: ResolutionContext) -> Optional[str]:
    return _element_image(ctx, '[itemprop="image"]', '[property="schema:image"]')


def microformats_image(ctx: ResolutionContext) -> Optional[str]:
    return _element_image(ctx, *MICROFORMATS_IMAGE_SELECTORS)


def oembed_thumbnail(ctx: ResolutionContext) -> Optional[str]:
    """``thumbnail_url``, else ``url`` (photo embeds), of the JSON oEmbed descriptor."""
    oembed = fetch_oembed(ctx.document, ctx.url, ctx.fetcher)
    if oembed is None:
        return None
    candidates = [oembed.get(key) for key in ("thumbnail_url", "url")]
    return first_absolute(ctx.url, [c for c in candidates if isinstance(c, str)])


def amp_story_poster(ctx: ResolutionContext) -> Optional[str]:
    stories = ctx.document.select("amp-story")
    if not stories:
        return None
    story = stories[0]
    return first_absolute(ctx.url, [story.get(attr) for attr in AMP_POSTER_ATTRS])


def rel_image_src(ctx: ResolutionContext) -> Optional[str]:
    # Not a standard; only consulted when nothing else matched
    return first_absolute(ctx.url, [link.get("href") for link in ctx.document.select('link[rel="image_src"]')])


thumbnail_resolver: FieldResolver[str] = FieldResolver(
    "thumbnail",
    [
        og_image_secure_url,
        og_image_url,
        og_image,
        twitter_image,
        jsonld_primary_image,
        microdata_primary_image,
        jsonld_image,
        microdata_image,
        microformats_image,
        oembed_thumbnail,
        amp_story_poster,
        rel_image_src,
    ],
)
