"""Layers package initialization."""
from pagespy.layers.resolver import FieldResolver, Resolution, ResolutionContext
from pagespy.layers.title import title_resolver, resolve_title
from pagespy.layers.site_name import site_name_resolver
from pagespy.layers.authors import authors_resolver
from pagespy.layers.description import description_resolver
from pagespy.layers.thumbnail import thumbnail_resolver
from pagespy.layers.assembler import EntryAssembler, decode_body

__all__ = [
    "FieldResolver",
    "Resolution",
    "ResolutionContext",
    "title_resolver",
    "resolve_title",
    "site_name_resolver",
    "authors_resolver",
    "description_resolver",
    "thumbnail_resolver",
    "EntryAssembler",
    "decode_body",
]
