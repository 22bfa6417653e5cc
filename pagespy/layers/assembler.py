"""
Entry assembler for pagespy.
Orchestrates fetch -> parse -> content extraction -> field resolvers -> Entry.
"""
from typing import Optional

from bs4 import UnicodeDammit

from pagespy.adapters.document import Document
from pagespy.adapters.fetcher import Fetcher, HttpFetcher
from pagespy.adapters.readability import extract_full_text
from pagespy.exceptions import BodyReadError
from pagespy.layers.authors import authors_resolver
from pagespy.layers.description import description_resolver
from pagespy.layers.resolver import Resolution, ResolutionContext
from pagespy.layers.site_name import site_name_resolver
from pagespy.layers.thumbnail import thumbnail_resolver
from pagespy.layers.title import resolve_title
from pagespy.models.entry import Entry
from pagespy.utils.logger import LayerLogger


def decode_body(url: str, body: bytes) -> str:
    """
    Decode a fetched HTML body, honouring BOMs and declared charsets.

    Raises:
        BodyReadError: If no encoding can decode the body.
    """
    markup = UnicodeDammit(body, is_html=True).unicode_markup
    if markup is None:
        raise BodyReadError(url)
    return markup


class EntryAssembler:
    """
    Builds one :class:`Entry` per extraction request.

    The fetcher is used for the primary page and for the manifest and
    oEmbed lookups; it is the only state shared between requests.
    """

    def __init__(self, fetcher: Optional[Fetcher] = None):
        self._owns_fetcher = fetcher is None
        self.fetcher = fetcher if fetcher is not None else HttpFetcher.from_config()
        self.logger = LayerLogger("assembler")

    def assemble(self, url: str, title: Optional[str] = None) -> Entry:
        """
        Fetch ``url`` and resolve its metadata.

        Args:
            url: Absolute http(s) URL of the page
            title: Caller-supplied title; bypasses the title resolver

        Raises:
            FetchError: If the page cannot be fetched.
            BodyReadError: If the page body cannot be decoded.
        """
        self.logger.log_action("extraction", "started", url=url)
        body = self.fetcher.fetch(url)
        html = decode_body(url, body)
        return self.from_html(url, html, title=title)

    def from_html(self, url: str, html: str, title: Optional[str] = None) -> Entry:
        """Resolve metadata for an already fetched page."""
        document = Document(html)
        ctx = ResolutionContext(url=url, document=document, fetcher=self.fetcher)

        full_text = extract_full_text(html, url)

        page_title = self._log_resolution("title", resolve_title(ctx, title), url)
        site_title = self._log_resolution("site_name", site_name_resolver.resolve(ctx), url)
        authors = self._log_resolution("authors", authors_resolver.resolve(ctx), url)
        description = self._log_resolution("description", description_resolver.resolve(ctx), url)
        thumbnail = self._log_resolution("thumbnail", thumbnail_resolver.resolve(ctx), url)

        entry = Entry(
            url=url,
            page_title=page_title.value or "",
            site_title=site_title.value or "",
            authors=frozenset(authors.value or ()),
            full_text=full_text,
            description=description.value,
            thumbnail=thumbnail.value,
        )

        view = entry.to_view()
        self.logger.log_resolution(
            fields_present=[key for key in ("author", "description", "thumbnail") if key in view],
            fields_missing=[key for key in ("author", "description", "thumbnail") if key not in view],
            url=url,
            entry_id=str(entry.id),
            full_text_length=len(full_text),
        )
        self.logger.log_action("extraction", "completed", url=url)
        return entry

    def close(self) -> None:
        """Close the fetcher if this assembler created it."""
        if self._owns_fetcher:
            self.fetcher.close()

    def _log_resolution(self, field: str, resolution: Resolution, url: str) -> Resolution:
        if resolution.found:
            self.logger.log_decision(
                decision=resolution.strategy,
                reason=f"{field}_resolved",
                url=url,
                field=field,
            )
        else:
            self.logger.log_decision(
                decision="none",
                reason=f"{field}_not_found",
                url=url,
                field=field,
            )
        return resolution
