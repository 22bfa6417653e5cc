"""Tests for the entry assembler: fetch, decode and resolve into an Entry."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from pagespy.adapters.fetcher import HttpFetcher
from pagespy.exceptions import BodyReadError, FetchError
from pagespy.layers.assembler import EntryAssembler, decode_body
from pagespy.models.entry import Entry

from tests.conftest import BASE_URL, FakeFetcher, jsonld_script, page

_ARTICLE_HTML = page(
    head=(
        "<title>Battery Chemistry Explained</title>"
        '<meta property="og:site_name" content="Energy Weekly">'
        '<meta name="author" content="Jane Doe">'
        '<meta name="author" content="Jane Doe">'
        '<meta name="description" content="How lithium cells store charge.">'
        '<meta property="og:image" content="/images/cell.jpg">'
    ),
    body=(
        "<main><article>"
        "<h1>Battery Chemistry Explained</h1>"
        "<p>Lithium-ion cells move ions between two electrodes through an electrolyte.</p>"
        "<p>During charging, ions travel from the cathode to the anode and are stored there.</p>"
        "</article></main>"
    ),
)


class TestAssemble:
    def test_full_article(self) -> None:
        fetcher = FakeFetcher({BASE_URL: _ARTICLE_HTML})
        entry = EntryAssembler(fetcher=fetcher).assemble(BASE_URL)

        assert isinstance(entry, Entry)
        assert entry.url == BASE_URL
        assert entry.page_title == "Battery Chemistry Explained"
        assert entry.site_title == "Energy Weekly"
        assert entry.authors == frozenset({"Jane Doe"})
        assert entry.description == "How lithium cells store charge."
        assert entry.thumbnail == "https://example.com/images/cell.jpg"
        assert "electrodes" in entry.full_text
        assert fetcher.calls == [BASE_URL]

    def test_title_only_page(self) -> None:
        fetcher = FakeFetcher({BASE_URL: page(head="<title>Hello</title>")})
        entry = EntryAssembler(fetcher=fetcher).assemble(BASE_URL)

        assert entry.page_title == "Hello"
        assert entry.site_title == "example.com"
        assert entry.authors == frozenset()
        assert entry.description is None
        assert entry.thumbnail is None
        view = entry.to_view()
        assert "author" not in view
        assert "description" not in view
        assert "thumbnail" not in view

    def test_twitter_creator_only(self) -> None:
        html = page(head='<title>Post</title><meta name="twitter:creator" content="@jdoe">')
        entry = EntryAssembler(fetcher=FakeFetcher({BASE_URL: html})).assemble(BASE_URL)
        assert entry.authors == frozenset({"jdoe"})

    def test_jsonld_graph_title(self) -> None:
        html = page(head=jsonld_script({"@graph": [{"@type": "WebPage", "headline": "T"}]}))
        entry = EntryAssembler(fetcher=FakeFetcher({BASE_URL: html})).assemble(BASE_URL)
        assert entry.page_title == "T"

    def test_failing_manifest_is_not_fatal(self) -> None:
        html = page(head='<title>App</title><link rel="manifest" href="/manifest.json">')
        fetcher = FakeFetcher({BASE_URL: html})
        entry = EntryAssembler(fetcher=fetcher).assemble(BASE_URL)

        assert entry.site_title == "example.com"
        assert entry.description is None
        # site name and description each look the manifest up on their own
        assert fetcher.calls == [
            BASE_URL,
            "https://example.com/manifest.json",
            "https://example.com/manifest.json",
        ]

    def test_title_override(self) -> None:
        fetcher = FakeFetcher({BASE_URL: page(head="<title>Original</title>")})
        entry = EntryAssembler(fetcher=fetcher).assemble(BASE_URL, title="Mine")
        assert entry.page_title == "Mine"

    def test_each_entry_gets_a_fresh_id(self) -> None:
        assembler = EntryAssembler(fetcher=FakeFetcher({BASE_URL: page(head="<title>x</title>")}))
        assert assembler.assemble(BASE_URL).id != assembler.assemble(BASE_URL).id

    def test_malformed_manifest_href_is_not_fatal(self) -> None:
        html = page(head='<title>T</title><link rel="manifest" href="http://[broken/manifest.json">')
        fetcher = FakeFetcher({BASE_URL: html})
        entry = EntryAssembler(fetcher=fetcher).assemble(BASE_URL)

        assert entry.page_title == "T"
        assert entry.site_title == "example.com"
        assert fetcher.calls == [BASE_URL]

    def test_malformed_oembed_href_is_not_fatal(self) -> None:
        html = page(head='<title>T</title><link rel="alternate" type="application/json+oembed" href="http://[x">')
        fetcher = FakeFetcher({BASE_URL: html})
        entry = EntryAssembler(fetcher=fetcher).assemble(BASE_URL)

        assert entry.thumbnail is None
        assert fetcher.calls == [BASE_URL]

    def test_overly_nested_jsonld_is_skipped(self) -> None:
        deep = '<script type="application/ld+json">' + "[" * 5000 + "]" * 5000 + "</script>"
        html = page(head="<title>T</title>" + deep + jsonld_script({"author": "Jane"}))
        entry = EntryAssembler(fetcher=FakeFetcher({BASE_URL: html})).assemble(BASE_URL)

        assert entry.page_title == "T"
        assert entry.authors == frozenset({"Jane"})

    def test_invalid_jsonld_block_is_skipped(self) -> None:
        html = page(head='<script type="application/ld+json">{"headline": </script>' + jsonld_script({"headline": "Ok"}))
        entry = EntryAssembler(fetcher=FakeFetcher({BASE_URL: html})).assemble(BASE_URL)
        assert entry.page_title == "Ok"


class TestAssemblerClose:
    def test_closes_the_fetcher_it_created(self) -> None:
        assembler = EntryAssembler()
        assembler.close()
        assert assembler.fetcher._client.is_closed

    def test_leaves_a_supplied_fetcher_open(self) -> None:
        fetcher = HttpFetcher()
        try:
            EntryAssembler(fetcher=fetcher).close()
            assert not fetcher._client.is_closed
        finally:
            fetcher.close()


class TestAssembleErrors:
    def test_fetch_error_propagates(self) -> None:
        with pytest.raises(FetchError) as excinfo:
            EntryAssembler(fetcher=FakeFetcher()).assemble(BASE_URL)
        assert excinfo.value.status_code == 404
        assert BASE_URL in str(excinfo.value)

    def test_undecodable_body_raises(self, monkeypatch) -> None:
        monkeypatch.setattr(
            "pagespy.layers.assembler.UnicodeDammit",
            lambda body, is_html: SimpleNamespace(unicode_markup=None),
        )
        with pytest.raises(BodyReadError):
            EntryAssembler(fetcher=FakeFetcher({BASE_URL: b"\xff\xfe"})).assemble(BASE_URL)


class TestDecodeBody:
    def test_utf8(self) -> None:
        assert "Café" in decode_body(BASE_URL, page(head="<title>Café</title>").encode("utf-8"))

    def test_declared_latin1_charset(self) -> None:
        html = '<html><head><meta charset="iso-8859-1"><title>Café</title></head><body></body></html>'
        assert "Café" in decode_body(BASE_URL, html.encode("iso-8859-1"))

    def test_latin1_page_resolves_title(self) -> None:
        html = '<html><head><meta charset="iso-8859-1"><title>Café</title></head><body></body></html>'
        fetcher = FakeFetcher({BASE_URL: html.encode("iso-8859-1")})
        assert EntryAssembler(fetcher=fetcher).assemble(BASE_URL).page_title == "Café"
