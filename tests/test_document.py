"""Tests for the Document selector accessor."""

from __future__ import annotations

from pagespy.adapters.document import Document

from tests.conftest import jsonld_script, page


class TestSelectorQueries:
    def test_first_text_is_normalized(self) -> None:
        doc = Document(page(body="<h1>  Hello \n  world </h1>"))
        assert doc.first_text("h1") == "Hello world"

    def test_first_text_only_looks_at_first_match(self) -> None:
        doc = Document(page(body="<p> </p><p>second</p>"))
        assert doc.first_text("p") is None

    def test_attr_values_keep_order_and_skip_blanks(self) -> None:
        doc = Document(page(head='<meta name="a" content=" one "><meta name="a" content=""><meta name="a" content="two">'))
        assert doc.attr_values('meta[name="a"]', "content") == ["one", "two"]
        assert doc.first_attr('meta[name="a"]', "content") == "one"

    def test_all_attrs_deduplicates(self) -> None:
        doc = Document(page(head='<meta name="author" content="Jane"><meta name="author" content="Jane">'))
        assert doc.all_attrs('meta[name="author"]', "content") == {"Jane"}

    def test_scope_restricts_search(self) -> None:
        doc = Document(page(body='<div id="a"><span>in</span></div><span>out</span>'))
        scope = doc.select("#a")[0]
        assert doc.texts("span", scope=scope) == ["in"]
        assert doc.texts("span") == ["in", "out"]

    def test_raw_attr_values_takes_first_present_attribute(self) -> None:
        doc = Document(page(body='<img class="x" src="/a.jpg"><img class="x" data-src=" /b.jpg "><img class="x">'))
        assert doc.raw_attr_values(".x", ("content", "src", "data-src")) == ["/a.jpg", "/b.jpg"]


class TestInvalidSelectors:
    def test_invalid_selector_matches_nothing(self) -> None:
        doc = Document(page(body="<p>text</p>"))
        assert doc.select("p[[") == []
        assert doc.first_text("p[[") is None
        assert doc.first_attr("p[[", "class") is None
        assert doc.all_attrs("p[[", "class") == set()
        assert doc.texts("p[[") == []


class TestHeadMeta:
    def test_names_match_case_insensitively(self) -> None:
        doc = Document(page(head='<meta name="Description" content="Hi"><meta name="DC.Title" content="DC">'))
        assert doc.head_meta(["description"]) == ["Hi"]
        assert doc.head_meta(["dc.title", "dcterms.title"]) == ["DC"]


class TestJsonLdBlocks:
    def test_blocks_are_parsed_independently(self) -> None:
        html = page(
            head=(
                jsonld_script({"@type": "Article", "headline": "A"})
                + '<script type="application/ld+json">{not json</script>'
                + jsonld_script([{"@type": "WebSite", "name": "S"}])
            )
        )
        doc = Document(html)
        assert doc.jsonld_blocks() == [
            {"@type": "Article", "headline": "A"},
            [{"@type": "WebSite", "name": "S"}],
        ]

    def test_overly_nested_block_is_skipped(self) -> None:
        deep = '<script type="application/ld+json">' + "[" * 5000 + "]" * 5000 + "</script>"
        doc = Document(page(head=deep + jsonld_script({"name": "kept"})))
        assert doc.jsonld_blocks() == [{"name": "kept"}]

    def test_other_script_types_are_ignored(self) -> None:
        doc = Document(page(head='<script type="application/json">{"a": 1}</script>'))
        assert doc.jsonld_blocks() == []
