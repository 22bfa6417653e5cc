"""Tests for bookmark tag validation."""

from __future__ import annotations

import pytest

from pagespy.models.tag import Tag


class TestTagParse:
    def test_lowercases_and_trims(self) -> None:
        assert Tag.parse("  Python_3-Tips ") == Tag(value="python_3-tips")

    def test_thirty_characters_is_the_limit(self) -> None:
        assert Tag.parse("a" * 30) is not None
        assert Tag.parse("a" * 31) is None

    @pytest.mark.parametrize("raw", ["", "   ", "two words", "c++", "café", "tag!"])
    def test_invalid_tags(self, raw: str) -> None:
        assert Tag.parse(raw) is None

    def test_str_is_the_value(self) -> None:
        assert str(Tag.parse("News")) == "news"
