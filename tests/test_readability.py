"""Tests for main-content extraction.

``trafilatura.extract`` is patched in the fallback tests to simulate the case
where it returns nothing.
"""

from __future__ import annotations

from unittest.mock import patch

from pagespy.adapters.readability import _bs4_fallback, extract_full_text

from tests.conftest import BASE_URL

_HTML = """\
<!DOCTYPE html>
<html>
<head><title>Ignored</title><style>.a{color:red}</style></head>
<body>
  <nav>Home | About</nav>
  <main>
    <p>This is the main content of the test page with enough text for extraction.</p>
    <p>It discusses topics   such as renewable energy and battery technology.</p>
  </main>
  <footer>Copyright</footer>
  <script>alert('x')</script>
</body>
</html>
"""


class TestExtractFullText:
    def test_result_is_normalized(self) -> None:
        text = extract_full_text(_HTML, BASE_URL)
        assert "renewable energy" in text
        assert "  " not in text
        assert "\n" not in text

    def test_falls_back_when_trafilatura_finds_nothing(self) -> None:
        with patch("pagespy.adapters.readability.trafilatura.extract", return_value=None):
            text = extract_full_text(_HTML, BASE_URL)
        assert text.startswith("This is the main content")
        assert "Home" not in text
        assert "Copyright" not in text

    def test_empty_page_gives_empty_string(self) -> None:
        with patch("pagespy.adapters.readability.trafilatura.extract", return_value=None):
            assert extract_full_text("<html><body></body></html>", BASE_URL) == ""


class TestBs4Fallback:
    def test_strips_scripts_and_styles(self) -> None:
        text = _bs4_fallback(_HTML)
        assert "alert" not in text
        assert "color:red" not in text

    def test_article_used_without_main(self) -> None:
        html = "<html><body><aside>side</aside><article><p>story</p></article></body></html>"
        assert _bs4_fallback(html) == "story"
