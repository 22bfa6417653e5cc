"""Main-content extraction: raw HTML in, normalized plain text out."""
import trafilatura
from bs4 import BeautifulSoup

from pagespy.utils.logger import LayerLogger
from pagespy.utils.text import normalize

logger = LayerLogger("readability")

_NON_CONTENT_TAGS = ["head", "script", "style", "nav", "header", "footer"]


def _bs4_fallback(html: str) -> str:
    """Readable text using BeautifulSoup ``<main>``/``<article>`` heuristics."""
    soup = BeautifulSoup(html, "lxml")
    for tag in soup(_NON_CONTENT_TAGS):
        tag.decompose()
    container = soup.find("main") or soup.find("article") or soup.body
    if container is None:
        return soup.get_text(separator=" ", strip=True)
    return container.get_text(separator=" ", strip=True)


def extract_full_text(html: str, url: str) -> str:
    """
    Extract the main body text of ``html``.

    Tries ``trafilatura`` first and falls back to a BeautifulSoup heuristic
    when it finds nothing. Returns an empty string when neither produces
    any text.
    """
    text = trafilatura.extract(
        html,
        url=url,
        include_links=False,
        include_images=False,
        include_tables=True,
    )
    if not text:
        logger.log_fallback(from_source="trafilatura", to_source="bs4", reason="no_content", url=url)
        text = _bs4_fallback(html)
    return normalize(text)
