"""Adapters package initialization."""
from pagespy.adapters.document import Document
from pagespy.adapters.fetcher import Fetcher, HttpFetcher
from pagespy.adapters.readability import extract_full_text

__all__ = ["Document", "Fetcher", "HttpFetcher", "extract_full_text"]
