"""pagespy: bibliographic metadata extraction for web pages."""

__version__ = "1.0.0"
