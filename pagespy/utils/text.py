"""Whitespace normalization shared by every extraction strategy."""
import re
from typing import Optional

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(raw: Optional[str]) -> str:
    """
    Collapse every run of whitespace (Unicode included) into one space
    and trim both ends. ``None`` normalizes to the empty string.
    """
    if not raw:
        return ""
    return _WHITESPACE_RE.sub(" ", raw).strip()


def is_absent(raw: Optional[str]) -> bool:
    """A value is absent when nothing is left after normalization."""
    return normalize(raw) == ""


def clean(raw: Optional[str]) -> Optional[str]:
    """Normalize ``raw``, returning ``None`` instead of an empty string."""
    text = normalize(raw)
    return text or None
