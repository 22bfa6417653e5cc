"""Bookmark tag value object."""
import re
from typing import Optional

from pydantic import BaseModel, ConfigDict

TAG_RE = re.compile(r"^[a-zA-Z0-9_-]{1,30}$")


class Tag(BaseModel):
    """A short lowercase label: letters, digits, ``_`` and ``-``, at most 30 characters."""
    model_config = ConfigDict(frozen=True)

    value: str

    @classmethod
    def parse(cls, raw: str) -> Optional["Tag"]:
        """Validate and lowercase ``raw``; None when it is not a valid tag."""
        trimmed = raw.strip()
        if not trimmed or not TAG_RE.match(trimmed):
            return None
        return cls(value=trimmed.lower())

    def __str__(self) -> str:
        return self.value
