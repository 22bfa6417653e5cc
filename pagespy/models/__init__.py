"""Models package initialization."""
from pagespy.models.entry import Entry
from pagespy.models.tag import Tag

__all__ = ["Entry", "Tag"]
