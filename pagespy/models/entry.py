"""
Entry model for pagespy.
One Entry is the resolved metadata record for one page.
"""
import json
from typing import Any, Dict, FrozenSet, List, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


class Entry(BaseModel):
    """
    Resolved metadata for a single page. Immutable once built.

    ``page_title`` and ``site_title`` use the empty string for "not found"
    so the serialized shape stays stable; ``description`` and ``thumbnail``
    are None instead.
    """
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    url: str
    page_title: str = ""
    site_title: str = ""
    authors: FrozenSet[str] = Field(default_factory=frozenset)
    full_text: str = ""
    description: Optional[str] = None
    thumbnail: Optional[str] = None

    @property
    def sorted_authors(self) -> List[str]:
        return sorted(self.authors)

    @property
    def primary_author(self) -> Optional[str]:
        """The lexicographically smallest author, not the first listed one."""
        return min(self.authors) if self.authors else None

    def to_view(self) -> Dict[str, Any]:
        """
        Serialized form consumed by JSON output and templates.

        Optional keys (``author``, ``authors``, ``description``,
        ``thumbnail``) are omitted when empty.
        """
        view: Dict[str, Any] = {
            "title": self.page_title,
            "site": self.site_title,
        }
        if self.authors:
            view["author"] = self.primary_author
            view["authors"] = self.sorted_authors
        view["url"] = self.url
        view["id"] = str(self.id)
        if self.description is not None:
            view["description"] = self.description
        if self.thumbnail is not None:
            view["thumbnail"] = self.thumbnail
        view["full_text"] = self.full_text
        return view

    def to_record(self) -> Dict[str, Any]:
        """The full internal record, JSON-compatible."""
        record = self.model_dump(mode="json", exclude_none=True)
        record["authors"] = self.sorted_authors
        return record

    def template_context(self) -> Dict[str, Any]:
        """Flat view keys plus ``entry``, the full internal record."""
        context = {"entry": self.to_record()}
        context.update(self.to_view())
        return context

    def to_json(self) -> str:
        return json.dumps(self.to_view(), ensure_ascii=False, separators=(",", ":"))

    def __str__(self) -> str:
        return self.to_json()
