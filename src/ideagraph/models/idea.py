"""Idea record model - the externally supplied content the graph is built from."""

from dataclasses import dataclass, field
from typing import Any, Literal, get_args

from ideagraph.errors import RecordError

IdeaType = Literal["concept", "resource", "fact", "person", "location", "year"]

IDEA_TYPES: tuple[str, ...] = get_args(IdeaType)


@dataclass(frozen=True)
class IdeaRecord:
    """
    One concept, person, resource etc. to be shown as an idea node.

    Records are immutable; the graph builder only reads them.
    """

    id: str
    label: str
    description: str = ""
    url: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)  # order kept, may repeat
    type: IdeaType | None = None  # None = styling default

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "label": self.label,
            "description": self.description,
            "url": self.url,
            "tags": list(self.tags),
            "type": self.type,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IdeaRecord":
        """Create from a content-source dictionary.

        Unknown ``type`` values are dropped to None; an empty ``url`` is
        treated as missing.
        """
        try:
            record_id = data["id"]
            label = data["label"]
        except KeyError as e:
            raise RecordError(f"Idea record is missing required field {e.args[0]!r}") from e
        if not isinstance(record_id, str) or not record_id:
            raise RecordError(f"Idea record id must be a non-empty string, got {record_id!r}")

        idea_type = data.get("type")
        if idea_type not in IDEA_TYPES:
            idea_type = None

        return cls(
            id=record_id,
            label=str(label),
            description=data.get("description") or "",
            url=data.get("url") or None,
            tags=tuple(str(t) for t in data.get("tags") or ()),
            type=idea_type,
        )


@dataclass(frozen=True)
class DetailPanel:
    """Payload handed to the external detail panel for the selected idea."""

    title: str
    description: str
    url: str | None
    tags: tuple[str, ...]
    type: IdeaType | None

    @classmethod
    def from_record(cls, record: IdeaRecord) -> "DetailPanel":
        return cls(
            title=record.label,
            description=record.description,
            url=record.url,
            tags=record.tags,
            type=record.type,
        )

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "tags": list(self.tags),
            "type": self.type,
        }
