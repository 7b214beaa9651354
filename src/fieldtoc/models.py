"""Data models for fieldtoc."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Heading:
    """A heading discovered while scanning an entity tree."""

    label: str
    id: str
    level: int = 0  # 0 is the shallowest rank (h2 or a heading field)


def _default_children() -> list[OutlineNode]:
    return []


@dataclass
class OutlineNode:
    """A heading placed in the nested outline."""

    label: str
    id: str
    level: int
    children: list[OutlineNode] = field(default_factory=_default_children)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "label": self.label,
            "id": self.id,
            "level": self.level,
            "children": [child.to_dict() for child in self.children],
        }

    def walk(self) -> list[OutlineNode]:
        """Return this node and all of its descendants in document order."""
        nodes = [self]
        for child in self.children:
            nodes.extend(child.walk())
        return nodes


@dataclass(frozen=True)
class FieldRewrite:
    """Anchored content recorded for one value of one field.

    For scanned markup fields ``content`` is the markup with anchors injected.
    For heading fields it is the anchor id derived from the field text.
    """

    entity_key: str
    field_name: str
    delta: int
    content: str


def _default_fields() -> dict[str, list[Any]]:
    return {}


@dataclass
class ContentItem:
    """In-memory content entity used by the YAML content store.

    Field values are kept in declaration order; each field holds a list of
    values (one per delta).
    """

    entity_type: str
    id: str
    bundle: str
    fields: dict[str, list[Any]] = field(default_factory=_default_fields)
    label: str | None = None

    @property
    def key(self) -> str:
        """The ``type:id`` key of this entity."""
        return f"{self.entity_type}:{self.id}"

    def field_names(self) -> list[str]:
        """Field names in declaration order."""
        return list(self.fields)

    def get_values(self, field_name: str) -> list[Any]:
        """Values of a field, empty if the field is unset."""
        return self.fields.get(field_name, [])
