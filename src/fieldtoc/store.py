"""In-memory content repository backed by parsed content files."""

from __future__ import annotations

import html
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .exceptions import CollaboratorError
from .ids import make_cache_key
from .models import ContentItem
from .schemas import DEFAULT_CONTAINER_TYPES

DEFAULT_FIELD_TYPE = "string"
MARKUP_FIELD_TYPES = frozenset({"text", "text_long", "text_with_summary"})


@dataclass(frozen=True)
class EntityReference:
    """A field value pointing at another entity by ``type:id`` key."""

    target: str


def _value_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, dict) and "value" in value:
        return str(value["value"])  # type: ignore[index]
    return str(value)


class ContentStore:
    """Content entities plus their field and display metadata.

    Implements the ContentRepository protocol used by the generator and the
    formatter.
    """

    def __init__(
        self,
        entities: Iterable[ContentItem] = (),
        field_types: dict[str, dict[str, dict[str, str]]] | None = None,
        displays: dict[str, dict[str, int]] | None = None,
        container_types: Iterable[str] = DEFAULT_CONTAINER_TYPES,
        base_url: str = "",
    ):
        """Initialize the store.

        Args:
            entities: Entities to hold; keys must be unique
            field_types: entity_type -> bundle -> field_name -> field type
            displays: "type.bundle" -> field_name -> weight
            container_types: Entity types that are walked as nested sub entities
            base_url: Prefix for entity URLs
        """
        self.field_types = field_types or {}
        self.displays = displays or {}
        self.container_types = set(container_types)
        self.base_url = base_url.rstrip("/")
        self._entities: dict[str, ContentItem] = {}
        self._parents: dict[str, str] = {}
        for entity in entities:
            self.add(entity)

    def __iter__(self) -> Iterator[ContentItem]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)

    def add(self, entity: ContentItem) -> None:
        """Add an entity and record it as parent of the containers it references.

        Raises:
            ValueError: If an entity with the same key already exists
        """
        if entity.key in self._entities:
            raise ValueError(f"Duplicate entity '{entity.key}'")
        self._entities[entity.key] = entity
        for values in entity.fields.values():
            for value in values:
                if isinstance(value, EntityReference):
                    target_type = value.target.partition(":")[0]
                    if target_type in self.container_types:
                        self._parents[value.target] = entity.key

    def dangling_references(self) -> list[tuple[str, str, str]]:
        """References whose target does not exist, as (entity, field, target)."""
        missing: list[tuple[str, str, str]] = []
        for entity in self._entities.values():
            for field_name, values in entity.fields.items():
                for value in values:
                    if isinstance(value, EntityReference) and value.target not in self._entities:
                        missing.append((entity.key, field_name, value.target))
        return missing

    def load(self, key: str) -> ContentItem | None:
        """Look up an entity by ``type:id`` key."""
        return self._entities.get(key)

    def get_field_type(self, entity: Any, field_name: str) -> str:
        """Declared field type, ``string`` when undeclared."""
        bundles = self.field_types.get(entity.entity_type, {})
        return bundles.get(entity.bundle, {}).get(field_name, DEFAULT_FIELD_TYPE)

    def get_display_order(self, entity_type: str, bundle: str) -> list[str] | None:
        """Visible fields sorted by ascending weight, or None without a display."""
        components = self.displays.get(f"{entity_type}.{bundle}")
        if components is None:
            return None
        return [name for name, _ in sorted(components.items(), key=lambda item: item[1])]

    def resolve_sub_entity(self, value: Any) -> ContentItem | None:
        """Return the container entity a reference points at."""
        if not isinstance(value, EntityReference):
            return None
        target = self._entities.get(value.target)
        if target is None or not self.is_sub_entity(target):
            return None
        return target

    def is_sub_entity(self, entity: Any) -> bool:
        """Whether the entity type is a nested container kind."""
        return entity.entity_type in self.container_types

    def get_parent(self, entity: Any) -> ContentItem | None:
        """The entity referencing a container entity, if any."""
        parent_key = self._parents.get(make_cache_key(entity))
        return self._entities.get(parent_key) if parent_key else None

    def entity_url(self, entity: Any) -> str:
        """URL of an entity's page."""
        return f"{self.base_url}/{entity.entity_type}/{entity.id}"

    def _get_value(self, entity: Any, field_name: str, delta: int) -> Any:
        values = entity.get_values(field_name)
        if delta < 0 or delta >= len(values):
            raise CollaboratorError(
                f"{make_cache_key(entity)} has no value {field_name}[{delta}]"
            )
        return values[delta]

    def field_string(self, entity: Any, field_name: str, delta: int) -> str:
        """Plain text of one field value."""
        value = self._get_value(entity, field_name, delta)
        if isinstance(value, EntityReference):
            target = self._entities.get(value.target)
            return (target.label or target.key) if target else value.target
        return _value_text(value)

    def render_field_value(
        self, entity: Any, field_name: str, delta: int, view_mode: str = "full"
    ) -> str:
        """Render one field value to markup.

        Text field types are already markup. Other values are rendered as
        escaped text.

        Raises:
            CollaboratorError: If the value does not exist
        """
        value = self._get_value(entity, field_name, delta)
        if self.get_field_type(entity, field_name) in MARKUP_FIELD_TYPES and not isinstance(
            value, EntityReference
        ):
            return _value_text(value)
        return html.escape(self.field_string(entity, field_name, delta))
