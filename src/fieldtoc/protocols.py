"""Protocol definitions for the content the generator walks.

The generator never stores or renders content itself. It reads entities
through ``ContentEntity`` and asks a ``ContentRepository`` for everything that
depends on the host system: display order, field types, rendering, and
sub-entity resolution.
"""

from __future__ import annotations

from typing import Any, Protocol


class ContentEntity(Protocol):
    """A content record identified by ``(entity_type, id)``."""

    @property
    def entity_type(self) -> str:
        """Entity type machine name (e.g. ``node``)."""
        ...

    @property
    def id(self) -> str:
        """Entity identifier, unique within its type."""
        ...

    @property
    def bundle(self) -> str:
        """Entity sub-type (e.g. ``article``)."""
        ...

    def field_names(self) -> list[str]:
        """Field names in natural declaration order."""
        ...

    def get_values(self, field_name: str) -> list[Any]:
        """Values of a field in delta order."""
        ...


class ContentRepository(Protocol):
    """Host capabilities consumed by the generator and the formatter."""

    def render_field_value(
        self, entity: ContentEntity, field_name: str, delta: int, view_mode: str
    ) -> str:
        """Render one field value to a markup fragment.

        Raises:
            CollaboratorError: If the value cannot be rendered
        """
        ...

    def field_string(self, entity: ContentEntity, field_name: str, delta: int) -> str:
        """Plain string form of one field value."""
        ...

    def get_display_order(self, entity_type: str, bundle: str) -> list[str] | None:
        """Visible fields in display order, or None to use natural order."""
        ...

    def get_field_type(self, entity: ContentEntity, field_name: str) -> str:
        """Field type machine name."""
        ...

    def resolve_sub_entity(self, value: Any) -> ContentEntity | None:
        """Return the nested container entity a field value refers to, if any."""
        ...

    def get_parent(self, entity: ContentEntity) -> ContentEntity | None:
        """Return the entity that embeds a sub entity, if any."""
        ...

    def load(self, key: str) -> ContentEntity | None:
        """Load an entity by its ``type:id`` key."""
        ...

    def entity_url(self, entity: ContentEntity) -> str:
        """Canonical URL of an entity's page."""
        ...

    def is_sub_entity(self, entity: ContentEntity) -> bool:
        """Whether an entity is a nested container kind rather than a page."""
        ...
