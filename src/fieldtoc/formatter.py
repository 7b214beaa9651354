"""Formatter for table of contents fields.

A table of contents field either targets another page or, when it has no
target, shows the outline of the page it is placed on. A field placed on a
nested sub entity uses the page that embeds it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .backends import HtmlBackend
from .ids import make_cache_key
from .logger import get_logger
from .settings import FormatterSettings

if TYPE_CHECKING:
    from .backends import TocBackend
    from .generator import TableOfContentsGenerator
    from .protocols import ContentEntity

NO_PAGE_MESSAGE = "Cannot render table of contents in non-node content entity."


@dataclass(frozen=True)
class TocFieldItem:
    """One value of a table of contents field."""

    title: str = ""
    target: str | None = None  # "type:id" of the page to outline

    @classmethod
    def from_value(cls, value: Any) -> TocFieldItem:
        """Build an item from a raw field value (a title or a mapping)."""
        if isinstance(value, dict):
            target = value.get("target")  # type: ignore[union-attr]
            return cls(
                title=str(value.get("title") or ""),  # type: ignore[union-attr]
                target=str(target) if target else None,
            )
        if value is None:
            return cls()
        return cls(title=str(value))


class TableOfContentsFormatter:
    """Render table of contents field items through a backend."""

    def __init__(
        self,
        generator: TableOfContentsGenerator,
        settings: FormatterSettings | None = None,
        backend: TocBackend | None = None,
    ):
        """Initialize the formatter.

        Args:
            generator: Generator used (and whose cache is shared) for every item
            settings: Formatter settings; defaults apply when omitted
            backend: Output backend (HTML by default)
        """
        self.generator = generator
        self.repository = generator.repository
        self.settings = settings or FormatterSettings()
        self.backend: TocBackend = backend or HtmlBackend()

    def find_page_entity(self, entity: ContentEntity) -> ContentEntity | None:
        """Climb from a sub entity to the page entity that embeds it."""
        current: ContentEntity | None = entity
        while current is not None and self.repository.is_sub_entity(current):
            current = self.repository.get_parent(current)
        return current

    def view_elements(
        self, host_entity: ContentEntity | None, items: list[TocFieldItem]
    ) -> list[str]:
        """Render each field item.

        Args:
            host_entity: Entity the table of contents field is attached to
            items: Field values in delta order

        Returns:
            One rendered element per item
        """
        logger = get_logger()
        page_entity = self.find_page_entity(host_entity) if host_entity is not None else None

        elements: list[str] = []
        for item in items:
            title_url: str | None = None

            if item.target:
                entity = self.repository.load(item.target)
                if entity is None:
                    logger.warning(f"WARNING: Table of contents target '{item.target}' not found")
                    elements.append(
                        self.backend.render_error(
                            f"Table of contents target '{item.target}' not found."
                        )
                    )
                    continue
                is_relative = False
                if self.settings.hyperlink_title:
                    title_url = self.repository.entity_url(entity)
            elif page_entity is not None:
                entity = page_entity
                is_relative = True
            else:
                elements.append(self.backend.render_error(NO_PAGE_MESSAGE))
                continue

            logger.fields(f"Formatting table of contents for {make_cache_key(entity)}")
            toc = self.generator.generate(entity, self.settings.generator_settings(is_relative))
            elements.append(
                self.backend.render(
                    toc,
                    title=item.title or None,
                    title_url=title_url,
                    base_url=self.repository.entity_url(entity),
                )
            )

        return elements

    def view_field(self, entity: ContentEntity, field_name: str) -> list[str]:
        """Render every value of a table of contents field on an entity."""
        items = [TocFieldItem.from_value(value) for value in entity.get_values(field_name)]
        return self.view_elements(entity, items)
