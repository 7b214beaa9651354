"""Table of contents result and outline assembly."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from .ids import make_cache_key
from .logger import get_logger
from .models import FieldRewrite, Heading, OutlineNode

if TYPE_CHECKING:
    from .protocols import ContentEntity


def build_outline(headings: Iterable[Heading]) -> list[OutlineNode]:
    """Fold a flat heading sequence into a forest using a level stack.

    Nesting is driven only by the level numbers: each heading becomes a child
    of the nearest preceding heading with a strictly smaller level, or a new
    root when there is none.

    Args:
        headings: Headings in discovery order

    Returns:
        Top-level outline nodes
    """
    roots: list[OutlineNode] = []
    stack: list[OutlineNode] = []

    for heading in headings:
        node = OutlineNode(label=heading.label, id=heading.id, level=heading.level)

        while stack and stack[-1].level >= heading.level:
            stack.pop()

        if stack:
            stack[-1].children.append(node)
        else:
            roots.append(node)

        stack.append(node)

    return roots


class TableOfContents:
    """Headings and anchored field content collected for one root entity.

    The same instance is shared by every entity visited while it was built,
    so a nested entity looks up the complete outline of its page.
    """

    def __init__(self, entity: ContentEntity, is_relative: bool = False):
        """Create an empty table of contents bound to a root entity.

        Args:
            entity: Root entity the walk starts from
            is_relative: Whether links target the current page (``#id``)
        """
        self.root_key = make_cache_key(entity)
        self.is_relative = is_relative
        self._headings: list[Heading] = []
        self._rewrites: dict[tuple[str, str, int], FieldRewrite] = {}
        self._outline: list[OutlineNode] | None = None

    def __repr__(self) -> str:
        return (
            f"TableOfContents(root_key={self.root_key!r}, "
            f"headings={len(self._headings)}, rewrites={len(self._rewrites)})"
        )

    @property
    def headings(self) -> list[Heading]:
        """Flat headings in discovery order."""
        return list(self._headings)

    def is_empty(self) -> bool:
        """Whether no heading was found."""
        return not self._headings

    def add_heading(self, label: str, id: str, level: int = 0) -> None:  # noqa: A002
        """Append a heading; the outline is rebuilt on next read."""
        self._headings.append(Heading(label=label, id=id, level=level))
        self._outline = None
        get_logger().headings(f"  {'  ' * level}+ {label} (#{id}, level {level})")

    def set_field_info(
        self, entity: ContentEntity, field_name: str, delta: int, content: str
    ) -> None:
        """Record anchored content for one field value.

        A second record for the same entity, field and delta replaces the first
        but keeps its original position.
        """
        entity_key = make_cache_key(entity)
        rewrite = FieldRewrite(
            entity_key=entity_key, field_name=field_name, delta=delta, content=content
        )
        self._rewrites[(entity_key, field_name, delta)] = rewrite
        get_logger().headings(f"  rewrite recorded for {entity_key} {field_name}[{delta}]")

    def to_outline(self) -> list[OutlineNode]:
        """The nested outline, built lazily from the flat headings."""
        if self._outline is None:
            self._outline = build_outline(self._headings)
        return self._outline

    def get_rewrites(self) -> list[FieldRewrite]:
        """Recorded field rewrites in the order they were first recorded."""
        return list(self._rewrites.values())

    def get_rewrite(
        self, entity: ContentEntity, field_name: str, delta: int
    ) -> FieldRewrite | None:
        """Look up the rewrite for one field value."""
        return self._rewrites.get((make_cache_key(entity), field_name, delta))

    def apply_rewrites(
        self, entity: ContentEntity, field_name: str, delta: int, default: str
    ) -> str:
        """Return the anchored content for a field value, or ``default``."""
        rewrite = self.get_rewrite(entity, field_name, delta)
        return rewrite.content if rewrite else default

    def make_link(self, anchor_id: str, base_url: str | None = None) -> str:
        """Build the href for an anchor.

        Relative tables link within the page; otherwise the anchor is appended
        to ``base_url`` when one is given.
        """
        if self.is_relative or not base_url:
            return f"#{anchor_id}"
        return f"{base_url}#{anchor_id}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "root": self.root_key,
            "is_relative": self.is_relative,
            "outline": [node.to_dict() for node in self.to_outline()],
            "rewrites": [
                {
                    "entity": rewrite.entity_key,
                    "field": rewrite.field_name,
                    "delta": rewrite.delta,
                    "content": rewrite.content,
                }
                for rewrite in self._rewrites.values()
            ],
        }
