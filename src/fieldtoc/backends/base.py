"""Base abstractions for table of contents presentation backends."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from fieldtoc.toc import TableOfContents


class TocBackend(Protocol):
    """Protocol for rendering a table of contents in a specific format."""

    def render(
        self,
        toc: TableOfContents,
        title: str | None = None,
        title_url: str | None = None,
        base_url: str | None = None,
    ) -> str:
        """Render a table of contents.

        Args:
            toc: Table of contents to render
            title: Optional heading shown above the list
            title_url: Link target for the title (only used when given)
            base_url: Page URL prefixed to anchors of non-relative tables

        Returns:
            Rendered document fragment
        """
        ...

    def render_error(self, message: str) -> str:
        """Render a message shown in place of a table of contents."""
        ...
