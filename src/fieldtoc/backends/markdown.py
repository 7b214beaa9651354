"""Markdown backend rendering nested bullet lists."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldtoc.models import OutlineNode
    from fieldtoc.toc import TableOfContents


def _escape_link_text(text: str) -> str:
    return text.replace("[", r"\[").replace("]", r"\]")


class MarkdownBackend:
    """Render a table of contents as an indented markdown list."""

    def render(
        self,
        toc: TableOfContents,
        title: str | None = None,
        title_url: str | None = None,
        base_url: str | None = None,
    ) -> str:
        """Render the outline as markdown."""
        lines: list[str] = []

        if title:
            heading = f"[{_escape_link_text(title)}]({title_url})" if title_url else title
            lines.extend([f"## {heading}", ""])

        for node in toc.to_outline():
            self._render_node(lines, node, toc, base_url, depth=0)

        return "\n".join(lines) + "\n"

    def _render_node(
        self,
        lines: list[str],
        node: OutlineNode,
        toc: TableOfContents,
        base_url: str | None,
        depth: int,
    ) -> None:
        link = toc.make_link(node.id, base_url)
        lines.append(f"{'  ' * depth}- [{_escape_link_text(node.label)}]({link})")
        for child in node.children:
            self._render_node(lines, child, toc, base_url, depth + 1)

    def render_error(self, message: str) -> str:
        """Render an inline error message."""
        return f"**{message}**\n"
