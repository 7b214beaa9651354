"""HTML backend rendering nested lists of links."""

from __future__ import annotations

from html import escape
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldtoc.models import OutlineNode
    from fieldtoc.toc import TableOfContents


class HtmlBackend:
    """Render a table of contents as ``<nav>`` with nested ``<ul>`` lists."""

    def __init__(self, css_class: str = "table-of-contents"):
        self.css_class = css_class

    def render(
        self,
        toc: TableOfContents,
        title: str | None = None,
        title_url: str | None = None,
        base_url: str | None = None,
    ) -> str:
        """Render the outline as HTML."""
        lines = [f'<nav class="{escape(self.css_class)}">']

        if title:
            if title_url:
                lines.append(f'<h2><a href="{escape(title_url)}">{escape(title)}</a></h2>')
            else:
                lines.append(f"<h2>{escape(title)}</h2>")

        outline = toc.to_outline()
        if outline:
            self._render_list(lines, outline, toc, base_url, depth=0)

        lines.append("</nav>")
        return "\n".join(lines)

    def _render_list(
        self,
        lines: list[str],
        nodes: list[OutlineNode],
        toc: TableOfContents,
        base_url: str | None,
        depth: int,
    ) -> None:
        indent = "  " * depth
        lines.append(f"{indent}<ul>")
        for node in nodes:
            href = escape(toc.make_link(node.id, base_url))
            link = f'<a href="{href}">{escape(node.label)}</a>'
            if node.children:
                lines.append(f"{indent}  <li>{link}")
                self._render_list(lines, node.children, toc, base_url, depth + 2)
                lines.append(f"{indent}  </li>")
            else:
                lines.append(f"{indent}  <li>{link}</li>")
        lines.append(f"{indent}</ul>")

    def render_error(self, message: str) -> str:
        """Render an inline error message."""
        return f"<b>{escape(message, quote=False)}</b>"
