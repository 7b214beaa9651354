"""Tests for the HTML and Markdown presentation backends."""

import pytest

from fieldtoc.backends import HtmlBackend, MarkdownBackend
from fieldtoc.models import ContentItem
from fieldtoc.toc import TableOfContents


@pytest.fixture
def toc() -> TableOfContents:
    toc = TableOfContents(ContentItem(entity_type="node", id="1", bundle="page"))
    toc.add_heading("Intro", "Intro", 0)
    toc.add_heading("Q & A", "Q-A", 1)
    toc.add_heading("Next", "Next", 0)
    return toc


class TestHtmlBackend:
    """Test nested list HTML output."""

    def test_render(self, toc: TableOfContents) -> None:
        assert HtmlBackend().render(toc, base_url="/node/1") == (
            '<nav class="table-of-contents">\n'
            "<ul>\n"
            '  <li><a href="/node/1#Intro">Intro</a>\n'
            "    <ul>\n"
            '      <li><a href="/node/1#Q-A">Q &amp; A</a></li>\n'
            "    </ul>\n"
            "  </li>\n"
            '  <li><a href="/node/1#Next">Next</a></li>\n'
            "</ul>\n"
            "</nav>"
        )

    def test_linked_title(self, toc: TableOfContents) -> None:
        output = HtmlBackend().render(toc, title="On <this> page", title_url="/node/1")
        assert '<h2><a href="/node/1">On &lt;this&gt; page</a></h2>' in output

    def test_empty_outline(self) -> None:
        empty = TableOfContents(ContentItem(entity_type="node", id="1", bundle="page"))
        output = HtmlBackend(css_class="toc").render(empty, title="Contents")
        assert output == '<nav class="toc">\n<h2>Contents</h2>\n</nav>'

    def test_render_error(self) -> None:
        assert HtmlBackend().render_error("a < b") == "<b>a &lt; b</b>"

    def test_render_error_keeps_quotes(self) -> None:
        assert HtmlBackend().render_error("target 'node:9' & more") == (
            "<b>target 'node:9' &amp; more</b>"
        )


class TestMarkdownBackend:
    """Test markdown list output."""

    def test_render(self, toc: TableOfContents) -> None:
        assert MarkdownBackend().render(toc) == (
            "- [Intro](#Intro)\n  - [Q & A](#Q-A)\n- [Next](#Next)\n"
        )

    def test_linked_title(self, toc: TableOfContents) -> None:
        output = MarkdownBackend().render(toc, title="Guide [draft]", title_url="/node/1")
        assert output.startswith("## [Guide \\[draft\\]](/node/1)\n\n- [Intro]")

    def test_relative_toc_ignores_base_url(self, toc: TableOfContents) -> None:
        toc.is_relative = True
        assert "(#Intro)" in MarkdownBackend().render(toc, base_url="/node/1")
