"""Table of contents presentation backends."""

from fieldtoc.backends.base import TocBackend
from fieldtoc.backends.html import HtmlBackend
from fieldtoc.backends.markdown import MarkdownBackend

__all__ = [
    "HtmlBackend",
    "MarkdownBackend",
    "TocBackend",
]
