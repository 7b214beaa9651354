"""Tables of contents built from the headings of nested content entities."""

from fieldtoc.cache import TocCache
from fieldtoc.exceptions import (
    CollaboratorError,
    ConfigurationError,
    FieldTocError,
    ParseError,
)
from fieldtoc.extractor import HeadingExtractor, extract_heading_field
from fieldtoc.formatter import TableOfContentsFormatter, TocFieldItem
from fieldtoc.generator import TableOfContentsGenerator
from fieldtoc.ids import generate_id
from fieldtoc.models import ContentItem, FieldRewrite, Heading, OutlineNode
from fieldtoc.parser import load_content
from fieldtoc.settings import FormatterSettings, GeneratorSettings, load_config
from fieldtoc.store import ContentStore, EntityReference
from fieldtoc.toc import TableOfContents, build_outline

__all__ = [
    "CollaboratorError",
    "ConfigurationError",
    "ContentItem",
    "ContentStore",
    "EntityReference",
    "FieldRewrite",
    "FieldTocError",
    "FormatterSettings",
    "GeneratorSettings",
    "Heading",
    "HeadingExtractor",
    "OutlineNode",
    "ParseError",
    "TableOfContents",
    "TableOfContentsFormatter",
    "TableOfContentsGenerator",
    "TocCache",
    "TocFieldItem",
    "build_outline",
    "extract_heading_field",
    "generate_id",
    "load_config",
    "load_content",
]
