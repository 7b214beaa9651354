"""Heading discovery in rendered field markup and heading fields."""

from __future__ import annotations

from dataclasses import dataclass, field

from bs4 import BeautifulSoup, NavigableString, Tag

from .exceptions import CollaboratorError
from .ids import MAX_HEADING_FIELD_LENGTH, clean_label, generate_id
from .logger import get_logger
from .models import Heading

# <h1> is left to page titles and <h5> and deeper are not part of the outline
HEADING_TAGS = ["h2", "h3", "h4"]
TOP_HEADING_RANK = 2


def _default_headings() -> list[Heading]:
    return []


@dataclass
class ExtractionResult:
    """Headings found in one markup fragment.

    ``markup`` holds the serialized fragment with anchors injected, and is
    None when no heading was found (the original markup stays in use).
    """

    headings: list[Heading] = field(default_factory=_default_headings)
    markup: str | None = None


def _has_injected_anchor(tag: Tag, anchor_id: str) -> bool:
    """Whether an earlier scan already placed ``<a id="anchor_id">`` before a heading.

    Anchors written by hand with another id are left alone.
    """
    sibling = tag.previous_sibling
    while isinstance(sibling, NavigableString) and not sibling.strip():
        sibling = sibling.previous_sibling

    return (
        isinstance(sibling, Tag)
        and sibling.name == "a"
        and sibling.get("id") == anchor_id
        and not sibling.has_attr("href")
        and not sibling.get_text(strip=True)
    )


class HeadingExtractor:
    """Find h2-h4 headings in markup and make sure each one has an anchor."""

    def __init__(self, parser: str = "html.parser"):
        """Initialize the extractor.

        Args:
            parser: BeautifulSoup tree builder name
        """
        self.parser = parser

    def extract(self, markup: str) -> ExtractionResult:
        """Scan a markup fragment for headings.

        Headings are visited in document order regardless of nesting. A
        heading keeps its own ``id`` attribute when it has one, reuses an
        anchor injected by an earlier scan, and otherwise gets a new empty
        ``<a id>`` inserted in front of it.

        Raises:
            CollaboratorError: If the markup cannot be parsed
        """
        result = ExtractionResult()
        if not markup:
            return result

        try:
            soup = BeautifulSoup(markup, self.parser)
        except Exception as e:  # noqa: BLE001 - parser failures vary by tree builder
            raise CollaboratorError(f"Failed to parse markup: {e}") from e

        for tag in soup.find_all(HEADING_TAGS):
            label = clean_label(tag.get_text())
            if not label:
                continue

            if tag.has_attr("id"):
                anchor_id = str(tag["id"])
            else:
                anchor_id = generate_id(label)
                if tag.parent is not None and not _has_injected_anchor(tag, anchor_id):
                    tag.insert_before(soup.new_tag("a", id=anchor_id))

            level = int(tag.name[1]) - TOP_HEADING_RANK
            result.headings.append(Heading(label=label, id=anchor_id, level=level))

        if result.headings:
            result.markup = str(soup)

        get_logger().debug(
            f"  scanned {len(markup)} bytes of markup, {len(result.headings)} heading(s)"
        )
        return result


def extract_heading_field(text: str) -> Heading | None:
    """Treat a plain field value as a single top-level heading.

    The text is trimmed and cut to MAX_HEADING_FIELD_LENGTH characters before
    the id is derived. Returns None for blank text.
    """
    label = clean_label(text)[:MAX_HEADING_FIELD_LENGTH]
    if not label:
        return None
    return Heading(label=label, id=generate_id(label), level=0)
