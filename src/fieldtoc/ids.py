"""Anchor identifiers, label cleanup, and entity keys."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .protocols import ContentEntity

# Characters trimmed from both ends of a label, including the no-break space
LABEL_STRIP_CHARS = "\xa0 \t\n\r\0\x0b"

MAX_HEADING_FIELD_LENGTH = 128

_NON_ID_CHARS_RE = re.compile(r"[^0-9a-zA-Z.]+")


def generate_id(label: str) -> str:
    """Create an anchor identifier from a heading label.

    Every run of characters other than ASCII letters, digits and ``.`` becomes a
    single ``-``. No attempt is made to make the result unique.

    Examples:
        >>> generate_id("Getting started")
        'Getting-started'
        >>> generate_id("v1.2 (beta)")
        'v1.2-beta-'
    """
    return _NON_ID_CHARS_RE.sub("-", label)


def clean_label(text: str) -> str:
    """Strip surrounding whitespace and no-break spaces from heading text."""
    return text.strip(LABEL_STRIP_CHARS)


def make_cache_key(entity: ContentEntity) -> str:
    """Build the ``type:id`` key identifying an entity."""
    return f"{entity.entity_type}:{entity.id}"


def split_entity_key(key: str) -> tuple[str, str]:
    """Split a ``type:id`` key into its parts.

    Raises:
        ValueError: If the key does not contain both parts
    """
    entity_type, sep, entity_id = key.partition(":")
    if not sep or not entity_type or not entity_id:
        raise ValueError(f"Invalid entity key '{key}', expected 'type:id'")
    return entity_type, entity_id
