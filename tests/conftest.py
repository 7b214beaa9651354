"""Pytest configuration and fixtures for fieldtoc tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from fieldtoc.logger import reset_logger
from fieldtoc.models import ContentItem
from fieldtoc.store import ContentStore, EntityReference

EXAMPLES_DIR = Path(__file__).parent.parent / "examples"
FIXTURES_DIR = Path(__file__).parent / "fixtures"

PAGE_FIELD_TYPES = {
    "node": {
        "page": {
            "title": "string",
            "body": "text_long",
            "field_sections": "entity_reference_revisions",
            "field_toc": "table_of_contents",
        },
    },
    "paragraph": {
        "section": {
            "field_title": "string",
            "field_text": "text_long",
        },
    },
}


@pytest.fixture(autouse=True)
def clean_logger() -> Iterator[None]:
    """Keep logger configuration from leaking between tests."""
    yield
    reset_logger()


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding YAML fixture files."""
    return FIXTURES_DIR


@pytest.fixture
def examples_dir() -> Path:
    """Directory holding the example content and config."""
    return EXAMPLES_DIR


@pytest.fixture
def page_store() -> ContentStore:
    """A page with a markup body and one nested section paragraph."""
    page = ContentItem(
        entity_type="node",
        id="1",
        bundle="page",
        label="Page",
        fields={
            "title": ["Page"],
            "body": ["<h2>Intro</h2><p>x</p><h3>Details</h3>"],
            "field_sections": [EntityReference("paragraph:10")],
        },
    )
    section = ContentItem(
        entity_type="paragraph",
        id="10",
        bundle="section",
        fields={
            "field_title": ["Usage"],
            "field_text": ["<h3>Inside</h3>"],
        },
    )
    return ContentStore([page, section], field_types=PAGE_FIELD_TYPES)
