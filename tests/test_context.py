"""Tests for CLI context state."""

from collections.abc import Iterator
from pathlib import Path

import pytest

from fieldtoc import context


@pytest.fixture(autouse=True)
def clean_context() -> Iterator[None]:
    context.set_config_path(None)
    yield
    context.set_config_path(None)


def test_config_found_beside_content(examples_dir: Path) -> None:
    config = context.get_config(examples_dir / "site_content.yaml")

    assert config.generator.heading_fields == ["paragraph:section:field_title"]


def test_explicit_path_wins(examples_dir: Path, fixtures_dir: Path) -> None:
    context.set_config_path(fixtures_dir / "config.yaml")

    config = context.get_config(examples_dir / "site_content.yaml")

    assert config.generator.scan_sub_entities is False


def test_config_kept_until_path_changes(examples_dir: Path, fixtures_dir: Path) -> None:
    first = context.get_config(examples_dir / "site_content.yaml")

    assert context.get_config(fixtures_dir / "nested_content.yaml") is first

    context.set_config_path(fixtures_dir / "config.yaml")
    assert context.get_config(examples_dir / "site_content.yaml") is not first
