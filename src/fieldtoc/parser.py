"""YAML parser for fieldtoc content files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ParseError
from .ids import split_entity_key
from .models import ContentItem
from .schemas import ContentFileSchema, EntitySchema
from .store import ContentStore, EntityReference

REFERENCE_KEY = "entity"


def _convert_value(value: Any) -> Any:
    """Turn ``{entity: "type:id"}`` mappings into references."""
    if isinstance(value, dict) and set(value) == {REFERENCE_KEY}:  # type: ignore[arg-type]
        target = str(value[REFERENCE_KEY])  # type: ignore[index]
        try:
            split_entity_key(target)
        except ValueError as e:
            raise ParseError(str(e)) from e
        return EntityReference(target=target)
    return value


def _build_entity(data: EntitySchema) -> ContentItem:
    return ContentItem(
        entity_type=data.type,
        id=data.id,
        bundle=data.bundle or data.type,
        fields={
            name: [_convert_value(value) for value in values]
            for name, values in data.fields.items()
        },
        label=data.label,
    )


class ContentParser:
    """Parser for content YAML files."""

    def parse_file(self, file_path: Path | str) -> ContentStore:
        """Parse a YAML file into a ContentStore.

        Raises:
            ParseError: If the file is missing, malformed, or references
                entities that do not exist
        """
        path = Path(file_path)
        if not path.exists():
            raise ParseError(f"File not found: {file_path}")

        try:
            with path.open(encoding="utf-8") as f:
                data: Any = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ParseError(f"Failed to parse YAML: {e}") from e

        if not isinstance(data, dict):
            raise ParseError("YAML must contain a dictionary at the root level")

        return self.parse_data(data)  # type: ignore[arg-type]

    def parse_data(self, data: dict[str, Any]) -> ContentStore:
        """Build a ContentStore from already-loaded YAML data."""
        try:
            schema = ContentFileSchema(**data)
        except PydanticValidationError as e:
            raise ParseError(f"Invalid content structure: {e}") from e

        store = ContentStore(
            field_types=schema.field_types,
            displays=schema.displays,
            container_types=schema.container_types,
            base_url=schema.base_url,
        )
        for entity_data in schema.entities:
            try:
                store.add(_build_entity(entity_data))
            except ValueError as e:
                raise ParseError(str(e)) from e

        missing = store.dangling_references()
        if missing:
            details = ", ".join(f"{key} {field} -> {target}" for key, field, target in missing)
            raise ParseError(f"Missing referenced entities: {details}")

        return store


def load_content(path: Path | str) -> ContentStore:
    """Load a content file."""
    return ContentParser().parse_file(path)
