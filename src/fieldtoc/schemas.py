"""Pydantic schemas for content file validation."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_CONTAINER_TYPES = ["paragraph"]


class EntitySchema(BaseModel):
    """Schema for one entity in a content file."""

    type: str
    id: str
    bundle: str | None = None  # Defaults to the entity type
    label: str | None = None
    fields: dict[str, list[Any]] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id_to_string(cls, v: Any) -> str:
        """Allow numeric ids in YAML."""
        return str(v)

    @field_validator("fields", mode="before")
    @classmethod
    def ensure_value_lists(cls, v: Any) -> dict[str, list[Any]]:
        """Wrap single-valued fields in a list and drop empty ones."""
        if v is None:
            return {}
        if not isinstance(v, dict):
            raise ValueError("'fields' must be a mapping of field name to value(s)")
        result: dict[str, list[Any]] = {}
        for name, value in v.items():  # type: ignore[union-attr]
            if value is None:
                result[str(name)] = []
            elif isinstance(value, list):
                result[str(name)] = value  # type: ignore[assignment]
            else:
                result[str(name)] = [value]
        return result

    @model_validator(mode="after")
    def default_bundle(self) -> EntitySchema:
        """Use the entity type as bundle when none is given."""
        if not self.bundle:
            self.bundle = self.type
        return self


class ContentFileSchema(BaseModel):
    """Schema for an entire content file."""

    # entity_type -> bundle -> field_name -> field type
    field_types: dict[str, dict[str, dict[str, str]]] = Field(default_factory=dict)
    # "entity_type.bundle" -> field_name -> weight; unlisted fields are hidden
    displays: dict[str, dict[str, int]] = Field(default_factory=dict)
    container_types: list[str] = Field(default_factory=lambda: list(DEFAULT_CONTAINER_TYPES))
    base_url: str = ""
    entities: list[EntitySchema] = Field(default_factory=list)
