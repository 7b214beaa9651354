"""Generator and formatter settings, and the YAML config file.

The config file (fieldtoc_config.yaml) has two optional sections:

    generator:
      field_types: [text_long, text_with_summary]
      heading_fields: ["paragraph:section:field_title"]
      scan_sub_entities: true
    formatter:
      hyperlink_title: true
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError, ParseError

DEFAULT_FIELD_TYPES = frozenset({"text_long", "text_with_summary"})

# Field type of the table of contents field itself; never scanned
TOC_FIELD_TYPE = "table_of_contents"

CONFIG_FILENAME = "fieldtoc_config.yaml"


class GeneratorSettings(BaseModel):
    """Options controlling how a table of contents is generated."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    field_types: set[str] = Field(default_factory=lambda: set(DEFAULT_FIELD_TYPES))
    heading_fields: list[str] = Field(default_factory=list)  # "type:bundle:field"
    scan_sub_entities: bool = Field(default=True, alias="scan_paragraphs")
    is_relative: bool = False

    @field_validator("field_types", "heading_fields", mode="before")
    @classmethod
    def ensure_list(cls, v: Any) -> Any:
        """Accept a single string where a list is expected."""
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v


class FormatterSettings(BaseModel):
    """Options of the table of contents field formatter."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    field_types: set[str] = Field(default_factory=lambda: set(DEFAULT_FIELD_TYPES))
    heading_fields: list[str] = Field(default_factory=list)
    scan_sub_entities: bool = Field(default=True, alias="scan_paragraphs")
    hyperlink_title: bool = True  # Link the title when the TOC targets another page

    def generator_settings(self, is_relative: bool) -> GeneratorSettings:
        """Build generator settings for one formatted item."""
        return GeneratorSettings(
            field_types=set(self.field_types),
            heading_fields=list(self.heading_fields),
            scan_sub_entities=self.scan_sub_entities,
            is_relative=is_relative,
        )


class FieldTocConfig(BaseModel):
    """Top-level configuration file."""

    model_config = ConfigDict(extra="forbid")

    generator: GeneratorSettings = Field(default_factory=GeneratorSettings)
    formatter: FormatterSettings = Field(default_factory=FormatterSettings)


@dataclass(frozen=True)
class NormalizedSettings:
    """Validated settings used during one generation walk."""

    field_types: frozenset[str]
    heading_fields: frozenset[tuple[str, str, str]]
    scan_sub_entities: bool
    is_relative: bool

    def is_heading_field(self, entity_type: str, bundle: str, field_name: str) -> bool:
        """Whether a field's whole value is a heading."""
        return (entity_type, bundle, field_name) in self.heading_fields


def parse_heading_field(spec: str) -> tuple[str, str, str]:
    """Split a ``type:bundle:field`` heading field specifier.

    Raises:
        ValueError: If the specifier does not have three non-empty parts
    """
    parts = spec.split(":")
    if len(parts) != 3 or not all(parts):  # noqa: PLR2004
        raise ValueError(
            f"Invalid heading field '{spec}', expected 'entity_type:bundle:field_name'"
        )
    return parts[0], parts[1], parts[2]


def normalize_settings(
    settings: GeneratorSettings | Mapping[str, Any] | None,
) -> NormalizedSettings:
    """Apply defaults and parse heading field specifiers.

    Raises:
        ConfigurationError: If the settings are malformed
    """
    if settings is None:
        model = GeneratorSettings()
    elif isinstance(settings, GeneratorSettings):
        model = settings
    else:
        try:
            model = GeneratorSettings.model_validate(dict(settings))
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid generator settings: {e}") from e

    try:
        heading_fields = frozenset(parse_heading_field(spec) for spec in model.heading_fields)
    except ValueError as e:
        raise ConfigurationError(str(e)) from e

    return NormalizedSettings(
        field_types=frozenset(model.field_types),
        heading_fields=heading_fields,
        scan_sub_entities=model.scan_sub_entities,
        is_relative=model.is_relative,
    )


def load_config(config_path: Path | str) -> FieldTocConfig:
    """Load configuration from a YAML file.

    Raises:
        ParseError: If the file is missing or is not valid YAML
        ConfigurationError: If the settings are invalid
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ParseError(f"Config file not found: {config_path}")

    try:
        with config_path.open(encoding="utf-8") as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ParseError(f"Failed to parse YAML: {e}") from e

    if data is None:
        return FieldTocConfig()
    if not isinstance(data, dict):
        raise ParseError("Config must contain a dictionary at the root level")

    try:
        return FieldTocConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid config in {config_path}: {e}") from e


def discover_config(
    content_path: Path | str, config_path: Path | None = None
) -> FieldTocConfig:
    """Find and load configuration for a content file.

    Search order:
    1. Explicit config_path argument
    2. content file directory / fieldtoc_config.yaml
    3. Current directory / fieldtoc_config.yaml
    Defaults are used when nothing is found.
    """
    if config_path is not None:
        return load_config(config_path)

    dir_config = Path(content_path).parent / CONFIG_FILENAME
    if dir_config.exists():
        return load_config(dir_config)

    cwd_config = Path(CONFIG_FILENAME)
    if cwd_config.exists():
        return load_config(cwd_config)

    return FieldTocConfig()
