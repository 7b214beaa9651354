"""Table of contents generation over a tree of content entities.

The generator walks the fields of a content entity in display order. For each
field value it decides, once, how the value contributes headings:

1. A reference to a nested container entity is walked recursively.
2. A configured heading field contributes its text as a top-level heading.
3. A field of a configured markup type is rendered and scanned for h2-h4.

Rules 2 and 3 may both apply to the same value. Every entity visited during a
walk is cached under its own key, pointing at the single table of contents of
the walk.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .cache import TocCache
from .exceptions import CollaboratorError, ConfigurationError
from .extractor import HeadingExtractor, extract_heading_field
from .ids import make_cache_key
from .logger import fields_enabled, get_logger, headings_enabled
from .settings import TOC_FIELD_TYPE, normalize_settings
from .toc import TableOfContents

if TYPE_CHECKING:
    from .protocols import ContentEntity, ContentRepository
    from .settings import GeneratorSettings, NormalizedSettings

# Field values are always rendered in the full view mode
VIEW_MODE = "full"


@dataclass(frozen=True)
class SubEntityRef:
    """The value refers to a nested entity that is walked recursively."""

    entity: ContentEntity


@dataclass(frozen=True)
class HeadingField:
    """The whole value is a heading."""


@dataclass(frozen=True)
class ScannableMarkup:
    """The value is rendered and scanned for heading elements."""

    field_type: str


@dataclass(frozen=True)
class Skip:
    """The value contributes nothing."""

    reason: str


FieldAction = SubEntityRef | HeadingField | ScannableMarkup | Skip


class TableOfContentsGenerator:
    """Generate and cache tables of contents for content entities."""

    def __init__(
        self,
        repository: ContentRepository,
        cache: TocCache | None = None,
        extractor: HeadingExtractor | None = None,
    ):
        """Initialize the generator.

        Args:
            repository: Host capabilities (rendering, display order, field types)
            cache: Store for generated tables; a fresh one is created if omitted
            extractor: Markup heading extractor
        """
        self.repository = repository
        self.cache = cache if cache is not None else TocCache()
        self.extractor = extractor or HeadingExtractor()
        # Keys of the entities on the current recursion path
        self._active: set[str] = set()

    def lookup(self, entity: ContentEntity) -> TableOfContents | None:
        """Return the cached table of contents covering an entity, if any."""
        return self.cache.get(make_cache_key(entity))

    def generate(
        self,
        entity: ContentEntity,
        settings: GeneratorSettings | Mapping[str, Any] | None = None,
        use_cache: bool = True,
    ) -> TableOfContents:
        """Generate a table of contents for an entity.

        The cache is keyed by entity only: a cached table is returned whatever
        settings are passed.

        Args:
            entity: Top-level entity to walk
            settings: Generator settings (defaults apply to unset options)
            use_cache: Return a cached table when one exists

        Returns:
            The populated table of contents (possibly with an empty outline)

        Raises:
            ConfigurationError: If the settings or the entity are unusable
        """
        logger = get_logger()
        self._validate_entity(entity)
        normalized = normalize_settings(settings)
        cache_key = make_cache_key(entity)

        if use_cache:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.fields(f"Cache hit for {cache_key}")
                return cached

        logger.headings(f"Generating table of contents for {cache_key}")
        toc = TableOfContents(entity, normalized.is_relative)
        self._active = set()
        self._process_entity(toc, entity, normalized)
        if headings_enabled():
            logger.headings(
                f"  {len(toc.headings)} heading(s), {len(toc.get_rewrites())} rewrite(s) "
                f"for {cache_key}"
            )
        return toc

    def _validate_entity(self, entity: ContentEntity) -> None:
        entity_type = getattr(entity, "entity_type", None)
        entity_id = getattr(entity, "id", None)
        # A numeric id of 0 is valid
        if entity_type in (None, "") or entity_id in (None, ""):
            raise ConfigurationError(f"Cannot generate a table of contents for {entity!r}")

    def get_field_order(self, entity: ContentEntity) -> list[str]:
        """Visible field names in display order.

        Falls back to the entity's natural field order when no display
        configuration exists. Fields named by the display but missing on the
        entity are dropped.
        """
        natural = entity.field_names()
        display = self.repository.get_display_order(entity.entity_type, entity.bundle)
        if display is None:
            get_logger().debug(
                f"  no display for {entity.entity_type}.{entity.bundle}, using field order"
            )
            return natural

        present = set(natural)
        return [name for name in display if name in present]

    def classify(
        self,
        entity: ContentEntity,
        field_name: str,
        value: Any,
        settings: NormalizedSettings,
    ) -> list[FieldAction]:
        """Decide how one field value contributes to the table of contents."""
        field_type = self.repository.get_field_type(entity, field_name)

        if field_type == TOC_FIELD_TYPE:
            return [Skip("table of contents field")]

        if settings.scan_sub_entities:
            sub_entity = self.repository.resolve_sub_entity(value)
            if sub_entity is not None:
                return [SubEntityRef(sub_entity)]

        actions: list[FieldAction] = []
        if settings.is_heading_field(entity.entity_type, entity.bundle, field_name):
            actions.append(HeadingField())
        if field_type in settings.field_types:
            actions.append(ScannableMarkup(field_type))

        return actions or [Skip(f"field type '{field_type}' not scanned")]

    def _process_entity(
        self,
        toc: TableOfContents,
        entity: ContentEntity,
        settings: NormalizedSettings,
    ) -> None:
        logger = get_logger()
        entity_key = make_cache_key(entity)
        self._active.add(entity_key)

        for field_name in self.get_field_order(entity):
            for delta, value in enumerate(entity.get_values(field_name)):
                for action in self.classify(entity, field_name, value, settings):
                    if fields_enabled():
                        reason = f" ({action.reason})" if isinstance(action, Skip) else ""
                        logger.fields(
                            f"  {entity_key} {field_name}[{delta}]: "
                            f"{type(action).__name__}{reason}"
                        )

                    if isinstance(action, SubEntityRef):
                        sub_key = make_cache_key(action.entity)
                        if sub_key in self._active:
                            logger.warning(
                                f"WARNING: {entity_key} {field_name}[{delta}] refers back to "
                                f"{sub_key}, not descending again"
                            )
                            continue
                        self._process_entity(toc, action.entity, settings)
                    elif isinstance(action, HeadingField):
                        self._process_heading_field(toc, entity, field_name, delta)
                    elif isinstance(action, ScannableMarkup):
                        self._process_markup(toc, entity, field_name, delta)

        self._active.discard(entity_key)
        self.cache.set(entity_key, toc)

    def _process_markup(
        self,
        toc: TableOfContents,
        entity: ContentEntity,
        field_name: str,
        delta: int,
    ) -> None:
        try:
            markup = self.repository.render_field_value(entity, field_name, delta, VIEW_MODE)
            if not markup:
                return
            result = self.extractor.extract(markup)
        except CollaboratorError as e:
            get_logger().warning(
                f"WARNING: Skipping {make_cache_key(entity)} {field_name}[{delta}]: {e}"
            )
            return

        for heading in result.headings:
            toc.add_heading(heading.label, heading.id, heading.level)

        if result.markup is not None:
            toc.set_field_info(entity, field_name, delta, result.markup)

    def _process_heading_field(
        self,
        toc: TableOfContents,
        entity: ContentEntity,
        field_name: str,
        delta: int,
    ) -> None:
        try:
            text = self.repository.field_string(entity, field_name, delta)
        except CollaboratorError as e:
            get_logger().warning(
                f"WARNING: Skipping {make_cache_key(entity)} {field_name}[{delta}]: {e}"
            )
            return

        heading = extract_heading_field(text)
        if heading is None:
            return

        toc.add_heading(heading.label, heading.id, heading.level)
        toc.set_field_info(entity, field_name, delta, heading.id)
