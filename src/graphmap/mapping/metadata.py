"""
Entity metadata construction: one resolved IndexDescriptor per indexed property.

Responsibilities
- Walk an entity class (including inherited declarations) and find, for every
  property, the class that declares it.
- Build a PropertyContext per property and resolve its index once, at
  metadata-build time.
- Cache the resulting EntityMetadata per class in a MappingContext.

Notes:
    - Any mapping failure is fatal for the entity type being built; nothing is
      cached for it and the error carries the entity/property identity.
    - Built metadata is immutable and safe to share between threads.
"""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Annotated, Any, ClassVar, get_origin, get_type_hints

from pydantic import ValidationError

from graphmap.config import MappingSettings
from graphmap.core.errors import MappingError
from graphmap.core.grammar import EntityKind
from graphmap.core.registry import EntityTypeRegistry, default_registry
from graphmap.core.resolver import IndexDescriptorResolver
from graphmap.core.schema import IndexDescriptor, PropertyContext

from .annotations import GraphProperty, Indexed

__all__ = [
    "PersistentProperty",
    "EntityMetadata",
    "MappingContext",
    "iter_declared_properties",
    "build_entity_metadata",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersistentProperty:
    """
    Mapped property of an entity type.

    Attributes:
        name (str): Python attribute name.
        storage_name (str): Name the value is stored under.
        declaring_class (type): Class whose body declares the attribute.
        owner_type (type): Entity type the metadata was built for.
        index (IndexDescriptor | None): Resolved index, or None if not indexed.
    """

    name: str
    storage_name: str
    declaring_class: type
    owner_type: type
    index: IndexDescriptor | None = None

    @property
    def is_indexed(self) -> bool:
        return self.index is not None


@dataclass(frozen=True)
class EntityMetadata:
    """Mapped properties of one registered entity type."""

    type_class: type
    alias: str
    kind: EntityKind
    properties: dict[str, PersistentProperty] = field(default_factory=dict)

    def indexed_properties(self) -> list[PersistentProperty]:
        return [p for p in self.properties.values() if p.index is not None]

    def index_for(self, name: str) -> IndexDescriptor:
        """
        Return the index descriptor of a property.

        Raises:
            KeyError: If the property is unknown or not indexed.
        """
        prop = self.properties[name]
        if prop.index is None:
            raise KeyError(f"{self.type_class.__name__}.{name} is not indexed")
        return prop.index


def iter_declared_properties(cls: type) -> Iterator[tuple[str, type, Any]]:
    """
    Yield (name, declaring_class, type_hint) for the public properties of `cls`.

    Inherited declarations are included; when a subclass re-declares an attribute,
    the subclass is the declaring class. ClassVar and underscore-prefixed names
    are skipped. Base-class properties come first.

    Raises:
        MappingError: If an annotation of `cls` or a base cannot be evaluated.
    """
    found: dict[str, tuple[type, Any]] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        try:
            own = inspect.get_annotations(klass)
            hints = get_type_hints(klass, include_extras=True) if own else {}
        except (NameError, TypeError) as exc:
            raise MappingError(
                f"Unresolvable annotation on {klass.__name__}: {exc}", entity=cls.__name__
            ) from exc
        if not own:
            continue
        for name in own:
            if name.startswith("_"):
                continue
            hint = hints.get(name, own[name])
            if get_origin(hint) is ClassVar:
                found.pop(name, None)
                continue
            found[name] = (klass, hint)
    for name, (klass, hint) in found.items():
        yield name, klass, hint


def _markers(hint: Any) -> tuple[Indexed | None, GraphProperty | None]:
    if get_origin(hint) is not Annotated:
        return None, None
    indexed = next((m for m in hint.__metadata__ if isinstance(m, Indexed)), None)
    graph_property = next((m for m in hint.__metadata__ if isinstance(m, GraphProperty)), None)
    return indexed, graph_property


def build_entity_metadata(
    cls: type,
    registry: EntityTypeRegistry | None = None,
    settings: MappingSettings | None = None,
    resolver: IndexDescriptorResolver | None = None,
) -> EntityMetadata:
    """
    Build the metadata of a registered entity type, resolving every index.

    Args:
        cls (type): Registered entity class.
        registry (EntityTypeRegistry | None): Registry; the process default if None.
        settings (MappingSettings | None): Annotation defaults; built-in defaults if None.
        resolver (IndexDescriptorResolver | None): Resolver; a fresh one if None.

    Returns:
        EntityMetadata: Immutable metadata for `cls`.

    Raises:
        UnknownEntityTypeError: If `cls` (or a declaring class of a CLASS-level
            label-based index) is not registered.
        IndexMappingError: If an index declaration is rejected.
        MappingError: If an Indexed marker carries unknown enum values or an
            annotation cannot be evaluated.
    """
    registry = registry if registry is not None else default_registry()
    settings = settings if settings is not None else MappingSettings()
    resolver = resolver if resolver is not None else IndexDescriptorResolver()

    entry = registry.find_by_type_class(cls)
    aliases = registry.aliases_for(cls)

    properties: dict[str, PersistentProperty] = {}
    for name, declaring_class, hint in iter_declared_properties(cls):
        indexed, graph_property = _markers(hint)
        storage_name = (graph_property.property_name if graph_property else "") or name
        index = None
        if indexed is not None:
            try:
                spec = indexed.to_spec(settings)
            except ValidationError as exc:
                raise MappingError(
                    f"Invalid index declaration ({exc.error_count()} error(s))",
                    entity=entry.name,
                    property_name=name,
                ) from exc
            ctx = PropertyContext(
                property_name=name,
                storage_name=storage_name,
                declaring_class=declaring_class,
                owner_type=cls,
                aliases=aliases,
                entity_kind=entry.kind,
            )
            index = resolver.resolve_or_raise(spec, ctx)
        properties[name] = PersistentProperty(
            name=name,
            storage_name=storage_name,
            declaring_class=declaring_class,
            owner_type=cls,
            index=index,
        )

    logger.debug(
        "Built metadata for %s: %d properties, %d indexed",
        entry.name,
        len(properties),
        sum(1 for p in properties.values() if p.index is not None),
    )
    return EntityMetadata(type_class=cls, alias=entry.alias, kind=entry.kind, properties=properties)


class MappingContext:
    """Builds and caches EntityMetadata per entity type."""

    def __init__(
        self,
        registry: EntityTypeRegistry | None = None,
        settings: MappingSettings | None = None,
        resolver: IndexDescriptorResolver | None = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.settings = settings if settings is not None else MappingSettings()
        self.resolver = resolver if resolver is not None else IndexDescriptorResolver()
        self._lock = threading.Lock()
        self._entities: dict[type, EntityMetadata] = {}

    def get_entity(self, cls: type) -> EntityMetadata:
        """Return the metadata of `cls`, building it on first use."""
        cached = self._entities.get(cls)
        if cached is not None:
            return cached
        with self._lock:
            cached = self._entities.get(cls)
            if cached is None:
                try:
                    cached = build_entity_metadata(cls, self.registry, self.settings, self.resolver)
                except MappingError:
                    logger.error("Mapping initialization failed for %s", cls.__name__)
                    raise
                self._entities[cls] = cached
            return cached

    def initialize(self) -> list[EntityMetadata]:
        """Build metadata for every registered entity type."""
        return [self.get_entity(t.type_class) for t in self.registry.list_types()]

    def index_for(self, cls: type, name: str) -> IndexDescriptor:
        return self.get_entity(cls).index_for(name)

    def __contains__(self, cls: object) -> bool:
        return cls in self._entities
