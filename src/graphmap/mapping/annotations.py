"""
Declarative markers for mapped entity classes.

Indexed properties are declared with `typing.Annotated`; entity classes register
themselves with a decorator:

```python
from typing import Annotated

from graphmap.mapping import GraphProperty, Indexed, node_entity

@node_entity()
class Person:
    name: Annotated[str, Indexed(index_type="label_based", level="instance")]
    email: Annotated[str, Indexed(unique=True), GraphProperty("mail")]
    age: int
```

Notes:
    - Empty strings mean "not set", mirroring annotation defaults.
    - Unset index_type/level take their defaults from MappingSettings when the
      marker is parsed, not when it is declared.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from graphmap.config import MappingSettings
from graphmap.core.grammar import EntityKind, IndexType, Level
from graphmap.core.registry import EntityTypeRegistry, default_registry
from graphmap.core.schema import IndexSpec

__all__ = [
    "Indexed",
    "GraphProperty",
    "node_entity",
    "relationship_entity",
]

_T = TypeVar("_T", bound=type)


@dataclass(frozen=True)
class Indexed:
    """
    Index declaration for one property.

    Attributes:
        index_type (IndexType | str | None): Index semantics; None uses the settings default.
        level (Level | str | None): Index level; None uses the settings default.
        index_name (str): Explicit index name ("" for derived).
        field_name (str): Storage key override ("" for the property's storage name).
        unique (bool): Unique values.
        numeric (bool): Numeric range indexing.
    """

    index_type: IndexType | str | None = None
    level: Level | str | None = None
    index_name: str = ""
    field_name: str = ""
    unique: bool = False
    numeric: bool = False

    def to_spec(self, settings: MappingSettings | None = None) -> IndexSpec:
        """
        Parse the marker into an IndexSpec.

        Raises:
            pydantic.ValidationError: If index_type or level is not a known value.
        """
        settings = settings if settings is not None else MappingSettings()
        return IndexSpec(
            index_type=settings.default_index_type if self.index_type is None else self.index_type,
            level=settings.default_level if self.level is None else self.level,
            explicit_index_name=self.index_name,
            field_name=self.field_name,
            unique=self.unique,
            numeric=self.numeric,
        )


@dataclass(frozen=True)
class GraphProperty:
    """Storage override for one property ("" keeps the attribute name)."""

    property_name: str = ""


def _entity_decorator(
    kind: EntityKind, alias: str | None, registry: EntityTypeRegistry | None
) -> Callable[[_T], _T]:
    def decorate(cls: _T) -> _T:
        target = registry if registry is not None else default_registry()
        target.register(cls, alias=alias, kind=kind)
        return cls

    return decorate


def node_entity(
    alias: str | None = None, registry: EntityTypeRegistry | None = None
) -> Callable[[_T], _T]:
    """Register the decorated class as a node entity (alias defaults to the class name)."""
    return _entity_decorator(EntityKind.NODE, alias, registry)


def relationship_entity(
    alias: str | None = None, registry: EntityTypeRegistry | None = None
) -> Callable[[_T], _T]:
    """Register the decorated class as a relationship entity."""
    return _entity_decorator(EntityKind.RELATIONSHIP, alias, registry)
