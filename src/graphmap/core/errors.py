"""
Core exception types raised by grammar normalization, value checks, and index mapping.

Provides typed exceptions for core-domain failures:
- GrammarError for unknown or malformed enum values.
- SchemaError for structural violations on value types (e.g., an empty index key).
- MappingError and its subclasses for mapping-configuration failures detected
  while building entity metadata.

Notes:
    - Every MappingError carries the identity of the offending entity/property so
      callers can report it without re-deriving context.
    - Mapping errors are raised (or returned) at metadata-build time and are never
      retryable; treat them as fatal for the entity type being mapped.

Examples:
    Catch a rejected label-based index combination.

    >>> from graphmap.core.errors import MappingError, NumericIndexingUnsupportedForLabelIndex
    >>> err = NumericIndexingUnsupportedForLabelIndex(
    ...     "No numeric indexing for label based indexes", entity="Person", property_name="age"
    ... )
    >>> isinstance(err, MappingError)
    True
    >>> str(err)
    'No numeric indexing for label based indexes, property: Person.age'
"""

from __future__ import annotations

__all__ = [
    "GrammarError",
    "SchemaError",
    "MappingError",
    "IndexMappingError",
    "ExplicitNameNotAllowed",
    "GlobalLevelUnsupportedForLabelIndex",
    "NumericIndexingUnsupportedForLabelIndex",
    "RegistryError",
    "UnknownEntityTypeError",
]


class GrammarError(ValueError):
    """Grammar/naming normalization failure (e.g., unknown enum value)."""


class SchemaError(ValueError):
    """Value-type validation failure (shape, constraints, cross-field rules)."""


class MappingError(ValueError):
    """
    Mapping-configuration failure for an entity type or one of its properties.

    Attributes:
        entity (str | None): Simple name of the owning entity type, when known.
        property_name (str | None): Logical property name, when known.
    """

    def __init__(
        self,
        message: str,
        *,
        entity: str | None = None,
        property_name: str | None = None,
    ) -> None:
        self.message = message
        self.entity = entity
        self.property_name = property_name
        super().__init__(self._render())

    @property
    def location(self) -> str | None:
        if self.entity and self.property_name:
            return f"{self.entity}.{self.property_name}"
        return self.entity or self.property_name

    def _render(self) -> str:
        if self.property_name:
            return f"{self.message}, property: {self.location}"
        if self.entity:
            return f"{self.message}, entity: {self.entity}"
        return self.message


class IndexMappingError(MappingError):
    """Rejected combination of index options for a single property."""


class ExplicitNameNotAllowed(IndexMappingError):
    """An explicit index name was given for a label-based index."""


class GlobalLevelUnsupportedForLabelIndex(IndexMappingError):
    """GLOBAL level was requested for a label-based index."""


class NumericIndexingUnsupportedForLabelIndex(IndexMappingError):
    """Numeric indexing was requested together with label-based indexing."""


class RegistryError(MappingError):
    """Conflicting or invalid entity type registration."""


class UnknownEntityTypeError(RegistryError, LookupError):
    """Alias lookup for a class that is not a registered entity type of the owner."""
