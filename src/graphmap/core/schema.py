"""
Value types consumed and produced by index resolution.

Responsibilities
- IndexSpec: parsed index annotation values (pydantic, frozen), with enum fields
  normalized through grammar helpers.
- PropertyContext: owning entity/property metadata plus the injected alias
  capability.
- IndexDescriptor: the resolved, immutable index routing information.

Style
- IndexSpec is a pydantic v2 model because it sits on the parsing boundary.
- PropertyContext and IndexDescriptor are frozen dataclasses; they are built by
  trusted code and compared by value.

References
- grammar: src/graphmap/core/grammar.py (IndexType, Level, EntityKind)
- resolver: src/graphmap/core/resolver.py
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .errors import SchemaError
from .grammar import EntityKind, IndexType, Level, index_type_from_value, level_from_value
from .naming import simple_name
from .registry import AliasResolver

__all__ = [
    "IndexSpec",
    "PropertyContext",
    "IndexDescriptor",
]


class IndexSpec(BaseModel):
    """
    Parsed index annotation values for one property.

    Attributes:
        index_type (IndexType): Storage semantics of the index.
        level (Level): Scope at which the index is shared.
        explicit_index_name (str | None): User-supplied index name, if any.
        field_name (str | None): Override for the storage key inside the index.
        unique (bool): Whether values must be unique in the index.
        numeric (bool): Whether values are indexed for numeric range queries.

    Raises:
        pydantic.ValidationError: If an enum value is unknown (GrammarError cause)
            or an unexpected field is supplied.

    Examples:
        >>> from graphmap.core.schema import IndexSpec
        >>> spec = IndexSpec(index_type="label_based", level="instance", field_name="")
        >>> spec.index_type.value, spec.field_name
        ('label_based', None)
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    index_type: IndexType = IndexType.LEGACY
    level: Level = Level.CLASS
    explicit_index_name: str | None = None
    field_name: str | None = None
    unique: bool = False
    numeric: bool = False

    @field_validator("index_type", mode="before")
    @classmethod
    def _normalize_index_type(cls, v: Any) -> IndexType:
        return index_type_from_value(v)

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: Any) -> Level:
        return level_from_value(v)

    @field_validator("explicit_index_name", "field_name", mode="before")
    @classmethod
    def _empty_to_none(cls, v: Any) -> Any:
        # Annotation values use "" for "not set"; whitespace is a real value.
        if v == "":
            return None
        return v

    def is_label_based(self) -> bool:
        return self.index_type.is_label_based()


@dataclass(frozen=True)
class PropertyContext:
    """
    Owning entity and property metadata for one mapped property.

    Attributes:
        property_name (str): Logical (Python attribute) name.
        storage_name (str): Name the value is stored under; non-empty.
        declaring_class (type): Class whose body declares the property.
        owner_type (type): Runtime type of the owning entity.
        aliases (AliasResolver): Alias lookups bound to the owner.
        entity_kind (EntityKind): Node or relationship.

    Raises:
        SchemaError: If storage_name is empty.
    """

    property_name: str
    storage_name: str
    declaring_class: type
    owner_type: type
    aliases: AliasResolver
    entity_kind: EntityKind = EntityKind.NODE

    def __post_init__(self) -> None:
        if not self.storage_name:
            raise SchemaError(
                f"storage_name must be non-empty for {simple_name(self.owner_type)}.{self.property_name}"
            )

    @property
    def owner_name(self) -> str:
        return simple_name(self.owner_type)


@dataclass(frozen=True)
class IndexDescriptor:
    """
    Resolved index routing for one property.

    Attributes:
        index_name (str): Name of the index (label alias for label-based indexes).
        index_type (IndexType): Storage semantics.
        index_key (str): Key inside the index; never empty.
        unique (bool): Unique constraint flag.
        numeric (bool): Numeric range indexing flag; never set for label-based.
        level (Level): Level the descriptor was resolved at.

    Notes:
        - Built once per property at metadata-build time and shared read-only.
        - Equal inputs produce equal descriptors; equality is by value.

    Raises:
        SchemaError: If index_name/index_key is empty, or a label-based
            descriptor is marked numeric.
    """

    index_name: str
    index_type: IndexType
    index_key: str
    unique: bool = False
    numeric: bool = False
    level: Level = Level.CLASS

    def __post_init__(self) -> None:
        if not self.index_name:
            raise SchemaError("IndexDescriptor.index_name must be non-empty")
        if not self.index_key:
            raise SchemaError("IndexDescriptor.index_key must be non-empty")
        if self.index_type.is_label_based() and self.numeric:
            raise SchemaError("label based IndexDescriptor cannot be numeric")

    def is_label_based(self) -> bool:
        return self.index_type.is_label_based()

    def is_full_text(self) -> bool:
        return self.index_type is IndexType.FULLTEXT
