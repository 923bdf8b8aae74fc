"""
Core package aggregator for graphmap index contracts (grammar, value types, registry, resolver).

## Contracts (single source of truth)
- Grammar — IndexType / Level / EntityKind enums and normalization helpers.
- Naming — legacy index naming rule and the well-known global index names.
- Schema — IndexSpec (parsed annotation), PropertyContext, IndexDescriptor.
- Registry — entity type aliases and the AliasResolver capability.
- Resolver — IndexDescriptorResolver, the single point of index resolution.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Every rejected option combination is detected at metadata-build time.

## Examples
```python
from graphmap.core import EntityTypeRegistry, IndexSpec, PropertyContext, resolve_index

class Base: ...
class Derived(Base): ...

reg = EntityTypeRegistry()
reg.register(Base)
reg.register(Derived)
ctx = PropertyContext("name", "name", Base, Derived, reg.aliases_for(Derived))
resolve_index(IndexSpec(index_type="label_based", level="class"), ctx).index_name  # 'Base'
```
"""

from __future__ import annotations

from .errors import (
    ExplicitNameNotAllowed,
    GlobalLevelUnsupportedForLabelIndex,
    GrammarError,
    IndexMappingError,
    MappingError,
    NumericIndexingUnsupportedForLabelIndex,
    RegistryError,
    SchemaError,
    UnknownEntityTypeError,
)
from .grammar import EntityKind, IndexType, Level
from .registry import AliasResolver, EntityType, EntityTypeRegistry, OwnerAliases, default_registry
from .resolver import IndexDescriptorResolver, Resolution, resolve_index, resolve_index_or_raise
from .schema import IndexDescriptor, IndexSpec, PropertyContext

__all__ = [
    "EntityKind",
    "IndexType",
    "Level",
    "IndexSpec",
    "PropertyContext",
    "IndexDescriptor",
    "AliasResolver",
    "EntityType",
    "EntityTypeRegistry",
    "OwnerAliases",
    "default_registry",
    "IndexDescriptorResolver",
    "Resolution",
    "resolve_index",
    "resolve_index_or_raise",
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
