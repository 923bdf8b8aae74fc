"""
graphmap — index descriptor resolution for mapped graph entities.

Computes, for each indexed property of a mapped node or relationship class, which
index its values live in, under which key, and with which semantics; rejects
incoherent option combinations when entity metadata is built.

## Packages
- graphmap.core — grammar, value types, entity type registry, and the resolver.
- graphmap.mapping — `Annotated` markers, entity decorators, metadata builder.
- graphmap.config — MappingSettings (env > TOML > defaults).
- graphmap.logs — opt-in logging setup.
"""

from __future__ import annotations

from .config import MappingSettings
from .core import (
    IndexDescriptor,
    IndexDescriptorResolver,
    IndexSpec,
    IndexType,
    Level,
    MappingError,
    PropertyContext,
    resolve_index,
    resolve_index_or_raise,
)

__all__ = [
    "MappingSettings",
    "IndexDescriptor",
    "IndexDescriptorResolver",
    "IndexSpec",
    "IndexType",
    "Level",
    "MappingError",
    "PropertyContext",
    "resolve_index",
    "resolve_index_or_raise",
]
