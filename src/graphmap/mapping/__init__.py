"""
graphmap.mapping — declarative entity mapping on top of graphmap.core.

## Public API
- Indexed / GraphProperty — markers used inside `typing.Annotated`.
- node_entity / relationship_entity — class decorators registering entity types.
- build_entity_metadata / MappingContext — resolve every property's index once.

## Import DAG discipline
- Depends only on stdlib, pydantic, graphmap.config, and graphmap.core.*.
"""

from __future__ import annotations

from .annotations import GraphProperty, Indexed, node_entity, relationship_entity
from .metadata import (
    EntityMetadata,
    MappingContext,
    PersistentProperty,
    build_entity_metadata,
    iter_declared_properties,
)

__all__ = [
    "Indexed",
    "GraphProperty",
    "node_entity",
    "relationship_entity",
    "EntityMetadata",
    "PersistentProperty",
    "MappingContext",
    "build_entity_metadata",
    "iter_declared_properties",
]
