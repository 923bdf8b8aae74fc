"""
Legacy index naming rules shared by the resolver and the annotation layer.

The rule maps (level, declaring class, explicit name, instance type, entity kind)
to the name of a legacy (non label-based) index:

| Explicit name | Level     | Index name                                  |
|---------------|-----------|---------------------------------------------|
| given         | any       | the explicit name                           |
| none          | CLASS     | simple name of the declaring class          |
| none          | INSTANCE  | simple name of the runtime instance type    |
| none          | GLOBAL    | "node" / "relationship" by entity kind      |

Examples:
    >>> from graphmap.core.grammar import Level
    >>> class Order: ...
    >>> legacy_index_name(Level.CLASS, Order, None, Order)
    'Order'
    >>> legacy_index_name(Level.GLOBAL, Order, "custom", Order)
    'custom'
"""

from __future__ import annotations

from .constants import NODE_GLOBAL_INDEX_NAME, RELATIONSHIP_GLOBAL_INDEX_NAME
from .grammar import EntityKind, Level

__all__ = [
    "simple_name",
    "global_index_name",
    "legacy_index_name",
]


def simple_name(type_class: type) -> str:
    """Return the unqualified class name (no module, no enclosing scopes)."""
    return type_class.__name__


def global_index_name(kind: EntityKind) -> str:
    """Return the well-known GLOBAL legacy index name for an entity kind."""
    if kind is EntityKind.RELATIONSHIP:
        return RELATIONSHIP_GLOBAL_INDEX_NAME
    return NODE_GLOBAL_INDEX_NAME


def legacy_index_name(
    level: Level,
    declaring_class: type,
    provided_index_name: str | None,
    instance_type: type,
    kind: EntityKind = EntityKind.NODE,
) -> str:
    """
    Derive the name of a legacy index.

    Args:
        level (Level): Requested index level.
        declaring_class (type): Class that declares the indexed property.
        provided_index_name (str | None): Explicit index name, or None.
        instance_type (type): Runtime type of the owning entity.
        kind (EntityKind): Entity family used for the GLOBAL name.

    Returns:
        str: Index name. An explicit name always wins.
    """
    if provided_index_name:
        return provided_index_name
    if level is Level.GLOBAL:
        return global_index_name(kind)
    if level is Level.INSTANCE:
        return simple_name(instance_type)
    return simple_name(declaring_class)
