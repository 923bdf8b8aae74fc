"""
Canonical graphmap grammar and helpers.

Defines the index types, index levels, and entity kinds used across the mapping
layer, plus zero-IO normalization helpers for their serialized values.

Naming standard
---------------
- Enum classes: PascalCase
- Enum member names: UPPER_SNAKE (Python constants)
- Enum serialized values (config files, annotation strings): lower_snake

Downstream usage
----------------
- `graphmap.core.schema.IndexSpec` validators call `index_type_from_value` and
  `level_from_value` so annotation values may be given as enum members or strings.
- `graphmap.config.MappingSettings` parses env/TOML defaults with the same helpers.
- The resolver branches on `IndexType.is_label_based()` and on `Level`.

Examples
--------
>>> from graphmap.core.grammar import IndexType, Level, index_type_from_value, level_from_value
>>> index_type_from_value("LABEL_BASED") is IndexType.LABEL_BASED
True
>>> level_from_value(Level.INSTANCE) is Level.INSTANCE
True
>>> IndexType.FULLTEXT.is_label_based()
False
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any, Final, TypeVar

from .errors import GrammarError

__all__ = [
    "IndexType",
    "Level",
    "EntityKind",
    # helpers/validators
    "is_lower_snake",
    "assert_lower_snake",
    "index_type_from_value",
    "level_from_value",
    "entity_kind_from_value",
]


class IndexType(Enum):
    """
    Storage semantics of an index.

    Members:
        LEGACY: Named, independently addressable exact-match index.
        FULLTEXT: Named full-text (analyzed) index.
        POINT: Named spatial index.
        LABEL_BASED: Schema index keyed by the entity label; never user-named.
    """

    LEGACY = "legacy"
    FULLTEXT = "fulltext"
    POINT = "point"
    LABEL_BASED = "label_based"

    def is_label_based(self) -> bool:
        return self is IndexType.LABEL_BASED


class Level(Enum):
    """
    Scope at which an index is shared.

    Members:
        CLASS: One index per declaring class.
        INSTANCE: One index per concrete (runtime) entity type.
        GLOBAL: One index shared across all entities of a kind.
    """

    CLASS = "class"
    INSTANCE = "instance"
    GLOBAL = "global"


class EntityKind(Enum):
    """Graph element family an entity type maps to."""

    NODE = "node"
    RELATIONSHIP = "relationship"


# ============================================================================
# Helpers & Validators (zero I/O)
# ============================================================================

_LOWER_SNAKE_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z0-9]+(?:_[a-z0-9]+)*$")

_E = TypeVar("_E", bound=Enum)


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Examples:
      >>> is_lower_snake("label_based")
      True
      >>> is_lower_snake("LabelBased")
      False
    """
    return bool(_LOWER_SNAKE_RE.match(value or ""))


def assert_lower_snake(value: str, what: str = "value") -> None:
    """
    Validate that a string is lower_snake.

    Raises:
      GrammarError: If value is not lower_snake.
    """
    if not is_lower_snake(value):
        raise GrammarError(f"{what} must be lower_snake (got: {value!r})")


def _enum_from_value(enum_cls: type[_E], value: Any, what: str) -> _E:
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise GrammarError(f"{what} must be a {enum_cls.__name__} or str (got {value!r})")
    # Annotation strings may be written as member names ("LABEL_BASED") or values.
    s = value.strip().lower()
    assert_lower_snake(s, what)
    try:
        return enum_cls(s)
    except ValueError as exc:
        allowed = sorted(m.value for m in enum_cls)
        raise GrammarError(f"{what} must be one of {allowed} (got {value!r})") from exc


def index_type_from_value(value: Any) -> IndexType:
    """
    Parse an IndexType member or string into an IndexType.

    Args:
      value (Any): IndexType member, or its value/name in any case.

    Returns:
      IndexType: Parsed index type.

    Raises:
      GrammarError: If the value is not a known index type.
    """
    return _enum_from_value(IndexType, value, "index_type")


def level_from_value(value: Any) -> Level:
    """
    Parse a Level member or string into a Level.

    Raises:
      GrammarError: If the value is not a known level.
    """
    return _enum_from_value(Level, value, "level")


def entity_kind_from_value(value: Any) -> EntityKind:
    """Parse an EntityKind member or string into an EntityKind."""
    return _enum_from_value(EntityKind, value, "entity_kind")
