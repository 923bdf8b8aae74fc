"""
Entity type registry: class -> alias/kind lookups used by index resolution.

Responsibilities
- Register entity classes with their alias (label) and kind (node/relationship).
- Answer the two alias queries the resolver depends on, through a capability
  bound to one owning entity type (`OwnerAliases`), so the resolver never reaches
  back into the entity for its registry.

Notes:
    - Registration is idempotent and guarded by a lock; lookups are
      deterministic and side-effect free.
    - The default alias of a class is its simple name.

Examples:
    >>> from graphmap.core.registry import EntityTypeRegistry
    >>> class Base: ...
    >>> class Derived(Base): ...
    >>> reg = EntityTypeRegistry()
    >>> _ = reg.register(Base)
    >>> _ = reg.register(Derived, alias="DerivedLabel")
    >>> aliases = reg.aliases_for(Derived)
    >>> aliases.resolve_own_alias(), aliases.resolve_alias_for_class(Base)
    ('DerivedLabel', 'Base')
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .errors import RegistryError, UnknownEntityTypeError
from .grammar import EntityKind
from .naming import simple_name

__all__ = [
    "AliasResolver",
    "EntityType",
    "EntityTypeRegistry",
    "OwnerAliases",
    "default_registry",
]

logger = logging.getLogger(__name__)


@runtime_checkable
class AliasResolver(Protocol):
    """Alias lookups for one owning entity type."""

    def resolve_own_alias(self) -> str: ...

    def resolve_alias_for_class(self, type_class: type) -> str: ...


@dataclass(frozen=True)
class EntityType:
    """
    Registered entity type.

    Attributes:
        type_class (type): The mapped Python class.
        alias (str): Label/alias string stored with the entity.
        kind (EntityKind): Node or relationship.
    """

    type_class: type
    alias: str
    kind: EntityKind = EntityKind.NODE

    @property
    def name(self) -> str:
        return simple_name(self.type_class)


class EntityTypeRegistry:
    """Thread-safe registry of entity types keyed by class and by alias."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._by_class: dict[type, EntityType] = {}
        self._by_alias: dict[str, EntityType] = {}

    def register(
        self,
        type_class: type,
        alias: str | None = None,
        kind: EntityKind = EntityKind.NODE,
    ) -> EntityType:
        """
        Register an entity class.

        Args:
            type_class (type): Class to register.
            alias (str | None): Alias/label; defaults to the simple class name.
            kind (EntityKind): Entity family.

        Returns:
            EntityType: The registered (or already registered, identical) entry.

        Raises:
            RegistryError: If the class is already registered with another alias
                or kind, or the alias already belongs to another class.
        """
        alias = alias or simple_name(type_class)
        entry = EntityType(type_class=type_class, alias=alias, kind=kind)
        with self._lock:
            existing = self._by_class.get(type_class)
            if existing is not None:
                if existing != entry:
                    raise RegistryError(
                        f"Entity type already registered as {existing.alias!r} ({existing.kind.value})",
                        entity=simple_name(type_class),
                    )
                return existing
            owner = self._by_alias.get(alias)
            if owner is not None:
                raise RegistryError(
                    f"Alias {alias!r} already registered for {owner.name}",
                    entity=simple_name(type_class),
                )
            self._by_class[type_class] = entry
            self._by_alias[alias] = entry
        logger.debug("Registered %s entity %s as %r", kind.value, entry.name, alias)
        return entry

    def find_by_type_class(self, type_class: type) -> EntityType:
        """
        Look up the registered entry of a class.

        Raises:
            UnknownEntityTypeError: If the class is not registered.
        """
        try:
            return self._by_class[type_class]
        except KeyError:
            raise UnknownEntityTypeError(
                "Not a registered entity type", entity=simple_name(type_class)
            ) from None

    def find_by_alias(self, alias: str) -> EntityType:
        try:
            return self._by_alias[alias]
        except KeyError:
            raise UnknownEntityTypeError(f"No entity type registered under alias {alias!r}") from None

    def list_types(self) -> list[EntityType]:
        """Return all registered entries in registration order."""
        return list(self._by_class.values())

    def aliases_for(self, owner: type) -> OwnerAliases:
        """Bind alias lookups to one owning entity type."""
        return OwnerAliases(self, self.find_by_type_class(owner))

    def __contains__(self, type_class: object) -> bool:
        return type_class in self._by_class

    def __len__(self) -> int:
        return len(self._by_class)


@dataclass(frozen=True)
class OwnerAliases:
    """AliasResolver bound to a registered owner type."""

    registry: EntityTypeRegistry
    owner: EntityType

    def resolve_own_alias(self) -> str:
        return self.owner.alias

    def resolve_alias_for_class(self, type_class: type) -> str:
        """
        Resolve the alias of an ancestor (or the owner itself).

        Raises:
            UnknownEntityTypeError: If `type_class` is not in the owner's class
                hierarchy or is not registered.
        """
        if not issubclass(self.owner.type_class, type_class):
            raise UnknownEntityTypeError(
                f"{simple_name(type_class)} is not a supertype of the owning entity",
                entity=self.owner.name,
            )
        return self.registry.find_by_type_class(type_class).alias


_DEFAULT_REGISTRY = EntityTypeRegistry()


def default_registry() -> EntityTypeRegistry:
    """Return the process-wide registry used when no registry is passed explicitly."""
    return _DEFAULT_REGISTRY
