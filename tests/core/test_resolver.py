from __future__ import annotations

import logging

import pytest

from graphmap.core.errors import (
    ExplicitNameNotAllowed,
    GlobalLevelUnsupportedForLabelIndex,
    IndexMappingError,
    NumericIndexingUnsupportedForLabelIndex,
    UnknownEntityTypeError,
)
from graphmap.core.grammar import EntityKind, IndexType, Level
from graphmap.core.registry import EntityTypeRegistry
from graphmap.core.resolver import IndexDescriptorResolver, resolve_index, resolve_index_or_raise
from graphmap.core.schema import IndexDescriptor, IndexSpec, PropertyContext


class Base:
    pass


class Derived(Base):
    pass


class Person:
    pass


class Order:
    pass


class Knows:
    pass


@pytest.fixture()
def registry() -> EntityTypeRegistry:
    reg = EntityTypeRegistry()
    reg.register(Base)
    reg.register(Derived)
    reg.register(Person)
    reg.register(Order)
    reg.register(Knows, alias="KNOWS", kind=EntityKind.RELATIONSHIP)
    return reg


def make_ctx(
    registry: EntityTypeRegistry,
    owner: type,
    declaring: type | None = None,
    prop: str = "name",
    storage: str | None = None,
) -> PropertyContext:
    entry = registry.find_by_type_class(owner)
    return PropertyContext(
        property_name=prop,
        storage_name=storage or prop,
        declaring_class=declaring or owner,
        owner_type=owner,
        aliases=registry.aliases_for(owner),
        entity_kind=entry.kind,
    )


# ---------------------------------------------------------------------------
# Label-based indexes
# ---------------------------------------------------------------------------


def test_label_class_level_uses_declaring_class_alias(registry: EntityTypeRegistry) -> None:
    ctx = make_ctx(registry, Derived, declaring=Base)
    desc = resolve_index_or_raise(IndexSpec(index_type="label_based", level="class"), ctx)
    assert desc.index_name == "Base"
    assert desc.is_label_based()


def test_label_instance_level_uses_owner_alias(registry: EntityTypeRegistry) -> None:
    ctx = make_ctx(registry, Person)
    desc = resolve_index_or_raise(IndexSpec(index_type="label_based", level="instance"), ctx)
    assert desc.index_name == "Person"


def test_label_instance_level_on_subclass_uses_subclass_alias(registry: EntityTypeRegistry) -> None:
    ctx = make_ctx(registry, Derived, declaring=Base)
    desc = resolve_index_or_raise(IndexSpec(index_type="label_based", level="instance"), ctx)
    assert desc.index_name == "Derived"


def test_label_global_level_is_rejected(registry: EntityTypeRegistry) -> None:
    result = resolve_index(IndexSpec(index_type="label_based", level="global"), make_ctx(registry, Person))
    assert isinstance(result, GlobalLevelUnsupportedForLabelIndex)
    assert result.entity == "Person" and result.property_name == "name"


@pytest.mark.parametrize("level", list(Level))
def test_label_explicit_name_is_rejected(registry: EntityTypeRegistry, level: Level) -> None:
    spec = IndexSpec(index_type="label_based", level=level, explicit_index_name="custom")
    with pytest.raises(ExplicitNameNotAllowed, match="No index name allowed"):
        resolve_index_or_raise(spec, make_ctx(registry, Person))


@pytest.mark.parametrize("level", [Level.CLASS, Level.INSTANCE])
def test_label_numeric_is_rejected(registry: EntityTypeRegistry, level: Level) -> None:
    spec = IndexSpec(index_type="label_based", level=level, numeric=True)
    result = resolve_index(spec, make_ctx(registry, Person, prop="age"))
    assert isinstance(result, NumericIndexingUnsupportedForLabelIndex)
    assert "Person.age" in str(result)


def test_label_name_errors_are_reported_before_numeric(registry: EntityTypeRegistry) -> None:
    spec = IndexSpec(index_type="label_based", level="global", numeric=True)
    assert isinstance(resolve_index(spec, make_ctx(registry, Person)), GlobalLevelUnsupportedForLabelIndex)


def test_label_unknown_level_falls_back_to_owner_alias(registry: EntityTypeRegistry) -> None:
    spec = IndexSpec.model_construct(
        index_type=IndexType.LABEL_BASED,
        level="custom",
        explicit_index_name=None,
        field_name=None,
        unique=False,
        numeric=False,
    )
    name = IndexDescriptorResolver().determine_label_index_name(spec, make_ctx(registry, Derived, Base))
    assert name == "Derived"


def test_label_class_level_with_unregistered_declaring_class() -> None:
    reg = EntityTypeRegistry()
    reg.register(Derived)
    ctx = make_ctx(reg, Derived, declaring=Base)
    with pytest.raises(UnknownEntityTypeError):
        resolve_index(IndexSpec(index_type="label_based"), ctx)


# ---------------------------------------------------------------------------
# Legacy indexes
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("index_type", ["legacy", "fulltext", "point"])
@pytest.mark.parametrize("level", list(Level))
def test_legacy_explicit_name_wins(registry: EntityTypeRegistry, index_type: str, level: Level) -> None:
    spec = IndexSpec(index_type=index_type, level=level, explicit_index_name="custom")
    assert resolve_index_or_raise(spec, make_ctx(registry, Derived, Base)).index_name == "custom"


def test_legacy_class_level_uses_declaring_simple_name(registry: EntityTypeRegistry) -> None:
    spec = IndexSpec(index_type="legacy", level="class")
    assert resolve_index_or_raise(spec, make_ctx(registry, Order)).index_name == "Order"
    assert resolve_index_or_raise(spec, make_ctx(registry, Derived, Base)).index_name == "Base"


def test_legacy_instance_level_uses_owner_simple_name(registry: EntityTypeRegistry) -> None:
    spec = IndexSpec(index_type="legacy", level="instance")
    assert resolve_index_or_raise(spec, make_ctx(registry, Derived, Base)).index_name == "Derived"


def test_legacy_global_level_by_entity_kind(registry: EntityTypeRegistry) -> None:
    spec = IndexSpec(index_type="legacy", level="global")
    assert resolve_index_or_raise(spec, make_ctx(registry, Person)).index_name == "node"
    assert resolve_index_or_raise(spec, make_ctx(registry, Knows, prop="since")).index_name == "relationship"


def test_legacy_numeric_is_allowed(registry: EntityTypeRegistry) -> None:
    desc = resolve_index_or_raise(
        IndexSpec(index_type="legacy", numeric=True, unique=True), make_ctx(registry, Order, prop="total")
    )
    assert desc == IndexDescriptor("Order", IndexType.LEGACY, "total", unique=True, numeric=True)


def test_fulltext_descriptor(registry: EntityTypeRegistry) -> None:
    desc = resolve_index_or_raise(
        IndexSpec(index_type="fulltext", explicit_index_name="search"), make_ctx(registry, Person, prop="bio")
    )
    assert desc.is_full_text() and not desc.is_label_based()
    assert desc.index_name == "search"


# ---------------------------------------------------------------------------
# Keys, determinism, logging
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("index_type", list(IndexType))
def test_index_key_prefers_field_name(registry: EntityTypeRegistry, index_type: IndexType) -> None:
    ctx = make_ctx(registry, Person, prop="email", storage="mail")
    level = Level.INSTANCE
    assert resolve_index_or_raise(IndexSpec(index_type=index_type, level=level), ctx).index_key == "mail"
    spec = IndexSpec(index_type=index_type, level=level, field_name="email_key")
    assert resolve_index_or_raise(spec, ctx).index_key == "email_key"


def test_resolution_is_deterministic(registry: EntityTypeRegistry) -> None:
    spec = IndexSpec(index_type="legacy", level="instance", unique=True)
    first = resolve_index(spec, make_ctx(registry, Derived, Base))
    second = resolve_index(
        IndexSpec(index_type="legacy", level="instance", unique=True),
        make_ctx(registry, Derived, Base),
    )
    assert isinstance(first, IndexDescriptor)
    assert first == second


def test_resolve_returns_errors_and_resolve_or_raise_raises(registry: EntityTypeRegistry) -> None:
    resolver = IndexDescriptorResolver()
    spec = IndexSpec(index_type="label_based", explicit_index_name="custom")
    ctx = make_ctx(registry, Person)
    returned = resolver.resolve(spec, ctx)
    assert isinstance(returned, IndexMappingError)
    with pytest.raises(ExplicitNameNotAllowed):
        resolver.resolve_or_raise(spec, ctx)


def test_rejections_are_logged(registry: EntityTypeRegistry, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="graphmap.core.resolver"):
        resolve_index(IndexSpec(index_type="label_based", level="global"), make_ctx(registry, Person))
    assert any("No global index" in r.getMessage() for r in caplog.records)


def test_label_whitespace_explicit_name_is_rejected(registry: EntityTypeRegistry) -> None:
    spec = IndexSpec(index_type="label_based", explicit_index_name="  ")
    assert isinstance(resolve_index(spec, make_ctx(registry, Person)), ExplicitNameNotAllowed)


def test_whitespace_field_name_is_used_as_key(registry: EntityTypeRegistry) -> None:
    desc = resolve_index_or_raise(IndexSpec(field_name=" "), make_ctx(registry, Person))
    assert desc.index_key == " "
