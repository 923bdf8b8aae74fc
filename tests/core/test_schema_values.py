import pytest
from pydantic import ValidationError

from graphmap.core.errors import SchemaError
from graphmap.core.grammar import IndexType, Level
from graphmap.core.registry import EntityTypeRegistry
from graphmap.core.schema import IndexDescriptor, IndexSpec, PropertyContext


class Person:
    pass


def test_index_spec_defaults() -> None:
    spec = IndexSpec()
    assert spec.index_type is IndexType.LEGACY
    assert spec.level is Level.CLASS
    assert spec.explicit_index_name is None
    assert spec.field_name is None
    assert spec.unique is False and spec.numeric is False


def test_index_spec_normalizes_strings_and_empty_values() -> None:
    spec = IndexSpec(index_type="FULLTEXT", level="Instance", explicit_index_name="", field_name="")
    assert spec.index_type is IndexType.FULLTEXT
    assert spec.level is Level.INSTANCE
    assert spec.explicit_index_name is None
    assert spec.field_name is None


@pytest.mark.parametrize("payload", [{"index_type": "spatial"}, {"level": "module"}, {"name": "x"}])
def test_index_spec_rejects_invalid_payloads(payload: dict) -> None:
    with pytest.raises(ValidationError):
        IndexSpec(**payload)


def test_index_spec_keeps_whitespace_values() -> None:
    spec = IndexSpec(explicit_index_name="  ", field_name=" ")
    assert spec.explicit_index_name == "  "
    assert spec.field_name == " "


def test_index_spec_is_frozen_and_compares_by_value() -> None:
    spec = IndexSpec(index_type="label_based")
    with pytest.raises(ValidationError):
        spec.unique = True  # type: ignore[misc]
    assert spec == IndexSpec(index_type=IndexType.LABEL_BASED)
    assert spec.is_label_based()


def test_property_context_requires_storage_name() -> None:
    reg = EntityTypeRegistry()
    reg.register(Person)
    with pytest.raises(SchemaError, match="storage_name"):
        PropertyContext("name", "", Person, Person, reg.aliases_for(Person))


def test_property_context_owner_name() -> None:
    reg = EntityTypeRegistry()
    reg.register(Person, alias="Human")
    ctx = PropertyContext("name", "name", Person, Person, reg.aliases_for(Person))
    assert ctx.owner_name == "Person"


def test_descriptor_queries() -> None:
    fulltext = IndexDescriptor("Person", IndexType.FULLTEXT, "bio")
    label = IndexDescriptor("Person", IndexType.LABEL_BASED, "name", unique=True)
    assert fulltext.is_full_text() and not fulltext.is_label_based()
    assert label.is_label_based() and not label.is_full_text()


def test_descriptor_value_equality() -> None:
    a = IndexDescriptor("Order", IndexType.LEGACY, "ref", numeric=True, level=Level.CLASS)
    b = IndexDescriptor("Order", IndexType.LEGACY, "ref", numeric=True, level=Level.CLASS)
    assert a == b and hash(a) == hash(b)


@pytest.mark.parametrize(
    "kwargs,match",
    [
        ({"index_name": "", "index_type": IndexType.LEGACY, "index_key": "k"}, "index_name"),
        ({"index_name": "Order", "index_type": IndexType.LEGACY, "index_key": ""}, "index_key"),
        (
            {"index_name": "Order", "index_type": IndexType.LABEL_BASED, "index_key": "k", "numeric": True},
            "numeric",
        ),
    ],
)
def test_descriptor_invariants(kwargs: dict, match: str) -> None:
    with pytest.raises(SchemaError, match=match):
        IndexDescriptor(**kwargs)
