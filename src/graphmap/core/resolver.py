"""
IndexDescriptorResolver: derive and validate the index a property maps to.

Resolution steps for one (IndexSpec, PropertyContext) pair:

1. Classify the index as label-based or legacy.
2. Derive the index name:
   - label-based: never user-named; CLASS uses the declaring class's alias,
     INSTANCE the owner's alias, GLOBAL is rejected, anything else falls back to
     the owner's alias;
   - legacy: delegated to `graphmap.core.naming.legacy_index_name`.
3. Derive the key: `field_name` override, else the property's storage name.
4. Copy through unique/numeric/level.
5. Reject numeric label-based indexes.

Resolution is all-or-nothing. `resolve` returns either an IndexDescriptor or the
IndexMappingError describing the rejected combination; `resolve_or_raise` raises
that error instead.

Examples:
    >>> from graphmap.core.registry import EntityTypeRegistry
    >>> from graphmap.core.schema import IndexSpec, PropertyContext
    >>> class Person: ...
    >>> reg = EntityTypeRegistry()
    >>> _ = reg.register(Person)
    >>> ctx = PropertyContext("name", "name", Person, Person, reg.aliases_for(Person))
    >>> resolve_index_or_raise(IndexSpec(index_type="label_based", level="instance"), ctx).index_name
    'Person'
"""

from __future__ import annotations

import logging

from .errors import (
    ExplicitNameNotAllowed,
    GlobalLevelUnsupportedForLabelIndex,
    IndexMappingError,
    NumericIndexingUnsupportedForLabelIndex,
)
from .grammar import Level
from .naming import legacy_index_name
from .schema import IndexDescriptor, IndexSpec, PropertyContext

__all__ = [
    "Resolution",
    "IndexDescriptorResolver",
    "resolve_index",
    "resolve_index_or_raise",
]

logger = logging.getLogger(__name__)

Resolution = IndexDescriptor | IndexMappingError


class IndexDescriptorResolver:
    """Stateless resolver; one instance may be shared across threads."""

    def resolve(self, spec: IndexSpec, ctx: PropertyContext) -> Resolution:
        """
        Resolve the index descriptor of a property.

        Args:
            spec (IndexSpec): Parsed index annotation values.
            ctx (PropertyContext): Owning entity/property metadata.

        Returns:
            IndexDescriptor | IndexMappingError: The descriptor, or the error for
            a rejected option combination. Registry failures (e.g., an
            unregistered declaring class) are raised, not returned.
        """
        try:
            descriptor = self._build(spec, ctx)
        except IndexMappingError as exc:
            logger.warning("Rejected index mapping: %s", exc)
            return exc
        logger.debug(
            "Resolved index for %s.%s: %s[%s] (%s)",
            ctx.owner_name,
            ctx.property_name,
            descriptor.index_name,
            descriptor.index_key,
            descriptor.index_type.value,
        )
        return descriptor

    def resolve_or_raise(self, spec: IndexSpec, ctx: PropertyContext) -> IndexDescriptor:
        """
        Resolve the index descriptor of a property, raising on rejection.

        Raises:
            ExplicitNameNotAllowed: Explicit name on a label-based index.
            GlobalLevelUnsupportedForLabelIndex: GLOBAL level on a label-based index.
            NumericIndexingUnsupportedForLabelIndex: Numeric label-based index.
        """
        result = self.resolve(spec, ctx)
        if isinstance(result, IndexMappingError):
            raise result
        return result

    def _build(self, spec: IndexSpec, ctx: PropertyContext) -> IndexDescriptor:
        label_based = spec.is_label_based()
        if label_based:
            index_name = self.determine_label_index_name(spec, ctx)
        else:
            index_name = self.determine_index_name(spec, ctx)
        index_key = spec.field_name or ctx.storage_name
        if label_based and spec.numeric:
            raise NumericIndexingUnsupportedForLabelIndex(
                "No numeric indexing and range queries currently supported for label based indexes",
                entity=ctx.owner_name,
                property_name=ctx.property_name,
            )
        return IndexDescriptor(
            index_name=index_name,
            index_type=spec.index_type,
            index_key=index_key,
            unique=spec.unique,
            numeric=spec.numeric,
            level=spec.level,
        )

    def determine_label_index_name(self, spec: IndexSpec, ctx: PropertyContext) -> str:
        """Name a label-based index after the relevant entity alias."""
        if spec.explicit_index_name:
            raise ExplicitNameNotAllowed(
                "No index name allowed on label based indexes",
                entity=ctx.owner_name,
                property_name=ctx.property_name,
            )
        level = spec.level
        if level is Level.CLASS:
            # Superclass properties index under the superclass label.
            return ctx.aliases.resolve_alias_for_class(ctx.declaring_class)
        if level is Level.INSTANCE:
            return ctx.aliases.resolve_own_alias()
        if level is Level.GLOBAL:
            raise GlobalLevelUnsupportedForLabelIndex(
                "No global index for label based indexes",
                entity=ctx.owner_name,
                property_name=ctx.property_name,
            )
        return ctx.aliases.resolve_own_alias()

    def determine_index_name(self, spec: IndexSpec, ctx: PropertyContext) -> str:
        """Name a legacy index from its level, declaring class, and explicit name."""
        return legacy_index_name(
            spec.level,
            ctx.declaring_class,
            spec.explicit_index_name,
            ctx.owner_type,
            ctx.entity_kind,
        )


_DEFAULT_RESOLVER = IndexDescriptorResolver()


def resolve_index(spec: IndexSpec, ctx: PropertyContext) -> Resolution:
    """Resolve with the shared default resolver (see IndexDescriptorResolver.resolve)."""
    return _DEFAULT_RESOLVER.resolve(spec, ctx)


def resolve_index_or_raise(spec: IndexSpec, ctx: PropertyContext) -> IndexDescriptor:
    """Resolve with the shared default resolver, raising IndexMappingError on rejection."""
    return _DEFAULT_RESOLVER.resolve_or_raise(spec, ctx)
