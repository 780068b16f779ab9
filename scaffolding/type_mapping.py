# ============================================================================
# TYPE MAPPING RESOLVER
# ============================================================================
# STATUS: Scaffolding - Store type -> Python type resolution
# PURPOSE: Host type-mapping plugin for pgvector columns
# CREATED: 18 OCT 2026
# EXPORTS: resolve, resolve_column, PgvectorTypeMappingSourcePlugin, KIND_TO_TYPE_TAG
# DEPENDENCIES: functools
# ============================================================================
"""
Type Mapping Resolver

Maps pgvector store types to their Python types:

    vector(N)     -> pgvector.Vector
    halfvec(N)    -> pgvector.HalfVector
    sparsevec(N)  -> pgvector.SparseVector

The host calls the plugin once per column while generating code. A None
result means "not a pgvector type": the host then applies its own default
(an opaque bytes mapping for types it does not know).
"""

from functools import lru_cache
from typing import Any, Dict, Optional

from core.contracts import StoreTypeKind, TypeMappingInfo, TypeTag
from core.models.database_model import DatabaseColumn
from core.models.type_mapping import TypeMapping
from scaffolding.store_type_parser import parse


KIND_TO_TYPE_TAG: Dict[StoreTypeKind, TypeTag] = {
    StoreTypeKind.VECTOR: TypeTag.VECTOR,
    StoreTypeKind.HALFVEC: TypeTag.HALF_VECTOR,
    StoreTypeKind.SPARSEVEC: TypeTag.SPARSE_VECTOR,
}

_unmapped = [kind.value for kind in StoreTypeKind if kind not in KIND_TO_TYPE_TAG]
if _unmapped:
    raise RuntimeError(f"Store type kinds without a type tag: {', '.join(_unmapped)}")


@lru_cache(maxsize=1024)
def resolve(store_type_name: Optional[str]) -> Optional[TypeMapping]:
    """
    Resolve a store type to a TypeMapping.

    Args:
        store_type_name: Store type as the host reports it

    Returns:
        TypeMapping, or None when the store type is not a pgvector type
    """
    descriptor = parse(store_type_name)
    if descriptor is None:
        return None

    return TypeMapping(
        store_type=store_type_name,
        type_tag=KIND_TO_TYPE_TAG[descriptor.kind],
        dimension=descriptor.dimension,
    )


def resolve_column(column: DatabaseColumn) -> Optional[TypeMapping]:
    """Resolve a column by its effective (catalog-exact when enriched) store type."""
    return resolve(column.effective_store_type)


class PgvectorTypeMappingSourcePlugin:
    """
    Type mapping plugin registered with the host.

    Accepts a TypeMappingInfo or anything carrying store_type_name.
    """

    def find_mapping(self, mapping_info: Any) -> Optional[TypeMapping]:
        if isinstance(mapping_info, TypeMappingInfo):
            store_type_name = mapping_info.store_type_name
        else:
            store_type_name = getattr(mapping_info, "store_type_name", None)

        return resolve(store_type_name)


__all__ = [
    "KIND_TO_TYPE_TAG",
    "resolve",
    "resolve_column",
    "PgvectorTypeMappingSourcePlugin",
]
