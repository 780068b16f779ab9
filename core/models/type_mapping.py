# ============================================================================
# TYPE MAPPING VALUE MODELS
# ============================================================================
# STATUS: Core - Immutable values for store types and catalog rows
# PURPOSE: Parsed store types, resolved mappings, catalog index rows
# CREATED: 18 OCT 2026
# EXPORTS: StoreTypeDescriptor, TypeMapping, CatalogIndexRecord
# DEPENDENCIES: pydantic
# ============================================================================
"""
Type mapping value models.

All three models are frozen: they are built once per lookup or per
catalog row and never mutated afterwards.
"""

from typing import Optional

from pydantic import BaseModel, Field

from core.contracts import StoreTypeKind, TypeTag


class StoreTypeDescriptor(BaseModel):
    """
    A parsed pgvector store type.

    dimension is None exactly when the raw text had no "(N)" suffix.
    """
    raw_text: str = Field(..., description="Store type as the caller passed it")
    kind: StoreTypeKind = Field(..., description="Base kind from the lexical prefix")
    dimension: Optional[int] = Field(default=None, ge=0, description="Declared dimension, if any")

    model_config = {"frozen": True}

    def to_store_type(self) -> str:
        """Render the canonical store type, e.g. "vector(1536)" or "halfvec"."""
        if self.dimension is None:
            return self.kind.value
        return f"{self.kind.value}({self.dimension})"

    @property
    def python_type_name(self) -> str:
        """Class name of the Python type columns of this kind map to."""
        return {
            StoreTypeKind.VECTOR: "Vector",
            StoreTypeKind.HALFVEC: "HalfVector",
            StoreTypeKind.SPARSEVEC: "SparseVector",
        }[self.kind]


class TypeMapping(BaseModel):
    """Resolved pairing of a store type with its target Python type."""
    store_type: str
    type_tag: TypeTag
    dimension: Optional[int] = Field(default=None, ge=0)

    model_config = {"frozen": True}

    @property
    def python_type(self) -> str:
        """Import path of the target type (e.g. "pgvector.Vector")."""
        return self.type_tag.value


class CatalogIndexRecord(BaseModel):
    """One row of the vector index catalog query."""
    schema_name: str
    table_name: str
    index_name: str
    method: str
    operator_class: str

    model_config = {"frozen": True}


__all__ = ["StoreTypeDescriptor", "TypeMapping", "CatalogIndexRecord"]
