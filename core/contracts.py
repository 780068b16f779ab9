# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Core enums and host contracts
# PURPOSE: Closed vocabularies and the host pipeline's plugin surface
# LAST_REVIEWED: 18 OCT 2026
# EXPORTS: StoreTypeKind, TypeTag, AnnotationName, TypeMappingInfo,
#          DatabaseModelFactory, ModelCodeGenerator, TypeMappingSourcePlugin
# DEPENDENCIES: enum, typing
# ============================================================================
"""
Base contracts for pgvector scaffolding.

Two kinds of contract live here:
- Closed enums shared by the parser, resolver, enricher and rewriter
- Protocols describing the three host slots we plug into
  (type mapping, model factory, code generator)

Nothing else about the host pipeline is assumed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from core.models.database_model import DatabaseModel
    from core.models.scaffolded import DatabaseModelFactoryOptions, ScaffoldedModel
    from core.models.type_mapping import TypeMapping


# ============================================================================
# ENUMS
# ============================================================================

class StoreTypeKind(str, Enum):
    """Base kinds of pgvector store types, as spelled in the catalog."""
    VECTOR = "vector"
    HALFVEC = "halfvec"
    SPARSEVEC = "sparsevec"


class TypeTag(str, Enum):
    """
    Target Python types for pgvector columns.

    Values are import paths so generated code can reference them directly.
    """
    VECTOR = "pgvector.Vector"
    HALF_VECTOR = "pgvector.HalfVector"
    SPARSE_VECTOR = "pgvector.SparseVector"

    @property
    def module(self) -> str:
        return self.value.rsplit(".", 1)[0]

    @property
    def class_name(self) -> str:
        return self.value.rsplit(".", 1)[1]

    def is_specialized(self) -> bool:
        """Check if the tag is a type the generic introspector cannot classify."""
        return self in (TypeTag.VECTOR, TypeTag.HALF_VECTOR, TypeTag.SPARSE_VECTOR)


class AnnotationName(str, Enum):
    """
    Annotation keys attached to schema-model nodes.

    STORE_TYPE       -> column   (exact formatted type, e.g. "vector(1536)")
    INDEX_METHOD     -> index    (access method, e.g. "hnsw")
    INDEX_OPERATORS  -> index    (operator class, e.g. "vector_cosine_ops")
    HAS_VECTOR_TYPES -> model    (True when any column maps to a pgvector type)
    """
    STORE_TYPE = "Pgvector:StoreType"
    INDEX_METHOD = "Pgvector:IndexMethod"
    INDEX_OPERATORS = "Pgvector:IndexOperators"
    HAS_VECTOR_TYPES = "Pgvector:HasVectorTypes"


# ============================================================================
# HOST CONTRACTS
# ============================================================================

@dataclass(frozen=True)
class TypeMappingInfo:
    """What the host hands a type-mapping plugin for one lookup."""
    store_type_name: Optional[str] = None


@runtime_checkable
class TypeMappingSourcePlugin(Protocol):
    """Host slot: return a mapping for a store type, or None for no opinion."""

    def find_mapping(self, mapping_info: TypeMappingInfo) -> Optional["TypeMapping"]:
        ...


@runtime_checkable
class DatabaseModelFactory(Protocol):
    """Host slot: build the raw schema model from a live connection."""

    def create(
        self,
        connection: Any,
        options: Optional["DatabaseModelFactoryOptions"] = None,
    ) -> "DatabaseModel":
        ...


@runtime_checkable
class ModelCodeGenerator(Protocol):
    """Host slot: emit source files for a schema model."""

    @property
    def language(self) -> str:
        ...

    def generate_model(self, model: "DatabaseModel", options: Any = None) -> "ScaffoldedModel":
        ...


__all__ = [
    "StoreTypeKind",
    "TypeTag",
    "AnnotationName",
    "TypeMappingInfo",
    "TypeMappingSourcePlugin",
    "DatabaseModelFactory",
    "ModelCodeGenerator",
]
