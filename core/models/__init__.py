# ============================================================================
# MODELS MODULE
# ============================================================================
# STATUS: Model exports
# PURPOSE: Central export point for schema, mapping and output models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Models Module - Central Export Point

- database_model: host-owned schema model carrying annotations (dataclasses)
- type_mapping: parsed store types, resolved mappings, catalog rows (pydantic)
- scaffolded: generated files and generator options (dataclasses)
"""

from core.models.database_model import (
    AnnotationStore,
    DatabaseColumn,
    DatabaseIndex,
    DatabaseModel,
    DatabaseTable,
)
from core.models.scaffolded import (
    DatabaseModelFactoryOptions,
    ModelCodeGenerationOptions,
    ScaffoldedFile,
    ScaffoldedModel,
)
from core.models.type_mapping import CatalogIndexRecord, StoreTypeDescriptor, TypeMapping

__all__ = [
    # Schema model
    "AnnotationStore",
    "DatabaseColumn",
    "DatabaseIndex",
    "DatabaseModel",
    "DatabaseTable",
    # Type mapping
    "StoreTypeDescriptor",
    "TypeMapping",
    "CatalogIndexRecord",
    # Generated output
    "ScaffoldedFile",
    "ScaffoldedModel",
    "ModelCodeGenerationOptions",
    "DatabaseModelFactoryOptions",
]
