# ============================================================================
# CORE MODULE
# ============================================================================
# STATUS: Core module initialization
# PURPOSE: Export core contracts and models
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================

from core.contracts import AnnotationName, StoreTypeKind, TypeTag
from core.models import (
    AnnotationStore,
    DatabaseColumn,
    DatabaseIndex,
    DatabaseModel,
    DatabaseTable,
    StoreTypeDescriptor,
    TypeMapping,
)

__all__ = [
    # Enums
    "AnnotationName",
    "StoreTypeKind",
    "TypeTag",
    # Models
    "AnnotationStore",
    "DatabaseColumn",
    "DatabaseIndex",
    "DatabaseModel",
    "DatabaseTable",
    "StoreTypeDescriptor",
    "TypeMapping",
]
