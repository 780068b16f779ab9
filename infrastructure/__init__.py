# ============================================================================
# INFRASTRUCTURE MODULE
# ============================================================================
# STATUS: Infrastructure - Catalog access
# PURPOSE: Read-only pg_catalog queries over a host-supplied connection
# CREATED: 18 OCT 2026
# ============================================================================
"""
Infrastructure module for pgvector scaffolding.

Provides:
- PgvectorCatalogRepository: column store types and vector index metadata

Usage:
    from infrastructure import PgvectorCatalogRepository

    repo = PgvectorCatalogRepository(connection)
    indexes = repo.list_vector_indexes()
"""

from infrastructure.catalog_repository import (
    COLUMN_TYPE_CATEGORY,
    VECTOR_INDEX_CATEGORY,
    PgvectorCatalogRepository,
)

__all__ = [
    "COLUMN_TYPE_CATEGORY",
    "VECTOR_INDEX_CATEGORY",
    "PgvectorCatalogRepository",
]
