# ============================================================================
# PGVECTOR CATALOG REPOSITORY
# ============================================================================
# STATUS: Infrastructure - Read-only pg_catalog queries
# PURPOSE: Exact column types and vector index metadata the introspector misses
# CREATED: 18 OCT 2026
# EXPORTS: PgvectorCatalogRepository, COLUMN_TYPE_QUERY, VECTOR_INDEX_QUERY
# DEPENDENCIES: psycopg
# ============================================================================
"""
pgvector Catalog Repository

Two read-only queries against pg_catalog:

1. Column store type (one per column): format_type() keeps the typmod,
   so "vector(1536)" comes back instead of a bare "vector".
2. Vector indexes (one per run): index, table, schema, access method and
   operator class of every hnsw / ivfflat index on a pgvector opclass.

The connection is borrowed from the host. This module never opens,
commits or closes it.

Usage:
    repo = PgvectorCatalogRepository(connection)
    repo.get_formatted_type("public", "products", "embedding")  # "vector(3)"
    repo.list_vector_indexes()  # [CatalogIndexRecord(...), ...]
"""

from typing import Any, List, Optional

import psycopg
from psycopg import sql
from psycopg.rows import dict_row

from core.config import CatalogDefaults, get_defaults
from core.logging import ComponentType, get_logger
from core.models.type_mapping import CatalogIndexRecord

logger = get_logger(__name__, ComponentType.INFRASTRUCTURE)


COLUMN_TYPE_CATEGORY = "column store type lookup"
VECTOR_INDEX_CATEGORY = "vector index metadata"

COLUMN_TYPE_QUERY = sql.SQL("""
    SELECT format_type(a.atttypid, a.atttypmod) AS formatted_type
    FROM pg_catalog.pg_attribute a
    JOIN pg_catalog.pg_class c ON a.attrelid = c.oid
    JOIN pg_catalog.pg_namespace n ON c.relnamespace = n.oid
    WHERE n.nspname = %(schema_name)s
      AND c.relname = %(table_name)s
      AND a.attname = %(column_name)s
      AND a.attnum > 0
      AND NOT a.attisdropped
""")

# indclass[0]: operator class of the first key column
VECTOR_INDEX_QUERY = sql.SQL("""
    SELECT
        n.nspname AS schema_name,
        t.relname AS table_name,
        i.relname AS index_name,
        am.amname AS method,
        opc.opcname AS operator_class
    FROM pg_catalog.pg_index idx
    JOIN pg_catalog.pg_class i ON idx.indexrelid = i.oid
    JOIN pg_catalog.pg_class t ON idx.indrelid = t.oid
    JOIN pg_catalog.pg_namespace n ON t.relnamespace = n.oid
    JOIN pg_catalog.pg_am am ON i.relam = am.oid
    JOIN pg_catalog.pg_opclass opc ON idx.indclass[0] = opc.oid
    WHERE am.amname::text = ANY(%(methods)s)
      AND opc.opcname::text LIKE ANY(%(patterns)s)
    ORDER BY n.nspname, t.relname, i.relname
""")


class PgvectorCatalogRepository:
    """
    Read-only pg_catalog access over a borrowed psycopg connection.

    Every query failure is logged with its category and re-raised as is.
    """

    def __init__(self, connection: Any, defaults: Optional[CatalogDefaults] = None):
        self.connection = connection
        self.defaults = defaults or get_defaults().catalog

    def get_formatted_type(
        self,
        schema_name: Optional[str],
        table_name: str,
        column_name: str,
    ) -> Optional[str]:
        """
        Exact formatted type of one column.

        Returns:
            e.g. "vector(1536)", or None when the column is not in the catalog
        """
        params = {
            "schema_name": schema_name or self.defaults.default_schema,
            "table_name": table_name,
            "column_name": column_name,
        }
        try:
            with self.connection.cursor(row_factory=dict_row) as cur:
                cur.execute(COLUMN_TYPE_QUERY, params)
                row = cur.fetchone()
        except psycopg.Error as e:
            logger.error(
                f"Catalog query failed ({COLUMN_TYPE_CATEGORY}) for "
                f"{params['schema_name']}.{table_name}.{column_name}: {e}"
            )
            raise

        if not row or not row.get("formatted_type"):
            return None
        return str(row["formatted_type"])

    def list_vector_indexes(self) -> List[CatalogIndexRecord]:
        """All hnsw / ivfflat indexes whose first key uses a pgvector opclass."""
        params = {
            "methods": list(self.defaults.index_methods),
            "patterns": list(self.defaults.operator_class_patterns),
        }
        try:
            with self.connection.cursor(row_factory=dict_row) as cur:
                cur.execute(VECTOR_INDEX_QUERY, params)
                rows = cur.fetchall()
        except psycopg.Error as e:
            logger.error(f"Catalog query failed ({VECTOR_INDEX_CATEGORY}): {e}")
            raise

        records = [CatalogIndexRecord(**row) for row in rows]
        logger.debug(f"Found {len(records)} vector indexes in catalog")
        return records


__all__ = [
    "COLUMN_TYPE_CATEGORY",
    "VECTOR_INDEX_CATEGORY",
    "COLUMN_TYPE_QUERY",
    "VECTOR_INDEX_QUERY",
    "PgvectorCatalogRepository",
]
