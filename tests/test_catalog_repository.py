# ============================================================================
# CATALOG REPOSITORY TESTS
# ============================================================================
# STATUS: Tests - pg_catalog queries with a mocked psycopg connection
# PURPOSE: Verify query parameters, row mapping and failure propagation
# CREATED: 18 OCT 2026
# ============================================================================
"""
Catalog Repository Tests

Unit tests with a mocked psycopg connection; no database required.

Run with:
    pytest tests/test_catalog_repository.py -v
"""

import logging

import psycopg
from psycopg import errors
import pytest
from unittest.mock import MagicMock
from psycopg.rows import dict_row

from core.config import CatalogDefaults
from core.models.type_mapping import CatalogIndexRecord
from infrastructure.catalog_repository import (
    COLUMN_TYPE_QUERY,
    VECTOR_INDEX_QUERY,
    PgvectorCatalogRepository,
)


# ============================================================================
# HELPERS
# ============================================================================

def _make_connection(fetchone=None, fetchall=None, error=None):
    """
    Create a mocked psycopg connection.

    Args:
        fetchone: What cursor.fetchone() returns.
        fetchall: What cursor.fetchall() returns.
        error: If set, cursor.execute() raises this exception.
    """
    conn = MagicMock()
    cur = conn.cursor.return_value.__enter__.return_value
    cur.fetchone.return_value = fetchone
    cur.fetchall.return_value = fetchall or []
    if error:
        cur.execute.side_effect = error
    return conn, cur


def _repo(conn):
    return PgvectorCatalogRepository(conn, CatalogDefaults())


# ============================================================================
# COLUMN STORE TYPE
# ============================================================================

class TestGetFormattedType:
    def test_returns_formatted_type(self):
        conn, cur = _make_connection(fetchone={"formatted_type": "vector(1536)"})
        assert _repo(conn).get_formatted_type("public", "products", "embedding") == "vector(1536)"

    def test_query_parameters(self):
        conn, cur = _make_connection(fetchone={"formatted_type": "integer"})
        _repo(conn).get_formatted_type("shop", "products", "id")

        conn.cursor.assert_called_once_with(row_factory=dict_row)
        cur.execute.assert_called_once_with(
            COLUMN_TYPE_QUERY,
            {"schema_name": "shop", "table_name": "products", "column_name": "id"},
        )

    def test_missing_schema_uses_default(self):
        conn, cur = _make_connection(fetchone={"formatted_type": "text"})
        _repo(conn).get_formatted_type(None, "documents", "content")
        params = cur.execute.call_args[0][1]
        assert params["schema_name"] == "public"

    def test_missing_row_returns_none(self):
        conn, _ = _make_connection(fetchone=None)
        assert _repo(conn).get_formatted_type("public", "products", "gone") is None

    def test_null_type_returns_none(self):
        conn, _ = _make_connection(fetchone={"formatted_type": None})
        assert _repo(conn).get_formatted_type("public", "products", "gone") is None

    def test_failure_propagates_unwrapped(self, caplog):
        error = psycopg.OperationalError("server closed the connection unexpectedly")
        conn, _ = _make_connection(error=error)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(psycopg.OperationalError) as exc_info:
                _repo(conn).get_formatted_type("public", "products", "embedding")

        assert exc_info.value is error
        assert "column store type lookup" in caplog.text

    def test_connection_not_closed_or_committed(self):
        conn, _ = _make_connection(fetchone={"formatted_type": "vector(3)"})
        _repo(conn).get_formatted_type("public", "products", "embedding")
        conn.close.assert_not_called()
        conn.commit.assert_not_called()


# ============================================================================
# VECTOR INDEXES
# ============================================================================

class TestListVectorIndexes:
    def test_maps_rows_to_records(self):
        conn, _ = _make_connection(fetchall=[{
            "schema_name": "public",
            "table_name": "products",
            "index_name": "ix_products_embedding",
            "method": "hnsw",
            "operator_class": "vector_cosine_ops",
        }])

        records = _repo(conn).list_vector_indexes()

        assert records == [CatalogIndexRecord(
            schema_name="public",
            table_name="products",
            index_name="ix_products_embedding",
            method="hnsw",
            operator_class="vector_cosine_ops",
        )]

    def test_no_rows(self):
        conn, _ = _make_connection(fetchall=[])
        assert _repo(conn).list_vector_indexes() == []

    def test_filters_on_methods_and_patterns(self):
        conn, cur = _make_connection(fetchall=[])
        _repo(conn).list_vector_indexes()

        query, params = cur.execute.call_args[0]
        assert query is VECTOR_INDEX_QUERY
        assert params["methods"] == ["hnsw", "ivfflat"]
        assert "vector_%_ops" in params["patterns"]

    def test_failure_propagates_unwrapped(self, caplog):
        error = errors.InsufficientPrivilege("permission denied for table pg_index")
        conn, _ = _make_connection(error=error)

        with caplog.at_level(logging.ERROR):
            with pytest.raises(errors.InsufficientPrivilege):
                _repo(conn).list_vector_indexes()

        assert "vector index metadata" in caplog.text
        assert caplog.records[-1].extra["component"] == "infrastructure"
