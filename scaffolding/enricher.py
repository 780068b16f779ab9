# ============================================================================
# CATALOG ENRICHER
# ============================================================================
# STATUS: Scaffolding - Schema model enrichment from pg_catalog
# PURPOSE: Attach exact store types, index methods/opclasses and the
#          has-vector-types flag to the host's schema model
# CREATED: 18 OCT 2026
# EXPORTS: CatalogEnricher, EnrichmentResult
# DEPENDENCIES: psycopg (via infrastructure.catalog_repository)
# ============================================================================
"""
Catalog Enricher

Runs once per scaffolding run, after the host built its schema model and
before code generation:

1. Column store types: format_type() for every column -> Pgvector:StoreType
2. Index metadata: hnsw / ivfflat indexes -> Pgvector:IndexMethod and
   Pgvector:IndexOperators on the matching in-model index
3. Model flag: any column resolving to a pgvector type ->
   Pgvector:HasVectorTypes = True on the model root

Writes are staged and applied only once every catalog query succeeded.
A failing query propagates and leaves the model untouched, so the
code generator never sees a half-enriched model.

Catalog indexes whose table or index is not in the model (filtered or
renamed by the host) are skipped.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Tuple

from core.config import CatalogDefaults, get_defaults
from core.contracts import AnnotationName
from core.logging import ComponentType, get_logger, log_checkpoint, log_context
from core.models.database_model import Annotatable, DatabaseModel
from infrastructure.catalog_repository import PgvectorCatalogRepository
from scaffolding.type_mapping import resolve

logger = get_logger(__name__, ComponentType.ENRICHER)


@dataclass
class EnrichmentResult:
    """Summary of one enrichment pass."""
    columns_annotated: int = 0
    indexes_annotated: int = 0
    unmatched_indexes: List[str] = field(default_factory=list)
    has_vector_types: bool = False

    def to_dict(self) -> dict:
        return {
            "columns_annotated": self.columns_annotated,
            "indexes_annotated": self.indexes_annotated,
            "unmatched_indexes": list(self.unmatched_indexes),
            "has_vector_types": self.has_vector_types,
        }


class CatalogEnricher:
    """
    Enriches a DatabaseModel with pgvector catalog metadata.

    Stateless between runs: each call to enrich() builds its own
    repository over the connection it is given.
    """

    def __init__(
        self,
        defaults: Optional[CatalogDefaults] = None,
        repository_factory: Optional[Callable[[Any], PgvectorCatalogRepository]] = None,
    ):
        self.defaults = defaults or get_defaults().catalog
        self._repository_factory = repository_factory or (
            lambda connection: PgvectorCatalogRepository(connection, self.defaults)
        )

    def enrich(self, model: DatabaseModel, connection: Any) -> EnrichmentResult:
        """
        Enrich model in place using catalog queries over connection.

        Args:
            model: Host-built schema model (borrowed, mutated via annotations)
            connection: Open psycopg connection (borrowed, not closed)

        Returns:
            EnrichmentResult summary

        Raises:
            psycopg.Error: Any catalog query failure; model is left unchanged
        """
        if model is None:
            raise ValueError("model is required")

        repository = self._repository_factory(connection)
        result = EnrichmentResult()
        pending: List[Tuple[Annotatable, AnnotationName, Any]] = []

        with log_context(component=ComponentType.ENRICHER.value, operation="enrich"):
            store_types = self._collect_store_types(model, repository, pending, result)
            self._collect_index_annotations(model, repository, pending, result)

            # Step 3 sees staged store types, not just what the host reported
            result.has_vector_types = any(
                resolve(store_types.get(id(column)) or column.effective_store_type) is not None
                for _, column in model.iter_columns()
            )
            if result.has_vector_types:
                pending.append((model, AnnotationName.HAS_VECTOR_TYPES, True))

            for node, key, value in pending:
                node.set_annotation(key, value)

        log_checkpoint("enrichment_completed", result.to_dict(), logger=logger.logger)
        return result

    # =========================================================================
    # STEP 1 - COLUMN STORE TYPES
    # =========================================================================

    def _collect_store_types(
        self,
        model: DatabaseModel,
        repository: PgvectorCatalogRepository,
        pending: List[Tuple[Annotatable, AnnotationName, Any]],
        result: EnrichmentResult,
    ) -> dict:
        store_types = {}
        with log_context(step="column_store_types"):
            for table, column in model.iter_columns():
                schema_name = model.schema_of(table, self.defaults.default_schema)
                store_type = repository.get_formatted_type(schema_name, table.name, column.name)
                if not store_type:
                    continue
                store_types[id(column)] = store_type
                pending.append((column, AnnotationName.STORE_TYPE, store_type))
                result.columns_annotated += 1
        return store_types

    # =========================================================================
    # STEP 2 - INDEX METADATA
    # =========================================================================

    def _collect_index_annotations(
        self,
        model: DatabaseModel,
        repository: PgvectorCatalogRepository,
        pending: List[Tuple[Annotatable, AnnotationName, Any]],
        result: EnrichmentResult,
    ) -> None:
        with log_context(step="index_metadata"):
            for record in repository.list_vector_indexes():
                table = model.find_table(
                    record.schema_name, record.table_name, self.defaults.default_schema
                )
                index = table.find_index(record.index_name) if table else None
                if index is None:
                    qualified = f"{record.schema_name}.{record.table_name}.{record.index_name}"
                    result.unmatched_indexes.append(qualified)
                    logger.debug(f"Skipping catalog index not in model: {qualified}")
                    continue

                if record.method:
                    pending.append((index, AnnotationName.INDEX_METHOD, record.method))
                if record.operator_class:
                    pending.append((index, AnnotationName.INDEX_OPERATORS, record.operator_class))
                result.indexes_annotated += 1


__all__ = ["CatalogEnricher", "EnrichmentResult"]
