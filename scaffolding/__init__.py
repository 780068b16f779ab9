# ============================================================================
# SCAFFOLDING MODULE
# ============================================================================
# STATUS: Scaffolding - pgvector support for schema scaffolding
# PURPOSE: Parser, resolver, enricher, rewriter and host registration
# LAST_REVIEWED: 18 OCT 2026
# ============================================================================
"""
Scaffolding Module

Control flow within one scaffolding run:

    host introspector -> DatabaseModel
        -> CatalogEnricher (annotations)
        -> host code generator (asks PgvectorTypeMappingSourcePlugin per column)
        -> SourceRewriter (context file)
"""

from scaffolding.store_type_parser import is_pgvector_type, parse
from scaffolding.type_mapping import PgvectorTypeMappingSourcePlugin, resolve, resolve_column
from scaffolding.enricher import CatalogEnricher, EnrichmentResult
from scaffolding.rewriter import SourceRewriter, find_matching_close, rewrite
from scaffolding.decorators import (
    PgvectorDatabaseModelFactory,
    PgvectorModelCodeGenerator,
    index_is_vector_index,
    model_has_vector_types,
)
from scaffolding.design_time import DesignTimeServices, configure_design_time_services

__all__ = [
    # Parsing / resolution
    "parse",
    "is_pgvector_type",
    "resolve",
    "resolve_column",
    "PgvectorTypeMappingSourcePlugin",
    # Enrichment
    "CatalogEnricher",
    "EnrichmentResult",
    # Rewriting
    "SourceRewriter",
    "find_matching_close",
    "rewrite",
    # Host integration
    "PgvectorDatabaseModelFactory",
    "PgvectorModelCodeGenerator",
    "model_has_vector_types",
    "index_is_vector_index",
    "DesignTimeServices",
    "configure_design_time_services",
]
