# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized configuration and defaults for pgvector scaffolding.
"""

from core.config.defaults import (
    VECTOR_INDEX_METHODS,
    CatalogDefaults,
    RewriteDefaults,
    ScaffoldDefaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "VECTOR_INDEX_METHODS",
    "CatalogDefaults",
    "RewriteDefaults",
    "ScaffoldDefaults",
    "get_defaults",
    "reset_defaults",
]
