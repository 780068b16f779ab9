# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for catalog enrichment and source rewriting
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides defaults for the catalog enricher and the source rewriter.
A few of them can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple


# Access methods pgvector registers. Fixed: the catalog query filters on exactly these.
VECTOR_INDEX_METHODS: Tuple[str, ...] = ("hnsw", "ivfflat")


@dataclass(frozen=True)
class CatalogDefaults:
    """
    Defaults for catalog queries.

    Controls which indexes count as pgvector indexes and which
    schema unqualified tables live in.
    """
    index_methods: Tuple[str, ...] = VECTOR_INDEX_METHODS

    # LIKE patterns for pg_opclass.opcname
    operator_class_patterns: Tuple[str, ...] = (
        "vector_%_ops",
        "halfvec_%_ops",
        "sparsevec_%_ops",
    )

    # Schema assumed for tables the host reports without one
    default_schema: str = "public"

    @classmethod
    def from_env(cls) -> "CatalogDefaults":
        """Create from environment variables."""
        return cls(
            default_schema=os.getenv("PGVECTOR_DEFAULT_SCHEMA", "public"),
        )


@dataclass(frozen=True)
class RewriteDefaults:
    """
    Defaults for rewriting the generated initialization module.

    The host emits a psycopg_pool ConnectionPool(...) call with the
    scaffolding connection string inlined. When vector types are present
    the pool gets configure=register_vector so every pooled connection
    has the pgvector adapters loaded.
    """
    # Call whose argument list is augmented
    marker: str = "ConnectionPool("

    # Presence anywhere in the text means the edit was already made
    augmentation_token: str = "configure=register_vector"
    augmentation_fragment: str = ", configure=register_vector"
    augmentation_import: str = "from pgvector.psycopg import register_vector"

    # Advisory line the host prints above the inlined connection string
    advisory_comment: str = (
        "# WARNING: To protect potentially sensitive information in your connection "
        "string, you should move it out of source code. Read it from configuration "
        "or an environment variable instead."
    )

    # Replacement for the inlined connection string literal
    connection_env_var: str = "DATABASE_URL"
    connection_import: str = "import os"

    @property
    def connection_indirection(self) -> str:
        """Expression that replaces the quoted connection string."""
        return f'os.environ["{self.connection_env_var}"]'

    @classmethod
    def from_env(cls) -> "RewriteDefaults":
        """Create from environment variables."""
        return cls(
            connection_env_var=os.getenv("PGVECTOR_CONNECTION_ENV", "DATABASE_URL"),
        )


@dataclass(frozen=True)
class ScaffoldDefaults:
    """Container for all default configurations."""
    catalog: CatalogDefaults = field(default_factory=CatalogDefaults)
    rewrite: RewriteDefaults = field(default_factory=RewriteDefaults)

    @classmethod
    def from_env(cls) -> "ScaffoldDefaults":
        """Create all defaults from environment variables."""
        return cls(
            catalog=CatalogDefaults.from_env(),
            rewrite=RewriteDefaults.from_env(),
        )


_defaults: Optional[ScaffoldDefaults] = None


def get_defaults() -> ScaffoldDefaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = ScaffoldDefaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "VECTOR_INDEX_METHODS",
    "CatalogDefaults",
    "RewriteDefaults",
    "ScaffoldDefaults",
    "get_defaults",
    "reset_defaults",
]
