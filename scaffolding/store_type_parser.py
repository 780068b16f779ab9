# ============================================================================
# STORE TYPE PARSER
# ============================================================================
# STATUS: Scaffolding - Lexical recognition of pgvector store types
# PURPOSE: Turn "vector(1536)" / "halfvec" / "sparsevec(30000)" into descriptors
# CREATED: 18 OCT 2026
# EXPORTS: parse, is_pgvector_type, STORE_TYPE_PATTERN
# DEPENDENCIES: re
# ============================================================================
"""
Store Type Parser

Recognizes the pgvector family of store types:

    vector | halfvec | sparsevec      optionally followed by (N)

Matching is case-insensitive after trimming surrounding whitespace.
Anything else (other types, "vector(abc)", "vector(-1)") is rejected with
None so the caller can fall back to its own handling.
"""

import re
from typing import Optional

from core.contracts import StoreTypeKind
from core.models.type_mapping import StoreTypeDescriptor

STORE_TYPE_PATTERN = re.compile(
    r"^(vector|halfvec|sparsevec)(?:\((\d+)\))?$",
    re.IGNORECASE | re.ASCII,
)


def parse(raw: Optional[str]) -> Optional[StoreTypeDescriptor]:
    """
    Parse a store type string.

    Args:
        raw: Store type as reported by the catalog or the host

    Returns:
        A fresh StoreTypeDescriptor, or None if raw is not a pgvector type
    """
    if not raw or not raw.strip():
        return None

    match = STORE_TYPE_PATTERN.match(raw.strip())
    if match is None:
        return None

    kind = StoreTypeKind(match.group(1).lower())
    dimension = int(match.group(2)) if match.group(2) is not None else None

    return StoreTypeDescriptor(raw_text=raw, kind=kind, dimension=dimension)


def is_pgvector_type(raw: Optional[str]) -> bool:
    """Check if a store type is one of the pgvector types."""
    return parse(raw) is not None


__all__ = ["STORE_TYPE_PATTERN", "parse", "is_pgvector_type"]
