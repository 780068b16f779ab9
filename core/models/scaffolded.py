# ============================================================================
# SCAFFOLDED OUTPUT MODELS
# ============================================================================
# STATUS: Core - Code generator inputs and outputs
# PURPOSE: Generated files and the options the host passes around them
# CREATED: 18 OCT 2026
# ============================================================================
"""
Scaffolded output models.

The host's code generator returns a ScaffoldedModel: one context file
(the initialization module holding the connection pool) plus any number
of additional files (one per table, typically).
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ScaffoldedFile:
    """One generated source file."""
    path: str
    code: str


@dataclass
class ScaffoldedModel:
    """Everything a code generation run produced."""
    context_file: ScaffoldedFile
    additional_files: List[ScaffoldedFile] = field(default_factory=list)


@dataclass
class ModelCodeGenerationOptions:
    """Options the host passes to its code generator."""
    context_name: Optional[str] = None
    connection_string: Optional[str] = None
    project_dir: Optional[str] = None


@dataclass
class DatabaseModelFactoryOptions:
    """Schema/table filters the host applies during introspection."""
    schemas: List[str] = field(default_factory=list)
    tables: List[str] = field(default_factory=list)


__all__ = [
    "ScaffoldedFile",
    "ScaffoldedModel",
    "ModelCodeGenerationOptions",
    "DatabaseModelFactoryOptions",
]
