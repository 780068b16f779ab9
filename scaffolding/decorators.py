# ============================================================================
# HOST DECORATORS
# ============================================================================
# STATUS: Scaffolding - Wrappers around the host's factory and generator
# PURPOSE: Run enrichment after model building and rewriting after code
#          generation without touching host internals
# CREATED: 18 OCT 2026
# EXPORTS: PgvectorDatabaseModelFactory, PgvectorModelCodeGenerator,
#          model_has_vector_types, index_is_vector_index
# ============================================================================
"""
Host Decorators

Both classes wrap a host component, call through, then post-process:

    PgvectorDatabaseModelFactory.create()
        host factory -> DatabaseModel -> CatalogEnricher.enrich()

    PgvectorModelCodeGenerator.generate_model()
        host generator -> ScaffoldedModel -> SourceRewriter on the context file

Errors from the wrapped component propagate unchanged.
"""

from typing import Any, Callable, Optional

from core.contracts import AnnotationName, DatabaseModelFactory, ModelCodeGenerator
from core.logging import ComponentType, get_logger, log_checkpoint
from core.models.database_model import DatabaseIndex, DatabaseModel
from core.models.scaffolded import DatabaseModelFactoryOptions, ScaffoldedFile, ScaffoldedModel
from scaffolding.enricher import CatalogEnricher
from scaffolding.rewriter import SourceRewriter
from scaffolding.type_mapping import resolve_column

logger = get_logger(__name__, ComponentType.DESIGN_TIME)


# ============================================================================
# DETECTION HELPERS
# ============================================================================

def model_has_vector_types(model: DatabaseModel) -> bool:
    """
    Check if the model has pgvector columns.

    Trusts the enricher's flag when present, else scans the columns.
    """
    flag = model.find_annotation(AnnotationName.HAS_VECTOR_TYPES)
    if flag is not None:
        return bool(flag)

    for _, column in model.iter_columns():
        mapping = resolve_column(column)
        if mapping is not None and mapping.type_tag.is_specialized():
            return True
    return False


def index_is_vector_index(index: DatabaseIndex) -> bool:
    """Check if the enricher tagged the index with pgvector metadata."""
    return (
        index.find_annotation(AnnotationName.INDEX_METHOD) is not None
        or index.find_annotation(AnnotationName.INDEX_OPERATORS) is not None
    )


# ============================================================================
# MODEL FACTORY DECORATOR
# ============================================================================

class PgvectorDatabaseModelFactory:
    """Wraps the host's model factory and enriches every model it builds."""

    def __init__(
        self,
        inner: DatabaseModelFactory,
        enricher: Optional[CatalogEnricher] = None,
    ):
        if inner is None:
            raise ValueError("inner model factory is required")
        self.inner = inner
        self.enricher = enricher or CatalogEnricher()

    def create(
        self,
        connection: Any,
        options: Optional[DatabaseModelFactoryOptions] = None,
    ) -> DatabaseModel:
        """Build the model with the host factory, then enrich it from the catalog."""
        model = self.inner.create(connection, options)
        self.enricher.enrich(model, connection)
        return model


# ============================================================================
# CODE GENERATOR DECORATOR
# ============================================================================

class PgvectorModelCodeGenerator:
    """
    Wraps the host's code generator.

    Only the context file is rewritten; additional files pass through.
    """

    def __init__(
        self,
        inner: ModelCodeGenerator,
        rewriter_factory: Optional[Callable[[Any], SourceRewriter]] = None,
    ):
        if inner is None:
            raise ValueError("inner code generator is required")
        self.inner = inner
        self._rewriter_factory = rewriter_factory or (
            lambda options: SourceRewriter(
                connection_string=getattr(options, "connection_string", None)
            )
        )

    @property
    def language(self) -> str:
        return self.inner.language

    def generate_model(self, model: DatabaseModel, options: Any = None) -> ScaffoldedModel:
        scaffolded = self.inner.generate_model(model, options)

        if not model_has_vector_types(model):
            return scaffolded

        context_file = scaffolded.context_file
        rewriter = self._rewriter_factory(options)
        code = rewriter.rewrite(context_file.code, True)
        if code == context_file.code:
            return scaffolded

        log_checkpoint("context_rewritten", {"path": context_file.path}, logger=logger.logger)
        return ScaffoldedModel(
            context_file=ScaffoldedFile(path=context_file.path, code=code),
            additional_files=list(scaffolded.additional_files),
        )


__all__ = [
    "model_has_vector_types",
    "index_is_vector_index",
    "PgvectorDatabaseModelFactory",
    "PgvectorModelCodeGenerator",
]
