# ============================================================================
# DESIGN-TIME SERVICES
# ============================================================================
# STATUS: Scaffolding - Registration with the host pipeline
# PURPOSE: Install the type mapping plugin and wrap factory and generator
# CREATED: 18 OCT 2026
# ============================================================================
"""
Design-Time Services

The host hands us its service slots; we register:
- PgvectorTypeMappingSourcePlugin in the type mapping plugin list
- PgvectorDatabaseModelFactory around the model factory
- PgvectorModelCodeGenerator around the code generator

Safe to call more than once: nothing is registered or wrapped twice.

Usage:
    services = DesignTimeServices(model_factory=host_factory, code_generator=host_generator)
    configure_design_time_services(services)
    model = services.model_factory.create(conn)
    scaffolded = services.code_generator.generate_model(model, options)
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from __version__ import __version__
from core.logging import ComponentType, get_logger
from scaffolding.decorators import PgvectorDatabaseModelFactory, PgvectorModelCodeGenerator
from scaffolding.enricher import CatalogEnricher
from scaffolding.type_mapping import PgvectorTypeMappingSourcePlugin

logger = get_logger(__name__, ComponentType.DESIGN_TIME)


@dataclass
class DesignTimeServices:
    """The three host slots this package plugs into."""
    type_mapping_plugins: List[Any] = field(default_factory=list)
    model_factory: Optional[Any] = None
    code_generator: Optional[Any] = None


def configure_design_time_services(
    services: DesignTimeServices,
    enricher: Optional[CatalogEnricher] = None,
) -> DesignTimeServices:
    """
    Register pgvector scaffolding with the host.

    Args:
        services: Host service slots (mutated in place)
        enricher: Optional enricher for the model factory decorator

    Returns:
        The same services object
    """
    if not any(isinstance(p, PgvectorTypeMappingSourcePlugin) for p in services.type_mapping_plugins):
        services.type_mapping_plugins.append(PgvectorTypeMappingSourcePlugin())

    if services.model_factory is None:
        logger.warning("No model factory registered; catalog enrichment disabled")
    elif not isinstance(services.model_factory, PgvectorDatabaseModelFactory):
        services.model_factory = PgvectorDatabaseModelFactory(services.model_factory, enricher)

    if services.code_generator is None:
        logger.warning("No code generator registered; source rewriting disabled")
    elif not isinstance(services.code_generator, PgvectorModelCodeGenerator):
        services.code_generator = PgvectorModelCodeGenerator(services.code_generator)

    logger.info(f"pgvector design-time services configured (v{__version__})")
    return services


__all__ = ["DesignTimeServices", "configure_design_time_services"]
