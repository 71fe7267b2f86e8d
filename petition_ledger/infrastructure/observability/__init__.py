"""Observability infrastructure for structured logging and correlation.

Usage:
    from petition_ledger.infrastructure.observability import (
        configure_structlog,
        correlation_scope,
    )

    configure_structlog(environment="production")
    with correlation_scope(request_correlation_id):
        await controller.sign(...)
"""

from petition_ledger.infrastructure.observability.correlation import (
    correlated,
    correlation_id_processor,
    correlation_scope,
    generate_correlation_id,
    get_correlation_id,
)
from petition_ledger.infrastructure.observability.logging import (
    build_processors,
    configure_structlog,
    get_logger_for_service,
)

__all__: list[str] = [
    "build_processors",
    "configure_structlog",
    "correlated",
    "correlation_id_processor",
    "correlation_scope",
    "generate_correlation_id",
    "get_correlation_id",
    "get_logger_for_service",
]
