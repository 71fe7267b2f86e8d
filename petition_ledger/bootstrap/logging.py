"""Bootstrap wiring for logging configuration."""

from __future__ import annotations

import os

from petition_ledger.infrastructure.observability import (
    configure_structlog as _configure_structlog,
)

DEFAULT_ENVIRONMENT = "development"


def configure_structlog(environment: str | None = None) -> None:
    """Configure structlog for the given environment.

    Falls back to the LEDGER_ENVIRONMENT env var, then to development.
    """
    if environment is None:
        environment = os.environ.get("LEDGER_ENVIRONMENT", DEFAULT_ENVIRONMENT)
    _configure_structlog(environment=environment)


__all__ = ["DEFAULT_ENVIRONMENT", "configure_structlog"]
