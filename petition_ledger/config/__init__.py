"""Configuration for the petition ledger."""

from petition_ledger.config.ledger_config import (
    DEFAULT_PETITION_LEDGER_CONFIG,
    PERMISSIVE_PETITION_LEDGER_CONFIG,
    TEST_PETITION_LEDGER_CONFIG,
    PetitionLedgerConfig,
)

__all__: list[str] = [
    "DEFAULT_PETITION_LEDGER_CONFIG",
    "PERMISSIVE_PETITION_LEDGER_CONFIG",
    "TEST_PETITION_LEDGER_CONFIG",
    "PetitionLedgerConfig",
]
