"""Application DTOs for the petition ledger."""

from petition_ledger.application.dtos.petition import (
    PetitionPage,
    PetitionStats,
    PetitionSummary,
    SignResult,
    WithdrawResult,
)

__all__: list[str] = [
    "PetitionPage",
    "PetitionStats",
    "PetitionSummary",
    "SignResult",
    "WithdrawResult",
]
