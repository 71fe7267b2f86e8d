"""Ports (protocols) for the petition ledger application layer."""

from petition_ledger.application.ports.milestone_repository import (
    MilestoneRepositoryProtocol,
)
from petition_ledger.application.ports.petition_event_emitter import (
    PetitionEventEmitterProtocol,
)
from petition_ledger.application.ports.petition_id_generator import (
    PetitionIdGeneratorProtocol,
)
from petition_ledger.application.ports.petition_registry import (
    PetitionRegistryProtocol,
)
from petition_ledger.application.ports.signature_ledger import (
    SignatureLedgerProtocol,
)
from petition_ledger.application.ports.user_stats_repository import (
    UserStatsRepositoryProtocol,
)

__all__: list[str] = [
    "MilestoneRepositoryProtocol",
    "PetitionEventEmitterProtocol",
    "PetitionIdGeneratorProtocol",
    "PetitionRegistryProtocol",
    "SignatureLedgerProtocol",
    "UserStatsRepositoryProtocol",
]
