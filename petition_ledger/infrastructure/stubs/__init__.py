"""In-memory implementations of the petition ledger ports.

Used for development, testing and single-process deployments.
"""

from petition_ledger.infrastructure.stubs.milestone_repository_stub import (
    MilestoneRepositoryStub,
)
from petition_ledger.infrastructure.stubs.petition_event_emitter_stub import (
    PetitionEventEmitterStub,
)
from petition_ledger.infrastructure.stubs.petition_registry_stub import (
    PetitionRegistryStub,
)
from petition_ledger.infrastructure.stubs.signature_ledger_stub import (
    SignatureLedgerStub,
)
from petition_ledger.infrastructure.stubs.user_stats_repository_stub import (
    UserStatsRepositoryStub,
)

__all__: list[str] = [
    "MilestoneRepositoryStub",
    "PetitionEventEmitterStub",
    "PetitionRegistryStub",
    "SignatureLedgerStub",
    "UserStatsRepositoryStub",
]
