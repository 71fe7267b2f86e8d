"""
Pytest configuration and shared fixtures for petition ledger tests.

Testing Standards:
- All async tests use pytest.mark.asyncio (auto mode enabled in pyproject.toml)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
- Time is always passed explicitly; tests never read the wall clock
"""

from datetime import datetime, timedelta, timezone

import pytest

from petition_ledger.application.services.lifecycle_controller import (
    LifecycleController,
)
from petition_ledger.application.services.milestone_tracker import MilestoneTracker
from petition_ledger.application.services.query_service import QueryService
from petition_ledger.application.services.user_stats_aggregator import (
    UserStatsAggregator,
)
from petition_ledger.config.ledger_config import (
    DEFAULT_PETITION_LEDGER_CONFIG,
    PetitionLedgerConfig,
)
from petition_ledger.infrastructure.adapters.petition_id_generator import (
    SequentialPetitionIdGenerator,
)
from petition_ledger.infrastructure.stubs import (
    MilestoneRepositoryStub,
    PetitionEventEmitterStub,
    PetitionRegistryStub,
    SignatureLedgerStub,
    UserStatsRepositoryStub,
)

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from petition_ledger import __version__

    return __version__


@pytest.fixture
def now() -> datetime:
    """Fixed reference time."""
    return NOW


@pytest.fixture
def end_date(now: datetime) -> datetime:
    """Default end date one day after the reference time."""
    return now + timedelta(days=1)


@pytest.fixture
def ledger_config() -> PetitionLedgerConfig:
    """Base ruleset."""
    return DEFAULT_PETITION_LEDGER_CONFIG


@pytest.fixture
def registry() -> PetitionRegistryStub:
    return PetitionRegistryStub()


@pytest.fixture
def signature_ledger() -> SignatureLedgerStub:
    return SignatureLedgerStub()


@pytest.fixture
def milestone_repo() -> MilestoneRepositoryStub:
    return MilestoneRepositoryStub()


@pytest.fixture
def stats_repo() -> UserStatsRepositoryStub:
    return UserStatsRepositoryStub()


@pytest.fixture
def event_emitter() -> PetitionEventEmitterStub:
    return PetitionEventEmitterStub()


@pytest.fixture
def id_generator() -> SequentialPetitionIdGenerator:
    """Deterministic ID allocation starting at UUID(int=0)."""
    return SequentialPetitionIdGenerator()


@pytest.fixture
def controller(
    registry: PetitionRegistryStub,
    signature_ledger: SignatureLedgerStub,
    milestone_repo: MilestoneRepositoryStub,
    stats_repo: UserStatsRepositoryStub,
    id_generator: SequentialPetitionIdGenerator,
    event_emitter: PetitionEventEmitterStub,
    ledger_config: PetitionLedgerConfig,
) -> LifecycleController:
    """Lifecycle controller wired to fresh in-memory stores."""
    return LifecycleController(
        registry=registry,
        ledger=signature_ledger,
        milestone_tracker=MilestoneTracker(milestone_repo),
        stats_aggregator=UserStatsAggregator(stats_repo, ledger_config),
        id_generator=id_generator,
        config=ledger_config,
        event_emitter=event_emitter,
    )


@pytest.fixture
def query_service(
    registry: PetitionRegistryStub,
    signature_ledger: SignatureLedgerStub,
    milestone_repo: MilestoneRepositoryStub,
    stats_repo: UserStatsRepositoryStub,
) -> QueryService:
    """Query service reading the same stores as the controller."""
    return QueryService(
        registry=registry,
        ledger=signature_ledger,
        milestone_repo=milestone_repo,
        stats_repo=stats_repo,
    )
