"""Bootstrap wiring for petition ledger dependencies."""

from __future__ import annotations

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
from petition_ledger.application.services.lifecycle_controller import (
    LifecycleController,
)
from petition_ledger.application.services.milestone_tracker import MilestoneTracker
from petition_ledger.application.services.query_service import QueryService
from petition_ledger.application.services.user_stats_aggregator import (
    UserStatsAggregator,
)
from petition_ledger.config.ledger_config import PetitionLedgerConfig
from petition_ledger.infrastructure.adapters.petition_id_generator import (
    UuidPetitionIdGenerator,
)
from petition_ledger.infrastructure.stubs.milestone_repository_stub import (
    MilestoneRepositoryStub,
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

_petition_registry: PetitionRegistryProtocol | None = None
_signature_ledger: SignatureLedgerProtocol | None = None
_milestone_repository: MilestoneRepositoryProtocol | None = None
_user_stats_repository: UserStatsRepositoryProtocol | None = None
_id_generator: PetitionIdGeneratorProtocol | None = None
_event_emitter: PetitionEventEmitterProtocol | None = None
_ledger_config: PetitionLedgerConfig | None = None
_lifecycle_controller: LifecycleController | None = None
_query_service: QueryService | None = None


def get_petition_registry() -> PetitionRegistryProtocol:
    """Get petition registry instance."""
    global _petition_registry
    if _petition_registry is None:
        _petition_registry = PetitionRegistryStub()
    return _petition_registry


def get_signature_ledger() -> SignatureLedgerProtocol:
    """Get signature ledger instance."""
    global _signature_ledger
    if _signature_ledger is None:
        _signature_ledger = SignatureLedgerStub()
    return _signature_ledger


def get_milestone_repository() -> MilestoneRepositoryProtocol:
    """Get milestone repository instance."""
    global _milestone_repository
    if _milestone_repository is None:
        _milestone_repository = MilestoneRepositoryStub()
    return _milestone_repository


def get_user_stats_repository() -> UserStatsRepositoryProtocol:
    """Get user stats repository instance."""
    global _user_stats_repository
    if _user_stats_repository is None:
        _user_stats_repository = UserStatsRepositoryStub()
    return _user_stats_repository


def get_id_generator() -> PetitionIdGeneratorProtocol:
    """Get ID generator instance (uuid4 by default)."""
    global _id_generator
    if _id_generator is None:
        _id_generator = UuidPetitionIdGenerator()
    return _id_generator


def get_event_emitter() -> PetitionEventEmitterProtocol | None:
    """Get the configured event sink.

    None unless a sink was installed with set_event_emitter(); the
    controller then skips emission.
    """
    return _event_emitter


def get_ledger_config() -> PetitionLedgerConfig:
    """Get ledger config, loaded from the environment on first use."""
    global _ledger_config
    if _ledger_config is None:
        _ledger_config = PetitionLedgerConfig.from_environment()
    return _ledger_config


def get_lifecycle_controller() -> LifecycleController:
    """Get the lifecycle controller wired to the shared stores."""
    global _lifecycle_controller
    if _lifecycle_controller is None:
        config = get_ledger_config()
        _lifecycle_controller = LifecycleController(
            registry=get_petition_registry(),
            ledger=get_signature_ledger(),
            milestone_tracker=MilestoneTracker(get_milestone_repository()),
            stats_aggregator=UserStatsAggregator(get_user_stats_repository(), config),
            id_generator=get_id_generator(),
            config=config,
            event_emitter=get_event_emitter(),
        )
    return _lifecycle_controller


def get_query_service() -> QueryService:
    """Get the query service reading the shared stores."""
    global _query_service
    if _query_service is None:
        _query_service = QueryService(
            registry=get_petition_registry(),
            ledger=get_signature_ledger(),
            milestone_repo=get_milestone_repository(),
            stats_repo=get_user_stats_repository(),
        )
    return _query_service


def reset_ledger_dependencies() -> None:
    """Reset all singleton instances for testing."""
    global _petition_registry
    global _signature_ledger
    global _milestone_repository
    global _user_stats_repository
    global _id_generator
    global _event_emitter
    global _ledger_config
    global _lifecycle_controller
    global _query_service

    _petition_registry = None
    _signature_ledger = None
    _milestone_repository = None
    _user_stats_repository = None
    _id_generator = None
    _event_emitter = None
    _ledger_config = None
    _lifecycle_controller = None
    _query_service = None


def set_id_generator(generator: PetitionIdGeneratorProtocol) -> None:
    """Set custom ID generator for testing.

    Must be called before the controller is first requested.
    """
    global _id_generator
    _id_generator = generator


def set_ledger_config(config: PetitionLedgerConfig) -> None:
    """Set custom ledger config for testing.

    Must be called before the controller is first requested.
    """
    global _ledger_config
    _ledger_config = config


def set_event_emitter(emitter: PetitionEventEmitterProtocol | None) -> None:
    """Install an event sink.

    Must be called before the controller is first requested.
    """
    global _event_emitter
    _event_emitter = emitter
