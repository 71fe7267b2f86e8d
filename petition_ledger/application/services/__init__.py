"""Application services for the petition ledger."""

from petition_ledger.application.services.lifecycle_controller import (
    LifecycleController,
)
from petition_ledger.application.services.milestone_tracker import MilestoneTracker
from petition_ledger.application.services.petition_locks import PetitionLockRegistry
from petition_ledger.application.services.query_service import QueryService
from petition_ledger.application.services.user_stats_aggregator import (
    UserStatsAggregator,
)

__all__: list[str] = [
    "LifecycleController",
    "MilestoneTracker",
    "PetitionLockRegistry",
    "QueryService",
    "UserStatsAggregator",
]
