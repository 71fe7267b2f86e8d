"""In-memory implementation of UserStatsRepositoryProtocol."""

from __future__ import annotations

from petition_ledger.application.ports.user_stats_repository import (
    UserStatsRepositoryProtocol,
)
from petition_ledger.domain.models.user_stats import UserStats


class UserStatsRepositoryStub(UserStatsRepositoryProtocol):
    """In-memory per-identity counters.

    Unknown identities read as zeroed stats; nothing is stored until the
    first save.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._stats: dict[str, UserStats] = {}

    async def get(self, identity: str) -> UserStats:
        return self._stats.get(identity) or UserStats(identity=identity)

    async def save(self, stats: UserStats) -> None:
        self._stats[stats.identity] = stats

    def clear(self) -> None:
        """Clear all stats (for testing)."""
        self._stats.clear()

    @property
    def identity_count(self) -> int:
        """Number of identities with stored stats."""
        return len(self._stats)
