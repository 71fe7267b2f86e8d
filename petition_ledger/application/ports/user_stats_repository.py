"""User stats repository port."""

from __future__ import annotations

from typing import Protocol

from petition_ledger.domain.models.user_stats import UserStats


class UserStatsRepositoryProtocol(Protocol):
    """Protocol for per-identity counter storage."""

    async def get(self, identity: str) -> UserStats:
        """Return stats for ``identity`` (zeroed if never seen)."""
        ...

    async def save(self, stats: UserStats) -> None:
        """Store stats, replacing any previous record for the identity."""
        ...
