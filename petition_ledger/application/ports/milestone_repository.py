"""Milestone repository port.

Stores the per-petition milestone log. Each distinct threshold value is
stored at most once per petition.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from petition_ledger.domain.models.milestone import Milestone


class MilestoneRepositoryProtocol(Protocol):
    """Protocol for milestone storage operations."""

    async def record(self, milestone: Milestone) -> bool:
        """Append a milestone unless its threshold is already recorded.

        Returns:
            True if appended, False if the threshold already existed.
        """
        ...

    async def has_threshold(self, petition_id: UUID, threshold: int) -> bool:
        """Check whether a threshold value is already recorded."""
        ...

    async def list_for_petition(self, petition_id: UUID) -> list[Milestone]:
        """Return milestones in the order they were reached."""
        ...

    async def purge(self, petition_id: UUID) -> None:
        """Remove every milestone for the petition."""
        ...
