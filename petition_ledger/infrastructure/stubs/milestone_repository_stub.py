"""In-memory implementation of MilestoneRepositoryProtocol."""

from __future__ import annotations

from uuid import UUID

from petition_ledger.application.ports.milestone_repository import (
    MilestoneRepositoryProtocol,
)
from petition_ledger.domain.models.milestone import Milestone


class MilestoneRepositoryStub(MilestoneRepositoryProtocol):
    """In-memory milestone log.

    Enforces one record per (petition_id, threshold) pair.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._milestones: dict[UUID, list[Milestone]] = {}
        self._thresholds: dict[UUID, set[int]] = {}

    async def record(self, milestone: Milestone) -> bool:
        seen = self._thresholds.setdefault(milestone.petition_id, set())
        if milestone.threshold in seen:
            return False
        seen.add(milestone.threshold)
        self._milestones.setdefault(milestone.petition_id, []).append(milestone)
        return True

    async def has_threshold(self, petition_id: UUID, threshold: int) -> bool:
        return threshold in self._thresholds.get(petition_id, set())

    async def list_for_petition(self, petition_id: UUID) -> list[Milestone]:
        return list(self._milestones.get(petition_id, []))

    async def purge(self, petition_id: UUID) -> None:
        self._milestones.pop(petition_id, None)
        self._thresholds.pop(petition_id, None)

    def clear(self) -> None:
        """Clear all milestones (for testing)."""
        self._milestones.clear()
        self._thresholds.clear()
