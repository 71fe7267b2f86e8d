"""Milestone tracker service.

Derives threshold-crossing events from signature-count deltas.

Rule:
    After a signature moves the active count from ``c - 1`` to ``c``, the
    first threshold in ascending order with ``c >= t and c - 1 < t`` is
    the crossing. At most one milestone is recorded per signing event.
    Signing increments the count by exactly one, so at most one threshold
    value can be newly crossed per call; several percentages sharing that
    value (small targets) collapse into a single record.

Each distinct threshold value is recorded at most once per petition, so
a count that dips through withdrawal and climbs back does not record the
same threshold twice.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from structlog import get_logger

from petition_ledger.application.ports.milestone_repository import (
    MilestoneRepositoryProtocol,
)
from petition_ledger.domain.models.milestone import (
    Milestone,
    MilestoneThreshold,
    milestone_thresholds,
)

logger = get_logger(__name__)


class MilestoneTracker:
    """Detects and records milestone crossings.

    Example:
        >>> tracker = MilestoneTracker(milestone_repo=MilestoneRepositoryStub())
        >>> milestone = await tracker.record_signing(
        ...     petition_id=petition_id,
        ...     previous_count=0,
        ...     new_count=1,
        ...     target_signatures=4,
        ...     reached_at=now,
        ... )
    """

    def __init__(self, milestone_repo: MilestoneRepositoryProtocol) -> None:
        """Initialize the tracker.

        Args:
            milestone_repo: Repository for milestone persistence.
        """
        self._milestone_repo = milestone_repo

    @staticmethod
    def detect_crossing(
        previous_count: int,
        new_count: int,
        target_signatures: int,
    ) -> MilestoneThreshold | None:
        """Return the first threshold crossed by the count change, if any.

        Pure function: does not consult recorded milestones.

        Args:
            previous_count: Count before the signing.
            new_count: Count after the signing.
            target_signatures: The petition's target.

        Returns:
            The first crossed threshold in ascending order, or None.
        """
        for candidate in milestone_thresholds(target_signatures):
            if new_count >= candidate.threshold and previous_count < candidate.threshold:
                return candidate
        return None

    async def record_signing(
        self,
        petition_id: UUID,
        previous_count: int,
        new_count: int,
        target_signatures: int,
        reached_at: datetime,
    ) -> Milestone | None:
        """Record the milestone crossed by a single signing, if any.

        Args:
            petition_id: The signed petition.
            previous_count: Count before the signing.
            new_count: Count after the signing (previous_count + 1).
            target_signatures: The petition's target.
            reached_at: Caller-supplied signing time.

        Returns:
            The recorded Milestone, or None if nothing new was crossed.

        Raises:
            ValueError: If the count did not increase by exactly one.
        """
        if new_count != previous_count + 1:
            raise ValueError(
                "record_signing expects a single-increment count change, "
                f"got {previous_count} -> {new_count}"
            )

        crossing = self.detect_crossing(previous_count, new_count, target_signatures)
        if crossing is None:
            return None

        log = logger.bind(
            petition_id=str(petition_id),
            threshold=crossing.threshold,
            percent=crossing.percent,
        )
        if await self._milestone_repo.has_threshold(petition_id, crossing.threshold):
            log.debug("milestone_already_recorded")
            return None

        milestone = Milestone(
            petition_id=petition_id,
            threshold=crossing.threshold,
            percent=crossing.percent,
            reached_at=reached_at,
        )
        await self._milestone_repo.record(milestone)
        log.info("milestone_reached", signature_count=new_count)
        return milestone

    async def get_milestones(self, petition_id: UUID) -> list[Milestone]:
        return await self._milestone_repo.list_for_petition(petition_id)

    async def purge(self, petition_id: UUID) -> None:
        await self._milestone_repo.purge(petition_id)
