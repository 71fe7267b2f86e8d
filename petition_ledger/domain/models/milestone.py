"""Milestone domain model.

A milestone marks that a petition's active signature count crossed a
fixed fraction of its target. Thresholds use integer division, so small
targets can map several percentages onto the same count (target=2 gives
thresholds 0, 1, 1, 2). Each distinct threshold value is recorded at
most once per petition.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any
from uuid import UUID

MILESTONE_PERCENTS: tuple[int, ...] = (25, 50, 75, 100)


@dataclass(frozen=True, eq=True)
class MilestoneThreshold:
    """A (percent, signature count) pair derived from a target."""

    percent: int
    threshold: int


def milestone_thresholds(target_signatures: int) -> tuple[MilestoneThreshold, ...]:
    """Compute the four milestone thresholds for a target.

    Args:
        target_signatures: The petition's signature target (positive).

    Returns:
        Thresholds ``target//4, target//2, 3*target//4, target`` in
        ascending order, each paired with its percentage.
    """
    return (
        MilestoneThreshold(25, target_signatures // 4),
        MilestoneThreshold(50, target_signatures // 2),
        MilestoneThreshold(75, 3 * target_signatures // 4),
        MilestoneThreshold(100, target_signatures),
    )


@dataclass(frozen=True, eq=True)
class Milestone:
    """A recorded threshold crossing.

    Attributes:
        petition_id: The petition that crossed the threshold.
        threshold: Signature count of the threshold.
        percent: Percentage of target the threshold represents.
        reached_at: Caller-supplied time of the crossing signature.
    """

    petition_id: UUID
    threshold: int
    percent: int
    reached_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "threshold": self.threshold,
            "percent": self.percent,
            "reached_at": self.reached_at.isoformat(),
        }
