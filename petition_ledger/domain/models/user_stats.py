"""Per-identity activity counters.

UserStats lives independently of any petition: deleting a draft or
cancelling a petition does not rewind the creator's counters.
"""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True, eq=True)
class UserStats:
    """Activity counters for one identity.

    Attributes:
        identity: The identity the counters belong to.
        petitions_created: Petitions this identity created.
        petitions_signed: Active signatures held by this identity.
        reputation_score: Non-negative reputation.
    """

    identity: str
    petitions_created: int = 0
    petitions_signed: int = 0
    reputation_score: int = 0

    def __post_init__(self) -> None:
        """Validate that no counter is negative."""
        for name in ("petitions_created", "petitions_signed", "reputation_score"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")

    def with_created(self, reputation: int) -> UserStats:
        return replace(
            self,
            petitions_created=self.petitions_created + 1,
            reputation_score=self.reputation_score + reputation,
        )

    def with_signed(self, reputation: int) -> UserStats:
        return replace(
            self,
            petitions_signed=self.petitions_signed + 1,
            reputation_score=self.reputation_score + reputation,
        )

    def with_withdrawn(self, penalty: int = 0) -> UserStats:
        """Decrement signed count and apply ``penalty``, both floored at zero."""
        return replace(
            self,
            petitions_signed=max(0, self.petitions_signed - 1),
            reputation_score=max(0, self.reputation_score - penalty),
        )

    def with_bonus(self, reputation: int) -> UserStats:
        return replace(self, reputation_score=self.reputation_score + reputation)
