"""Petition domain model.

This module defines the core petition record and its lifecycle state
machine.

Lifecycle:
- DRAFT: created but not yet published (optional; direct-publish skips it)
- PUBLISHED: open for signatures within [start_date, end_date]
- COMPLETED: target reached (terminal)
- CANCELLED: withdrawn by the creator (terminal)

The state machine is a closed Enum plus a total transition matrix, so
every (state, target) pair is answerable without inspecting any other
part of the system.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID


class PetitionCategory(Enum):
    """Closed set of petition categories."""

    SOCIAL = "SOCIAL"
    POLITICAL = "POLITICAL"
    ENVIRONMENTAL = "ENVIRONMENTAL"
    EDUCATION = "EDUCATION"
    HEALTH = "HEALTH"
    HUMAN_RIGHTS = "HUMAN_RIGHTS"
    ANIMAL_RIGHTS = "ANIMAL_RIGHTS"
    ECONOMIC = "ECONOMIC"
    TECHNOLOGY = "TECHNOLOGY"
    OTHER = "OTHER"


class PetitionState(Enum):
    """State in the petition lifecycle.

    State Machine:
        DRAFT -> PUBLISHED (creator publishes, irreversible)
        PUBLISHED -> COMPLETED (signature target reached)
        PUBLISHED -> CANCELLED (creator cancels)

    Terminal States:
        COMPLETED and CANCELLED admit no further transitions.
    """

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    def is_terminal(self) -> bool:
        """Check if this state is terminal.

        Returns:
            True if no transition leaves this state.
        """
        return self in TERMINAL_STATES

    def valid_transitions(self) -> frozenset[PetitionState]:
        """Get valid transitions from this state.

        Returns:
            Frozenset of states this state can transition to.
            Empty set for terminal states.
        """
        return STATE_TRANSITION_MATRIX[self]

    def can_transition_to(self, target: PetitionState) -> bool:
        """Check whether ``target`` is reachable in one step."""
        return target in STATE_TRANSITION_MATRIX[self]


TERMINAL_STATES: frozenset[PetitionState] = frozenset(
    {
        PetitionState.COMPLETED,
        PetitionState.CANCELLED,
    }
)

# Every state has an entry, so lookups never fall through.
STATE_TRANSITION_MATRIX: dict[PetitionState, frozenset[PetitionState]] = {
    PetitionState.DRAFT: frozenset({PetitionState.PUBLISHED}),
    PetitionState.PUBLISHED: frozenset(
        {
            PetitionState.COMPLETED,
            PetitionState.CANCELLED,
        }
    ),
    PetitionState.COMPLETED: frozenset(),
    PetitionState.CANCELLED: frozenset(),
}

# Fields the creator may edit while the petition is DRAFT or PUBLISHED.
CONTENT_FIELDS: frozenset[str] = frozenset(
    {"title", "description", "image_ref", "metadata_ref", "category", "tags"}
)

# Fields frozen at publish time. end_date may still grow via extension.
SCHEDULE_FIELDS: frozenset[str] = frozenset(
    {"start_date", "end_date", "target_signatures"}
)

MUTABLE_FIELDS: frozenset[str] = CONTENT_FIELDS | SCHEDULE_FIELDS


@dataclass(frozen=True, eq=True)
class Petition:
    """A petition record.

    Records are immutable snapshots; every change produces a new instance
    which the registry stores in place of the old one. Readers holding a
    reference therefore always see a consistent record.

    Attributes:
        petition_id: Unique identifier assigned at creation, never reused.
        creator_id: Identity of the creator.
        category: Category from the closed PetitionCategory set.
        metadata_ref: Opaque content address of the metadata blob.
        start_date: First instant signatures are accepted (inclusive).
        end_date: Last instant signatures are accepted (inclusive).
        target_signatures: Signature count that completes the petition.
        created_at: Creation timestamp (caller-supplied, UTC).
        state: Current lifecycle state.
        tags: Free-form tags.
        published_at: When the petition was published, if it has been.
        signature_count: Number of active signatures.
        title: Optional human-readable title.
        description: Optional description.
        image_ref: Optional image reference.
    """

    petition_id: UUID
    creator_id: str
    category: PetitionCategory
    metadata_ref: str
    start_date: datetime
    end_date: datetime
    target_signatures: int
    created_at: datetime
    state: PetitionState = field(default=PetitionState.DRAFT)
    tags: tuple[str, ...] = field(default=())
    published_at: datetime | None = field(default=None)
    signature_count: int = field(default=0)
    title: str | None = field(default=None)
    description: str | None = field(default=None)
    image_ref: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate structural invariants."""
        for name in ("start_date", "end_date", "created_at", "published_at"):
            value = getattr(self, name)
            if value is not None and value.tzinfo is None:
                raise ValueError(f"{name} must be timezone-aware (UTC)")
        if self.signature_count < 0:
            raise ValueError(
                f"signature_count must be non-negative, got {self.signature_count}"
            )
        if self.target_signatures < 1:
            raise ValueError(
                f"target_signatures must be positive, got {self.target_signatures}"
            )
        if self.state is not PetitionState.DRAFT and self.published_at is None:
            raise ValueError("published petitions must carry published_at")

    @property
    def is_draft(self) -> bool:
        """True while the petition has not been published."""
        return self.state is PetitionState.DRAFT

    @property
    def target_reached(self) -> bool:
        """True once the active signature count meets the target."""
        return self.signature_count >= self.target_signatures

    @property
    def progress_percent(self) -> int:
        """Progress toward the target, capped at 100."""
        return min(100, self.signature_count * 100 // self.target_signatures)

    def has_started(self, now: datetime) -> bool:
        return now >= self.start_date

    def has_ended(self, now: datetime) -> bool:
        return now > self.end_date

    def within_signing_window(self, now: datetime) -> bool:
        """Check ``start_date <= now <= end_date`` (both inclusive)."""
        return self.start_date <= now <= self.end_date

    def is_signable(self, now: datetime) -> bool:
        """Check whether a signature could be admitted at ``now``."""
        return self.state is PetitionState.PUBLISHED and self.within_signing_window(
            now
        )

    def with_state(
        self,
        new_state: PetitionState,
        at: datetime | None = None,
    ) -> Petition:
        """Create new petition with updated state.

        Enforces the transition matrix. Publishing stamps ``published_at``
        with ``at``.

        Args:
            new_state: The new state to transition to.
            at: Caller-supplied transition time (required for publish).

        Returns:
            New Petition with updated state.

        Raises:
            InvalidStateTransitionError: If the transition is not valid.
        """
        # Import here to avoid circular dependency
        from petition_ledger.domain.errors.state_transition import (
            InvalidStateTransitionError,
        )

        if not self.state.can_transition_to(new_state):
            raise InvalidStateTransitionError(
                from_state=self.state,
                to_state=new_state,
                allowed_transitions=sorted(
                    self.state.valid_transitions(), key=lambda s: s.value
                ),
            )

        if new_state is PetitionState.PUBLISHED:
            if at is None:
                raise ValueError("publishing requires a timestamp")
            return replace(self, state=new_state, published_at=at)
        return replace(self, state=new_state)

    def with_signature_count(self, signature_count: int) -> Petition:
        """Create new petition with the given active signature count."""
        return replace(self, signature_count=signature_count)

    def with_field(self, field_name: str, value: Any) -> Petition:
        """Create new petition with one mutable field replaced.

        Args:
            field_name: Name of a field in MUTABLE_FIELDS.
            value: New value.

        Returns:
            New Petition with the field replaced.

        Raises:
            ValueError: If the field is not mutable.
        """
        if field_name not in MUTABLE_FIELDS:
            raise ValueError(f"Field is not mutable: {field_name}")
        return replace(self, **{field_name: value})

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for events and logs.

        Returns:
            Dictionary with UUIDs, enums and datetimes rendered as strings.
        """
        return {
            "petition_id": str(self.petition_id),
            "creator_id": self.creator_id,
            "category": self.category.value,
            "metadata_ref": self.metadata_ref,
            "tags": list(self.tags),
            "state": self.state.value,
            "created_at": self.created_at.isoformat(),
            "published_at": (
                self.published_at.isoformat() if self.published_at else None
            ),
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "target_signatures": self.target_signatures,
            "signature_count": self.signature_count,
            "title": self.title,
            "description": self.description,
            "image_ref": self.image_ref,
        }
