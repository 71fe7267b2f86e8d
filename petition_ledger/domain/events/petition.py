"""Petition ledger event payloads.

This module defines the event payloads emitted after a ledger mutation
has been applied:
- PetitionCreatedEvent: petition created (draft or published)
- PetitionPublishedEvent: draft published
- PetitionSignedEvent: signature admitted
- SignatureWithdrawnEvent: signature withdrawn
- PetitionStatusChangedEvent: lifecycle state changed (complete/cancel)
- PetitionUpdatedEvent: audited field edit (including end-date extension)
- MilestoneReachedEvent: threshold crossing recorded
- PetitionDeletedEvent: draft deleted and purged

Payloads are immutable and serialize with a schema_version so that
stored events can be replayed deterministically.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, ClassVar
from uuid import UUID

PETITION_EVENT_SCHEMA_VERSION: str = "1.0.0"

PETITION_CREATED_EVENT_TYPE: str = "petition.created"
PETITION_PUBLISHED_EVENT_TYPE: str = "petition.published"
PETITION_SIGNED_EVENT_TYPE: str = "petition.signature.recorded"
SIGNATURE_WITHDRAWN_EVENT_TYPE: str = "petition.signature.withdrawn"
PETITION_STATUS_CHANGED_EVENT_TYPE: str = "petition.status.changed"
PETITION_UPDATED_EVENT_TYPE: str = "petition.updated"
MILESTONE_REACHED_EVENT_TYPE: str = "petition.milestone.reached"
PETITION_DELETED_EVENT_TYPE: str = "petition.deleted"


class _PetitionEventMixin:
    """Shared serialization for event payloads."""

    event_type: ClassVar[str]

    def _payload(self) -> dict[str, Any]:
        raise NotImplementedError

    def to_dict(self) -> dict[str, Any]:
        """Convert payload to dict for event storage.

        Returns:
            Dict representation including event_type and schema_version.
        """
        return {
            "event_type": self.event_type,
            **self._payload(),
            "schema_version": PETITION_EVENT_SCHEMA_VERSION,
        }

    def signable_content(self) -> bytes:
        """Return canonical bytes of the payload.

        The content is JSON-serialized with sorted keys to ensure
        deterministic output regardless of dict ordering.
        """
        return json.dumps(self._payload(), sort_keys=True).encode("utf-8")


@dataclass(frozen=True, eq=True)
class PetitionCreatedEvent(_PetitionEventMixin):
    """Payload for petition creation.

    Attributes:
        petition_id: The new petition.
        creator_id: Its creator.
        category: Category value.
        state: Initial state (DRAFT or PUBLISHED).
        created_at: Caller-supplied creation time.
    """

    event_type: ClassVar[str] = PETITION_CREATED_EVENT_TYPE

    petition_id: UUID
    creator_id: str
    category: str
    state: str
    created_at: datetime

    def _payload(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "creator_id": self.creator_id,
            "category": self.category,
            "state": self.state,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True, eq=True)
class PetitionPublishedEvent(_PetitionEventMixin):
    """Payload for publishing a draft."""

    event_type: ClassVar[str] = PETITION_PUBLISHED_EVENT_TYPE

    petition_id: UUID
    published_at: datetime
    start_date: datetime
    end_date: datetime
    target_signatures: int

    def _payload(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "published_at": self.published_at.isoformat(),
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "target_signatures": self.target_signatures,
        }


@dataclass(frozen=True, eq=True)
class PetitionSignedEvent(_PetitionEventMixin):
    """Payload for an admitted signature.

    Attributes:
        petition_id: The signed petition.
        signer_id: The signer.
        signature_id: The new signature.
        signed_at: Caller-supplied signing time.
        signature_count: Active count after this signature.
        content_hash: Hex-encoded BLAKE3 content hash.
    """

    event_type: ClassVar[str] = PETITION_SIGNED_EVENT_TYPE

    petition_id: UUID
    signer_id: str
    signature_id: UUID
    signed_at: datetime
    signature_count: int
    content_hash: str

    def _payload(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "signer_id": self.signer_id,
            "signature_id": str(self.signature_id),
            "signed_at": self.signed_at.isoformat(),
            "signature_count": self.signature_count,
            "content_hash": self.content_hash,
        }


@dataclass(frozen=True, eq=True)
class SignatureWithdrawnEvent(_PetitionEventMixin):
    """Payload for a withdrawn signature."""

    event_type: ClassVar[str] = SIGNATURE_WITHDRAWN_EVENT_TYPE

    petition_id: UUID
    signer_id: str
    signature_id: UUID
    withdrawn_at: datetime
    signature_count: int

    def _payload(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "signer_id": self.signer_id,
            "signature_id": str(self.signature_id),
            "withdrawn_at": self.withdrawn_at.isoformat(),
            "signature_count": self.signature_count,
        }


@dataclass(frozen=True, eq=True)
class PetitionStatusChangedEvent(_PetitionEventMixin):
    """Payload for a lifecycle transition to a terminal state."""

    event_type: ClassVar[str] = PETITION_STATUS_CHANGED_EVENT_TYPE

    petition_id: UUID
    previous_state: str
    new_state: str
    changed_at: datetime
    triggered_by: str

    def _payload(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "previous_state": self.previous_state,
            "new_state": self.new_state,
            "changed_at": self.changed_at.isoformat(),
            "triggered_by": self.triggered_by,
        }


@dataclass(frozen=True, eq=True)
class PetitionUpdatedEvent(_PetitionEventMixin):
    """Payload for an audited field edit."""

    event_type: ClassVar[str] = PETITION_UPDATED_EVENT_TYPE

    petition_id: UUID
    field_name: str
    changed_by: str
    changed_at: datetime

    def _payload(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "field_name": self.field_name,
            "changed_by": self.changed_by,
            "changed_at": self.changed_at.isoformat(),
        }


@dataclass(frozen=True, eq=True)
class MilestoneReachedEvent(_PetitionEventMixin):
    """Payload for a recorded milestone."""

    event_type: ClassVar[str] = MILESTONE_REACHED_EVENT_TYPE

    petition_id: UUID
    threshold: int
    percent: int
    reached_at: datetime

    def _payload(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "threshold": self.threshold,
            "percent": self.percent,
            "reached_at": self.reached_at.isoformat(),
        }


@dataclass(frozen=True, eq=True)
class PetitionDeletedEvent(_PetitionEventMixin):
    """Payload for a purged draft."""

    event_type: ClassVar[str] = PETITION_DELETED_EVENT_TYPE

    petition_id: UUID
    deleted_by: str

    def _payload(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "deleted_by": self.deleted_by,
        }


PetitionLedgerEvent = (
    PetitionCreatedEvent
    | PetitionPublishedEvent
    | PetitionSignedEvent
    | SignatureWithdrawnEvent
    | PetitionStatusChangedEvent
    | PetitionUpdatedEvent
    | MilestoneReachedEvent
    | PetitionDeletedEvent
)
