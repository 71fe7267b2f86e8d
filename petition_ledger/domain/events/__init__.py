"""Domain event payloads for the petition ledger."""

from petition_ledger.domain.events.petition import (
    MILESTONE_REACHED_EVENT_TYPE,
    PETITION_CREATED_EVENT_TYPE,
    PETITION_DELETED_EVENT_TYPE,
    PETITION_EVENT_SCHEMA_VERSION,
    PETITION_PUBLISHED_EVENT_TYPE,
    PETITION_SIGNED_EVENT_TYPE,
    PETITION_STATUS_CHANGED_EVENT_TYPE,
    PETITION_UPDATED_EVENT_TYPE,
    SIGNATURE_WITHDRAWN_EVENT_TYPE,
    MilestoneReachedEvent,
    PetitionCreatedEvent,
    PetitionDeletedEvent,
    PetitionLedgerEvent,
    PetitionPublishedEvent,
    PetitionSignedEvent,
    PetitionStatusChangedEvent,
    PetitionUpdatedEvent,
    SignatureWithdrawnEvent,
)

__all__: list[str] = [
    "MILESTONE_REACHED_EVENT_TYPE",
    "PETITION_CREATED_EVENT_TYPE",
    "PETITION_DELETED_EVENT_TYPE",
    "PETITION_EVENT_SCHEMA_VERSION",
    "PETITION_PUBLISHED_EVENT_TYPE",
    "PETITION_SIGNED_EVENT_TYPE",
    "PETITION_STATUS_CHANGED_EVENT_TYPE",
    "PETITION_UPDATED_EVENT_TYPE",
    "SIGNATURE_WITHDRAWN_EVENT_TYPE",
    "MilestoneReachedEvent",
    "PetitionCreatedEvent",
    "PetitionDeletedEvent",
    "PetitionLedgerEvent",
    "PetitionPublishedEvent",
    "PetitionSignedEvent",
    "PetitionStatusChangedEvent",
    "PetitionUpdatedEvent",
    "SignatureWithdrawnEvent",
]
