"""Petition domain errors.

Concrete exceptions raised while creating, editing, publishing,
cancelling or deleting petitions. Each one inherits from a taxonomy
category so callers can handle whole families at once.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

from petition_ledger.domain.errors.taxonomy import (
    AlreadyExistsError,
    InvalidInputError,
    NotFoundError,
    UnauthorizedError,
)


class PetitionNotFoundError(NotFoundError):
    """Raised when a petition ID is not present in the registry.

    Attributes:
        petition_id: The petition ID that was not found.
    """

    def __init__(self, petition_id: UUID) -> None:
        """Initialize the error.

        Args:
            petition_id: The petition ID that was not found.
        """
        self.petition_id = petition_id
        super().__init__(f"Petition not found: {petition_id}")

    def _extensions(self) -> dict[str, Any]:
        return {"petition_id": str(self.petition_id)}


class PetitionAlreadyExistsError(AlreadyExistsError):
    """Raised when inserting a petition whose ID is already registered.

    The ledger never retries on collision; the caller decides whether to
    allocate a fresh identifier.

    Attributes:
        petition_id: The colliding petition ID.
    """

    def __init__(self, petition_id: UUID) -> None:
        """Initialize the error.

        Args:
            petition_id: The colliding petition ID.
        """
        self.petition_id = petition_id
        super().__init__(f"Petition already exists: {petition_id}")

    def _extensions(self) -> dict[str, Any]:
        return {"petition_id": str(self.petition_id)}


class UnauthorizedPetitionActionError(UnauthorizedError):
    """Raised when a non-creator attempts a creator-only operation.

    Attributes:
        petition_id: The petition the action targeted.
        caller_id: Identity of the rejected caller.
        action: Name of the attempted operation.
    """

    def __init__(self, petition_id: UUID, caller_id: str, action: str) -> None:
        """Initialize the error.

        Args:
            petition_id: The petition the action targeted.
            caller_id: Identity of the rejected caller.
            action: Name of the attempted operation.
        """
        self.petition_id = petition_id
        self.caller_id = caller_id
        self.action = action
        super().__init__(
            f"Only the petition creator may {action} petition {petition_id} "
            f"(caller={caller_id})"
        )

    def _extensions(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "caller_id": self.caller_id,
            "action": self.action,
        }


class InvalidPetitionInputError(InvalidInputError):
    """Raised when an input value fails validation.

    Covers empty required strings, too many tags, over-long messages,
    non-positive targets and bad date ordering.

    Attributes:
        field_name: The offending input field.
        reason: Why the value was rejected.
    """

    def __init__(self, field_name: str, reason: str) -> None:
        """Initialize the error.

        Args:
            field_name: The offending input field.
            reason: Why the value was rejected.
        """
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Invalid {field_name}: {reason}")

    def _extensions(self) -> dict[str, Any]:
        return {"field": self.field_name, "reason": self.reason}
