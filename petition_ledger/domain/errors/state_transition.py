"""State errors for the petition lifecycle state machine.

Raised when an operation is attempted in a lifecycle state that does not
permit it, or when a transition is not present in the transition matrix.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from uuid import UUID

from petition_ledger.domain.errors.taxonomy import InvalidStateError

if TYPE_CHECKING:
    from petition_ledger.domain.models.petition import PetitionState


class InvalidStateTransitionError(InvalidStateError):
    """Raised when a transition is not in the transition matrix.

    Attributes:
        from_state: Current state of the petition.
        to_state: Attempted target state.
        allowed_transitions: Valid target states from the current state.
    """

    def __init__(
        self,
        from_state: PetitionState,
        to_state: PetitionState,
        allowed_transitions: list[PetitionState] | None = None,
    ) -> None:
        """Initialize invalid state transition error.

        Args:
            from_state: Current petition state.
            to_state: Attempted invalid target state.
            allowed_transitions: Valid states from current state (optional).
        """
        self.from_state = from_state
        self.to_state = to_state
        self.allowed_transitions = allowed_transitions or []

        allowed_str = (
            f" Valid transitions: {[s.value for s in self.allowed_transitions]}"
            if self.allowed_transitions
            else ""
        )
        super().__init__(
            f"Invalid state transition: {from_state.value} -> {to_state.value}.{allowed_str}"
        )

    def _extensions(self) -> dict[str, Any]:
        return {
            "from_state": self.from_state.value,
            "to_state": self.to_state.value,
            "allowed_transitions": [s.value for s in self.allowed_transitions],
        }


class InvalidPetitionStateError(InvalidStateError):
    """Raised when an operation is not valid in the petition's current state.

    Examples: publishing a non-draft, signing a cancelled petition,
    withdrawing from a completed petition, editing a terminal petition.

    Attributes:
        petition_id: UUID of the petition.
        current_state: The state the petition is in.
        operation: The rejected operation name.
    """

    def __init__(
        self,
        petition_id: UUID,
        current_state: PetitionState,
        operation: str,
    ) -> None:
        """Initialize the error.

        Args:
            petition_id: UUID of the petition.
            current_state: The state the petition is in.
            operation: The rejected operation name.
        """
        self.petition_id = petition_id
        self.current_state = current_state
        self.operation = operation
        super().__init__(
            f"Cannot {operation} petition {petition_id} in state "
            f"{current_state.value}"
        )

    def _extensions(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "current_state": self.current_state.value,
            "operation": self.operation,
        }
