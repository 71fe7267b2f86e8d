"""Petition event emitter port.

Receives event payloads after a ledger mutation has been applied.
Emission is a notification, not part of the transaction: the mutation
is already committed when emit() is called.
"""

from __future__ import annotations

from typing import Protocol

from petition_ledger.domain.events.petition import PetitionLedgerEvent


class PetitionEventEmitterProtocol(Protocol):
    """Protocol for publishing petition ledger events."""

    async def emit(self, event: PetitionLedgerEvent) -> None:
        """Publish one event payload."""
        ...
