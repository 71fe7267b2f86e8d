"""In-memory petition event recorder.

Implements PetitionEventEmitterProtocol by appending every emitted
payload to a list, so tests can assert on the emitted sequence.
"""

from __future__ import annotations

from structlog import get_logger

from petition_ledger.application.ports.petition_event_emitter import (
    PetitionEventEmitterProtocol,
)
from petition_ledger.domain.events.petition import PetitionLedgerEvent

logger = get_logger(__name__)


class PetitionEventEmitterStub(PetitionEventEmitterProtocol):
    """Records emitted events in memory.

    Attributes:
        events: Emitted payloads in emission order.
    """

    def __init__(self) -> None:
        """Initialize with no recorded events."""
        self.events: list[PetitionLedgerEvent] = []

    async def emit(self, event: PetitionLedgerEvent) -> None:
        self.events.append(event)
        logger.debug("petition_event_recorded", event_type=event.event_type)

    def of_type(self, event_type: str) -> list[PetitionLedgerEvent]:
        """Return recorded events with the given event_type."""
        return [e for e in self.events if e.event_type == event_type]

    def clear(self) -> None:
        """Forget all recorded events (for testing)."""
        self.events.clear()
