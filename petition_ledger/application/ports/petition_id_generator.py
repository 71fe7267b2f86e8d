"""Petition identifier allocation port.

The ledger treats identifiers as opaque. Implementations must not hand
out the same ID twice; if they ever do, the registry rejects the insert
with PetitionAlreadyExistsError rather than overwrite a record.
"""

from __future__ import annotations

from typing import Protocol
from uuid import UUID


class PetitionIdGeneratorProtocol(Protocol):
    """Protocol for allocating petition and signature identifiers."""

    def next_id(self) -> UUID:
        """Allocate a fresh identifier."""
        ...
