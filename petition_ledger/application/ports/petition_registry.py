"""Petition registry port.

This module defines the abstract interface for petition storage.
The registry is the durable keyed store of petition records, their
append-only update logs and the secondary indices by creator, category
and lifecycle state.

Developer Golden Rules:
1. SERVICE VALIDATES - The controller evaluates guards; the registry stores
2. FAIL LOUD - Registry raises on missing or colliding IDs
3. INDICES MOVE WITH RECORDS - Every write keeps all indices consistent
4. READS ARE SNAPSHOTS - Returned records are immutable
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol
from uuid import UUID

from petition_ledger.domain.models.petition import (
    Petition,
    PetitionCategory,
    PetitionState,
)
from petition_ledger.domain.models.update_log import UpdateLogEntry


class PetitionRegistryProtocol(Protocol):
    """Protocol for petition storage operations."""

    async def insert(self, petition: Petition) -> None:
        """Store a new petition and index it.

        Raises:
            PetitionAlreadyExistsError: If petition_id already exists.
        """
        ...

    async def get(self, petition_id: UUID) -> Petition:
        """Retrieve a petition by ID.

        Raises:
            PetitionNotFoundError: If the petition does not exist.
        """
        ...

    async def find(self, petition_id: UUID) -> Petition | None:
        """Retrieve a petition by ID, or None if absent."""
        ...

    async def save(self, petition: Petition) -> None:
        """Replace a stored petition (lifecycle and counter changes).

        No audit entry is written.

        Raises:
            PetitionNotFoundError: If the petition does not exist.
        """
        ...

    async def update_field(
        self,
        petition_id: UUID,
        field_name: str,
        value: Any,
        changed_by: str,
        changed_at: datetime,
    ) -> Petition:
        """Replace one mutable field and append an audit entry.

        Returns:
            The updated petition.

        Raises:
            PetitionNotFoundError: If the petition does not exist.
        """
        ...

    async def remove(self, petition_id: UUID) -> Petition:
        """Remove a draft petition and its update log.

        Returns:
            The removed petition.

        Raises:
            PetitionNotFoundError: If the petition does not exist.
            InvalidPetitionStateError: If the petition is not a draft.
        """
        ...

    async def get_update_log(self, petition_id: UUID) -> list[UpdateLogEntry]:
        """Return the update log in append order."""
        ...

    async def list_ids_by_creator(self, creator_id: str) -> list[UUID]:
        """Return petition IDs created by ``creator_id`` in creation order."""
        ...

    async def list_ids_by_category(self, category: PetitionCategory) -> list[UUID]:
        """Return petition IDs in ``category`` in creation order."""
        ...

    async def list_ids_by_state(self, state: PetitionState) -> list[UUID]:
        """Return petition IDs in ``state`` in creation order."""
        ...

    async def list_all(self, offset: int = 0, limit: int = 100) -> list[Petition]:
        """Return a page of petitions in creation order."""
        ...

    async def count(self) -> int:
        """Return the number of stored petitions."""
        ...
