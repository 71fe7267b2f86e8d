"""In-memory implementation of PetitionRegistryProtocol.

This stub provides an in-memory petition store for development and
testing. It simulates the database behavior including:
- Primary key enforcement on petition_id
- Secondary indices by creator, category and lifecycle state
- Append-only update log per petition
- Draft-only removal with purge of the update log

Thread-safety note: This stub is NOT thread-safe. The lifecycle
controller serializes writes per petition; reads observe immutable
Petition snapshots.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from structlog import get_logger

from petition_ledger.application.ports.petition_registry import (
    PetitionRegistryProtocol,
)
from petition_ledger.domain.errors import (
    InvalidPetitionStateError,
    PetitionAlreadyExistsError,
    PetitionNotFoundError,
)
from petition_ledger.domain.models.petition import (
    Petition,
    PetitionCategory,
    PetitionState,
)
from petition_ledger.domain.models.update_log import (
    UpdateLogEntry,
    render_field_value,
)

logger = get_logger(__name__)


class PetitionRegistryStub(PetitionRegistryProtocol):
    """In-memory petition registry.

    Indices are dicts used as insertion-ordered sets; listings are sorted
    by the creation sequence so that a petition keeps its position in a
    listing regardless of when it entered the index.
    """

    def __init__(self) -> None:
        """Initialize empty storage."""
        self._petitions: dict[UUID, Petition] = {}
        self._sequence: dict[UUID, int] = {}
        self._next_sequence = 0
        self._update_logs: dict[UUID, list[UpdateLogEntry]] = {}
        self._by_creator: dict[str, dict[UUID, None]] = {}
        self._by_category: dict[PetitionCategory, dict[UUID, None]] = {}
        self._by_state: dict[PetitionState, dict[UUID, None]] = {}

    def _index(self, petition: Petition) -> None:
        pid = petition.petition_id
        self._by_creator.setdefault(petition.creator_id, {})[pid] = None
        self._by_category.setdefault(petition.category, {})[pid] = None
        self._by_state.setdefault(petition.state, {})[pid] = None

    def _unindex(self, petition: Petition) -> None:
        pid = petition.petition_id
        self._by_creator.get(petition.creator_id, {}).pop(pid, None)
        self._by_category.get(petition.category, {}).pop(pid, None)
        self._by_state.get(petition.state, {}).pop(pid, None)

    def _replace(self, petition: Petition) -> None:
        previous = self._petitions[petition.petition_id]
        self._unindex(previous)
        self._petitions[petition.petition_id] = petition
        self._index(petition)

    def _ordered(self, index: dict[UUID, None] | None) -> list[UUID]:
        if not index:
            return []
        return sorted(index, key=self._sequence.__getitem__)

    async def insert(self, petition: Petition) -> None:
        """Store a new petition and index it.

        Args:
            petition: The petition to store.

        Raises:
            PetitionAlreadyExistsError: If petition_id already exists.
        """
        if petition.petition_id in self._petitions:
            logger.warning(
                "petition_id_collision",
                petition_id=str(petition.petition_id),
            )
            raise PetitionAlreadyExistsError(petition.petition_id)
        self._petitions[petition.petition_id] = petition
        self._sequence[petition.petition_id] = self._next_sequence
        self._next_sequence += 1
        self._update_logs[petition.petition_id] = []
        self._index(petition)

    async def get(self, petition_id: UUID) -> Petition:
        """Retrieve a petition by ID.

        Raises:
            PetitionNotFoundError: If the petition does not exist.
        """
        petition = self._petitions.get(petition_id)
        if petition is None:
            raise PetitionNotFoundError(petition_id)
        return petition

    async def find(self, petition_id: UUID) -> Petition | None:
        return self._petitions.get(petition_id)

    async def save(self, petition: Petition) -> None:
        """Replace a stored petition and re-index it.

        Raises:
            PetitionNotFoundError: If the petition does not exist.
        """
        if petition.petition_id not in self._petitions:
            raise PetitionNotFoundError(petition.petition_id)
        self._replace(petition)

    async def update_field(
        self,
        petition_id: UUID,
        field_name: str,
        value: Any,
        changed_by: str,
        changed_at: datetime,
    ) -> Petition:
        """Replace one mutable field and append an audit entry.

        Args:
            petition_id: The petition to edit.
            field_name: Name of the mutable field.
            value: New value.
            changed_by: Identity making the edit.
            changed_at: Caller-supplied time of the edit.

        Returns:
            The updated petition.

        Raises:
            PetitionNotFoundError: If the petition does not exist.
            ValueError: If the field is not mutable.
        """
        current = await self.get(petition_id)
        old_value = getattr(current, field_name)
        updated = current.with_field(field_name, value)
        self._replace(updated)
        self._update_logs[petition_id].append(
            UpdateLogEntry(
                petition_id=petition_id,
                field_name=field_name,
                old_value=render_field_value(old_value),
                new_value=render_field_value(value),
                changed_by=changed_by,
                changed_at=changed_at,
            )
        )
        return updated

    async def remove(self, petition_id: UUID) -> Petition:
        """Remove a draft petition together with its update log.

        Raises:
            PetitionNotFoundError: If the petition does not exist.
            InvalidPetitionStateError: If the petition is not a draft.
        """
        petition = await self.get(petition_id)
        if not petition.is_draft:
            raise InvalidPetitionStateError(petition_id, petition.state, "remove")
        self._unindex(petition)
        del self._petitions[petition_id]
        del self._sequence[petition_id]
        self._update_logs.pop(petition_id, None)
        return petition

    async def get_update_log(self, petition_id: UUID) -> list[UpdateLogEntry]:
        return list(self._update_logs.get(petition_id, []))

    async def list_ids_by_creator(self, creator_id: str) -> list[UUID]:
        return self._ordered(self._by_creator.get(creator_id))

    async def list_ids_by_category(self, category: PetitionCategory) -> list[UUID]:
        return self._ordered(self._by_category.get(category))

    async def list_ids_by_state(self, state: PetitionState) -> list[UUID]:
        return self._ordered(self._by_state.get(state))

    async def list_all(self, offset: int = 0, limit: int = 100) -> list[Petition]:
        """Return a page of petitions in creation order.

        Offsets outside the registry return an empty list.
        """
        if offset < 0:
            return []
        ordered = list(self._petitions.values())
        return ordered[offset : offset + limit]

    async def count(self) -> int:
        return len(self._petitions)

    # Test helper methods

    def clear(self) -> None:
        """Clear all petitions (for testing)."""
        self._petitions.clear()
        self._sequence.clear()
        self._next_sequence = 0
        self._update_logs.clear()
        self._by_creator.clear()
        self._by_category.clear()
        self._by_state.clear()

    def index_snapshot(self) -> dict[str, dict[Any, list[UUID]]]:
        """Return a copy of every index for inspection in tests."""
        return {
            "creator": {k: list(v) for k, v in self._by_creator.items() if v},
            "category": {k: list(v) for k, v in self._by_category.items() if v},
            "state": {k: list(v) for k, v in self._by_state.items() if v},
        }
