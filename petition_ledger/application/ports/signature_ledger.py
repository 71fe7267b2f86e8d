"""Signature ledger port.

This module defines the abstract interface for per-petition signer sets.
The ledger owns active signatures (keyed by petition and signer), the
enumerable signer list and the append-only signature history.

Developer Golden Rules:
1. UNIQUE CONSTRAINT - At most one active signature per (petition, signer)
2. O(1) MEMBERSHIP - has_signed never scans a list
3. ORDER NOT PRESERVED - Removal may reorder the signer list
4. HISTORY IS APPEND-ONLY - Withdrawal appends, never erases
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from petition_ledger.domain.models.signature import Signature, SignatureLogEntry


class SignatureLedgerProtocol(Protocol):
    """Protocol for signature storage operations."""

    async def add(self, signature: Signature) -> int:
        """Activate a signature and append a SIGNED history entry.

        Returns:
            The new active signature count for the petition.

        Raises:
            DuplicateSignatureError: Signer already holds an active signature.
        """
        ...

    async def remove(
        self, petition_id: UUID, signer_id: str, withdrawn_at: datetime
    ) -> tuple[Signature, int]:
        """Deactivate a signature and append a WITHDRAWN history entry.

        Returns:
            Tuple of (removed signature, new active count).

        Raises:
            SignatureNotFoundError: No active signature exists.
        """
        ...

    async def get(self, petition_id: UUID, signer_id: str) -> Signature | None:
        """Return the active signature, or None."""
        ...

    async def has_signed(self, petition_id: UUID, signer_id: str) -> bool:
        """Check whether the signer holds an active signature."""
        ...

    async def has_withdrawn(self, petition_id: UUID, signer_id: str) -> bool:
        """Check whether the signer has ever withdrawn from the petition."""
        ...

    async def count(self, petition_id: UUID) -> int:
        """Return the active signature count."""
        ...

    async def list_signers(self, petition_id: UUID) -> list[str]:
        """Return active signer IDs (order not guaranteed after removals)."""
        ...

    async def list_signatures(
        self, petition_id: UUID, offset: int = 0, limit: int = 100
    ) -> list[Signature]:
        """Return a page of active signatures ordered by signed_at."""
        ...

    async def get_history(self, petition_id: UUID) -> list[SignatureLogEntry]:
        """Return the append-only signature history."""
        ...

    async def petitions_signed_by(self, signer_id: str) -> list[UUID]:
        """Return petitions on which the signer holds an active signature."""
        ...

    async def purge(self, petition_id: UUID) -> None:
        """Remove every record for the petition (draft deletion only)."""
        ...
