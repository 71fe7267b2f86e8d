"""In-memory implementation of SignatureLedgerProtocol.

This stub simulates the signature tables including:
- Unique constraint enforcement on (petition_id, signer_id)
- Atomic count increment and decrement
- Enumerable signer list with swap-with-last removal
- Reverse index from signer to signed petitions
- Append-only signature history

Thread-safety note: This stub is NOT thread-safe. The lifecycle
controller holds the petition lock around every write.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from petition_ledger.application.ports.signature_ledger import (
    SignatureLedgerProtocol,
)
from petition_ledger.domain.errors import (
    DuplicateSignatureError,
    SignatureNotFoundError,
)
from petition_ledger.domain.models.signature import (
    Signature,
    SignatureAction,
    SignatureLogEntry,
)


class SignatureLedgerStub(SignatureLedgerProtocol):
    """In-memory signature ledger.

    This stub maintains:
    - Active signatures keyed by (petition_id, signer_id) for O(1) membership
    - Per-petition signer lists plus a position map for O(1) removal
    - Per-petition history lists
    - The set of (petition_id, signer_id) pairs that ever withdrew
    """

    def __init__(self) -> None:
        """Initialize empty stub."""
        # Key: (petition_id, signer_id), Value: Signature
        self._active: dict[tuple[UUID, str], Signature] = {}
        # Key: petition_id, Value: signer list (unordered after removals)
        self._signers: dict[UUID, list[str]] = {}
        # Key: (petition_id, signer_id), Value: index into _signers[petition_id]
        self._positions: dict[tuple[UUID, str], int] = {}
        self._history: dict[UUID, list[SignatureLogEntry]] = {}
        self._withdrawn: set[tuple[UUID, str]] = set()
        self._by_signer: dict[str, dict[UUID, None]] = {}

    async def add(self, signature: Signature) -> int:
        """Activate a signature.

        Args:
            signature: The signature to store.

        Returns:
            The new active signature count for the petition.

        Raises:
            DuplicateSignatureError: Unique constraint violation.
        """
        key = (signature.petition_id, signature.signer_id)
        existing = self._active.get(key)
        if existing is not None:
            raise DuplicateSignatureError(
                petition_id=signature.petition_id,
                signer_id=signature.signer_id,
                existing_signature_id=existing.signature_id,
                signed_at=existing.signed_at,
            )

        signers = self._signers.setdefault(signature.petition_id, [])
        self._active[key] = signature
        self._positions[key] = len(signers)
        signers.append(signature.signer_id)
        self._by_signer.setdefault(signature.signer_id, {})[
            signature.petition_id
        ] = None
        self._history.setdefault(signature.petition_id, []).append(
            SignatureLogEntry(
                petition_id=signature.petition_id,
                signer_id=signature.signer_id,
                action=SignatureAction.SIGNED,
                occurred_at=signature.signed_at,
                signature_id=signature.signature_id,
                message=signature.message,
            )
        )
        return len(signers)

    async def remove(
        self, petition_id: UUID, signer_id: str, withdrawn_at: datetime
    ) -> tuple[Signature, int]:
        """Deactivate a signature using swap-with-last removal.

        Returns:
            Tuple of (removed signature, new active count).

        Raises:
            SignatureNotFoundError: No active signature exists.
        """
        key = (petition_id, signer_id)
        signature = self._active.pop(key, None)
        if signature is None:
            raise SignatureNotFoundError(petition_id, signer_id)

        signers = self._signers[petition_id]
        index = self._positions.pop(key)
        last = signers.pop()
        if index < len(signers):
            signers[index] = last
            self._positions[(petition_id, last)] = index

        self._by_signer[signer_id].pop(petition_id, None)
        self._withdrawn.add(key)
        self._history[petition_id].append(
            SignatureLogEntry(
                petition_id=petition_id,
                signer_id=signer_id,
                action=SignatureAction.WITHDRAWN,
                occurred_at=withdrawn_at,
                signature_id=signature.signature_id,
            )
        )
        return signature, len(signers)

    async def get(self, petition_id: UUID, signer_id: str) -> Signature | None:
        return self._active.get((petition_id, signer_id))

    async def has_signed(self, petition_id: UUID, signer_id: str) -> bool:
        return (petition_id, signer_id) in self._active

    async def has_withdrawn(self, petition_id: UUID, signer_id: str) -> bool:
        return (petition_id, signer_id) in self._withdrawn

    async def count(self, petition_id: UUID) -> int:
        return len(self._signers.get(petition_id, []))

    async def list_signers(self, petition_id: UUID) -> list[str]:
        return list(self._signers.get(petition_id, []))

    async def list_signatures(
        self, petition_id: UUID, offset: int = 0, limit: int = 100
    ) -> list[Signature]:
        """Get active signatures for a petition.

        Args:
            petition_id: The petition to query.
            offset: Starting offset for pagination.
            limit: Maximum signatures to return.

        Returns:
            Signatures ordered by signed_at; empty for a negative offset.
        """
        if offset < 0:
            return []
        signatures = [
            self._active[(petition_id, signer)]
            for signer in self._signers.get(petition_id, [])
        ]
        signatures.sort(key=lambda s: s.signed_at)
        return signatures[offset : offset + limit]

    async def get_history(self, petition_id: UUID) -> list[SignatureLogEntry]:
        return list(self._history.get(petition_id, []))

    async def petitions_signed_by(self, signer_id: str) -> list[UUID]:
        return list(self._by_signer.get(signer_id, {}))

    async def purge(self, petition_id: UUID) -> None:
        """Remove every record for the petition."""
        for signer in self._signers.pop(petition_id, []):
            key = (petition_id, signer)
            self._active.pop(key, None)
            self._positions.pop(key, None)
            self._by_signer.get(signer, {}).pop(petition_id, None)
        self._withdrawn = {k for k in self._withdrawn if k[0] != petition_id}
        self._history.pop(petition_id, None)

    # Test helper methods

    def reset(self) -> None:
        """Reset all stored data. Useful between tests."""
        self._active.clear()
        self._signers.clear()
        self._positions.clear()
        self._history.clear()
        self._withdrawn.clear()
        self._by_signer.clear()

    @property
    def active_signature_count(self) -> int:
        """Total number of active signatures across all petitions."""
        return len(self._active)
