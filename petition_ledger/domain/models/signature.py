"""Signature domain models.

This module defines the domain records for petition signing:
- Signature: a signer's active support for a petition
- SignatureLogEntry: an append-only history record of sign/withdraw actions

The (petition_id, signer_id) pair identifies at most one active
signature. Withdrawal removes the Signature from the active set; the
history keeps a WITHDRAWN entry, so history is never rolled back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

import blake3


class SignatureAction(Enum):
    """Kind of signature history entry."""

    SIGNED = "SIGNED"
    WITHDRAWN = "WITHDRAWN"


@dataclass(frozen=True, eq=True)
class Signature:
    """A signer's support for a petition.

    Attributes:
        signature_id: Unique identifier for this signature.
        petition_id: Reference to the petition being signed.
        signer_id: Identity of the signer.
        signed_at: When the signature was recorded (UTC timezone-aware).
        content_hash: BLAKE3 hash of the canonical content (32 bytes).
        message: Optional message left by the signer.
    """

    signature_id: UUID
    petition_id: UUID
    signer_id: str
    signed_at: datetime
    content_hash: bytes
    message: str | None = field(default=None)

    def __post_init__(self) -> None:
        """Validate signature fields after initialization.

        Raises:
            ValueError: If any field validation fails.
        """
        if self.signed_at.tzinfo is None:
            raise ValueError("signed_at must be timezone-aware (UTC)")

        if len(self.content_hash) != 32:
            raise ValueError(
                f"content_hash must be 32 bytes (BLAKE3), got {len(self.content_hash)}"
            )

    @classmethod
    def create(
        cls,
        signature_id: UUID,
        petition_id: UUID,
        signer_id: str,
        signed_at: datetime,
        message: str | None = None,
    ) -> Signature:
        """Build a signature with its content hash computed."""
        return cls(
            signature_id=signature_id,
            petition_id=petition_id,
            signer_id=signer_id,
            signed_at=signed_at,
            content_hash=cls.compute_content_hash(petition_id, signer_id, signed_at),
            message=message,
        )

    @staticmethod
    def compute_content_hash(
        petition_id: UUID, signer_id: str, signed_at: datetime
    ) -> bytes:
        """Compute BLAKE3 hash for signature content.

        Args:
            petition_id: The petition being signed.
            signer_id: The signer.
            signed_at: When the signature is being recorded.

        Returns:
            32-byte BLAKE3 hash of the canonical content.
        """
        content = f"{petition_id}|{signer_id}|{signed_at.isoformat()}".encode("utf-8")
        return blake3.blake3(content).digest()

    def verify_content_hash(self) -> bool:
        """Verify that content_hash matches the recomputed hash.

        Returns:
            True if content_hash is valid, False otherwise.
        """
        expected = self.compute_content_hash(
            self.petition_id, self.signer_id, self.signed_at
        )
        return self.content_hash == expected

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for events.

        WARNING: Never use asdict() - it breaks UUID/datetime serialization.

        Returns:
            Dictionary representation suitable for event payloads.
        """
        return {
            "signature_id": str(self.signature_id),
            "petition_id": str(self.petition_id),
            "signer_id": self.signer_id,
            "signed_at": self.signed_at.isoformat(),
            "content_hash": self.content_hash.hex(),
            "message": self.message,
            "schema_version": 1,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Signature:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If field values are invalid.
        """
        return cls(
            signature_id=UUID(data["signature_id"]),
            petition_id=UUID(data["petition_id"]),
            signer_id=data["signer_id"],
            signed_at=datetime.fromisoformat(data["signed_at"]),
            content_hash=bytes.fromhex(data["content_hash"]),
            message=data.get("message"),
        )


@dataclass(frozen=True, eq=True)
class SignatureLogEntry:
    """Append-only history record for a petition's signatures.

    Attributes:
        petition_id: The petition concerned.
        signer_id: The signer concerned.
        action: SIGNED or WITHDRAWN.
        occurred_at: Caller-supplied time of the action.
        signature_id: The signature the action applied to.
        message: Message attached when signing.
    """

    petition_id: UUID
    signer_id: str
    action: SignatureAction
    occurred_at: datetime
    signature_id: UUID
    message: str | None = None
