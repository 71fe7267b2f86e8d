"""Signature domain errors.

Exceptions raised when admitting or withdrawing signatures. Uniqueness
violations, window violations and self-signing attempts each have a
dedicated class so the service layer can log them distinctly.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from petition_ledger.domain.errors.taxonomy import (
    DuplicateError,
    NotFoundError,
    TemporalViolationError,
    UnauthorizedError,
)


class DuplicateSignatureError(DuplicateError):
    """Raised when a signer tries to sign the same petition twice.

    Also raised when a signer who withdrew tries to sign again while the
    ledger does not permit re-signing.

    Attributes:
        petition_id: The petition that was already signed.
        signer_id: The signer attempting the duplicate signature.
        existing_signature_id: ID of the active signature (if any).
        signed_at: When the existing signature was recorded (if any).
        previously_withdrawn: True when the signer withdrew earlier.
    """

    def __init__(
        self,
        petition_id: UUID,
        signer_id: str,
        existing_signature_id: UUID | None = None,
        signed_at: datetime | None = None,
        previously_withdrawn: bool = False,
    ) -> None:
        """Initialize the error.

        Args:
            petition_id: The petition that was already signed.
            signer_id: The signer attempting the duplicate signature.
            existing_signature_id: ID of the active signature (if any).
            signed_at: When the existing signature was recorded (if any).
            previously_withdrawn: True when the signer withdrew earlier.
        """
        self.petition_id = petition_id
        self.signer_id = signer_id
        self.existing_signature_id = existing_signature_id
        self.signed_at = signed_at
        self.previously_withdrawn = previously_withdrawn
        if previously_withdrawn:
            message = (
                f"Signer {signer_id} withdrew from petition {petition_id} "
                "and may not sign it again"
            )
        else:
            message = f"Signer {signer_id} already signed petition {petition_id}"
        super().__init__(message)

    def _extensions(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "petition_id": str(self.petition_id),
            "signer_id": self.signer_id,
            "previously_withdrawn": self.previously_withdrawn,
        }
        if self.existing_signature_id is not None:
            result["existing_signature_id"] = str(self.existing_signature_id)
        if self.signed_at is not None:
            result["signed_at"] = self.signed_at.isoformat()
        return result


class SignatureNotFoundError(NotFoundError):
    """Raised when a signer holds no active signature on a petition.

    Attributes:
        petition_id: The petition queried.
        signer_id: The signer without an active signature.
    """

    def __init__(self, petition_id: UUID, signer_id: str) -> None:
        """Initialize the error.

        Args:
            petition_id: The petition queried.
            signer_id: The signer without an active signature.
        """
        self.petition_id = petition_id
        self.signer_id = signer_id
        super().__init__(
            f"No active signature by {signer_id} on petition {petition_id}"
        )

    def _extensions(self) -> dict[str, Any]:
        return {"petition_id": str(self.petition_id), "signer_id": self.signer_id}


class SelfSignatureError(UnauthorizedError):
    """Raised when a creator tries to sign their own petition.

    Attributes:
        petition_id: The petition targeted.
        creator_id: The creator attempting to sign.
    """

    def __init__(self, petition_id: UUID, creator_id: str) -> None:
        """Initialize the error.

        Args:
            petition_id: The petition targeted.
            creator_id: The creator attempting to sign.
        """
        self.petition_id = petition_id
        self.creator_id = creator_id
        super().__init__(
            f"Creator {creator_id} may not sign own petition {petition_id}"
        )

    def _extensions(self) -> dict[str, Any]:
        return {"petition_id": str(self.petition_id), "creator_id": self.creator_id}


class SigningWindowClosedError(TemporalViolationError):
    """Raised when signing outside ``[start_date, end_date]``.

    Attributes:
        petition_id: The petition targeted.
        attempted_at: Caller-supplied time of the attempt.
        start_date: Window start (inclusive).
        end_date: Window end (inclusive).
    """

    def __init__(
        self,
        petition_id: UUID,
        attempted_at: datetime,
        start_date: datetime,
        end_date: datetime,
    ) -> None:
        """Initialize the error.

        Args:
            petition_id: The petition targeted.
            attempted_at: Caller-supplied time of the attempt.
            start_date: Window start (inclusive).
            end_date: Window end (inclusive).
        """
        self.petition_id = petition_id
        self.attempted_at = attempted_at
        self.start_date = start_date
        self.end_date = end_date
        phase = "has not started" if attempted_at < start_date else "has ended"
        super().__init__(f"Petition {petition_id} {phase}")

    def _extensions(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "attempted_at": self.attempted_at.isoformat(),
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }


class WithdrawalWindowExpiredError(TemporalViolationError):
    """Raised when a withdrawal arrives after the withdrawal window.

    Attributes:
        petition_id: The petition targeted.
        signer_id: The signer attempting to withdraw.
        signed_at: When the signature was recorded.
        window_closed_at: Last instant a withdrawal was allowed.
    """

    def __init__(
        self,
        petition_id: UUID,
        signer_id: str,
        signed_at: datetime,
        window_closed_at: datetime,
    ) -> None:
        """Initialize the error.

        Args:
            petition_id: The petition targeted.
            signer_id: The signer attempting to withdraw.
            signed_at: When the signature was recorded.
            window_closed_at: Last instant a withdrawal was allowed.
        """
        self.petition_id = petition_id
        self.signer_id = signer_id
        self.signed_at = signed_at
        self.window_closed_at = window_closed_at
        super().__init__(
            f"Withdrawal window for {signer_id} on petition {petition_id} "
            f"closed at {window_closed_at.isoformat()}"
        )

    def _extensions(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "signer_id": self.signer_id,
            "signed_at": self.signed_at.isoformat(),
            "window_closed_at": self.window_closed_at.isoformat(),
        }
