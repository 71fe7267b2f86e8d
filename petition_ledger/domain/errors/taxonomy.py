"""Error taxonomy for the petition ledger.

Every failure raised by the ledger belongs to exactly one of seven
categories. Callers can catch a category without knowing the concrete
error, and each category maps onto an RFC 7807 problem type.

Categories:
- NotFoundError: unknown petition or signature
- AlreadyExistsError: identifier collision on create
- UnauthorizedError: caller is not permitted to act on the petition
- InvalidStateError: operation not valid in the current lifecycle state
- InvalidInputError: malformed or out-of-range input
- TemporalViolationError: outside the signing or withdrawal window
- DuplicateError: signer already holds a signature

All errors are synchronous and non-retryable by the ledger itself.
"""

from __future__ import annotations

from typing import Any, ClassVar

from petition_ledger.domain.exceptions import PetitionLedgerError


class LedgerOperationError(PetitionLedgerError):
    """Base error for every rejected ledger operation.

    Subclasses set the RFC 7807 class attributes and may contribute
    structured extension members through ``_extensions``.
    """

    problem_slug: ClassVar[str] = "ledger-error"
    title: ClassVar[str] = "Ledger Error"
    status: ClassVar[int] = 400

    def _extensions(self) -> dict[str, Any]:
        """Return extension members for the problem details payload."""
        return {}

    def to_rfc7807_dict(self) -> dict[str, Any]:
        """Serialize to RFC 7807 problem details format.

        Returns:
            Dictionary conforming to RFC 7807 problem details.
        """
        result: dict[str, Any] = {
            "type": f"urn:petition-ledger:{self.problem_slug}",
            "title": self.title,
            "status": self.status,
            "detail": str(self),
        }
        result.update(self._extensions())
        return result


class NotFoundError(LedgerOperationError):
    """A referenced petition or signature does not exist."""

    problem_slug = "not-found"
    title = "Not Found"
    status = 404


class AlreadyExistsError(LedgerOperationError):
    """An identifier is already in use."""

    problem_slug = "already-exists"
    title = "Already Exists"
    status = 409


class UnauthorizedError(LedgerOperationError):
    """The caller may not perform this operation."""

    problem_slug = "unauthorized"
    title = "Unauthorized"
    status = 403


class InvalidStateError(LedgerOperationError):
    """The operation is not valid in the petition's lifecycle state."""

    problem_slug = "invalid-state"
    title = "Invalid State"
    status = 409


class InvalidInputError(LedgerOperationError):
    """An input value failed validation."""

    problem_slug = "invalid-input"
    title = "Invalid Input"
    status = 422


class TemporalViolationError(LedgerOperationError):
    """The operation falls outside its permitted time window."""

    problem_slug = "temporal-violation"
    title = "Temporal Violation"
    status = 409


class DuplicateError(LedgerOperationError):
    """The signer already holds (or held) a signature on the petition."""

    problem_slug = "duplicate"
    title = "Duplicate"
    status = 409
