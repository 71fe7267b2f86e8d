"""Domain errors for the petition ledger.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from PetitionLedgerError.
"""

from petition_ledger.domain.errors.petition import (
    InvalidPetitionInputError,
    PetitionAlreadyExistsError,
    PetitionNotFoundError,
    UnauthorizedPetitionActionError,
)
from petition_ledger.domain.errors.signature import (
    DuplicateSignatureError,
    SelfSignatureError,
    SignatureNotFoundError,
    SigningWindowClosedError,
    WithdrawalWindowExpiredError,
)
from petition_ledger.domain.errors.state_transition import (
    InvalidPetitionStateError,
    InvalidStateTransitionError,
)
from petition_ledger.domain.errors.taxonomy import (
    AlreadyExistsError,
    DuplicateError,
    InvalidInputError,
    InvalidStateError,
    LedgerOperationError,
    NotFoundError,
    TemporalViolationError,
    UnauthorizedError,
)

__all__: list[str] = [
    # Taxonomy
    "AlreadyExistsError",
    "DuplicateError",
    "InvalidInputError",
    "InvalidStateError",
    "LedgerOperationError",
    "NotFoundError",
    "TemporalViolationError",
    "UnauthorizedError",
    # Petition
    "InvalidPetitionInputError",
    "PetitionAlreadyExistsError",
    "PetitionNotFoundError",
    "UnauthorizedPetitionActionError",
    # Signature
    "DuplicateSignatureError",
    "SelfSignatureError",
    "SignatureNotFoundError",
    "SigningWindowClosedError",
    "WithdrawalWindowExpiredError",
    # State
    "InvalidPetitionStateError",
    "InvalidStateTransitionError",
]
