"""Petition ledger configuration.

This module defines the tunable rules of the ledger with environment
variable overrides for deployment tuning.

Environment Variables (Validation):
- PETITION_MAX_TAGS: Maximum tags per petition (default: 10)
- PETITION_MAX_MESSAGE_LENGTH: Maximum signature message length (default: 280)

Environment Variables (Signing):
- PETITION_WITHDRAWAL_WINDOW_SECONDS: Withdrawal window after signing (default: 86400)
- PETITION_ALLOW_SELF_SIGNING: Let creators sign their own petitions (default: false)
- PETITION_ALLOW_RESIGN_AFTER_WITHDRAWAL: Let signers sign again after withdrawing (default: false)

Environment Variables (Reputation):
- PETITION_CREATION_REPUTATION: Reputation awarded on creation (default: 10)
- PETITION_SIGNING_REPUTATION: Reputation awarded per signature (default: 1)
- PETITION_COMPLETION_BONUS: Reputation awarded to the creator on completion (default: 100)
- PETITION_WITHDRAWAL_REPUTATION_PENALTY: Reputation removed on withdrawal (default: 0)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import timedelta

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_bool_env(key: str, default: bool) -> bool:
    """Get boolean environment variable with default.

    Accepts 1/0, true/false, yes/no and on/off (case-insensitive).
    Unrecognized values fall back to the default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    return default


@dataclass(frozen=True)
class PetitionLedgerConfig:
    """Configuration for petition ledger rules.

    All values can be overridden via environment variables.

    Attributes:
        max_tags: Maximum number of tags on a petition.
        max_message_length: Maximum characters in a signature message.
        withdrawal_window_seconds: How long after signing a signer may
            withdraw (inclusive).
        allow_self_signing: Whether creators may sign their own petitions.
        allow_resign_after_withdrawal: Whether a signer who withdrew may
            sign the same petition again.
        creation_reputation: Reputation awarded to a creator per petition.
        signing_reputation: Reputation awarded to a signer per signature.
        completion_bonus: One-time reputation awarded to the creator when
            the petition completes.
        withdrawal_reputation_penalty: Reputation removed from a signer on
            withdrawal (floored at zero). Zero means no clawback.
    """

    max_tags: int = 10
    max_message_length: int = 280
    withdrawal_window_seconds: int = 86_400
    allow_self_signing: bool = False
    allow_resign_after_withdrawal: bool = False
    creation_reputation: int = 10
    signing_reputation: int = 1
    completion_bonus: int = 100
    withdrawal_reputation_penalty: int = 0

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.max_tags < 0:
            raise ValueError(f"max_tags must be non-negative, got {self.max_tags}")
        if self.max_message_length < 1:
            raise ValueError(
                f"max_message_length must be positive, got {self.max_message_length}"
            )
        if self.withdrawal_window_seconds < 0:
            raise ValueError(
                "withdrawal_window_seconds must be non-negative, "
                f"got {self.withdrawal_window_seconds}"
            )
        for name in (
            "creation_reputation",
            "signing_reputation",
            "completion_bonus",
            "withdrawal_reputation_penalty",
        ):
            if getattr(self, name) < 0:
                raise ValueError(
                    f"{name} must be non-negative, got {getattr(self, name)}"
                )

    @property
    def withdrawal_window(self) -> timedelta:
        """Withdrawal window as a timedelta."""
        return timedelta(seconds=self.withdrawal_window_seconds)

    @classmethod
    def from_environment(cls) -> PetitionLedgerConfig:
        """Create config from environment variables with defaults.

        Returns:
            PetitionLedgerConfig with values from environment or defaults.
        """
        return cls(
            max_tags=_get_int_env("PETITION_MAX_TAGS", 10),
            max_message_length=_get_int_env("PETITION_MAX_MESSAGE_LENGTH", 280),
            withdrawal_window_seconds=_get_int_env(
                "PETITION_WITHDRAWAL_WINDOW_SECONDS", 86_400
            ),
            allow_self_signing=_get_bool_env("PETITION_ALLOW_SELF_SIGNING", False),
            allow_resign_after_withdrawal=_get_bool_env(
                "PETITION_ALLOW_RESIGN_AFTER_WITHDRAWAL", False
            ),
            creation_reputation=_get_int_env("PETITION_CREATION_REPUTATION", 10),
            signing_reputation=_get_int_env("PETITION_SIGNING_REPUTATION", 1),
            completion_bonus=_get_int_env("PETITION_COMPLETION_BONUS", 100),
            withdrawal_reputation_penalty=_get_int_env(
                "PETITION_WITHDRAWAL_REPUTATION_PENALTY", 0
            ),
        )


# Default configuration (base ruleset)
DEFAULT_PETITION_LEDGER_CONFIG = PetitionLedgerConfig()

# Test configuration with a short withdrawal window
TEST_PETITION_LEDGER_CONFIG = PetitionLedgerConfig(
    withdrawal_window_seconds=60,
)

# Permissive configuration for later rule sets (re-signing and self-signing)
PERMISSIVE_PETITION_LEDGER_CONFIG = PetitionLedgerConfig(
    allow_self_signing=True,
    allow_resign_after_withdrawal=True,
    max_message_length=500,
)
