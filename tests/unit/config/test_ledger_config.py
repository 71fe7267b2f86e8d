"""Unit tests for PetitionLedgerConfig."""

from datetime import timedelta

import pytest

from petition_ledger.config.ledger_config import (
    DEFAULT_PETITION_LEDGER_CONFIG,
    PERMISSIVE_PETITION_LEDGER_CONFIG,
    TEST_PETITION_LEDGER_CONFIG,
    PetitionLedgerConfig,
)


class TestDefaults:
    """Tests for the base ruleset values."""

    def test_default_values(self) -> None:
        config = DEFAULT_PETITION_LEDGER_CONFIG
        assert config.max_tags == 10
        assert config.max_message_length == 280
        assert config.withdrawal_window == timedelta(hours=24)
        assert config.allow_self_signing is False
        assert config.allow_resign_after_withdrawal is False
        assert config.creation_reputation == 10
        assert config.signing_reputation == 1
        assert config.completion_bonus == 100
        assert config.withdrawal_reputation_penalty == 0

    def test_presets(self) -> None:
        assert TEST_PETITION_LEDGER_CONFIG.withdrawal_window == timedelta(seconds=60)
        assert PERMISSIVE_PETITION_LEDGER_CONFIG.allow_self_signing
        assert PERMISSIVE_PETITION_LEDGER_CONFIG.allow_resign_after_withdrawal
        assert PERMISSIVE_PETITION_LEDGER_CONFIG.max_message_length == 500

    def test_is_frozen(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_PETITION_LEDGER_CONFIG.max_tags = 3  # type: ignore[misc]


class TestValidation:
    """Tests for __post_init__ validation."""

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_tags": -1},
            {"max_message_length": 0},
            {"withdrawal_window_seconds": -1},
            {"completion_bonus": -5},
            {"withdrawal_reputation_penalty": -1},
        ],
    )
    def test_rejects_invalid_values(self, kwargs: dict) -> None:
        with pytest.raises(ValueError):
            PetitionLedgerConfig(**kwargs)


class TestFromEnvironment:
    """Tests for from_environment()."""

    def test_defaults_without_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in (
            "PETITION_MAX_TAGS",
            "PETITION_WITHDRAWAL_WINDOW_SECONDS",
            "PETITION_ALLOW_SELF_SIGNING",
        ):
            monkeypatch.delenv(key, raising=False)
        config = PetitionLedgerConfig.from_environment()
        assert config.max_tags == 10
        assert config.allow_self_signing is False

    def test_env_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PETITION_MAX_TAGS", "3")
        monkeypatch.setenv("PETITION_WITHDRAWAL_WINDOW_SECONDS", "3600")
        monkeypatch.setenv("PETITION_ALLOW_SELF_SIGNING", "TRUE")
        monkeypatch.setenv("PETITION_ALLOW_RESIGN_AFTER_WITHDRAWAL", "yes")
        monkeypatch.setenv("PETITION_COMPLETION_BONUS", "50")

        config = PetitionLedgerConfig.from_environment()

        assert config.max_tags == 3
        assert config.withdrawal_window == timedelta(hours=1)
        assert config.allow_self_signing is True
        assert config.allow_resign_after_withdrawal is True
        assert config.completion_bonus == 50

    def test_invalid_values_fall_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PETITION_MAX_MESSAGE_LENGTH", "lots")
        monkeypatch.setenv("PETITION_ALLOW_SELF_SIGNING", "maybe")
        config = PetitionLedgerConfig.from_environment()
        assert config.max_message_length == 280
        assert config.allow_self_signing is False
