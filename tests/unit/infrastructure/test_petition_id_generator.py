"""Unit tests for petition ID generators."""

from uuid import UUID

import pytest

from petition_ledger.infrastructure.adapters.petition_id_generator import (
    SequentialPetitionIdGenerator,
    UuidPetitionIdGenerator,
)


class TestUuidPetitionIdGenerator:
    """Tests for the random generator."""

    def test_ids_are_uuid4(self) -> None:
        generator = UuidPetitionIdGenerator()
        ids = {generator.next_id() for _ in range(100)}
        assert len(ids) == 100
        assert all(i.version == 4 for i in ids)


class TestSequentialPetitionIdGenerator:
    """Tests for the deterministic generator."""

    def test_starts_at_zero(self) -> None:
        generator = SequentialPetitionIdGenerator()
        assert generator.next_id() == UUID(int=0)
        assert generator.next_id() == UUID(int=1)
        assert generator.issued == 2

    def test_custom_start(self) -> None:
        generator = SequentialPetitionIdGenerator(start=42)
        assert generator.next_id() == UUID(int=42)

    def test_instances_are_independent(self) -> None:
        first = SequentialPetitionIdGenerator()
        second = SequentialPetitionIdGenerator()
        first.next_id()
        assert second.next_id() == UUID(int=0)

    def test_negative_start_rejected(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            SequentialPetitionIdGenerator(start=-1)
