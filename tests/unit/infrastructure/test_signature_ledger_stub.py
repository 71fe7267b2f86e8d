"""Unit tests for SignatureLedgerStub.

Tests cover:
- add() uniqueness and counting
- remove() swap-with-last and history
- has_withdrawn() memory across removals
- list_signatures() ordering and pagination
- petitions_signed_by() reverse index
- purge()
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from petition_ledger.domain.errors import (
    DuplicateSignatureError,
    SignatureNotFoundError,
)
from petition_ledger.domain.models.signature import Signature, SignatureAction
from petition_ledger.infrastructure.stubs.signature_ledger_stub import (
    SignatureLedgerStub,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_signature(
    petition_id: UUID, signer_id: str, offset_minutes: int = 0
) -> Signature:
    return Signature.create(
        signature_id=uuid4(),
        petition_id=petition_id,
        signer_id=signer_id,
        signed_at=NOW + timedelta(minutes=offset_minutes),
    )


class TestLedgerAdd:
    """Tests for add()."""

    @pytest.fixture
    def ledger(self) -> SignatureLedgerStub:
        """Create a fresh ledger stub."""
        return SignatureLedgerStub()

    @pytest.mark.asyncio
    async def test_add_returns_new_count(self, ledger: SignatureLedgerStub) -> None:
        pid = uuid4()
        assert await ledger.add(make_signature(pid, "bob")) == 1
        assert await ledger.add(make_signature(pid, "carol")) == 2
        assert await ledger.count(pid) == 2
        assert await ledger.has_signed(pid, "bob")

    @pytest.mark.asyncio
    async def test_add_duplicate(self, ledger: SignatureLedgerStub) -> None:
        pid = uuid4()
        first = make_signature(pid, "bob")
        await ledger.add(first)

        with pytest.raises(DuplicateSignatureError) as exc_info:
            await ledger.add(make_signature(pid, "bob", offset_minutes=5))

        assert exc_info.value.existing_signature_id == first.signature_id
        assert exc_info.value.signed_at == first.signed_at
        assert await ledger.count(pid) == 1

    @pytest.mark.asyncio
    async def test_same_signer_different_petitions(
        self, ledger: SignatureLedgerStub
    ) -> None:
        first, second = uuid4(), uuid4()
        await ledger.add(make_signature(first, "bob"))
        await ledger.add(make_signature(second, "bob"))
        assert await ledger.petitions_signed_by("bob") == [first, second]


class TestLedgerRemove:
    """Tests for remove()."""

    @pytest.fixture
    def ledger(self) -> SignatureLedgerStub:
        return SignatureLedgerStub()

    @pytest.mark.asyncio
    async def test_remove_swaps_with_last(self, ledger: SignatureLedgerStub) -> None:
        pid = uuid4()
        for signer in ("a", "b", "c", "d"):
            await ledger.add(make_signature(pid, signer))

        removed, count = await ledger.remove(pid, "b", NOW)

        assert removed.signer_id == "b"
        assert count == 3
        # Membership is what matters; order is not preserved.
        assert sorted(await ledger.list_signers(pid)) == ["a", "c", "d"]
        assert not await ledger.has_signed(pid, "b")

    @pytest.mark.asyncio
    async def test_remove_every_position(self, ledger: SignatureLedgerStub) -> None:
        pid = uuid4()
        signers = ["a", "b", "c", "d", "e"]
        for signer in signers:
            await ledger.add(make_signature(pid, signer))

        for signer in ("c", "e", "a", "d", "b"):
            await ledger.remove(pid, signer, NOW)
            signers.remove(signer)
            assert sorted(await ledger.list_signers(pid)) == sorted(signers)
            assert await ledger.count(pid) == len(signers)
            for remaining in signers:
                assert await ledger.get(pid, remaining) is not None

    @pytest.mark.asyncio
    async def test_remove_missing(self, ledger: SignatureLedgerStub) -> None:
        with pytest.raises(SignatureNotFoundError):
            await ledger.remove(uuid4(), "bob", NOW)

    @pytest.mark.asyncio
    async def test_history_keeps_both_actions(
        self, ledger: SignatureLedgerStub
    ) -> None:
        pid = uuid4()
        await ledger.add(make_signature(pid, "bob"))
        withdrawn_at = NOW + timedelta(hours=1)
        await ledger.remove(pid, "bob", withdrawn_at)

        history = await ledger.get_history(pid)
        assert [e.action for e in history] == [
            SignatureAction.SIGNED,
            SignatureAction.WITHDRAWN,
        ]
        assert history[1].occurred_at == withdrawn_at
        assert await ledger.has_withdrawn(pid, "bob")
        assert await ledger.petitions_signed_by("bob") == []


class TestLedgerQueries:
    """Tests for listing and purge."""

    @pytest.mark.asyncio
    async def test_list_signatures_ordered_by_time(self) -> None:
        ledger = SignatureLedgerStub()
        pid = uuid4()
        for signer, minute in (("a", 0), ("b", 1), ("c", 2), ("d", 3)):
            await ledger.add(make_signature(pid, signer, offset_minutes=minute))
        # Swap-with-last moves "d" into position 0
        await ledger.remove(pid, "a", NOW)

        signatures = await ledger.list_signatures(pid)
        assert [s.signer_id for s in signatures] == ["b", "c", "d"]

        page = await ledger.list_signatures(pid, offset=1, limit=1)
        assert [s.signer_id for s in page] == ["c"]
        assert await ledger.list_signatures(pid, offset=-1, limit=2) == []

    @pytest.mark.asyncio
    async def test_unknown_petition_is_empty(self) -> None:
        ledger = SignatureLedgerStub()
        pid = uuid4()
        assert await ledger.count(pid) == 0
        assert await ledger.list_signers(pid) == []
        assert await ledger.get_history(pid) == []
        assert await ledger.get(pid, "bob") is None

    @pytest.mark.asyncio
    async def test_purge(self) -> None:
        ledger = SignatureLedgerStub()
        pid, other = uuid4(), uuid4()
        await ledger.add(make_signature(pid, "bob"))
        await ledger.add(make_signature(pid, "carol"))
        await ledger.remove(pid, "carol", NOW)
        await ledger.add(make_signature(other, "bob"))

        await ledger.purge(pid)

        assert await ledger.count(pid) == 0
        assert await ledger.get_history(pid) == []
        assert not await ledger.has_withdrawn(pid, "carol")
        assert await ledger.petitions_signed_by("bob") == [other]
        assert ledger.active_signature_count == 1
