"""Integration tests for end-to-end petition lifecycle scenarios.

These tests drive the controller and query service over the in-memory
stores and check the ledger invariants after every mutation:
- signature_count equals the number of active signers
- no signer holds two active signatures on one petition
- milestone thresholds are unique and drawn from the four thresholds
- terminal petitions reject every mutating operation
"""

import asyncio
from datetime import datetime, timedelta
from uuid import UUID

import pytest

from petition_ledger.application.services.lifecycle_controller import (
    LifecycleController,
)
from petition_ledger.application.services.query_service import QueryService
from petition_ledger.domain.errors import (
    DuplicateSignatureError,
    InvalidInputError,
    InvalidStateError,
    LedgerOperationError,
    TemporalViolationError,
)
from petition_ledger.domain.events.petition import (
    MILESTONE_REACHED_EVENT_TYPE,
    PETITION_SIGNED_EVENT_TYPE,
)
from petition_ledger.domain.models.milestone import milestone_thresholds
from petition_ledger.domain.models.petition import PetitionCategory, PetitionState
from petition_ledger.infrastructure.stubs import (
    PetitionEventEmitterStub,
    PetitionRegistryStub,
    SignatureLedgerStub,
)

pytestmark = pytest.mark.integration


async def assert_invariants(
    petition_id: UUID,
    registry: PetitionRegistryStub,
    ledger: SignatureLedgerStub,
    query_service: QueryService,
) -> None:
    petition = await registry.get(petition_id)
    signers = await ledger.list_signers(petition_id)
    assert petition.signature_count == len(signers)
    assert len(signers) == len(set(signers))
    thresholds = [m.threshold for m in await query_service.get_milestones(petition_id)]
    assert len(thresholds) == len(set(thresholds))
    allowed = {t.threshold for t in milestone_thresholds(petition.target_signatures)}
    assert set(thresholds) <= allowed


async def create_petition(
    controller: LifecycleController, now: datetime, target: int
) -> UUID:
    petition = await controller.create(
        creator_id="alice",
        metadata_ref="ipfs://QmScenario",
        category=PetitionCategory.ENVIRONMENTAL,
        start_date=now,
        end_date=now + timedelta(seconds=86_400),
        target_signatures=target,
        now=now,
    )
    return petition.petition_id


class TestTargetOfFourScenario:
    """Four signers complete a petition with target=4."""

    @pytest.mark.asyncio
    async def test_full_run(
        self,
        controller: LifecycleController,
        query_service: QueryService,
        registry: PetitionRegistryStub,
        signature_ledger: SignatureLedgerStub,
        event_emitter: PetitionEventEmitterStub,
        now: datetime,
    ) -> None:
        petition_id = await create_petition(controller, now, target=4)

        first = await controller.sign(petition_id, "s1", now)
        assert first.milestone is not None
        assert first.milestone.threshold == 1
        assert first.milestone.percent == 25
        await assert_invariants(petition_id, registry, signature_ledger, query_service)

        for signer in ("s2", "s3"):
            await controller.sign(petition_id, signer, now)
            await assert_invariants(
                petition_id, registry, signature_ledger, query_service
            )

        last = await controller.sign(petition_id, "s4", now)
        assert last.completed is True
        assert last.milestone is not None
        assert last.milestone.threshold == 4
        await assert_invariants(petition_id, registry, signature_ledger, query_service)

        petition = await query_service.get_petition(petition_id)
        assert petition.state == PetitionState.COMPLETED
        thresholds = [m.threshold for m in await query_service.get_milestones(petition_id)]
        assert {1, 4} <= set(thresholds)
        assert (await query_service.get_user_stats("alice")).reputation_score == 110

        with pytest.raises(InvalidStateError):
            await controller.sign(petition_id, "s5", now)

        assert len(event_emitter.of_type(PETITION_SIGNED_EVENT_TYPE)) == 4
        assert len(event_emitter.of_type(MILESTONE_REACHED_EVENT_TYPE)) == len(
            thresholds
        )


class TestWithdrawalWindowScenario:
    """Withdrawal relative to the signature's own timestamp."""

    @pytest.mark.asyncio
    async def test_after_25_hours_rejected(
        self,
        controller: LifecycleController,
        query_service: QueryService,
        now: datetime,
    ) -> None:
        petition_id = await create_petition(controller, now, target=10)
        await controller.sign(petition_id, "bob", now)

        with pytest.raises(TemporalViolationError):
            await controller.withdraw(petition_id, "bob", now + timedelta(hours=25))

        assert await query_service.has_signed(petition_id, "bob")

    @pytest.mark.asyncio
    async def test_after_23_hours_accepted(
        self,
        controller: LifecycleController,
        query_service: QueryService,
        registry: PetitionRegistryStub,
        signature_ledger: SignatureLedgerStub,
        now: datetime,
    ) -> None:
        petition_id = await create_petition(controller, now, target=10)
        await controller.sign(petition_id, "bob", now)
        await controller.sign(petition_id, "carol", now)

        result = await controller.withdraw(
            petition_id, "bob", now + timedelta(hours=23)
        )

        assert result.signature_count == 1
        assert not await query_service.has_signed(petition_id, "bob")
        history = await query_service.get_signature_history(petition_id)
        assert len(history) == 3
        await assert_invariants(petition_id, registry, signature_ledger, query_service)


class TestExtendEndDateScenario:
    """Extending a published petition's end date."""

    @pytest.mark.asyncio
    async def test_extension_rules(
        self,
        controller: LifecycleController,
        query_service: QueryService,
        now: datetime,
    ) -> None:
        petition_id = await create_petition(controller, now, target=10)
        before = await query_service.get_petition(petition_id)

        with pytest.raises(InvalidInputError):
            await controller.extend_end_date(
                petition_id, "alice", before.end_date, now
            )

        new_end = before.end_date + timedelta(days=2)
        await controller.extend_end_date(petition_id, "alice", new_end, now)
        after = await query_service.get_petition(petition_id)

        assert after.end_date == new_end
        assert {**after.to_dict(), "end_date": None} == {
            **before.to_dict(),
            "end_date": None,
        }

        # Signing is now possible after the original end date
        await controller.sign(petition_id, "bob", before.end_date + timedelta(hours=1))


class TestTerminalMonotonicity:
    """Terminal petitions reject every mutating operation."""

    @pytest.mark.asyncio
    async def test_cancelled_rejects_everything(
        self,
        controller: LifecycleController,
        query_service: QueryService,
        now: datetime,
    ) -> None:
        petition_id = await create_petition(controller, now, target=10)
        await controller.sign(petition_id, "bob", now)
        await controller.cancel(petition_id, "alice", now)

        operations = [
            controller.sign(petition_id, "carol", now),
            controller.withdraw(petition_id, "bob", now),
            controller.cancel(petition_id, "alice", now),
            controller.publish(petition_id, "alice", now),
            controller.extend_end_date(
                petition_id, "alice", now + timedelta(days=5), now
            ),
            controller.update_field(petition_id, "alice", "title", "x", now),
            controller.delete_draft(petition_id, "alice"),
        ]
        for operation in operations:
            with pytest.raises(InvalidStateError):
                await operation

        petition = await query_service.get_petition(petition_id)
        assert petition.state == PetitionState.CANCELLED
        assert petition.signature_count == 1


class TestResignCycle:
    """sign -> withdraw restores count and membership."""

    @pytest.mark.asyncio
    async def test_cycle(
        self,
        controller: LifecycleController,
        query_service: QueryService,
        registry: PetitionRegistryStub,
        signature_ledger: SignatureLedgerStub,
        now: datetime,
    ) -> None:
        petition_id = await create_petition(controller, now, target=10)
        await controller.sign(petition_id, "carol", now)
        before = await query_service.compute_stats(petition_id, now)

        await controller.sign(petition_id, "bob", now)
        await controller.withdraw(petition_id, "bob", now)

        after = await query_service.compute_stats(petition_id, now)
        assert after.count == before.count
        assert sorted(await signature_ledger.list_signers(petition_id)) == ["carol"]
        with pytest.raises(DuplicateSignatureError):
            await controller.sign(petition_id, "bob", now)
        await assert_invariants(petition_id, registry, signature_ledger, query_service)


class TestConcurrentSigning:
    """Concurrent writers on one petition are serialized."""

    @pytest.mark.asyncio
    async def test_parallel_signers(
        self,
        controller: LifecycleController,
        query_service: QueryService,
        registry: PetitionRegistryStub,
        signature_ledger: SignatureLedgerStub,
        now: datetime,
    ) -> None:
        petition_id = await create_petition(controller, now, target=20)
        signers = [f"signer-{i}" for i in range(20)]

        results = await asyncio.gather(
            *(controller.sign(petition_id, s, now) for s in signers)
        )

        assert sorted(r.signature_count for r in results) == list(range(1, 21))
        assert sum(r.completed for r in results) == 1
        petition = await query_service.get_petition(petition_id)
        assert petition.state == PetitionState.COMPLETED
        await assert_invariants(petition_id, registry, signature_ledger, query_service)
        thresholds = [m.threshold for m in await query_service.get_milestones(petition_id)]
        assert thresholds == [5, 10, 15, 20]

    @pytest.mark.asyncio
    async def test_parallel_duplicates(
        self,
        controller: LifecycleController,
        signature_ledger: SignatureLedgerStub,
        now: datetime,
    ) -> None:
        petition_id = await create_petition(controller, now, target=20)

        results = await asyncio.gather(
            *(controller.sign(petition_id, "bob", now) for _ in range(5)),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, BaseException)]
        failures = [r for r in results if isinstance(r, LedgerOperationError)]
        assert len(successes) == 1
        assert len(failures) == 4
        assert all(isinstance(f, DuplicateSignatureError) for f in failures)
        assert await signature_ledger.count(petition_id) == 1


class TestDraftLifecycle:
    """Draft creation, editing, publishing and deletion."""

    @pytest.mark.asyncio
    async def test_draft_to_published(
        self,
        controller: LifecycleController,
        query_service: QueryService,
        now: datetime,
    ) -> None:
        draft = await controller.create(
            creator_id="alice",
            metadata_ref="ipfs://QmDraft",
            category=PetitionCategory.HUMAN_RIGHTS,
            start_date=now,
            end_date=now + timedelta(days=1),
            target_signatures=5,
            now=now,
            as_draft=True,
        )
        await controller.update_field(
            draft.petition_id, "alice", "tags", ["rights", "speech"], now
        )
        await controller.update_field(
            draft.petition_id, "alice", "start_date", now + timedelta(hours=1), now
        )
        await controller.publish(draft.petition_id, "alice", now)

        published = await query_service.get_petition(draft.petition_id)
        assert published.state == PetitionState.PUBLISHED
        assert published.tags == ("rights", "speech")
        assert published.start_date == now + timedelta(hours=1)
        log = await query_service.get_update_log(draft.petition_id)
        assert [e.field_name for e in log] == ["tags", "start_date"]

        with pytest.raises(TemporalViolationError):
            await controller.sign(draft.petition_id, "bob", now)

    @pytest.mark.asyncio
    async def test_deleted_draft_disappears_from_listings(
        self,
        controller: LifecycleController,
        query_service: QueryService,
        now: datetime,
    ) -> None:
        draft = await controller.create(
            creator_id="alice",
            metadata_ref="ipfs://QmDraft",
            category=PetitionCategory.ANIMAL_RIGHTS,
            start_date=now,
            end_date=now + timedelta(days=1),
            target_signatures=5,
            now=now,
            as_draft=True,
        )
        await controller.delete_draft(draft.petition_id, "alice")

        assert await query_service.list_by_creator("alice") == []
        assert await query_service.list_by_state(PetitionState.DRAFT) == []
        assert (await query_service.paginate()).total == 0
