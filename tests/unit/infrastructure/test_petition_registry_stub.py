"""Unit tests for PetitionRegistryStub.

Tests cover:
- insert() with duplicate detection
- get() / find() retrieval
- save() re-indexing by state
- update_field() audit entries
- remove() draft-only purge
- list_all() pagination in creation order
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import pytest

from petition_ledger.domain.errors import (
    InvalidPetitionStateError,
    PetitionAlreadyExistsError,
    PetitionNotFoundError,
)
from petition_ledger.domain.models.petition import (
    Petition,
    PetitionCategory,
    PetitionState,
)
from petition_ledger.infrastructure.stubs.petition_registry_stub import (
    PetitionRegistryStub,
)

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def make_petition(
    creator_id: str = "alice",
    category: PetitionCategory = PetitionCategory.SOCIAL,
    petition_id: UUID | None = None,
) -> Petition:
    return Petition(
        petition_id=petition_id or uuid4(),
        creator_id=creator_id,
        category=category,
        metadata_ref="ipfs://QmMeta",
        start_date=NOW,
        end_date=NOW + timedelta(days=1),
        target_signatures=10,
        created_at=NOW,
    )


class TestRegistryInsert:
    """Tests for insert() and get()."""

    @pytest.fixture
    def registry(self) -> PetitionRegistryStub:
        """Create a fresh registry stub."""
        return PetitionRegistryStub()

    @pytest.mark.asyncio
    async def test_insert_and_get(self, registry: PetitionRegistryStub) -> None:
        petition = make_petition()
        await registry.insert(petition)
        assert await registry.get(petition.petition_id) == petition
        assert await registry.count() == 1

    @pytest.mark.asyncio
    async def test_insert_duplicate(self, registry: PetitionRegistryStub) -> None:
        petition = make_petition()
        await registry.insert(petition)
        with pytest.raises(PetitionAlreadyExistsError):
            await registry.insert(petition)

    @pytest.mark.asyncio
    async def test_get_missing(self, registry: PetitionRegistryStub) -> None:
        with pytest.raises(PetitionNotFoundError):
            await registry.get(uuid4())

    @pytest.mark.asyncio
    async def test_find_missing_returns_none(
        self, registry: PetitionRegistryStub
    ) -> None:
        assert await registry.find(uuid4()) is None


class TestRegistryIndices:
    """Tests for secondary indices."""

    @pytest.fixture
    def registry(self) -> PetitionRegistryStub:
        return PetitionRegistryStub()

    @pytest.mark.asyncio
    async def test_indices_preserve_creation_order(
        self, registry: PetitionRegistryStub
    ) -> None:
        first = make_petition(creator_id="alice")
        second = make_petition(creator_id="bob")
        third = make_petition(creator_id="alice")
        for petition in (first, second, third):
            await registry.insert(petition)

        assert await registry.list_ids_by_creator("alice") == [
            first.petition_id,
            third.petition_id,
        ]
        assert await registry.list_ids_by_category(PetitionCategory.SOCIAL) == [
            first.petition_id,
            second.petition_id,
            third.petition_id,
        ]

    @pytest.mark.asyncio
    async def test_save_moves_state_index(self, registry: PetitionRegistryStub) -> None:
        first = make_petition()
        second = make_petition()
        await registry.insert(first)
        await registry.insert(second)

        await registry.save(second.with_state(PetitionState.PUBLISHED, at=NOW))
        await registry.save(first.with_state(PetitionState.PUBLISHED, at=NOW))

        assert await registry.list_ids_by_state(PetitionState.DRAFT) == []
        # Creation order, not the order petitions entered the index
        assert await registry.list_ids_by_state(PetitionState.PUBLISHED) == [
            first.petition_id,
            second.petition_id,
        ]

    @pytest.mark.asyncio
    async def test_update_category_reindexes(
        self, registry: PetitionRegistryStub
    ) -> None:
        petition = make_petition()
        await registry.insert(petition)
        await registry.update_field(
            petition.petition_id, "category", PetitionCategory.HEALTH, "alice", NOW
        )
        assert await registry.list_ids_by_category(PetitionCategory.SOCIAL) == []
        assert await registry.list_ids_by_category(PetitionCategory.HEALTH) == [
            petition.petition_id
        ]

    @pytest.mark.asyncio
    async def test_save_missing(self, registry: PetitionRegistryStub) -> None:
        with pytest.raises(PetitionNotFoundError):
            await registry.save(make_petition())


class TestRegistryUpdateLog:
    """Tests for update_field() and get_update_log()."""

    @pytest.fixture
    def registry(self) -> PetitionRegistryStub:
        return PetitionRegistryStub()

    @pytest.mark.asyncio
    async def test_update_appends_rendered_entry(
        self, registry: PetitionRegistryStub
    ) -> None:
        petition = make_petition()
        await registry.insert(petition)
        later = NOW + timedelta(hours=1)

        updated = await registry.update_field(
            petition.petition_id, "tags", ("water", "air"), "alice", later
        )

        assert updated.tags == ("water", "air")
        log = await registry.get_update_log(petition.petition_id)
        assert len(log) == 1
        assert log[0].field_name == "tags"
        assert log[0].old_value == ""
        assert log[0].new_value == "water,air"
        assert log[0].changed_by == "alice"
        assert log[0].changed_at == later

    @pytest.mark.asyncio
    async def test_update_renders_dates(self, registry: PetitionRegistryStub) -> None:
        petition = make_petition()
        await registry.insert(petition)
        new_end = NOW + timedelta(days=3)
        await registry.update_field(
            petition.petition_id, "end_date", new_end, "alice", NOW
        )
        entry = (await registry.get_update_log(petition.petition_id))[0]
        assert entry.old_value == petition.end_date.isoformat()
        assert entry.new_value == new_end.isoformat()

    @pytest.mark.asyncio
    async def test_update_rejects_immutable_field(
        self, registry: PetitionRegistryStub
    ) -> None:
        petition = make_petition()
        await registry.insert(petition)
        with pytest.raises(ValueError):
            await registry.update_field(
                petition.petition_id, "creator_id", "mallory", "alice", NOW
            )
        assert await registry.get_update_log(petition.petition_id) == []


class TestRegistryRemove:
    """Tests for remove()."""

    @pytest.fixture
    def registry(self) -> PetitionRegistryStub:
        return PetitionRegistryStub()

    @pytest.mark.asyncio
    async def test_remove_draft_purges_everything(
        self, registry: PetitionRegistryStub
    ) -> None:
        petition = make_petition()
        await registry.insert(petition)
        await registry.update_field(petition.petition_id, "title", "T", "alice", NOW)

        removed = await registry.remove(petition.petition_id)

        assert removed.petition_id == petition.petition_id
        assert await registry.find(petition.petition_id) is None
        assert await registry.get_update_log(petition.petition_id) == []
        assert registry.index_snapshot() == {"creator": {}, "category": {}, "state": {}}

    @pytest.mark.asyncio
    async def test_remove_published_rejected(
        self, registry: PetitionRegistryStub
    ) -> None:
        petition = make_petition()
        await registry.insert(petition)
        await registry.save(petition.with_state(PetitionState.PUBLISHED, at=NOW))
        with pytest.raises(InvalidPetitionStateError):
            await registry.remove(petition.petition_id)


class TestRegistryPagination:
    """Tests for list_all()."""

    @pytest.mark.asyncio
    async def test_pages_in_creation_order(self) -> None:
        registry = PetitionRegistryStub()
        petitions = [make_petition() for _ in range(5)]
        for petition in petitions:
            await registry.insert(petition)

        page = await registry.list_all(offset=1, limit=2)
        assert [p.petition_id for p in page] == [
            petitions[1].petition_id,
            petitions[2].petition_id,
        ]
        assert await registry.list_all(offset=10, limit=2) == []
        assert await registry.list_all(offset=-1, limit=2) == []

    @pytest.mark.asyncio
    async def test_clear(self) -> None:
        registry = PetitionRegistryStub()
        await registry.insert(make_petition())
        registry.clear()
        assert await registry.count() == 0
