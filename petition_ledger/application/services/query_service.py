"""Query service for petition ledger reads.

Read-only access to petitions, signatures, milestones, stats and audit
logs. Reads take no locks: stores hand out immutable snapshots, so a
reader never observes a half-applied write.

Projections (stats, pages) are computed live on every call and never
cached.
"""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from structlog import get_logger

from petition_ledger.application.dtos.petition import (
    PetitionPage,
    PetitionStats,
    PetitionSummary,
)
from petition_ledger.application.ports.milestone_repository import (
    MilestoneRepositoryProtocol,
)
from petition_ledger.application.ports.petition_registry import (
    PetitionRegistryProtocol,
)
from petition_ledger.application.ports.signature_ledger import (
    SignatureLedgerProtocol,
)
from petition_ledger.application.ports.user_stats_repository import (
    UserStatsRepositoryProtocol,
)
from petition_ledger.domain.errors import InvalidPetitionInputError
from petition_ledger.domain.models.milestone import Milestone
from petition_ledger.domain.models.petition import (
    Petition,
    PetitionCategory,
    PetitionState,
)
from petition_ledger.domain.models.signature import Signature, SignatureLogEntry
from petition_ledger.domain.models.update_log import UpdateLogEntry
from petition_ledger.domain.models.user_stats import UserStats

logger = get_logger(__name__)


def _validate_limit(limit: int) -> None:
    if limit < 1:
        raise InvalidPetitionInputError("limit", f"must be positive, got {limit}")


class QueryService:
    """Read-side facade over the ledger stores."""

    def __init__(
        self,
        registry: PetitionRegistryProtocol,
        ledger: SignatureLedgerProtocol,
        milestone_repo: MilestoneRepositoryProtocol,
        stats_repo: UserStatsRepositoryProtocol,
    ) -> None:
        self._registry = registry
        self._ledger = ledger
        self._milestone_repo = milestone_repo
        self._stats_repo = stats_repo

    async def _resolve(self, petition_ids: list[UUID]) -> list[Petition]:
        petitions = []
        for petition_id in petition_ids:
            petition = await self._registry.find(petition_id)
            if petition is not None:
                petitions.append(petition)
        return petitions

    async def get_petition(self, petition_id: UUID) -> Petition:
        """Get a petition.

        Raises:
            PetitionNotFoundError: Unknown petition.
        """
        return await self._registry.get(petition_id)

    async def get_signatures(
        self,
        petition_id: UUID,
        offset: int = 0,
        limit: int = 100,
    ) -> list[Signature]:
        """Get active signatures ordered by signing time.

        Raises:
            PetitionNotFoundError: Unknown petition.
            InvalidPetitionInputError: Non-positive limit.
        """
        _validate_limit(limit)
        await self._registry.get(petition_id)
        if offset < 0:
            return []
        return await self._ledger.list_signatures(petition_id, offset, limit)

    async def get_signature_history(self, petition_id: UUID) -> list[SignatureLogEntry]:
        """Get every sign and withdraw action, oldest first.

        Raises:
            PetitionNotFoundError: Unknown petition.
        """
        await self._registry.get(petition_id)
        return await self._ledger.get_history(petition_id)

    async def has_signed(self, petition_id: UUID, signer_id: str) -> bool:
        return await self._ledger.has_signed(petition_id, signer_id)

    async def get_milestones(self, petition_id: UUID) -> list[Milestone]:
        """Get recorded milestones in the order they were reached.

        Raises:
            PetitionNotFoundError: Unknown petition.
        """
        await self._registry.get(petition_id)
        return await self._milestone_repo.list_for_petition(petition_id)

    async def get_user_stats(self, identity: str) -> UserStats:
        """Get counters for an identity (zeroed if never seen)."""
        return await self._stats_repo.get(identity)

    async def get_update_log(self, petition_id: UUID) -> list[UpdateLogEntry]:
        """Get the field edit audit trail.

        Raises:
            PetitionNotFoundError: Unknown petition.
        """
        await self._registry.get(petition_id)
        return await self._registry.get_update_log(petition_id)

    async def list_by_category(self, category: PetitionCategory) -> list[Petition]:
        return await self._resolve(await self._registry.list_ids_by_category(category))

    async def list_by_state(self, state: PetitionState) -> list[Petition]:
        return await self._resolve(await self._registry.list_ids_by_state(state))

    async def list_by_creator(self, creator_id: str) -> list[Petition]:
        return await self._resolve(await self._registry.list_ids_by_creator(creator_id))

    async def list_signed_by(self, signer_id: str) -> list[Petition]:
        """Petitions where ``signer_id`` currently holds an active signature."""
        return await self._resolve(await self._ledger.petitions_signed_by(signer_id))

    async def paginate(self, offset: int = 0, limit: int = 20) -> PetitionPage:
        """Get one page of petitions in creation order.

        Offsets outside the registry (past the end, or negative) yield an
        empty page.

        Raises:
            InvalidPetitionInputError: Non-positive limit.
        """
        try:
            _validate_limit(limit)
        except InvalidPetitionInputError:
            logger.warning("petition_page_rejected", offset=offset, limit=limit)
            raise

        petitions = []
        if offset >= 0:
            petitions = await self._registry.list_all(offset, limit)
        return PetitionPage(
            items=[PetitionSummary.from_petition(p) for p in petitions],
            total=await self._registry.count(),
            offset=offset,
            limit=limit,
        )

    async def count_petitions(self) -> int:
        return await self._registry.count()

    async def compute_stats(self, petition_id: UUID, now: datetime) -> PetitionStats:
        """Compute live progress for a petition at ``now``.

        The count is read from the ledger rather than the stored counter.

        Raises:
            PetitionNotFoundError: Unknown petition.
        """
        petition = await self._registry.get(petition_id)
        count = await self._ledger.count(petition_id)
        return PetitionStats(
            petition_id=petition_id,
            state=petition.state.value,
            count=count,
            target=petition.target_signatures,
            progress_percent=min(100, count * 100 // petition.target_signatures),
            has_started=petition.has_started(now),
            has_ended=petition.has_ended(now),
            is_signable=petition.is_signable(now),
        )
