"""User stats aggregator service.

Pure bookkeeping triggered by the lifecycle controller:
- creation: +1 petitions_created, +creation_reputation to the creator
- signing: +1 petitions_signed, +signing_reputation to the signer
- withdrawal: -1 petitions_signed (floored at 0) and
  -withdrawal_reputation_penalty (floored at 0; default 0, no clawback)
- auto-completion: +completion_bonus to the creator, once per petition

Amounts come from PetitionLedgerConfig.
"""

from __future__ import annotations

from structlog import get_logger

from petition_ledger.application.ports.user_stats_repository import (
    UserStatsRepositoryProtocol,
)
from petition_ledger.config.ledger_config import (
    DEFAULT_PETITION_LEDGER_CONFIG,
    PetitionLedgerConfig,
)
from petition_ledger.domain.models.user_stats import UserStats

logger = get_logger(__name__)


class UserStatsAggregator:
    """Maintains per-identity counters."""

    def __init__(
        self,
        stats_repo: UserStatsRepositoryProtocol,
        config: PetitionLedgerConfig = DEFAULT_PETITION_LEDGER_CONFIG,
    ) -> None:
        """Initialize the aggregator.

        Args:
            stats_repo: Repository for per-identity counters.
            config: Reputation amounts.
        """
        self._stats_repo = stats_repo
        self._config = config

    async def record_petition_created(self, creator_id: str) -> UserStats:
        stats = (await self._stats_repo.get(creator_id)).with_created(
            self._config.creation_reputation
        )
        await self._stats_repo.save(stats)
        logger.debug(
            "user_stats_petition_created",
            identity=creator_id,
            reputation_score=stats.reputation_score,
        )
        return stats

    async def record_signature(self, signer_id: str) -> UserStats:
        stats = (await self._stats_repo.get(signer_id)).with_signed(
            self._config.signing_reputation
        )
        await self._stats_repo.save(stats)
        return stats

    async def record_withdrawal(self, signer_id: str) -> UserStats:
        stats = (await self._stats_repo.get(signer_id)).with_withdrawn(
            self._config.withdrawal_reputation_penalty
        )
        await self._stats_repo.save(stats)
        return stats

    async def record_completion(self, creator_id: str) -> UserStats:
        """Award the completion bonus to a creator."""
        stats = (await self._stats_repo.get(creator_id)).with_bonus(
            self._config.completion_bonus
        )
        await self._stats_repo.save(stats)
        logger.info(
            "user_stats_completion_bonus",
            identity=creator_id,
            bonus=self._config.completion_bonus,
            reputation_score=stats.reputation_score,
        )
        return stats

    async def get_stats(self, identity: str) -> UserStats:
        return await self._stats_repo.get(identity)
