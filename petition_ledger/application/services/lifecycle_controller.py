"""Lifecycle controller service.

The controller is the only component with write access to petition
state. Every mutating request follows the same sequence:

1. Validate inputs (no I/O)
2. Acquire the petition's exclusive lock
3. Load the petition record
4. Evaluate every guard (authorization, lifecycle state, time windows,
   uniqueness)
5. Apply the registry/ledger mutation
6. Trigger the milestone tracker and the user stats aggregator
7. Emit events (the mutation is already committed at this point)

A rejected request raises before step 5, so it leaves no partial effect.

Update policy:
    Content fields (title, description, image_ref, metadata_ref, category,
    tags) are editable by the creator while DRAFT or PUBLISHED. Schedule
    fields (start_date, end_date, target_signatures) are editable only
    while DRAFT; after publishing, end_date changes only through
    extend_end_date. Terminal petitions are frozen. Every edit is audited.

Time:
    Every time-dependent guard compares against the caller-supplied
    ``now``. The controller never reads a clock.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from typing import Any
from uuid import UUID

from structlog import get_logger

from petition_ledger.application.dtos.petition import SignResult, WithdrawResult
from petition_ledger.application.ports.petition_event_emitter import (
    PetitionEventEmitterProtocol,
)
from petition_ledger.application.ports.petition_id_generator import (
    PetitionIdGeneratorProtocol,
)
from petition_ledger.application.ports.petition_registry import (
    PetitionRegistryProtocol,
)
from petition_ledger.application.ports.signature_ledger import (
    SignatureLedgerProtocol,
)
from petition_ledger.application.services.milestone_tracker import MilestoneTracker
from petition_ledger.application.services.petition_locks import PetitionLockRegistry
from petition_ledger.application.services.user_stats_aggregator import (
    UserStatsAggregator,
)
from petition_ledger.config.ledger_config import (
    DEFAULT_PETITION_LEDGER_CONFIG,
    PetitionLedgerConfig,
)
from petition_ledger.domain.errors import (
    DuplicateSignatureError,
    InvalidPetitionInputError,
    InvalidPetitionStateError,
    SelfSignatureError,
    SignatureNotFoundError,
    SigningWindowClosedError,
    UnauthorizedPetitionActionError,
    WithdrawalWindowExpiredError,
)
from petition_ledger.domain.events.petition import (
    MilestoneReachedEvent,
    PetitionCreatedEvent,
    PetitionDeletedEvent,
    PetitionLedgerEvent,
    PetitionPublishedEvent,
    PetitionSignedEvent,
    PetitionStatusChangedEvent,
    PetitionUpdatedEvent,
    SignatureWithdrawnEvent,
)
from petition_ledger.domain.models.petition import (
    MUTABLE_FIELDS,
    SCHEDULE_FIELDS,
    Petition,
    PetitionCategory,
    PetitionState,
)
from petition_ledger.domain.models.signature import Signature
from petition_ledger.infrastructure.observability.correlation import (
    correlated,
    get_correlation_id,
)

logger = get_logger(__name__)


def _require_aware(field_name: str, value: Any) -> datetime:
    if not isinstance(value, datetime):
        raise InvalidPetitionInputError(field_name, "must be a datetime")
    if value.tzinfo is None:
        raise InvalidPetitionInputError(field_name, "must be timezone-aware")
    return value


def _require_identity(field_name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidPetitionInputError(field_name, "cannot be empty")
    return value


def _require_text(field_name: str, value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidPetitionInputError(field_name, "cannot be empty")
    return value


def _coerce_category(value: Any) -> PetitionCategory:
    if isinstance(value, PetitionCategory):
        return value
    try:
        return PetitionCategory(value)
    except ValueError:
        raise InvalidPetitionInputError(
            "category", f"unknown category {value!r}"
        ) from None


def _coerce_tags(value: Iterable[str] | None, max_tags: int) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        raise InvalidPetitionInputError("tags", "must be a sequence of strings")
    tags = tuple(value)
    if len(tags) > max_tags:
        raise InvalidPetitionInputError(
            "tags", f"at most {max_tags} tags allowed, got {len(tags)}"
        )
    for tag in tags:
        if not isinstance(tag, str) or not tag.strip():
            raise InvalidPetitionInputError("tags", "tags cannot be empty")
    return tags


def _require_target(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidPetitionInputError(
            "target_signatures", f"must be a positive integer, got {value!r}"
        )
    return value


def _validate_schedule(
    start_date: datetime,
    end_date: datetime,
    target_signatures: Any,
    now: datetime,
) -> None:
    """Validate a schedule about to become public."""
    if not start_date < end_date:
        raise InvalidPetitionInputError(
            "end_date", "end date must be after start date"
        )
    if not end_date > now:
        raise InvalidPetitionInputError("end_date", "end date must be in the future")
    _require_target(target_signatures)


class LifecycleController:
    """Orchestrates every mutating petition operation.

    Example:
        >>> controller = LifecycleController(
        ...     registry=registry,
        ...     ledger=ledger,
        ...     milestone_tracker=milestone_tracker,
        ...     stats_aggregator=stats_aggregator,
        ...     id_generator=UuidPetitionIdGenerator(),
        ... )
        >>> petition = await controller.create(
        ...     creator_id="alice",
        ...     metadata_ref="ipfs://Qm...",
        ...     category=PetitionCategory.ENVIRONMENTAL,
        ...     start_date=now,
        ...     end_date=now + timedelta(days=1),
        ...     target_signatures=100,
        ...     now=now,
        ... )
        >>> result = await controller.sign(petition.petition_id, "bob", now)
    """

    def __init__(
        self,
        registry: PetitionRegistryProtocol,
        ledger: SignatureLedgerProtocol,
        milestone_tracker: MilestoneTracker,
        stats_aggregator: UserStatsAggregator,
        id_generator: PetitionIdGeneratorProtocol,
        config: PetitionLedgerConfig = DEFAULT_PETITION_LEDGER_CONFIG,
        event_emitter: PetitionEventEmitterProtocol | None = None,
        locks: PetitionLockRegistry | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            registry: Petition storage.
            ledger: Signature storage.
            milestone_tracker: Milestone detection and recording.
            stats_aggregator: Per-identity counters.
            id_generator: Allocator for petition and signature IDs.
            config: Ledger rules.
            event_emitter: Optional event sink. If not provided, events
                are not emitted.
            locks: Optional lock registry, shared when several controllers
                write to the same stores.
        """
        self._registry = registry
        self._ledger = ledger
        self._milestone_tracker = milestone_tracker
        self._stats_aggregator = stats_aggregator
        self._id_generator = id_generator
        self._config = config
        self._event_emitter = event_emitter
        self._locks = locks if locks is not None else PetitionLockRegistry()

    @property
    def config(self) -> PetitionLedgerConfig:
        return self._config

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _log_operation(self, operation: str, **context: object) -> Any:
        """Bind an operation-scoped logger carrying the correlation ID."""
        return logger.bind(
            operation=operation,
            correlation_id=get_correlation_id(),
            **context,
        )

    async def _emit(self, event: PetitionLedgerEvent, log: Any) -> None:
        """Emit an event after the mutation is committed.

        An emitter failure does not undo the committed mutation; it is
        logged with the event type so the event can be re-derived.
        """
        if self._event_emitter is None:
            return
        try:
            await self._event_emitter.emit(event)
        except Exception as e:
            log.error(
                "petition_event_emission_failed",
                event_type=event.event_type,
                error=str(e),
                error_type=type(e).__name__,
            )

    @staticmethod
    def _require_creator(
        petition: Petition, caller_id: str, action: str, log: Any
    ) -> None:
        if petition.creator_id != caller_id:
            log.warning("petition_action_unauthorized", action=action)
            raise UnauthorizedPetitionActionError(
                petition.petition_id, caller_id, action
            )

    @staticmethod
    def _require_state(
        petition: Petition, expected: PetitionState, operation: str, log: Any
    ) -> None:
        if petition.state is not expected:
            log.warning(
                "petition_invalid_state",
                operation=operation,
                current_state=petition.state.value,
            )
            raise InvalidPetitionStateError(
                petition.petition_id, petition.state, operation
            )

    # ------------------------------------------------------------------
    # create / publish / cancel / delete
    # ------------------------------------------------------------------

    @correlated
    async def create(
        self,
        creator_id: str,
        metadata_ref: str,
        category: PetitionCategory | str,
        start_date: datetime,
        end_date: datetime,
        target_signatures: int,
        now: datetime,
        tags: Iterable[str] | None = None,
        title: str | None = None,
        description: str | None = None,
        image_ref: str | None = None,
        as_draft: bool = False,
    ) -> Petition:
        """Create a petition, either as a draft or published directly.

        Args:
            creator_id: Authenticated identity of the creator.
            metadata_ref: Opaque metadata content address (non-empty).
            category: Petition category.
            start_date: Signing window start (inclusive).
            end_date: Signing window end (inclusive).
            target_signatures: Signature target (positive).
            now: Caller-supplied current time.
            tags: Up to ``max_tags`` non-empty tags.
            title: Optional title (non-empty when given).
            description: Optional description (non-empty when given).
            image_ref: Optional image reference.
            as_draft: Create in DRAFT instead of publishing directly.

        Returns:
            The stored petition.

        Raises:
            InvalidPetitionInputError: Any input fails validation.
            PetitionAlreadyExistsError: The allocated ID collided.
        """
        _require_identity("creator_id", creator_id)
        _require_aware("now", now)
        _require_text("metadata_ref", metadata_ref)
        petition_category = _coerce_category(category)
        petition_tags = _coerce_tags(tags, self._config.max_tags)
        _require_aware("start_date", start_date)
        _require_aware("end_date", end_date)
        _require_target(target_signatures)
        if title is not None:
            _require_text("title", title)
        if description is not None:
            _require_text("description", description)
        if not as_draft:
            _validate_schedule(start_date, end_date, target_signatures, now)

        petition_id = self._id_generator.next_id()
        log = self._log_operation(
            "create", petition_id=str(petition_id), creator_id=creator_id
        )

        async with self._locks.hold(petition_id):
            petition = Petition(
                petition_id=petition_id,
                creator_id=creator_id,
                category=petition_category,
                metadata_ref=metadata_ref,
                start_date=start_date,
                end_date=end_date,
                target_signatures=target_signatures,
                created_at=now,
                state=PetitionState.DRAFT if as_draft else PetitionState.PUBLISHED,
                tags=petition_tags,
                published_at=None if as_draft else now,
                title=title,
                description=description,
                image_ref=image_ref,
            )
            await self._registry.insert(petition)
            await self._stats_aggregator.record_petition_created(creator_id)

        log.info(
            "petition_created",
            state=petition.state.value,
            category=petition_category.value,
            target_signatures=target_signatures,
        )
        await self._emit(
            PetitionCreatedEvent(
                petition_id=petition_id,
                creator_id=creator_id,
                category=petition_category.value,
                state=petition.state.value,
                created_at=now,
            ),
            log,
        )
        return petition

    @correlated
    async def publish(
        self,
        petition_id: UUID,
        caller_id: str,
        now: datetime,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        target_signatures: int | None = None,
    ) -> Petition:
        """Publish a draft, freezing its schedule.

        Optional arguments override the draft's schedule before it is
        validated and frozen. Overrides are recorded in the update log.

        Raises:
            PetitionNotFoundError: Unknown petition.
            UnauthorizedPetitionActionError: Caller is not the creator.
            InvalidPetitionStateError: Petition is not a draft.
            InvalidPetitionInputError: Schedule fails validation.
        """
        _require_aware("now", now)
        if start_date is not None:
            _require_aware("start_date", start_date)
        if end_date is not None:
            _require_aware("end_date", end_date)
        if target_signatures is not None:
            _require_target(target_signatures)

        log = self._log_operation(
            "publish", petition_id=str(petition_id), caller_id=caller_id
        )

        async with self._locks.hold(petition_id):
            petition = await self._registry.get(petition_id)
            self._require_creator(petition, caller_id, "publish", log)
            self._require_state(petition, PetitionState.DRAFT, "publish", log)

            overrides: dict[str, Any] = {
                "start_date": start_date,
                "end_date": end_date,
                "target_signatures": target_signatures,
            }
            effective = {
                name: value if value is not None else getattr(petition, name)
                for name, value in overrides.items()
            }
            try:
                _validate_schedule(
                    effective["start_date"],
                    effective["end_date"],
                    effective["target_signatures"],
                    now,
                )
            except InvalidPetitionInputError as e:
                log.warning("petition_publish_rejected", reason=str(e))
                raise

            current = petition
            for name, value in overrides.items():
                if value is not None and value != getattr(current, name):
                    current = await self._registry.update_field(
                        petition_id, name, value, caller_id, now
                    )
            published = current.with_state(PetitionState.PUBLISHED, at=now)
            await self._registry.save(published)

        log.info(
            "petition_published",
            start_date=published.start_date.isoformat(),
            end_date=published.end_date.isoformat(),
            target_signatures=published.target_signatures,
        )
        await self._emit(
            PetitionPublishedEvent(
                petition_id=petition_id,
                published_at=now,
                start_date=published.start_date,
                end_date=published.end_date,
                target_signatures=published.target_signatures,
            ),
            log,
        )
        return published

    @correlated
    async def cancel(
        self,
        petition_id: UUID,
        caller_id: str,
        now: datetime,
    ) -> Petition:
        """Cancel a published petition.

        Raises:
            PetitionNotFoundError: Unknown petition.
            UnauthorizedPetitionActionError: Caller is not the creator.
            InvalidPetitionStateError: Petition is not PUBLISHED.
        """
        _require_aware("now", now)
        log = self._log_operation(
            "cancel", petition_id=str(petition_id), caller_id=caller_id
        )

        async with self._locks.hold(petition_id):
            petition = await self._registry.get(petition_id)
            self._require_creator(petition, caller_id, "cancel", log)
            self._require_state(petition, PetitionState.PUBLISHED, "cancel", log)

            cancelled = petition.with_state(PetitionState.CANCELLED)
            await self._registry.save(cancelled)

        log.info("petition_cancelled", signature_count=cancelled.signature_count)
        await self._emit(
            PetitionStatusChangedEvent(
                petition_id=petition_id,
                previous_state=PetitionState.PUBLISHED.value,
                new_state=PetitionState.CANCELLED.value,
                changed_at=now,
                triggered_by=caller_id,
            ),
            log,
        )
        return cancelled

    @correlated
    async def delete_draft(self, petition_id: UUID, caller_id: str) -> Petition:
        """Delete a draft and purge every record kept for it.

        Registry record, update log, ledger entries and milestones are
        removed together. Creator stats are not rewound.

        Raises:
            PetitionNotFoundError: Unknown petition.
            UnauthorizedPetitionActionError: Caller is not the creator.
            InvalidPetitionStateError: Petition is not a draft.
        """
        log = self._log_operation(
            "delete", petition_id=str(petition_id), caller_id=caller_id
        )

        async with self._locks.hold(petition_id):
            petition = await self._registry.get(petition_id)
            self._require_creator(petition, caller_id, "delete", log)
            self._require_state(petition, PetitionState.DRAFT, "delete", log)

            removed = await self._registry.remove(petition_id)
            await self._ledger.purge(petition_id)
            await self._milestone_tracker.purge(petition_id)

        log.info("petition_draft_deleted")
        await self._emit(
            PetitionDeletedEvent(petition_id=petition_id, deleted_by=caller_id), log
        )
        return removed

    # ------------------------------------------------------------------
    # edits
    # ------------------------------------------------------------------

    def _validate_field_value(
        self, field_name: str, value: Any, now: datetime
    ) -> Any:
        """Validate and normalize a value for ``field_name``."""
        if field_name in ("title", "description", "metadata_ref"):
            return _require_text(field_name, value)
        if field_name == "image_ref":
            if not isinstance(value, str):
                raise InvalidPetitionInputError(field_name, "must be a string")
            return value
        if field_name == "category":
            return _coerce_category(value)
        if field_name == "tags":
            return _coerce_tags(value, self._config.max_tags)
        if field_name == "target_signatures":
            return _require_target(value)
        if field_name == "start_date":
            return _require_aware(field_name, value)
        if field_name == "end_date":
            end_date = _require_aware(field_name, value)
            if not end_date > now:
                raise InvalidPetitionInputError(
                    field_name, "end date must be in the future"
                )
            return end_date
        raise InvalidPetitionInputError(field_name, "field is not editable")

    @correlated
    async def update_field(
        self,
        petition_id: UUID,
        caller_id: str,
        field_name: str,
        value: Any,
        now: datetime,
    ) -> Petition:
        """Edit one field of a petition and append an audit entry.

        Raises:
            PetitionNotFoundError: Unknown petition.
            UnauthorizedPetitionActionError: Caller is not the creator.
            InvalidPetitionStateError: Petition is terminal, or a schedule
                field is edited after publishing.
            InvalidPetitionInputError: Unknown field or invalid value.
        """
        _require_aware("now", now)
        if field_name not in MUTABLE_FIELDS:
            raise InvalidPetitionInputError(field_name, "field is not editable")
        normalized = self._validate_field_value(field_name, value, now)

        log = self._log_operation(
            "update_field",
            petition_id=str(petition_id),
            caller_id=caller_id,
            field_name=field_name,
        )

        async with self._locks.hold(petition_id):
            petition = await self._registry.get(petition_id)
            self._require_creator(petition, caller_id, "update", log)
            if petition.state.is_terminal():
                log.warning(
                    "petition_update_rejected_terminal",
                    current_state=petition.state.value,
                )
                raise InvalidPetitionStateError(
                    petition_id, petition.state, f"update {field_name} of"
                )
            if field_name in SCHEDULE_FIELDS and not petition.is_draft:
                log.warning(
                    "petition_schedule_frozen",
                    current_state=petition.state.value,
                )
                raise InvalidPetitionStateError(
                    petition_id, petition.state, f"update {field_name} of"
                )

            updated = await self._registry.update_field(
                petition_id, field_name, normalized, caller_id, now
            )

        log.info("petition_field_updated")
        await self._emit(
            PetitionUpdatedEvent(
                petition_id=petition_id,
                field_name=field_name,
                changed_by=caller_id,
                changed_at=now,
            ),
            log,
        )
        return updated

    @correlated
    async def extend_end_date(
        self,
        petition_id: UUID,
        caller_id: str,
        new_end_date: datetime,
        now: datetime,
    ) -> Petition:
        """Extend a published petition's end date.

        The new end date must be strictly later than both the current end
        date and ``now``. Only end_date changes.

        Raises:
            PetitionNotFoundError: Unknown petition.
            UnauthorizedPetitionActionError: Caller is not the creator.
            InvalidPetitionStateError: Petition is not PUBLISHED.
            InvalidPetitionInputError: New end date is not later.
        """
        _require_aware("now", now)
        _require_aware("new_end_date", new_end_date)
        log = self._log_operation(
            "extend_end_date", petition_id=str(petition_id), caller_id=caller_id
        )

        async with self._locks.hold(petition_id):
            petition = await self._registry.get(petition_id)
            self._require_creator(petition, caller_id, "extend", log)
            self._require_state(petition, PetitionState.PUBLISHED, "extend", log)

            if not new_end_date > petition.end_date:
                log.warning(
                    "petition_extension_rejected",
                    current_end_date=petition.end_date.isoformat(),
                    new_end_date=new_end_date.isoformat(),
                )
                raise InvalidPetitionInputError(
                    "new_end_date", "must be after the current end date"
                )
            if not new_end_date > now:
                log.warning(
                    "petition_extension_rejected",
                    new_end_date=new_end_date.isoformat(),
                    now=now.isoformat(),
                )
                raise InvalidPetitionInputError(
                    "new_end_date", "end date must be in the future"
                )

            extended = await self._registry.update_field(
                petition_id, "end_date", new_end_date, caller_id, now
            )

        log.info("petition_end_date_extended", end_date=new_end_date.isoformat())
        await self._emit(
            PetitionUpdatedEvent(
                petition_id=petition_id,
                field_name="end_date",
                changed_by=caller_id,
                changed_at=now,
            ),
            log,
        )
        return extended

    # ------------------------------------------------------------------
    # signatures
    # ------------------------------------------------------------------

    @correlated
    async def sign(
        self,
        petition_id: UUID,
        signer_id: str,
        now: datetime,
        message: str | None = None,
    ) -> SignResult:
        """Admit a signature.

        Effects: activates the signature, increments the count, updates
        the signer's stats, records a milestone if one is crossed and, on
        reaching the target, completes the petition and awards the
        creator's completion bonus.

        Raises:
            InvalidPetitionInputError: Empty signer or message too long.
            PetitionNotFoundError: Unknown petition.
            InvalidPetitionStateError: Petition is not PUBLISHED.
            SigningWindowClosedError: ``now`` outside [start, end].
            SelfSignatureError: Creator signing own petition.
            DuplicateSignatureError: Signer already signed (or withdrew
                under the base ruleset).
        """
        _require_identity("signer_id", signer_id)
        _require_aware("now", now)
        if message is not None:
            if not isinstance(message, str):
                raise InvalidPetitionInputError("message", "must be a string")
            if len(message) > self._config.max_message_length:
                raise InvalidPetitionInputError(
                    "message",
                    f"exceeds maximum length of {self._config.max_message_length} "
                    "characters",
                )

        log = self._log_operation(
            "sign", petition_id=str(petition_id), signer_id=signer_id
        )
        log.debug("petition_sign_started")

        async with self._locks.hold(petition_id):
            petition = await self._registry.get(petition_id)
            self._require_state(petition, PetitionState.PUBLISHED, "sign", log)

            if not petition.within_signing_window(now):
                log.warning(
                    "petition_sign_outside_window",
                    start_date=petition.start_date.isoformat(),
                    end_date=petition.end_date.isoformat(),
                    now=now.isoformat(),
                )
                raise SigningWindowClosedError(
                    petition_id, now, petition.start_date, petition.end_date
                )

            if not self._config.allow_self_signing and signer_id == petition.creator_id:
                log.warning("petition_self_sign_rejected")
                raise SelfSignatureError(petition_id, signer_id)

            existing = await self._ledger.get(petition_id, signer_id)
            if existing is not None:
                log.info(
                    "duplicate_signature_attempt",
                    existing_signature_id=str(existing.signature_id),
                    existing_signed_at=existing.signed_at.isoformat(),
                )
                raise DuplicateSignatureError(
                    petition_id=petition_id,
                    signer_id=signer_id,
                    existing_signature_id=existing.signature_id,
                    signed_at=existing.signed_at,
                )

            if not self._config.allow_resign_after_withdrawal and (
                await self._ledger.has_withdrawn(petition_id, signer_id)
            ):
                log.info("resign_after_withdrawal_rejected")
                raise DuplicateSignatureError(
                    petition_id=petition_id,
                    signer_id=signer_id,
                    previously_withdrawn=True,
                )

            # All guards passed; writes start here.
            signature = Signature.create(
                signature_id=self._id_generator.next_id(),
                petition_id=petition_id,
                signer_id=signer_id,
                signed_at=now,
                message=message,
            )
            previous_count = petition.signature_count
            new_count = await self._ledger.add(signature)
            updated = petition.with_signature_count(new_count)

            await self._stats_aggregator.record_signature(signer_id)
            milestone = await self._milestone_tracker.record_signing(
                petition_id=petition_id,
                previous_count=previous_count,
                new_count=new_count,
                target_signatures=petition.target_signatures,
                reached_at=now,
            )

            completed = updated.target_reached
            if completed:
                updated = updated.with_state(PetitionState.COMPLETED)
            await self._registry.save(updated)
            if completed:
                await self._stats_aggregator.record_completion(petition.creator_id)

        log.info(
            "petition_signed",
            signature_id=str(signature.signature_id),
            signature_count=new_count,
            target_signatures=petition.target_signatures,
        )
        await self._emit(
            PetitionSignedEvent(
                petition_id=petition_id,
                signer_id=signer_id,
                signature_id=signature.signature_id,
                signed_at=now,
                signature_count=new_count,
                content_hash=signature.content_hash.hex(),
            ),
            log,
        )
        if milestone is not None:
            await self._emit(
                MilestoneReachedEvent(
                    petition_id=petition_id,
                    threshold=milestone.threshold,
                    percent=milestone.percent,
                    reached_at=now,
                ),
                log,
            )
        if completed:
            log.info("petition_completed", signature_count=new_count)
            await self._emit(
                PetitionStatusChangedEvent(
                    petition_id=petition_id,
                    previous_state=PetitionState.PUBLISHED.value,
                    new_state=PetitionState.COMPLETED.value,
                    changed_at=now,
                    triggered_by=signer_id,
                ),
                log,
            )

        return SignResult(
            signature=signature,
            signature_count=new_count,
            milestone=milestone,
            completed=completed,
            petition=updated,
        )

    @correlated
    async def withdraw(
        self,
        petition_id: UUID,
        signer_id: str,
        now: datetime,
    ) -> WithdrawResult:
        """Withdraw a signature within the withdrawal window.

        The remaining signer list may be reordered. Signature history is
        not rolled back.

        Raises:
            PetitionNotFoundError: Unknown petition.
            SignatureNotFoundError: Signer holds no active signature.
            InvalidPetitionStateError: Petition is not PUBLISHED.
            WithdrawalWindowExpiredError: Window after signing has closed.
        """
        _require_identity("signer_id", signer_id)
        _require_aware("now", now)
        log = self._log_operation(
            "withdraw", petition_id=str(petition_id), signer_id=signer_id
        )

        async with self._locks.hold(petition_id):
            petition = await self._registry.get(petition_id)

            signature = await self._ledger.get(petition_id, signer_id)
            if signature is None:
                log.warning("petition_withdraw_without_signature")
                raise SignatureNotFoundError(petition_id, signer_id)

            self._require_state(petition, PetitionState.PUBLISHED, "withdraw", log)

            window_closed_at = signature.signed_at + self._config.withdrawal_window
            if now > window_closed_at:
                log.warning(
                    "petition_withdrawal_window_expired",
                    signed_at=signature.signed_at.isoformat(),
                    window_closed_at=window_closed_at.isoformat(),
                    now=now.isoformat(),
                )
                raise WithdrawalWindowExpiredError(
                    petition_id, signer_id, signature.signed_at, window_closed_at
                )

            removed, new_count = await self._ledger.remove(petition_id, signer_id, now)
            updated = petition.with_signature_count(new_count)
            await self._registry.save(updated)
            await self._stats_aggregator.record_withdrawal(signer_id)

        log.info("petition_signature_withdrawn", signature_count=new_count)
        await self._emit(
            SignatureWithdrawnEvent(
                petition_id=petition_id,
                signer_id=signer_id,
                signature_id=removed.signature_id,
                withdrawn_at=now,
                signature_count=new_count,
            ),
            log,
        )
        return WithdrawResult(
            signature=removed,
            signature_count=new_count,
            withdrawn_at=now,
            petition=updated,
        )
