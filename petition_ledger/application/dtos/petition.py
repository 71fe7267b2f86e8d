"""Petition ledger DTOs for the application layer.

This module contains two types of definitions:
1. Dataclass-based results - returned by mutating operations
2. Pydantic models - read projections handed across layers (QueryService)

Read projections are computed live from the registry and ledger and are
never cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from petition_ledger.domain.models.milestone import Milestone
from petition_ledger.domain.models.petition import Petition
from petition_ledger.domain.models.signature import Signature


@dataclass(frozen=True)
class SignResult:
    """Result of a successful sign operation.

    Attributes:
        signature: The recorded signature.
        signature_count: Active count after this signature.
        milestone: Milestone recorded by this signature, if any.
        completed: Whether this signature completed the petition.
        petition: Petition snapshot after the operation.
    """

    signature: Signature
    signature_count: int
    milestone: Milestone | None
    completed: bool
    petition: Petition


@dataclass(frozen=True)
class WithdrawResult:
    """Result of a successful withdrawal.

    Attributes:
        signature: The signature that was withdrawn.
        signature_count: Active count after the withdrawal.
        withdrawn_at: Caller-supplied withdrawal time.
        petition: Petition snapshot after the operation.
    """

    signature: Signature
    signature_count: int
    withdrawn_at: datetime
    petition: Petition


class PetitionStats(BaseModel):
    """Live progress projection for one petition."""

    model_config = ConfigDict(frozen=True)

    petition_id: UUID = Field(..., description="Petition the stats describe")
    state: str = Field(..., description="Lifecycle state value")
    count: int = Field(..., ge=0, description="Active signature count")
    target: int = Field(..., ge=1, description="Signature target")
    progress_percent: int = Field(
        ..., ge=0, le=100, description="Progress toward target, capped at 100"
    )
    has_started: bool = Field(..., description="now >= start_date")
    has_ended: bool = Field(..., description="now > end_date")
    is_signable: bool = Field(
        ..., description="PUBLISHED and now within the signing window"
    )


class PetitionSummary(BaseModel):
    """Listing projection of a petition."""

    model_config = ConfigDict(frozen=True)

    petition_id: UUID
    creator_id: str
    category: str
    state: str
    title: str | None = None
    tags: list[str] = Field(default_factory=list)
    signature_count: int = Field(..., ge=0)
    target_signatures: int = Field(..., ge=1)
    start_date: datetime
    end_date: datetime
    created_at: datetime

    @classmethod
    def from_petition(cls, petition: Petition) -> PetitionSummary:
        return cls(
            petition_id=petition.petition_id,
            creator_id=petition.creator_id,
            category=petition.category.value,
            state=petition.state.value,
            title=petition.title,
            tags=list(petition.tags),
            signature_count=petition.signature_count,
            target_signatures=petition.target_signatures,
            start_date=petition.start_date,
            end_date=petition.end_date,
            created_at=petition.created_at,
        )


class PetitionPage(BaseModel):
    """One page of petitions in creation order."""

    model_config = ConfigDict(frozen=True)

    items: list[PetitionSummary] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Total petitions in the registry")
    offset: int = Field(
        ..., description="Requested offset, possibly outside the registry"
    )
    limit: int = Field(..., ge=1)

    @property
    def has_more(self) -> bool:
        return 0 <= self.offset and self.offset + len(self.items) < self.total
