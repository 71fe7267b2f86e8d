"""Domain models for the petition ledger."""

from petition_ledger.domain.models.milestone import (
    MILESTONE_PERCENTS,
    Milestone,
    MilestoneThreshold,
    milestone_thresholds,
)
from petition_ledger.domain.models.petition import (
    CONTENT_FIELDS,
    MUTABLE_FIELDS,
    SCHEDULE_FIELDS,
    STATE_TRANSITION_MATRIX,
    TERMINAL_STATES,
    Petition,
    PetitionCategory,
    PetitionState,
)
from petition_ledger.domain.models.signature import (
    Signature,
    SignatureAction,
    SignatureLogEntry,
)
from petition_ledger.domain.models.update_log import UpdateLogEntry, render_field_value
from petition_ledger.domain.models.user_stats import UserStats

__all__: list[str] = [
    "CONTENT_FIELDS",
    "MILESTONE_PERCENTS",
    "MUTABLE_FIELDS",
    "SCHEDULE_FIELDS",
    "STATE_TRANSITION_MATRIX",
    "TERMINAL_STATES",
    "Milestone",
    "MilestoneThreshold",
    "Petition",
    "PetitionCategory",
    "PetitionState",
    "Signature",
    "SignatureAction",
    "SignatureLogEntry",
    "UpdateLogEntry",
    "UserStats",
    "milestone_thresholds",
    "render_field_value",
]
