"""Append-only audit log entries for petition field edits."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID


@dataclass(frozen=True, eq=True)
class UpdateLogEntry:
    """One recorded field edit.

    Values are stored as strings so that dates, enums and tag lists
    render uniformly in the audit trail.

    Attributes:
        petition_id: The edited petition.
        field_name: Name of the edited field.
        old_value: Rendered value before the edit.
        new_value: Rendered value after the edit.
        changed_by: Identity that made the edit.
        changed_at: Caller-supplied time of the edit.
    """

    petition_id: UUID
    field_name: str
    old_value: str
    new_value: str
    changed_by: str
    changed_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "petition_id": str(self.petition_id),
            "field_name": self.field_name,
            "old_value": self.old_value,
            "new_value": self.new_value,
            "changed_by": self.changed_by,
            "changed_at": self.changed_at.isoformat(),
        }


def render_field_value(value: Any) -> str:
    """Render a field value for the audit log."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (tuple, list)):
        return ",".join(str(v) for v in value)
    return str(value)
