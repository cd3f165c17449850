"""
Project record types shared by the provider and client dashboards, plus the
parser that turns raw store rows into validated records.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple

import pandas as pd


class ProjectStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Role(str, Enum):
    PROVIDER = "provider"
    CLIENT = "client"


class MalformedRecord(ValueError):
    """Raised when a raw row cannot be turned into a ProjectRecord."""

    def __init__(self, message: str, record_id: Optional[str] = None):
        super().__init__(message)
        self.record_id = record_id


@dataclass(frozen=True)
class Milestone:
    title: str
    status: ProjectStatus
    due_date: dt.date


@dataclass(frozen=True)
class ProjectRecord:
    id: str
    title: str
    description: str
    status: ProjectStatus
    budget_amount: int
    created_at: dt.date
    due_date: dt.date
    counterparty_name: str
    counterparty_image: Optional[str] = None
    progress_percent: Optional[int] = None
    milestones: Tuple[Milestone, ...] = field(default_factory=tuple)

    @property
    def progress_consistent(self) -> bool:
        """True unless a completed record reports progress other than 100 (or vice versa)."""
        if self.progress_percent is None:
            return True
        return (self.status is ProjectStatus.COMPLETED) == (self.progress_percent == 100)


# Which side of the engagement is shown as the counterparty for each role
COUNTERPARTY_PREFIX: Dict[Role, str] = {
    Role.PROVIDER: "client",
    Role.CLIENT: "provider",
}


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _require_text(row: Mapping[str, Any], key: str, record_id: Optional[str]) -> str:
    value = row.get(key)
    if _is_missing(value):
        raise MalformedRecord(f"{key} is required", record_id)
    return str(value).strip()


def _optional_text(row: Mapping[str, Any], key: str) -> Optional[str]:
    value = row.get(key)
    if _is_missing(value):
        return None
    return str(value).strip()


def parse_status(value: Any, record_id: Optional[str] = None) -> ProjectStatus:
    if isinstance(value, ProjectStatus):
        return value
    if _is_missing(value):
        raise MalformedRecord("status is required", record_id)
    try:
        return ProjectStatus(str(value).strip().lower())
    except ValueError:
        raise MalformedRecord(f"unknown status {value!r}", record_id) from None


def parse_date(value: Any, key: str, record_id: Optional[str] = None) -> dt.date:
    """Return a datetime.date from dates, timestamps, or ISO-like strings."""
    if _is_missing(value):
        raise MalformedRecord(f"{key} is required", record_id)
    if isinstance(value, pd.Timestamp):
        if pd.isna(value):
            raise MalformedRecord(f"{key} is required", record_id)
        return value.date()
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    parsed = pd.to_datetime(str(value).strip(), errors="coerce")
    if pd.isna(parsed):
        raise MalformedRecord(f"{key} is not a date: {value!r}", record_id)
    return parsed.date()


def _parse_whole_number(value: Any, key: str, record_id: Optional[str]) -> int:
    if isinstance(value, bool):
        raise MalformedRecord(f"{key} must be a whole number", record_id)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise MalformedRecord(f"{key} must be a whole number", record_id)
        return int(value)
    text = str(value).strip().replace(",", "").replace("_", "")
    try:
        return int(text)
    except ValueError:
        raise MalformedRecord(f"{key} must be a whole number, got {value!r}", record_id) from None


def parse_budget(value: Any, record_id: Optional[str] = None) -> int:
    if _is_missing(value):
        raise MalformedRecord("budget_amount is required", record_id)
    amount = _parse_whole_number(value, "budget_amount", record_id)
    if amount < 0:
        raise MalformedRecord("budget_amount must be >= 0", record_id)
    return amount


def parse_progress(value: Any, record_id: Optional[str] = None) -> Optional[int]:
    if _is_missing(value):
        return None
    progress = _parse_whole_number(value, "progress", record_id)
    if not 0 <= progress <= 100:
        raise MalformedRecord("progress must be between 0 and 100", record_id)
    return progress


def parse_milestones(raw: Any, record_id: Optional[str] = None) -> Tuple[Milestone, ...]:
    if _is_missing(raw):
        return ()
    if not isinstance(raw, (list, tuple)):
        raise MalformedRecord("milestones must be a list", record_id)
    milestones: List[Milestone] = []
    for item in raw:
        if isinstance(item, Milestone):
            milestones.append(item)
            continue
        if not isinstance(item, Mapping):
            raise MalformedRecord("milestone entries must be mappings", record_id)
        milestones.append(
            Milestone(
                title=_require_text(item, "title", record_id),
                status=parse_status(item.get("status"), record_id),
                due_date=parse_date(item.get("due_date"), "milestone due_date", record_id),
            )
        )
    return tuple(milestones)


def parse_record(row: Mapping[str, Any], role: Role) -> ProjectRecord:
    """
    Build a ProjectRecord from a raw store row for the given dashboard role.

    The counterparty is read from the ``client_*`` columns on the provider
    dashboard and from the ``provider_*`` columns on the client dashboard.
    Raises MalformedRecord when a required field is missing or out of range.
    """
    if not isinstance(row, Mapping):
        raise MalformedRecord(f"row must be a mapping, got {type(row).__name__}")
    record_id = _optional_text(row, "id")
    if record_id is None:
        raise MalformedRecord("id is required")

    prefix = COUNTERPARTY_PREFIX[role]
    progress = parse_progress(row.get("progress"), record_id) if role is Role.CLIENT else None

    return ProjectRecord(
        id=record_id,
        title=_require_text(row, "title", record_id),
        description=_require_text(row, "description", record_id),
        status=parse_status(row.get("status"), record_id),
        budget_amount=parse_budget(row.get("budget_amount"), record_id),
        created_at=parse_date(row.get("created_at"), "created_at", record_id),
        due_date=parse_date(row.get("due_date"), "due_date", record_id),
        counterparty_name=_require_text(row, f"{prefix}_name", record_id),
        counterparty_image=_optional_text(row, f"{prefix}_image"),
        progress_percent=progress,
        milestones=parse_milestones(row.get("milestones"), record_id),
    )


def milestone_counts(record: ProjectRecord) -> Dict[ProjectStatus, int]:
    """Count a record's milestones per status; the parent's own status is not consulted."""
    counts = {status: 0 for status in ProjectStatus}
    for milestone in record.milestones:
        counts[milestone.status] += 1
    return counts


def records_to_frame(records: List[ProjectRecord]) -> pd.DataFrame:
    """Flatten records into a DataFrame for tables, charts, and CSV export."""
    columns = [
        "id",
        "title",
        "status",
        "counterparty",
        "budget_amount",
        "progress",
        "created_at",
        "due_date",
        "milestones",
    ]
    if not records:
        return pd.DataFrame(columns=columns)
    rows = [
        {
            "id": r.id,
            "title": r.title,
            "status": r.status.value,
            "counterparty": r.counterparty_name,
            "budget_amount": r.budget_amount,
            "progress": r.progress_percent,
            "created_at": r.created_at,
            "due_date": r.due_date,
            "milestones": len(r.milestones),
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=columns)
