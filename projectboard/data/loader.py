"""
Record stores for the project dashboards and the loader that validates their rows.

A store returns raw rows (mappings) for one user and role, in store order.
`load_records` turns those rows into ProjectRecords, rejecting malformed rows
individually instead of failing the whole load.
"""

from __future__ import annotations

import copy
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence, Set

import gspread
import pandas as pd
import streamlit as st
from google.oauth2.service_account import Credentials

from projectboard.config import Settings
from projectboard.data.records import MalformedRecord, ProjectRecord, Role, parse_record

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]

SENTINELS: Set[str] = {"", "None", "none", "N/A", "n/a", "NA", "na", "null", "Null", "-", "—"}

CACHE_TTL_SECONDS = 600

Row = Dict[str, Any]


class LoadFailure(RuntimeError):
    """The record store could not supply rows (configuration, auth, or backend fault)."""


class RecordStore(Protocol):
    def fetch(self, user_id: str, role: Role) -> List[Row]: ...


@dataclass
class RejectedRow:
    record_id: Optional[str]
    reason: str


@dataclass
class LoadResult:
    records: List[ProjectRecord] = field(default_factory=list)
    rejected: List[RejectedRow] = field(default_factory=list)


def _owner_column(role: Role) -> str:
    return f"{role.value}_id"


SAMPLE_ROWS: List[Row] = [
    {
        "id": "p-101",
        "title": "Brand Identity Design",
        "description": "Complete brand identity package including logo, colors, and guidelines",
        "status": "in_progress",
        "budget_amount": 2_500_000,
        "created_at": "2025-01-15",
        "due_date": "2025-02-15",
        "provider_id": "demo-user",
        "provider_name": "Demo User",
        "client_id": "john-doe",
        "client_name": "John Doe",
        "client_image": "https://images.pexels.com/photos/220453/pexels-photo-220453.jpeg?auto=compress&cs=tinysrgb&w=150",
        "milestones": [
            {"title": "Initial concepts", "status": "completed", "due_date": "2025-01-20"},
            {"title": "Revisions", "status": "in_progress", "due_date": "2025-02-01"},
            {"title": "Final delivery", "status": "pending", "due_date": "2025-02-15"},
        ],
    },
    {
        "id": "p-102",
        "title": "Product Photography Session",
        "description": "Professional photography for e-commerce catalog",
        "status": "in_progress",
        "budget_amount": 1_200_000,
        "created_at": "2025-01-22",
        "due_date": "2025-02-05",
        "provider_id": "demo-user",
        "provider_name": "Demo User",
        "client_id": "sarah-smith",
        "client_name": "Sarah Smith",
        "milestones": [
            {"title": "Studio setup", "status": "completed", "due_date": "2025-01-25"},
            {"title": "Photo shoot", "status": "in_progress", "due_date": "2025-01-30"},
        ],
    },
    {
        "id": "p-103",
        "title": "Social Media Content Package",
        "description": "30 days of social media content creation",
        "status": "completed",
        "budget_amount": 850_000,
        "created_at": "2024-12-15",
        "due_date": "2025-01-15",
        "provider_id": "demo-user",
        "provider_name": "Demo User",
        "client_id": "mike-johnson",
        "client_name": "Mike Johnson",
    },
    {
        "id": "p-201",
        "title": "Brand Identity Design",
        "description": "Complete brand identity package including logo, colors, and guidelines",
        "status": "in_progress",
        "budget_amount": 2_500_000,
        "created_at": "2025-01-15",
        "due_date": "2025-02-15",
        "progress": 65,
        "client_id": "demo-user",
        "client_name": "Demo User",
        "provider_id": "emma-wilson",
        "provider_name": "Emma Wilson",
        "provider_image": "https://images.pexels.com/photos/31422830/pexels-photo-31422830.png?auto=compress&cs=tinysrgb&w=150",
    },
    {
        "id": "p-202",
        "title": "Social Media Campaign",
        "description": "Three-month social media marketing campaign",
        "status": "in_progress",
        "budget_amount": 1_800_000,
        "created_at": "2025-01-20",
        "due_date": "2025-04-20",
        "progress": 35,
        "client_id": "demo-user",
        "client_name": "Demo User",
        "provider_id": "ruby-nesda",
        "provider_name": "Ruby Nesda",
        "provider_image": "https://images.pexels.com/photos/6311651/pexels-photo-6311651.jpeg?auto=compress&cs=tinysrgb&w=150",
    },
    {
        "id": "p-203",
        "title": "Product Photography",
        "description": "Professional photography for product catalog",
        "status": "completed",
        "budget_amount": 950_000,
        "created_at": "2024-12-10",
        "due_date": "2024-12-28",
        "progress": 100,
        "client_id": "demo-user",
        "client_name": "Demo User",
        "provider_id": "maya-chen",
        "provider_name": "Maya Chen",
    },
]


class SampleRecordStore:
    """In-memory store used for demos and local development."""

    def __init__(self, rows: Optional[Sequence[Mapping[str, Any]]] = None):
        self._rows = [dict(row) for row in (SAMPLE_ROWS if rows is None else rows)]

    def fetch(self, user_id: str, role: Role) -> List[Row]:
        owner_col = _owner_column(Role(role))
        return [
            copy.deepcopy(row)
            for row in self._rows
            if str(row.get(owner_col, "")).strip() == str(user_id)
        ]


def _normalize_sentinels(df: pd.DataFrame) -> pd.DataFrame:
    """Replace sentinel string tokens with None (in-place) and record counts in df.attrs.

    Adds / updates:
        df.attrs['sentinel_replacements'] = {column: count_replaced, ...}
    """
    replacements = {}
    for col in df.columns:
        if df[col].dtype == object:
            # Identify sentinel strings (strip then in SENTINELS)
            mask = df[col].apply(lambda v: isinstance(v, str) and v.strip() in SENTINELS)
            count = int(mask.sum())
            if count:
                replacements[col] = count
                df.loc[mask, col] = None
    if replacements:
        existing = df.attrs.get('sentinel_replacements', {})
        existing.update(replacements)
        df.attrs['sentinel_replacements'] = existing
    return df


def _frame_to_rows(df: pd.DataFrame) -> List[Row]:
    rows = df.astype(object).where(df.notna(), None).to_dict("records")
    return [{str(k): v for k, v in row.items()} for row in rows]


def authorize(credentials_file: str) -> gspread.Client:
    credentials = Credentials.from_service_account_file(credentials_file, scopes=SCOPES)
    return gspread.authorize(credentials)


class SheetRecordStore:
    """
    Google Sheets backed store.

    Project rows come from one worksheet; milestones, when a milestones
    worksheet exists, are joined on ``project_id`` in sheet order.
    """

    def __init__(
        self,
        spreadsheet_id: str,
        projects_sheet: str = "Projects",
        milestones_sheet: Optional[str] = "Milestones",
        credentials_file: str = "google-credentials.json",
        client_factory: Callable[[str], Any] = authorize,
    ):
        self.spreadsheet_id = spreadsheet_id
        self.projects_sheet = projects_sheet
        self.milestones_sheet = milestones_sheet
        self.credentials_file = credentials_file
        self._client_factory = client_factory

    def _open(self):
        if not os.path.exists(self.credentials_file):
            raise LoadFailure(f"Service account file not found: {self.credentials_file}")
        try:
            client = self._client_factory(self.credentials_file)
            return client.open_by_key(self.spreadsheet_id)
        except Exception as exc:
            raise LoadFailure(f"Could not open spreadsheet {self.spreadsheet_id}: {exc}") from exc

    def _worksheet_frame(self, spreadsheet, name: str) -> pd.DataFrame:
        ws = spreadsheet.worksheet(name)
        df = pd.DataFrame(ws.get_all_records(), dtype=object)
        if df.empty:
            return df
        return _normalize_sentinels(df)

    def _milestones_by_project(self, spreadsheet) -> Dict[str, List[Row]]:
        if not self.milestones_sheet:
            return {}
        try:
            df = self._worksheet_frame(spreadsheet, self.milestones_sheet)
        except gspread.exceptions.WorksheetNotFound:
            logger.info("No %r worksheet; projects load without milestones", self.milestones_sheet)
            return {}
        grouped: Dict[str, List[Row]] = {}
        if df.empty or "project_id" not in df.columns:
            return grouped
        for row in _frame_to_rows(df):
            project_id = row.pop("project_id")
            if project_id is None:
                continue
            grouped.setdefault(str(project_id).strip(), []).append(row)
        return grouped

    def fetch(self, user_id: str, role: Role) -> List[Row]:
        role = Role(role)
        spreadsheet = self._open()
        try:
            projects = self._worksheet_frame(spreadsheet, self.projects_sheet)
            milestones = self._milestones_by_project(spreadsheet)
        except LoadFailure:
            raise
        except Exception as exc:
            raise LoadFailure(f"Could not read worksheet data: {exc}") from exc

        owner_col = _owner_column(role)
        if projects.empty:
            return []
        if owner_col not in projects.columns:
            raise LoadFailure(f"Worksheet {self.projects_sheet!r} has no {owner_col!r} column")

        owned = projects[projects[owner_col].astype(str).str.strip() == str(user_id)]
        rows = _frame_to_rows(owned)
        for row in rows:
            row_id = row.get("id")
            row["milestones"] = milestones.get(str(row_id).strip(), []) if row_id is not None else []
        logger.info(
            "Fetched %d of %d project rows for %s %s (sentinels replaced: %s)",
            len(rows),
            len(projects),
            role.value,
            user_id,
            projects.attrs.get("sentinel_replacements", {}),
        )
        return rows


def build_store(settings: Settings, cached: bool = False) -> RecordStore:
    if settings.record_source == "sample":
        return SampleRecordStore()
    if not settings.spreadsheet_id:
        raise LoadFailure("SPREADSHEET_ID env var missing (env or secrets)")
    store = SheetRecordStore(
        spreadsheet_id=settings.spreadsheet_id,
        projects_sheet=settings.projects_sheet,
        milestones_sheet=settings.milestones_sheet,
        credentials_file=settings.credentials,
    )
    return CachedSheetStore(store) if cached else store


def _reject(result: LoadResult, record_id: Optional[str], reason: str) -> None:
    logger.warning("Rejected project row %s: %s", record_id or "<no id>", reason)
    result.rejected.append(RejectedRow(record_id=record_id, reason=reason))


def load_records(store: RecordStore, user_id: str, role: Role) -> LoadResult:
    """
    Fetch rows from the store and parse them into records.

    Malformed rows and rows repeating an earlier id are rejected and logged;
    the rest of the set is kept in store order. Store faults propagate as
    LoadFailure.
    """
    role = Role(role)
    try:
        rows = store.fetch(user_id, role)
    except LoadFailure:
        raise
    except Exception as exc:
        raise LoadFailure(f"Record store failed: {exc}") from exc

    result = LoadResult()
    seen: Set[str] = set()
    for row in rows:
        try:
            record = parse_record(row, role)
            if record.id in seen:
                raise MalformedRecord(f"duplicate id {record.id!r}", record.id)
        except MalformedRecord as exc:
            _reject(result, exc.record_id, str(exc))
            continue
        except (TypeError, AttributeError, ValueError) as exc:
            _reject(result, None, f"unreadable row: {exc}")
            continue
        seen.add(record.id)
        result.records.append(record)

    logger.info(
        "Loaded %d %s records for %s (%d rejected)",
        len(result.records),
        role.value,
        user_id,
        len(result.rejected),
    )
    return result


@st.cache_data(show_spinner=False, ttl=CACHE_TTL_SECONDS)
def _fetch_sheet_rows_cached(
    spreadsheet_id: str,
    projects_sheet: str,
    milestones_sheet: Optional[str],
    credentials_file: str,
    user_id: str,
    role_value: str,
) -> List[Row]:
    """Cached by sheet coordinates, credentials, user, and role."""
    store = SheetRecordStore(
        spreadsheet_id=spreadsheet_id,
        projects_sheet=projects_sheet,
        milestones_sheet=milestones_sheet,
        credentials_file=credentials_file,
    )
    return store.fetch(user_id, Role(role_value))


class CachedSheetStore:
    """SheetRecordStore fronted by st.cache_data so reruns do not refetch."""

    def __init__(self, store: SheetRecordStore):
        self.store = store

    def fetch(self, user_id: str, role: Role) -> List[Row]:
        return _fetch_sheet_rows_cached(
            self.store.spreadsheet_id,
            self.store.projects_sheet,
            self.store.milestones_sheet,
            self.store.credentials_file,
            str(user_id),
            Role(role).value,
        )


def clear_cache() -> None:
    _fetch_sheet_rows_cached.clear()  # type: ignore[attr-defined]
