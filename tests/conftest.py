"""
Shared test fixtures for the project dashboard.

Provides a record factory, the documented three-project scenario, and
in-memory record stores for isolated testing.
"""

import datetime as dt

import pytest

from projectboard.data.records import Milestone, ProjectRecord, ProjectStatus


def build_record(
    record_id="p-1",
    status=ProjectStatus.IN_PROGRESS,
    budget=1_000,
    progress=None,
    milestones=(),
):
    return ProjectRecord(
        id=record_id,
        title=f"Project {record_id}",
        description="Test project",
        status=status,
        budget_amount=budget,
        created_at=dt.date(2025, 1, 1),
        due_date=dt.date(2025, 2, 1),
        counterparty_name="Jane Client",
        progress_percent=progress,
        milestones=tuple(milestones),
    )


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def scenario_records():
    """Two in-progress projects and one completed, as on the provider dashboard."""
    return [
        build_record("p-1", ProjectStatus.IN_PROGRESS, 2_500_000),
        build_record("p-2", ProjectStatus.IN_PROGRESS, 1_200_000),
        build_record("p-3", ProjectStatus.COMPLETED, 850_000),
    ]


@pytest.fixture
def mixed_records():
    """One record per status plus extras, interleaved to exercise ordering."""
    return [
        build_record("a", ProjectStatus.PENDING, 100),
        build_record("b", ProjectStatus.IN_PROGRESS, 200),
        build_record("c", ProjectStatus.COMPLETED, 300),
        build_record("d", ProjectStatus.IN_PROGRESS, 400),
        build_record("e", ProjectStatus.PENDING, 500),
        build_record("f", ProjectStatus.COMPLETED, 600),
    ]


@pytest.fixture
def milestone_record():
    return build_record(
        "m-1",
        ProjectStatus.IN_PROGRESS,
        milestones=[
            Milestone("Initial concepts", ProjectStatus.COMPLETED, dt.date(2025, 1, 20)),
            Milestone("Revisions", ProjectStatus.IN_PROGRESS, dt.date(2025, 2, 1)),
            Milestone("Final delivery", ProjectStatus.PENDING, dt.date(2025, 2, 15)),
        ],
    )


def raw_row(**overrides):
    row = {
        "id": "r-1",
        "title": "Brand Identity Design",
        "description": "Logo and guidelines",
        "status": "in_progress",
        "budget_amount": 2_500_000,
        "created_at": "2025-01-15",
        "due_date": "2025-02-15",
        "provider_id": "demo-user",
        "provider_name": "Emma Wilson",
        "client_id": "demo-user",
        "client_name": "John Doe",
    }
    row.update(overrides)
    return row


@pytest.fixture
def make_row():
    return raw_row


class ListStore:
    """Record store returning fixed rows, or raising a configured error."""

    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.calls = []

    def fetch(self, user_id, role):
        self.calls.append((user_id, role))
        if self.error is not None:
            raise self.error
        return [dict(row) for row in self.rows]


@pytest.fixture
def list_store():
    return ListStore
