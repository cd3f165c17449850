"""Tests for project record parsing."""

import datetime as dt

import pytest

from projectboard.data.records import (
    MalformedRecord,
    ProjectStatus,
    Role,
    milestone_counts,
    parse_record,
    records_to_frame,
)


def test_parse_provider_row_uses_client_as_counterparty(make_row):
    record = parse_record(make_row(client_image="https://img/john.jpg"), Role.PROVIDER)
    assert record.counterparty_name == "John Doe"
    assert record.counterparty_image == "https://img/john.jpg"
    assert record.status is ProjectStatus.IN_PROGRESS
    assert record.budget_amount == 2_500_000
    assert record.created_at == dt.date(2025, 1, 15)
    assert record.progress_percent is None


def test_parse_client_row_uses_provider_and_progress(make_row):
    record = parse_record(make_row(progress=65), Role.CLIENT)
    assert record.counterparty_name == "Emma Wilson"
    assert record.counterparty_image is None
    assert record.progress_percent == 65


def test_provider_ignores_progress_column(make_row):
    record = parse_record(make_row(progress=150), Role.PROVIDER)
    assert record.progress_percent is None


def test_status_is_case_insensitive(make_row):
    record = parse_record(make_row(status=" Completed "), Role.PROVIDER)
    assert record.status is ProjectStatus.COMPLETED


def test_budget_accepts_integral_float_and_text(make_row):
    assert parse_record(make_row(budget_amount=850000.0), Role.PROVIDER).budget_amount == 850_000
    assert parse_record(make_row(budget_amount="1,200,000"), Role.PROVIDER).budget_amount == 1_200_000


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"status": None}, "status is required"),
        ({"status": "archived"}, "unknown status"),
        ({"budget_amount": -1}, "budget_amount must be >= 0"),
        ({"budget_amount": 10.5}, "whole number"),
        ({"budget_amount": True}, "whole number"),
        ({"due_date": "someday"}, "due_date is not a date"),
        ({"title": "   "}, "title is required"),
        ({"client_name": None}, "client_name is required"),
    ],
)
def test_malformed_rows_raise(make_row, overrides, message):
    with pytest.raises(MalformedRecord, match=message) as excinfo:
        parse_record(make_row(**overrides), Role.PROVIDER)
    assert excinfo.value.record_id == "r-1"


def test_missing_id_raises(make_row):
    with pytest.raises(MalformedRecord, match="id is required"):
        parse_record(make_row(id=""), Role.PROVIDER)


def test_progress_out_of_range_raises(make_row):
    with pytest.raises(MalformedRecord, match="between 0 and 100"):
        parse_record(make_row(progress=101), Role.CLIENT)


def test_milestones_keep_supplied_order(make_row):
    milestones = [
        {"title": "Final delivery", "status": "pending", "due_date": "2025-02-15"},
        {"title": "Initial concepts", "status": "completed", "due_date": "2025-01-20"},
    ]
    record = parse_record(make_row(milestones=milestones), Role.PROVIDER)
    assert [m.title for m in record.milestones] == ["Final delivery", "Initial concepts"]
    assert record.milestones[1].status is ProjectStatus.COMPLETED


def test_bad_milestone_status_rejects_record(make_row):
    milestones = [{"title": "Kickoff", "status": "blocked", "due_date": "2025-01-20"}]
    with pytest.raises(MalformedRecord, match="unknown status"):
        parse_record(make_row(milestones=milestones), Role.PROVIDER)


def test_progress_consistency_flag(make_record):
    assert make_record(status=ProjectStatus.COMPLETED, progress=100).progress_consistent
    assert not make_record(status=ProjectStatus.COMPLETED, progress=90).progress_consistent
    assert not make_record(status=ProjectStatus.IN_PROGRESS, progress=100).progress_consistent
    assert make_record(status=ProjectStatus.COMPLETED).progress_consistent


def test_milestone_counts_ignore_parent_status(milestone_record):
    counts = milestone_counts(milestone_record)
    assert counts == {
        ProjectStatus.PENDING: 1,
        ProjectStatus.IN_PROGRESS: 1,
        ProjectStatus.COMPLETED: 1,
    }


def test_records_to_frame(scenario_records):
    df = records_to_frame(scenario_records)
    assert list(df["id"]) == ["p-1", "p-2", "p-3"]
    assert list(df["status"]) == ["in_progress", "in_progress", "completed"]
    assert int(df["budget_amount"].sum()) == 4_550_000


def test_records_to_frame_empty_keeps_columns():
    df = records_to_frame([])
    assert df.empty
    assert "budget_amount" in df.columns
