"""Tests for the metrics aggregator."""

from projectboard.data.metrics import aggregate, budget_by_status
from projectboard.data.records import ProjectStatus


def test_empty_set_is_all_zero():
    metrics = aggregate([])
    assert metrics.active_count == 0
    assert metrics.completed_count == 0
    assert metrics.total_budget == 0
    assert metrics.completion_rate is None
    assert metrics.average_progress is None


def test_scenario(scenario_records):
    metrics = aggregate(scenario_records)
    assert (metrics.active_count, metrics.completed_count, metrics.total_budget) == (2, 1, 4_550_000)
    assert metrics.pending_count == 0
    assert metrics.record_count == 3


def test_counts_never_exceed_record_count(mixed_records):
    metrics = aggregate(mixed_records)
    assert metrics.active_count + metrics.completed_count < len(mixed_records)
    assert metrics.active_count + metrics.completed_count + metrics.pending_count == len(mixed_records)


def test_counts_equal_length_without_pending(scenario_records):
    metrics = aggregate(scenario_records)
    assert metrics.active_count + metrics.completed_count == len(scenario_records)


def test_total_budget_covers_every_status(mixed_records):
    assert aggregate(mixed_records).total_budget == 2_100


def test_aggregate_is_idempotent(mixed_records):
    assert aggregate(mixed_records) == aggregate(mixed_records)


def test_large_budgets_sum_exactly(make_record):
    big = 10**18 + 1
    records = [make_record("x", budget=big), make_record("y", budget=big)]
    total = aggregate(records).total_budget
    assert total == 2 * 10**18 + 2
    assert isinstance(total, int)


def test_completion_rate(mixed_records):
    assert aggregate(mixed_records).completion_rate == 2 / 6 * 100


def test_average_progress_uses_records_with_progress(make_record):
    records = [
        make_record("a", progress=65),
        make_record("b", progress=35),
        make_record("c"),
    ]
    assert aggregate(records).average_progress == 50


def test_budget_by_status(mixed_records):
    totals = budget_by_status(mixed_records)
    assert list(totals) == list(ProjectStatus)
    assert totals[ProjectStatus.PENDING] == 600
    assert totals[ProjectStatus.IN_PROGRESS] == 600
    assert totals[ProjectStatus.COMPLETED] == 900
