"""
Summary metrics computed over the full record set of a dashboard.

Metrics never depend on the selected view mode: they are always aggregated
over every loaded record.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Sequence

from projectboard.data.records import ProjectRecord, ProjectStatus


@dataclass(frozen=True)
class DashboardMetrics:
    active_count: int = 0
    completed_count: int = 0
    total_budget: int = 0
    pending_count: int = 0
    record_count: int = 0
    completion_rate: Optional[float] = None
    average_progress: Optional[float] = None


EMPTY_METRICS = DashboardMetrics()


def aggregate(records: Sequence[ProjectRecord]) -> DashboardMetrics:
    """
    Count records per status and sum their budgets.

    Budgets are summed as Python ints so large totals stay exact. An empty
    sequence yields zero counts and totals with both rates set to None.
    """
    if not records:
        return EMPTY_METRICS

    active = completed = pending = 0
    total_budget = 0
    progress_values = []
    for record in records:
        if record.status is ProjectStatus.IN_PROGRESS:
            active += 1
        elif record.status is ProjectStatus.COMPLETED:
            completed += 1
        else:
            pending += 1
        total_budget += int(record.budget_amount)
        if record.progress_percent is not None:
            progress_values.append(record.progress_percent)

    record_count = len(records)
    average_progress = (
        sum(progress_values) / len(progress_values) if progress_values else None
    )
    return DashboardMetrics(
        active_count=active,
        completed_count=completed,
        total_budget=total_budget,
        pending_count=pending,
        record_count=record_count,
        completion_rate=completed / record_count * 100,
        average_progress=average_progress,
    )


def budget_by_status(records: Sequence[ProjectRecord]) -> Dict[ProjectStatus, int]:
    """Exact budget totals per status, in ProjectStatus order, for the breakdown chart."""
    totals = {status: 0 for status in ProjectStatus}
    for record in records:
        totals[record.status] += int(record.budget_amount)
    return totals
