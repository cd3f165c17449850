"""
Per-session dashboard state and the read-only view-model handed to the pages.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from projectboard.data.filters import ViewMode, ViewSelector
from projectboard.data.loader import LoadFailure, LoadResult, RecordStore, RejectedRow, load_records
from projectboard.data.metrics import DashboardMetrics, aggregate
from projectboard.data.records import ProjectRecord, Role

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    records: List[ProjectRecord]
    metrics: DashboardMetrics
    view_mode: ViewMode
    loading: bool
    error: Optional[str] = None
    rejected_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def has_error(self) -> bool:
        return self.error is not None


@dataclass
class DashboardState:
    """
    Records, selected view, and load status of one dashboard instance.

    Metrics are recomputed only when the record set changes; filtering runs
    on every view request. A failed load keeps the last good record set.
    """

    role: Role
    user_id: str
    selector: ViewSelector = field(init=False)
    records: List[ProjectRecord] = field(default_factory=list)
    rejected: List[RejectedRow] = field(default_factory=list)
    metrics: DashboardMetrics = field(default_factory=DashboardMetrics)
    loading: bool = False
    loaded: bool = False
    error: Optional[str] = None

    def __post_init__(self) -> None:
        self.role = Role(self.role)
        self.selector = ViewSelector(self.role)

    def select_view(self, mode: Union[str, ViewMode]) -> ViewMode:
        return self.selector.select(mode)

    def begin_load(self) -> None:
        self.loading = True

    def complete_load(self, result: LoadResult) -> None:
        self.records = list(result.records)
        self.rejected = list(result.rejected)
        self.metrics = aggregate(self.records)
        self.loading = False
        self.loaded = True
        self.error = None

    def fail_load(self, exc: BaseException) -> None:
        self.loading = False
        self.error = str(exc) or exc.__class__.__name__

    def load(self, store: RecordStore) -> None:
        """Fetch and replace the record set; a LoadFailure is recorded, not raised."""
        self.begin_load()
        try:
            result = load_records(store, self.user_id, self.role)
        except LoadFailure as exc:
            logger.error("Loading %s projects for %s failed", self.role.value, self.user_id, exc_info=True)
            self.fail_load(exc)
            return
        finally:
            self.loading = False
        self.complete_load(result)

    def view(self) -> DashboardView:
        return DashboardView(
            records=self.selector.apply(self.records),
            metrics=self.metrics,
            view_mode=self.selector.mode,
            loading=self.loading,
            error=self.error,
            rejected_count=len(self.rejected),
        )
