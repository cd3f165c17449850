"""Quick validation script for the filter and metrics engine.

Run with `python scripts/validate_engine.py` to check the documented
provider scenario against the sample store.
"""

from __future__ import annotations

from projectboard.data.filters import ProviderView, filter_records
from projectboard.data.loader import SampleRecordStore, load_records
from projectboard.data.metrics import aggregate
from projectboard.data.records import Role


def main() -> None:
    result = load_records(SampleRecordStore(), "demo-user", Role.PROVIDER)
    if result.rejected:
        raise SystemExit(f"Sample rows rejected: {result.rejected}")

    metrics = aggregate(result.records)
    assert metrics.active_count == 2, metrics
    assert metrics.completed_count == 1, metrics
    assert metrics.total_budget == 4_550_000, metrics

    completed = filter_records(result.records, ProviderView.COMPLETED)
    assert [r.id for r in completed] == ["p-103"], completed
    assert filter_records(result.records, ProviderView.ALL) == result.records

    print("Engine validation passed. Records:", len(result.records))


if __name__ == "__main__":
    main()
