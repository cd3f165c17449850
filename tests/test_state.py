"""Tests for the dashboard state and view-model."""

import pytest

from projectboard.data.filters import ClientView, ProviderView
from projectboard.data.loader import LoadFailure, LoadResult, SampleRecordStore
from projectboard.data.records import Role
from projectboard.data.state import DashboardState


@pytest.fixture
def provider_state():
    state = DashboardState(role=Role.PROVIDER, user_id="demo-user")
    state.load(SampleRecordStore())
    return state


def test_initial_state_is_unloaded():
    state = DashboardState(role="client", user_id="demo-user")
    view = state.view()
    assert state.role is Role.CLIENT
    assert view.view_mode is ClientView.ACTIVE
    assert view.is_empty
    assert not view.loading
    assert not state.loaded


def test_load_populates_records_and_metrics(provider_state):
    assert provider_state.loaded
    assert provider_state.error is None
    view = provider_state.view()
    assert view.view_mode is ProviderView.HIRED
    assert [r.id for r in view.records] == ["p-101", "p-102"]
    assert view.metrics.total_budget == 4_550_000


def test_metrics_do_not_follow_view(provider_state):
    before = provider_state.view().metrics
    provider_state.select_view("completed")
    view = provider_state.view()
    assert [r.id for r in view.records] == ["p-103"]
    assert view.metrics == before


def test_loading_flag_during_load():
    state = DashboardState(role=Role.PROVIDER, user_id="demo-user")
    seen = []

    class ObservingStore:
        def fetch(self, user_id, role):
            seen.append(state.view().loading)
            return []

    state.load(ObservingStore())
    assert seen == [True]
    assert not state.view().loading


def test_failed_load_keeps_previous_records(provider_state, list_store):
    provider_state.load(list_store(error=LoadFailure("sheet unavailable")))
    view = provider_state.view()
    assert view.has_error
    assert "sheet unavailable" in view.error
    assert len(view.records) == 2
    assert view.metrics.record_count == 3


def test_failed_first_load_is_distinct_from_empty(list_store):
    failed = DashboardState(role=Role.CLIENT, user_id="demo-user")
    failed.load(list_store(error=LoadFailure("auth expired")))
    empty = DashboardState(role=Role.CLIENT, user_id="demo-user")
    empty.load(list_store(rows=[]))

    assert failed.view().has_error and not failed.loaded
    assert not empty.view().has_error and empty.loaded
    assert empty.view().is_empty


def test_reload_replaces_records_and_clears_error(provider_state, list_store, make_row):
    provider_state.load(list_store(error=LoadFailure("down")))
    provider_state.load(list_store(rows=[make_row(id="new", status="completed", budget_amount=5)]))
    view = provider_state.view()
    assert view.error is None
    assert view.records == []
    assert view.metrics.completed_count == 1
    assert view.metrics.total_budget == 5


def test_rejected_rows_are_counted(list_store, make_row):
    state = DashboardState(role=Role.PROVIDER, user_id="demo-user")
    state.complete_load(LoadResult())
    state.load(list_store(rows=[make_row(id="x", status=None), make_row(id="y")]))
    assert state.view().rejected_count == 1
    assert [r.id for r in state.view().records] == ["y"]


def test_view_mode_survives_reload(provider_state):
    provider_state.select_view(ProviderView.ALL)
    provider_state.load(SampleRecordStore())
    assert provider_state.view().view_mode is ProviderView.ALL
    assert len(provider_state.view().records) == 3


def test_selecting_foreign_view_raises(provider_state):
    with pytest.raises(ValueError):
        provider_state.select_view(ClientView.ACTIVE)


def test_unreadable_rows_do_not_sink_the_load():
    class RawRowsStore:
        def fetch(self, user_id, role):
            return [["not", "a", "mapping"], {"id": "x"}]

    state = DashboardState(role=Role.PROVIDER, user_id="demo-user")
    state.load(RawRowsStore())
    view = state.view()
    assert state.loaded
    assert not view.loading
    assert not view.has_error
    assert view.rejected_count == 2
    assert view.is_empty


def test_loading_flag_is_cleared_when_load_raises(monkeypatch, list_store):
    from projectboard.data import state as state_module

    def broken_load(store, user_id, role):
        raise RuntimeError("parser bug")

    monkeypatch.setattr(state_module, "load_records", broken_load)
    state = DashboardState(role=Role.CLIENT, user_id="demo-user")
    with pytest.raises(RuntimeError, match="parser bug"):
        state.load(list_store())
    assert not state.loading
    assert not state.loaded
