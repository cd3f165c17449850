import logging

import streamlit as st

from projectboard.bootstrap_env import ensure_env
from projectboard.config import configure_logging, load_settings
from projectboard.data.loader import LoadFailure, build_store, clear_cache
from projectboard.data.state import DashboardState
from projectboard.ui.layout import render_header, setup_page, sidebar_controls
from projectboard.ui.pages import dashboard
from projectboard.ui.pages.context import PageContext

logger = logging.getLogger(__name__)


def _session_state(role, user_id) -> DashboardState:
    key = f"pb_state_{role.value}_{user_id}"
    if key not in st.session_state:
        st.session_state[key] = DashboardState(role=role, user_id=user_id)
    return st.session_state[key]


def main() -> None:
    setup_page()
    ensure_env()
    try:
        settings = load_settings()
    except ValueError as exc:
        st.error(f"Invalid configuration: {exc}")
        return
    configure_logging(settings.log_level)

    selection = sidebar_controls(settings)
    if selection.reload_requested:
        clear_cache()

    state = _session_state(selection.role, selection.user_id)
    render_header(state.role)

    if selection.reload_requested or not (state.loaded or state.error):
        with st.spinner("Loading projects…"):
            try:
                store = build_store(settings, cached=True)
            except LoadFailure as exc:
                logger.error("Record store unavailable: %s", exc)
                state.fail_load(exc)
            else:
                state.load(store)

    context = PageContext(settings=settings, state=state)
    dashboard.render(state.view(), context)


if __name__ == "__main__":
    main()
