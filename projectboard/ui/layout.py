"""
Layout helpers for the Streamlit application (sidebar, header, view toggle).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

import streamlit as st

from projectboard.config import DASHBOARD_SUBTITLES, DASHBOARD_TITLES, VIEW_LABELS, Settings
from projectboard.data.filters import ViewMode
from projectboard.data.records import Role
from projectboard.data.state import DashboardState

ROLE_LABELS = {
    Role.PROVIDER: "Provider (hired work)",
    Role.CLIENT: "Client (commissioned work)",
}


@dataclass
class SidebarSelection:
    role: Role
    user_id: str
    reload_requested: bool


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="Project Dashboard",
        layout="wide",
        page_icon=":briefcase:",
    )


def render_header(role: Role) -> None:
    st.title(DASHBOARD_TITLES[role])
    st.caption(DASHBOARD_SUBTITLES[role])


def sidebar_controls(settings: Settings) -> SidebarSelection:
    """
    Render the sidebar controls and return the selected role, user, and reload request.
    """
    st.sidebar.header("Dashboard")
    roles: List[Role] = list(Role)
    role = st.sidebar.radio(
        "Role",
        options=roles,
        index=roles.index(settings.role),
        format_func=lambda r: ROLE_LABELS[r],
        key="pb_role",
    )
    user_id = st.sidebar.text_input("User ID", value=settings.user_id, key="pb_user_id").strip()
    reload_requested = st.sidebar.button("🔄 Refresh Data", key="pb_refresh")
    st.sidebar.caption(f"Source: {settings.record_source}")
    return SidebarSelection(role=Role(role), user_id=user_id or settings.user_id, reload_requested=reload_requested)


def view_toggle(state: DashboardState) -> ViewMode:
    """Radio bound to the state's view selector; returns the selected mode."""
    labels = {cfg.key: cfg.label for cfg in VIEW_LABELS[state.role]}
    options = state.selector.options
    current = state.selector.mode
    choice = st.radio(
        "View",
        options=options,
        index=options.index(current) if current in options else 0,
        format_func=lambda mode: labels.get(mode.value, mode.value.title()),
        horizontal=True,
        key=f"pb_view_{state.role.value}",
        label_visibility="collapsed",
    )
    return state.select_view(choice)
