"""
Project cards with counterparty, progress, and milestone details.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Sequence

import streamlit as st

from projectboard.data.records import Milestone, ProjectRecord, ProjectStatus, Role, milestone_counts
from projectboard.ui.components.formatting import format_currency, format_short_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MilestoneStyle:
    marker: str
    strike: bool


# Treatment depends on the milestone's own status only, never on the parent project
MILESTONE_STYLES: Dict[ProjectStatus, MilestoneStyle] = {
    ProjectStatus.COMPLETED: MilestoneStyle(marker="🟢", strike=True),
    ProjectStatus.IN_PROGRESS: MilestoneStyle(marker="🔵", strike=False),
    ProjectStatus.PENDING: MilestoneStyle(marker="⚪", strike=False),
}

STATUS_BADGES: Dict[ProjectStatus, str] = {
    ProjectStatus.PENDING: ":gray[Pending]",
    ProjectStatus.IN_PROGRESS: ":blue[In Progress]",
    ProjectStatus.COMPLETED: ":green[Completed]",
}

COUNTERPARTY_LABELS: Dict[Role, str] = {
    Role.PROVIDER: "Client",
    Role.CLIENT: "Provider",
}


def milestone_markdown(milestone: Milestone) -> str:
    style = MILESTONE_STYLES[milestone.status]
    title = f"~~{milestone.title}~~" if style.strike else milestone.title
    return f"{style.marker} {title} · {format_short_date(milestone.due_date)}"


def milestone_summary(record: ProjectRecord) -> str:
    counts = milestone_counts(record)
    return f"{counts[ProjectStatus.COMPLETED]}/{len(record.milestones)} milestones done"


def _render_card(record: ProjectRecord, role: Role, currency: str) -> None:
    with st.container(border=True):
        st.markdown(f"**{record.title}**  {STATUS_BADGES[record.status]}")
        st.caption(record.description)

        avatar_col, name_col = st.columns([1, 5])
        with avatar_col:
            if record.counterparty_image:
                st.image(record.counterparty_image, width=40)
            else:
                st.markdown(f"**{record.counterparty_name[:1].upper()}**")
        with name_col:
            st.markdown(f"{COUNTERPARTY_LABELS[role]}: {record.counterparty_name}")

        if record.progress_percent is not None:
            st.progress(record.progress_percent / 100, text=f"Progress {record.progress_percent}%")

        if record.milestones:
            st.caption(milestone_summary(record))
            st.markdown("\n".join(f"- {milestone_markdown(m)}" for m in record.milestones))

        budget_col, due_col = st.columns(2)
        budget_col.markdown(format_currency(record.budget_amount, currency=currency, decimals=1, compact=True))
        due_col.markdown(f"Due {format_short_date(record.due_date)}")


def render_project_cards(
    records: Sequence[ProjectRecord],
    role: Role,
    currency: str = "UGX",
    columns: int = 2,
) -> None:
    """
    Render one card per record; a record that fails to render is logged and skipped.
    """
    records = list(records)
    if not records:
        render_empty_state(role)
        return

    columns = max(columns, 1)
    for idx in range(0, len(records), columns):
        row_records = records[idx: idx + columns]
        cols = st.columns(columns)
        for col, record in zip(cols, row_records):
            with col:
                try:
                    _render_card(record, role, currency)
                except Exception:
                    logger.exception("Could not render project %s", record.id)
                    st.warning(f"Project {record.id} could not be displayed.")


def render_empty_state(role: Role) -> None:
    st.info("**No projects found**")
    if role is Role.CLIENT:
        st.caption("Start your first project and bring your vision to life")
    else:
        st.caption("Projects you are hired for will appear here")
