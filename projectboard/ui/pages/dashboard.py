from __future__ import annotations

import streamlit as st

from projectboard.data.records import records_to_frame
from projectboard.data.state import DashboardView
from projectboard.ui.components.charts import budget_by_status_chart, render_plotly
from projectboard.ui.components.kpi import metric_cards, render_kpi_cards
from projectboard.ui.components.projects import render_project_cards
from projectboard.ui.components.tables import render_table
from projectboard.ui.layout import view_toggle
from projectboard.ui.pages.context import PageContext


def render(view: DashboardView, context: PageContext) -> None:
    role = context.state.role
    currency = context.settings.currency

    if view.has_error:
        st.error(f"Projects could not be loaded: {view.error}. Use Refresh Data to try again.")
        if not context.state.loaded:
            return

    if view.rejected_count:
        st.warning(f"{view.rejected_count} project record(s) were skipped because they were incomplete.")

    render_kpi_cards(metric_cards(view.metrics, role, currency=currency))

    view_toggle(context.state)
    # Re-read after the toggle so the cards match the radio on this run
    view = context.state.view()

    render_project_cards(view.records, role, currency=currency)

    if view.is_empty:
        return

    chart_col, table_col = st.columns([2, 3])
    with chart_col:
        render_plotly(budget_by_status_chart(context.state.records, currency=currency))
    with table_col:
        render_table(
            records_to_frame(view.records),
            column_config={
                "budget_amount": {"type": "currency", "currency": currency},
                "progress": {"type": "percent", "decimals": 0},
            },
            export_file_name=f"{role.value}_{view.view_mode.value}_projects.csv",
        )
