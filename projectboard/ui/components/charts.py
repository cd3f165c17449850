"""
Plotly chart factory functions with consistent styling for the dashboard.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from projectboard.data.metrics import budget_by_status
from projectboard.data.records import ProjectRecord

DEFAULT_TEMPLATE = "plotly_white"

STATUS_COLORS = {
    "pending": "#7f7f7f",
    "in_progress": "#1f77b4",
    "completed": "#2ca02c",
}


def _configure_layout(
    fig: go.Figure,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    yaxis_tickformat: Optional[str] = None,
) -> go.Figure:
    fig.update_layout(
        template=DEFAULT_TEMPLATE,
        title=title,
        showlegend=False,
        margin=dict(l=40, r=20, t=60, b=40),
    )
    if yaxis_title:
        fig.update_yaxes(title=yaxis_title)
    if yaxis_tickformat:
        fig.update_yaxes(tickformat=yaxis_tickformat)
    fig.update_xaxes(showgrid=False)
    fig.update_yaxes(showgrid=True, zeroline=True)
    return fig


def render_plotly(fig: go.Figure) -> None:
    st.plotly_chart(fig, use_container_width=True, config={"displayModeBar": False})


def bar_chart(
    df: pd.DataFrame,
    x: str,
    y: str,
    color: Optional[str] = None,
    title: Optional[str] = None,
    yaxis_title: Optional[str] = None,
    yaxis_tickformat: Optional[str] = None,
    category_orders: Optional[Dict[str, List[str]]] = None,
    color_discrete_map: Optional[Dict[str, str]] = None,
    text_auto: bool = False,
) -> go.Figure:
    fig = px.bar(
        df,
        x=x,
        y=y,
        color=color,
        category_orders=category_orders,
        color_discrete_map=color_discrete_map,
        text_auto=text_auto,
    )
    fig = _configure_layout(fig, title, yaxis_title, yaxis_tickformat)
    if text_auto:
        fig.update_traces(textposition="outside", cliponaxis=False)
    return fig


def budget_frame(records: Sequence[ProjectRecord]) -> pd.DataFrame:
    totals = budget_by_status(records)
    return pd.DataFrame(
        {
            "status": [status.value for status in totals],
            "budget": list(totals.values()),
        }
    )


def budget_by_status_chart(records: Sequence[ProjectRecord], currency: str = "UGX") -> go.Figure:
    df = budget_frame(records)
    return bar_chart(
        df,
        x="status",
        y="budget",
        color="status",
        title="Budget by Status",
        yaxis_title=f"Budget ({currency})",
        yaxis_tickformat="~s",
        category_orders={"status": list(STATUS_COLORS)},
        color_discrete_map=STATUS_COLORS,
        text_auto=True,
    )
