from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import streamlit as st

from projectboard.data.metrics import DashboardMetrics
from projectboard.data.records import Role
from projectboard.ui.components.formatting import format_count, format_currency, format_percent


@dataclass
class KpiCard:
    label: str
    value: Optional[float] = None
    value_display: Optional[str] = None
    currency: Optional[str] = None
    decimals: int = 0
    compact: bool = True
    help_text: Optional[str] = None


def _format_value(card: KpiCard) -> str:
    if card.value_display is not None:
        return card.value_display
    if card.currency:
        return format_currency(card.value, currency=card.currency, decimals=card.decimals, compact=card.compact)
    return format_count(card.value)


def metric_cards(metrics: DashboardMetrics, role: Role, currency: str = "UGX") -> List[KpiCard]:
    """Header cards for a role; every value comes from the full record set."""
    active = KpiCard("Active Projects", value=metrics.active_count)
    completed = KpiCard("Completed", value=metrics.completed_count)
    if role is Role.PROVIDER:
        return [
            active,
            KpiCard(
                "Total Earnings",
                value=metrics.total_budget,
                currency=currency,
                decimals=1,
                help_text="Budget of every hired project, whatever the selected view.",
            ),
            completed,
            KpiCard(
                "Completion Rate",
                value_display=format_percent(metrics.completion_rate, decimals=0),
            ),
        ]
    return [
        active,
        completed,
        KpiCard(
            "Total Spent",
            value=metrics.total_budget,
            currency=currency,
            decimals=1,
            help_text="Budget of every commissioned project, whatever the selected view.",
        ),
        KpiCard(
            "Avg Progress",
            value_display=format_percent(metrics.average_progress, decimals=0),
        ),
    ]


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 4) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        st.info("No metrics available yet.")
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(label=card.label, value=_format_value(card))
                if card.help_text:
                    st.caption(card.help_text)
