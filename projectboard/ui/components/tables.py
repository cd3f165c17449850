"""
Reusable helpers for rendering data tables with consistent configuration.
"""

from __future__ import annotations

from typing import Dict, Optional

import pandas as pd
import streamlit as st

from projectboard.ui.components.formatting import format_currency, format_percent


def format_frame(df: pd.DataFrame, column_config: Optional[Dict[str, Dict[str, str]]] = None) -> pd.DataFrame:
    """Return a display copy of df with currency and percent columns rendered as text."""
    formatted_df = df.copy()
    if not column_config:
        return formatted_df
    for column, config in column_config.items():
        if column not in formatted_df.columns:
            continue
        fmt_type = config.get("type")
        if fmt_type == "currency":
            currency = config.get("currency", "UGX")
            decimals = int(config.get("decimals", 0))
            formatted_df[column] = formatted_df[column].apply(
                lambda v: format_currency(None if pd.isna(v) else v, currency=currency, decimals=decimals, compact=False)
            )
        elif fmt_type == "percent":
            decimals = int(config.get("decimals", 1))
            formatted_df[column] = formatted_df[column].apply(
                lambda v: format_percent(None if pd.isna(v) else v, decimals=decimals)
            )
    return formatted_df


def render_table(
    df: pd.DataFrame,
    column_config: Optional[Dict[str, Dict[str, str]]] = None,
    height: int = 300,
    export_file_name: str = "projects.csv",
) -> None:
    if df.empty:
        st.info("No projects to show.")
        return

    st.dataframe(
        format_frame(df, column_config),
        use_container_width=True,
        height=height,
        hide_index=True,
    )

    csv_bytes = df.to_csv(index=False).encode("utf-8")
    st.download_button(
        "Download CSV",
        data=csv_bytes,
        file_name=export_file_name,
        mime="text/csv",
    )
