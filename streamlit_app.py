from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from fars.data_loader import (
    MONTH_COLUMN,
    YEAR_COLUMN,
    available_years,
    read_years,
    resolve_data_dir,
)
from fars.errors import FarsError, InvalidStateError
from fars.mapping import map_state
from fars.summary import summarize_results


st.set_page_config(
    page_title="FARS Accident Explorer",
    page_icon="🚗",
    layout="wide",
    initial_sidebar_state="expanded",
)

st.markdown(
    "<style>.main { padding-top: 1.5rem; }</style>",
    unsafe_allow_html=True,
)

MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


@st.cache_data(show_spinner=False)
def get_summary(years: Tuple[int, ...], data_dir: str) -> Dict[str, object]:
    results = read_years(list(years), data_dir)
    return {
        "summary": summarize_results(results),
        "warnings": [r.warning for r in results if r.warning],
    }


@st.cache_data(show_spinner=False)
def get_state_map(state_id: int, year: int, data_dir: str) -> Optional[go.Figure]:
    return map_state(state_id, year, data_dir=data_dir, show=False)


def plot_monthly_trend(summary: pd.DataFrame) -> go.Figure:
    if summary.empty:
        return go.Figure()
    long_df = (
        summary.reset_index()
        .melt(id_vars=MONTH_COLUMN, var_name=YEAR_COLUMN, value_name="accidents")
        .dropna(subset=["accidents"])
    )
    long_df[YEAR_COLUMN] = long_df[YEAR_COLUMN].astype(str)
    fig = px.line(
        long_df,
        x=MONTH_COLUMN,
        y="accidents",
        color=YEAR_COLUMN,
        markers=True,
        title="Fatal accidents by month",
    )
    fig.update_layout(
        xaxis=dict(title="", tickmode="array", tickvals=list(range(1, 13)), ticktext=MONTH_LABELS),
        yaxis=dict(title="Accidents"),
        legend_title_text="Year",
        height=360,
        margin=dict(l=10, r=10, t=60, b=20),
    )
    return fig


def main():
    with st.sidebar:
        st.header("Control Panel")
        data_dir = st.text_input(
            "Data directory",
            value=str(resolve_data_dir()),
            help="Folder holding accident_<year>.csv.bz2 files.",
        )
        year_options: List[int] = available_years(data_dir)
        selected_years = st.multiselect(
            "Years to summarize",
            options=year_options,
            default=year_options,
        )

        st.divider()
        map_year = st.selectbox("Map year", options=year_options) if year_options else None
        state_id = st.number_input("State id", min_value=1, max_value=99, value=1, step=1)

        st.caption("Data: NHTSA Fatality Analysis Reporting System (FARS).")

    if not year_options:
        st.warning(f"No accident_<year>.csv.bz2 files found in {data_dir}.")
        return

    overview_tab, map_tab = st.tabs(["Monthly Summary", "State Map"])

    with overview_tab:
        st.title("FARS Accident Explorer")
        if not selected_years:
            st.info("Select at least one year to summarize.")
        else:
            data = get_summary(tuple(selected_years), data_dir)
            for warning in data["warnings"]:
                st.warning(warning)
            summary = data["summary"]
            st.plotly_chart(plot_monthly_trend(summary), use_container_width=True)
            st.dataframe(summary, use_container_width=True)

    with map_tab:
        try:
            fig = get_state_map(int(state_id), int(map_year), data_dir)
        except InvalidStateError as exc:
            st.error(str(exc))
            return
        except (FileNotFoundError, FarsError) as exc:
            st.error(f"Could not load {map_year}: {exc}")
            return
        if fig is None:
            st.info("No accidents to plot for this state and year.")
        else:
            st.plotly_chart(fig, use_container_width=True)


if __name__ == "__main__":
    main()
