import logging

import streamlit as st

from core.charts import build_metrics_chart
from core.quarters import QUARTERS
from core.view import API_URL, load_view_state, select_quarter

logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(name)s | %(levelname)s | %(message)s")

st.set_page_config(page_title="Test Metrics Dashboard", layout="wide")


def inject_base_styles():
    if st.session_state.get("_base_css_injected"):
        return
    st.markdown(
        """
        <style>
        .page-title {font-size: 1.9rem;font-weight: 700;color: #1f2937;text-align: center;margin-bottom: 24px;}
        .status {text-align: center;font-size: 1.1rem;}
        .status.error {color: #dc2626;}
        .status.loading {color: #4b5563;}
        </style>
        """,
        unsafe_allow_html=True,
    )
    st.session_state["_base_css_injected"] = True


def render_quarter_selector(state):
    cols = st.columns([3] + [1] * len(QUARTERS) + [3])
    for col, quarter in zip(cols[1:], QUARTERS):
        kind = "primary" if state.selected_quarter == quarter else "secondary"
        if col.button(quarter, key=f"quarter_{quarter}", type=kind, width="stretch"):
            if quarter != state.selected_quarter:
                st.session_state["view_state"] = select_quarter(state, quarter)
                st.rerun()


def render_chart(state):
    if state.loading:
        st.markdown("<p class='status loading'>Loading chart data...</p>", unsafe_allow_html=True)
    elif state.error:
        st.markdown(f"<p class='status error'>{state.error}</p>", unsafe_allow_html=True)
    else:
        with st.container(border=True):
            st.altair_chart(build_metrics_chart(state.chart_data), width="stretch")


inject_base_styles()
st.markdown("<div class='page-title'>Test Metrics Dashboard</div>", unsafe_allow_html=True)

# One fetch per session; quarter switches only re-derive the chart.
if "view_state" not in st.session_state:
    with st.spinner("Loading chart data..."):
        st.session_state["view_state"] = load_view_state(API_URL)

view_state = st.session_state["view_state"]
render_quarter_selector(view_state)
render_chart(view_state)
