import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import streamlit as st
import pandas as pd

from app.figures import bar_figure, heatmap_figure, line_figure, pie_figure
from chartdata.config import load_config
from chartdata.filters import iter_transactions, by_date_range
from chartdata.ingest import load_transactions
from chartdata.logging_setup import configure_logging, get_logger
from chartdata.services import ChartService, remaining_balance

DATA_PATH = os.getenv("CHARTDATA_TRANSACTIONS", "data/transactions.json")

configure_logging()
logger = get_logger("chartdata.app")

st.set_page_config(page_title="Spending Charts", layout="wide")

config = load_config()
service = ChartService(config)

if "transactions" not in st.session_state:
    st.session_state.transactions, st.session_state.rejected = load_transactions(DATA_PATH)
    logger.info("dashboard loaded %d transactions from %s", len(st.session_state.transactions), DATA_PATH)

transactions = st.session_state.transactions
rejected = st.session_state.rejected

dark = st.sidebar.toggle("Dark theme", value=True)
window = None
if transactions:
    dates = [t.date.date() for t in transactions]
    window = st.sidebar.date_input("Window", value=(min(dates), max(dates)))

if isinstance(window, (tuple, list)) and len(window) == 2:
    transactions = tuple(iter_transactions(transactions, by_date_range(*window)))

k1, k2, k3 = st.columns(3)
with k1:
    st.metric("Transactions", len(transactions))
with k2:
    st.metric("Remaining", f"{remaining_balance(transactions):,.2f}")
with k3:
    st.metric("Rejected records", len(rejected))

c1, c2 = st.columns(2)
with c1:
    st.plotly_chart(pie_figure(service.overview(transactions), title="Budget overview", hole=0.4), use_container_width=True)
with c2:
    st.plotly_chart(pie_figure(service.category_pie(transactions)), use_container_width=True)

st.plotly_chart(bar_figure(service.flow_bars(transactions)), use_container_width=True)

categories = sorted({t.category for t in transactions if t.type == "expense"})
custom_keys = st.multiselect("Trend categories", categories)
try:
    st.plotly_chart(line_figure(service.trend_lines(transactions, custom_keys or None)), use_container_width=True)
except ValueError as e:
    st.warning(f"Cannot draw trend: {e}")

focus = st.selectbox("Heatmap category", ["All"] + categories)
st.plotly_chart(heatmap_figure(service.heatmap(transactions, category=None if focus == "All" else focus), config, dark=dark), use_container_width=True)

if rejected:
    st.subheader("Rejected records")
    st.dataframe(pd.DataFrame([{"error": r["error"], "message": r["message"], **r["record"]} for r in rejected]))
