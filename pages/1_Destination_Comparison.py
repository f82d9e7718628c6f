# pages/1_Destination_Comparison.py
import streamlit as st
from loguru import logger

from config import REACH_MINUTES
from models.travel_time import destination_fields
from utils.data_loader import get_data_path, load_travel_times
from utils.summary import destination_comparison


@st.cache_data(show_spinner="🔧 Reading tracts & travel times...")
def load_base_data():
    return load_travel_times(get_data_path())


st.title("📋 Destination Comparison")

st.write(
    """
Walking access for every destination category at once: the median walking
time across tracts and the share of residents who can reach the nearest
destination on foot within the chosen number of minutes.
"""
)

# ------------------------------------------------------------------
# Sidebar controls
# ------------------------------------------------------------------
with st.sidebar:
    st.header("Comparison Parameters")

    reach_minutes = st.slider(
        "Within reach (minutes)",
        min_value=5,
        max_value=30,
        value=REACH_MINUTES,
        step=5,
    )

# ------------------------------------------------------------------
# Table
# ------------------------------------------------------------------
try:
    tracts = load_base_data()
except Exception as e:
    logger.exception("Data setup failed")
    st.error("Failed to load travel time data.")
    st.exception(e)
    st.stop()

destinations = destination_fields(tracts.columns)
table_df = destination_comparison(tracts, destinations, reach_minutes=reach_minutes)

st.dataframe(
    table_df.sort_values("Percent", ascending=False).style.format(
        {
            "Median (min)": "{:.1f}",
            f"Population within {reach_minutes} min": "{:,.0f}",
            "Percent": "{:.1f}",
        }
    )
)

csv_bytes = table_df.to_csv().encode("utf-8")
st.download_button(
    "Download destination comparison (CSV)",
    data=csv_bytes,
    file_name=f"destination_comparison_{reach_minutes}min.csv",
    mime="text/csv",
)
