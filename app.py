# ============================================
# Walking Access – Streamlit Web App
# Tract choropleth of walking time to selected destinations
# ============================================

# 1) Imports
import warnings

import pandas as pd
import streamlit as st
from loguru import logger
from streamlit_folium import folium_static

from config import ID_FIELD, MAP_HEIGHT, MAP_WIDTH, POPULATION_FIELD, TT_FIELD
from models.color_scheme import TRAVEL_TIME_SCHEME
from models.travel_time import (
    SelectionState, apply_selection, default_selection, destination_fields,
)
from utils.data_loader import get_data_path, load_travel_times
from utils.summary import population_by_class
from utils.visualization import build_walking_map

warnings.filterwarnings("ignore")

# ============================================
# 2) Data setup
# ============================================

@st.cache_resource(show_spinner="📥 Fetching travel time data...")
def setup_data_environment():
    return get_data_path()


@st.cache_data(show_spinner="🔧 Reading tracts & travel times...")
def load_base_data(data_path):
    return load_travel_times(data_path)


# ============================================
# 3) Controls
# ============================================

def destination_checkboxes(destinations):
    """One sidebar checkbox per destination; returns the SelectionState."""
    defaults = set(default_selection(destinations))
    labels = SelectionState.from_destinations(destinations).labels

    st.sidebar.header("Destinations")
    ticked = [
        d for d in destinations
        if st.sidebar.checkbox(labels[d], value=d in defaults, key=f"dest_{d}")
    ]
    return SelectionState.from_destinations(destinations, ticked)


# ============================================
# 4) Streamlit App
# ============================================

def main():
    st.set_page_config(layout="wide")
    st.title("🚶 Walking Access – Travel Time Map")

    try:
        data_path = setup_data_environment()
        tracts = load_base_data(data_path)
    except Exception as e:
        logger.exception("Data setup failed")
        st.error("Failed to load travel time data.")
        st.exception(e)
        return

    destinations = destination_fields(tracts.columns)
    selection = destination_checkboxes(destinations)

    if selection.is_empty:
        st.info("Tick one or more destinations in the sidebar to colour the map.")
    else:
        names = ", ".join(selection.labels[d] for d in selection.selected)
        st.markdown(f"### 📊 Walking time to the slowest of: **{names}**")

    # --- Map ---
    result = apply_selection(tracts, selection.selected, column=TT_FIELD)
    walking_map = build_walking_map(result, selection, TRAVEL_TIME_SCHEME)
    folium_static(walking_map, width=MAP_WIDTH, height=MAP_HEIGHT)

    if selection.is_empty:
        return

    # --- Population distribution ---
    st.subheader("Population by Walking Time")
    dist_df = population_by_class(result, TRAVEL_TIME_SCHEME, column=TT_FIELD)
    st.table(dist_df.style.format({"Population": "{:,.0f}", "Percent": "{:.1f}"}))

    # --- Download ---
    export_cols = [ID_FIELD, POPULATION_FIELD, *selection.selected, TT_FIELD]
    export_cols = [c for c in export_cols if c in result.columns]
    export_df = pd.DataFrame(result[export_cols])

    csv_data = export_df.to_csv(index=False).encode("utf-8")
    st.download_button(
        label="Download tract walking times (CSV)",
        data=csv_data,
        file_name=f"walking_times_{'_'.join(selection.selected)}.csv",
        mime="text/csv",
    )


if __name__ == "__main__":
    main()
