"""
COVID-19 World Map Tracker Dashboard

Interactive Streamlit application showing the disease.sh per-country
statistics on a Leaflet map, with the global tracker panel underneath.
"""

import os
import sys
from datetime import datetime

import streamlit as st
import streamlit.components.v1 as components

# Add src directory to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))

from covid_map.config.logging_config import configure_logging, set_log_level
from covid_map.config.map_config import MapConfig

# Import our modules (after path setup)
from covid_map.data_loader import records_to_dataframe
from covid_map.map_renderer import render_map, render_map_html
from covid_map.pipeline import load_tracker_data

# Configure page
st.set_page_config(
    page_title="COVID-19 World Map Tracker",
    page_icon="🦠",
    layout="wide",
    initial_sidebar_state="expanded",
)

configure_logging(level="WARNING")

MAP_CONFIG = MapConfig()
VIEWER_LOCATION = "My location (browser)"


@st.cache_data(ttl=600)
def load_data():
    """Run one fetch cycle; cached so reruns don't hit the API again."""
    with st.spinner("Loading COVID-19 statistics..."):
        return load_tracker_data(MAP_CONFIG)


def country_locator(data, country_name):
    """Geolocation collaborator that resolves to the selected country's position."""

    def locate():
        for record in data.records:
            if record.country == country_name:
                return (record.country_info.lat, record.country_info.long)
        raise LookupError(f"Unknown country: {country_name}")

    return locate


def create_tracker_metrics(data):
    """Show the six summary rows as metrics, three per line."""
    for start in range(0, len(data.summary_rows), 3):
        columns = st.columns(3)
        for column, row in zip(columns, data.summary_rows[start : start + 3]):
            with column:
                st.metric(
                    label=row.primary.label,
                    value=row.primary.value,
                    help=f"{row.secondary.label}: {row.secondary.value}" if row.secondary else None,
                )

    st.caption(f"Last Updated: {data.last_updated}")


def create_world_map(data, center_on):
    """Render the folium map and embed it in the page."""
    locate = None if center_on == VIEWER_LOCATION else country_locator(data, center_on)
    m = render_map(data.collection, MAP_CONFIG, locate=locate)
    components.html(render_map_html(m), height=MAP_CONFIG.height_px)


def main():
    """Main dashboard application."""
    st.title("🦠 COVID-19 World Map Tracker")

    data = load_data()

    if not data.has_data:
        st.warning("Country statistics are currently unavailable. Showing an empty map.")

    # Sidebar options
    st.sidebar.header("🔍 Options")
    countries = [record.country for record in data.records]
    center_on = st.sidebar.selectbox(
        "Center map on:",
        [VIEWER_LOCATION] + countries,
        help="After the markers load, the map flies to this location",
    )

    verbose = st.sidebar.checkbox("Verbose logging", value=False)
    set_log_level("DEBUG" if verbose else "WARNING")

    if st.sidebar.button("🔄 Refresh data"):
        load_data.clear()
        st.rerun()

    tab1, tab2 = st.tabs(["🗺️ World Map", "📋 Raw Data"])

    with tab1:
        create_world_map(data, center_on)
        st.header("📈 Global Totals")
        create_tracker_metrics(data)

    with tab2:
        st.subheader("📋 Per-Country Statistics")
        df = records_to_dataframe(data.records)
        st.markdown(f"**Dataset Shape:** {df.shape[0]} rows × {df.shape[1]} columns")

        search_term = st.text_input("🔍 Search countries:", placeholder="Type country name...")
        if search_term:
            df = df[df["country"].str.contains(search_term, case=False, na=False)]
        st.dataframe(df, use_container_width=True)

        st.download_button(
            label="📥 Download as CSV",
            data=df.to_csv(index=False),
            file_name=f"covid_countries_{datetime.now().strftime('%Y%m%d')}.csv",
            mime="text/csv",
        )

    # Footer
    st.markdown("---")
    st.markdown("**Data Source:** [disease.sh API](https://disease.sh/)")


if __name__ == "__main__":
    main()
