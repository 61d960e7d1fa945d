import pandas as pd
import streamlit as st

from apps.backend.services.errors import EmissionsError
from data import get_source, load_rollups
from utils.metrics import scope_breakdown, share_of_total


def _rollup_table(rollups, key, grand_total):
    df = pd.DataFrame(rollups)
    df["% of Total"] = [share_of_total(v, grand_total) for v in df["total_emissions"]]
    return df[[key, "company_count", "total_emissions", "avg_emissions", "% of Total"]]


def render():
    st.title("📊 Market Intelligence & Analytics")
    source = get_source()

    try:
        years = source.list_years()
        if not years:
            st.info("No emission records loaded yet.")
            return
        year = st.sidebar.selectbox("Year", years, index=0)
        sectors, regions = load_rollups(year)
    except EmissionsError as e:
        st.error(f"Failed to load aggregates: {e}")
        return

    total = sum(s["total_emissions"] for s in sectors)
    companies = sum(s["company_count"] for s in sectors)

    col1, col2, col3 = st.columns(3)
    col1.metric("Total emissions", f"{total:,.0f} tCO2e")
    col2.metric("Companies reporting", companies)
    col3.metric("Sectors", len(sectors))

    st.subheader("Scope breakdown")
    breakdown = scope_breakdown(sectors)
    st.dataframe(pd.DataFrame(breakdown), use_container_width=True)

    tab_sectors, tab_regions = st.tabs(["Sectors", "Regions"])
    with tab_sectors:
        if sectors:
            st.bar_chart(pd.DataFrame(sectors).set_index("sector")["total_emissions"])
            st.dataframe(_rollup_table(sectors, "sector", total), use_container_width=True)
    with tab_regions:
        if regions:
            st.bar_chart(pd.DataFrame(regions).set_index("region")["total_emissions"])
            st.dataframe(_rollup_table(regions, "region", total), use_container_width=True)
