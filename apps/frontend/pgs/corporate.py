import pandas as pd
import streamlit as st

from apps.backend.services.errors import EmissionsError
from data import get_source
from utils.metrics import (
    calculate_net_zero_path,
    calculate_reduction,
    calculate_yoy_change,
    format_emissions_for_chart,
)

DEFAULT_COMPANY = "Climate Corp"
PEER_LIMIT = 4


def render():
    st.title("🏢 Corporate Sustainability Overview")
    source = get_source()

    try:
        companies = source.list_companies()
    except EmissionsError as e:
        st.error(f"Failed to load companies: {e}")
        return
    if not companies:
        st.info("No companies loaded yet. Run the CSV import first.")
        return

    names = [c["name"] for c in companies]
    index = names.index(DEFAULT_COMPANY) if DEFAULT_COMPANY in names else 0
    name = st.sidebar.selectbox("Company", names, index=index)

    try:
        detail = source.get_company(name)
    except EmissionsError as e:
        st.error(f"Failed to load {name}: {e}")
        return

    company, emissions = detail["company"], detail["emissions"]
    if not emissions:
        st.warning(f"{name} has no emission records.")
        return

    current = emissions[-1]["total"]
    baseline = detail["summary"]["baseline_emissions"]
    if baseline is None:
        baseline = emissions[0]["total"]
    reduction = calculate_reduction(baseline, current)

    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Sector", company["sector"])
    col2.metric(f"Baseline ({company['baseline_year']})", f"{baseline:,.0f} tCO2e")
    col3.metric(f"Current ({emissions[-1]['year']})", f"{current:,.0f} tCO2e")
    col4.metric("Reduction vs baseline", f"{reduction}%")

    # 배출 추이 vs 넷제로 선형 경로
    path = calculate_net_zero_path(company["baseline_year"], baseline, company["net_zero_year"])
    chart = pd.DataFrame(format_emissions_for_chart(emissions, path)).set_index("year")
    st.subheader(f"Emissions vs. net-zero path ({company['net_zero_year']})")
    st.line_chart(chart[["total", "target"]])

    st.subheader("Year over year")
    rows = []
    for i, e in enumerate(emissions):
        prev = emissions[i - 1]["total"] if i > 0 else None
        rows.append({
            "year": e["year"],
            "scope_1": e["scope_1"],
            "scope_2": e["scope_2"],
            "scope_3": e["scope_3"],
            "total": e["total"],
            "yoy_change_%": calculate_yoy_change(e["total"], prev),
        })
    st.dataframe(pd.DataFrame(rows), use_container_width=True)

    st.subheader(f"Peers in {company['sector']} ({emissions[-1]['year']})")
    try:
        peers = source.get_peers(name, limit=PEER_LIMIT, year=emissions[-1]["year"])["companies"]
    except EmissionsError as e:
        st.error(f"Failed to load peers: {e}")
        return
    if peers:
        st.bar_chart(pd.DataFrame(peers).set_index("name")["total_emissions"])
