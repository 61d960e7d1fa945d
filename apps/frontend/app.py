import streamlit as st
import pgs.corporate as corporate
import pgs.investor as investor

st.set_page_config(page_title="Emissions Dashboard", layout="wide")

page = st.sidebar.radio("View", [
    "Corporate",
    "Investor",
])

if page == "Corporate":
    corporate.render()
elif page == "Investor":
    investor.render()
