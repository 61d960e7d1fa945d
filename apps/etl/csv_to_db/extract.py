# -*- coding: utf-8 -*-
"""
Read the emissions CSV and split it into company and emission frames.
- Header = 1st row. Values are trimmed; '' and 'undefined' count as missing.
- Rows without Company are dropped everywhere.
- Company attributes come from the company's first row, with defaults:
  Sector -> Other, Region -> Unknown, Ownership -> Public,
  Baseline Year -> 2020, Net Zero Year -> 2050.
- Rows without Year produce no emission record.
  Scope 1 / Scope 3 -> 0 when blank, Scope 2 -> NULL when blank.
- A value that is not a number raises (the import stops).

Requires: pandas>=2.2
"""

import math
from pathlib import Path
from typing import Any, Dict, List

import pandas as pd

CSV_COLUMNS = [
    "Company",
    "Sector",
    "Region",
    "Ownership",
    "Baseline Year",
    "Net Zero Year",
    "Interim Target Year",
    "Interim Reduction %",
    "Year",
    "Scope 1",
    "Scope 2",
    "Scope 3",
]

COMPANY_DEFAULTS = {
    "Sector": "Other",
    "Region": "Unknown",
    "Ownership": "Public",
    "Baseline Year": "2020",
    "Net Zero Year": "2050",
}

MISSING_MARKERS = {"", "undefined"}


def read_rows(csv_path: Path, encoding: str = "utf-8", sep: str = ",") -> pd.DataFrame:
    # keep as strings first; empty cells stay ''
    df = pd.read_csv(csv_path, encoding=encoding, sep=sep, dtype=str, keep_default_na=False)
    df.columns = [str(c).strip() for c in df.columns]
    if "Company" not in df.columns:
        raise ValueError(f"CSV has no 'Company' column: {csv_path}")

    for c in CSV_COLUMNS:
        if c not in df.columns:
            df[c] = ""

    df = df[CSV_COLUMNS].copy()
    for c in CSV_COLUMNS:
        s = df[c].astype(str).str.strip()
        df[c] = s.where(~s.isin(MISSING_MARKERS), "")

    return df[df["Company"] != ""].reset_index(drop=True)


def _numbers(s: pd.Series, column: str) -> pd.Series:
    try:
        return pd.to_numeric(s.replace({"": None}), errors="raise")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Non-numeric value in column '{column}': {e}") from e


def extract_companies(rows: pd.DataFrame) -> pd.DataFrame:
    first = rows.drop_duplicates(subset="Company", keep="first").reset_index(drop=True)
    for col, default in COMPANY_DEFAULTS.items():
        first[col] = first[col].replace({"": default})

    companies = pd.DataFrame({
        "id": range(1, len(first) + 1),
        "name": first["Company"],
        "sector": first["Sector"],
        "region": first["Region"],
        "ownership": first["Ownership"],
        "baseline_year": _numbers(first["Baseline Year"], "Baseline Year").astype("int64"),
        "net_zero_year": _numbers(first["Net Zero Year"], "Net Zero Year").astype("int64"),
        "interim_target_year": _numbers(first["Interim Target Year"], "Interim Target Year").astype("Int64"),
        "interim_reduction_percent": _numbers(first["Interim Reduction %"], "Interim Reduction %").astype("float64"),
    })
    return companies


def extract_emissions(rows: pd.DataFrame) -> pd.DataFrame:
    dated = rows[rows["Year"] != ""].reset_index(drop=True)
    emissions = pd.DataFrame({
        "company": dated["Company"],
        "year": _numbers(dated["Year"], "Year").astype("int64"),
        "scope_1": _numbers(dated["Scope 1"].replace({"": "0"}), "Scope 1").astype("float64"),
        "scope_2": _numbers(dated["Scope 2"], "Scope 2").astype("float64"),
        "scope_3": _numbers(dated["Scope 3"].replace({"": "0"}), "Scope 3").astype("float64"),
    })
    return emissions


def _native(v: Any) -> Any:
    if v is None or v is pd.NA:
        return None
    if isinstance(v, float) and math.isnan(v):
        return None
    if hasattr(v, "item"):  # numpy scalar
        return v.item()
    return v


def to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """DataFrame -> list of dicts with plain Python values and None for NA."""
    return [{k: _native(v) for k, v in row.items()} for row in df.to_dict("records")]
