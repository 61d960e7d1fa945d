#!/usr/bin/env python3
# generate_load_sql.py
# Create a single SQL file that:
#  - inserts every company once (first CSV row wins, existing names are kept)
#  - inserts one emissions row per (company, year), resolving company_id by name

import argparse
import math
import numbers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from apps.etl.csv_to_db.extract import extract_companies, extract_emissions, read_rows, to_records

COMPANY_INSERT_COLUMNS = [
  "name", "sector", "region", "ownership",
  "baseline_year", "net_zero_year", "interim_target_year", "interim_reduction_percent",
]


def sql_literal(v):
  if v is None or v is pd.NA:
    return "NULL"
  if isinstance(v, float) and math.isnan(v):
    return "NULL"
  if isinstance(v, numbers.Number) and not isinstance(v, bool):
    return str(v)
  s = str(v).replace("'", "''")
  return f"'{s}'"


def build_load_sql(companies: pd.DataFrame, emissions: pd.DataFrame, generated_at: datetime | None = None) -> str:
  generated_at = generated_at or datetime.now(timezone.utc)
  parts = [
    "-- load_from_csv.sql (generated)",
    f"-- Date: {generated_at.isoformat()}",
    "",
    "-- 1) companies",
  ]

  cols = ", ".join(COMPANY_INSERT_COLUMNS)
  for c in to_records(companies):
    values = ", ".join(sql_literal(c[k]) for k in COMPANY_INSERT_COLUMNS)
    parts.append(f"INSERT INTO companies ({cols}) VALUES ({values}) ON CONFLICT (name) DO NOTHING;")

  parts.append("")
  parts.append("-- 2) emissions")
  for e in to_records(emissions):
    values = ", ".join(sql_literal(e[k]) for k in ("year", "scope_1", "scope_2", "scope_3"))
    parts.append(
      "INSERT INTO emissions (company_id, year, scope_1, scope_2, scope_3) "
      f"SELECT id, {values} FROM companies WHERE name = {sql_literal(e['company'])};"
    )

  return "\n".join(parts) + "\n"


def main():
  ap = argparse.ArgumentParser(description="Render the companies/emissions load SQL from a CSV.")
  ap.add_argument("--csv", default=os.getenv("CSV_PATH"), help="CSV file path (or set CSV_PATH)")
  ap.add_argument("--out", default="load_from_csv.sql")
  ap.add_argument("--encoding", default=os.getenv("CSV_ENCODING", "utf-8"))
  ap.add_argument("--sep", default=os.getenv("CSV_SEP", ","))
  args = ap.parse_args()

  if not args.csv:
    ap.error("CSV path is required. Use --csv or set CSV_PATH.")
  csv_path = Path(os.path.expandvars(os.path.expanduser(args.csv)))
  if not csv_path.exists():
    print(f"[ERR] CSV not found: {csv_path}", file=sys.stderr); sys.exit(2)

  rows = read_rows(csv_path, encoding=args.encoding, sep=args.sep)
  companies = extract_companies(rows)
  emissions = extract_emissions(rows)

  with open(args.out, "w", encoding="utf-8") as f:
    f.write(build_load_sql(companies, emissions))

  print(f"[OK] wrote {args.out} (companies={len(companies)}, emissions={len(emissions)})")

if __name__ == "__main__":
  main()
