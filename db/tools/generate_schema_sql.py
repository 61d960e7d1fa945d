#!/usr/bin/env python3
# generate_schema_sql.py
# Create a SQL file that defines the emissions dashboard schema.
#  - primary: companies + emissions (what the API queries)
#  - star:    dim_sector / dim_region / dim_company / dim_time + fact_emission
#             (documented alternative, not read by the API)

import argparse

DIALECT_TYPES = {
  "postgresql": {
    "id": "SERIAL PRIMARY KEY",
    "real": "DOUBLE PRECISION",
    "timestamp": "TIMESTAMPTZ DEFAULT NOW()",
  },
  "sqlite": {
    "id": "INTEGER PRIMARY KEY AUTOINCREMENT",
    "real": "REAL",
    "timestamp": "DATETIME DEFAULT CURRENT_TIMESTAMP",
  },
}

PRIMARY_SQL = r"""
-- schema.sql (generated, {dialect})
-- companies (dimension) + emissions (fact), one row per (company, year)

CREATE TABLE IF NOT EXISTS companies (
  id {id},
  name TEXT NOT NULL UNIQUE,
  sector TEXT NOT NULL,
  region TEXT NOT NULL,
  ownership TEXT NOT NULL,
  baseline_year INTEGER NOT NULL,
  net_zero_year INTEGER NOT NULL,
  interim_target_year INTEGER,
  interim_reduction_percent {real},
  created_at {timestamp}
);

CREATE TABLE IF NOT EXISTS emissions (
  id {id},
  company_id INTEGER NOT NULL REFERENCES companies(id) ON DELETE CASCADE,
  year INTEGER NOT NULL,
  scope_1 {real} NOT NULL,
  scope_2 {real},
  scope_3 {real} NOT NULL,
  created_at {timestamp},
  CONSTRAINT uq_emissions_company_year UNIQUE (company_id, year)
);

CREATE INDEX IF NOT EXISTS idx_company_name ON companies(name);
CREATE INDEX IF NOT EXISTS idx_company_sector ON companies(sector);
CREATE INDEX IF NOT EXISTS idx_company_region ON companies(region);
CREATE INDEX IF NOT EXISTS idx_company_ownership ON companies(ownership);
CREATE INDEX IF NOT EXISTS idx_emissions_company ON emissions(company_id);
CREATE INDEX IF NOT EXISTS idx_emissions_year ON emissions(year);
CREATE INDEX IF NOT EXISTS idx_emissions_company_year ON emissions(company_id, year);
"""

STAR_SQL = r"""
-- schema_star.sql (generated, {dialect})
-- Normalized star schema: sector/region move into their own dimensions

CREATE TABLE IF NOT EXISTS dim_sector (
  sector_id {id},
  name      TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS dim_region (
  region_id {id},
  name      TEXT NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS dim_company (
  company_id  {id},
  name        TEXT NOT NULL UNIQUE,
  sector_id   INTEGER NOT NULL REFERENCES dim_sector(sector_id) ON UPDATE CASCADE ON DELETE RESTRICT,
  region_id   INTEGER NOT NULL REFERENCES dim_region(region_id) ON UPDATE CASCADE ON DELETE RESTRICT,
  ownership   TEXT NOT NULL,
  baseline_year INTEGER NOT NULL,
  net_zero_year INTEGER NOT NULL,
  interim_target_year INTEGER,
  interim_reduction_percent {real}
);

CREATE TABLE IF NOT EXISTS dim_time (
  year INTEGER PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS fact_emission (
  company_id INTEGER NOT NULL REFERENCES dim_company(company_id) ON UPDATE CASCADE ON DELETE CASCADE,
  year       INTEGER NOT NULL REFERENCES dim_time(year) ON UPDATE CASCADE ON DELETE RESTRICT,
  scope_1    {real} NOT NULL,
  scope_2    {real},
  scope_3    {real} NOT NULL,
  updated_at {timestamp},
  CONSTRAINT fact_emission_pkey PRIMARY KEY (company_id, year)
);

CREATE INDEX IF NOT EXISTS idx_fact_year ON fact_emission(year);
CREATE INDEX IF NOT EXISTS idx_dim_company_sector ON dim_company(sector_id);
CREATE INDEX IF NOT EXISTS idx_dim_company_region ON dim_company(region_id);
"""

VARIANTS = {"primary": PRIMARY_SQL, "star": STAR_SQL}


def build_schema_sql(dialect: str = "postgresql", variant: str = "primary") -> str:
  if dialect not in DIALECT_TYPES:
    raise ValueError(f"unsupported dialect: {dialect} (choose from {', '.join(DIALECT_TYPES)})")
  if variant not in VARIANTS:
    raise ValueError(f"unknown schema variant: {variant} (choose from {', '.join(VARIANTS)})")
  return VARIANTS[variant].format(dialect=dialect, **DIALECT_TYPES[dialect]).strip() + "\n"


def main():
  ap = argparse.ArgumentParser(description="Write the emissions schema DDL to a file.")
  ap.add_argument("--out", default="schema.sql")
  ap.add_argument("--dialect", default="postgresql", choices=sorted(DIALECT_TYPES))
  ap.add_argument("--variant", default="primary", choices=sorted(VARIANTS))
  args = ap.parse_args()
  with open(args.out, "w", encoding="utf-8") as f:
    f.write(build_schema_sql(args.dialect, args.variant))
  print(f"[OK] wrote {args.out} ({args.variant}, {args.dialect})")

if __name__ == "__main__":
  main()
