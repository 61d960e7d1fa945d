# -*- coding: utf-8 -*-
"""
Import the emissions CSV into the companies / emissions tables.
- CSV -> companies + emissions frames (see extract.py)
- frames -> one SQL script, written to --sql-out first
- script executed in a single transaction
- success: script removed, row counts printed
- failure: stop at once, rollback, script kept on disk for inspection, exit 1

Requires: pandas>=2.2, SQLAlchemy>=2.0, psycopg[binary]>=3.2, python-dotenv
"""

import argparse
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy import text
from sqlalchemy.engine import Engine

from apps.etl.csv_to_db.extract import extract_companies, extract_emissions, read_rows
from apps.etl.csv_to_db.generate_load_sql import build_load_sql
from db.tools.execute_sql_file import execute_sql, get_engine
from db.tools.generate_schema_sql import build_schema_sql

load_dotenv()


@dataclass
class ImportResult:
    companies: int
    emissions: int
    sql_path: Path


def run_import(
    csv_path: Path,
    engine: Engine,
    sql_path: Path,
    encoding: str = "utf-8",
    sep: str = ",",
    create_schema: bool = False,
) -> ImportResult:
    rows = read_rows(csv_path, encoding=encoding, sep=sep)
    companies = extract_companies(rows)
    emissions = extract_emissions(rows)

    sql_text = build_load_sql(companies, emissions)
    sql_path.write_text(sql_text, encoding="utf-8")

    if create_schema:
        execute_sql(engine, build_schema_sql(engine.dialect.name))
    execute_sql(engine, sql_text)

    sql_path.unlink()
    return ImportResult(companies=len(companies), emissions=len(emissions), sql_path=sql_path)


def verify(engine: Engine) -> None:
    with engine.connect() as conn:
        n_companies = conn.execute(text("SELECT COUNT(*) FROM companies")).scalar_one()
        n_emissions = conn.execute(text("SELECT COUNT(*) FROM emissions")).scalar_one()
        sample = conn.execute(text("SELECT name, sector, region FROM companies ORDER BY name LIMIT 3")).all()
    print(f"[INFO] companies in DB: {n_companies:,}")
    print(f"[INFO] emissions in DB: {n_emissions:,}")
    for name, sector, region in sample:
        print(f"[INFO]   {name} | {sector} | {region}")


def main():
    ap = argparse.ArgumentParser(description="Load the emissions CSV into the database.")
    ap.add_argument("--csv", default=os.getenv("CSV_PATH"), help="CSV file path (or set CSV_PATH)")
    ap.add_argument("--dsn", default=None, help="SQLAlchemy URL (default: DATABASE_URL or DB_* settings)")
    ap.add_argument("--sql-out", default="temp-import.sql", help="Where the generated SQL is written")
    ap.add_argument("--encoding", default=os.getenv("CSV_ENCODING", "utf-8"), help="CSV encoding (default: utf-8 or CSV_ENCODING)")
    ap.add_argument("--sep", default=os.getenv("CSV_SEP", ","), help="CSV separator (default: ',' or CSV_SEP)")
    ap.add_argument("--create-schema", action="store_true", help="Create tables first (IF NOT EXISTS)")
    args = ap.parse_args()

    if not args.csv:
        ap.error("CSV path is required. Use --csv or set CSV_PATH.")
    csv_path = Path(os.path.expandvars(os.path.expanduser(args.csv)))
    if not csv_path.exists():
        print(f"[ERR] CSV not found: {csv_path}", file=sys.stderr); sys.exit(2)

    sql_path = Path(args.sql_out)
    engine = get_engine(args.dsn)
    try:
        result = run_import(csv_path, engine, sql_path, args.encoding, args.sep, args.create_schema)
    except Exception as e:
        print(f"[ERR] import failed: {e}", file=sys.stderr)
        if sql_path.exists():
            print(f"[INFO] SQL file kept at {sql_path} for inspection", file=sys.stderr)
        sys.exit(1)

    print(f"[OK] Loaded {result.companies:,} companies / {result.emissions:,} emission rows")
    verify(engine)


if __name__ == "__main__":
    main()
