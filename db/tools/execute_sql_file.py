#!/usr/bin/env python3
# execute_sql_file.py
# Execute a .sql file (schema or generated load script) in one transaction.

import argparse
import os
import sys

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from apps.backend.services.db import build_engine
from apps.backend.utils.config import database_url


def get_engine(dsn: str | None = None) -> Engine:
  # --dsn 없으면 API와 같은 설정(DATABASE_URL, DB_*)을 사용
  return build_engine(dsn or database_url())


def ping(engine: Engine) -> bool:
  try:
    with engine.connect() as conn:
      conn.execute(text("SELECT 1"))
    return True
  except SQLAlchemyError:
    return False


def execute_sql(engine: Engine, sql_text: str) -> None:
  """
  Run a multi-statement script atomically; any failure rolls everything back
  and propagates.
  """
  if engine.dialect.name == "sqlite":
    # sqlite3 runs one statement per execute(); executescript takes the whole file
    raw = engine.raw_connection()
    try:
      raw.driver_connection.executescript("BEGIN;\n" + sql_text + "\nCOMMIT;")
    except Exception:
      raw.rollback()
      raise
    finally:
      raw.close()
    return

  # exec_driver_sql: no bind-param parsing, so ':' inside literals is safe
  with engine.begin() as conn:
    conn.exec_driver_sql(sql_text)


def main():
  ap = argparse.ArgumentParser()
  ap.add_argument("--dsn", default=None, help="SQLAlchemy URL (default: DATABASE_URL or DB_* settings)")
  ap.add_argument("--sql", required=True, help="Path to .sql file")
  args = ap.parse_args()

  if not os.path.exists(args.sql):
    print(f"[ERR] SQL file not found: {args.sql}", file=sys.stderr)
    sys.exit(2)

  engine = get_engine(args.dsn)
  with open(args.sql, "r", encoding="utf-8") as f:
    sql_text = f.read()
  execute_sql(engine, sql_text)
  print(f"[OK] executed {args.sql}")

if __name__ == "__main__":
  main()
