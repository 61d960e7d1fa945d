import logging
from typing import List, Optional

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from apps.backend.services.errors import InternalError, NotFoundError
from apps.backend.services.source import (
    DEFAULT_PEER_LIMIT,
    SEARCH_LIMIT,
    Row,
    blank_to_none,
    build_peer_result,
    check_limit,
    current_year,
    summarize,
)

logger = logging.getLogger(__name__)

COMPANY_FIELDS = """
    c.id, c.name, c.sector, c.region, c.ownership,
    c.baseline_year, c.net_zero_year,
    c.interim_target_year, c.interim_reduction_percent
"""

TOTAL_EXPR = "(e.scope_1 + COALESCE(e.scope_2, 0) + e.scope_3)"

LIST_COMPANIES_SQL = f"""
    SELECT
      {COMPANY_FIELDS},
      COUNT(e.id) AS emission_records,
      MIN(e.year) AS first_year,
      MAX(e.year) AS latest_year
    FROM companies c
    LEFT JOIN emissions e ON c.id = e.company_id
    GROUP BY {COMPANY_FIELDS}
    ORDER BY c.name
"""

COMPANY_BY_NAME_SQL = f"SELECT {COMPANY_FIELDS} FROM companies c WHERE c.name = :name"

COMPANY_EMISSIONS_SQL = f"""
    SELECT
      e.year,
      e.scope_1,
      e.scope_2,
      e.scope_3,
      {TOTAL_EXPR} AS total
    FROM emissions e
    WHERE e.company_id = :company_id
    ORDER BY e.year
"""

# 현재 회사 + 같은 섹터 후보를 한 번에 조회, 샘플링은 파이썬에서
SECTOR_YEAR_SQL = f"""
    SELECT
      c.name,
      c.sector,
      c.region,
      {TOTAL_EXPR} AS total_emissions
    FROM companies c
    JOIN emissions e ON c.id = e.company_id
    WHERE c.sector = :sector AND e.year = :year
    ORDER BY c.name
"""

ROLLUP_SQL = """
    SELECT
      c.{key},
      COUNT(DISTINCT c.id) AS company_count,
      SUM(e.scope_1) AS total_scope_1,
      SUM(COALESCE(e.scope_2, 0)) AS total_scope_2,
      SUM(e.scope_3) AS total_scope_3,
      SUM({total}) AS total_emissions,
      AVG({total}) AS avg_emissions
    FROM companies c
    JOIN emissions e ON c.id = e.company_id
    WHERE e.year = :year
    GROUP BY c.{key}
    ORDER BY total_emissions DESC, c.{key}
"""

YEARS_SQL = "SELECT DISTINCT year FROM emissions ORDER BY year DESC"

STATS_SQL = """
    SELECT
      (SELECT COUNT(*) FROM companies) AS total_companies,
      (SELECT COUNT(*) FROM emissions) AS total_emissions_records,
      (SELECT COUNT(DISTINCT sector) FROM companies) AS total_sectors,
      (SELECT COUNT(DISTINCT region) FROM companies) AS total_regions,
      (SELECT MIN(year) FROM emissions) AS earliest_year,
      (SELECT MAX(year) FROM emissions) AS latest_year
"""

# Case-sensitive substring test; LIKE folds ASCII case on SQLite.
SUBSTRING_TESTS = {
    "sqlite": "instr(c.name, :q) > 0",
    "postgresql": "strpos(c.name, :q) > 0",
}


class SqlEmissionsSource:
    """EmissionsSource backed by the companies/emissions tables."""

    def __init__(self, engine: Engine, seed: Optional[int] = None):
        self.engine = engine
        self.seed = seed

    # ---------- query helpers ----------
    def _all(self, conn, sql: str, **params) -> List[Row]:
        return [dict(r) for r in conn.execute(text(sql), params).mappings()]

    def _first(self, conn, sql: str, **params) -> Optional[Row]:
        row = conn.execute(text(sql), params).mappings().first()
        return dict(row) if row is not None else None

    def _run(self, fn):
        try:
            with self.engine.connect() as conn:
                return fn(conn)
        except SQLAlchemyError as e:
            logger.error("Query failed: %s", e)
            raise InternalError(str(e)) from e

    def _company(self, conn, name: str) -> Row:
        company = self._first(conn, COMPANY_BY_NAME_SQL, name=name)
        if company is None:
            raise NotFoundError("Company not found")
        return company

    # ---------- operations ----------
    def list_companies(self) -> List[Row]:
        return self._run(lambda conn: self._all(conn, LIST_COMPANIES_SQL))

    def get_company(self, name: str) -> Row:
        def query(conn):
            company = self._company(conn, name)
            emissions = self._all(conn, COMPANY_EMISSIONS_SQL, company_id=company["id"])
            return {
                "company": company,
                "emissions": emissions,
                "summary": summarize(company, emissions),
            }

        return self._run(query)

    def get_peers(self, name, limit=DEFAULT_PEER_LIMIT, year=None, seed=None) -> Row:
        year = current_year() if year is None else year
        seed = self.seed if seed is None else seed

        def query(conn):
            company = self._company(conn, name)
            check_limit(limit)
            rows = self._all(conn, SECTOR_YEAR_SQL, sector=company["sector"], year=year)
            return build_peer_result(name, company["sector"], year, rows, limit, seed)

        return self._run(query)

    def get_sector_rollup(self, year: int) -> List[Row]:
        return self._rollup("sector", year)

    def get_region_rollup(self, year: int) -> List[Row]:
        return self._rollup("region", year)

    def _rollup(self, key: str, year: int) -> List[Row]:
        sql = ROLLUP_SQL.format(key=key, total=TOTAL_EXPR)
        return self._run(lambda conn: self._all(conn, sql, year=year))

    def search(self, q=None, sector=None, region=None) -> List[Row]:
        q, sector, region = blank_to_none(q), blank_to_none(sector), blank_to_none(region)

        filters, params = [], {"limit": SEARCH_LIMIT}
        if q:
            filters.append(SUBSTRING_TESTS.get(self.engine.dialect.name, "c.name LIKE '%' || :q || '%'"))
            params["q"] = q
        if sector:
            filters.append("c.sector = :sector")
            params["sector"] = sector
        if region:
            filters.append("c.region = :region")
            params["region"] = region

        where = ("WHERE " + " AND ".join(filters)) if filters else ""
        sql = f"SELECT {COMPANY_FIELDS} FROM companies c {where} ORDER BY c.name LIMIT :limit"
        return self._run(lambda conn: self._all(conn, sql, **params))

    def list_years(self) -> List[int]:
        return self._run(lambda conn: [r["year"] for r in self._all(conn, YEARS_SQL)])

    def get_stats(self) -> Row:
        return self._run(lambda conn: self._first(conn, STATS_SQL))

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Database ping failed: %s", e)
            return False
