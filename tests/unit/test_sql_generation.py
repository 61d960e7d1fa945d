"""Unit tests for schema and load-SQL rendering."""
from datetime import datetime, timezone

import pandas as pd
import pytest

from apps.etl.csv_to_db.extract import extract_companies, extract_emissions
from apps.etl.csv_to_db.generate_load_sql import build_load_sql, sql_literal
from db.tools.generate_schema_sql import build_schema_sql


class TestSchemaSql:
    def test_postgres_primary(self):
        ddl = build_schema_sql("postgresql")
        assert "id SERIAL PRIMARY KEY" in ddl
        assert "name TEXT NOT NULL UNIQUE" in ddl
        assert "REFERENCES companies(id) ON DELETE CASCADE" in ddl
        assert "UNIQUE (company_id, year)" in ddl
        assert "scope_2 DOUBLE PRECISION," in ddl

    def test_sqlite_primary(self):
        ddl = build_schema_sql("sqlite")
        assert "INTEGER PRIMARY KEY AUTOINCREMENT" in ddl
        assert "SERIAL" not in ddl

    def test_star_variant(self):
        ddl = build_schema_sql("postgresql", "star")
        for table in ("dim_sector", "dim_region", "dim_company", "dim_time", "fact_emission"):
            assert f"CREATE TABLE IF NOT EXISTS {table}" in ddl

    def test_unknown_dialect(self):
        with pytest.raises(ValueError):
            build_schema_sql("oracle")


class TestSqlLiteral:
    def test_values(self):
        assert sql_literal(None) == "NULL"
        assert sql_literal(float("nan")) == "NULL"
        assert sql_literal(pd.NA) == "NULL"
        assert sql_literal(2020) == "2020"
        assert sql_literal(12.5) == "12.5"
        assert sql_literal("O'Brien Ltd") == "'O''Brien Ltd'"


class TestBuildLoadSql:
    def test_statements(self, sample_rows):
        sql_text = build_load_sql(
            extract_companies(sample_rows),
            extract_emissions(sample_rows),
            generated_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        lines = sql_text.splitlines()
        assert lines[1] == "-- Date: 2024-01-01T00:00:00+00:00"
        company_inserts = [l for l in lines if l.startswith("INSERT INTO companies")]
        emission_inserts = [l for l in lines if l.startswith("INSERT INTO emissions")]
        assert len(company_inserts) == 6
        assert len(emission_inserts) == 8
        assert all(l.endswith("ON CONFLICT (name) DO NOTHING;") for l in company_inserts)
        assert (
            "INSERT INTO emissions (company_id, year, scope_1, scope_2, scope_3) "
            "SELECT id, 2022, 60.0, NULL, 100.0 FROM companies WHERE name = 'Green Corp';"
        ) in lines
