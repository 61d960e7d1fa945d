"""Pytest configuration and fixtures."""
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from apps.backend.main import create_app
from apps.backend.services.db import build_engine
from apps.backend.services.memory_source import InMemoryEmissionsSource
from apps.backend.services.sql_source import SqlEmissionsSource
from apps.etl.csv_to_db.extract import extract_companies, extract_emissions, read_rows
from apps.etl.csv_to_db.generate_load_sql import build_load_sql
from db.tools.execute_sql_file import execute_sql
from db.tools.generate_schema_sql import build_schema_sql

SEED = 7

SAMPLE_CSV = """\
Company,Sector,Region,Ownership,Baseline Year,Net Zero Year,Interim Target Year,Interim Reduction %,Year,Scope 1,Scope 2,Scope 3
Climate Corp,Technology,North America,Public,2020,2050,2030,50,2020,100,50,200
Climate Corp,Technology,North America,Public,2020,2050,2030,50,2022,80,40,150
Green Corp,Technology,Europe,Private,2019,2045,,,2022,60,,100
Blue Systems,Technology,Europe,Public,2020,2050,,,2022,30,10,60
Orbit Tech,Technology,Asia Pacific,Public,2021,2040,,,2022,20,5,25
Steel Works,Industrials,Europe,Public,,,,,2021,550,110,950
Steel Works,Industrials,Europe,Public,,,,,2022,500,100,900
,Energy,Europe,Public,2020,2050,,,2022,999,999,999
Solar Corp,Energy,Asia Pacific,,2020,2050,,,2020,10,,5
"""

# 2022 totals: Climate 270, Green 160, Blue 100, Orbit 50, Steel 1500
TOTALS_2022 = {
    "Climate Corp": 270.0,
    "Green Corp": 160.0,
    "Blue Systems": 100.0,
    "Orbit Tech": 50.0,
    "Steel Works": 1500.0,
}


@pytest.fixture
def sample_csv(tmp_path) -> Path:
    """Sample emissions CSV written to a temp dir."""
    path = tmp_path / "emissions.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def sample_rows(sample_csv):
    return read_rows(sample_csv)


@pytest.fixture
def memory_source(sample_rows) -> InMemoryEmissionsSource:
    return InMemoryEmissionsSource(
        extract_companies(sample_rows),
        extract_emissions(sample_rows),
        seed=SEED,
    )


@pytest.fixture
def sqlite_engine(tmp_path):
    """Empty SQLite database with the primary schema applied."""
    engine = build_engine(f"sqlite:///{tmp_path / 'emissions.db'}")
    execute_sql(engine, build_schema_sql("sqlite"))
    yield engine
    engine.dispose()


@pytest.fixture
def loaded_engine(sqlite_engine, sample_rows):
    sql_text = build_load_sql(extract_companies(sample_rows), extract_emissions(sample_rows))
    execute_sql(sqlite_engine, sql_text)
    return sqlite_engine


@pytest.fixture
def sql_source(loaded_engine) -> SqlEmissionsSource:
    return SqlEmissionsSource(loaded_engine, seed=SEED)


@pytest.fixture(params=["memory", "sql"])
def source(request):
    """Run a test once per adapter."""
    return request.getfixturevalue(f"{request.param}_source")


@pytest.fixture
def client(source):
    return TestClient(create_app(source=source))
