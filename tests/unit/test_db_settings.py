"""The CLI tools must resolve the same database as the API."""
import sys

from sqlalchemy import text

from apps.backend.utils import config
from db.tools import execute_sql_file
from db.tools.execute_sql_file import get_engine


class TestGetEngine:
    def test_defaults_to_api_database_url(self, monkeypatch):
        monkeypatch.setattr(config, "DATABASE_URL", None)
        monkeypatch.setattr(config, "DB_HOST", "db.internal")
        monkeypatch.setattr(config, "DB_NAME", "emissions_prod")
        engine = get_engine(None)
        try:
            assert engine.url.render_as_string(hide_password=False) == config.database_url()
            assert engine.url.host == "db.internal"
            assert engine.url.database == "emissions_prod"
        finally:
            engine.dispose()

    def test_database_url_setting_wins(self, monkeypatch, tmp_path):
        url = f"sqlite:///{tmp_path / 'x.db'}"
        monkeypatch.setattr(config, "DATABASE_URL", url)
        engine = get_engine(None)
        try:
            assert engine.dialect.name == "sqlite"
            assert str(engine.url) == url
        finally:
            engine.dispose()

    def test_explicit_dsn(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'y.db'}"
        engine = get_engine(url)
        try:
            assert str(engine.url) == url
        finally:
            engine.dispose()


def test_cli_runs_against_configured_database(monkeypatch, tmp_path):
    db_path = tmp_path / "x.db"
    sql_path = tmp_path / "s.sql"
    sql_path.write_text("CREATE TABLE t (id INTEGER);\nINSERT INTO t VALUES (1);\n", encoding="utf-8")
    monkeypatch.setattr(config, "DATABASE_URL", f"sqlite:///{db_path}")
    monkeypatch.setattr(sys, "argv", ["execute_sql_file.py", "--sql", str(sql_path)])

    execute_sql_file.main()

    assert db_path.exists()
    engine = get_engine(f"sqlite:///{db_path}")
    try:
        with engine.connect() as conn:
            assert conn.execute(text("SELECT COUNT(*) FROM t")).scalar_one() == 1
    finally:
        engine.dispose()
