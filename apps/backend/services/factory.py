from typing import Optional

from apps.backend.services.db import get_engine
from apps.backend.services.memory_source import InMemoryEmissionsSource
from apps.backend.services.source import EmissionsSource
from apps.backend.services.sql_source import SqlEmissionsSource
from apps.backend.utils.config import CSV_ENCODING, CSV_PATH, DATA_SOURCE, PEER_SAMPLE_SEED


def build_source(kind: Optional[str] = None) -> EmissionsSource:
    """Pick the adapter named by DATA_SOURCE ("sql" or "csv")."""
    kind = (kind or DATA_SOURCE).lower()
    if kind == "sql":
        return SqlEmissionsSource(get_engine(), seed=PEER_SAMPLE_SEED)
    if kind == "csv":
        return InMemoryEmissionsSource.from_csv(CSV_PATH, encoding=CSV_ENCODING, seed=PEER_SAMPLE_SEED)
    raise ValueError(f"Unknown DATA_SOURCE: {kind!r} (expected 'sql' or 'csv')")
