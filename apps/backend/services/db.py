from functools import lru_cache

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from apps.backend.utils.config import database_url


def _enable_sqlite_foreign_keys(dbapi_conn, _record):
    cur = dbapi_conn.cursor()
    cur.execute("PRAGMA foreign_keys = ON")
    cur.close()


def build_engine(url: str | None = None, **kwargs) -> Engine:
    url = url or database_url()

    if url.startswith("sqlite"):
        # 로컬 실행/테스트용: 스레드풀 핸들러에서 같은 커넥션을 공유
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(url, future=True, connect_args=connect_args, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        future=True,
        pool_pre_ping=True,
        pool_size=5,         # 트래픽에 맞춰 조정
        max_overflow=5,
        pool_recycle=1800,   # 커넥션 오래되면 재생성
        **kwargs,
    )


@lru_cache(maxsize=1)
def get_engine() -> Engine:
    return build_engine()
