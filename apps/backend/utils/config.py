import os
from dotenv import load_dotenv

load_dotenv()


def _int_or_none(v):
    if v is None or not v.strip():
        return None
    return int(v)


API_NAME = "Emissions API"
API_VERSION = "1.0.0"

# DATABASE_URL 직접 쓰거나, 개별 변수로 조합
DATABASE_URL = os.getenv("DATABASE_URL")
DB_HOST = os.getenv("DB_HOST", "127.0.0.1")
DB_PORT = int(os.getenv("DB_PORT", "5432"))
DB_NAME = os.getenv("DB_NAME", "appdb")
DB_USER = os.getenv("DB_USER", "app")
DB_PASSWORD = os.getenv("DB_PASSWORD", "apppw")

# "sql" -> SqlEmissionsSource, "csv" -> InMemoryEmissionsSource
DATA_SOURCE = os.getenv("DATA_SOURCE", "sql").strip().lower()
CSV_PATH = os.getenv("CSV_PATH", "data/emissions.csv")
CSV_ENCODING = os.getenv("CSV_ENCODING", "utf-8")

PEER_SAMPLE_SEED = _int_or_none(os.getenv("PEER_SAMPLE_SEED"))
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


def database_url() -> str:
    return DATABASE_URL or f"postgresql+psycopg://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}"
