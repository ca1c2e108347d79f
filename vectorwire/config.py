import os

from dotenv import load_dotenv


load_dotenv()


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# Connection details for the asyncpg adapter; .env values are honored.
DB_USER = os.getenv("POSTGRES_USER", "postgres")
DB_PASSWORD = os.getenv("POSTGRES_PASSWORD", "password")
DB_NAME = os.getenv("POSTGRES_DB", "postgres")
DB_HOST = os.getenv("POSTGRES_HOST", "127.0.0.1")
DB_PORT = int(os.getenv("POSTGRES_PORT", "5432"))
DB_DSN = os.getenv(
    "VECTORWIRE_DSN",
    f"postgresql://{DB_USER}:{DB_PASSWORD}@{DB_HOST}:{DB_PORT}/{DB_NAME}",
)

POOL_MIN_SIZE = int(os.getenv("VECTORWIRE_POOL_MIN", "1"))
POOL_MAX_SIZE = int(os.getenv("VECTORWIRE_POOL_MAX", "10"))

# When set, zero-length vectors are encoded and left for the server to reject.
ALLOW_EMPTY = _env_flag("VECTORWIRE_ALLOW_EMPTY")


def allow_empty(override: "bool | None" = None) -> bool:
    """Resolve the empty-vector policy for a single encode call."""
    if override is not None:
        return override
    return ALLOW_EMPTY
