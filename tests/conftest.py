import asyncpg
import pytest
import pytest_asyncio
from dotenv import load_dotenv

load_dotenv()

# Allow tests to import project modules without installing a package
import sys
from pathlib import Path
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from vectorwire import config
from vectorwire.db import register_vector


@pytest.fixture(autouse=True)
def empty_policy(monkeypatch):
    # Tests start from the default policy regardless of the local .env
    monkeypatch.setattr(config, "ALLOW_EMPTY", False)


@pytest_asyncio.fixture(scope="function")
async def db_pool():
    try:
        conn = await asyncpg.connect(config.DB_DSN, ssl=False, timeout=5)
    except (OSError, asyncpg.PostgresError) as exc:
        pytest.skip(f"PostgreSQL not reachable at {config.DB_HOST}:{config.DB_PORT}: {exc}")
    try:
        await conn.execute("CREATE EXTENSION IF NOT EXISTS vector")
    except asyncpg.PostgresError as exc:
        pytest.skip(f"vector extension unavailable: {exc}")
    finally:
        await conn.close()

    pool = await asyncpg.create_pool(
        config.DB_DSN,
        ssl=False,
        min_size=1,
        max_size=4,
        command_timeout=60.0,
        init=register_vector,
    )
    yield pool
    await pool.close()
