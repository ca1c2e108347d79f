"""asyncpg adapter: install the binary codecs on connections and pools."""
import asyncio
import logging
import weakref
from typing import Optional

import asyncpg

from . import config
from .registry import CODECS

logger = logging.getLogger(__name__)

# `bit` is a core PostgreSQL type; the other three come from the extension.
_TYPE_SCHEMAS = {"bit": "pg_catalog"}

_pools: "weakref.WeakKeyDictionary[asyncio.AbstractEventLoop, asyncpg.pool.Pool]" = weakref.WeakKeyDictionary()


async def register_vector(conn: asyncpg.connection.Connection, schema: str = "public") -> list[str]:
    """
    Register binary codecs for vector, halfvec, sparsevec and bit on `conn`.

    Types missing from the server (older extension versions lack halfvec and
    sparsevec) are skipped. Returns the type names that were registered.
    """
    registered = []
    for codec in CODECS.values():
        type_schema = _TYPE_SCHEMAS.get(codec.type_name, schema)
        try:
            await conn.set_type_codec(
                codec.type_name,
                schema=type_schema,
                encoder=codec.encode,
                decoder=codec.decode,
                format="binary",
            )
        except ValueError:
            # asyncpg raises ValueError for types it cannot find in the catalog
            logger.debug("type %s.%s not found; skipping codec", type_schema, codec.type_name)
            continue
        registered.append(codec.type_name)
    if "vector" not in registered:
        raise ValueError(f"vector type not found in schema '{schema}'; is the extension installed?")
    logger.debug("registered codecs: %s", ", ".join(registered))
    return registered


async def connect(dsn: Optional[str] = None, schema: str = "public", **kwargs) -> asyncpg.connection.Connection:
    conn = await asyncpg.connect(dsn or config.DB_DSN, **kwargs)
    try:
        await register_vector(conn, schema=schema)
    except Exception:
        await conn.close()
        raise
    return conn


async def get_pool() -> asyncpg.pool.Pool:
    """Return a pool bound to the running loop, creating it on first use."""
    loop = asyncio.get_running_loop()
    pool = _pools.get(loop)
    if pool is None:
        pool = await asyncpg.create_pool(
            config.DB_DSN,
            ssl=False,
            min_size=config.POOL_MIN_SIZE,
            max_size=config.POOL_MAX_SIZE,
            command_timeout=60.0,
            init=register_vector,
        )
        _pools[loop] = pool
        logger.info("created asyncpg pool for %s:%s/%s", config.DB_HOST, config.DB_PORT, config.DB_NAME)
    return pool


async def close_pool() -> None:
    loop = asyncio.get_running_loop()
    pool = _pools.pop(loop, None)
    if pool is not None:
        await pool.close()


__all__ = ["close_pool", "connect", "get_pool", "register_vector"]
