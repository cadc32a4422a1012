import logging
from contextlib import asynccontextmanager
from typing import Optional
from psycopg_pool import AsyncConnectionPool
from portfolio_contact.core.settings import settings

log = logging.getLogger("uvicorn.error")
_pool: Optional[AsyncConnectionPool] = None

def _normalize_conninfo(url: str) -> str:
    """Normalize the database connection string for psycopg_pool."""
    if url.startswith("postgresql+psycopg2://") or url.startswith("postgresql+psycopg://"):
        return "postgresql://" + url.split("://", 1)[1]
    if url.startswith("postgres://"):
        return "postgresql://" + url.split("://", 1)[1]
    return url

async def open_pool() -> AsyncConnectionPool:
    """Open the process-wide connection pool; called once from the app lifespan."""
    global _pool
    if _pool is None:
        conninfo = _normalize_conninfo(settings.database_url)
        _pool = AsyncConnectionPool(
            conninfo,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            open=False,
        )
        await _pool.open(wait=False)
        log.info("[db] connection pool opened (max_size=%s)", settings.db_pool_max_size)
    return _pool

@asynccontextmanager
async def db_conn(pool: AsyncConnectionPool):
    """Borrow a connection and cursor from the given pool."""
    async with pool.connection() as conn:
        async with conn.cursor() as cur:
            yield conn, cur

async def close_pool():
    """Cleanly close the connection pool."""
    global _pool
    if _pool is not None:
        await _pool.close()
        _pool = None
        log.info("[db] connection pool closed")
