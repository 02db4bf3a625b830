from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import psycopg
from psycopg_pool import AsyncConnectionPool

from dermascan.config.settings import Settings


class Database:
    """Owns the async connection pool for the document store."""

    def __init__(self, settings: Settings) -> None:
        self._conninfo = (
            f"host={settings.db_host} "
            f"port={settings.db_port} "
            f"dbname={settings.db_database} "
            f"user={settings.db_username} "
            f"password={settings.db_password}"
        )
        self._max_size = settings.db_pool_max_size
        self._open_timeout = settings.db_open_timeout
        self._pool: AsyncConnectionPool | None = None

    async def open(self) -> None:
        """Open the pool. Safe to call more than once."""
        if self._pool is not None:
            return
        pool = AsyncConnectionPool(
            self._conninfo, min_size=1, max_size=self._max_size, open=False
        )
        try:
            await pool.open(wait=True, timeout=self._open_timeout)
        except Exception:
            await pool.close()
            raise
        self._pool = pool

    async def close(self) -> None:
        if self._pool is not None:
            await self._pool.close()
            self._pool = None

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[psycopg.AsyncConnection[Any]]:
        """Yield a connection from the pool. Caller manages commit/rollback."""
        if self._pool is None:
            raise RuntimeError("Database pool not opened. Call open() first.")
        async with self._pool.connection() as conn:
            yield conn
