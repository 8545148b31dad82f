"""
Database engine, request-scoped connections and the query client.

Repositories never touch the engine directly. They receive a ``Database``
bound to one connection and issue plain SQL with positional ``$N``
placeholders, which asyncpg binds natively.
"""
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Sequence

from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from jobly.core.config import settings
from jobly.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all table models."""


engine: AsyncEngine = create_async_engine(
    settings.database_url,
    pool_size=settings.db_pool_size,
    max_overflow=settings.db_max_overflow,
    pool_pre_ping=True,
    echo=settings.db_echo,
)


class Database:
    """
    Thin query client over a single ``AsyncConnection``.

    ``query`` returns every row as a plain dict keyed by column label, so
    ``SELECT num_employees AS "numEmployees"`` yields ``{"numEmployees": ...}``.
    """

    def __init__(self, conn: AsyncConnection):
        self._conn = conn

    async def query(
        self,
        sql: str,
        params: Sequence[Any] = (),
    ) -> List[Dict[str, Any]]:
        """Execute ``sql`` with positional parameters and return its rows."""
        logger.debug("db_query", param_count=len(params))
        result = await self._conn.exec_driver_sql(sql, tuple(params))
        if not result.returns_rows:
            return []
        return [dict(row) for row in result.mappings().all()]

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["Database"]:
        """
        Run a block inside a SAVEPOINT.

        Released when the block exits normally, rolled back when it raises.
        The surrounding request transaction is left open either way.
        """
        async with self._conn.begin_nested():
            yield self


async def get_db() -> AsyncIterator[Database]:
    """
    FastAPI dependency: one connection and one transaction per request.

    Commits when the request handler returns, rolls back if it raises.
    """
    async with engine.begin() as conn:
        yield Database(conn)


@asynccontextmanager
async def connect(bind: AsyncEngine = engine) -> AsyncIterator[Database]:
    """Same scope as ``get_db`` for scripts and other non-HTTP callers."""
    async with bind.begin() as conn:
        yield Database(conn)


async def init_db() -> None:
    """Create any missing tables. Migrations remain the source of truth in production."""
    import jobly.models  # noqa: F401  (registers tables on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Dispose of the connection pool."""
    await engine.dispose()
