"""
redact-data - SQL Storage Backend

Durable DataStorer on an async SQLAlchemy engine. SQLite (aiosqlite) is the
default; PostgreSQL (asyncpg) is supported with a native upsert.
"""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from ...data import Data, DataCollection, DataPath
from ...errors import StorageInternalError, StorageNotFoundError
from ..interface import DataStorer, check_page
from .db_models import Base, DataRecord

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./data/redact.db"

# Dialects with INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


class SQLDataStorer(DataStorer):
    """
    Async SQL-backed DataStorer.

    Provides:
    - Automatic schema creation on first use
    - Async session management over the engine's connection pool
    - Upsert by path (create replaces any existing record)
    - Prefix pages ordered by path
    """

    def __init__(
        self,
        database_url: str = DEFAULT_DATABASE_URL,
        pool_size: int | None = None,
        echo: bool = False,
    ):
        """
        Initialize SQL data storer.

        Args:
            database_url: SQLAlchemy async URL, e.g. sqlite+aiosqlite:///./data/redact.db
            pool_size: Connection pool size (ignored for SQLite)
            echo: Log every SQL statement
        """
        self.database_url = database_url
        self._url = make_url(database_url)
        is_sqlite = self._url.get_backend_name() == "sqlite"

        engine_kwargs: dict[str, Any] = {"echo": echo}
        if is_sqlite:
            engine_kwargs["connect_args"] = {"check_same_thread": False}
        elif pool_size:
            engine_kwargs["pool_size"] = pool_size

        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)

        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        self._initialized = False
        self._initialization_lock = asyncio.Lock()

    async def initialize(self) -> None:
        """
        Initialize database schema.

        Creates the data table if it doesn't exist. Idempotent.
        """
        async with self._initialization_lock:
            if self._initialized:
                return

            # SQLite file databases need their directory to exist
            database = self._url.database
            if self._url.get_backend_name() == "sqlite" and database and database != ":memory:":
                Path(database).resolve().parent.mkdir(parents=True, exist_ok=True)

            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

            self._initialized = True
            logger.info("Initialized data table", extra={"backend": self._url.get_backend_name()})

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get async database session (context manager).

        Usage:
            async with storer.get_session() as session:
                await session.execute(...)
                await session.commit()
        """
        if not self._initialized:
            await self.initialize()

        async with self.session_factory() as session:
            yield session

    def _internal_error(self, op: str, path: str, e: Exception) -> StorageInternalError:
        logger.error(
            "SQL %s failed for path '%s': %s",
            op,
            path,
            e,
            extra={"path": path, "operation": op, "error": str(e)},
            exc_info=True,
        )
        return StorageInternalError(e, details={"path": path, "operation": op})

    async def get(self, path: str | DataPath) -> Data:
        key = str(DataPath.of(path))

        try:
            async with self.get_session() as session:
                record = await session.get(DataRecord, key)
                data = record.to_data() if record is not None else None
        except Exception as e:
            raise self._internal_error("get", key, e) from e

        if data is None:
            raise StorageNotFoundError(key)
        return data

    async def get_collection(self, path: str | DataPath, skip: int, page_size: int) -> DataCollection:
        check_page(skip, page_size)
        prefix = str(DataPath.of(path))

        stmt = (
            select(DataRecord)
            .where(func.substr(DataRecord.path, 1, len(prefix)) == prefix)
            .order_by(DataRecord.path)
            .offset(skip)
            .limit(page_size)
        )

        try:
            async with self.get_session() as session:
                records = (await session.scalars(stmt)).all()
                page = [record.to_data() for record in records]
        except Exception as e:
            raise self._internal_error("get_collection", prefix, e) from e

        return DataCollection(data=page)

    async def create(self, data: Data) -> bool:
        values = DataRecord.values_for(data)

        try:
            async with self.get_session() as session:
                dialect = self.engine.dialect.name
                if dialect in _UPSERT_INSERTS:
                    stmt = _UPSERT_INSERTS[dialect](DataRecord).values(**values)
                    stmt = stmt.on_conflict_do_update(
                        index_elements=[DataRecord.path],
                        set_={"document": stmt.excluded.document, "updated_at": stmt.excluded.updated_at},
                    )
                    await session.execute(stmt)
                else:
                    await session.merge(DataRecord(**values))
                await session.commit()
        except Exception as e:
            raise self._internal_error("create", data.key, e) from e

        logger.debug("Stored data", extra={"path": data.key})
        return True

    async def close(self) -> None:
        """Close database connections gracefully."""
        await self.engine.dispose()
        self._initialized = False
