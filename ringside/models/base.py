"""SQLAlchemy base configuration, engine setup and the Store handle."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime
from pathlib import Path

import structlog
from sqlalchemy import DateTime, event, func
from sqlalchemy.engine import make_url
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import AsyncAdaptedQueuePool, StaticPool

from ringside.config import Settings, get_settings
from ringside.errors import Conflict

logger = structlog.get_logger(__name__)


def _is_memory_database(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def _ensure_sqlite_directory(database_url: str) -> None:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)


def _install_sqlite_hooks(engine: AsyncEngine, begin_immediate: bool) -> None:
    """Enable foreign keys and take over transaction begin on SQLite.

    pysqlite defers BEGIN until the first write, which would let the reads
    that validate an invariant run outside the transaction. With the driver's
    own BEGIN disabled we emit one ourselves when SQLAlchemy starts a
    transaction.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE" if begin_immediate else "BEGIN")


def get_engine(
    database_url: str | None = None,
    settings: Settings | None = None,
) -> AsyncEngine:
    """Create a new async engine for the given URL (defaults to settings)."""
    settings = settings or get_settings()
    database_url = database_url or settings.database_url
    is_sqlite = make_url(database_url).get_backend_name() == "sqlite"

    if _is_memory_database(database_url):
        engine = create_async_engine(
            database_url,
            poolclass=StaticPool,
            echo=settings.debug,
        )
    else:
        if is_sqlite:
            _ensure_sqlite_directory(database_url)
        engine = create_async_engine(
            database_url,
            poolclass=AsyncAdaptedQueuePool,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            echo=settings.debug,
        )

    if is_sqlite:
        _install_sqlite_hooks(engine, settings.db_begin_immediate)
    return engine


def get_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory for the given engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """Mixin that adds created_at and updated_at columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class Store:
    """
    Handle on one relational store.

    Owns the engine and session factory. Managers receive a Store at
    construction instead of reaching for module-level state, so every test
    can run against its own database file.

    Every multi-table operation runs inside exactly one ``transaction()``:
    domain errors raised inside it roll everything back and propagate
    unchanged, driver failures roll back and surface as ``Conflict``.
    """

    def __init__(
        self,
        database_url: str | None = None,
        settings: Settings | None = None,
    ):
        self.settings = settings or get_settings()
        self.database_url = database_url or self.settings.database_url
        self.engine = get_engine(self.database_url, self.settings)
        self.session_factory = get_session_factory(self.engine)

    def __repr__(self) -> str:
        return f"<Store {self.engine.url!r}>"

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Run a block as one atomic unit; commit on success."""
        async with self.session_factory() as session:
            try:
                async with session.begin():
                    yield session
            except (IntegrityError, OperationalError) as e:
                raise Conflict(
                    "transaction could not be completed",
                    error=str(e.orig) if e.orig is not None else str(e),
                ) from e

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Read-only session. Closing it releases the connection without a commit."""
        async with self.session_factory() as session:
            yield session

    async def create_schema(self) -> None:
        """Create all tables, indexes and triggers that do not yet exist."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("schema_created", url=str(self.engine.url))

    async def dispose(self) -> None:
        await self.engine.dispose()
