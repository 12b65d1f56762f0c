"""
SQLAlchemy async engine and session management

This module provides:
1. Base: declarative base shared by every ORM model
2. Database: owns one async engine (and therefore one connection pool)
   and hands out sessions bound to it
3. create_db_and_tables: metadata bootstrap for development and tests

Driver notes:
- PostgreSQL goes through asyncpg; statement timeouts are enforced by the
  driver (command_timeout) and pool checkout by pool_timeout
- SQLite goes through aiosqlite; every transaction is opened with
  BEGIN IMMEDIATE so concurrent writers queue on the database lock
  (bounded by the busy timeout) instead of failing mid-transaction
"""

from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from ticket_ledger.platform.config.core_setting import settings
from ticket_ledger.platform.logging.loguru_io import Logger


class Base(DeclarativeBase):
    pass


def normalize_async_url(url: str) -> str:
    if url.startswith('sqlite://'):
        return url.replace('sqlite://', 'sqlite+aiosqlite://', 1)
    if url.startswith('postgresql://'):
        return url.replace('postgresql://', 'postgresql+asyncpg://', 1)
    if url.startswith('postgres://'):
        return url.replace('postgres://', 'postgresql+asyncpg://', 1)
    return url


def _install_sqlite_transaction_hooks(engine: AsyncEngine) -> None:
    busy_timeout_ms = int(settings.SQLITE_BUSY_TIMEOUT_SECONDS * 1000)

    @event.listens_for(engine.sync_engine, 'connect')
    def _sqlite_on_connect(dbapi_connection: Any, _: Any) -> None:
        # Disable the driver's implicit BEGIN; we emit our own below
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute(f'PRAGMA busy_timeout={busy_timeout_ms};')
        cursor.execute('PRAGMA foreign_keys=ON;')
        cursor.close()

    @event.listens_for(engine.sync_engine, 'begin')
    def _sqlite_on_begin(conn: Any) -> None:
        conn.exec_driver_sql('BEGIN IMMEDIATE')


def make_async_engine(database_url: str) -> AsyncEngine:
    db_url = normalize_async_url(database_url)
    kw: dict[str, Any] = dict(echo=False, future=True)

    if db_url.startswith('postgresql+asyncpg://'):
        kw.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_POOL_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_pre_ping=settings.DB_POOL_PRE_PING,
            connect_args={'command_timeout': settings.DB_COMMAND_TIMEOUT},
        )
    elif db_url.startswith('sqlite+aiosqlite://'):
        kw.update(connect_args={'timeout': settings.SQLITE_BUSY_TIMEOUT_SECONDS})

    engine = create_async_engine(db_url, **kw)

    if db_url.startswith('sqlite+aiosqlite://'):
        _install_sqlite_transaction_hooks(engine)

    safe_url = engine.url.render_as_string(hide_password=True)
    Logger.base.info(f'🔗 [DB] Engine created for {safe_url}')
    return engine


class Database:
    """
    Owns the process-wide engine and its connection pool.

    Sessions handed out by ``session()`` are the only way to reach the
    pool; the TransactionRunner and read-only repository calls both go
    through here.
    """

    def __init__(self, *, database_url: Optional[str] = None) -> None:
        self._engine = make_async_engine(database_url or settings.DATABASE_URL_ASYNC)
        self._session_factory = async_sessionmaker(
            self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions

        Note: closing the session returns its connection to the pool and
        rolls back anything left uncommitted
        """
        async with self._session_factory() as session:
            yield session

    async def dispose(self) -> None:
        await self._engine.dispose()


async def create_db_and_tables(database: Database) -> None:
    """Create database tables if they don't exist"""
    # Register every model on Base.metadata before create_all
    import ticket_ledger.service.ticketing.driven_adapter.model  # noqa: F401

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
    Logger.base.info('🗄️ [DB] Tables ensured')


async def drop_db_and_tables(database: Database) -> None:
    import ticket_ledger.service.ticketing.driven_adapter.model  # noqa: F401

    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
