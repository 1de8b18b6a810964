"""
Outliner Backend — Database Engine, Schema and Session Management
===================================================================

What:  Async SQLAlchemy engine, session factory, schema initializer and the
       FastAPI dependency that hands a session to each request.
How:   A `Database` object owns the engine and its connection pool. The app
       lifespan builds one, stores it on `app.state.database`, and
       `get_db_session()` pulls it from there for every request.
Who:   Used by the app lifespan, the health route and every API route.
When:  Built once at startup; sessions are created per request.

Connection Pooling:
    PostgreSQL (asyncpg): pool_size / max_overflow / pool_pre_ping from settings,
                          connections recycled every hour.
    SQLite (aiosqlite):   SQLAlchemy's default pool for the dialect; foreign
                          keys are switched on for every new connection so the
                          ON DELETE CASCADE rules behave the same as PostgreSQL.
"""

import logging
import ssl
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Request
from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from outliner.config import Settings
from outliner.exceptions import StoreOperationError

logger = logging.getLogger(__name__)


# ── Base Model ────────────────────────────────────────────────────────────
class Base(DeclarativeBase):
    """
    Base class for the outline ORM models.

    All models share this metadata, which is what the schema initializer
    creates on startup.
    """
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores REFERENCES clauses unless this pragma is on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _insecure_ssl_context() -> ssl.SSLContext:
    """TLS without certificate verification, for hosted PostgreSQL providers."""
    context = ssl.create_default_context()
    context.check_hostname = False
    context.verify_mode = ssl.CERT_NONE
    return context


def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the async engine for the configured store.

    Args:
        settings: Application settings (database_url, pool sizing, environment)

    Returns:
        AsyncEngine with dialect-appropriate pool and connect arguments.
    """
    engine_kwargs: Dict[str, Any] = {
        # Echo SQL in DEBUG mode only
        "echo": settings.log_level == "DEBUG",
    }

    if settings.is_sqlite:
        engine = create_async_engine(settings.database_url, **engine_kwargs)
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    engine_kwargs.update(
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=settings.db_pool_pre_ping,
        pool_recycle=3600,
    )
    if settings.is_production:
        engine_kwargs["connect_args"] = {"ssl": _insecure_ssl_context()}

    return create_async_engine(settings.database_url, **engine_kwargs)


class Database:
    """
    Store client: owns the engine (connection pool) and the session factory.

    Attributes:
        engine:          AsyncEngine shared by all requests
        session_factory: async_sessionmaker producing one AsyncSession per request
    """

    def __init__(self, settings: Settings):
        self.engine = build_engine(settings)
        # expire_on_commit=False keeps returned rows readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_schema(self) -> None:
        """
        Create the sections, subsections and items tables if they are absent.

        create_all() checks for each table before issuing CREATE TABLE, so
        running it on every startup is idempotent.
        """
        # Registers the models on Base.metadata
        from outliner.models import outline  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> None:
        """Round-trip a trivial query; raises if the store is unreachable."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()


def open_database(settings: Settings, state: Any) -> Optional[Database]:
    """
    Build the Database and attach it to `state` (the app's State).

    An unparseable URL or a missing driver is logged, not raised: `state.database`
    is then None and `state.database_error` holds the reason, which every data
    request reports as its error.
    """
    try:
        database = Database(settings)
    except Exception as e:
        logger.error("Database client could not be created: %s", str(e), exc_info=True)
        state.database = None
        state.database_error = str(e) or type(e).__name__
        return None

    state.database = database
    return database


async def init_schema(database: Database) -> None:
    """
    Startup schema initialization.

    A failure here is logged and swallowed: the server keeps running and
    every data call will fail against the missing schema until the store is
    fixed and the process restarted.
    """
    try:
        await database.create_schema()
        logger.info("Database schema ready")
    except Exception as e:
        logger.error("Database schema initialization failed: %s", str(e), exc_info=True)


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Takes the Database built during startup from app.state
           (StoreOperationError when startup could not build one)
        2. Opens a session and yields it to the route handler
        3. On error: rolls back and re-raises for the global handlers
        4. Always: closes the session (returns the connection to the pool)

    Writes are committed by the service layer, statement by statement.
    """
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise StoreOperationError(
            getattr(request.app.state, "database_error", "Database is not available"),
            operation="connect",
        )

    async with database.session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
