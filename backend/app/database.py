"""
HealthTrack Backend — Database Engine & Session Management
===========================================================

What:  Async SQLAlchemy engine wrapper, declarative base, and the per-request
       session dependency.
Why:   Centralizes all database connection logic in one place.
How:   `Database` owns an async engine plus session factory. The application
       factory builds one and hangs it on `app.state.db`; the
       `get_db_session` dependency opens a session from it for each request,
       commits on success and rolls back on error.
Who:   Used by route handlers via FastAPI's dependency injection system and
       by tests, which pass their own `Database` into `create_app()`.
When:  Engine is created with the app; sessions are created per-request.

Why not a module-level engine:
    The connection pool is the only process-wide resource in the service.
    Passing it in explicitly lets tests point the whole app at a throwaway
    SQLite file without patching imports.

Connection Pooling Strategy (PostgreSQL):
    pool_size=20:     Persistent connections for normal load
    max_overflow=10:  Temporary connections for traffic spikes (total max = 30)
    pool_pre_ping:    Validates connections before use (catches stale connections)
    pool_recycle=3600: Recycles connections every hour
"""

from typing import AsyncGenerator, Optional

from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.config import Settings, settings as default_settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    All models inherit from this class so they share one metadata object,
    which Alembic reads for migrations and tests use for create_all().
    """
    pass


class Database:
    """
    Owns the async engine and the session factory built on top of it.

    Args:
        url: Async SQLAlchemy URL (postgresql+asyncpg://..., sqlite+aiosqlite://...)
        app_settings: Source of pool sizing and echo configuration.
    """

    def __init__(self, url: Optional[str] = None, app_settings: Optional[Settings] = None):
        cfg = app_settings or default_settings
        self.url = url or cfg.database_url

        engine_kwargs = {"echo": cfg.log_level == "DEBUG"}
        # SQLite (tests, local demos) rejects the QueuePool sizing arguments
        if make_url(self.url).get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=cfg.db_pool_size,
                max_overflow=cfg.db_max_overflow,
                pool_pre_ping=cfg.db_pool_pre_ping,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)

        # expire_on_commit=False: attributes stay readable after commit
        # without triggering a lazy reload outside the session
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def create_all(self) -> None:
        """Create every table known to Base.metadata (tests and local demos only)."""
        import app.models  # noqa: F401  (registers the tables; models import this module)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close all pooled connections. Called during application shutdown."""
        await self.engine.dispose()


# ── Session Dependency ────────────────────────────────────────────────────
async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session per request.

    How it works:
        1. Opens a new session from the app's Database
        2. Yields it to the route handler
        3. On success: commits the transaction
        4. On error: rolls back the transaction
        5. Always: closes the session (returns connection to pool)

    Example usage in a route:
        @router.get("/record/{report_id}")
        async def get_record(report_id: str, db: AsyncSession = Depends(get_db_session)):
            ...
    """
    database: Database = request.app.state.db
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise  # Re-raise so the global error handler can respond appropriately
        finally:
            await session.close()
