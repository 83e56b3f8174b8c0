"""Database engine, session factory and the per-request session dependency."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import settings
from src.infrastructure.database.models import Base

_ASYNC_DRIVERS = {
    "postgres://": "postgresql+asyncpg://",
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}


def normalize_database_url(url: str) -> str:
    """
    Rewrite a plain database URL to use an async driver.

    URLs that already name a driver (e.g. postgresql+asyncpg://) are
    returned unchanged.
    """
    for prefix, async_prefix in _ASYNC_DRIVERS.items():
        if url.startswith(prefix):
            return async_prefix + url[len(prefix):]
    return url


class DatabaseSessionManager:
    """
    Owns the async engine holding the card catalog, spending history and
    stored recommendations.

    Sessions do not expire objects on commit: repositories map rows to
    frozen domain entities before returning, and a recommendation replace
    commits from inside the request.
    """

    def __init__(self):
        self._engine = None
        self._sessionmaker = None

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    def init(self, database_url: str | None = None):
        """
        Create the engine and session factory.

        Args:
            database_url: Optional override for settings.database_url
        """
        url = normalize_database_url(database_url or settings.database_url)

        engine_kwargs = {"echo": settings.debug, "pool_pre_ping": True}
        if not url.startswith("sqlite"):
            engine_kwargs["pool_size"] = settings.db_pool_size
            engine_kwargs["max_overflow"] = settings.db_max_overflow

        self._engine = create_async_engine(url, **engine_kwargs)
        self._sessionmaker = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )

    async def create_tables(self):
        """Create missing tables; used for local runs with DB_CREATE_TABLES set."""
        self._require_init()

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self):
        """Dispose of the engine and its pooled connections."""
        if self._engine:
            await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Session for one request.

        Commits whatever is still pending when the request succeeds and
        rolls back when it raises. A generate request has normally already
        committed its replace transaction by then.
        """
        self._require_init()

        session = self._sessionmaker()
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    def _require_init(self) -> None:
        if self._sessionmaker is None:
            raise RuntimeError("Database not initialized. Call init() first.")


db_manager = DatabaseSessionManager()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding the request's session."""
    async with db_manager.session() as session:
        yield session
