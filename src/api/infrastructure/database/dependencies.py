"""Database lifecycle and session dependencies for FastAPI.

The engine is owned by a ``Database`` object created from explicit settings
in the application lifespan, stored on ``app.state`` and disposed at
shutdown. Request handlers obtain sessions through ``get_session``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, AsyncGenerator, Callable

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.database.exceptions import DatabaseNotInitializedError
from infrastructure.database.models import Base
from infrastructure.observability import ConnectionProbe, DefaultConnectionProbe

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings


class Database:
    """Owns the async engine and sessionmaker for the document store.

    Lifecycle: ``open()`` once at startup, ``close()`` once at shutdown.
    Nothing is created at import time.
    """

    def __init__(
        self,
        settings: DatabaseSettings,
        engine_factory: Callable[[DatabaseSettings], AsyncEngine] = create_engine,
        probe: ConnectionProbe | None = None,
    ) -> None:
        """Initialize the database handle.

        Args:
            settings: Database connection settings
            engine_factory: Builds the engine from settings (overridable in tests)
            probe: Optional observability probe
        """
        self._settings = settings
        self._engine_factory = engine_factory
        self._probe = probe or DefaultConnectionProbe()
        self._engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_open(self) -> bool:
        """Whether the engine has been created and not yet disposed."""
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        """The underlying engine.

        Raises:
            DatabaseNotInitializedError: If the database is not open
        """
        if self._engine is None:
            raise DatabaseNotInitializedError("Database has not been opened")
        return self._engine

    def open(self) -> None:
        """Create the engine and sessionmaker. Idempotent."""
        if self._engine is not None:
            return
        self._engine = self._engine_factory(self._settings)
        self._sessionmaker = async_sessionmaker(
            self._engine,
            expire_on_commit=False,
            class_=AsyncSession,
        )
        self._probe.pool_initialized(
            database=self._settings.database,
            pool_size=self._settings.pool_size,
        )

    async def close(self) -> None:
        """Dispose the engine and release pooled connections."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._sessionmaker = None
        self._probe.pool_closed()

    def session(self) -> AsyncSession:
        """Create a new session.

        The session does NOT auto-commit. Callers must explicitly manage
        transactions using ``async with session.begin()``.

        Raises:
            DatabaseNotInitializedError: If the database is not open
        """
        if self._sessionmaker is None:
            raise DatabaseNotInitializedError("Database has not been opened")
        return self._sessionmaker()

    async def create_schema(self) -> None:
        """Create all mapped tables that do not exist yet.

        Development convenience; production schemas come from alembic.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        self._probe.schema_created()

    async def ping(self) -> bool:
        """Check that a connection can be acquired and used."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            self._probe.connection_failed(
                host=self._settings.host,
                database=self._settings.database,
                error=e,
            )
            return False
        return True


def get_database(request: Request) -> Database:
    """Return the Database stored on the application state (FastAPI dependency)."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseNotInitializedError("Application database is not configured")
    return database


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session for the current request (FastAPI dependency).

    Usage:
        @router.post("/properties")
        async def create_property(
            session: AsyncSession = Depends(get_session)
        ):
            async with session.begin():
                ...

    Yields:
        AsyncSession for database operations
    """
    database = get_database(request)
    async with database.session() as session:
        yield session
