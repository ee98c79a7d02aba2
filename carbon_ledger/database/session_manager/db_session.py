"""
Async session manager.

``Database.init`` is called once per process (or per test) and every
request opens its own session with ``async with Database() as session``.
"""
import logging
from typing import Any

from sqlalchemy.engine.url import URL
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from carbon_ledger.database.session_manager.exceptions import (
    DatabaseNotInitialized,
    DatabaseTransactionError,
)

logger = logging.getLogger(__name__)


class Database:
    """Process-wide engine holder and per-use session context manager."""

    _async_engine: AsyncEngine | None = None
    _async_session_maker: async_sessionmaker | None = None

    def __init__(self):
        self.session: AsyncSession | None = None

    @classmethod
    def init(cls, async_db_url: URL | str, engine_kw: dict[str, Any] | None = None):
        """
        Create the engine and session maker.

        Args:
            async_db_url: Async database URL
            engine_kw: Extra keyword arguments for create_async_engine
        """
        cls._async_engine = create_async_engine(async_db_url, **(engine_kw or {}))
        cls._async_session_maker = async_sessionmaker(
            bind=cls._async_engine, expire_on_commit=False, class_=AsyncSession
        )
        logger.debug("Database session maker initialized")

    @classmethod
    async def dispose(cls):
        """Dispose the engine and forget the session maker."""
        if cls._async_engine is not None:
            await cls._async_engine.dispose()
        cls._async_engine = None
        cls._async_session_maker = None

    async def __aenter__(self) -> AsyncSession:
        if self._async_session_maker is None:
            raise DatabaseNotInitialized(
                "Database not initialized. Call Database.init() first."
            )
        self.session = self._async_session_maker()
        return self.session

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                await self.session.commit()
            else:
                await self.session.rollback()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise DatabaseTransactionError(f"Failed to commit session: {e}") from e
        finally:
            await self.session.close()
