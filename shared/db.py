# shared/db.py
from typing import AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from shared.config import Settings
from shared.errors import DatabaseNotConnected
from shared.logger import get_logger

Base = declarative_base()

logger = get_logger(component="db")


class Database:
    """Async engine plus session factory, owned by the application lifespan."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(cls, url: str, echo: bool = False, **engine_kwargs) -> "Database":
        engine = create_async_engine(url, echo=echo, pool_pre_ping=True, **engine_kwargs)
        return cls(engine)

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


def create_database(settings: Settings) -> Optional[Database]:
    """Build the database handle, or return None when it cannot be configured."""
    if not settings.database_url:
        logger.error("DATABASE_URL is not set")
        return None

    try:
        return Database.from_url(settings.database_url, echo=settings.db_echo)
    except Exception as e:
        logger.error("Failed to connect to database", database_url=settings.database_url, error=str(e))
        return None


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None:
        raise DatabaseNotConnected()

    async with database.session_factory() as session:
        yield session
