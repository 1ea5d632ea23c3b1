from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from tictactoe.load_settings import db_echo, db_pool_size


def create_engine(database_url: str) -> AsyncEngine:
    """Create the async engine for the given URL.

    In-memory SQLite shares a single connection so every session sees the same
    database; pool sizing only applies to server databases.
    """
    if database_url.startswith("sqlite"):
        if database_url.endswith(":memory:") or database_url.endswith("://"):
            return create_async_engine(
                database_url,
                echo=db_echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return create_async_engine(database_url, echo=db_echo)
    return create_async_engine(
        database_url, echo=db_echo, pool_size=db_pool_size, max_overflow=db_pool_size
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        autocommit=False,
        class_=AsyncSession,
        autoflush=True,
        expire_on_commit=False,
        bind=engine,
    )
