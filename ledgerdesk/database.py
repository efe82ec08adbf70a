"""Database engine, session factory and declarative base."""
from collections.abc import AsyncGenerator
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from ledgerdesk.config import settings

# Seconds a SQLite writer waits on a locked database before failing.
SQLITE_BUSY_TIMEOUT = 30


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    if "sqlite" in database_url:
        # Concurrent reviewers serialize on the SQLite write lock instead of erroring out.
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"timeout": SQLITE_BUSY_TIMEOUT},
            pool_size=5,
            max_overflow=0,
        )
    return create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
    )


def build_sessionmaker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


engine = build_engine(settings.database_url, echo=settings.debug)
AsyncSessionLocal = build_sessionmaker(engine)


class Base(DeclarativeBase):
    pass


async def create_tables(bind: AsyncEngine) -> None:
    # Import for side effect: registers every mapped table on Base.metadata.
    import ledgerdesk.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
