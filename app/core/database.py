"""PostgreSQL connection and session management."""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings

# asyncpg aborts the running statement when the awaiting task is cancelled,
# which is how request deadlines reach the database.
engine = create_async_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
)

SessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a DB session and closes it when done."""
    async with SessionLocal() as db:
        yield db


async def check_db_connected(db: AsyncSession) -> None:
    """Run a trivial query; raises if the database is unreachable."""
    await db.execute(text("SELECT 1"))
