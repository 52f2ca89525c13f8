"""SQLAlchemy engine and session factory construction."""

from pathlib import Path

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from lifevault.config import Settings
from lifevault.infrastructure.database.base import Base
from lifevault.infrastructure.database.models import KeyValueEntryModel  # noqa: F401  (registers the table)


def _get_async_url(url: str) -> str:
    """Convert a sync SQLAlchemy URL to an async one."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    return url


def _ensure_sqlite_dir(url: str) -> None:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    database = parsed.database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    """Build the async engine for ``settings.database_url``.

    SQLite file databases get their parent directory created.
    """
    async_url = _get_async_url(settings.database_url)
    _ensure_sqlite_dir(async_url)
    return create_async_engine(async_url, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table registered on ``Base`` that does not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
