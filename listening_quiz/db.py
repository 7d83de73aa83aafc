from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from listening_quiz.core.config import settings
from listening_quiz import models  # noqa: F401


def build_engine(url: str) -> AsyncEngine:
    kwargs = {"echo": False, "future": True}
    if url.startswith("sqlite"):
        # aiosqlite connections must not be reused across event loops
        kwargs["poolclass"] = NullPool
    return create_async_engine(url, **kwargs)


engine: AsyncEngine = build_engine(settings.database_url)


async def init_db(bind: AsyncEngine | None = None) -> None:
    async with (bind or engine).begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


@asynccontextmanager
async def get_session(bind: AsyncEngine | None = None):
    async_session = AsyncSession(bind or engine, expire_on_commit=False)
    try:
        yield async_session
    finally:
        await async_session.close()
