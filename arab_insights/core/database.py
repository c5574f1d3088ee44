# arab_insights/core/database.py
from typing import AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
    AsyncEngine,
)
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class Database:
    """Owns one async engine and its session factory.

    Built by the application factory and stored on ``app.state.database``;
    handlers reach it through the ``get_db`` dependency.
    """

    def __init__(self, url: str, *, echo: bool = False):
        self._engine: AsyncEngine = create_async_engine(
            url,
            echo=echo,
            future=True,
            pool_pre_ping=url.startswith("postgresql"),
        )
        self._SessionLocal = async_sessionmaker(
            bind=self._engine, class_=AsyncSession, expire_on_commit=False
        )

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    @property
    def sync_engine(self):
        # The SQLAlchemy OTel instrumentor expects a sync Engine
        return self._engine.sync_engine

    def session(self) -> AsyncSession:
        return self._SessionLocal()

    async def ping(self) -> None:
        async with self._engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def create_all(self) -> None:
        # models must be imported so their tables are registered on Base
        from arab_insights.models.db import (  # noqa: F401
            forecast,
            news_article,
            summary,
            system_setting,
            text_analysis,
        )

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self._engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    database: Database = request.app.state.database
    async with database.session() as session:
        yield session
