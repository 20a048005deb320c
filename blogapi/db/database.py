# blogapi/db/database.py
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from blogapi.core.logger import logger
from blogapi.db import models  # noqa: F401  (registra las tablas en SQLModel.metadata)


def to_async_url(url: str) -> str:
    """sqlite:// -> sqlite+aiosqlite://, postgresql:// -> postgresql+asyncpg://"""
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Database:
    """
    Handle explícito del engine async + session factory.

    Se abre en el lifespan de la app (o en scripts) y se cierra al final;
    nada de engine global creado al importar.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = to_async_url(url)
        self.echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._session_maker: Optional[async_sessionmaker[AsyncSession]] = None

    # ---------------------------
    # Lifecycle
    # ---------------------------
    def connect(self) -> None:
        if self._engine is not None:
            return

        kwargs = {"echo": self.echo}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if ":memory:" in self.url or self.url.endswith("sqlite+aiosqlite://"):
                # Una sola conexión compartida, si no cada sesión ve otra DB vacía
                kwargs["poolclass"] = StaticPool

        self._engine = create_async_engine(self.url, **kwargs)
        self._session_maker = async_sessionmaker(
            self._engine, class_=AsyncSession, expire_on_commit=False
        )
        logger.info("DB engine created (%s)", self._engine.url.render_as_string(hide_password=True))

    async def dispose(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_maker = None
        logger.info("DB engine disposed")

    async def create_all(self) -> None:
        """Create tables (dev / tests). Prod uses Alembic."""
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.drop_all)

    # ---------------------------
    # Access
    # ---------------------------
    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not connected, call connect() first")
        return self._engine

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        if self._session_maker is None:
            raise RuntimeError("Database not connected, call connect() first")
        async with self._session_maker() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        async with self.session() as session:
            await session.execute(text("SELECT 1"))
