# path: unitrack/core/models/db_helper.py
from __future__ import annotations

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from unitrack.core.config import DatabaseConfig


class DatabaseHelper:
    """
    Хэндл подключения к БД: engine + фабрика сессий.

    Важно:
    - создаётся в точке входа (create_app / CLI-скрипт), а не при импорте модуля;
    - закрывается там же через dispose();
    - репозитории получают AsyncSession на каждый вызов.
    """

    def __init__(
        self,
        url: str,
        echo: bool = False,
        echo_pool: bool = False,
        pool_size: int = 10,
        max_overflow: int = 10,
    ) -> None:
        engine_kwargs: dict[str, Any] = {"echo": echo, "echo_pool": echo_pool}
        # sqlite (тесты) живёт на своём пуле без pool_size/max_overflow
        if not url.startswith("sqlite"):
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)

        self.engine: AsyncEngine = create_async_engine(url=url, **engine_kwargs)
        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            expire_on_commit=False,
        )

    @classmethod
    def from_config(cls, cfg: DatabaseConfig) -> "DatabaseHelper":
        return cls(
            url=cfg.url,
            echo=cfg.echo,
            echo_pool=cfg.echo_pool,
            pool_size=cfg.pool_size,
            max_overflow=cfg.max_overflow,
        )

    async def dispose(self) -> None:
        await self.engine.dispose()

    async def session_getter(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as session:
            yield session
