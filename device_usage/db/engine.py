from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from device_usage.core.config import Settings
from device_usage.db.tables import metadata


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
    )


async def create_schema(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
