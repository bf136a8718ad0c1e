# path: unitrack/scripts/init_db.py
"""
Создание таблиц напрямую (без Alembic) — для локального запуска и sqlite.

Использование:
  python -m unitrack.scripts.init_db
"""

from __future__ import annotations

import asyncio
from typing import Optional

from unitrack.app_logging import get_logger
from unitrack.core.config import Settings, settings as default_settings
from unitrack.core.models import Base, DatabaseHelper, load_all_models

logger = get_logger(__name__)


async def create_schema(db_helper: DatabaseHelper) -> None:
    load_all_models()
    async with db_helper.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def main(settings: Optional[Settings] = None) -> None:
    settings = settings or default_settings
    db_helper = DatabaseHelper.from_config(settings.db)
    logger.info("init_db_start")
    try:
        await create_schema(db_helper)
    finally:
        await db_helper.dispose()
    logger.info("init_db_done", extra={"tables": sorted(Base.metadata.tables)})


if __name__ == "__main__":
    asyncio.run(main())
