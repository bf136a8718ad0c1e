# path: unitrack/scripts/import_cablestock.py
"""
Загрузка выгрузки CABLE STOCK с диска тем же путём, что и POST /api/cablestock/upload.

Использование:
  python -m unitrack.scripts.import_cablestock "CABLE STOCK(03.31.2025).xlsx" [...]
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from unitrack.app_logging import get_logger
from unitrack.cablestock.services.cablestock_service import CableStockService
from unitrack.core.config import settings
from unitrack.core.exceptions import UnitrackError
from unitrack.core.models import DatabaseHelper
from unitrack.crud.cablestock_repository import CableStockRepository

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import CABLE STOCK(MM.DD.YYYY).xlsx files")
    parser.add_argument("paths", nargs="+", type=Path, help="xlsx files to import")
    return parser


async def import_files(paths: Sequence[Path], db_helper: DatabaseHelper) -> int:
    """Возвращает число файлов, которые не удалось загрузить."""
    service = CableStockService(repo=CableStockRepository(), cfg=settings.cablestock)
    failed = 0

    for path in paths:
        async with db_helper.session_factory() as session:
            try:
                result = await service.upload(session, filename=path.name, content=path.read_bytes())
            except (UnitrackError, OSError) as e:
                failed += 1
                details = getattr(e, "details", None)
                logger.error("import_cablestock_failed", extra={"path": str(path), "error": str(e), "details": details})
                continue
        logger.info(
            "import_cablestock_done",
            extra={"path": str(path), "month": result.month, "items": result.item_count},
        )

    return failed


async def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    db_helper = DatabaseHelper.from_config(settings.db)
    try:
        return await import_files(args.paths, db_helper)
    finally:
        await db_helper.dispose()


if __name__ == "__main__":
    sys.exit(1 if asyncio.run(main()) else 0)
