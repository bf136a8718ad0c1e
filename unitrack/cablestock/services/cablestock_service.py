# path: unitrack/cablestock/services/cablestock_service.py
from __future__ import annotations

import calendar
import re
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.app_logging import get_logger
from unitrack.cablestock.schemas.snapshot import ComparisonOut, SnapshotOut, UploadOut
from unitrack.cablestock.services.consumption import compare_items
from unitrack.cablestock.services.ingest import CableStockParser, parse_filename
from unitrack.core.config import CableStockConfig
from unitrack.core.exceptions import SnapshotNotFoundError, ValidationError
from unitrack.crud.cablestock_repository import ICableStockRepository

log = get_logger("cablestock.service")

_MONTH_KEY_RE = re.compile(r"^\s*(\d{1,2})\s*[/.\-]\s*(\d{4})\s*$")


def normalize_month_key(raw: Optional[str]) -> str:
    """'3/2024', '03-2024', '03.2024' -> '03/2024'."""
    m = _MONTH_KEY_RE.match(raw or "")
    if not m:
        raise ValidationError("Invalid month format. Expected: MM/YYYY", details={"month": raw})
    month, year = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise ValidationError("Invalid month format. Expected: MM/YYYY", details={"month": raw})
    return f"{month:02d}/{year:04d}"


def month_sort_key(month: str) -> tuple[int, int]:
    mm, _, yyyy = month.partition("/")
    return int(yyyy), int(mm)


def months_ago(now: datetime, months: int) -> datetime:
    total = now.year * 12 + (now.month - 1) - months
    year, month = divmod(total, 12)
    month += 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


class CableStockService:
    """
    Месячные снимки CABLE STOCK.

    - upload: имя файла проверяем до чтения книги, затем парсер, затем upsert по месяцу;
    - list_recent: снимки, загруженные за последние history_months месяцев, по месяцу;
    - compare: оба снимка обязаны существовать.
    """

    def __init__(self, repo: ICableStockRepository, cfg: CableStockConfig) -> None:
        self._repo = repo
        self._cfg = cfg
        self._parser = CableStockParser(cfg)

    async def upload(self, session: AsyncSession, *, filename: Optional[str], content: bytes) -> UploadOut:
        stock_file = parse_filename(filename)
        month = stock_file.month_key

        items = self._parser.parse(content)

        await self._repo.upsert(session, month=month, items=items, upload_date=datetime.now(timezone.utc))
        await session.commit()

        log.info({"event": "cablestock_uploaded", "month": month, "filename": filename, "items": len(items)})
        return UploadOut(success=True, month=month, item_count=len(items))

    async def list_recent(self, session: AsyncSession, *, now: Optional[datetime] = None) -> list[SnapshotOut]:
        since = months_ago(now or datetime.now(timezone.utc), self._cfg.history_months)
        snapshots = await self._repo.list_since(session, since)
        snapshots.sort(key=lambda s: month_sort_key(s.month))
        return [SnapshotOut.model_validate(s) for s in snapshots]

    async def get(self, session: AsyncSession, month: str) -> SnapshotOut:
        key = normalize_month_key(month)
        snapshot = await self._repo.get_by_month(session, key)
        if snapshot is None:
            raise SnapshotNotFoundError(details={"month": key})
        return SnapshotOut.model_validate(snapshot)

    async def compare(self, session: AsyncSession, from_month: Optional[str], to_month: Optional[str]) -> ComparisonOut:
        if not from_month or not to_month:
            raise ValidationError("Comparison months not specified", details={"from": from_month, "to": to_month})

        from_key, to_key = normalize_month_key(from_month), normalize_month_key(to_month)
        from_snap = await self._repo.get_by_month(session, from_key)
        to_snap = await self._repo.get_by_month(session, to_key)

        missing = [k for k, s in ((from_key, from_snap), (to_key, to_snap)) if s is None]
        if missing:
            raise SnapshotNotFoundError("Data not found for comparison months", details={"missing": missing})

        records = compare_items(from_snap.items, to_snap.items)
        log.info({"event": "cablestock_compared", "from": from_key, "to": to_key, "items": len(records)})
        return ComparisonOut(fromMonth=from_key, toMonth=to_key, items=records)
