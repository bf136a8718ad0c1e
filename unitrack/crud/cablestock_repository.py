# path: unitrack/crud/cablestock_repository.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.cablestock.models.snapshot import CableStockSnapshot


class ICableStockRepository(Protocol):
    async def upsert(
        self,
        session: AsyncSession,
        *,
        month: str,
        items: list[dict[str, Any]],
        upload_date: datetime,
    ) -> None: ...
    async def get_by_month(self, session: AsyncSession, month: str) -> Optional[CableStockSnapshot]: ...
    async def list_since(self, session: AsyncSession, since: datetime) -> list[CableStockSnapshot]: ...


class CableStockRepository(ICableStockRepository):
    """
    Репозиторий cablestock_snapshots.

    upsert — один INSERT ... ON CONFLICT (month) DO UPDATE: повторная загрузка месяца
    заменяет items и upload_date целиком, второй строки не появляется.
    """

    async def upsert(
        self,
        session: AsyncSession,
        *,
        month: str,
        items: list[dict[str, Any]],
        upload_date: datetime,
    ) -> None:
        dialect = session.get_bind().dialect.name
        insert = pg_insert if dialect == "postgresql" else sqlite_insert

        stmt = insert(CableStockSnapshot).values(month=month, items=items, upload_date=upload_date)
        stmt = stmt.on_conflict_do_update(
            index_elements=[CableStockSnapshot.month],
            set_={"items": stmt.excluded["items"], "upload_date": stmt.excluded["upload_date"]},
        )
        await session.execute(stmt)

    async def get_by_month(self, session: AsyncSession, month: str) -> Optional[CableStockSnapshot]:
        res = await session.execute(select(CableStockSnapshot).where(CableStockSnapshot.month == month))
        return res.scalar_one_or_none()

    async def list_since(self, session: AsyncSession, since: datetime) -> list[CableStockSnapshot]:
        res = await session.execute(
            select(CableStockSnapshot).where(CableStockSnapshot.upload_date >= since)
        )
        return list(res.scalars().all())
