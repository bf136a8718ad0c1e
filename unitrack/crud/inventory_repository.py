# path: unitrack/crud/inventory_repository.py
from __future__ import annotations

from typing import Any, Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.inventory.models.item import InventoryItem


class IInventoryRepository(Protocol):
    async def list_items(self, session: AsyncSession, *, location: Optional[str] = None) -> list[InventoryItem]: ...
    async def get(self, session: AsyncSession, item: str, location: str) -> Optional[InventoryItem]: ...
    async def find_first(
        self,
        session: AsyncSession,
        item: str,
        *,
        location: Optional[str] = None,
    ) -> Optional[InventoryItem]: ...
    async def create(self, session: AsyncSession, **fields: Any) -> InventoryItem: ...
    async def update(self, session: AsyncSession, obj: InventoryItem, **fields: Any) -> InventoryItem: ...
    async def delete(self, session: AsyncSession, obj: InventoryItem) -> int: ...


class InventoryRepository(IInventoryRepository):
    """Репозиторий inventory_items. Ключ записи — пара (item, location)."""

    async def list_items(self, session: AsyncSession, *, location: Optional[str] = None) -> list[InventoryItem]:
        stmt = select(InventoryItem)
        if location:
            stmt = stmt.where(InventoryItem.location == location)
        stmt = stmt.order_by(InventoryItem.item.asc(), InventoryItem.location.asc())
        res = await session.execute(stmt)
        return list(res.scalars().all())

    async def get(self, session: AsyncSession, item: str, location: str) -> Optional[InventoryItem]:
        res = await session.execute(
            select(InventoryItem).where(InventoryItem.item == item, InventoryItem.location == location)
        )
        return res.scalar_one_or_none()

    async def find_first(
        self,
        session: AsyncSession,
        item: str,
        *,
        location: Optional[str] = None,
    ) -> Optional[InventoryItem]:
        """Без location берём первую по имени площадки — как и старый API по одному item."""
        if location:
            return await self.get(session, item, location)
        res = await session.execute(
            select(InventoryItem)
            .where(InventoryItem.item == item)
            .order_by(InventoryItem.location.asc())
            .limit(1)
        )
        return res.scalar_one_or_none()

    async def create(self, session: AsyncSession, **fields: Any) -> InventoryItem:
        obj = InventoryItem(**fields)
        session.add(obj)
        await session.flush()
        return obj

    async def update(self, session: AsyncSession, obj: InventoryItem, **fields: Any) -> InventoryItem:
        for key, value in fields.items():
            setattr(obj, key, value)
        await session.flush()
        return obj

    async def delete(self, session: AsyncSession, obj: InventoryItem) -> int:
        res = await session.execute(delete(InventoryItem).where(InventoryItem.id == int(obj.id)))
        return int(res.rowcount or 0)
