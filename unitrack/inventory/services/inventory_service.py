# path: unitrack/inventory/services/inventory_service.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.app_logging import get_logger
from unitrack.core.exceptions import DuplicateItemError, NotFoundError, ValidationError
from unitrack.crud.inventory_repository import IInventoryRepository
from unitrack.inventory.models.enums import Location
from unitrack.inventory.models.item import InventoryItem
from unitrack.inventory.schemas.item import InventoryItemCreate, InventoryItemUpdate

log = get_logger("inventory.service")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _check_quantity(quantity: int) -> int:
    if quantity < 0:
        raise ValidationError("Quantity must be a non-negative integer", details={"quantity": quantity})
    return int(quantity)


class InventoryService:
    """
    CRUD расходников по площадкам.

    - item/note: срезаем хвостовые пробелы (внутренние не трогаем);
    - дубль (item, location) -> DuplicateItemError;
    - updated пишем на каждый update, даже если значения не поменялись.
    """

    def __init__(self, repo: IInventoryRepository) -> None:
        self._repo = repo

    async def list_items(self, session: AsyncSession, *, location: Optional[Location] = None) -> list[InventoryItem]:
        return await self._repo.list_items(session, location=location.value if location else None)

    async def get_item(self, session: AsyncSession, item: str, *, location: Optional[Location] = None) -> InventoryItem:
        return await self._get_or_404(session, item, location)

    async def create_item(self, session: AsyncSession, payload: InventoryItemCreate) -> InventoryItem:
        name = (payload.item or "").rstrip()
        if not name.strip():
            raise ValidationError("Item name is required")
        if payload.location is None:
            raise ValidationError("Location is required")

        location = payload.location.value
        if await self._repo.get(session, name, location) is not None:
            raise DuplicateItemError(details={"item": name, "location": location})

        try:
            obj = await self._repo.create(
                session,
                item=name,
                location=location,
                quantity=_check_quantity(payload.quantity),
                eos=bool(payload.eos),
                note=(payload.note or "").rstrip(),
                updated=_now(),
            )
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            raise DuplicateItemError(details={"item": name, "location": location}) from e

        log.info({"event": "inventory_created", "item": name, "location": location, "quantity": obj.quantity})
        return obj

    async def update_item(
        self,
        session: AsyncSession,
        item: str,
        payload: InventoryItemUpdate,
        *,
        location: Optional[Location] = None,
    ) -> InventoryItem:
        obj = await self._get_or_404(session, item, location)

        fields: dict[str, object] = {"updated": _now()}
        if payload.quantity is not None:
            fields["quantity"] = _check_quantity(payload.quantity)
        if payload.eos is not None:
            fields["eos"] = bool(payload.eos)
        if payload.note is not None:
            fields["note"] = payload.note.rstrip()
        if payload.location is not None and payload.location.value != obj.location:
            target = payload.location.value
            if await self._repo.get(session, obj.item, target) is not None:
                raise DuplicateItemError(details={"item": obj.item, "location": target})
            fields["location"] = target

        try:
            obj = await self._repo.update(session, obj, **fields)
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            raise DuplicateItemError(details={"item": obj.item, "location": fields.get("location")}) from e

        log.info({"event": "inventory_updated", "item": obj.item, "location": obj.location, "fields": sorted(fields)})
        return obj

    async def delete_item(self, session: AsyncSession, item: str, *, location: Optional[Location] = None) -> None:
        obj = await self._get_or_404(session, item, location)
        deleted = await self._repo.delete(session, obj)
        if deleted == 0:
            raise NotFoundError("Item not found", details={"item": item})
        await session.commit()
        log.info({"event": "inventory_deleted", "item": obj.item, "location": obj.location})

    async def _get_or_404(self, session: AsyncSession, item: str, location: Optional[Location]) -> InventoryItem:
        if not item:
            raise ValidationError("Item name is required")
        obj = await self._repo.find_first(session, item, location=location.value if location else None)
        if obj is None:
            raise NotFoundError("Item not found", details={"item": item, "location": location.value if location else None})
        return obj
