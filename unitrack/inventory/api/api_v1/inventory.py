# path: unitrack/inventory/api/api_v1/inventory.py
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.core.dependencies import get_inventory_service, get_session
from unitrack.inventory.models.enums import Location
from unitrack.inventory.schemas.item import (
    InventoryItemCreate,
    InventoryItemOut,
    InventoryItemUpdate,
)
from unitrack.inventory.services.inventory_service import InventoryService
from unitrack.units.schemas.unit import MessageOut

router = APIRouter(tags=["Inventory"])

Session = Annotated[AsyncSession, Depends(get_session)]
Service = Annotated[InventoryService, Depends(get_inventory_service)]
LocationQuery = Annotated[Optional[Location], Query()]


@router.get("", response_model=list[InventoryItemOut])
async def list_items(session: Session, service: Service, location: LocationQuery = None):
    """Список по имени; ?location=Wiley|Redding|Jane сужает до одной площадки."""
    items = await service.list_items(session, location=location)
    return [InventoryItemOut.model_validate(i) for i in items]


@router.post("", status_code=status.HTTP_201_CREATED, response_model=InventoryItemOut)
async def create_item(session: Session, service: Service, payload: InventoryItemCreate):
    obj = await service.create_item(session, payload)
    return InventoryItemOut.model_validate(obj)


@router.get("/{item}", response_model=InventoryItemOut)
async def get_item(item: str, session: Session, service: Service, location: LocationQuery = None):
    obj = await service.get_item(session, item, location=location)
    return InventoryItemOut.model_validate(obj)


@router.put("/{item}", response_model=InventoryItemOut)
async def update_item(
    item: str,
    session: Session,
    service: Service,
    payload: InventoryItemUpdate,
    location: LocationQuery = None,
):
    obj = await service.update_item(session, item, payload, location=location)
    return InventoryItemOut.model_validate(obj)


@router.delete("/{item}", response_model=MessageOut)
async def delete_item(item: str, session: Session, service: Service, location: LocationQuery = None):
    await service.delete_item(session, item, location=location)
    return MessageOut(message="Item deleted successfully")
