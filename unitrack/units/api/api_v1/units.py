# path: unitrack/units/api/api_v1/units.py
from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.core.config import Settings
from unitrack.core.dependencies import (
    get_field_schema,
    get_session,
    get_settings,
    get_unit_service,
)
from unitrack.units.schemas.unit import CheckIPIn, MessageOut, UnitCreate, UnitUpdate
from unitrack.units.services.field_schema import FieldSchema
from unitrack.units.services.unit_service import UnitService

router = APIRouter(tags=["Units"])

Session = Annotated[AsyncSession, Depends(get_session)]
Service = Annotated[UnitService, Depends(get_unit_service)]


@router.get("")
async def list_units(session: Session, service: Service) -> list[dict[str, Any]]:
    """Все юниты, отсортированные по IP."""
    return await service.list_units(session)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_unit(session: Session, service: Service, payload: UnitCreate) -> dict[str, Any]:
    return await service.create_unit(session, payload)


@router.post("/check-ip", status_code=status.HTTP_201_CREATED, response_model=MessageOut)
async def check_ip(session: Session, service: Service, payload: CheckIPIn) -> MessageOut:
    """
    Живая проверка IP для формы: 201 — свободен, 400 — занят или битый формат.

    Без побочных эффектов, можно дёргать на каждый ввод.
    """
    await service.check_ip(session, payload.ip, exclude_id=payload.id)
    return MessageOut(message="Available.")


@router.get("/available-ips")
async def available_ips(
    session: Session,
    service: Service,
    settings: Annotated[Settings, Depends(get_settings)],
) -> dict[str, list[str]]:
    """gateway ip -> свободные последние октеты ("001".."254")."""
    return await service.available_ips(session, settings.network.gateways)


@router.get("/fields")
async def unit_fields(field_schema: Annotated[FieldSchema, Depends(get_field_schema)]) -> dict[str, Any]:
    return field_schema.describe()


@router.get("/{name}")
async def get_unit(name: str, session: Session, service: Service) -> dict[str, Any]:
    return await service.get_unit(session, name)


@router.put("/{name}")
async def update_unit(name: str, session: Session, service: Service, payload: UnitUpdate) -> dict[str, Any]:
    return await service.update_unit(session, name, payload)


@router.delete("/{name}", response_model=MessageOut)
async def delete_unit(name: str, session: Session, service: Service) -> MessageOut:
    await service.delete_unit(session, name)
    return MessageOut(message="Unit deleted successfully")
