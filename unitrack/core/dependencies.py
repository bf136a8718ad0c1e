# path: unitrack/core/dependencies.py
from __future__ import annotations

from functools import lru_cache
from typing import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.cablestock.services.cablestock_service import CableStockService
from unitrack.core.config import Settings
from unitrack.core.models.db_helper import DatabaseHelper
from unitrack.crud.cablestock_repository import CableStockRepository, ICableStockRepository
from unitrack.crud.inventory_repository import IInventoryRepository, InventoryRepository
from unitrack.crud.unit_repository import IUnitRepository, UnitRepository
from unitrack.inventory.services.inventory_service import InventoryService
from unitrack.units.services.field_schema import FieldSchema
from unitrack.units.services.unit_service import UnitService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db_helper(request: Request) -> DatabaseHelper:
    return request.app.state.db_helper


async def get_session(
    db_helper: DatabaseHelper = Depends(get_db_helper),
) -> AsyncGenerator[AsyncSession, None]:
    """Сессия на запрос из хэндла, который открыл create_app."""
    async for session in db_helper.session_getter():
        yield session


@lru_cache(maxsize=1)
def _unit_repo_singleton() -> UnitRepository:
    return UnitRepository()


def get_unit_repository() -> IUnitRepository:
    return _unit_repo_singleton()


@lru_cache(maxsize=1)
def _inventory_repo_singleton() -> InventoryRepository:
    return InventoryRepository()


def get_inventory_repository() -> IInventoryRepository:
    return _inventory_repo_singleton()


@lru_cache(maxsize=1)
def _cablestock_repo_singleton() -> CableStockRepository:
    return CableStockRepository()


def get_cablestock_repository() -> ICableStockRepository:
    return _cablestock_repo_singleton()


def get_field_schema(settings: Settings = Depends(get_settings)) -> FieldSchema:
    return FieldSchema(settings.unit_fields)


def get_unit_service(
    repo: IUnitRepository = Depends(get_unit_repository),
    field_schema: FieldSchema = Depends(get_field_schema),
) -> UnitService:
    return UnitService(repo=repo, field_schema=field_schema)


def get_inventory_service(
    repo: IInventoryRepository = Depends(get_inventory_repository),
) -> InventoryService:
    return InventoryService(repo=repo)


def get_cablestock_service(
    settings: Settings = Depends(get_settings),
    repo: ICableStockRepository = Depends(get_cablestock_repository),
) -> CableStockService:
    return CableStockService(repo=repo, cfg=settings.cablestock)
