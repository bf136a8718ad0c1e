# path: unitrack/core/api/__init__.py
from fastapi import APIRouter

from unitrack.cablestock.api.api_v1 import router as cablestock_router
from unitrack.core.config import settings
from unitrack.inventory.api.api_v1 import router as inventory_router
from unitrack.units.api.api_v1 import router as units_router

router = APIRouter(
    prefix=settings.api.prefix,
)

# /api/units/..., /api/inventory/..., /api/cablestock/...
router.include_router(units_router)
router.include_router(inventory_router)
router.include_router(cablestock_router)
