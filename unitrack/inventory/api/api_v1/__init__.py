# path: unitrack/inventory/api/api_v1/__init__.py
from __future__ import annotations

from fastapi import APIRouter

from unitrack.core.config import settings
from .inventory import router as inventory_router

router = APIRouter()
router.include_router(inventory_router, prefix=settings.api.inventory)
