# path: unitrack/units/api/api_v1/__init__.py
from __future__ import annotations

from fastapi import APIRouter

from unitrack.core.config import settings
from .units import router as units_router

router = APIRouter()
router.include_router(units_router, prefix=settings.api.units)
