# path: unitrack/cablestock/api/api_v1/__init__.py
from __future__ import annotations

from fastapi import APIRouter

from unitrack.core.config import settings
from .cablestock import router as cablestock_router

router = APIRouter()
router.include_router(cablestock_router, prefix=settings.api.cablestock)
