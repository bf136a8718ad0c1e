# path: unitrack/cablestock/schemas/__init__.py
from __future__ import annotations

from unitrack.cablestock.schemas.snapshot import (
    CableStockItem,
    ComparisonOut,
    ConsumptionRecord,
    SnapshotOut,
    UploadOut,
)

__all__ = [
    "CableStockItem",
    "SnapshotOut",
    "UploadOut",
    "ConsumptionRecord",
    "ComparisonOut",
]
