# path: unitrack/cablestock/models/__init__.py
from __future__ import annotations

from unitrack.cablestock.models.snapshot import CableStockSnapshot

__all__ = [
    "CableStockSnapshot",
]
