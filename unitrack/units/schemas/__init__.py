# path: unitrack/units/schemas/__init__.py
from __future__ import annotations

from unitrack.units.schemas.unit import CheckIPIn, MessageOut, UnitCreate, UnitIn, UnitUpdate

__all__ = [
    "UnitIn",
    "UnitCreate",
    "UnitUpdate",
    "CheckIPIn",
    "MessageOut",
]
