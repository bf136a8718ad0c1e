# path: unitrack/units/models/__init__.py
from __future__ import annotations

from unitrack.units.models.enums import UnitType
from unitrack.units.models.unit import Unit

__all__ = [
    "UnitType",
    "Unit",
]
