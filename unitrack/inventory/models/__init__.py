# path: unitrack/inventory/models/__init__.py
from __future__ import annotations

from unitrack.inventory.models.enums import Location
from unitrack.inventory.models.item import InventoryItem

__all__ = [
    "Location",
    "InventoryItem",
]
