# path: unitrack/inventory/schemas/__init__.py
from __future__ import annotations

from unitrack.inventory.schemas.item import (
    InventoryItemCreate,
    InventoryItemOut,
    InventoryItemUpdate,
    format_updated,
)

__all__ = [
    "InventoryItemCreate",
    "InventoryItemUpdate",
    "InventoryItemOut",
    "format_updated",
]
