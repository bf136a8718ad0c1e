# path: unitrack/inventory/schemas/item.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from unitrack.inventory.models.enums import Location


def format_updated(value: datetime) -> str:
    """mm/dd/yyyy hh:mm — так дату показывает список на фронте."""
    return value.strftime("%m/%d/%Y %H:%M")


class InventoryItemCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    item: Optional[str] = None
    quantity: int = 0
    eos: bool = Field(default=False, alias="EOS")
    location: Optional[Location] = None
    note: Optional[str] = None


class InventoryItemUpdate(BaseModel):
    """PUT: всё опционально, не переданное остаётся как было (кроме updated)."""
    model_config = ConfigDict(populate_by_name=True)

    quantity: Optional[int] = None
    eos: Optional[bool] = Field(default=None, alias="EOS")
    location: Optional[Location] = None
    note: Optional[str] = None


class InventoryItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    item: str
    quantity: int
    eos: bool = Field(alias="EOS")
    location: str
    note: str
    updated: datetime

    @computed_field(alias="updatedFormatted")  # type: ignore[prop-decorator]
    @property
    def updated_formatted(self) -> str:
        return format_updated(self.updated)
