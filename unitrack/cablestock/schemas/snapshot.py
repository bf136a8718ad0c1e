# path: unitrack/cablestock/schemas/snapshot.py
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CableStockItem(BaseModel):
    type: str
    linno: str = ""
    quantity: int = 0


class SnapshotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    month: str
    items: list[CableStockItem]
    upload_date: datetime = Field(alias="uploadDate")


class UploadOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    month: str
    item_count: int = Field(alias="itemCount")


class ConsumptionRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str
    from_identifier: str = Field(alias="fromIdentifier")
    to_identifier: str = Field(alias="toIdentifier")
    identifier_changed: bool = Field(alias="identifierChanged")
    from_quantity: int = Field(alias="fromQuantity")
    to_quantity: int = Field(alias="toQuantity")
    used_quantity: int = Field(alias="usedQuantity")
    used_identifier: str = Field(alias="usedIdentifier")
    instock_quantity: int = Field(alias="instockQuantity")
    instock_identifier: str = Field(alias="instockIdentifier")
    consumption_rate: str = Field(alias="consumptionRate")


class ComparisonOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_month: str = Field(alias="fromMonth")
    to_month: str = Field(alias="toMonth")
    items: list[ConsumptionRecord]
