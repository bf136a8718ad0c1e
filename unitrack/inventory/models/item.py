# path: unitrack/inventory/models/item.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, Text, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column

from unitrack.core.models.base import Base


class InventoryItem(Base):
    """
    Таблица inventory_items — расходник на одной из площадок (Wiley/Redding/Jane).

    Одно и то же имя может независимо жить на каждой площадке: ключ — (item, location).
    updated обновляется на каждую запись, истории нет.
    """

    __tablename__ = "inventory_items"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    item: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(32), nullable=False, index=True)

    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    eos: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    note: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")

    updated: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("item", "location", name="uq_inventory_items_item_location"),
    )
