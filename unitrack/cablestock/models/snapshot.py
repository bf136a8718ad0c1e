# path: unitrack/cablestock/models/snapshot.py
from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from unitrack.core.models.base import Base


class CableStockSnapshot(Base):
    """
    Таблица cablestock_snapshots — остатки кабеля за месяц.

    month: "MM/YYYY", ровно один снимок на месяц (повторная загрузка заменяет целиком);
    items: [{"type": "...", "linno": "...", "quantity": int}, ...] в порядке строк листа.
    """

    __tablename__ = "cablestock_snapshots"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    month: Mapped[str] = mapped_column(String(7), nullable=False)
    items: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=False,
        default=list,
    )
    upload_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("month", name="uq_cablestock_snapshots_month"),
    )
