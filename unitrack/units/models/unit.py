# path: unitrack/units/models/unit.py
from __future__ import annotations

from typing import Any, Optional

from sqlalchemy import JSON, Boolean, Index, String, UniqueConstraint, false, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from unitrack.core.models.base import Base


class Unit(Base):
    """
    Таблица units — отслеживаемый хост (рабочее место или машина).

    Поля:
    - name: уникальное имя (ключ для API)
    - ip: собственный IP; у shared computer — копия IP primary user
    - type: employee|machine
    - shared_computer / primary_user: юнит без своего IP, "занимает" IP другого юнита
    - attributes: открытая карта полей варианта (department, MAC, badge, line, ...)
    """

    __tablename__ = "units"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    ip: Mapped[str] = mapped_column(String(15), nullable=False, default="", server_default="")
    type: Mapped[str] = mapped_column(String(16), nullable=False, default="employee", server_default="employee")

    shared_computer: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    primary_user: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)

    attributes: Mapped[dict[str, Any]] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"),
        nullable=False,
        default=dict,
    )

    __table_args__ = (
        UniqueConstraint("name", name="uq_units_name"),
        # IP уникален только среди "владельцев": shared computers повторяют IP primary user
        Index(
            "uq_units_ip_owned",
            "ip",
            unique=True,
            postgresql_where=text("shared_computer = false AND ip <> ''"),
            sqlite_where=text("shared_computer = 0 AND ip <> ''"),
        ),
    )
