# path: unitrack/crud/unit_repository.py
from __future__ import annotations

from typing import Any, Optional, Protocol

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.core.utils.ip import ip_sort_key
from unitrack.units.models.unit import Unit


class IUnitRepository(Protocol):
    """
    Интерфейс репозитория units (DI-контракт).

    Правило: SQL живёт только в crud-слое, сервисы получают AsyncSession снаружи.
    """

    async def list_units(self, session: AsyncSession) -> list[Unit]: ...
    async def get_by_id(self, session: AsyncSession, unit_id: int) -> Optional[Unit]: ...
    async def get_by_name(self, session: AsyncSession, name: str) -> Optional[Unit]: ...
    async def find_ip_owner(
        self,
        session: AsyncSession,
        ip: str,
        *,
        exclude_id: Optional[int] = None,
    ) -> Optional[Unit]: ...
    async def list_dependents(self, session: AsyncSession, primary_name: str) -> list[Unit]: ...
    async def list_assigned_ips(self, session: AsyncSession) -> set[str]: ...
    async def create(self, session: AsyncSession, **fields: Any) -> Unit: ...
    async def update(self, session: AsyncSession, unit: Unit, **fields: Any) -> Unit: ...
    async def delete_by_name(self, session: AsyncSession, name: str) -> int: ...


class UnitRepository(IUnitRepository):
    async def list_units(self, session: AsyncSession) -> list[Unit]:
        """
        Все юниты по возрастанию IP (как 32-битное число).

        Сортируем в Python: порядок строк "10.0.0.9" < "10.0.0.10" в SQL не получить,
        а записей — сотни. Юниты без IP уходят в конец.
        """
        res = await session.execute(select(Unit))
        units = list(res.scalars().all())
        units.sort(key=lambda u: (ip_sort_key(u.ip), u.name))
        return units

    async def get_by_id(self, session: AsyncSession, unit_id: int) -> Optional[Unit]:
        res = await session.execute(select(Unit).where(Unit.id == int(unit_id)))
        return res.scalar_one_or_none()

    async def get_by_name(self, session: AsyncSession, name: str) -> Optional[Unit]:
        res = await session.execute(select(Unit).where(Unit.name == name))
        return res.scalar_one_or_none()

    async def find_ip_owner(
        self,
        session: AsyncSession,
        ip: str,
        *,
        exclude_id: Optional[int] = None,
    ) -> Optional[Unit]:
        """Юнит, который владеет ip (shared computers IP не владеют)."""
        stmt = select(Unit).where(Unit.ip == ip, Unit.shared_computer.is_(False))
        if exclude_id is not None:
            stmt = stmt.where(Unit.id != int(exclude_id))
        res = await session.execute(stmt.limit(1))
        return res.scalar_one_or_none()

    async def list_dependents(self, session: AsyncSession, primary_name: str) -> list[Unit]:
        """Shared computers, которые занимают IP юнита primary_name."""
        res = await session.execute(
            select(Unit)
            .where(Unit.shared_computer.is_(True), Unit.primary_user == primary_name)
            .order_by(Unit.id)
        )
        return list(res.scalars().all())

    async def list_assigned_ips(self, session: AsyncSession) -> set[str]:
        res = await session.execute(select(Unit.ip).where(Unit.ip != ""))
        return {str(ip) for (ip,) in res.all() if ip}

    async def create(self, session: AsyncSession, **fields: Any) -> Unit:
        unit = Unit(**fields)
        session.add(unit)
        await session.flush()
        return unit

    async def update(self, session: AsyncSession, unit: Unit, **fields: Any) -> Unit:
        for key, value in fields.items():
            setattr(unit, key, value)
        await session.flush()
        return unit

    async def delete_by_name(self, session: AsyncSession, name: str) -> int:
        res = await session.execute(delete(Unit).where(Unit.name == name))
        return int(res.rowcount or 0)
