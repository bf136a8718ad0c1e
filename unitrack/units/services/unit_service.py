# path: unitrack/units/services/unit_service.py
from __future__ import annotations

from typing import Any, Optional, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.app_logging import get_logger
from unitrack.core.config import Gateway
from unitrack.core.exceptions import (
    DuplicateIPError,
    DuplicateNameError,
    NotFoundError,
    UnitInUseError,
    ValidationError,
)
from unitrack.crud.unit_repository import IUnitRepository
from unitrack.units.models.enums import UnitType
from unitrack.units.models.unit import Unit
from unitrack.units.schemas.unit import UnitIn, UnitUpdate
from unitrack.units.services.field_schema import FieldSchema
from unitrack.units.services.ip_resolver import IPConflictResolver
from unitrack.units.services.subnets import available_ips

log = get_logger("units.service")


class UnitService:
    """
    CRUD юнитов поверх репозитория + resolver.

    Важно:
    - AsyncSession приходит снаружи (Depends), commit делает сервис;
    - после записи держим инвариант shared computer: его IP == текущий IP primary user,
      поэтому смена IP/имени юнита протаскивается во все зависимые shared computers;
    - проверка "check-then-write" не атомарна, последняя линия — unique-индексы в БД.
    """

    def __init__(
        self,
        repo: IUnitRepository,
        field_schema: FieldSchema,
        resolver: Optional[IPConflictResolver] = None,
    ) -> None:
        self._repo = repo
        self._fields = field_schema
        self._resolver = resolver or IPConflictResolver(repo)

    def to_record(self, unit: Unit) -> dict[str, Any]:
        record: dict[str, Any] = {
            "id": int(unit.id),
            "name": unit.name,
            "ip": unit.ip or "",
            "type": unit.type,
            "sharedComputer": bool(unit.shared_computer),
            "primaryUser": unit.primary_user,
        }
        for key, value in (unit.attributes or {}).items():
            record.setdefault(key, value)
        return self._fields.order(unit.type, record)

    async def list_units(self, session: AsyncSession) -> list[dict[str, Any]]:
        units = await self._repo.list_units(session)
        return [self.to_record(u) for u in units]

    async def get_unit(self, session: AsyncSession, name: str) -> dict[str, Any]:
        unit = await self._get_or_404(session, name)
        return self.to_record(unit)

    async def create_unit(self, session: AsyncSession, payload: UnitIn) -> dict[str, Any]:
        unit_type = payload.type or UnitType.EMPLOYEE
        attributes = self._fields.normalize(unit_type, payload.variant_fields())

        resolved = await self._resolver.resolve(session, payload, attributes=attributes)

        try:
            unit = await self._repo.create(session, **resolved.as_fields())
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            raise self._integrity_error(e, name=resolved.name, ip=resolved.ip) from e

        log.info({"event": "unit_created", "name": unit.name, "ip": unit.ip, "shared": unit.shared_computer})
        return self.to_record(unit)

    async def update_unit(self, session: AsyncSession, name: str, payload: UnitUpdate) -> dict[str, Any]:
        if payload.id is not None:
            existing = await self._repo.get_by_id(session, payload.id)
            if existing is None:
                raise NotFoundError("Unit not found", details={"id": payload.id})
        else:
            existing = await self._get_or_404(session, name)

        old_name, old_ip = existing.name, existing.ip

        unit_type = payload.type or UnitType(existing.type)
        attributes = self._fields.normalize(unit_type, payload.variant_fields())

        resolved = await self._resolver.resolve(session, payload, attributes=attributes, existing=existing)

        try:
            unit = await self._repo.update(session, existing, **resolved.as_fields())
            if unit.name != old_name or unit.ip != old_ip:
                await self._propagate_to_dependents(session, old_name=old_name, new_name=unit.name, ip=unit.ip)
            await session.commit()
        except IntegrityError as e:
            await session.rollback()
            raise self._integrity_error(e, name=resolved.name, ip=resolved.ip) from e

        log.info(
            {
                "event": "unit_updated",
                "name": unit.name,
                "old_name": old_name,
                "ip": unit.ip,
                "old_ip": old_ip,
                "shared": unit.shared_computer,
            }
        )
        return self.to_record(unit)

    async def delete_unit(self, session: AsyncSession, name: str) -> None:
        if not name:
            raise ValidationError("Name is required")

        dependents = await self._repo.list_dependents(session, name)
        if dependents:
            raise UnitInUseError(details={"name": name, "sharedComputers": [d.name for d in dependents]})

        deleted = await self._repo.delete_by_name(session, name)
        if deleted == 0:
            raise NotFoundError("Unit not found", details={"name": name})

        await session.commit()
        log.info({"event": "unit_deleted", "name": name})

    async def check_ip(self, session: AsyncSession, ip: Optional[str], *, exclude_id: Optional[int] = None) -> str:
        return await self._resolver.check_ip_available(session, ip, exclude_id=exclude_id)

    async def available_ips(self, session: AsyncSession, gateways: Sequence[Gateway]) -> dict[str, list[str]]:
        assigned = await self._repo.list_assigned_ips(session)
        return available_ips(gateways, assigned)

    async def _get_or_404(self, session: AsyncSession, name: str) -> Unit:
        if not name:
            raise ValidationError("Name is required")
        unit = await self._repo.get_by_name(session, name)
        if unit is None:
            raise NotFoundError("Unit not found", details={"name": name})
        return unit

    async def _propagate_to_dependents(self, session: AsyncSession, *, old_name: str, new_name: str, ip: str) -> None:
        """
        Shared computers копируют IP primary user — обновляем их (и их зависимых) сразу.

        Обход в ширину; visited страхует от циклов shared -> shared.
        """
        queue: list[tuple[str, str, str]] = [(old_name, new_name, ip)]
        visited: set[int] = set()

        while queue:
            ref_name, cur_name, cur_ip = queue.pop(0)
            for dep in await self._repo.list_dependents(session, ref_name):
                if dep.id in visited:
                    continue
                visited.add(int(dep.id))

                dep_old_ip = dep.ip
                await self._repo.update(session, dep, primary_user=cur_name, ip=cur_ip)
                log.info({"event": "shared_unit_synced", "name": dep.name, "primary_user": cur_name, "ip": cur_ip})

                if dep_old_ip != cur_ip:
                    queue.append((dep.name, dep.name, cur_ip))

    @staticmethod
    def _integrity_error(e: IntegrityError, *, name: str, ip: str) -> Exception:
        """Гонка check-then-write: unique-индекс БД сработал на commit."""
        msg = str(getattr(e, "orig", e))
        log.info({"event": "unit_integrity_error", "error": msg})
        if "uq_units_ip" in msg or "units.ip" in msg:
            return DuplicateIPError(details={"ip": ip})
        return DuplicateNameError(details={"name": name})
