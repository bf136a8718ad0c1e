# path: unitrack/units/services/ip_resolver.py
"""
Разрешение IP и конфликтов для create/update юнита.

Порядок проверок (create и update одинаково):
1. name: не пустой, без хвостовых пробелов, без запрещённых символов;
2. name не занят другим юнитом;
3. эффективный sharedComputer: из запроса, иначе (update) — сохранённый;
4. shared: primaryUser обязателен и должен существовать, IP берём у него;
5. не shared: IP обязателен, формат проверяем ДО запроса в БД, затем уникальность
   среди юнитов-владельцев (shared computers не считаются);
6. primaryUser = None, если юнит не shared.

Resolver ничего не пишет в БД — только читает через репозиторий.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.app_logging import get_logger
from unitrack.core.exceptions import (
    DuplicateIPError,
    DuplicateNameError,
    InvalidIPFormatError,
    MissingIPError,
    PrimaryUserNotFoundError,
    ValidationError,
)
from unitrack.core.utils.ip import is_valid_ipv4
from unitrack.crud.unit_repository import IUnitRepository
from unitrack.units.models.enums import UnitType
from unitrack.units.models.unit import Unit
from unitrack.units.schemas.unit import UnitIn

log = get_logger("units.ip_resolver")

FORBIDDEN_NAME_CHARS = frozenset("/?&=#:%+'\"\\;<>")
FORBIDDEN_NAME_HINT = "/ ? & = # : % + ' \" \\ ; < >"


def normalize_name(raw: Optional[str]) -> str:
    if raw is None or not str(raw).strip():
        raise ValidationError("Name is required")

    name = str(raw).rstrip()
    bad = sorted({ch for ch in name if ch in FORBIDDEN_NAME_CHARS})
    if bad:
        raise ValidationError(
            f"Name contains characters that are not allowed ({FORBIDDEN_NAME_HINT})",
            details={"name": name, "invalid": bad},
        )
    return name


def _clean(value: Optional[str]) -> Optional[str]:
    """'' и пробелы считаем "не передано"."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


@dataclass(frozen=True)
class ResolvedUnit:
    name: str
    ip: str
    type: UnitType
    shared_computer: bool
    primary_user: Optional[str]
    attributes: dict[str, Any] = field(default_factory=dict)

    def as_fields(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "ip": self.ip,
            "type": self.type.value,
            "shared_computer": self.shared_computer,
            "primary_user": self.primary_user,
            "attributes": dict(self.attributes),
        }


class IPConflictResolver:
    def __init__(self, repo: IUnitRepository) -> None:
        self._repo = repo

    async def resolve(
        self,
        session: AsyncSession,
        payload: UnitIn,
        *,
        attributes: dict[str, Any],
        existing: Optional[Unit] = None,
    ) -> ResolvedUnit:
        name = await self._resolve_name(session, payload, existing)

        unit_type = payload.type or (UnitType(existing.type) if existing else UnitType.EMPLOYEE)

        if payload.shared_computer is not None:
            shared = bool(payload.shared_computer)
        else:
            shared = bool(existing.shared_computer) if existing else False

        if shared and unit_type is not UnitType.EMPLOYEE:
            raise ValidationError("Only employee units can be shared computers", details={"type": unit_type.value})

        if shared:
            primary_user, ip = await self._resolve_shared(session, payload, name, existing)
        else:
            primary_user = None
            ip = await self._resolve_owned_ip(session, payload, existing)

        merged = {**(existing.attributes or {}), **attributes} if existing else dict(attributes)

        return ResolvedUnit(
            name=name,
            ip=ip,
            type=unit_type,
            shared_computer=shared,
            primary_user=primary_user,
            attributes=merged,
        )

    async def check_ip_available(
        self,
        session: AsyncSession,
        ip: Optional[str],
        *,
        exclude_id: Optional[int] = None,
    ) -> str:
        """
        Проверка "свободен ли IP" для живой подсказки в форме.

        Ничего не пишет; при занятом/битом IP бросает доменную ошибку.
        """
        value = (ip or "").strip()
        if not is_valid_ipv4(value):
            raise InvalidIPFormatError(details={"ip": ip})
        await self._ensure_ip_free(session, value, exclude_id=exclude_id)
        return value

    async def _resolve_name(self, session: AsyncSession, payload: UnitIn, existing: Optional[Unit]) -> str:
        if existing is None:
            name = normalize_name(payload.name)
            if await self._repo.get_by_name(session, name) is not None:
                raise DuplicateNameError(details={"name": name})
            return name

        if payload.name is None:
            return existing.name

        name = normalize_name(payload.name)
        if name != existing.name:
            other = await self._repo.get_by_name(session, name)
            if other is not None and other.id != existing.id:
                raise DuplicateNameError(details={"name": name})
        return name

    async def _resolve_shared(
        self,
        session: AsyncSession,
        payload: UnitIn,
        name: str,
        existing: Optional[Unit],
    ) -> tuple[str, str]:
        primary_name = _clean(payload.primary_user)
        if primary_name is None and existing is not None:
            primary_name = existing.primary_user

        if not primary_name:
            raise PrimaryUserNotFoundError("Primary user is required for a shared computer")

        own_names = {name, existing.name} if existing else {name}
        if primary_name in own_names:
            raise ValidationError("A unit cannot be its own primary user", details={"primaryUser": primary_name})

        primary = await self._repo.get_by_name(session, primary_name)
        if primary is None:
            log.info({"event": "primary_user_not_found", "primary_user": primary_name})
            raise PrimaryUserNotFoundError(details={"primaryUser": primary_name})

        return primary.name, primary.ip

    async def _resolve_owned_ip(self, session: AsyncSession, payload: UnitIn, existing: Optional[Unit]) -> str:
        requested = _clean(payload.ip)
        was_shared = bool(existing and existing.shared_computer)

        if existing is None:
            ip = requested
        elif was_shared:
            # shared -> unshared: занятый у primary user IP не наследуем
            if requested is None:
                raise MissingIPError("IP address is required when a unit stops being a shared computer")
            ip = requested
        else:
            ip = requested or existing.ip

        if not ip:
            raise MissingIPError()

        needs_check = existing is None or was_shared or ip != existing.ip
        if needs_check:
            if not is_valid_ipv4(ip):
                raise InvalidIPFormatError(details={"ip": ip})
            await self._ensure_ip_free(session, ip, exclude_id=existing.id if existing else None)

        return ip

    async def _ensure_ip_free(self, session: AsyncSession, ip: str, *, exclude_id: Optional[int]) -> None:
        owner = await self._repo.find_ip_owner(session, ip, exclude_id=exclude_id)
        if owner is not None:
            log.info({"event": "ip_taken", "ip": ip, "owner": owner.name})
            raise DuplicateIPError(details={"ip": ip, "name": owner.name})
