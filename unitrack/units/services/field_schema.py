# path: unitrack/units/services/field_schema.py
"""
Data-driven схема полей юнита.

Списки полей employee/machine приходят из конфига (settings.unit_fields), а не
зашиты в модель. Здесь же — нормализация открытой карты полей варианта:
- строки: срезаем хвостовые пробелы;
- boolean/number: приводим по типу из конфига;
- неизвестные ключи сохраняем (карта открытая).
"""

from __future__ import annotations

from typing import Any, Optional

from unitrack.core.config import FieldsConfig, FieldSpec
from unitrack.core.exceptions import ValidationError
from unitrack.units.models.enums import UnitType

# ключи, которые живут в колонках units, а не в attributes
RESERVED_KEYS = frozenset({"id", "_id", "name", "ip", "type", "sharedComputer", "primaryUser"})

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off", ""}


def parse_bool(v: Any) -> Optional[bool]:
    if v is None or isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    s = str(v).strip().lower()
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    return None


def parse_number(v: Any) -> Optional[int | float]:
    if v is None or isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        return v
    s = str(v).strip()
    if not s:
        return None
    try:
        return int(s)
    except ValueError:
        pass
    try:
        return float(s)
    except ValueError:
        return None


class FieldSchema:
    def __init__(self, cfg: FieldsConfig) -> None:
        self._specs: dict[UnitType, list[FieldSpec]] = {
            UnitType.EMPLOYEE: list(cfg.employee),
            UnitType.MACHINE: list(cfg.machine),
        }

    def specs_for(self, unit_type: UnitType | str) -> list[FieldSpec]:
        return self._specs[UnitType(unit_type)]

    def field_order(self, unit_type: UnitType | str) -> list[str]:
        return [f.name for f in self.specs_for(unit_type)]

    def describe(self) -> dict[str, list[dict[str, str]]]:
        return {t.value: [s.model_dump() for s in specs] for t, specs in self._specs.items()}

    def normalize(self, unit_type: UnitType | str, values: dict[str, Any]) -> dict[str, Any]:
        types = {s.name: s.type for s in self.specs_for(unit_type)}
        out: dict[str, Any] = {}

        for key, raw in values.items():
            if key in RESERVED_KEYS:
                continue

            kind = types.get(key, "string")
            if kind == "boolean":
                val = parse_bool(raw)
                if val is None and raw is not None:
                    raise ValidationError(f"Field '{key}' must be a boolean", details={key: raw})
                out[key] = val
            elif kind == "number":
                val = parse_number(raw)
                if val is None and raw not in (None, ""):
                    raise ValidationError(f"Field '{key}' must be a number", details={key: raw})
                out[key] = val
            elif isinstance(raw, str):
                out[key] = raw.rstrip()
            else:
                out[key] = raw

        return out

    def order(self, unit_type: UnitType | str, record: dict[str, Any]) -> dict[str, Any]:
        """Ключи по порядку из конфига, за ними — всё, чего в конфиге нет."""
        order = ["id", "type", *self.field_order(unit_type)]
        ordered = {k: record[k] for k in order if k in record}
        for k, v in record.items():
            if k not in ordered:
                ordered[k] = v
        return ordered
