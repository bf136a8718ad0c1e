# path: unitrack/units/schemas/unit.py
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from unitrack.units.models.enums import UnitType


class UnitIn(BaseModel):
    """
    Тело запроса create/update юнита.

    Фиксированные поля — name/ip/type/sharedComputer/primaryUser, всё остальное
    (department, MAC, badge, line, ...) прилетает как extra и уходит в attributes.
    Пустой name/ip проверяет resolver, а не pydantic: ошибки должны быть доменными.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Optional[str] = None
    ip: Optional[str] = None
    type: Optional[UnitType] = None
    shared_computer: Optional[bool] = Field(default=None, alias="sharedComputer")
    primary_user: Optional[str] = Field(default=None, alias="primaryUser")

    def variant_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class UnitCreate(UnitIn):
    pass


class UnitUpdate(UnitIn):
    # "_id" — так поле называл старый фронт; адресует update не по имени из URL
    id: Optional[int] = Field(default=None, alias="_id")


class CheckIPIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ip: Optional[str] = None
    id: Optional[int] = Field(default=None, alias="_id")


class MessageOut(BaseModel):
    message: str
