# path: unitrack/units/models/enums.py
from __future__ import annotations

from enum import Enum


class UnitType(str, Enum):
    """
    Тип юнита.

    - employee: рабочее место сотрудника (может быть shared computer)
    - machine:  общая машина на линии (всегда со своим IP)
    """

    EMPLOYEE = "employee"
    MACHINE = "machine"
