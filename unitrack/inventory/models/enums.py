# path: unitrack/inventory/models/enums.py
from __future__ import annotations

from enum import Enum


class Location(str, Enum):
    WILEY = "Wiley"
    REDDING = "Redding"
    JANE = "Jane"
