# path: unitrack/core/utils/__init__.py
from __future__ import annotations

from .ip import (
    IPV4_RE,
    ip_sort_key,
    ip_to_int,
    is_valid_ipv4,
    subnet_base,
)

__all__ = (
    "IPV4_RE",
    "ip_sort_key",
    "ip_to_int",
    "is_valid_ipv4",
    "subnet_base",
)
