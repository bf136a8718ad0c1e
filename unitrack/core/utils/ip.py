# path: unitrack/core/utils/ip.py
from __future__ import annotations

import re
from typing import Optional

_OCTET = r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
IPV4_RE = re.compile(rf"^{_OCTET}\.{_OCTET}\.{_OCTET}\.{_OCTET}$")

# пустой/битый ip сортируется после любого реального адреса (> 2**32 - 1)
_NO_IP_KEY = 1 << 32


def is_valid_ipv4(value: Optional[str]) -> bool:
    """Строгий dotted-quad: 4 октета 0..255, без пробелов и масок."""
    if not isinstance(value, str):
        return False
    return IPV4_RE.match(value) is not None


def ip_to_int(ip: str) -> int:
    """
    "192.168.1.1" -> 3232235777.

    Старший октет идёт первым, результат — беззнаковое 32-битное число.
    """
    acc = 0
    for octet in ip.split("."):
        acc = ((acc << 8) + int(octet, 10)) & 0xFFFFFFFF
    return acc


def ip_sort_key(ip: Optional[str]) -> int:
    if not is_valid_ipv4(ip):
        return _NO_IP_KEY
    return ip_to_int(ip)  # type: ignore[arg-type]


def subnet_base(gateway_ip: str) -> str:
    """Первые три октета шлюза: "192.168.1.1" -> "192.168.1"."""
    return ".".join(gateway_ip.split(".")[:3])
