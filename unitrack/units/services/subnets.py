# path: unitrack/units/services/subnets.py
from __future__ import annotations

from typing import Iterable, Sequence

from unitrack.core.config import Gateway
from unitrack.core.utils.ip import subnet_base

MAX_HOSTS = 254


def candidate_ips(gateway_ip: str, host_range: int) -> list[str]:
    """{base}.1 .. {base}.min(range, 254); range < 1 -> пусто."""
    base = subnet_base(gateway_ip)
    upper = min(int(host_range), MAX_HOSTS)
    return [f"{base}.{i}" for i in range(1, upper + 1)]


def available_last_octets(gateway: Gateway, assigned: Iterable[str]) -> list[str]:
    """Свободные адреса блока как последний октет с нулями: 7 -> "007"."""
    taken = set(assigned)
    out: list[str] = []
    for ip in candidate_ips(gateway.ip, gateway.range):
        if ip in taken:
            continue
        out.append(ip.rsplit(".", 1)[1].zfill(3))
    return out


def available_ips(gateways: Sequence[Gateway], assigned: Iterable[str]) -> dict[str, list[str]]:
    """
    Карта gateway.ip -> свободные последние октеты.

    Каждый шлюз считается независимо; чистая функция от конфига и снимка занятых IP.
    """
    taken = set(assigned)
    return {gw.ip: available_last_octets(gw, taken) for gw in gateways}
