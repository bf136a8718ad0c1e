# path: tests/test_subnets.py
from __future__ import annotations

from unitrack.core.config import Gateway
from unitrack.units.services.subnets import available_ips, available_last_octets, candidate_ips


def test_candidate_ips_respects_range_and_cap():
    assert candidate_ips("192.168.1.1", 3) == ["192.168.1.1", "192.168.1.2", "192.168.1.3"]
    assert len(candidate_ips("192.168.1.1", 1000)) == 254
    assert candidate_ips("192.168.1.1", 0) == []


def test_available_excludes_assigned_and_zero_pads():
    gw = Gateway(ip="192.168.1.1", range=5)
    assert available_last_octets(gw, {"192.168.1.2", "192.168.1.4", "10.0.0.3"}) == ["001", "003", "005"]


def test_available_ips_per_gateway():
    gateways = [Gateway(ip="192.168.1.1", range=3), Gateway(ip="10.0.0.1", range=2)]
    assigned = {"192.168.1.1", "10.0.0.2"}

    result = available_ips(gateways, assigned)

    assert result == {"192.168.1.1": ["002", "003"], "10.0.0.1": ["001"]}


def test_available_never_contains_assigned_or_out_of_range():
    gw = Gateway(ip="172.16.5.1", range=300)
    assigned = {f"172.16.5.{i}" for i in range(0, 256, 3)}

    octets = available_last_octets(gw, assigned)

    for o in octets:
        n = int(o)
        assert 1 <= n <= 254
        assert f"172.16.5.{n}" not in assigned
