# path: tests/test_units_api.py
from __future__ import annotations

from httpx import AsyncClient

URL = "/api/units"


async def _create(client: AsyncClient, **body):
    return await client.post(URL, json=body)


async def test_create_and_get_unit(client: AsyncClient):
    r = await _create(client, name="alice ", ip="192.168.1.10", type="employee", department="IT  ")
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["name"] == "alice"
    assert body["ip"] == "192.168.1.10"
    assert body["type"] == "employee"
    assert body["sharedComputer"] is False
    assert body["primaryUser"] is None
    assert body["department"] == "IT"

    r = await client.get(f"{URL}/alice")
    assert r.status_code == 200
    assert r.json()["id"] == body["id"]


async def test_get_missing_unit_is_404(client: AsyncClient):
    r = await client.get(f"{URL}/nobody")
    assert r.status_code == 404
    assert r.json()["error"] == "Unit not found"


async def test_list_sorted_by_ip(client: AsyncClient):
    for name, ip in [("c", "192.168.1.100"), ("b", "192.168.1.9"), ("a", "10.0.0.1")]:
        assert (await _create(client, name=name, ip=ip)).status_code == 201

    r = await client.get(URL)
    assert r.status_code == 200
    assert [u["name"] for u in r.json()] == ["a", "b", "c"]


async def test_duplicate_name_after_trim(client: AsyncClient):
    assert (await _create(client, name="alice", ip="192.168.1.10")).status_code == 201

    r = await _create(client, name="alice   ", ip="192.168.1.11")
    assert r.status_code == 400
    assert r.json()["error"] == "Name already exists"


async def test_duplicate_ip(client: AsyncClient):
    assert (await _create(client, name="alice", ip="192.168.1.10")).status_code == 201

    r = await _create(client, name="bob", ip="192.168.1.10")
    assert r.status_code == 400
    assert r.json()["error"] == "IP Address Already Exists."


async def test_rename_to_existing_name(client: AsyncClient):
    assert (await _create(client, name="a", ip="192.168.1.10")).status_code == 201
    assert (await _create(client, name="b", ip="192.168.1.11")).status_code == 201

    r = await client.put(f"{URL}/b", json={"name": "a"})
    assert r.status_code == 400
    assert r.json()["error"] == "Name already exists"

    r = await client.get(f"{URL}/b")
    assert r.status_code == 200
    assert r.json()["ip"] == "192.168.1.11"
    assert (await client.get(f"{URL}/a")).json()["ip"] == "192.168.1.10"


async def test_name_validation(client: AsyncClient):
    r = await _create(client, ip="192.168.1.10")
    assert r.status_code == 400
    assert r.json()["error"] == "Name is required"

    r = await _create(client, name="a/b", ip="192.168.1.10")
    assert r.status_code == 400


async def test_invalid_and_missing_ip(client: AsyncClient):
    r = await _create(client, name="x", ip="999.1.1.1")
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid IP address format"

    r = await _create(client, name="y")
    assert r.status_code == 400
    assert r.json()["error"] == "IP address is required"


async def test_shared_units_borrow_primary_ip(client: AsyncClient):
    assert (await _create(client, name="alice", ip="192.168.1.10")).status_code == 201

    r1 = await _create(client, name="kiosk1", sharedComputer=True, primaryUser="alice", ip="10.0.0.3")
    r2 = await _create(client, name="kiosk2", sharedComputer=True, primaryUser="alice")
    assert r1.status_code == 201, r1.text
    assert r2.status_code == 201, r2.text
    assert r1.json()["ip"] == "192.168.1.10"
    assert r2.json()["ip"] == "192.168.1.10"
    assert r2.json()["primaryUser"] == "alice"


async def test_shared_unit_requires_existing_primary(client: AsyncClient):
    r = await _create(client, name="kiosk", sharedComputer=True, primaryUser="ghost")
    assert r.status_code == 400
    assert r.json()["error"] == "Primary user not found"

    r = await _create(client, name="kiosk", sharedComputer=True)
    assert r.status_code == 400


async def test_machine_cannot_be_shared(client: AsyncClient):
    assert (await _create(client, name="alice", ip="192.168.1.10")).status_code == 201

    r = await _create(client, name="m1", type="machine", sharedComputer=True, primaryUser="alice")
    assert r.status_code == 400


async def test_unshare_requires_ip_and_clears_primary(client: AsyncClient):
    assert (await _create(client, name="alice", ip="192.168.1.10")).status_code == 201
    assert (await _create(client, name="kiosk", sharedComputer=True, primaryUser="alice")).status_code == 201

    r = await client.put(f"{URL}/kiosk", json={"sharedComputer": False})
    assert r.status_code == 400
    assert r.json()["error"].startswith("IP address is required")

    r = await client.put(f"{URL}/kiosk", json={"sharedComputer": False, "ip": "192.168.1.10"})
    assert r.status_code == 400
    assert r.json()["error"] == "IP Address Already Exists."

    r = await client.put(f"{URL}/kiosk", json={"sharedComputer": False, "ip": "192.168.1.20"})
    assert r.status_code == 200, r.text
    assert r.json()["ip"] == "192.168.1.20"
    assert r.json()["primaryUser"] is None
    assert r.json()["sharedComputer"] is False


async def test_primary_ip_change_propagates_to_shared(client: AsyncClient):
    assert (await _create(client, name="alice", ip="192.168.1.10")).status_code == 201
    assert (await _create(client, name="kiosk", sharedComputer=True, primaryUser="alice")).status_code == 201

    r = await client.put(f"{URL}/alice", json={"ip": "192.168.1.30"})
    assert r.status_code == 200, r.text

    kiosk = (await client.get(f"{URL}/kiosk")).json()
    assert kiosk["ip"] == "192.168.1.30"

    r = await client.put(f"{URL}/alice", json={"name": "alice2"})
    assert r.status_code == 200, r.text

    kiosk = (await client.get(f"{URL}/kiosk")).json()
    assert kiosk["primaryUser"] == "alice2"
    assert kiosk["ip"] == "192.168.1.30"


async def test_update_keeps_variant_fields(client: AsyncClient):
    r = await _create(client, name="alice", ip="192.168.1.10", department="IT", badge="42")
    assert r.status_code == 201

    r = await client.put(f"{URL}/alice", json={"department": "Ops"})
    assert r.status_code == 200
    assert r.json()["department"] == "Ops"
    assert r.json()["badge"] == "42"


async def test_delete_unit(client: AsyncClient):
    assert (await _create(client, name="alice", ip="192.168.1.10")).status_code == 201
    assert (await _create(client, name="kiosk", sharedComputer=True, primaryUser="alice")).status_code == 201

    r = await client.delete(f"{URL}/alice")
    assert r.status_code == 400

    r = await client.delete(f"{URL}/kiosk")
    assert r.status_code == 200
    assert r.json() == {"message": "Unit deleted successfully"}

    r = await client.delete(f"{URL}/alice")
    assert r.status_code == 200

    r = await client.delete(f"{URL}/alice")
    assert r.status_code == 404


async def test_check_ip(client: AsyncClient):
    created = await _create(client, name="alice", ip="192.168.1.10")
    alice_id = created.json()["id"]

    r = await client.post(f"{URL}/check-ip", json={"ip": "192.168.1.99"})
    assert r.status_code == 201
    assert r.json() == {"message": "Available."}

    r = await client.post(f"{URL}/check-ip", json={"ip": "192.168.1.10"})
    assert r.status_code == 400
    assert r.json()["error"] == "IP Address Already Exists."

    r = await client.post(f"{URL}/check-ip", json={"ip": "192.168.1"})
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid IP address format"

    r = await client.post(f"{URL}/check-ip", json={"ip": "192.168.1.10", "_id": alice_id})
    assert r.status_code == 201


async def test_available_ips(client: AsyncClient):
    assert (await _create(client, name="alice", ip="192.168.1.10")).status_code == 201
    assert (await _create(client, name="bob", ip="10.0.0.2")).status_code == 201

    r = await client.get(f"{URL}/available-ips")
    assert r.status_code == 200
    body = r.json()
    assert body["192.168.1.1"] == [f"{i:03d}" for i in range(1, 10)]
    assert body["10.0.0.1"] == ["001", "003", "004", "005"]


async def test_fields_endpoint(client: AsyncClient):
    r = await client.get(f"{URL}/fields")
    assert r.status_code == 200
    body = r.json()
    assert {"employee", "machine"} <= set(body)
    assert "department" in [f["name"] for f in body["employee"]]
    assert "line" in [f["name"] for f in body["machine"]]
