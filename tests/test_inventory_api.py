# path: tests/test_inventory_api.py
from __future__ import annotations

import re

from httpx import AsyncClient

URL = "/api/inventory"


async def _create(client: AsyncClient, **body):
    return await client.post(URL, json=body)


async def test_create_item(client: AsyncClient):
    r = await _create(client, item="Toner 26A  ", quantity=5, EOS=False, location="Wiley", note="shelf 2  ")
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["item"] == "Toner 26A"
    assert body["note"] == "shelf 2"
    assert body["quantity"] == 5
    assert body["EOS"] is False
    assert body["location"] == "Wiley"
    assert re.fullmatch(r"\d{2}/\d{2}/\d{4} \d{2}:\d{2}", body["updatedFormatted"])


async def test_duplicate_per_location(client: AsyncClient):
    assert (await _create(client, item="Mouse", quantity=1, location="Wiley")).status_code == 201

    r = await _create(client, item="Mouse", quantity=3, location="Wiley")
    assert r.status_code == 400
    assert r.json()["error"] == "Item already exists in this location"

    r = await _create(client, item="Mouse", quantity=3, location="Jane")
    assert r.status_code == 201


async def test_create_validation(client: AsyncClient):
    r = await _create(client, item="Mouse", quantity=-1, location="Wiley")
    assert r.status_code == 400

    r = await _create(client, item="Mouse", quantity=1)
    assert r.status_code == 400
    assert r.json()["error"] == "Location is required"

    r = await _create(client, item="Mouse", quantity=1, location="Mars")
    assert r.status_code == 400

    r = await _create(client, item="  ", quantity=1, location="Wiley")
    assert r.status_code == 400


async def test_list_filter_and_order(client: AsyncClient):
    for item, location in [("Keyboard", "Redding"), ("Cable", "Wiley"), ("Adapter", "Redding")]:
        assert (await _create(client, item=item, quantity=1, location=location)).status_code == 201

    r = await client.get(URL)
    assert [i["item"] for i in r.json()] == ["Adapter", "Cable", "Keyboard"]

    r = await client.get(URL, params={"location": "Redding"})
    assert [i["item"] for i in r.json()] == ["Adapter", "Keyboard"]


async def test_get_update_with_location(client: AsyncClient):
    assert (await _create(client, item="Mouse", quantity=1, location="Wiley")).status_code == 201
    assert (await _create(client, item="Mouse", quantity=7, location="Redding")).status_code == 201

    r = await client.get(f"{URL}/Mouse", params={"location": "Wiley"})
    assert r.status_code == 200
    assert r.json()["quantity"] == 1

    r = await client.put(f"{URL}/Mouse", params={"location": "Wiley"}, json={"quantity": 4, "EOS": True})
    assert r.status_code == 200, r.text
    assert r.json()["quantity"] == 4
    assert r.json()["EOS"] is True

    r = await client.get(f"{URL}/Mouse", params={"location": "Redding"})
    assert r.json()["quantity"] == 7


async def test_update_refreshes_timestamp_and_rejects_move_onto_existing(client: AsyncClient):
    created = (await _create(client, item="Mouse", quantity=1, location="Wiley")).json()
    assert (await _create(client, item="Mouse", quantity=1, location="Jane")).status_code == 201

    r = await client.put(f"{URL}/Mouse", params={"location": "Wiley"}, json={})
    assert r.status_code == 200
    assert r.json()["updated"] >= created["updated"]

    r = await client.put(f"{URL}/Mouse", params={"location": "Wiley"}, json={"location": "Jane"})
    assert r.status_code == 400
    assert r.json()["error"] == "Item already exists in this location"

    r = await client.put(f"{URL}/Mouse", params={"location": "Wiley"}, json={"location": "Redding"})
    assert r.status_code == 200
    assert r.json()["location"] == "Redding"


async def test_delete_item(client: AsyncClient):
    assert (await _create(client, item="Mouse", quantity=1, location="Wiley")).status_code == 201

    r = await client.delete(f"{URL}/Mouse", params={"location": "Wiley"})
    assert r.status_code == 200

    r = await client.delete(f"{URL}/Mouse", params={"location": "Wiley"})
    assert r.status_code == 404
    assert r.json()["error"] == "Item not found"
