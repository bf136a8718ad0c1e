# path: tests/test_consumption.py
from __future__ import annotations

from unitrack.cablestock.services.consumption import compare_items, consumption_rate


def _item(type_: str, linno: str, quantity: int) -> dict:
    return {"type": type_, "linno": linno, "quantity": quantity}


def test_decrease_is_instock_and_greater_identifier_is_used():
    [rec] = compare_items([_item("A-X", "L1", 10)], [_item("A-X", "L2", 6)])

    assert rec["fromQuantity"] == 10
    assert rec["toQuantity"] == 6
    assert rec["usedQuantity"] == 0
    assert rec["instockQuantity"] == 4
    assert rec["usedIdentifier"] == "L2"
    assert rec["instockIdentifier"] == ""
    assert rec["identifierChanged"] is True
    assert rec["consumptionRate"] == "40.00%"


def test_increase_is_used_and_lesser_identifier_is_instock():
    [rec] = compare_items([_item("A-X", "L5", 4)], [_item("A-X", "L3", 9)])

    assert rec["usedQuantity"] == 5
    assert rec["instockQuantity"] == 0
    assert rec["usedIdentifier"] == ""
    assert rec["instockIdentifier"] == "L3"


def test_identifier_compare_is_lexicographic():
    # "9" > "10" как строки
    [rec] = compare_items([_item("A-X", "10", 1)], [_item("A-X", "9", 1)])
    assert rec["usedIdentifier"] == "9"


def test_unchanged_identifier_not_attributed():
    [rec] = compare_items([_item("A-X", "L1", 3)], [_item("A-X", "L1", 3)])
    assert rec["identifierChanged"] is False
    assert rec["usedIdentifier"] == rec["instockIdentifier"] == ""
    assert rec["usedQuantity"] == rec["instockQuantity"] == 0


def test_type_missing_in_to_goes_to_instock():
    [rec] = compare_items([_item("A-X", "L1", 8)], [])
    assert rec["toQuantity"] == 0
    assert rec["usedQuantity"] == 0
    assert rec["instockQuantity"] == 8
    assert rec["toIdentifier"] == ""
    assert rec["consumptionRate"] == "100.00%"


def test_type_only_in_to_is_new_and_used():
    records = compare_items([_item("A-X", "L1", 1)], [_item("A-X", "L1", 1), _item("B-Y", "L9", 12)])

    new = next(r for r in records if r["type"] == "B-Y")
    assert new["fromQuantity"] == 0
    assert new["toQuantity"] == 12
    assert new["usedQuantity"] == 12
    assert new["instockQuantity"] == 0
    assert new["usedIdentifier"] == "L9"
    assert new["consumptionRate"] == "100%"


def test_sorted_by_used_then_instock():
    records = compare_items(
        [_item("A", "", 5), _item("B", "", 10), _item("C", "", 1), _item("D", "", 1)],
        [_item("A", "", 4), _item("B", "", 2), _item("C", "", 4), _item("D", "", 2)],
    )
    assert [r["type"] for r in records] == ["C", "D", "B", "A"]


def test_consumption_rate_zero_base():
    assert consumption_rate(0, 0) == "0%"
    assert consumption_rate(-3, 0) == "0%"
    assert consumption_rate(1, 3) == "33.33%"
