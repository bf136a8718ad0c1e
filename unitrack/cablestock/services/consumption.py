# path: unitrack/cablestock/services/consumption.py
"""
Расход кабеля между двумя месячными снимками.

Правила (сохранены как есть, без "исправлений"):
- пара позиций ищется по точному совпадению type; нет в "to" -> количество 0, LINNO "";
- delta = to - from: delta >= 0 -> в used, delta < 0 -> |delta| в instock;
- LINNO сравниваем как строки: to >= from -> usedIdentifier, иначе instockIdentifier
  ("9" > "10" — известная особенность, не чиним);
- тип, которого не было в "from", целиком уходит в used.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional


def consumption_rate(delta: int, from_quantity: int) -> str:
    if from_quantity <= 0:
        return "0%"
    return f"{abs(delta) / from_quantity * 100:.2f}%"


def _compare_pair(from_item: Mapping[str, Any], to_item: Optional[Mapping[str, Any]]) -> dict[str, Any]:
    from_qty = int(from_item.get("quantity") or 0)
    from_linno = str(from_item.get("linno") or "")
    to_qty = int(to_item.get("quantity") or 0) if to_item else 0
    to_linno = str(to_item.get("linno") or "") if to_item else ""

    delta = to_qty - from_qty
    used_qty, instock_qty = (delta, 0) if delta >= 0 else (0, -delta)

    changed = from_linno != to_linno
    used_linno = instock_linno = ""
    if changed:
        if to_linno >= from_linno:
            used_linno = to_linno
        else:
            instock_linno = to_linno

    return {
        "type": from_item.get("type"),
        "fromIdentifier": from_linno,
        "toIdentifier": to_linno,
        "identifierChanged": changed,
        "fromQuantity": from_qty,
        "toQuantity": to_qty,
        "usedQuantity": used_qty,
        "usedIdentifier": used_linno,
        "instockQuantity": instock_qty,
        "instockIdentifier": instock_linno,
        "consumptionRate": consumption_rate(delta, from_qty),
    }


def _new_type(to_item: Mapping[str, Any]) -> dict[str, Any]:
    to_qty = int(to_item.get("quantity") or 0)
    to_linno = str(to_item.get("linno") or "")
    return {
        "type": to_item.get("type"),
        "fromIdentifier": "",
        "toIdentifier": to_linno,
        "identifierChanged": to_linno != "",
        "fromQuantity": 0,
        "toQuantity": to_qty,
        "usedQuantity": to_qty,
        "usedIdentifier": to_linno,
        "instockQuantity": 0,
        "instockIdentifier": "",
        "consumptionRate": "100%",
    }


def compare_items(
    from_items: Iterable[Mapping[str, Any]],
    to_items: Iterable[Mapping[str, Any]],
) -> list[dict[str, Any]]:
    """
    Построчное сравнение двух снимков.

    Возвращает записи, отсортированные по usedQuantity, затем по instockQuantity (оба по убыванию);
    при равенстве сохраняется порядок строк листа.
    """
    from_list = list(from_items)
    to_list = list(to_items)

    to_by_type: dict[Any, Mapping[str, Any]] = {}
    for item in to_list:
        # первое вхождение типа, как при линейном поиске
        to_by_type.setdefault(item.get("type"), item)

    records = [_compare_pair(item, to_by_type.get(item.get("type"))) for item in from_list]

    from_types = {item.get("type") for item in from_list}
    records.extend(_new_type(item) for item in to_list if item.get("type") not in from_types)

    records.sort(key=lambda r: (-r["usedQuantity"], -r["instockQuantity"]))
    return records
