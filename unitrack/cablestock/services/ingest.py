# path: unitrack/cablestock/services/ingest.py
"""
Разбор выгрузки CABLE STOCK (xlsx) в список позиций за месяц.

Формат листа (первый лист книги):
- шапка где-то в первых N строках: A="구분" (категория), B="종류" (тип),
  C=LINNO/라인 (идентификатор), D=수량/개수 (количество);
- категория в колонке A обычно объединена на несколько строк — она "липкая":
  меняется только в первой строке объединения или в обычной непустой ячейке;
- строка даёт позицию, только если есть текущая категория и непустой тип.

Результат: [{"type": "<категория>-<тип>", "linno": "...", "quantity": int}, ...]
в порядке строк листа.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from datetime import date
from io import BytesIO
from typing import Any, Optional

from openpyxl import load_workbook
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from unitrack.app_logging import get_logger
from unitrack.core.config import CableStockConfig
from unitrack.core.exceptions import (
    HeaderNotFoundError,
    HeaderValidationError,
    InvalidFilenameError,
    InvalidWorkbookError,
    NoValidItemsError,
)

log = get_logger("cablestock.ingest")

FILENAME_RE = re.compile(r"^CABLE STOCK\s?\(?(\d{2})\.(\d{2})\.(\d{4})\)?\.xlsx$", re.IGNORECASE)
_INT_PREFIX_RE = re.compile(r"^\s*([+-]?\d+)")

CATEGORY_COL, TYPE_COL, LINNO_COL, QUANTITY_COL = 1, 2, 3, 4


@dataclass(frozen=True)
class StockFileName:
    month: int
    day: int
    year: int

    @property
    def month_key(self) -> str:
        return f"{self.month:02d}/{self.year:04d}"


def parse_filename(filename: Optional[str]) -> StockFileName:
    """CABLE STOCK(MM.DD.YYYY).xlsx -> дата; день участвует только в проверке даты."""
    name = (filename or "").strip()
    m = FILENAME_RE.match(name)
    if not m:
        raise InvalidFilenameError(details={"filename": filename})

    month, day, year = (int(g) for g in m.groups())
    try:
        date(year, month, day)
    except ValueError as e:
        raise InvalidFilenameError(details={"filename": filename, "reason": str(e)}) from e

    return StockFileName(month=month, day=day, year=year)


def parse_quantity(value: Any) -> int:
    """Целое из начала строки ("12 ea" -> 12, "3.7" -> 3); всё нечитаемое -> 0."""
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    m = _INT_PREFIX_RE.match(str(value))
    return int(m.group(1)) if m else 0


def cell_text(value: Any) -> str:
    if value is None:
        return ""
    # LINNO вроде 1001 Excel хранит числом: 1001.0 -> "1001"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _json_safe(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def load_sheet(content: bytes) -> Worksheet:
    try:
        wb = load_workbook(BytesIO(content), data_only=True)
    except Exception as e:
        log.info({"event": "workbook_unreadable", "error": repr(e)})
        raise InvalidWorkbookError(details={"reason": str(e)}) from e

    if not wb.worksheets:
        raise InvalidWorkbookError("Excel file has no sheets")
    return wb.worksheets[0]


class CableStockParser:
    def __init__(self, cfg: CableStockConfig) -> None:
        self._cfg = cfg

    def parse(self, content: bytes) -> list[dict[str, Any]]:
        ws = load_sheet(content)
        return self.parse_sheet(ws)

    def parse_sheet(self, ws: Worksheet) -> list[dict[str, Any]]:
        last_row = ws.max_row
        header_row = self._find_header_row(ws)
        self._validate_header(ws, header_row)

        category_merges = [
            r for r in ws.merged_cells.ranges if r.min_col == CATEGORY_COL and r.max_col == CATEGORY_COL
        ]
        merge_starts = {r.min_row for r in ws.merged_cells.ranges if r.min_col == CATEGORY_COL}

        items: list[dict[str, Any]] = []
        category = ""

        for row in range(header_row + 1, last_row + 1):
            in_merge = any(r.min_row <= row <= r.max_row for r in category_merges)
            category_value = ws.cell(row=row, column=CATEGORY_COL).value
            if category_value and (not in_merge or row in merge_starts):
                category = str(category_value).strip()

            type_value = ws.cell(row=row, column=TYPE_COL).value
            if not type_value or not category:
                continue

            subtype = str(type_value).strip()
            items.append(
                {
                    "type": f"{category}-{subtype}".strip(),
                    "linno": cell_text(ws.cell(row=row, column=LINNO_COL).value),
                    "quantity": parse_quantity(ws.cell(row=row, column=QUANTITY_COL).value),
                }
            )

        if not items:
            raise NoValidItemsError(details={"headerRow": header_row, "range": ws.dimensions})

        log.info({"event": "cablestock_parsed", "header_row": header_row, "items": len(items)})
        return items

    def _find_header_row(self, ws: Worksheet) -> int:
        scan = self._cfg.header_scan_rows
        for row in range(1, scan + 1):
            category = ws.cell(row=row, column=CATEGORY_COL).value
            subtype = ws.cell(row=row, column=TYPE_COL).value
            if (
                isinstance(category, str)
                and isinstance(subtype, str)
                and category.strip() == self._cfg.category_header
                and subtype.strip() == self._cfg.type_header
            ):
                return row

        first_cells: dict[str, Any] = {}
        for row in range(1, scan + 1):
            for col in range(1, scan + 1):
                value = ws.cell(row=row, column=col).value
                if value is not None:
                    first_cells[f"{get_column_letter(col)}{row}"] = _json_safe(value)

        raise HeaderNotFoundError(
            f"Could not find header row with '{self._cfg.category_header}' and '{self._cfg.type_header}'",
            details={"firstCells": first_cells},
        )

    def _validate_header(self, ws: Worksheet, row: int) -> None:
        cfg = self._cfg
        found = {
            "categoryHeader": ws.cell(row=row, column=CATEGORY_COL).value,
            "typeHeader": ws.cell(row=row, column=TYPE_COL).value,
            "linnoHeader": ws.cell(row=row, column=LINNO_COL).value,
            "quantityHeader": ws.cell(row=row, column=QUANTITY_COL).value,
        }
        expected = {
            "categoryHeader": [cfg.category_header],
            "typeHeader": [cfg.type_header],
            "linnoHeader": list(cfg.identifier_headers),
            "quantityHeader": list(cfg.quantity_headers),
        }

        bad = [
            key
            for key, tokens in expected.items()
            if not (isinstance(found[key], str) and any(t in found[key] for t in tokens))
        ]
        if bad:
            raise HeaderValidationError(
                details={
                    **{k: _json_safe(v) for k, v in found.items()},
                    "invalid": bad,
                    "expected": {k: " / ".join(v) for k, v in expected.items()},
                }
            )
