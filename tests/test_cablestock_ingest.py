# path: tests/test_cablestock_ingest.py
from __future__ import annotations

import pytest

from unitrack.cablestock.services.ingest import (
    CableStockParser,
    cell_text,
    parse_filename,
    parse_quantity,
)
from unitrack.core.config import CableStockConfig
from unitrack.core.exceptions import (
    HeaderNotFoundError,
    HeaderValidationError,
    InvalidFilenameError,
    InvalidWorkbookError,
    NoValidItemsError,
)


@pytest.fixture
def parser() -> CableStockParser:
    return CableStockParser(CableStockConfig())


@pytest.mark.parametrize(
    "filename, key",
    [
        ("CABLE STOCK(03.31.2025).xlsx", "03/2025"),
        ("cable stock(12.01.2024).XLSX", "12/2024"),
        ("CABLE STOCK 03.31.2025.xlsx", "03/2025"),
        ("CABLE STOCK (01.15.2026).xlsx", "01/2026"),
    ],
)
def test_parse_filename(filename, key):
    assert parse_filename(filename).month_key == key


@pytest.mark.parametrize(
    "filename",
    [
        "CABLE STOCK(02.30.2025).xlsx",
        "CABLE STOCK(13.01.2025).xlsx",
        "CABLE STOCK(3.31.2025).xlsx",
        "STOCK(03.31.2025).xlsx",
        "CABLE STOCK(03.31.2025).xls",
        "",
        None,
    ],
)
def test_parse_filename_rejects(filename):
    with pytest.raises(InvalidFilenameError):
        parse_filename(filename)


@pytest.mark.parametrize(
    "value, expected",
    [(7, 7), (7.9, 7), ("12", 12), ("12 ea", 12), (" -3", -3), ("x", 0), ("", 0), (None, 0), (True, 0)],
)
def test_parse_quantity(value, expected):
    assert parse_quantity(value) == expected


def test_cell_text():
    assert cell_text(1001.0) == "1001"
    assert cell_text(1001) == "1001"
    assert cell_text("  L-7 ") == "L-7"
    assert cell_text(None) == ""


def test_parse_sheet_with_merged_categories(parser, make_workbook):
    content = make_workbook(
        [
            ["UTP", "CAT6 1m", "L100", 10],
            [None, "CAT6 3m", "L101", "7 ea"],
            ["FIBER", "LC-LC 2m", 1001, None],
            [None, None, None, None],
            [None, "SC-SC", None, "x"],
        ],
        merges=["A3:A4"],
    )

    items = parser.parse(content)

    assert items == [
        {"type": "UTP-CAT6 1m", "linno": "L100", "quantity": 10},
        {"type": "UTP-CAT6 3m", "linno": "L101", "quantity": 7},
        {"type": "FIBER-LC-LC 2m", "linno": "1001", "quantity": 0},
        {"type": "FIBER-SC-SC", "linno": "", "quantity": 0},
    ]


def test_rows_before_any_category_are_skipped(parser, make_workbook):
    content = make_workbook(
        [
            [None, "orphan", "L1", 3],
            ["UTP", "CAT5", "L2", 4],
        ]
    )

    assert parser.parse(content) == [{"type": "UTP-CAT5", "linno": "L2", "quantity": 4}]


def test_header_found_within_scan_window(parser, make_workbook):
    content = make_workbook([["UTP", "CAT6", "L1", 1]], title_rows=5)
    assert len(parser.parse(content)) == 1


def test_header_not_found(parser, make_workbook):
    content = make_workbook([["UTP", "CAT6", "L1", 1]], title_rows=6)

    with pytest.raises(HeaderNotFoundError) as exc:
        parser.parse(content)

    assert "A1" in exc.value.details["firstCells"]


def test_header_partial_match(parser, make_workbook):
    content = make_workbook(
        [["UTP", "CAT6", "L1", 2]],
        header=("구분", "종류", "라인 번호", "수량(EA)"),
    )
    assert parser.parse(content)[0]["quantity"] == 2


def test_header_validation_failed(parser, make_workbook):
    content = make_workbook([["UTP", "CAT6", "L1", 1]], header=("구분", "종류", "LINE", "QTY"))

    with pytest.raises(HeaderValidationError) as exc:
        parser.parse(content)

    assert exc.value.details["invalid"] == ["linnoHeader", "quantityHeader"]
    assert exc.value.details["linnoHeader"] == "LINE"


def test_no_valid_items(parser, make_workbook):
    with pytest.raises(NoValidItemsError):
        parser.parse(make_workbook([]))


def test_not_a_workbook(parser):
    with pytest.raises(InvalidWorkbookError):
        parser.parse(b"definitely not a zip")
