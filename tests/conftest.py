# path: tests/conftest.py
from __future__ import annotations

from io import BytesIO
from typing import Any, AsyncIterator, Optional, Sequence

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from openpyxl import Workbook

from unitrack.core.config import DatabaseConfig, Gateway, NetworkConfig, Settings
from unitrack.main import create_app
from unitrack.scripts.init_db import create_schema

HEADER = ("구분", "종류", "LINNO", "수량")


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        db=DatabaseConfig(url=f"sqlite+aiosqlite:///{tmp_path / 'unitrack.db'}"),
        network=NetworkConfig(
            gateways=[
                Gateway(ip="192.168.1.1", range=10),
                Gateway(ip="10.0.0.1", range=5),
            ]
        ),
    )


@pytest.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings)
    await create_schema(app.state.db_helper)
    yield app
    await app.state.db_helper.dispose()


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


def build_workbook(
    rows: Sequence[Sequence[Any]],
    *,
    merges: Sequence[str] = (),
    header: Optional[Sequence[Any]] = HEADER,
    title_rows: int = 1,
) -> bytes:
    """
    Книга в формате выгрузки: title_rows строк "шапки документа", потом заголовки, потом данные.

    merges — диапазоны вида "A3:A5" (координаты уже с учётом шапки).
    """
    wb = Workbook()
    ws = wb.active
    ws.title = "CABLE STOCK"

    for i in range(title_rows):
        ws.append([f"CABLE STOCK report line {i + 1}"])
    if header is not None:
        ws.append(list(header))
    for row in rows:
        ws.append(list(row))
    for rng in merges:
        ws.merge_cells(rng)

    buf = BytesIO()
    wb.save(buf)
    return buf.getvalue()


@pytest.fixture
def make_workbook():
    return build_workbook
