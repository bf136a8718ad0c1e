# path: unitrack/cablestock/api/api_v1/cablestock.py
from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from unitrack.cablestock.schemas.snapshot import ComparisonOut, SnapshotOut, UploadOut
from unitrack.cablestock.services.cablestock_service import CableStockService
from unitrack.core.dependencies import get_cablestock_service, get_session
from unitrack.core.exceptions import ValidationError

router = APIRouter(tags=["CableStock"])

Session = Annotated[AsyncSession, Depends(get_session)]
Service = Annotated[CableStockService, Depends(get_cablestock_service)]


@router.get("", response_model=list[SnapshotOut])
async def list_snapshots(session: Session, service: Service):
    return await service.list_recent(session)


@router.post("/upload", response_model=UploadOut)
async def upload_snapshot(
    session: Session,
    service: Service,
    file: Annotated[Optional[UploadFile], File()] = None,
):
    """multipart/form-data, поле file: CABLE STOCK(MM.DD.YYYY).xlsx."""
    if file is None:
        raise ValidationError("No file provided")
    content = await file.read()
    return await service.upload(session, filename=file.filename, content=content)


@router.get("/compare", response_model=ComparisonOut)
async def compare_snapshots(
    session: Session,
    service: Service,
    from_month: Annotated[Optional[str], Query(alias="from")] = None,
    to_month: Annotated[Optional[str], Query(alias="to")] = None,
):
    return await service.compare(session, from_month, to_month)


# {month:path}: ключ "MM/YYYY" содержит слэш
@router.get("/{month:path}", response_model=SnapshotOut)
async def get_snapshot(month: str, session: Session, service: Service):
    return await service.get(session, month)
