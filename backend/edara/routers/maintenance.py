# backend/edara/routers/maintenance.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import MaintenanceRequest
from ..schemas import MaintenanceCreate, MaintenanceOut, MaintenanceUpdate
from ..services.ownership import check_refs, must_get_maintenance_request

router = APIRouter(prefix="/maintenance", tags=["maintenance"])


@router.get("", response_model=list[MaintenanceOut])
def list_requests(
    status: str | None = Query(default=None),
    property_id: int | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
):
    q = select(MaintenanceRequest)
    if status:
        q = q.where(MaintenanceRequest.status == status)
    if property_id is not None:
        q = q.where(MaintenanceRequest.property_id == property_id)
    q = q.order_by(desc(MaintenanceRequest.created_at), desc(MaintenanceRequest.id)).limit(limit)
    return list(db.scalars(q).all())


@router.post("", response_model=MaintenanceOut)
def create_request(payload: MaintenanceCreate, db: Session = Depends(get_db)):
    check_refs(db, property_id=payload.property_id, unit_id=payload.unit_id)
    row = MaintenanceRequest(**payload.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.patch("/{request_id}", response_model=MaintenanceOut)
def update_request(request_id: int, payload: MaintenanceUpdate, db: Session = Depends(get_db)):
    row = must_get_maintenance_request(db, request_id=request_id)

    # status changes bump updated_at (onupdate), which drives the "completed" alert window
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(row, k, v)

    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{request_id}")
def delete_request(request_id: int, db: Session = Depends(get_db)):
    row = must_get_maintenance_request(db, request_id=request_id)
    db.delete(row)
    db.commit()
    return {"ok": True}
