# backend/edara/routers/tenants.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Tenant
from ..schemas import TenantCreate, TenantOut, TenantUpdate
from ..services.ownership import check_refs, must_get_tenant

router = APIRouter(prefix="/tenants", tags=["tenants"])


@router.get("", response_model=list[TenantOut])
def list_tenants(
    property_id: int | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
):
    q = select(Tenant)
    if property_id is not None:
        q = q.where(Tenant.property_id == property_id)
    q = q.order_by(desc(Tenant.created_at), desc(Tenant.id)).limit(limit)
    return list(db.scalars(q).all())


@router.post("", response_model=TenantOut)
def create_tenant(payload: TenantCreate, db: Session = Depends(get_db)):
    check_refs(db, property_id=payload.property_id, unit_id=payload.unit_id)
    row = Tenant(**payload.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.get("/{tenant_id}", response_model=TenantOut)
def get_tenant(tenant_id: int, db: Session = Depends(get_db)):
    return must_get_tenant(db, tenant_id=tenant_id)


@router.patch("/{tenant_id}", response_model=TenantOut)
def update_tenant(tenant_id: int, payload: TenantUpdate, db: Session = Depends(get_db)):
    row = must_get_tenant(db, tenant_id=tenant_id)
    data = payload.model_dump(exclude_unset=True)
    check_refs(
        db,
        property_id=data.get("property_id", row.property_id),
        unit_id=data.get("unit_id"),
    )

    for k, v in data.items():
        setattr(row, k, v)

    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{tenant_id}")
def delete_tenant(tenant_id: int, db: Session = Depends(get_db)):
    row = must_get_tenant(db, tenant_id=tenant_id)
    db.delete(row)
    db.commit()
    return {"ok": True}
