# backend/edara/routers/properties.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, desc
from sqlalchemy.orm import Session, selectinload

from ..db import get_db
from ..models import Property, Tenant, Unit
from ..schemas import PropertyCreate, PropertyOut, PropertyUpdate, TenantOut, UnitOut
from ..services.ownership import must_get_property

router = APIRouter(prefix="/properties", tags=["properties"])


@router.get("", response_model=list[PropertyOut])
def list_properties(
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
):
    q = select(Property).order_by(desc(Property.created_at), desc(Property.id)).limit(limit)
    return list(db.scalars(q).all())


@router.post("", response_model=PropertyOut)
def create_property(payload: PropertyCreate, db: Session = Depends(get_db)):
    row = Property(**payload.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.get("/{property_id}", response_model=PropertyOut)
def get_property(property_id: int, db: Session = Depends(get_db)):
    return must_get_property(db, property_id=property_id)


@router.patch("/{property_id}", response_model=PropertyOut)
def update_property(property_id: int, payload: PropertyUpdate, db: Session = Depends(get_db)):
    row = must_get_property(db, property_id=property_id)

    # partial update: only fields the client sent
    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(row, k, v)

    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{property_id}")
def delete_property(property_id: int, db: Session = Depends(get_db)):
    row = must_get_property(db, property_id=property_id)
    db.delete(row)
    db.commit()
    return {"ok": True}


@router.get("/{property_id}/units", response_model=list[UnitOut])
def list_property_units(property_id: int, db: Session = Depends(get_db)):
    prop = must_get_property(db, property_id=property_id)
    rows = db.scalars(select(Unit).where(Unit.property_id == property_id).order_by(Unit.name)).all()
    return [{**u.model_dump(), "property_name": prop.name} for u in rows]


@router.get("/{property_id}/tenants", response_model=list[TenantOut])
def list_property_tenants(property_id: int, db: Session = Depends(get_db)):
    must_get_property(db, property_id=property_id)
    q = (
        select(Tenant)
        .where(Tenant.property_id == property_id)
        .options(selectinload(Tenant.unit))
        .order_by(desc(Tenant.created_at), desc(Tenant.id))
    )
    return list(db.scalars(q).all())
