# backend/edara/routers/units.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..db import get_db
from ..models import Unit
from ..schemas import UnitCreate, UnitOut, UnitUpdate
from ..services.ownership import must_get_property, must_get_unit

router = APIRouter(prefix="/units", tags=["units"])


def _out(u: Unit) -> dict:
    return {**u.model_dump(), "property_name": u.property.name if u.property is not None else None}


@router.get("", response_model=list[UnitOut])
def list_units(
    property_id: int | None = Query(default=None),
    db: Session = Depends(get_db),
):
    q = select(Unit).options(selectinload(Unit.property)).order_by(Unit.name)
    if property_id is not None:
        q = q.where(Unit.property_id == property_id)
    return [_out(u) for u in db.scalars(q).all()]


@router.post("", response_model=UnitOut)
def create_unit(payload: UnitCreate, db: Session = Depends(get_db)):
    must_get_property(db, property_id=payload.property_id)
    row = Unit(**payload.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return _out(row)


@router.patch("/{unit_id}", response_model=UnitOut)
def update_unit(unit_id: int, payload: UnitUpdate, db: Session = Depends(get_db)):
    row = must_get_unit(db, unit_id=unit_id)
    data = payload.model_dump(exclude_unset=True)
    if "name" in data and not (data["name"] or "").strip():
        raise HTTPException(status_code=422, detail="unit name cannot be blank")

    for k, v in data.items():
        setattr(row, k, v)

    db.add(row)
    db.commit()
    db.refresh(row)
    return _out(row)


@router.delete("/{unit_id}")
def delete_unit(unit_id: int, db: Session = Depends(get_db)):
    row = must_get_unit(db, unit_id=unit_id)
    db.delete(row)
    db.commit()
    return {"ok": True}
