# backend/edara/routers/contracts.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select, desc
from sqlalchemy.orm import Session

from ..db import get_db
from ..models import Contract
from ..schemas import ContractCreate, ContractOut, ContractUpdate
from ..services.ownership import check_refs, must_get_contract

router = APIRouter(prefix="/contracts", tags=["contracts"])


@router.get("", response_model=list[ContractOut])
def list_contracts(
    status: str | None = Query(default=None),
    tenant_id: int | None = Query(default=None),
    property_id: int | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
):
    q = select(Contract)
    if status:
        q = q.where(Contract.status == status)
    if tenant_id is not None:
        q = q.where(Contract.tenant_id == tenant_id)
    if property_id is not None:
        q = q.where(Contract.property_id == property_id)
    q = q.order_by(desc(Contract.created_at), desc(Contract.id)).limit(limit)
    return list(db.scalars(q).all())


@router.post("", response_model=ContractOut)
def create_contract(payload: ContractCreate, db: Session = Depends(get_db)):
    check_refs(db, tenant_id=payload.tenant_id, property_id=payload.property_id, unit_id=payload.unit_id)
    row = Contract(**payload.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.get("/{contract_id}", response_model=ContractOut)
def get_contract(contract_id: int, db: Session = Depends(get_db)):
    return must_get_contract(db, contract_id=contract_id)


@router.patch("/{contract_id}", response_model=ContractOut)
def update_contract(contract_id: int, payload: ContractUpdate, db: Session = Depends(get_db)):
    row = must_get_contract(db, contract_id=contract_id)
    data = payload.model_dump(exclude_unset=True)

    start = data.get("start_date", row.start_date)
    end = data.get("end_date", row.end_date)
    if start and end and end < start:
        raise HTTPException(status_code=422, detail="end_date cannot be before start_date")

    for k, v in data.items():
        setattr(row, k, v)

    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{contract_id}")
def delete_contract(contract_id: int, db: Session = Depends(get_db)):
    row = must_get_contract(db, contract_id=contract_id)
    db.delete(row)
    db.commit()
    return {"ok": True}
