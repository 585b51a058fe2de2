# backend/edara/routers/invoices.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy import select, desc
from sqlalchemy.orm import Session, selectinload

from ..db import get_db
from ..models import Invoice, InvoiceItem
from ..schemas import InvoiceCreate, InvoiceOut, InvoiceUpdate
from ..services.ownership import check_refs, must_get_invoice

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=list[InvoiceOut])
def list_invoices(
    status: str | None = Query(default=None, description="pending|paid|overdue"),
    tenant_id: int | None = Query(default=None),
    property_id: int | None = Query(default=None),
    limit: int = Query(default=200, ge=1, le=2000),
    db: Session = Depends(get_db),
):
    q = select(Invoice).options(selectinload(Invoice.items))
    if status:
        q = q.where(Invoice.status == status)
    if tenant_id is not None:
        q = q.where(Invoice.tenant_id == tenant_id)
    if property_id is not None:
        q = q.where(Invoice.property_id == property_id)
    q = q.order_by(desc(Invoice.created_at), desc(Invoice.id)).limit(limit)
    return list(db.scalars(q).all())


@router.post("", response_model=InvoiceOut)
def create_invoice(payload: InvoiceCreate, db: Session = Depends(get_db)):
    check_refs(db, tenant_id=payload.tenant_id, property_id=payload.property_id, unit_id=payload.unit_id)

    data = payload.model_dump(exclude={"items"})
    row = Invoice(**data)
    # header + line items land in one commit
    row.items = [InvoiceItem(**it.model_dump()) for it in sorted(payload.items, key=lambda it: it.sort_order)]

    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.get("/{invoice_id}", response_model=InvoiceOut)
def get_invoice(invoice_id: int, db: Session = Depends(get_db)):
    return must_get_invoice(db, invoice_id=invoice_id)


@router.patch("/{invoice_id}", response_model=InvoiceOut)
def update_invoice(invoice_id: int, payload: InvoiceUpdate, db: Session = Depends(get_db)):
    row = must_get_invoice(db, invoice_id=invoice_id)

    for k, v in payload.model_dump(exclude_unset=True).items():
        setattr(row, k, v)

    db.add(row)
    db.commit()
    db.refresh(row)
    return row


@router.delete("/{invoice_id}")
def delete_invoice(invoice_id: int, db: Session = Depends(get_db)):
    row = must_get_invoice(db, invoice_id=invoice_id)
    # items go with the invoice (delete-orphan cascade)
    db.delete(row)
    db.commit()
    return {"ok": True}
