# backend/edara/services/ownership.py
from __future__ import annotations

from typing import Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..models import Contract, Invoice, MaintenanceRequest, Property, Tenant, Unit


def must_get_property(db: Session, *, property_id: int) -> Property:
    row = db.get(Property, property_id)
    if not row:
        raise HTTPException(status_code=404, detail="property not found")
    return row


def must_get_unit(db: Session, *, unit_id: int, property_id: Optional[int] = None) -> Unit:
    row = db.get(Unit, unit_id)
    if not row:
        raise HTTPException(status_code=404, detail="unit not found")
    if property_id is not None and row.property_id != property_id:
        raise HTTPException(status_code=400, detail="unit does not belong to property")
    return row


def must_get_tenant(db: Session, *, tenant_id: int) -> Tenant:
    row = db.get(Tenant, tenant_id)
    if not row:
        raise HTTPException(status_code=404, detail="tenant not found")
    return row


def must_get_contract(db: Session, *, contract_id: int) -> Contract:
    row = db.get(Contract, contract_id)
    if not row:
        raise HTTPException(status_code=404, detail="contract not found")
    return row


def must_get_invoice(db: Session, *, invoice_id: int) -> Invoice:
    row = db.scalar(select(Invoice).where(Invoice.id == invoice_id).options(selectinload(Invoice.items)))
    if not row:
        raise HTTPException(status_code=404, detail="invoice not found")
    return row


def must_get_maintenance_request(db: Session, *, request_id: int) -> MaintenanceRequest:
    row = db.get(MaintenanceRequest, request_id)
    if not row:
        raise HTTPException(status_code=404, detail="maintenance request not found")
    return row


def check_refs(
    db: Session,
    *,
    tenant_id: Optional[int] = None,
    property_id: Optional[int] = None,
    unit_id: Optional[int] = None,
) -> None:
    """404 on dangling foreign keys before insert/update."""
    if property_id is not None:
        must_get_property(db, property_id=property_id)
    if unit_id is not None:
        must_get_unit(db, unit_id=unit_id, property_id=property_id)
    if tenant_id is not None:
        must_get_tenant(db, tenant_id=tenant_id)
