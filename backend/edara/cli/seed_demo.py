# backend/edara/cli/seed_demo.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from edara.db import Base, SessionLocal, engine
from edara.models import Contract, Invoice, InvoiceItem, MaintenanceRequest, Property, Tenant, Unit


@dataclass(frozen=True)
class SeedResult:
    property_id: int
    tenant_ids: list[int]
    invoice_ids: list[int]
    contract_ids: list[int]


def _get_or_create_property(db: Session, name: str) -> Property:
    row = db.query(Property).filter(Property.name == name).one_or_none()
    if row:
        return row
    row = Property(
        name=name,
        type="residential",
        address="Block 3, Street 12",
        city="Salmiya",
        state="Hawalli",
        zip="20001",
        units=2,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def _get_or_create_unit(db: Session, property_id: int, name: str, rent: float, status: str) -> Unit:
    row = db.query(Unit).filter(Unit.property_id == property_id, Unit.name == name).one_or_none()
    if row:
        return row
    row = Unit(property_id=property_id, name=name, rent_amount=rent, status=status)
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def _get_or_create_tenant(
    db: Session, *, first: str, last: str, phone: Optional[str], property_id: int, unit_id: int
) -> Tenant:
    email = f"{first.lower()}.{last.lower()}@example.com"
    row = db.query(Tenant).filter(Tenant.email == email).one_or_none()
    if row:
        return row
    row = Tenant(
        first_name=first,
        last_name=last,
        email=email,
        phone=phone,
        property_id=property_id,
        unit_id=unit_id,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row


def seed_demo(*, property_name: str = "Demo Tower", today: Optional[date] = None) -> SeedResult:
    """
    Small portfolio that trips every alert rule on the first scan:
    one overdue invoice, one due in 2 days, one lease ending in 20 days,
    one lease already past its end date, one recently completed repair.
    """
    today = today or date.today()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        prop = _get_or_create_property(db, property_name)
        u1 = _get_or_create_unit(db, prop.id, "A-101", 350.0, "occupied")
        u2 = _get_or_create_unit(db, prop.id, "A-102", 300.0, "occupied")

        t1 = _get_or_create_tenant(db, first="Jane", last="Doe", phone="5123 4567", property_id=prop.id, unit_id=u1.id)
        t2 = _get_or_create_tenant(db, first="Omar", last="Saleh", phone="", property_id=prop.id, unit_id=u2.id)

        invoices = [
            Invoice(
                invoice_number=f"INV-{today:%Y%m}-001",
                tenant_id=t1.id,
                property_id=prop.id,
                unit_id=u1.id,
                issue_date=today - timedelta(days=40),
                due_date=today - timedelta(days=10),
                amount=350.0,
                status="overdue",
                items=[InvoiceItem(description="Monthly rent", amount=350.0, sort_order=0)],
            ),
            Invoice(
                invoice_number=f"INV-{today:%Y%m}-002",
                tenant_id=t1.id,
                property_id=prop.id,
                unit_id=u1.id,
                issue_date=today,
                due_date=today + timedelta(days=2),
                amount=350.0,
                status="pending",
                items=[InvoiceItem(description="Monthly rent", amount=350.0, sort_order=0)],
            ),
        ]
        contracts = [
            Contract(
                contract_id="CT-0001",
                tenant_id=t1.id,
                property_id=prop.id,
                unit_id=u1.id,
                start_date=today - timedelta(days=345),
                end_date=today + timedelta(days=20),
                rent_amount=350.0,
            ),
            Contract(
                contract_id="CT-0002",
                tenant_id=t2.id,
                property_id=prop.id,
                unit_id=u2.id,
                start_date=today - timedelta(days=400),
                end_date=today - timedelta(days=5),
                rent_amount=300.0,
            ),
        ]
        repair = MaintenanceRequest(
            title="Leaking kitchen tap",
            property_id=prop.id,
            unit_id=u1.id,
            category="plumbing",
            description="Tap drips constantly",
            status="completed",
        )

        db.add_all([*invoices, *contracts, repair])
        db.commit()

        return SeedResult(
            property_id=prop.id,
            tenant_ids=[t1.id, t2.id],
            invoice_ids=[i.id for i in invoices],
            contract_ids=[c.id for c in contracts],
        )
    finally:
        db.close()
