# backend/edara/schemas.py
from __future__ import annotations

from datetime import date, datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, ConfigDict, model_validator

InvoiceStatus = Literal["pending", "paid", "overdue"]
MaintenanceStatus = Literal["pending", "assigned", "in_progress", "completed"]


# -------------------- Properties / Units --------------------

class Amenities(BaseModel):
    parking: bool = False
    security: bool = False
    elevator: bool = False
    pool: bool = False
    gym: bool = False
    airConditioning: bool = False


class PropertyCreate(BaseModel):
    name: str = Field(min_length=1)
    type: str = "residential"
    address: str
    city: str
    state: str
    zip: str
    units: int = Field(default=0, ge=0)
    size: Optional[float] = None
    description: Optional[str] = None
    amenities: Amenities = Field(default_factory=Amenities)
    image_urls: list[str] = Field(default_factory=list)


class PropertyUpdate(BaseModel):
    name: Optional[str] = None
    type: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    units: Optional[int] = Field(default=None, ge=0)
    size: Optional[float] = None
    description: Optional[str] = None
    amenities: Optional[Amenities] = None
    image_urls: Optional[list[str]] = None


class PropertyOut(PropertyCreate):
    id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class UnitCreate(BaseModel):
    property_id: int
    name: str = Field(min_length=1)
    floor: Optional[int] = None
    size: Optional[float] = None
    rent_amount: Optional[float] = None
    status: str = "vacant"


class UnitUpdate(BaseModel):
    name: Optional[str] = None
    floor: Optional[int] = None
    size: Optional[float] = None
    rent_amount: Optional[float] = None
    status: Optional[str] = None


class UnitOut(UnitCreate):
    id: int
    property_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# -------------------- Tenants / Contracts --------------------

class TenantCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str
    phone: Optional[str] = None
    property_id: Optional[int] = None
    unit_id: Optional[int] = None
    move_in_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    rent: Optional[float] = None
    deposit: Optional[float] = None
    status: str = "active"


class TenantUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    property_id: Optional[int] = None
    unit_id: Optional[int] = None
    move_in_date: Optional[date] = None
    lease_end_date: Optional[date] = None
    rent: Optional[float] = None
    deposit: Optional[float] = None
    status: Optional[str] = None


class TenantOut(TenantCreate):
    id: int
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


class ContractCreate(BaseModel):
    contract_id: str = Field(min_length=1)
    tenant_id: int
    property_id: int
    unit_id: Optional[int] = None
    start_date: date
    end_date: date
    rent_amount: float = Field(ge=0)
    deposit_amount: Optional[float] = None
    payment_frequency: str = "monthly"
    terms: Optional[str] = None
    file_url: Optional[str] = None
    status: str = "active"

    @model_validator(mode="after")
    def _dates_ordered(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class ContractUpdate(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    rent_amount: Optional[float] = Field(default=None, ge=0)
    deposit_amount: Optional[float] = None
    payment_frequency: Optional[str] = None
    terms: Optional[str] = None
    file_url: Optional[str] = None
    status: Optional[str] = None


class ContractOut(BaseModel):
    id: int
    contract_id: str
    tenant_id: Optional[int] = None
    property_id: Optional[int] = None
    unit_id: Optional[int] = None
    start_date: date
    end_date: date
    rent_amount: float
    deposit_amount: Optional[float] = None
    payment_frequency: str
    terms: Optional[str] = None
    file_url: Optional[str] = None
    status: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# -------------------- Invoices --------------------

class InvoiceItemIn(BaseModel):
    description: str = Field(min_length=1)
    amount: float
    sort_order: int = 0


class InvoiceItemOut(InvoiceItemIn):
    id: int
    invoice_id: int
    model_config = ConfigDict(from_attributes=True)


class InvoiceCreate(BaseModel):
    invoice_number: str = Field(min_length=1)
    tenant_id: int
    property_id: int
    unit_id: Optional[int] = None
    issue_date: date
    due_date: date
    amount: float = Field(ge=0)
    status: InvoiceStatus = "pending"
    description: Optional[str] = None
    send_notification: bool = False
    file_url: Optional[str] = None
    items: list[InvoiceItemIn] = Field(default_factory=list)


class InvoiceUpdate(BaseModel):
    status: Optional[InvoiceStatus] = None
    amount: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None


class InvoiceOut(BaseModel):
    id: int
    invoice_number: str
    tenant_id: Optional[int] = None
    property_id: Optional[int] = None
    unit_id: Optional[int] = None
    issue_date: date
    due_date: date
    amount: float
    status: str
    description: Optional[str] = None
    send_notification: bool
    file_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    items: list[InvoiceItemOut] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)


# -------------------- Maintenance --------------------

class MaintenanceCreate(BaseModel):
    title: str = Field(min_length=1)
    property_id: int
    unit_id: Optional[int] = None
    category: str
    priority: str = "medium"
    description: str
    available_dates: Optional[str] = None
    contact_preference: str = "phone"
    image_urls: list[str] = Field(default_factory=list)


class MaintenanceUpdate(BaseModel):
    title: Optional[str] = None
    category: Optional[str] = None
    priority: Optional[str] = None
    status: Optional[MaintenanceStatus] = None
    description: Optional[str] = None


class MaintenanceOut(BaseModel):
    id: int
    title: str
    property_id: Optional[int] = None
    unit_id: Optional[int] = None
    category: str
    priority: str
    description: str
    available_dates: Optional[str] = None
    contact_preference: str
    image_urls: list[str] = Field(default_factory=list)
    status: str
    created_at: datetime
    updated_at: datetime
    model_config = ConfigDict(from_attributes=True)


# -------------------- Notifications --------------------

class NotificationOut(BaseModel):
    id: int
    type: str
    title: str
    message: str
    tenant_id: Optional[int] = None
    property_id: Optional[int] = None
    related_id: Optional[str] = None
    is_read: bool
    created_at: Optional[datetime] = None
    tenant_name: Optional[str] = None
    property_name: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


class ScanOut(BaseModel):
    inserted: int


class NotificationSettingsIO(BaseModel):
    payment_reminder: bool = True
    payment_overdue: bool = True
    maintenance_update: bool = True
    lease_expiring: bool = True
    lease_expired: bool = True
    system: bool = True


# -------------------- WhatsApp --------------------

class ReminderDraftOut(BaseModel):
    invoice_id: int
    tenant_id: Optional[int] = None
    tenant_name: str
    phone: str
    message: str
    whatsapp_link: str
    amount: float
    due_date: date
    invoice_number: str
    model_config = ConfigDict(from_attributes=True)


class ReminderSendIn(BaseModel):
    invoice_id: int
    tenant_id: Optional[int] = None
    phone: str = Field(min_length=1)
    message: str = Field(min_length=1)


class ReminderSendOut(BaseModel):
    whatsapp_link: str


class WhatsAppReminderOut(BaseModel):
    id: int
    invoice_id: int
    tenant_id: Optional[int] = None
    phone: str
    message: str
    status: str
    sent_at: Optional[datetime] = None
    created_at: datetime
    invoice_number: Optional[str] = None
    tenant_name: Optional[str] = None
    model_config = ConfigDict(from_attributes=True)


# -------------------- Dashboard --------------------

class DashboardStatsOut(BaseModel):
    properties: int
    units: int
    tenants: int
    vacant_units: int
    vacancy_rate_pct: Optional[float] = None
    monthly_revenue: float
    paid_invoices_this_month: int
    pending_invoices: int
    overdue_invoices: int
    open_maintenance: int
    unread_notifications: int
    month: str
    model_config = ConfigDict(from_attributes=True)
