"""Domain record types shown in the shop's list views."""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class Customer:
    """A shop customer (individual or business account)."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    city: Optional[str] = None
    customer_type: Optional[str] = None  # "individual", "business", "fleet"
    status: Optional[str] = None
    created_at: Optional[date] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


@dataclass
class WorkOrder:
    """A repair or service job."""

    id: str
    work_order_number: Optional[str] = None
    description: Optional[str] = None
    customer_name: Optional[str] = None
    vehicle: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    technician: Optional[str] = None
    category: Optional[str] = None
    created_at: Optional[date] = None
    due_date: Optional[date] = None
    total_amount: Optional[float] = None
    labor_hours: Optional[float] = None


@dataclass
class DeliveryCompletion:
    """One completed water delivery to a customer tank."""

    id: str
    customer_id: Optional[str] = None
    delivery_date: Optional[date] = None
    gallons_delivered: Optional[float] = None
    tank_level_before: Optional[float] = None
    tank_level_after: Optional[float] = None
    price_per_gallon: Optional[float] = None
    total_amount: Optional[float] = None
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    order_number: Optional[str] = None
    driver_name: Optional[str] = None


@dataclass
class InventoryItem:
    """A stocked part or supply."""

    id: str
    name: Optional[str] = None
    sku: Optional[str] = None
    part_number: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    supplier: Optional[str] = None
    location: Optional[str] = None
    status: Optional[str] = None
    quantity: Optional[float] = None
    reorder_point: Optional[float] = None
    unit_price: Optional[float] = None
    updated_at: Optional[date] = None

    @property
    def total_value(self) -> float:
        return (self.unit_price or 0) * (self.quantity or 0)


@dataclass
class Equipment:
    """A shop-owned vehicle, tool or machine."""

    id: str
    name: Optional[str] = None
    equipment_type: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    serial_number: Optional[str] = None
    status: Optional[str] = None
    location: Optional[str] = None
    purchase_date: Optional[date] = None
    purchase_cost: Optional[float] = None
    operating_hours: Optional[float] = None


@dataclass
class TeamMember:
    """A staff member."""

    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    role: Optional[str] = None
    department: Optional[str] = None
    status: Optional[str] = None
    hire_date: Optional[date] = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)


@dataclass
class Payment:
    """A payment received against an invoice."""

    id: str
    invoice_number: Optional[str] = None
    customer_name: Optional[str] = None
    method: Optional[str] = None
    status: Optional[str] = None
    amount: Optional[float] = None
    payment_date: Optional[date] = None
    notes: Optional[str] = None
