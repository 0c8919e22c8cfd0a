"""Pytest configuration and fixtures for Shop Insights tests."""

import pytest
import sys
from datetime import date
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Config
from src.records.entities import (
    DeliveryCompletion,
    InventoryItem,
    Payment,
    TeamMember,
    WorkOrder,
)


@pytest.fixture
def today():
    """Fixed reference date for time-dependent statistics."""
    return date(2024, 6, 15)


@pytest.fixture
def view_context(today):
    """View context with default configuration and a fixed clock."""
    from src.views.context import ViewContext

    return ViewContext(config=Config(), today_provider=lambda: today)


@pytest.fixture
def sample_work_orders():
    """Work orders across statuses, priorities and technicians."""
    return [
        WorkOrder(
            id="wo-1",
            work_order_number="WO-1001",
            description="Replace front brake pads",
            customer_name="Dana Whitfield",
            vehicle="2018 Ford F-150",
            status="completed",
            priority="normal",
            technician="Sam Ortiz",
            category="repair",
            created_at=date(2024, 5, 2),
            total_amount=420.0,
            labor_hours=3.0,
        ),
        WorkOrder(
            id="wo-2",
            work_order_number="WO-1002",
            description="Annual inspection",
            customer_name="Lee Marsh",
            vehicle="2020 Toyota Tacoma",
            status="pending",
            priority="high",
            technician="Ana Reyes",
            category="inspection",
            created_at=date(2024, 6, 10),
            total_amount=150.0,
            labor_hours=1.5,
        ),
        WorkOrder(
            id="wo-3",
            work_order_number="WO-1003",
            description="Engine diagnostic, check BRAKE light",
            customer_name="Dana Whitfield",
            vehicle="2018 Ford F-150",
            status="completed",
            priority="urgent",
            technician="Sam Ortiz",
            category="diagnostic",
            created_at=date(2023, 11, 20),
            total_amount=None,
            labor_hours=2.0,
        ),
        WorkOrder(
            id="wo-4",
            work_order_number="WO-1004",
            description="Warranty transmission repair",
            customer_name=None,
            vehicle=None,
            status="in_progress",
            priority="urgent",
            technician=None,
            category="warranty",
            created_at=None,
            total_amount=1800.0,
            labor_hours=None,
        ),
    ]


@pytest.fixture
def sample_deliveries():
    """Water deliveries for one customer over two years."""
    return [
        DeliveryCompletion(
            id="d-1",
            customer_id="c-1",
            delivery_date=date(2024, 6, 1),
            gallons_delivered=1500.0,
            total_amount=300.0,
            payment_method="card",
            order_number="ORD-3",
            driver_name="Pat Kim",
        ),
        DeliveryCompletion(
            id="d-2",
            customer_id="c-1",
            delivery_date=date(2024, 3, 1),
            gallons_delivered=1000.0,
            total_amount=200.0,
            payment_method="cash",
            order_number="ORD-2",
            driver_name="Pat Kim",
        ),
        DeliveryCompletion(
            id="d-3",
            customer_id="c-1",
            delivery_date=date(2023, 9, 15),
            gallons_delivered=2000.0,
            total_amount=400.0,
            payment_method="card",
            order_number="ORD-1",
            driver_name="Jo Banks",
        ),
        DeliveryCompletion(
            id="d-4",
            customer_id="c-2",
            delivery_date=None,
            gallons_delivered=None,
            total_amount=None,
            payment_method=None,
            order_number="ORD-4",
        ),
    ]


@pytest.fixture
def sample_inventory():
    """Inventory items in every stock condition."""
    return [
        InventoryItem(id="i-1", name="Oil Filter", sku="OF-1", category="Filters",
                      supplier="Acme", quantity=40, reorder_point=10, unit_price=8.5),
        InventoryItem(id="i-2", name="Brake Pad Set", sku="BP-2", category="Brakes",
                      supplier="Stopco", quantity=4, reorder_point=5, unit_price=65.0),
        InventoryItem(id="i-3", name="Alternator", sku="ALT-3", category="Electrical",
                      supplier="Acme", quantity=0, reorder_point=2, unit_price=310.0),
        InventoryItem(id="i-4", name="Diagnostic Scanner", sku="DS-4", category="Tools",
                      supplier="Toolworks", quantity=2, reorder_point=1, unit_price=1250.0),
        InventoryItem(id="i-5", name="Shop Rags", sku="SR-5", category=None,
                      quantity=None, reorder_point=None, unit_price=None),
    ]


@pytest.fixture
def sample_team():
    """Team members across departments and statuses."""
    return [
        TeamMember(id="t-1", first_name="Sam", last_name="Ortiz", role="Technician",
                   department="Service", status="Active"),
        TeamMember(id="t-2", first_name="Ana", last_name="Reyes", role="Technician",
                   department="Service", status="On Leave"),
        TeamMember(id="t-3", first_name="Lou", last_name="Park", role="Advisor",
                   department="Front Office", status="Active"),
        TeamMember(id="t-4", first_name="Kit", last_name="Moss", role=None,
                   department=None, status="Inactive"),
    ]


@pytest.fixture
def sample_payments():
    """Payments across methods and statuses."""
    return [
        Payment(id="p-1", invoice_number="INV-1", customer_name="Dana Whitfield",
                method="card", status="paid", amount=420.0, payment_date=date(2024, 5, 3)),
        Payment(id="p-2", invoice_number="INV-2", customer_name="Lee Marsh",
                method="cash", status="pending", amount=150.0, payment_date=date(2024, 6, 12)),
        Payment(id="p-3", invoice_number="INV-3", customer_name="Dana Whitfield",
                method="ach", status="overdue", amount=95.5, payment_date=date(2024, 4, 30)),
    ]
