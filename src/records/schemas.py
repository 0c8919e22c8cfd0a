"""Field schemas for every list view entity."""

from typing import Dict

from src.exceptions import UnknownEntityError
from src.records.fields import (
    RecordSchema,
    attr,
    category,
    date_field,
    joined,
    number,
    product,
    text,
)
from src.records.entities import (
    Customer,
    DeliveryCompletion,
    Equipment,
    InventoryItem,
    Payment,
    TeamMember,
    WorkOrder,
)


CUSTOMER_SCHEMA = RecordSchema(
    entity="customers",
    fields=(
        text("first_name"),
        text("last_name"),
        text("full_name", joined(attr("first_name"), attr("last_name")), "Name"),
        text("company"),
        text("email"),
        text("phone"),
        category("city"),
        category("customer_type", label="Type"),
        category("status"),
        date_field("created_at", label="Customer Since"),
    ),
    search_fields=("full_name", "company", "email", "phone"),
    date_field="created_at",
)

WORK_ORDER_SCHEMA = RecordSchema(
    entity="work_orders",
    fields=(
        text("work_order_number", label="Work Order #"),
        text("description"),
        text("customer_name", label="Customer"),
        text("vehicle"),
        category("status"),
        category("priority"),
        category("technician"),
        category("category"),
        date_field("created_at", label="Created"),
        date_field("due_date"),
        number("total_amount", label="Total"),
        number("labor_hours"),
    ),
    search_fields=("work_order_number", "description", "customer_name", "vehicle"),
    date_field="created_at",
)

DELIVERY_SCHEMA = RecordSchema(
    entity="deliveries",
    fields=(
        text("order_number", label="Order #"),
        text("driver_name", label="Driver"),
        text("notes"),
        category("customer_id"),
        category("payment_method"),
        date_field("delivery_date"),
        number("gallons_delivered", label="Gallons"),
        number("tank_level_before"),
        number("tank_level_after"),
        number("price_per_gallon"),
        number("total_amount", label="Amount"),
    ),
    search_fields=("order_number", "driver_name", "notes"),
    date_field="delivery_date",
)

INVENTORY_SCHEMA = RecordSchema(
    entity="inventory",
    fields=(
        text("name"),
        text("sku", label="SKU"),
        text("part_number", label="Part #"),
        text("description"),
        category("category"),
        category("supplier"),
        category("location"),
        category("status"),
        number("quantity"),
        number("reorder_point"),
        number("unit_price"),
        number("stock_value", product(attr("unit_price"), attr("quantity")), "Value"),
        date_field("updated_at", label="Last Updated"),
    ),
    search_fields=("name", "sku", "part_number", "description"),
    date_field="updated_at",
)

EQUIPMENT_SCHEMA = RecordSchema(
    entity="equipment",
    fields=(
        text("name"),
        text("make"),
        text("model"),
        text("serial_number", label="Serial #"),
        category("equipment_type", label="Type"),
        category("status"),
        category("location"),
        date_field("purchase_date"),
        number("purchase_cost"),
        number("operating_hours", label="Hours"),
    ),
    search_fields=("name", "make", "model", "serial_number"),
    date_field="purchase_date",
)

TEAM_SCHEMA = RecordSchema(
    entity="team",
    fields=(
        text("first_name"),
        text("last_name"),
        text("full_name", joined(attr("first_name"), attr("last_name")), "Name"),
        text("email"),
        text("phone"),
        category("role"),
        category("department"),
        category("status"),
        date_field("hire_date"),
    ),
    search_fields=("full_name", "email", "role", "department"),
    date_field="hire_date",
)

PAYMENT_SCHEMA = RecordSchema(
    entity="payments",
    fields=(
        text("invoice_number", label="Invoice #"),
        text("customer_name", label="Customer"),
        text("notes"),
        category("method"),
        category("status"),
        number("amount"),
        date_field("payment_date"),
    ),
    search_fields=("invoice_number", "customer_name", "notes"),
    date_field="payment_date",
)


SCHEMAS: Dict[str, RecordSchema] = {
    schema.entity: schema
    for schema in (
        CUSTOMER_SCHEMA,
        WORK_ORDER_SCHEMA,
        DELIVERY_SCHEMA,
        INVENTORY_SCHEMA,
        EQUIPMENT_SCHEMA,
        TEAM_SCHEMA,
        PAYMENT_SCHEMA,
    )
}

ENTITY_TYPES: Dict[str, type] = {
    "customers": Customer,
    "work_orders": WorkOrder,
    "deliveries": DeliveryCompletion,
    "inventory": InventoryItem,
    "equipment": Equipment,
    "team": TeamMember,
    "payments": Payment,
}


def get_schema(entity: str) -> RecordSchema:
    """
    Get the schema registered for an entity type.

    Raises:
        UnknownEntityError: If no schema exists for the entity.
    """
    try:
        return SCHEMAS[entity]
    except KeyError:
        raise UnknownEntityError(entity) from None
