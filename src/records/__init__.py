"""Typed records, field schemas and data sources for list views."""

from .fields import (
    FieldKind,
    FieldSpec,
    RecordSchema,
    attr,
    joined,
    product,
    coerce_number,
    coerce_date,
    coerce_text,
    humanize_field_name,
)
from .entities import (
    Customer,
    WorkOrder,
    DeliveryCompletion,
    InventoryItem,
    Equipment,
    TeamMember,
    Payment,
)
from .schemas import (
    CUSTOMER_SCHEMA,
    WORK_ORDER_SCHEMA,
    DELIVERY_SCHEMA,
    INVENTORY_SCHEMA,
    EQUIPMENT_SCHEMA,
    TEAM_SCHEMA,
    PAYMENT_SCHEMA,
    SCHEMAS,
    ENTITY_TYPES,
    get_schema,
)
from .loader import load_record, load_records
from .source import RecordSource, StaticSource, RestRecordSource

__all__ = [
    # Fields
    "FieldKind",
    "FieldSpec",
    "RecordSchema",
    "attr",
    "joined",
    "product",
    "coerce_number",
    "coerce_date",
    "coerce_text",
    "humanize_field_name",
    # Entities
    "Customer",
    "WorkOrder",
    "DeliveryCompletion",
    "InventoryItem",
    "Equipment",
    "TeamMember",
    "Payment",
    # Schemas
    "CUSTOMER_SCHEMA",
    "WORK_ORDER_SCHEMA",
    "DELIVERY_SCHEMA",
    "INVENTORY_SCHEMA",
    "EQUIPMENT_SCHEMA",
    "TEAM_SCHEMA",
    "PAYMENT_SCHEMA",
    "SCHEMAS",
    "ENTITY_TYPES",
    "get_schema",
    # Loading
    "load_record",
    "load_records",
    "RecordSource",
    "StaticSource",
    "RestRecordSource",
]
