"""Convert rows fetched from the data service into typed entities."""

from dataclasses import fields as dataclass_fields
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.logging_config import get_logger
from src.records.fields import coerce_date
from src.records.schemas import ENTITY_TYPES, get_schema

logger = get_logger("loader")


def _person_name(value: Any) -> Optional[str]:
    if not isinstance(value, Mapping):
        return None
    name = " ".join(p for p in (value.get("first_name"), value.get("last_name")) if p)
    return name or None


def _flatten_delivery(row: Dict[str, Any]) -> Dict[str, Any]:
    order = row.get("water_delivery_orders")
    if isinstance(order, Mapping):
        row.setdefault("order_number", order.get("order_number"))
    if "water_delivery_drivers" in row:
        row.setdefault("driver_name", _person_name(row["water_delivery_drivers"]))
    return row


def _flatten_work_order(row: Dict[str, Any]) -> Dict[str, Any]:
    if "customers" in row:
        row.setdefault("customer_name", _person_name(row["customers"]))
    vehicle = row.get("vehicles")
    if isinstance(vehicle, Mapping):
        parts = [vehicle.get(k) for k in ("year", "make", "model")]
        row.setdefault("vehicle", " ".join(str(p) for p in parts if p) or None)
    technician = row.get("technicians")
    if isinstance(technician, Mapping):
        row.setdefault("technician", _person_name(technician))
    return row


def _flatten_payment(row: Dict[str, Any]) -> Dict[str, Any]:
    invoice = row.get("invoices")
    if isinstance(invoice, Mapping):
        row.setdefault("invoice_number", invoice.get("invoice_number"))
    if "customers" in row:
        row.setdefault("customer_name", _person_name(row["customers"]))
    return row


# Embedded relations returned by the query service, flattened onto the row
ROW_FLATTENERS: Dict[str, Callable[[Dict[str, Any]], Dict[str, Any]]] = {
    "deliveries": _flatten_delivery,
    "work_orders": _flatten_work_order,
    "payments": _flatten_payment,
}


def _parse_optional_number(value: Any) -> Optional[float]:
    """Numeric columns may arrive as strings; keep nulls as None."""
    if value is None or isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def load_record(row: Mapping[str, Any], entity: str):
    """
    Build one entity from a fetched row.

    Args:
        row: Row mapping as returned by the data service.
        entity: Entity type name.

    Returns:
        Entity instance, or None if the row has no id.
    """
    get_schema(entity)
    cls = ENTITY_TYPES[entity]

    flat = dict(row)
    flattener = ROW_FLATTENERS.get(entity)
    if flattener:
        flat = flattener(flat)

    if flat.get("id") is None:
        return None

    values = {}
    for f in dataclass_fields(cls):
        raw = flat.get(f.name)
        if f.name == "id":
            values["id"] = str(raw)
        elif f.type == Optional[date]:
            values[f.name] = coerce_date(raw)
        elif f.type == Optional[float]:
            values[f.name] = _parse_optional_number(raw)
        else:
            values[f.name] = raw
    return cls(**values)


def load_records(rows: Iterable[Any], entity: str) -> List[Any]:
    """
    Build entities from fetched rows, skipping rows that cannot be used.

    Args:
        rows: Rows as returned by the data service.
        entity: Entity type name.

    Returns:
        List of entity instances in row order.
    """
    records = []
    skipped = 0
    for row in rows:
        if not isinstance(row, Mapping):
            skipped += 1
            continue
        record = load_record(row, entity)
        if record is None:
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logger.warning(f"Skipped {skipped} unusable {entity} rows")
    logger.debug(f"Loaded {len(records)} {entity} records")
    return records
