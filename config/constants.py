"""Constants for Shop Insights.

IMPORTANT: All default filter values are EMPTY, which means no restriction.
A list view opens showing every record it was given.
"""

from collections.abc import Hashable
from datetime import date, timedelta
from typing import Callable, Dict, Optional, Tuple


# =============================================================================
# Work Orders
# =============================================================================

WORK_ORDER_STATUSES: Dict[str, str] = {
    "pending": "Pending",
    "in_progress": "In Progress",
    "completed": "Completed",
    "cancelled": "Cancelled",
    "on_hold": "On Hold",
}

WORK_ORDER_PRIORITIES: Dict[str, str] = {
    "low": "Low",
    "normal": "Normal",
    "high": "High",
    "urgent": "Urgent",
}

WORK_ORDER_CATEGORIES: Dict[str, str] = {
    "maintenance": "Maintenance",
    "repair": "Repair",
    "diagnostic": "Diagnostic",
    "inspection": "Inspection",
    "warranty": "Warranty",
}


# =============================================================================
# Inventory and Billing
# =============================================================================

INVENTORY_STATUSES: Dict[str, str] = {
    "in_stock": "In Stock",
    "low_stock": "Low Stock",
    "out_of_stock": "Out of Stock",
    "discontinued": "Discontinued",
}

PAYMENT_METHODS: Dict[str, str] = {
    "cash": "Cash",
    "check": "Check",
    "card": "Credit Card",
    "ach": "Bank Transfer",
    "account": "On Account",
}

PAYMENT_STATUSES: Dict[str, str] = {
    "paid": "Paid",
    "pending": "Pending",
    "overdue": "Overdue",
    "refunded": "Refunded",
}


# =============================================================================
# Insights thresholds
# =============================================================================

HIGH_VALUE_THRESHOLD = 1000.0
INSIGHT_TOP_N = 5
UNCATEGORIZED_LABEL = "Uncategorized"
EMPTY_DISPLAY = "(empty)"


# =============================================================================
# Date range presets
# =============================================================================

DateRangeFactory = Callable[[date], Tuple[Optional[date], Optional[date]]]

DATE_PRESETS: Dict[str, DateRangeFactory] = {
    "Last 30 days": lambda today: (today - timedelta(days=30), today),
    "Last 90 days": lambda today: (today - timedelta(days=90), today),
    "Last year": lambda today: (today - timedelta(days=365), today),
    "Year to date": lambda today: (date(today.year, 1, 1), today),
    "Last calendar year": lambda today: (
        date(today.year - 1, 1, 1),
        date(today.year - 1, 12, 31),
    ),
    "All time": lambda today: (None, None),
}


def resolve_date_preset(
    name: str,
    today: Optional[date] = None,
) -> Tuple[Optional[date], Optional[date]]:
    """
    Resolve a named date preset to concrete bounds.

    Raises:
        KeyError: If the preset name is unknown.
    """
    factory = DATE_PRESETS[name]
    return factory(today or date.today())


def get_option_label(options: Dict[str, str], value: Optional[str]) -> str:
    """Get display label for a coded option, falling back to the raw value."""
    if value is None:
        return UNCATEGORIZED_LABEL
    if not isinstance(value, Hashable):
        return str(value)
    return options.get(value, value)
