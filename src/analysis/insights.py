"""Inventory and team insights shown beside their list views."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.constants import HIGH_VALUE_THRESHOLD, INSIGHT_TOP_N, UNCATEGORIZED_LABEL
from config.logging_config import get_logger
from src.analysis.statistics import safe_average
from src.records.fields import RecordSchema
from src.records.schemas import INVENTORY_SCHEMA, TEAM_SCHEMA

logger = get_logger("insights")


@dataclass(frozen=True)
class InventoryStats:
    """Headline stock figures."""

    total_items: int = 0
    total_value: float = 0.0
    low_stock_count: int = 0
    out_of_stock_count: int = 0


@dataclass(frozen=True)
class CategorySummary:
    """Stock held in one category."""

    category: str
    count: int = 0
    value: float = 0.0
    low_stock: int = 0


@dataclass(frozen=True)
class InventoryInsights:
    """Derived inventory insights."""

    stats: InventoryStats
    top_categories: List[CategorySummary] = field(default_factory=list)
    reorder_candidates: List[Any] = field(default_factory=list)
    high_value_items: List[Any] = field(default_factory=list)
    stock_health_score: float = 100.0
    average_value: float = 0.0


@dataclass(frozen=True)
class TeamStats:
    """Headline team figures."""

    total_members: int = 0
    active_members: int = 0
    on_leave_members: int = 0
    departments: int = 0
    roles: int = 0


def _quantity(item: Any, schema: RecordSchema) -> float:
    return schema.number(item, "quantity")


def _needs_reorder(item: Any, schema: RecordSchema) -> bool:
    return _quantity(item, schema) <= schema.number(item, "reorder_point")


def compute_inventory_stats(
    items: Sequence[Any],
    schema: RecordSchema = INVENTORY_SCHEMA,
) -> InventoryStats:
    """
    Compute headline stock figures.

    An item is out of stock at quantity 0 or below, and low on stock when
    it is above 0 but at or below its reorder point.
    """
    out_of_stock = 0
    low_stock = 0
    total_value = 0.0
    for item in items:
        quantity = _quantity(item, schema)
        total_value += schema.number(item, "stock_value")
        if quantity <= 0:
            out_of_stock += 1
        elif quantity <= schema.number(item, "reorder_point"):
            low_stock += 1

    return InventoryStats(
        total_items=len(items),
        total_value=total_value,
        low_stock_count=low_stock,
        out_of_stock_count=out_of_stock,
    )


def compute_inventory_insights(
    items: Sequence[Any],
    stats: Optional[InventoryStats] = None,
    schema: RecordSchema = INVENTORY_SCHEMA,
    top_n: int = INSIGHT_TOP_N,
) -> InventoryInsights:
    """
    Derive category, reorder and stock health insights.

    Args:
        items: Inventory items (usually the visible subset).
        stats: Precomputed headline stats (computed from items if None).
        schema: Inventory schema.
        top_n: Length of each ranked list.

    Returns:
        InventoryInsights.
    """
    items = list(items)
    stats = stats or compute_inventory_stats(items, schema)

    categories: Dict[str, Dict[str, float]] = {}
    for item in items:
        name = schema.value(item, "category") or UNCATEGORIZED_LABEL
        entry = categories.setdefault(name, {"count": 0, "value": 0.0, "low_stock": 0})
        entry["count"] += 1
        entry["value"] += schema.number(item, "stock_value")
        if _needs_reorder(item, schema):
            entry["low_stock"] += 1

    top_categories = [
        CategorySummary(name, int(e["count"]), e["value"], int(e["low_stock"]))
        for name, e in sorted(categories.items(), key=lambda kv: (-kv[1]["value"], kv[0]))
    ][:top_n]

    reorder_candidates = sorted(
        (item for item in items if _needs_reorder(item, schema)),
        key=lambda item: _quantity(item, schema),
    )[:top_n]

    high_value_items = sorted(
        (i for i in items if schema.number(i, "stock_value") > HIGH_VALUE_THRESHOLD),
        key=lambda item: -schema.number(item, "stock_value"),
    )[:top_n]

    healthy = len(items) - stats.low_stock_count - stats.out_of_stock_count
    stock_health_score = max(0.0, min(100.0, healthy / max(1, len(items)) * 100))

    logger.debug(
        f"Inventory insights: {len(items)} items, {len(reorder_candidates)} to reorder, "
        f"health {stock_health_score:.0f}%"
    )
    return InventoryInsights(
        stats=stats,
        top_categories=top_categories,
        reorder_candidates=reorder_candidates,
        high_value_items=high_value_items,
        stock_health_score=stock_health_score,
        average_value=safe_average(stats.total_value, stats.total_items),
    )


def compute_team_stats(
    members: Sequence[Any],
    schema: RecordSchema = TEAM_SCHEMA,
) -> TeamStats:
    """Count members by status and the departments and roles in use."""
    statuses = [schema.value(m, "status") for m in members]
    departments = {schema.value(m, "department") for m in members} - {None, ""}
    roles = {schema.value(m, "role") for m in members} - {None, ""}
    return TeamStats(
        total_members=len(members),
        active_members=statuses.count("Active"),
        on_leave_members=statuses.count("On Leave"),
        departments=len(departments),
        roles=len(roles),
    )
