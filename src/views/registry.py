"""Default list view setup per entity type."""

from pathlib import Path
from typing import Any, Dict, Iterable, Optional
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.analysis.statistics import StatisticsConfig
from src.filtering.filter_state import FilterState
from src.records.schemas import get_schema
from src.views.context import ViewContext
from src.views.controller import ListController

# Statistics shown above each list, as overrides of the configured defaults.
# A view without sum fields gets counts only and no period comparison.
VIEW_STATISTICS: Dict[str, Dict[str, Any]] = {
    "deliveries": {
        "sum_fields": ("gallons_delivered", "total_amount"),
        "series_field": "gallons_delivered",
    },
    "work_orders": {
        "sum_fields": ("total_amount", "labor_hours"),
    },
    "payments": {
        "sum_fields": ("amount",),
        "series_field": "amount",
    },
    "inventory": {
        "sum_fields": ("stock_value", "quantity"),
        "comparison": None,
    },
    "equipment": {
        "sum_fields": ("purchase_cost", "operating_hours"),
        "comparison": None,
    },
    "customers": {},
    "team": {},
}


def default_statistics_config(
    entity: str,
    context: Optional[ViewContext] = None,
    **overrides: Any,
) -> StatisticsConfig:
    """
    Statistics config for an entity's list view.

    Args:
        entity: Entity type name.
        context: Supplies the configured defaults (environment if None).
        **overrides: Replace any of the view's settings.

    Raises:
        UnknownEntityError: If no schema exists for the entity.
    """
    context = context or ViewContext()
    settings = dict(VIEW_STATISTICS.get(entity, {}))
    settings.update(overrides)
    return context.statistics_config(get_schema(entity), **settings)


def create_controller(
    entity: str,
    records: Iterable[Any] = (),
    context: Optional[ViewContext] = None,
    statistics_scope: str = "filtered",
    initial_state: Optional[FilterState] = None,
    **statistics_overrides: Any,
) -> ListController:
    """
    Build a list controller with the entity's schema and default statistics.

    Args:
        entity: Entity type name (e.g. "deliveries").
        records: Raw collection.
        context: Shared view context (built from the environment if None).
        statistics_scope: "filtered" or "all".
        initial_state: Filters to open the view with.
        **statistics_overrides: Replace any of the view's statistics settings.

    Returns:
        ListController ready for use.
    """
    context = context or ViewContext()
    return ListController(
        schema=get_schema(entity),
        records=records,
        statistics_config=default_statistics_config(entity, context, **statistics_overrides),
        statistics_scope=statistics_scope,
        context=context,
        initial_state=initial_state,
    )
