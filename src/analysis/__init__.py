"""Analysis module for list view statistics, insights and exports."""

from .statistics import (
    BUCKET_FREQUENCIES,
    COMPARISON_PERIODS,
    StatisticsConfig,
    StatisticsResult,
    SeriesBucket,
    PeriodComparison,
    aggregate,
    breakdown,
    build_series,
    comparison_windows,
    period_over_period_change,
    average_days_between,
    safe_average,
)
from .insights import (
    InventoryStats,
    CategorySummary,
    InventoryInsights,
    TeamStats,
    compute_inventory_stats,
    compute_inventory_insights,
    compute_team_stats,
)
from .audit import (
    FieldChange,
    diff_records,
    describe_changes,
    format_value,
)
from .export import (
    DataExporter,
    records_to_dataframe,
    statistics_to_dataframe,
    series_to_dataframe,
)

__all__ = [
    # Statistics
    "BUCKET_FREQUENCIES",
    "COMPARISON_PERIODS",
    "StatisticsConfig",
    "StatisticsResult",
    "SeriesBucket",
    "PeriodComparison",
    "aggregate",
    "breakdown",
    "build_series",
    "comparison_windows",
    "period_over_period_change",
    "average_days_between",
    "safe_average",
    # Insights
    "InventoryStats",
    "CategorySummary",
    "InventoryInsights",
    "TeamStats",
    "compute_inventory_stats",
    "compute_inventory_insights",
    "compute_team_stats",
    # Audit
    "FieldChange",
    "diff_records",
    "describe_changes",
    "format_value",
    # Export
    "DataExporter",
    "records_to_dataframe",
    "statistics_to_dataframe",
    "series_to_dataframe",
]
