"""Derived statistics for list views.

Everything here is a pure function of (records, config, today): calling
aggregate twice with the same inputs gives identical results.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import sys

import numpy as np
import pandas as pd

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import ConfigurationError
from config.constants import get_option_label
from config.logging_config import get_logger
from config.settings import StatisticsDefaults
from src.records.fields import FieldKind, RecordSchema

logger = get_logger("statistics")

# Calendar period -> pandas Period frequency
BUCKET_FREQUENCIES = {
    "month": "M",
    "week": "W-SUN",  # Monday to Sunday weeks
    "day": "D",
}

COMPARISON_PERIODS = ("year", "month")


@dataclass(frozen=True)
class StatisticsConfig:
    """
    What to compute for a list view.

    Attributes:
        schema: Field catalogue of the records.
        sum_fields: Numeric fields to sum and average.
        date_field: Date field ordering the records (schema default if None).
        series_field: Numeric field accumulated per bucket; None counts records.
        bucket_period: "month", "week" or "day".
        bucket_count: Number of trailing periods in the series.
        comparison: "year", "month" or None for no period-over-period figure.
        comparison_field: Field compared across periods (first sum field if None).
    """

    schema: RecordSchema
    sum_fields: Tuple[str, ...] = ()
    date_field: Optional[str] = None
    series_field: Optional[str] = None
    bucket_period: str = "month"
    bucket_count: int = 12
    comparison: Optional[str] = None
    comparison_field: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "sum_fields", tuple(self.sum_fields))
        if self.date_field is None:
            object.__setattr__(self, "date_field", self.schema.date_field)

        if self.bucket_period not in BUCKET_FREQUENCIES:
            raise ConfigurationError(
                f"bucket_period must be one of {sorted(BUCKET_FREQUENCIES)}, "
                f"got '{self.bucket_period}'"
            )
        if self.bucket_count < 1:
            raise ConfigurationError(f"bucket_count must be positive, got {self.bucket_count}")
        if self.comparison is not None and self.comparison not in COMPARISON_PERIODS:
            raise ConfigurationError(
                f"comparison must be one of {COMPARISON_PERIODS} or None, "
                f"got '{self.comparison}'"
            )

        # Fail fast on field names the schema does not have
        for name in self.sum_fields:
            self.schema.field(name, FieldKind.NUMBER)
        if self.date_field is not None:
            self.schema.field(self.date_field, FieldKind.DATE)
        if self.series_field is not None:
            self.schema.field(self.series_field, FieldKind.NUMBER)
        if self.comparison is not None:
            if self.date_field is None:
                raise ConfigurationError(f"{self.schema.entity} comparisons need a date_field")
            if self.comparison_field is None:
                if not self.sum_fields:
                    raise ConfigurationError("comparison requires a comparison_field or sum_fields")
                object.__setattr__(self, "comparison_field", self.sum_fields[0])
            self.schema.field(self.comparison_field, FieldKind.NUMBER)

    @classmethod
    def from_defaults(
        cls,
        schema: RecordSchema,
        defaults: StatisticsDefaults,
        **overrides: Any,
    ) -> "StatisticsConfig":
        """Build a config from application defaults plus view overrides."""
        values = {
            "bucket_count": defaults.bucket_count,
            "bucket_period": defaults.bucket_period,
            "comparison": defaults.comparison,
        }
        values.update(overrides)
        if values.get("comparison") and not values.get("sum_fields") and not values.get("comparison_field"):
            values["comparison"] = None
        return cls(schema=schema, **values)


@dataclass(frozen=True)
class SeriesBucket:
    """One calendar period of a chart series."""

    label: str
    start: date
    end: date
    value: float = 0.0


@dataclass(frozen=True)
class PeriodComparison:
    """Totals for the current and previous calendar period."""

    period: str
    field: str
    current_start: date
    current_end: Optional[date]
    previous_start: date
    previous_end: date
    current_total: float
    previous_total: float
    change_percent: float


@dataclass(frozen=True)
class StatisticsResult:
    """Summary figures for a collection of records."""

    count: int = 0
    sums: Mapping[str, float] = field(default_factory=dict)
    averages: Mapping[str, float] = field(default_factory=dict)
    earliest: Optional[date] = None
    latest: Optional[date] = None
    average_days_between: float = 0.0
    comparison: Optional[PeriodComparison] = None
    series: Tuple[SeriesBucket, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "sums", MappingProxyType(dict(self.sums)))
        object.__setattr__(self, "averages", MappingProxyType(dict(self.averages)))
        object.__setattr__(self, "series", tuple(self.series))

    def __hash__(self):
        return hash((
            self.count,
            frozenset(self.sums.items()),
            frozenset(self.averages.items()),
            self.earliest,
            self.latest,
            self.average_days_between,
            self.comparison,
            self.series,
        ))

    @property
    def total(self) -> float:
        """Sum of the first configured numeric field."""
        return next(iter(self.sums.values()), 0.0)

    @property
    def average(self) -> float:
        """Average of the first configured numeric field."""
        return next(iter(self.averages.values()), 0.0)

    @property
    def series_values(self) -> List[float]:
        return [bucket.value for bucket in self.series]

    def to_dict(self) -> Dict[str, Any]:
        """Flatten to plain values for presentation and export."""
        data: Dict[str, Any] = {
            "count": self.count,
            "earliest": self.earliest.isoformat() if self.earliest else None,
            "latest": self.latest.isoformat() if self.latest else None,
            "average_days_between": self.average_days_between,
        }
        for name, value in self.sums.items():
            data[f"{name}_total"] = value
        for name, value in self.averages.items():
            data[f"{name}_average"] = value
        if self.comparison is not None:
            data["comparison_current"] = self.comparison.current_total
            data["comparison_previous"] = self.comparison.previous_total
            data["comparison_change_percent"] = self.comparison.change_percent
        return data


def safe_average(total: float, count: int) -> float:
    """total / count, or 0 when there is nothing to average."""
    return float(total) / count if count > 0 else 0.0


def period_over_period_change(current: float, previous: float) -> float:
    """
    Percentage change from the previous to the current period.

    Returns 0 when the previous period total is 0 rather than an infinite
    or undefined value.
    """
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def average_days_between(dates: Iterable[Optional[date]]) -> float:
    """
    Average gap in days between consecutive dates.

    Dates are sorted newest first and the day differences between each
    consecutive pair are averaged. Missing dates are ignored; fewer than two
    dates gives 0.
    """
    ordered = sorted((d for d in dates if d is not None), reverse=True)
    if len(ordered) < 2:
        return 0.0
    gaps = [(newer - older).days for newer, older in zip(ordered, ordered[1:])]
    return float(np.mean(gaps))


def comparison_windows(
    period: str,
    today: date,
) -> Tuple[date, Optional[date], date, date]:
    """
    Calendar windows for a period-over-period comparison.

    The current window starts at the beginning of the calendar period
    containing today and is open-ended; the previous window is the whole
    preceding calendar period.

    Returns:
        (current_start, current_end, previous_start, previous_end)
    """
    if period == "year":
        return (
            date(today.year, 1, 1),
            None,
            date(today.year - 1, 1, 1),
            date(today.year - 1, 12, 31),
        )
    if period == "month":
        current_start = today.replace(day=1)
        previous_end = current_start - timedelta(days=1)
        return current_start, None, previous_end.replace(day=1), previous_end
    raise ConfigurationError(f"Unknown comparison period '{period}'")


def _bucket_label(period: pd.Period, bucket_period: str) -> str:
    if bucket_period == "month":
        return period.strftime("%b %Y")
    return period.start_time.date().isoformat()


def build_series(
    dated_values: Sequence[Tuple[Optional[date], float]],
    bucket_period: str,
    bucket_count: int,
    today: date,
) -> Tuple[SeriesBucket, ...]:
    """
    Accumulate values into a fixed window of trailing calendar periods.

    Args:
        dated_values: (date, value) pairs; undated pairs are ignored.
        bucket_period: "month", "week" or "day".
        bucket_count: Number of periods, ending with the one containing today.
        today: Reference date.

    Returns:
        Buckets oldest to newest. Periods without records stay at 0.
    """
    freq = BUCKET_FREQUENCIES[bucket_period]
    periods = pd.period_range(end=pd.Period(today, freq=freq), periods=bucket_count, freq=freq)
    position = {period: i for i, period in enumerate(periods)}
    values = [0.0] * len(periods)

    for when, value in dated_values:
        if when is None:
            continue
        i = position.get(pd.Period(when, freq=freq))
        if i is not None:
            values[i] += value

    return tuple(
        SeriesBucket(
            label=_bucket_label(period, bucket_period),
            start=period.start_time.date(),
            end=period.end_time.date(),
            value=values[i],
        )
        for i, period in enumerate(periods)
    )


def aggregate(
    records: Sequence[Any],
    config: StatisticsConfig,
    today: Optional[date] = None,
) -> StatisticsResult:
    """
    Compute summary statistics for a collection of records.

    Args:
        records: Records to summarize (raw or filtered collection).
        config: Fields and windows to compute.
        today: Reference date for windows (date.today() if None).

    Returns:
        StatisticsResult. Empty input yields zero values and an all-zero
        series; missing numbers count as 0 and undated records are left out
        of date-based figures.
    """
    today = today or date.today()
    schema = config.schema
    records = list(records)
    count = len(records)

    frame = pd.DataFrame(
        {name: [schema.number(r, name) for r in records] for name in config.sum_fields},
        dtype="float64",
    )
    sums = {name: float(frame[name].sum()) for name in config.sum_fields}
    averages = {name: safe_average(sums[name], count) for name in config.sum_fields}

    dates: List[Optional[date]] = []
    if config.date_field is not None:
        dates = [schema.date(r, config.date_field) for r in records]
    present = [d for d in dates if d is not None]

    comparison = None
    if config.comparison is not None:
        cur_start, cur_end, prev_start, prev_end = comparison_windows(config.comparison, today)
        current_total = 0.0
        previous_total = 0.0
        for record, when in zip(records, dates):
            if when is None:
                continue
            amount = schema.number(record, config.comparison_field)
            if when >= cur_start and (cur_end is None or when <= cur_end):
                current_total += amount
            elif prev_start <= when <= prev_end:
                previous_total += amount
        comparison = PeriodComparison(
            period=config.comparison,
            field=config.comparison_field,
            current_start=cur_start,
            current_end=cur_end,
            previous_start=prev_start,
            previous_end=prev_end,
            current_total=current_total,
            previous_total=previous_total,
            change_percent=period_over_period_change(current_total, previous_total),
        )

    # Without a date field nothing can be bucketed, but the window is still
    # returned zero-filled
    if config.series_field is None:
        series_values = [1.0] * count
    else:
        series_values = [schema.number(r, config.series_field) for r in records]
    series = build_series(
        list(zip(dates, series_values)),
        config.bucket_period,
        config.bucket_count,
        today,
    )

    result = StatisticsResult(
        count=count,
        sums=sums,
        averages=averages,
        earliest=min(present) if present else None,
        latest=max(present) if present else None,
        average_days_between=average_days_between(present),
        comparison=comparison,
        series=series,
    )
    logger.debug(f"Aggregated {count} {schema.entity} records")
    return result


def breakdown(
    records: Iterable[Any],
    schema: RecordSchema,
    field_name: str,
    options: Optional[Mapping[str, str]] = None,
) -> List[Tuple[str, int]]:
    """
    Count records per value of a categorical field.

    Args:
        records: Records to count.
        schema: Field catalogue of the records.
        field_name: Categorical field to group by.
        options: Display labels for coded values (e.g. WORK_ORDER_STATUSES).

    Returns:
        (label, count) pairs sorted by count (highest first), then label.
        Missing values are grouped under "Uncategorized".
    """
    schema.field(field_name, FieldKind.CATEGORY)
    counts = Counter(
        get_option_label(options or {}, schema.value(r, field_name) or None)
        for r in records
    )
    return sorted(counts.items(), key=lambda item: (-item[1], str(item[0])))
