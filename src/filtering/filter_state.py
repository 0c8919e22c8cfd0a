"""Filter state for list views.

A FilterState is an immutable snapshot of what the user has selected. Empty
criteria never exclude records: an empty search term, an empty selection on
a categorical dimension and an absent date range all mean "show all".
"""

from dataclasses import dataclass, field, replace
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Union

from src.records.fields import coerce_date

SEARCH = "search"
DATE_RANGE = "date_range"


@dataclass(frozen=True)
class DateRange:
    """Inclusive date range; either bound may be open."""

    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_open(self) -> bool:
        """True when neither bound is set (no restriction)."""
        return self.start is None and self.end is None

    @property
    def is_inverted(self) -> bool:
        return self.start is not None and self.end is not None and self.start > self.end

    def contains(self, value: Optional[date]) -> bool:
        """Whether a date falls in the range. Missing dates never do."""
        if value is None or self.is_inverted:
            return False
        if self.start is not None and value < self.start:
            return False
        if self.end is not None and value > self.end:
            return False
        return True

    @classmethod
    def from_value(cls, value: Any) -> Optional["DateRange"]:
        """
        Build a range from a DateRange, (start, end) pair or mapping.

        Returns:
            DateRange, or None when the value sets no bound.
        """
        if value is None:
            return None
        if isinstance(value, DateRange):
            result = value
        elif isinstance(value, Mapping):
            result = cls(
                coerce_date(value.get("start", value.get("from"))),
                coerce_date(value.get("end", value.get("to"))),
            )
        elif isinstance(value, (tuple, list)) and len(value) == 2:
            result = cls(coerce_date(value[0]), coerce_date(value[1]))
        else:
            raise TypeError(f"Cannot build a date range from {value!r}")
        return None if result.is_open else result


@dataclass(frozen=True)
class NumericRange:
    """Inclusive numeric range; either bound may be open."""

    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.minimum is None and self.maximum is None

    @property
    def is_inverted(self) -> bool:
        return (
            self.minimum is not None
            and self.maximum is not None
            and self.minimum > self.maximum
        )

    def contains(self, value: float) -> bool:
        if self.is_inverted:
            return False
        if self.minimum is not None and value < self.minimum:
            return False
        if self.maximum is not None and value > self.maximum:
            return False
        return True

    @classmethod
    def from_value(cls, value: Any) -> Optional["NumericRange"]:
        if value is None:
            return None
        if isinstance(value, NumericRange):
            result = value
        elif isinstance(value, (tuple, list)) and len(value) == 2:
            result = cls(
                None if value[0] is None else float(value[0]),
                None if value[1] is None else float(value[1]),
            )
        else:
            raise TypeError(f"Cannot build a numeric range from {value!r}")
        return None if result.is_open else result


def _normalize_selection(values: Union[None, str, Iterable[str]]) -> FrozenSet[str]:
    if values is None:
        return frozenset()
    if isinstance(values, str):
        return frozenset([values])
    return frozenset(values)


@dataclass(frozen=True)
class FilterState:
    """Current filter criteria for one list view."""

    search: str = ""
    categories: Mapping[str, FrozenSet[str]] = field(default_factory=dict)
    date_range: Optional[DateRange] = None
    numeric_ranges: Mapping[str, NumericRange] = field(default_factory=dict)

    def __post_init__(self):
        # Cleared dimensions are dropped so a reset state equals the default
        object.__setattr__(self, "search", self.search or "")
        object.__setattr__(self, "categories", MappingProxyType({
            name: _normalize_selection(values)
            for name, values in self.categories.items()
            if values
        }))
        if self.date_range is not None and self.date_range.is_open:
            object.__setattr__(self, "date_range", None)
        object.__setattr__(self, "numeric_ranges", MappingProxyType({
            name: rng
            for name, rng in self.numeric_ranges.items()
            if rng is not None and not rng.is_open
        }))

    def __hash__(self):
        return hash((
            self.search,
            frozenset(self.categories.items()),
            self.date_range,
            frozenset(self.numeric_ranges.items()),
        ))

    @property
    def search_term(self) -> str:
        """The search text as it is matched (trimmed)."""
        return self.search.strip()

    @property
    def is_empty(self) -> bool:
        """Check if all filters are empty (showing all data)."""
        return (
            not self.search_term
            and not self.categories
            and self.date_range is None
            and not self.numeric_ranges
        )

    @property
    def active_filter_count(self) -> int:
        """Count of active filter dimensions."""
        count = 0
        if self.search_term:
            count += 1
        count += len(self.categories)
        if self.date_range is not None:
            count += 1
        count += len(self.numeric_ranges)
        return count

    def selected(self, dimension: str) -> FrozenSet[str]:
        """Selected values for a categorical dimension (empty = all)."""
        return self.categories.get(dimension, frozenset())

    def with_search(self, text: Optional[str]) -> "FilterState":
        return replace(self, search=text or "")

    def with_selection(
        self,
        dimension: str,
        values: Union[None, str, Iterable[str]],
    ) -> "FilterState":
        categories = dict(self.categories)
        categories[dimension] = _normalize_selection(values)
        return replace(self, categories=categories)

    def with_date_range(self, value: Any) -> "FilterState":
        return replace(self, date_range=DateRange.from_value(value))

    def with_numeric_range(self, dimension: str, value: Any) -> "FilterState":
        ranges = dict(self.numeric_ranges)
        ranges[dimension] = NumericRange.from_value(value)
        return replace(self, numeric_ranges=ranges)

    def toggle(self, dimension: str, value: str) -> "FilterState":
        """Add a value to a selection, or remove it if already selected."""
        current = self.selected(dimension)
        if value in current:
            return self.with_selection(dimension, current - {value})
        return self.with_selection(dimension, current | {value})

    def remove(self, dimension: str, value: str) -> "FilterState":
        return self.with_selection(dimension, self.selected(dimension) - {value})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for storage."""
        return {
            "search": self.search,
            "categories": {
                name: sorted(values) for name, values in sorted(self.categories.items())
            },
            "date_start": (
                self.date_range.start.isoformat()
                if self.date_range and self.date_range.start else None
            ),
            "date_end": (
                self.date_range.end.isoformat()
                if self.date_range and self.date_range.end else None
            ),
            "numeric_ranges": {
                name: [rng.minimum, rng.maximum]
                for name, rng in sorted(self.numeric_ranges.items())
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FilterState":
        """Create from dictionary."""
        return cls(
            search=data.get("search", ""),
            categories=data.get("categories", {}),
            date_range=DateRange.from_value(
                (data.get("date_start"), data.get("date_end"))
            ),
            numeric_ranges={
                name: NumericRange.from_value(tuple(bounds))
                for name, bounds in data.get("numeric_ranges", {}).items()
            },
        )

    def merge(self, other: "FilterState", override: bool = True) -> "FilterState":
        """
        Merge another filter state into this one.

        Args:
            other: FilterState to merge in.
            override: If True, non-empty values from other override this.
                      If False, only fill in empty values.

        Returns:
            A new merged FilterState.
        """
        first, second = (other, self) if override else (self, other)
        categories = dict(second.categories)
        categories.update(first.categories)
        ranges = dict(second.numeric_ranges)
        ranges.update(first.numeric_ranges)
        return FilterState(
            search=first.search if first.search_term else second.search,
            categories=categories,
            date_range=first.date_range or second.date_range,
            numeric_ranges=ranges,
        )

    def get_summary(self, labels: Optional[Mapping[str, str]] = None) -> str:
        """Get a human-readable summary of active filters."""
        labels = labels or {}
        parts = []

        if self.search_term:
            parts.append(f'Search: "{self.search_term}"')

        for name, values in sorted(self.categories.items()):
            label = labels.get(name, name.replace("_", " ").title())
            if len(values) <= 3:
                parts.append(f"{label}: {', '.join(sorted(values))}")
            else:
                parts.append(f"{label}: {len(values)} selected")

        if self.date_range is not None:
            start_str = self.date_range.start.isoformat() if self.date_range.start else "..."
            end_str = self.date_range.end.isoformat() if self.date_range.end else "..."
            parts.append(f"Dates: {start_str} to {end_str}")

        for name, rng in sorted(self.numeric_ranges.items()):
            label = labels.get(name, name.replace("_", " ").title())
            low = "..." if rng.minimum is None else f"{rng.minimum:g}"
            high = "..." if rng.maximum is None else f"{rng.maximum:g}"
            parts.append(f"{label}: {low} to {high}")

        return " | ".join(parts) if parts else "All records (no filters)"

    def to_url_params(self) -> Dict[str, str]:
        """
        Convert filter state to URL-friendly parameters.

        Returns:
            Dict of parameter name to string value.
        """
        params = {}

        if self.search_term:
            params["q"] = self.search_term
        for name, values in sorted(self.categories.items()):
            params[f"f.{name}"] = ",".join(sorted(values))
        if self.date_range is not None:
            if self.date_range.start:
                params["start"] = self.date_range.start.isoformat()
            if self.date_range.end:
                params["end"] = self.date_range.end.isoformat()
        for name, rng in sorted(self.numeric_ranges.items()):
            low = "" if rng.minimum is None else f"{rng.minimum:g}"
            high = "" if rng.maximum is None else f"{rng.maximum:g}"
            params[f"n.{name}"] = f"{low}:{high}"

        return params

    @classmethod
    def from_url_params(cls, params: Dict[str, Any]) -> "FilterState":
        """
        Create filter state from URL parameters.

        Malformed values are ignored rather than rejected, so a stale or
        hand-edited link still opens the view.

        Args:
            params: Dict of URL parameters.

        Returns:
            FilterState populated from parameters.
        """
        def first(value):
            return value[0] if isinstance(value, list) else value

        search = first(params.get("q", "")) or ""
        categories = {}
        ranges = {}

        for key, raw in params.items():
            value = first(raw)
            if not isinstance(value, str):
                continue
            if key.startswith("f."):
                categories[key[2:]] = [v for v in value.split(",") if v]
            elif key.startswith("n."):
                low, sep, high = value.partition(":")
                if not sep:
                    continue
                try:
                    ranges[key[2:]] = NumericRange(
                        float(low) if low else None,
                        float(high) if high else None,
                    )
                except ValueError:
                    continue

        start = coerce_date(first(params.get("start")))
        end = coerce_date(first(params.get("end")))

        return cls(
            search=search,
            categories=categories,
            date_range=DateRange(start, end),
            numeric_ranges=ranges,
        )

