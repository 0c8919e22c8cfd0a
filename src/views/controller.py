"""List/filter controller.

Owns the raw collection of one list view and its filter state, and derives
the visible subset and statistics from them. Every mutation ends in a full
re-derivation, so the snapshot is always a function of (records, filters).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Tuple
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import ConfigurationError
from config.logging_config import get_logger
from src.analysis.statistics import StatisticsConfig, StatisticsResult, aggregate
from src.exceptions import UnknownFieldError
from src.filtering.filter_state import DATE_RANGE, SEARCH, FilterState
from src.filtering.predicate import filter_records, validate_filter_state
from src.filtering.presets import FilterPreset
from src.records.fields import FieldKind, RecordSchema
from src.views.context import ViewContext

logger = get_logger("controller")

STATISTICS_SCOPES = ("filtered", "all")

Listener = Callable[["ViewSnapshot"], None]


@dataclass(frozen=True)
class ViewSnapshot:
    """What the presentation layer renders for a list view."""

    entity: str
    records: Tuple[Any, ...]
    total_count: int
    filter_state: FilterState
    statistics: Optional[StatisticsResult]
    summary: str

    @property
    def visible_count(self) -> int:
        return len(self.records)

    @property
    def is_filtered(self) -> bool:
        return not self.filter_state.is_empty

    @property
    def active_filter_count(self) -> int:
        return self.filter_state.active_filter_count


class ListController:
    """Filter state and derived data for one list view."""

    def __init__(
        self,
        schema: RecordSchema,
        records: Iterable[Any] = (),
        statistics_config: Optional[StatisticsConfig] = None,
        statistics_scope: str = "filtered",
        context: Optional[ViewContext] = None,
        date_field: Optional[str] = None,
        initial_state: Optional[FilterState] = None,
    ):
        """
        Initialize the controller.

        Args:
            schema: Schema of the listed entity.
            records: Raw collection from the latest fetch.
            statistics_config: Statistics to derive (None for no statistics).
            statistics_scope: "filtered" to summarize the visible subset,
                "all" to summarize the whole collection.
            context: Configuration and clock (built from the environment if None).
            date_field: Field the date range applies to (schema default if None).
            initial_state: Filters to open the view with.

        Raises:
            ConfigurationError: If the scope or config does not fit the schema.
            UnknownFieldError: If initial_state filters on unknown fields.
        """
        if statistics_scope not in STATISTICS_SCOPES:
            raise ConfigurationError(
                f"statistics_scope must be one of {STATISTICS_SCOPES}, got '{statistics_scope}'"
            )
        if statistics_config is not None and statistics_config.schema.entity != schema.entity:
            raise ConfigurationError(
                f"Statistics for {statistics_config.schema.entity} cannot summarize {schema.entity}"
            )

        self.schema = schema
        self.statistics_config = statistics_config
        self.statistics_scope = statistics_scope
        self.context = context or ViewContext()
        self.date_field = date_field

        state = initial_state or FilterState()
        validate_filter_state(state, schema, date_field)

        self._records: List[Any] = list(records)
        self._state = state
        self._history: List[FilterState] = []
        self._listeners: List[Listener] = []
        self._visible: List[Any] = []
        self._statistics: Optional[StatisticsResult] = None
        self._recompute()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def records(self) -> List[Any]:
        """The raw collection."""
        return list(self._records)

    @property
    def visible_records(self) -> List[Any]:
        return list(self._visible)

    @property
    def filter_state(self) -> FilterState:
        return self._state

    @property
    def statistics(self) -> Optional[StatisticsResult]:
        return self._statistics

    @property
    def history(self) -> List[FilterState]:
        """Previous filter states, oldest first."""
        return list(self._history)

    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            entity=self.schema.entity,
            records=tuple(self._visible),
            total_count=len(self._records),
            filter_state=self._state,
            statistics=self._statistics,
            summary=self._state.get_summary(self.schema.labels()),
        )

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def set_records(self, records: Iterable[Any]) -> None:
        """Replace the raw collection with a new fetch; filters are kept."""
        self._records = list(records)
        self._recompute()

    def set_filter_field(self, dimension: str, value: Any) -> None:
        """
        Replace the criterion of one filter dimension.

        Args:
            dimension: "search", "date_range", or a categorical or numeric
                field of the schema.
            value: Search text; a DateRange or (start, end) pair; a value or
                collection of values; a NumericRange or (min, max) pair.
                None or an empty value clears the dimension.

        Raises:
            UnknownFieldError: If the dimension is not filterable.
        """
        if dimension == SEARCH:
            state = self._state.with_search(value)
        elif dimension == DATE_RANGE:
            state = self._state.with_date_range(value)
        elif self.schema.has_field(dimension, FieldKind.CATEGORY):
            state = self._state.with_selection(dimension, value)
        elif self.schema.has_field(dimension, FieldKind.NUMBER):
            state = self._state.with_numeric_range(dimension, value)
        else:
            raise UnknownFieldError(self.schema.entity, dimension, "filterable")
        self._apply_state(state)

    def toggle_filter_value(self, dimension: str, value: str) -> None:
        """Select a categorical value, or deselect it if already selected."""
        self.schema.field(dimension, FieldKind.CATEGORY)
        self._apply_state(self._state.toggle(dimension, value))

    def remove_filter_value(self, dimension: str, value: str) -> None:
        self.schema.field(dimension, FieldKind.CATEGORY)
        self._apply_state(self._state.remove(dimension, value))

    def reset_filters(self) -> None:
        """Clear every filter; the visible subset becomes the raw collection."""
        self._apply_state(FilterState())

    def apply_preset(self, preset: FilterPreset) -> None:
        """Replace the filter state with a preset's."""
        logger.debug(f"Applying {self.schema.entity} preset '{preset.name}'")
        self._apply_state(preset.state)

    def restore_previous_filters(self) -> bool:
        """
        Go back to the filter state before the last change.

        Returns:
            True if a previous state was restored, False if history is empty.
        """
        if not self._history:
            return False
        self._state = self._history.pop()
        self._recompute()
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after each recomputation.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def _apply_state(self, state: FilterState) -> None:
        validate_filter_state(state, self.schema, self.date_field)
        if state != self._state:
            self._remember(self._state)
        self._state = state
        self._recompute()

    def _remember(self, state: FilterState) -> None:
        if state.is_empty:
            return
        if self._history and self._history[-1] == state:
            return
        self._history.append(state)
        limit = max(0, self.context.history_limit)
        if len(self._history) > limit:
            del self._history[: len(self._history) - limit]

    def _recompute(self) -> None:
        self._visible = filter_records(self._records, self._state, self.schema, self.date_field)

        if self.statistics_config is None:
            self._statistics = None
        else:
            source = self._visible if self.statistics_scope == "filtered" else self._records
            self._statistics = aggregate(source, self.statistics_config, self.context.today())

        logger.debug(
            f"{self.schema.entity}: {len(self._visible)} of {len(self._records)} records visible "
            f"({self._state.active_filter_count} active filters)"
        )

        if self._listeners:
            snapshot = self.snapshot()
            for listener in list(self._listeners):
                listener(snapshot)
