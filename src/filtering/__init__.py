"""Filter state, record matching and saved presets for list views."""

from .filter_state import (
    SEARCH,
    DATE_RANGE,
    DateRange,
    NumericRange,
    FilterState,
)
from .predicate import (
    matches,
    filter_records,
    validate_filter_state,
    resolve_date_field,
)
from .presets import (
    FilterPreset,
    PresetCatalog,
    preset_from_definition,
)

__all__ = [
    # State
    "SEARCH",
    "DATE_RANGE",
    "DateRange",
    "NumericRange",
    "FilterState",
    # Matching
    "matches",
    "filter_records",
    "validate_filter_state",
    "resolve_date_field",
    # Presets
    "FilterPreset",
    "PresetCatalog",
    "preset_from_definition",
]
