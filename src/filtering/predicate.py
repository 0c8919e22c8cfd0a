"""Decide whether a record belongs to the visible subset of a list view."""

from collections.abc import Hashable
from typing import Any, Iterable, List, Optional

from src.exceptions import UnknownFieldError
from src.filtering.filter_state import FilterState
from src.records.fields import FieldKind, RecordSchema


def resolve_date_field(schema: RecordSchema, date_field: Optional[str] = None) -> Optional[str]:
    """The date field a date-range filter applies to."""
    name = date_field or schema.date_field
    if name is not None:
        schema.field(name, FieldKind.DATE)
    return name


def validate_filter_state(
    state: FilterState,
    schema: RecordSchema,
    date_field: Optional[str] = None,
) -> None:
    """
    Check that every dimension a state restricts exists in the schema.

    Raises:
        UnknownFieldError: If a dimension names a missing field, a field of
            the wrong kind, or a date range is set on a schema without a
            date field.
    """
    for name in state.categories:
        schema.field(name, FieldKind.CATEGORY)
    for name in state.numeric_ranges:
        schema.field(name, FieldKind.NUMBER)
    if state.date_range is not None:
        if resolve_date_field(schema, date_field) is None:
            raise UnknownFieldError(schema.entity, "date_range", FieldKind.DATE.value)


def matches_search(record: Any, term: str, schema: RecordSchema) -> bool:
    """Case-insensitive substring test over the schema's search fields."""
    term = term.strip().casefold()
    if not term:
        return True
    for name in schema.search_fields:
        value = schema.text(record, name)
        if value is not None and term in value.casefold():
            return True
    return False


def matches_categories(record: Any, state: FilterState, schema: RecordSchema) -> bool:
    for name, selected in state.categories.items():
        value = schema.value(record, name)
        # List or JSON columns can never equal a selected option
        if not isinstance(value, Hashable) or value not in selected:
            return False
    return True


def matches_date_range(
    record: Any,
    state: FilterState,
    schema: RecordSchema,
    date_field: Optional[str] = None,
) -> bool:
    if state.date_range is None:
        return True
    name = resolve_date_field(schema, date_field)
    return state.date_range.contains(schema.date(record, name))


def matches_numeric_ranges(record: Any, state: FilterState, schema: RecordSchema) -> bool:
    for name, rng in state.numeric_ranges.items():
        if not rng.contains(schema.number(record, name)):
            return False
    return True


def _matches(record, state, schema, date_field) -> bool:
    return (
        matches_search(record, state.search, schema)
        and matches_categories(record, state, schema)
        and matches_date_range(record, state, schema, date_field)
        and matches_numeric_ranges(record, state, schema)
    )


def matches(
    record: Any,
    state: FilterState,
    schema: RecordSchema,
    date_field: Optional[str] = None,
) -> bool:
    """
    Whether a record satisfies every active criterion of a filter state.

    Args:
        record: Entity or row mapping.
        state: Current filter criteria.
        schema: Field catalogue for the record's entity type.
        date_field: Date field for the date range (schema default if None).

    Returns:
        True if the record passes search, categorical, date and numeric
        criteria. Missing values never raise; they simply fail any active
        criterion on that field (numbers count as 0).
    """
    validate_filter_state(state, schema, date_field)
    return _matches(record, state, schema, date_field)


def filter_records(
    records: Iterable[Any],
    state: FilterState,
    schema: RecordSchema,
    date_field: Optional[str] = None,
) -> List[Any]:
    """Records that match a filter state, in their original order."""
    validate_filter_state(state, schema, date_field)
    if state.is_empty:
        return list(records)
    return [r for r in records if _matches(r, state, schema, date_field)]
