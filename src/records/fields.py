"""Typed field access for domain records.

Every list view works against a RecordSchema: the set of fields it may
search, filter, sum or bucket, each with an accessor function. Accessors
never raise for missing data; they return None and the coercion helpers
below decide what None means for each kind of field.
"""

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

from src.exceptions import UnknownFieldError

Accessor = Callable[[Any], Any]


class FieldKind(Enum):
    """What a field holds, which decides how filters and statistics use it."""
    TEXT = "text"
    CATEGORY = "category"
    DATE = "date"
    NUMBER = "number"


def attr(*path: str) -> Accessor:
    """
    Build an accessor that walks attributes or mapping keys.

    Works for dataclass entities and raw row dictionaries alike. Any missing
    link along the path yields None.

    Args:
        *path: Attribute / key names, outermost first.

    Returns:
        Accessor function.
    """
    def accessor(record: Any) -> Any:
        value = record
        for key in path:
            if value is None:
                return None
            if isinstance(value, Mapping):
                value = value.get(key)
            else:
                value = getattr(value, key, None)
        return value

    accessor.__name__ = "attr_" + "_".join(path)
    return accessor


def joined(*accessors: Accessor, sep: str = " ") -> Accessor:
    """Accessor joining the non-empty string values of other accessors."""
    def accessor(record: Any) -> Optional[str]:
        values = [a(record) for a in accessors]
        parts = [str(v) for v in values if v not in (None, "")]
        return sep.join(parts) if parts else None

    return accessor


def product(*accessors: Accessor) -> Accessor:
    """Accessor multiplying numeric values; missing factors count as 0."""
    def accessor(record: Any) -> float:
        result = 1.0
        for a in accessors:
            result *= coerce_number(a(record))
        return result

    return accessor


def humanize_field_name(name: str) -> str:
    """Turn 'gallons_delivered' into 'Gallons Delivered'."""
    return name.replace("_", " ").strip().title()


def coerce_number(value: Any) -> float:
    """Numeric value of a field; None, NaN and unparseable values are 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
        return 0.0 if math.isnan(number) else number
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
        return 0.0 if math.isnan(number) else number
    return 0.0


def coerce_date(value: Any) -> Optional[date]:
    """Calendar date of a field; None for missing or unparseable values."""
    # NaN and NaT are the only values not equal to themselves
    if value is None or value != value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


def coerce_text(value: Any) -> Optional[str]:
    """String form of a field for searching; None stays None."""
    if value is None:
        return None
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class FieldSpec:
    """A named, typed field of a record schema."""

    name: str
    kind: FieldKind
    accessor: Accessor
    label: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label or humanize_field_name(self.name)


def text(name: str, accessor: Optional[Accessor] = None, label: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, FieldKind.TEXT, accessor or attr(name), label)


def category(name: str, accessor: Optional[Accessor] = None, label: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, FieldKind.CATEGORY, accessor or attr(name), label)


def date_field(name: str, accessor: Optional[Accessor] = None, label: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, FieldKind.DATE, accessor or attr(name), label)


def number(name: str, accessor: Optional[Accessor] = None, label: Optional[str] = None) -> FieldSpec:
    return FieldSpec(name, FieldKind.NUMBER, accessor or attr(name), label)


@dataclass(frozen=True)
class RecordSchema:
    """
    Field catalogue for one entity type.

    Attributes:
        entity: Entity type name (e.g. "work_orders").
        fields: All fields a list view may reference.
        search_fields: Ordered fields tested by free-text search.
        date_field: Default date field for date-range filters and statistics.
    """

    entity: str
    fields: Tuple[FieldSpec, ...]
    search_fields: Tuple[str, ...] = ()
    date_field: Optional[str] = None
    _index: Dict[str, FieldSpec] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        object.__setattr__(self, "_index", {spec.name: spec for spec in self.fields})
        for name in self.search_fields:
            self.field(name)
        if self.date_field is not None:
            self.field(self.date_field, FieldKind.DATE)

    def field(self, name: str, kind: Optional[FieldKind] = None) -> FieldSpec:
        """
        Look up a field by name.

        Raises:
            UnknownFieldError: If the field does not exist, or is not of
                the requested kind.
        """
        spec = self._index.get(name)
        if spec is None:
            raise UnknownFieldError(self.entity, name)
        if kind is not None and spec.kind is not kind:
            raise UnknownFieldError(self.entity, name, kind.value)
        return spec

    def has_field(self, name: str, kind: Optional[FieldKind] = None) -> bool:
        spec = self._index.get(name)
        return spec is not None and (kind is None or spec.kind is kind)

    def names(self, kind: Optional[FieldKind] = None) -> Tuple[str, ...]:
        """Field names in declaration order, optionally of one kind."""
        return tuple(s.name for s in self.fields if kind is None or s.kind is kind)

    def value(self, record: Any, name: str) -> Any:
        return self.field(name).accessor(record)

    def number(self, record: Any, name: str) -> float:
        return coerce_number(self.field(name, FieldKind.NUMBER).accessor(record))

    def date(self, record: Any, name: str) -> Optional[date]:
        return coerce_date(self.field(name, FieldKind.DATE).accessor(record))

    def text(self, record: Any, name: str) -> Optional[str]:
        return coerce_text(self.field(name).accessor(record))

    def labels(self, names: Optional[Iterable[str]] = None) -> Dict[str, str]:
        """Display labels keyed by field name."""
        selected = names if names is not None else self.names()
        return {name: self.field(name).display_label for name in selected}
