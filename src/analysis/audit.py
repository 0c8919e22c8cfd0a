"""Human-readable change descriptions for audit log entries."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.constants import EMPTY_DISPLAY
from src.records.fields import humanize_field_name


def _normalize(value: Any) -> Any:
    """Comparable form of a field value."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float, Decimal)):
        return float(value)
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return value


def format_value(value: Any) -> str:
    """Display form of a field value."""
    value = _normalize(value)
    if value is None:
        return EMPTY_DISPLAY
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float):
        return f"{value:g}" if value.is_integer() else f"{value:,.2f}"
    return str(value)


@dataclass(frozen=True)
class FieldChange:
    """One field that differs between two versions of a record."""

    field: str
    label: str
    previous: Any
    new: Any

    def describe(self) -> str:
        return f"{self.label} changed from {format_value(self.previous)} to {format_value(self.new)}"


def diff_records(
    previous: Mapping[str, Any],
    new: Mapping[str, Any],
    labels: Optional[Mapping[str, str]] = None,
    fields: Optional[Iterable[str]] = None,
) -> List[FieldChange]:
    """
    Compare two flat records field by field.

    Args:
        previous: Values before the edit.
        new: Values after the edit.
        labels: Display labels by field name.
        fields: Fields to compare (all keys of both records if None, in the
            order they first appear).

    Returns:
        One FieldChange per differing field. A field missing from one side
        is treated as empty; 100 and 100.0 are equal, as are None and "".
    """
    labels = labels or {}
    if fields is None:
        names = list(previous)
        names.extend(k for k in new if k not in previous)
    else:
        names = list(fields)

    changes = []
    for name in names:
        before = previous.get(name)
        after = new.get(name)
        if _normalize(before) == _normalize(after):
            continue
        changes.append(FieldChange(
            field=name,
            label=labels.get(name, humanize_field_name(name)),
            previous=before,
            new=after,
        ))
    return changes


def describe_changes(
    previous: Mapping[str, Any],
    new: Mapping[str, Any],
    labels: Optional[Mapping[str, str]] = None,
) -> List[str]:
    """Change descriptions for an audit log entry, in field order."""
    return [change.describe() for change in diff_records(previous, new, labels)]
