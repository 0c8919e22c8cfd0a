"""Saved filter presets for list views."""

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import ConfigurationError, get_entity_presets
from config.constants import DATE_PRESETS, resolve_date_preset
from config.logging_config import get_logger
from src.filtering.filter_state import DateRange, FilterState
from src.filtering.predicate import validate_filter_state
from src.records.fields import RecordSchema, coerce_date

logger = get_logger("presets")


@dataclass(frozen=True)
class FilterPreset:
    """A named, saved filter configuration."""

    key: str
    name: str
    state: FilterState
    is_default: bool = False


def preset_from_definition(
    key: str,
    definition: Mapping[str, Any],
    schema: RecordSchema,
    today: Optional[date] = None,
) -> FilterPreset:
    """
    Build a preset from its YAML definition.

    Args:
        key: Preset key.
        definition: Mapping with "name", "filters" and optional "is_default".
        schema: Schema the preset's dimensions must exist in.
        today: Reference date for relative date presets.

    Raises:
        ConfigurationError: If the definition is malformed.
        UnknownFieldError: If it filters on a field the schema lacks.
    """
    if not isinstance(definition, Mapping):
        raise ConfigurationError(f"Preset '{key}' must be a mapping")

    filters = dict(definition.get("filters") or {})
    search = filters.pop("search", "") or ""
    date_preset = filters.pop("date_preset", None)
    date_start = coerce_date(filters.pop("date_start", None))
    date_end = coerce_date(filters.pop("date_end", None))

    if date_preset is not None:
        if date_preset not in DATE_PRESETS:
            raise ConfigurationError(
                f"Preset '{key}' uses unknown date preset '{date_preset}'"
            )
        date_start, date_end = resolve_date_preset(date_preset, today)

    categories = {}
    for name, values in filters.items():
        if isinstance(values, str):
            values = [values]
        if not isinstance(values, list):
            raise ConfigurationError(f"Preset '{key}': '{name}' must be a list of values")
        categories[name] = [str(v) for v in values]

    state = FilterState(
        search=search,
        categories=categories,
        date_range=DateRange(date_start, date_end),
    )
    validate_filter_state(state, schema)

    return FilterPreset(
        key=key,
        name=definition.get("name", key),
        state=state,
        is_default=bool(definition.get("is_default", False)),
    )


class PresetCatalog:
    """Presets available to one list view: configured ones plus user-saved."""

    def __init__(
        self,
        schema: RecordSchema,
        filepath: Optional[Union[str, Path]] = None,
        today_provider: Callable[[], date] = date.today,
    ):
        """
        Initialize the catalog.

        Args:
            schema: Schema of the list view's entity.
            filepath: Presets YAML file (config/presets.yaml if None).
            today_provider: Source of "today" for relative date presets.
        """
        self.schema = schema
        self.filepath = filepath
        self._today = today_provider
        self._saved: Dict[str, FilterPreset] = {}

    def _configured(self) -> Dict[str, FilterPreset]:
        definitions = get_entity_presets(self.schema.entity, self.filepath)
        today = self._today()
        return {
            key: preset_from_definition(key, definition, self.schema, today)
            for key, definition in definitions.items()
        }

    def all(self) -> Dict[str, FilterPreset]:
        """All presets, configured first, then user-saved."""
        presets = self._configured()
        presets.update(self._saved)
        return presets

    def names(self) -> List[str]:
        return [p.name for p in self.all().values()]

    def get(self, key: str) -> Optional[FilterPreset]:
        return self.all().get(key)

    def default(self) -> Optional[FilterPreset]:
        """The preset marked as default, else the first one."""
        presets = self.all()
        for preset in presets.values():
            if preset.is_default:
                return preset
        return next(iter(presets.values()), None)

    def save(self, key: str, name: str, state: FilterState) -> FilterPreset:
        """
        Save a filter state as a preset.

        Raises:
            ConfigurationError: If the key belongs to a configured preset.
        """
        if key in self._configured():
            raise ConfigurationError(f"Cannot overwrite configured preset '{key}'")
        validate_filter_state(state, self.schema)
        preset = FilterPreset(key=key, name=name, state=state)
        self._saved[key] = preset
        logger.info(f"Saved {self.schema.entity} preset '{name}'")
        return preset

    def delete(self, key: str) -> bool:
        """
        Delete a saved preset.

        Returns:
            True if deleted, False if the preset is configured or unknown.
        """
        if key in self._saved:
            del self._saved[key]
            return True
        return False
