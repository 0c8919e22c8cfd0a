"""Configuration module for Shop Insights.

All filter defaults are empty: a list view shows every record until the user
narrows it.
"""

from .settings import (
    Config,
    AppConfig,
    StatisticsDefaults,
    DataSourceConfig,
    DataConfig,
    load_config,
)
from .constants import (
    WORK_ORDER_STATUSES,
    WORK_ORDER_PRIORITIES,
    WORK_ORDER_CATEGORIES,
    INVENTORY_STATUSES,
    PAYMENT_METHODS,
    PAYMENT_STATUSES,
    HIGH_VALUE_THRESHOLD,
    INSIGHT_TOP_N,
    UNCATEGORIZED_LABEL,
    EMPTY_DISPLAY,
    DATE_PRESETS,
    resolve_date_preset,
    get_option_label,
)
from .config_loader import (
    ConfigurationError,
    load_presets,
    clear_config_cache,
    get_entity_presets,
    get_preset_names,
)

__all__ = [
    # Settings
    "Config",
    "AppConfig",
    "StatisticsDefaults",
    "DataSourceConfig",
    "DataConfig",
    "load_config",
    # Constants
    "WORK_ORDER_STATUSES",
    "WORK_ORDER_PRIORITIES",
    "WORK_ORDER_CATEGORIES",
    "INVENTORY_STATUSES",
    "PAYMENT_METHODS",
    "PAYMENT_STATUSES",
    "HIGH_VALUE_THRESHOLD",
    "INSIGHT_TOP_N",
    "UNCATEGORIZED_LABEL",
    "EMPTY_DISPLAY",
    "DATE_PRESETS",
    "resolve_date_preset",
    "get_option_label",
    # YAML loader
    "ConfigurationError",
    "load_presets",
    "clear_config_cache",
    "get_entity_presets",
    "get_preset_names",
]
