"""YAML Configuration Loader for Shop Insights.

Loads and caches saved filter presets from YAML with fallback to built-in
defaults.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from functools import lru_cache
import yaml

from config.logging_config import get_logger

logger = get_logger("config_loader")

# Get config directory
CONFIG_DIR = Path(__file__).parent
DEFAULT_PRESETS_FILE = CONFIG_DIR / "presets.yaml"


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""

    pass


# Used when no presets file exists. Every entity keeps an "all" preset so a
# view can always fall back to an unfiltered list.
FALLBACK_PRESETS: Dict[str, Any] = {
    "presets": {
        "work_orders": {
            "all": {"name": "All Work Orders", "filters": {}, "is_default": True},
            "open": {
                "name": "Open Work",
                "filters": {"status": ["pending", "in_progress", "on_hold"]},
            },
        },
        "customers": {
            "all": {"name": "All Customers", "filters": {}, "is_default": True},
        },
        "inventory": {
            "all": {"name": "All Items", "filters": {}, "is_default": True},
        },
        "team": {
            "all": {"name": "Everyone", "filters": {}, "is_default": True},
        },
        "deliveries": {
            "all": {"name": "All Deliveries", "filters": {}, "is_default": True},
        },
        "payments": {
            "all": {"name": "All Payments", "filters": {}, "is_default": True},
        },
    }
}


def _load_yaml_file(filepath: Path) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filepath: Path of the YAML file

    Returns:
        Parsed YAML content as dictionary

    Raises:
        ConfigurationError: If file cannot be loaded
    """
    if not filepath.exists():
        raise FileNotFoundError(f"Configuration file not found: {filepath}")

    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Error parsing {filepath.name}: {e}")
    except IOError as e:
        raise ConfigurationError(f"Error reading {filepath.name}: {e}")

    if not isinstance(content, dict):
        raise ConfigurationError(f"{filepath.name} must contain a mapping at top level")
    return content


@lru_cache(maxsize=8)
def load_presets(filepath: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load the presets configuration.

    Args:
        filepath: Presets file to read (config/presets.yaml if None).

    Returns:
        Parsed presets document; built-in fallbacks if the file is missing.

    Raises:
        ConfigurationError: If the file exists but is malformed.
    """
    path = Path(filepath) if filepath else DEFAULT_PRESETS_FILE
    try:
        return _load_yaml_file(path)
    except FileNotFoundError:
        logger.info(f"No presets file at {path}, using built-in presets")
        return FALLBACK_PRESETS


def clear_config_cache() -> None:
    """Clear all cached configuration data."""
    load_presets.cache_clear()


def get_entity_presets(
    entity: str,
    filepath: Optional[Union[str, Path]] = None,
) -> Dict[str, Dict[str, Any]]:
    """Get raw preset definitions for one entity type."""
    presets = load_presets(filepath).get("presets", {})
    entity_presets = presets.get(entity, {})
    if not isinstance(entity_presets, dict):
        raise ConfigurationError(f"Presets for '{entity}' must be a mapping")
    return entity_presets


def get_preset_names(
    entity: str,
    filepath: Optional[Union[str, Path]] = None,
) -> List[str]:
    """Get list of preset display names for an entity."""
    return [
        p.get("name", key) for key, p in get_entity_presets(entity, filepath).items()
    ]
