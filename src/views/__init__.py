"""List view controllers and their wiring."""

from .context import ViewContext
from .controller import STATISTICS_SCOPES, ListController, ViewSnapshot
from .registry import VIEW_STATISTICS, create_controller, default_statistics_config

__all__ = [
    "ViewContext",
    "STATISTICS_SCOPES",
    "ListController",
    "ViewSnapshot",
    "VIEW_STATISTICS",
    "create_controller",
    "default_statistics_config",
]
