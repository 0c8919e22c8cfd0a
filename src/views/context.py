"""Context passed explicitly to list views."""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Callable
import sys

PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config.settings import Config, load_config
from src.analysis.statistics import StatisticsConfig
from src.records.fields import RecordSchema


@dataclass
class ViewContext:
    """
    Configuration and clock shared by the list views of one session.

    Attributes:
        config: Application configuration (built from the environment if not given).
        today_provider: Source of the reference date for relative windows.
    """

    config: Config = field(default_factory=load_config)
    today_provider: Callable[[], date] = date.today

    def today(self) -> date:
        return self.today_provider()

    @property
    def history_limit(self) -> int:
        return self.config.app.filter_history_limit

    def statistics_config(self, schema: RecordSchema, **overrides: Any) -> StatisticsConfig:
        """Statistics config for a schema from the configured defaults."""
        return StatisticsConfig.from_defaults(schema, self.config.stats, **overrides)
