"""Application settings and configuration."""

from pathlib import Path
from dataclasses import dataclass, field
from typing import Optional
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent


@dataclass
class StatisticsDefaults:
    """Default settings for derived statistics on list views."""

    bucket_count: int = field(
        default_factory=lambda: int(os.getenv("SHOP_STATS_BUCKET_COUNT", "12"))
    )
    bucket_period: str = field(
        default_factory=lambda: os.getenv("SHOP_STATS_BUCKET_PERIOD", "month")
    )
    comparison: Optional[str] = field(
        default_factory=lambda: os.getenv("SHOP_STATS_COMPARISON", "year") or None
    )


@dataclass
class DataSourceConfig:
    """Hosted row-storage service settings."""

    base_url: str = field(
        default_factory=lambda: os.getenv("SHOP_DATA_URL", "").rstrip("/")
    )
    api_key: Optional[str] = field(default_factory=lambda: os.getenv("SHOP_DATA_KEY"))
    timeout: int = field(
        default_factory=lambda: int(os.getenv("SHOP_DATA_TIMEOUT_SECONDS", "30"))
    )
    max_retries: int = field(
        default_factory=lambda: int(os.getenv("SHOP_DATA_MAX_RETRIES", "3"))
    )
    page_size: int = 1000

    @property
    def is_configured(self) -> bool:
        """Whether a remote endpoint has been set."""
        return bool(self.base_url)


@dataclass
class DataConfig:
    """Data paths configuration."""

    exports_path: Path = field(
        default_factory=lambda: Path(
            os.getenv("SHOP_EXPORTS_PATH", str(PROJECT_ROOT / "data" / "exports"))
        )
    )
    presets_file: Path = field(
        default_factory=lambda: Path(
            os.getenv("SHOP_PRESETS_FILE", str(PROJECT_ROOT / "config" / "presets.yaml"))
        )
    )


@dataclass
class AppConfig:
    """Application configuration settings."""

    name: str = field(default_factory=lambda: os.getenv("APP_NAME", "Shop Insights"))
    version: str = field(default_factory=lambda: os.getenv("APP_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    filter_history_limit: int = field(
        default_factory=lambda: int(os.getenv("FILTER_HISTORY_LIMIT", "10"))
    )


@dataclass
class Config:
    """Main configuration container."""

    app: AppConfig = field(default_factory=AppConfig)
    stats: StatisticsDefaults = field(default_factory=StatisticsDefaults)
    source: DataSourceConfig = field(default_factory=DataSourceConfig)
    data: DataConfig = field(default_factory=DataConfig)

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.data.exports_path.mkdir(parents=True, exist_ok=True)


def load_config() -> Config:
    """
    Build a configuration from the current environment.

    Call once at startup and pass the result down explicitly; nothing in
    the package reads configuration from module globals.

    Returns:
        A fresh Config instance.
    """
    return Config()
