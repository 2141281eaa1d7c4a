"""Configuration management for the price chart service."""

import os
import tomllib
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from mcflation.core.exceptions import ConfigurationError
from mcflation.core.models.series import ChartKind, SeriesMode

DEFAULT_CONFIG_PATH = Path.home() / ".mcflation" / "config.toml"


@dataclass
class ServerConfig:
    """HTTP server configuration"""

    host: str = "0.0.0.0"
    port: int = 3000
    reload: bool = False
    allowed_origins: list[str] = field(default_factory=list)


@dataclass
class DataConfig:
    """Dataset and chart configuration"""

    csv_path: str | None = None
    series_mode: str = SeriesMode.GAP_PRESERVING.value
    chart_kind: str = ChartKind.LINE.value
    include_hover_proxy: bool = True
    fill_years: bool = False

    def __post_init__(self) -> None:
        try:
            SeriesMode(self.series_mode)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown series mode '{self.series_mode}'", key="data.series_mode") from exc
        try:
            ChartKind(self.chart_kind)
        except ValueError as exc:
            raise ConfigurationError(f"Unknown chart kind '{self.chart_kind}'", key="data.chart_kind") from exc


@dataclass
class LoggingConfig:
    """Logging configuration"""

    level: str = "INFO"
    format: str = "json"
    file: str | None = None


@dataclass
class AppConfig:
    """Main application configuration"""

    server: ServerConfig = field(default_factory=ServerConfig)
    data: DataConfig = field(default_factory=DataConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "AppConfig":
        """Build a configuration from a nested dictionary"""
        return cls(
            server=ServerConfig(**config_dict.get("server", {})),
            data=DataConfig(**config_dict.get("data", {})),
            logging=LoggingConfig(**config_dict.get("logging", {})),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a nested dictionary"""
        return {
            "server": asdict(self.server),
            "data": asdict(self.data),
            "logging": asdict(self.logging),
        }


class ConfigManager:
    """Loads configuration from a TOML file and applies environment overrides."""

    def __init__(self, config_path: Path | None = None, *, use_env: bool = True):
        """Initialise the manager.

        Args:
            config_path: TOML file path; defaults to ``~/.mcflation/config.toml``
            use_env: apply ``MCFLATION_*`` environment overrides on top of the file
        """
        self.config_path = config_path or DEFAULT_CONFIG_PATH
        self.use_env = use_env
        self.config = self._load_config()

    def _load_config(self) -> AppConfig:
        config_dict: dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path, "rb") as f:
                    config_dict = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                # A broken file falls back to defaults
                logger.warning(f"Failed to load config from {self.config_path}: {e}")
                config_dict = {}

        if self.use_env:
            _deep_update(config_dict, load_config_from_env())
        return AppConfig.from_dict(config_dict)

    def get_config(self) -> AppConfig:
        """Return the current configuration"""
        return self.config

    def update_config(self, **updates: Any) -> None:
        """Apply nested updates to the configuration"""
        config_dict = self.config.to_dict()
        _deep_update(config_dict, updates)
        self.config = AppConfig.from_dict(config_dict)


def _deep_update(d: dict[str, Any], u: dict[str, Any]) -> dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict):
            d[k] = _deep_update(d.get(k, {}), v)
        else:
            d[k] = v
    return d


def get_default_config() -> AppConfig:
    """Return the default configuration"""
    return AppConfig()


def load_config_from_env() -> dict[str, Any]:
    """Collect configuration overrides from environment variables"""
    config: dict[str, Any] = {}

    server_config: dict[str, Any] = {}
    mcflation_host = os.getenv("MCFLATION_HOST")
    if mcflation_host is not None:
        server_config["host"] = mcflation_host
    port = os.getenv("PORT")
    if port is not None:
        try:
            server_config["port"] = int(port)
        except ValueError as exc:
            raise ConfigurationError(f"PORT must be an integer, got '{port}'", key="server.port") from exc
    mcflation_reload = os.getenv("MCFLATION_RELOAD")
    if mcflation_reload is not None:
        server_config["reload"] = mcflation_reload.lower() == "true"
    mcflation_allowed_origins = os.getenv("MCFLATION_ALLOWED_ORIGINS")
    if mcflation_allowed_origins is not None:
        server_config["allowed_origins"] = [
            origin.strip() for origin in mcflation_allowed_origins.split(",") if origin.strip()
        ]

    if server_config:
        config["server"] = server_config

    data_config: dict[str, Any] = {}
    mcflation_csv_path = os.getenv("MCFLATION_CSV_PATH")
    if mcflation_csv_path:
        data_config["csv_path"] = mcflation_csv_path
    mcflation_series_mode = os.getenv("MCFLATION_SERIES_MODE")
    if mcflation_series_mode is not None:
        data_config["series_mode"] = mcflation_series_mode.strip().lower()

    if data_config:
        config["data"] = data_config

    logging_config: dict[str, Any] = {}
    mcflation_logging_level = os.getenv("MCFLATION_LOGGING_LEVEL")
    if mcflation_logging_level is not None:
        logging_config["level"] = mcflation_logging_level
    mcflation_logging_file = os.getenv("MCFLATION_LOGGING_FILE")
    if mcflation_logging_file is not None:
        logging_config["file"] = mcflation_logging_file

    if logging_config:
        config["logging"] = logging_config

    return config
