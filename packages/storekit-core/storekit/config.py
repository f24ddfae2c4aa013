"""
Storekit Configuration

Loads settings from ~/.storekit/config.yaml with environment variable overrides.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional
import os
import logging

logger = logging.getLogger(__name__)

try:
    import yaml
    HAS_YAML = True
except ImportError:
    HAS_YAML = False

CONFIG_DIR = Path.home() / ".storekit"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

DEFAULT_SQLITE_PATH = "~/.storekit/storekit.db"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class DatabaseConfig:
    """Database configuration settings."""

    type: str = "sqlite"  # only "sqlite" is supported
    sqlite_path: str = DEFAULT_SQLITE_PATH


@dataclass
class LoggingConfig:
    """Statement logging settings."""

    level: str = "INFO"
    include_params: bool = True


@dataclass
class StorekitConfig:
    """
    Complete storekit configuration.

    Loaded from ~/.storekit/config.yaml with environment variable overrides.
    """

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def log_level(self) -> int:
        return getattr(logging, self.logging.level.upper(), logging.INFO)

    def to_dict(self) -> dict:
        """Convert to dictionary for display."""
        return asdict(self)


def _parse_bool(value, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _parse_database_config(data: dict) -> DatabaseConfig:
    """Parse database configuration from YAML data."""
    db_data = data.get("database", {})

    sqlite_config = db_data.get("sqlite", {})

    return DatabaseConfig(
        type=db_data.get("type", "sqlite"),
        sqlite_path=sqlite_config.get("path", DEFAULT_SQLITE_PATH),
    )


def _parse_logging_config(data: dict) -> LoggingConfig:
    """Parse logging configuration from YAML data."""
    logging_data = data.get("logging", {})

    level = str(logging_data.get("level", "INFO")).upper()
    if level not in LOG_LEVELS:
        logger.warning(f"Unknown log level {level}, using INFO")
        level = "INFO"

    return LoggingConfig(
        level=level,
        include_params=_parse_bool(logging_data.get("include_params"), True),
    )


def load_config(config_path: Optional[Path] = None) -> StorekitConfig:
    """
    Load configuration from file with environment variable overrides.

    Args:
        config_path: Optional path to config file. Defaults to ~/.storekit/config.yaml

    Returns:
        StorekitConfig instance
    """
    config_file = config_path or CONFIG_FILE
    config = StorekitConfig()

    if HAS_YAML and config_file.exists():
        try:
            with open(config_file, 'r') as f:
                data = yaml.safe_load(f) or {}

            config.database = _parse_database_config(data)
            config.logging = _parse_logging_config(data)

        except yaml.YAMLError as e:
            logger.warning(f"Could not parse config file at {config_file}: {e}")
        except Exception as e:
            logger.warning(f"Unexpected error loading config from {config_file}: {e}")

    # Environment variable overrides
    if os.environ.get("STOREKIT_DATABASE_PATH"):
        config.database.type = "sqlite"
        config.database.sqlite_path = os.environ["STOREKIT_DATABASE_PATH"]

    if os.environ.get("STOREKIT_LOG_LEVEL"):
        level = os.environ["STOREKIT_LOG_LEVEL"].upper()
        if level in LOG_LEVELS:
            config.logging.level = level

    if os.environ.get("STOREKIT_LOG_PARAMS"):
        config.logging.include_params = _parse_bool(os.environ["STOREKIT_LOG_PARAMS"], True)

    return config


def save_config(config: StorekitConfig, config_path: Optional[Path] = None) -> None:
    """
    Save configuration to file.

    Args:
        config: StorekitConfig instance to save
        config_path: Optional path to config file. Defaults to ~/.storekit/config.yaml
    """
    if not HAS_YAML:
        raise RuntimeError("PyYAML not installed. Run: pip install pyyaml")

    config_file = config_path or CONFIG_FILE

    config_file.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "database": {
            "type": config.database.type,
            "sqlite": {"path": config.database.sqlite_path},
        },
        "logging": {
            "level": config.logging.level,
            "include_params": config.logging.include_params,
        },
    }

    with open(config_file, 'w') as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    logger.info(f"Configuration saved to {config_file}")
