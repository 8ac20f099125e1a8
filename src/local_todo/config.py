"""Configuration management for the LocalTodo application."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional
import yaml


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("~/.local_todo/config.yaml")
DB_ENV_VAR = "LOCAL_TODO_DB"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or parsed."""


@dataclass
class ConfigModel:
    """Global configuration model for LocalTodo."""

    # Data file, relative paths resolve against the working directory
    db_path: str = "./db.json"

    # Logging
    log_level: str = "WARNING"

    # Output
    json_indent: Optional[int] = None  # None writes compact JSON
    use_color: bool = True

    def __post_init__(self):
        """Post-initialization setup."""
        self.db_path = os.path.expanduser(str(self.db_path))
        self.log_level = str(self.log_level).upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"unknown log level: {self.log_level}")

    def to_yaml(self) -> str:
        """Serialize config to YAML."""
        data = {
            "db_path": self.db_path,
            "log_level": self.log_level,
            "json_indent": self.json_indent,
            "use_color": self.use_color,
        }
        return yaml.dump(data, default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ConfigModel":
        """Deserialize config from YAML."""
        data = yaml.safe_load(yaml_str) or {}
        if not isinstance(data, dict):
            raise ConfigError("configuration must be a mapping")

        known = {f.name for f in fields(cls)}
        for key in sorted(set(data) - known):
            logger.warning("Ignoring unknown configuration key: %s", key)

        return cls(**{k: v for k, v in data.items() if k in known})

    def get_db_path(self) -> Path:
        """Get the data file path."""
        return Path(self.db_path)


def load_config(config_path: Optional[Path] = None) -> ConfigModel:
    """Load configuration from file, falling back to defaults.

    An explicitly given path must exist. The default location is only read
    when present. LOCAL_TODO_DB overrides the data file in either case.
    """
    explicit = config_path is not None
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH.expanduser()

    config = ConfigModel()

    if explicit or config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                yaml_content = f.read()
            config = ConfigModel.from_yaml(yaml_content)
        except (OSError, yaml.YAMLError, TypeError) as e:
            raise ConfigError(f"Failed to load config from {config_path}: {e}") from e
        logger.debug("Loaded configuration from %s", config_path)

    db_override = os.environ.get(DB_ENV_VAR)
    if db_override:
        config.db_path = os.path.expanduser(db_override)

    return config


def save_config(config: ConfigModel, config_path: Optional[Path] = None) -> None:
    """Save configuration to file.

    Library API for writing a config programmatically; no command calls it.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH.expanduser()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(config.to_yaml())
    except OSError as e:
        raise ConfigError(f"Failed to save config to {config_path}: {e}") from e
    logger.debug("Configuration saved to %s", config_path)
