"""
Configuration management for StoryClients.

Configuration file priority:
1. STORYCLIENTS_CONFIG environment variable path
2. XDG config directory: ~/.config/storyclients/storyclients.ini
3. Home directory: ~/.storyclients.ini
4. Current directory: ./storyclients.ini

Credentials are never read from the configuration file; they come from the
environment variable chains in ``storyclients.clients``.
"""

import logging
import os
from configparser import ConfigParser
from configparser import Error as ConfigParserError
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir

from .shared.errors import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


@dataclass(frozen=True)
class ConfigField:
    """A single INI setting with its default and template comment."""

    section: str
    name: str
    default: Any
    comment: str


FIELDS = (
    ConfigField(
        "clients",
        "retry_failed_construction",
        False,
        "Clear a failed client construction so the next request tries again",
    ),
    ConfigField("system", "log_level", "INFO", f"Logging level: {', '.join(LOG_LEVELS)}"),
)


def _generate_config_template() -> str:
    """Generate the default configuration file from the field table."""
    lines = [
        "# StoryClients Configuration File",
        "# API keys are read from environment variables, never from this file",
        "",
    ]
    for section in dict.fromkeys(f.section for f in FIELDS):
        lines.append(f"[{section}]")
        for field in (f for f in FIELDS if f.section == section):
            lines.append(f"# {field.comment}")
            default = field.default
            if isinstance(default, bool):
                default = "true" if default else "false"
            lines.append(f"{field.name} = {default}")
            lines.append("")
        lines.append("")
    return "\n".join(lines).rstrip() + "\n"


class Config:
    """Configuration manager for StoryClients."""

    def __init__(self):
        self.config = ConfigParser()
        self.config_path: Path | None = None
        self.config.read_string(_generate_config_template())

    def get_config_paths(self) -> list[Path]:
        """Return configuration file paths in priority order."""
        paths = []

        env_config = os.environ.get("STORYCLIENTS_CONFIG")
        if env_config:
            paths.append(Path(env_config))

        paths.append(self.get_default_config_path())
        paths.append(Path.home() / ".storyclients.ini")
        paths.append(Path("./storyclients.ini"))

        return paths

    def get_default_config_path(self) -> Path:
        """Get the default configuration file path (XDG config directory)."""
        return Path(user_config_dir("storyclients", "storyclients")) / "storyclients.ini"

    def find_config_file(self) -> Path | None:
        """Find the first existing configuration file."""
        for path in self.get_config_paths():
            if path.exists() and path.is_file():
                return path
        return None

    def load_config(self) -> bool:
        """
        Load configuration from file.

        Returns:
            bool: True if config file was found and loaded, False otherwise.
        """
        config_path = self.find_config_file()
        if not config_path:
            logger.debug("No configuration file found, using defaults")
            return False

        try:
            self.config.read(config_path, encoding="utf-8")
        except (ConfigParserError, UnicodeDecodeError) as e:
            raise ConfigError(f"Error reading configuration file {config_path}: {e}") from e
        self.config_path = config_path
        return True

    def create_default_config(self, path: Path | None = None) -> Path:
        """Write the default configuration file and return its path."""
        if path is None:
            path = self.get_default_config_path()
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(_generate_config_template())
        return path

    def validate_config(self) -> list[str]:
        """
        Validate configuration values.

        Returns:
            List[str]: List of validation errors, empty if valid.
        """
        errors = []
        raw = self.config.get("clients", "retry_failed_construction", fallback="false").strip().lower()
        if raw not in TRUE_VALUES + FALSE_VALUES:
            errors.append(f"clients.retry_failed_construction: expected a boolean, got '{raw}'")
        level = self.config.get("system", "log_level", fallback="INFO").strip().upper()
        if level not in LOG_LEVELS:
            errors.append(f"system.log_level: expected one of {', '.join(LOG_LEVELS)}, got '{level}'")
        return errors

    @property
    def retry_failed_construction(self) -> bool:
        raw = self.config.get("clients", "retry_failed_construction", fallback="false")
        return raw.strip().lower() in TRUE_VALUES

    @property
    def log_level(self) -> str:
        return self.config.get("system", "log_level", fallback="INFO").strip().upper()

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Convert configuration to dictionary format."""
        return {section: dict(self.config[section].items()) for section in self.config.sections()}


def load_config() -> Config:
    """
    Load configuration from file system.

    Raises:
        ConfigError: If configuration file is malformed or has invalid values
    """
    config = Config()
    config.load_config()

    errors = config.validate_config()
    if errors:
        raise ConfigError(
            "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in errors),
            details={"path": str(config.config_path) if config.config_path else None, "errors": errors},
        )

    return config
