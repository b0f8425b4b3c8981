"""Configuration management for the work journal."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .repository import STORAGE_KEY

logger = logging.getLogger(__name__)

WORKJOURNAL_HOME = Path(os.environ.get("WORKJOURNAL_HOME", Path.home() / "workjournal"))
CONFIG_FILE = WORKJOURNAL_HOME / "config" / "workjournal.conf"
DATA_DIR = WORKJOURNAL_HOME / "data"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Work journal configuration."""

    data_dir: str = ""
    storage_key: str = STORAGE_KEY
    log_level: str = "WARNING"

    def resolved_data_dir(self) -> Path:
        """Data directory with ~ expanded, falling back to the default."""
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    # Handle quoted values with inline comments: "value" # comment
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            if end_quote != -1:
                return value[1:end_quote]
            return value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from workjournal.conf."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                config.data_dir = value
            case "storage_key":
                if value:
                    config.storage_key = value
            case "log_level":
                level = value.upper()
                if level in LOG_LEVELS:
                    config.log_level = level
                else:
                    logger.warning(f"Invalid LOG_LEVEL {value!r}, using {config.log_level}")

    return config
