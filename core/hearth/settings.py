"""
Hearth Configuration Settings

Settings are loaded from the Home Assistant add-on options.json when
present, otherwise from config.yaml in the repository root. Environment
variables (optionally from a .env file) override individual values.
"""

import json
import logging
import os
import re
from dataclasses import dataclass, field
from typing import Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

OPTIONS_PATH = "/data/options.json"
CONFIG_PATH = os.path.join(os.path.dirname(__file__), "..", "..", "config.yaml")

# Environment variable -> settings field
ENV_OVERRIDES = {
    "HEARTH_HOST": "host",
    "HEARTH_PORT": "port",
    "HEARTH_LOG_LEVEL": "log_level",
}


def _camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    s1 = re.sub("(.)([A-Z][a-z]+)", r"\1_\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1_\2", s1).lower()


def _check_seed_entries(entries, what: str) -> list[dict]:
    if not isinstance(entries, list):
        raise ConfigurationError(f"{what} must be a list")
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("name"), str):
            raise ConfigurationError(f"Each entry in {what} needs a name: {entry!r}")
        setpoint = entry.get("setpoint")
        if setpoint is not None and (isinstance(setpoint, bool) or not isinstance(setpoint, (int, float))):
            raise ConfigurationError(f"Setpoint of {entry['name']!r} in {what} must be a number: {setpoint!r}")
        zone_id = entry.get("zone_id")
        if zone_id is not None and not isinstance(zone_id, str):
            raise ConfigurationError(f"zone_id of {entry['name']!r} in {what} must be a string: {zone_id!r}")
    return entries


@dataclass
class HearthSettings:
    """Server configuration and optional seed data."""

    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "INFO"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    zones: list[dict] = field(default_factory=list)  # Seed zones, each may nest "devices"
    devices: list[dict] = field(default_factory=list)  # Seed devices without a zone

    def __post_init__(self):
        try:
            self.port = int(self.port)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid port: {self.port!r}") from e
        self.log_level = str(self.log_level).upper()

        if isinstance(self.cors_origins, str):
            self.cors_origins = [self.cors_origins]

        _check_seed_entries(self.zones, "zones")
        for zone in self.zones:
            _check_seed_entries(zone.get("devices", []), f"devices of zone {zone['name']!r}")
        _check_seed_entries(self.devices, "devices")

    @classmethod
    def from_dict(cls, data: dict) -> "HearthSettings":
        """Create from dictionary. Unknown keys are ignored."""
        converted = {_camel_to_snake(k): v for k, v in data.items()}
        known = cls.__dataclass_fields__.keys()
        unknown = sorted(set(converted) - set(known))
        if unknown:
            logger.warning(f"Ignoring unknown settings: {unknown}")
        return cls(**{k: v for k, v in converted.items() if k in known})


def load_settings(
    options_path: Optional[str] = None,
    config_path: Optional[str] = None,
) -> HearthSettings:
    """Load settings from options.json, config.yaml and the environment.

    Args:
        options_path: Add-on options file (defaults to $HEARTH_OPTIONS_PATH or /data/options.json)
        config_path: Development config.yaml (defaults to the repository root)

    Returns:
        Loaded settings; defaults when no file is found

    Raises:
        ConfigurationError: If a file cannot be parsed or holds invalid values
    """
    load_dotenv()

    options_path = options_path or os.environ.get("HEARTH_OPTIONS_PATH", OPTIONS_PATH)
    config_path = config_path or CONFIG_PATH
    options: dict = {}

    if os.path.exists(options_path):
        try:
            with open(options_path) as f:
                options = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigurationError(f"Failed to read {options_path}: {e}") from e
        logger.info(f"Loaded settings from {options_path}")
    elif os.path.exists(config_path):
        try:
            with open(config_path) as f:
                config = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to read {config_path}: {e}") from e
        options = config.get("options", {}) or {}
        logger.info(f"Loaded settings from {config_path}")
    else:
        logger.warning("No configuration file found, using defaults")

    if not isinstance(options, dict):
        raise ConfigurationError("Settings must be a mapping")

    for env_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            options[key] = value
            logger.debug(f"Setting {key} overridden by {env_name}")

    return HearthSettings.from_dict(options)
