"""Configuration management for Take Home.

Machine-specific settings live in settings.json:
   - default_state: two-letter state code used when none is given
   - default_filing_status: filing status used when none is given
   - tax_year: tax year used when none is given (default: latest available)
   - tax_rules_dir: directory holding custom tax rules YAML files

Config directory resolution:
1. TAKE_HOME_CONFIG_PATH environment variable (if set)
2. ~/.config/take-home/ (XDG_CONFIG_HOME fallback)

Settings supply defaults. The CLI reads default_state and
default_filing_status before building inputs. tax_year and tax_rules_dir
are read when rules are loaded: a calculator called without a TaxRules
snapshot loads one from them once per call, and a calculator given a
snapshot reads no settings at all.
"""

import json
import os
from pathlib import Path
from typing import Any


APP_NAME = "take-home"
SETTINGS_FILENAME = "settings.json"

SETTING_KEYS = ("default_state", "default_filing_status", "tax_year", "tax_rules_dir")


class SettingsError(Exception):
    """Raised when settings.json cannot be read or a key is invalid."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. TAKE_HOME_CONFIG_PATH environment variable
    2. ~/.config/take-home/ (XDG_CONFIG_HOME)

    Returns:
        Path to the configuration directory
    """
    env_path = os.environ.get("TAKE_HOME_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)

    Raises:
        SettingsError: If the file exists but is not a JSON object
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        try:
            settings = json.load(f)
        except json.JSONDecodeError as e:
            raise SettingsError(f"Invalid JSON in {settings_file}: {e}") from e

    if not isinstance(settings, dict):
        raise SettingsError(f"{settings_file} must contain a JSON object")
    return settings


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value from settings.json, or default if unset."""
    settings = load_settings()
    return settings.get(key, default)


def set_setting(key: str, value: Any) -> Path:
    """Set a setting value in settings.json.

    Raises:
        SettingsError: If key is not a known setting
    """
    if key not in SETTING_KEYS:
        raise SettingsError(
            f"Unknown setting '{key}'. Valid settings: {', '.join(SETTING_KEYS)}"
        )
    settings = load_settings()
    settings[key] = value
    return save_settings(settings)


def unset_setting(key: str) -> bool:
    """Remove a setting. Returns True if it was set."""
    settings = load_settings()
    if key not in settings:
        return False
    del settings[key]
    save_settings(settings)
    return True
