"""Configuration for tradejournal.

Configuration lives in ``~/.config/tradejournal/config.toml``. Missing
keys (or a missing file) fall back to ``DEFAULT_CONFIG``.
"""

import copy
import logging
from pathlib import Path
from typing import Optional

import toml
from pydantic import ValidationError

from tradejournal.models import AccountSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "journal": {
        "default_balance": 100000.0,
        "default_risk_percent": 1.0,
        "display_mode": "currency",  # currency or rr
    },
    "database": {
        "path": "",  # empty -> ~/.config/tradejournal/journal.db
    },
    "logging": {
        "level": "WARNING",
    },
}


def get_config_dir() -> Path:
    """Directory holding the config file, database and session."""
    return Path.home() / ".config" / "tradejournal"


def get_config_path() -> Path:
    return get_config_dir() / "config.toml"


def _merge(base: dict, overrides: dict) -> dict:
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration merged over the defaults.

    Args:
        config_path: Config file, defaults to ``get_config_path()``.

    Returns:
        Config dict. An unreadable file is logged and ignored.
    """
    config_path = config_path or get_config_path()

    if not config_path.exists():
        return copy.deepcopy(DEFAULT_CONFIG)

    try:
        return _merge(DEFAULT_CONFIG, toml.load(config_path))
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path, e)
        return copy.deepcopy(DEFAULT_CONFIG)


def create_template_config(config_path: Optional[Path] = None) -> Path:
    """Write the default configuration file and return its path."""
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        toml.dump(DEFAULT_CONFIG, f)

    return config_path


def get_db_path(config: dict) -> Path:
    """Database path from config, defaulting into the config directory."""
    configured = config.get("database", {}).get("path", "")
    if configured:
        return Path(configured).expanduser()
    return get_config_dir() / "journal.db"


def get_display_mode(config: dict) -> str:
    mode = config.get("journal", {}).get("display_mode", "currency")
    return mode if mode in ("currency", "rr") else "currency"


def get_settings_defaults(config: dict) -> AccountSettings:
    """Trade-entry defaults used before a profile exists."""
    journal = config.get("journal", {})
    try:
        return AccountSettings(
            balance=journal.get("default_balance", 100000.0),
            default_risk_percent=journal.get("default_risk_percent", 1.0),
        )
    except ValidationError as e:
        logger.warning("Ignoring invalid journal defaults in config: %s", e)
        return AccountSettings()


def get_data_store(config: dict):
    """Get the record store instance."""
    from tradejournal.stores.sqlite import SQLiteRecordStore

    return SQLiteRecordStore(get_db_path(config))


def get_identity_provider(config: dict):
    """Get the identity provider instance."""
    from tradejournal.auth.local import LocalIdentityProvider

    return LocalIdentityProvider(
        get_db_path(config), session_path=get_config_dir() / "session.json"
    )
