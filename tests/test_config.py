"""Tests for configuration loading."""

import logging

import pytest

from tradejournal.config import (
    DEFAULT_CONFIG,
    get_db_path,
    get_display_mode,
    get_settings_defaults,
    load_config,
)
from tradejournal.models import AccountSettings


class TestLoadConfig:
    """Reading config.toml."""

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_config(tmp_path / "config.toml") == DEFAULT_CONFIG

    def test_values_merged_over_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[journal]\ndisplay_mode = "rr"\n')

        config = load_config(path)

        assert config["journal"]["display_mode"] == "rr"
        assert config["journal"]["default_balance"] == 100000.0
        assert get_display_mode(config) == "rr"

    def test_unreadable_file_ignored(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text("[journal\n")

        with caplog.at_level(logging.WARNING):
            assert load_config(path) == DEFAULT_CONFIG

        assert "Ignoring unreadable config" in caplog.text

    def test_configured_db_path(self, tmp_path):
        config = {"database": {"path": str(tmp_path / "other.db")}}

        assert get_db_path(config) == tmp_path / "other.db"


class TestSettingsDefaults:
    """Trade-entry defaults taken from the [journal] section."""

    def test_configured_values(self):
        config = {"journal": {"default_balance": 25000, "default_risk_percent": 0.5}}

        assert get_settings_defaults(config) == AccountSettings(
            balance=25000, default_risk_percent=0.5
        )

    @pytest.mark.parametrize(
        "journal",
        [
            {"default_balance": -5},
            {"default_balance": "lots"},
            {"default_risk_percent": 0},
            {"default_risk_percent": 250},
        ],
    )
    def test_invalid_values_fall_back(self, journal, caplog):
        with caplog.at_level(logging.WARNING):
            defaults = get_settings_defaults({"journal": journal})

        assert defaults == AccountSettings(balance=100000, default_risk_percent=1)
        assert "Ignoring invalid journal defaults" in caplog.text

    def test_unknown_display_mode(self):
        assert get_display_mode({"journal": {"display_mode": "pips"}}) == "currency"
