"""Tests for environment-driven settings."""

import pytest
from pydantic import ValidationError

from hallbook.config import Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.persistence_enabled is True
    assert settings.long_stay_discount is True
    assert settings.suggestion_window_days == 30
    assert settings.receipt_dir == "receipts"


def test_environment_overrides():
    settings = Settings.from_env(
        {
            "HALLBOOK_PERSISTENCE_ENABLED": "false",
            "HALLBOOK_LONG_STAY_DISCOUNT": "0",
            "HALLBOOK_SUGGESTION_WINDOW_DAYS": "14",
            "HALLBOOK_LOG_LEVEL": "debug",
            "UNRELATED": "x",
        }
    )
    assert settings.persistence_enabled is False
    assert settings.long_stay_discount is False
    assert settings.suggestion_window_days == 14
    assert settings.log_level == "DEBUG"


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        Settings.from_env({"HALLBOOK_LOG_LEVEL": "chatty"})
    with pytest.raises(ValidationError):
        Settings.from_env({"HALLBOOK_SUGGESTION_WINDOW_DAYS": "-1"})
