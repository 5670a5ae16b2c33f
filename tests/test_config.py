"""Tests for settings loading."""

from sect_economy.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.QUEST_REFRESH_SECONDS == 180.0
    assert settings.COUNTDOWN_TICK_SECONDS == 1.0
    assert settings.QUEST_REPLENISH_THRESHOLD == 5
    assert settings.SHOP_WEAPON_STOCK == 25
    assert settings.SHOP_APPAREL_STOCK == 50


def test_environment_override(monkeypatch):
    monkeypatch.setenv("QUEST_REFRESH_SECONDS", "30")
    monkeypatch.setenv("STARTING_GOLD", "5")
    settings = Settings(_env_file=None)
    assert settings.QUEST_REFRESH_SECONDS == 30.0
    assert settings.STARTING_GOLD == 5
