# tests/core/test_config.py
from alliance_wars.core.config import get_settings, Settings

def test_get_settings_loads_defaults():
    settings = get_settings()
    assert isinstance(settings, Settings)
    assert settings.PROJECT_NAME == "Alliance Wars"
    assert settings.ATTACK_COOLDOWN_SECONDS == 21600
    assert settings.DEFEND_COOLDOWN_SECONDS == 3600
    assert settings.COLLECT_COOLDOWN_SECONDS == 600
    assert settings.MESSAGE_HISTORY_LIMIT == 5

def test_get_settings_is_cached():
    assert get_settings() is get_settings()

def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("DEFAULT_MAX_PLAYERS", "4")
    monkeypatch.setenv("ADMIN_PLAYER_IDS", '["web-client", "+15550001"]')
    settings = Settings()
    assert settings.DEFAULT_MAX_PLAYERS == 4
    assert "+15550001" in settings.ADMIN_PLAYER_IDS
