"""Tests for hubstate settings."""

from pathlib import Path

from hubstate.config import DEFAULT_STATE_KEY, Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("HUBSTATE_HOME", raising=False)
        settings = Settings(_env_file=None)
        assert settings.home == Path.home() / ".hubstate"
        assert settings.db_path is None
        assert settings.state_key == DEFAULT_STATE_KEY == "kanchana-events-hub-state"
        assert settings.log_level == "WARNING"

    def test_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HUBSTATE_DB_PATH", str(tmp_path / "x.db"))
        monkeypatch.setenv("HUBSTATE_STATE_KEY", "other-key")
        monkeypatch.setenv("HUBSTATE_LOG_LEVEL", "DEBUG")
        settings = Settings(_env_file=None)
        assert settings.db_path == tmp_path / "x.db"
        assert settings.state_key == "other-key"
        assert settings.log_level == "DEBUG"

    def test_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("HUBSTATE_STATE_KEY=from-file\nUNRELATED=1\n")
        settings = Settings(_env_file=env_file)
        assert settings.state_key == "from-file"

    def test_resolved_db_path_defaults_under_home(self, tmp_path):
        settings = Settings(_env_file=None, home=tmp_path / "home")
        assert settings.resolved_db_path() == (tmp_path / "home" / "state.db").resolve()

    def test_resolved_db_path_expands_user(self):
        settings = Settings(_env_file=None, db_path=Path("~/hub.db"))
        assert settings.resolved_db_path() == (Path.home() / "hub.db").resolve()


class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_env(self, monkeypatch):
        first = get_settings()
        monkeypatch.setenv("HUBSTATE_STATE_KEY", "changed")
        assert get_settings().state_key == first.state_key
        get_settings.cache_clear()
        assert get_settings().state_key == "changed"
