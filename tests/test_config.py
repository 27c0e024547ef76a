"""
Tests for settings loading (defaults, YAML file, environment).
"""

from datetime import timedelta
import pytest
import yaml
from pydantic import ValidationError

from app.domain.models import UserPreferences
from app.infra.config import Settings


@pytest.fixture
def isolated(tmp_path, monkeypatch):
    """Run from an empty directory without TIMEVAL_ variables"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TIMEVAL_MIN_GAP_MINUTES", raising=False)
    return tmp_path


class TestDefaults:

    def test_default_preferences(self, isolated):
        settings = Settings(config_dir=isolated / "cfg")
        assert settings.preferences == UserPreferences()
        assert settings.min_gap == timedelta(minutes=5)

    def test_negative_gap_is_rejected(self):
        with pytest.raises(ValidationError):
            UserPreferences(min_gap_minutes=-1)


class TestYamlConfig:

    def test_user_config_dir(self, isolated):
        config_dir = isolated / "cfg"
        config_dir.mkdir()
        (config_dir / "settings.yaml").write_text(
            yaml.dump({"min_gap_minutes": 15, "csv_name": "Roe, Jane"}), encoding="utf-8"
        )

        settings = Settings(config_dir=config_dir)

        assert settings.min_gap == timedelta(minutes=15)
        assert settings.preferences.csv_name == "Roe, Jane"
        assert settings.preferences.csv_email == "john.doe@example.com"

    def test_workspace_config_wins(self, isolated):
        (isolated / "config").mkdir()
        (isolated / "config" / "settings.yaml").write_text("min_gap_minutes: 2\n", encoding="utf-8")
        config_dir = isolated / "cfg"
        config_dir.mkdir()
        (config_dir / "settings.yaml").write_text("min_gap_minutes: 30\n", encoding="utf-8")

        assert Settings(config_dir=config_dir).min_gap == timedelta(minutes=2)

    def test_empty_file_keeps_defaults(self, isolated):
        config_dir = isolated / "cfg"
        config_dir.mkdir()
        (config_dir / "settings.yaml").write_text("", encoding="utf-8")
        assert Settings(config_dir=config_dir).preferences == UserPreferences()

    def test_save_and_reload(self, isolated):
        config_dir = isolated / "cfg"
        settings = Settings(config_dir=config_dir)
        settings.preferences.theme = "dark"
        settings.preferences.last_directory = "/data/tim"
        settings.save_preferences()

        reloaded = Settings(config_dir=config_dir)
        assert reloaded.preferences.theme == "dark"
        assert reloaded.preferences.last_directory == "/data/tim"


class TestEnvironment:

    def test_env_overrides_gap(self, isolated, monkeypatch):
        config_dir = isolated / "cfg"
        config_dir.mkdir()
        (config_dir / "settings.yaml").write_text("min_gap_minutes: 30\n", encoding="utf-8")
        monkeypatch.setenv("TIMEVAL_MIN_GAP_MINUTES", "10")

        assert Settings(config_dir=config_dir).min_gap == timedelta(minutes=10)

    def test_negative_env_gap_is_rejected(self, isolated, monkeypatch):
        monkeypatch.setenv("TIMEVAL_MIN_GAP_MINUTES", "-10")
        with pytest.raises(ValidationError):
            Settings(config_dir=isolated / "cfg")
