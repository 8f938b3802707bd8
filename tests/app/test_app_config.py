"""Tests for app configuration.

Tests the configuration loading, defaults, and file overrides.
"""

import pytest

from classroom.config.app_config import (
    CONFIG_ENV_VAR,
    AppConfig,
    load_app_config,
    parse_config,
)


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run from an empty directory so no config file is found."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    return tmp_path


class TestLoadAppConfig:
    """Tests for load_app_config function."""

    def test_defaults_without_file(self, isolated_cwd):
        """Missing file gives default config."""
        config = load_app_config()
        assert isinstance(config, AppConfig)
        assert config.session.current_user_id == 1
        assert config.stats.total_lesson_time == 1240
        assert config.achievements.allow_duplicates is False
        assert config.seed.enabled is True

    def test_loads_project_file(self, isolated_cwd):
        """Values in data/config/app_config_v1.yaml override defaults."""
        config_dir = isolated_cwd / "data" / "config"
        config_dir.mkdir(parents=True)
        (config_dir / "app_config_v1.yaml").write_text(
            "session:\n  current_user_id: 3\nstats:\n  current_streak: 2\n",
            encoding="utf-8",
        )

        config = load_app_config(force_reload=True)

        assert config.session.current_user_id == 3
        assert config.stats.current_streak == 2
        assert config.stats.longest_streak == 14

    def test_env_override(self, isolated_cwd, monkeypatch):
        """CLASSROOM_CONFIG points at another file."""
        custom = isolated_cwd / "custom.yaml"
        custom.write_text("api:\n  title: Custom\n", encoding="utf-8")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(custom))

        config = load_app_config(force_reload=True)
        assert config.api.title == "Custom"

    def test_cached(self, isolated_cwd):
        """Second call returns the cached object."""
        assert load_app_config() is load_app_config()

    def test_empty_file(self, isolated_cwd):
        """An empty YAML file gives defaults."""
        config_dir = isolated_cwd / "data" / "config"
        config_dir.mkdir(parents=True)
        (config_dir / "app_config_v1.yaml").write_text("", encoding="utf-8")

        config = load_app_config(force_reload=True)
        assert config.api.version == "0.1.0"


class TestParseConfig:
    """Tests for parse_config."""

    def test_partial_sections(self):
        config = parse_config({"achievements": {"allow_duplicates": True}, "seed": {"enabled": False}})
        assert config.achievements.allow_duplicates is True
        assert config.seed.enabled is False
        assert config.api.cors_origins == ["*"]
