"""Application configuration loader.

Loads configuration from data/config/app_config_v1.yaml (or the file named
by the CLASSROOM_CONFIG environment variable), falling back to built-in
defaults. Missing keys in the file take their default value.

Usage:
    from classroom.config.app_config import load_app_config

    config = load_app_config()
    user_id = config.session.current_user_id
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
import yaml

logger = structlog.get_logger(__name__)

# Config file path (relative to project root)
CONFIG_FILE = Path("data/config/app_config_v1.yaml")
CONFIG_ENV_VAR = "CLASSROOM_CONFIG"


@dataclass
class ApiConfig:
    """HTTP API settings."""

    title: str = "Classroom API"
    version: str = "0.1.0"
    cors_origins: list[str] = field(default_factory=lambda: ["*"])


@dataclass
class SessionConfig:
    """Session placeholder: every request acts as this user."""

    current_user_id: int = 1


@dataclass
class StatsConfig:
    """Placeholder values for stats that are not tracked yet."""

    total_lesson_time: int = 1240  # minutes
    longest_streak: int = 14  # days
    current_streak: int = 7  # days


@dataclass
class AchievementsConfig:
    """Achievement award policy."""

    allow_duplicates: bool = False


@dataclass
class SeedConfig:
    """Startup data settings."""

    enabled: bool = True


@dataclass
class AppConfig:
    """Application-wide configuration."""

    api: ApiConfig = field(default_factory=ApiConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    stats: StatsConfig = field(default_factory=StatsConfig)
    achievements: AchievementsConfig = field(default_factory=AchievementsConfig)
    seed: SeedConfig = field(default_factory=SeedConfig)


# Module-level cache
_cached_config: AppConfig | None = None


def _config_path() -> Path:
    """Config file location, honoring the environment override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return CONFIG_FILE


def parse_config(data: dict[str, Any]) -> AppConfig:
    """Parse configuration dictionary into AppConfig object."""
    api_data = data.get("api") or {}
    session_data = data.get("session") or {}
    stats_data = data.get("stats") or {}
    achievements_data = data.get("achievements") or {}
    seed_data = data.get("seed") or {}

    api = ApiConfig(
        title=api_data.get("title", "Classroom API"),
        version=str(api_data.get("version", "0.1.0")),
        cors_origins=list(api_data.get("cors_origins", ["*"])),
    )
    session = SessionConfig(
        current_user_id=int(session_data.get("current_user_id", 1)),
    )
    stats = StatsConfig(
        total_lesson_time=int(stats_data.get("total_lesson_time", 1240)),
        longest_streak=int(stats_data.get("longest_streak", 14)),
        current_streak=int(stats_data.get("current_streak", 7)),
    )
    achievements = AchievementsConfig(
        allow_duplicates=bool(achievements_data.get("allow_duplicates", False)),
    )
    seed = SeedConfig(enabled=bool(seed_data.get("enabled", True)))

    return AppConfig(
        api=api,
        session=session,
        stats=stats,
        achievements=achievements,
        seed=seed,
    )


def load_app_config(force_reload: bool = False) -> AppConfig:
    """Load application config from file or defaults.

    Args:
        force_reload: If True, ignore cached config and reload from file.

    Returns:
        AppConfig object with all settings.
    """
    global _cached_config

    if _cached_config is not None and not force_reload:
        return _cached_config

    path = _config_path()
    if path.exists():
        logger.debug("loading_app_config", source=str(path))
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    else:
        logger.info("using_default_config")
        data = {}

    _cached_config = parse_config(data)
    return _cached_config


def clear_config_cache() -> None:
    """Clear the configuration cache.

    Useful for testing or when config is modified at runtime.
    """
    global _cached_config
    _cached_config = None
