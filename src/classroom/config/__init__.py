"""Configuration package for the classroom backend."""

from classroom.config.app_config import (
    AppConfig,
    clear_config_cache,
    load_app_config,
)
from classroom.config.seed import (
    get_default_seed,
    load_seed_data,
    seed_store,
)

__all__ = [
    "AppConfig",
    "clear_config_cache",
    "load_app_config",
    "get_default_seed",
    "load_seed_data",
    "seed_store",
]
