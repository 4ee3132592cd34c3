"""Engine settings management."""

import os
from functools import lru_cache
from pathlib import Path

from .schemas import EngineSettings
from .utils import load_json

CONFIG_ENV_VAR = 'BOWLSTATS_CONFIG'


@lru_cache(maxsize=1)
def get_config() -> EngineSettings:
    """
    Load engine settings.

    Reads the file named by BOWLSTATS_CONFIG, else data/engine_config.json
    when it exists, else returns the defaults. Cached after first load.

    Raises:
        FileNotFoundError: If BOWLSTATS_CONFIG names a missing file
        ValueError: If the file has invalid structure

    Example:
        from bowlstats.config import get_config
        config = get_config()
        print(f"Games per series: {config.default_games_per_series}")
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return load_json(env_path, schema=EngineSettings)

    config_path = Path(__file__).parent.parent / 'data' / 'engine_config.json'
    if config_path.exists():
        return load_json(config_path, schema=EngineSettings)
    return EngineSettings()


def clear_config_cache() -> None:
    """
    Clear the settings cache.

    Use this if the config file or BOWLSTATS_CONFIG changes during runtime.
    """
    get_config.cache_clear()
