"""League configuration management."""

from functools import lru_cache
from pathlib import Path

from .schemas import LeagueConfig, ScoringRules
from .utils import load_json

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / 'data' / 'league_config.json'


def load_config(path: Path | str = DEFAULT_CONFIG_PATH) -> LeagueConfig:
    """
    Load and validate a league configuration file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file has an invalid structure or rule set
    """
    return load_json(path, schema=LeagueConfig)


@lru_cache(maxsize=1)
def get_config() -> LeagueConfig:
    """
    Load league configuration from data/league_config.json.

    Configuration is cached after first load.

    Example:
        from bestball.config import get_config
        config = get_config()
        print(f"Current season: {config.current_season}")
    """
    return load_config(DEFAULT_CONFIG_PATH)


def get_current_season() -> int:
    return get_config().current_season


def get_playoff_weeks() -> list[int]:
    """Get the contest's scoring weeks from config."""
    return get_config().playoff_weeks


def get_scoring_rules() -> ScoringRules:
    """Get the season's scoring rule set from config."""
    return get_config().scoring_rules


def get_week_name(week: int) -> str:
    return get_config().week_names.get(week, f'Week {week}')


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime.
    """
    get_config.cache_clear()
