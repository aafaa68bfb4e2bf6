"""Engine settings read from the environment.

Every key is looked up as DINNER_PLANNER_<KEY>; app/main.py loads a .env file
into the environment before anything reads these.

Known keys:
    MATCH_THRESHOLD       max relative edit distance for a pantry match (0.3).
    EXPIRING_WITHIN_DAYS  days ahead that count as "expiring soon" (3).
    LOG_LEVEL             root logging level for the app (INFO).
"""

import os
from dataclasses import dataclass

_PREFIX = "DINNER_PLANNER_"

DEFAULT_MATCH_THRESHOLD = 0.3
DEFAULT_EXPIRING_WITHIN_DAYS = 3
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class Settings:
    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    expiring_within_days: int = DEFAULT_EXPIRING_WITHIN_DAYS
    log_level: str = DEFAULT_LOG_LEVEL


def get_setting(key: str, default: str = None) -> str:
    """Return the value for a settings key, or default if it is unset or blank."""
    value = os.environ.get(_PREFIX + key.upper())
    if value is None or not value.strip():
        return default
    return value.strip()


def get_settings() -> Settings:
    """Read all engine settings. Raises ValueError for unparseable numbers."""
    threshold = float(get_setting("MATCH_THRESHOLD", str(DEFAULT_MATCH_THRESHOLD)))
    if not 0.0 <= threshold <= 1.0:
        raise ValueError(f"MATCH_THRESHOLD must be between 0 and 1, got {threshold}")
    return Settings(
        match_threshold=threshold,
        expiring_within_days=int(get_setting("EXPIRING_WITHIN_DAYS", str(DEFAULT_EXPIRING_WITHIN_DAYS))),
        log_level=get_setting("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
