import os
from dataclasses import dataclass


def _int_env(name: str, default: int) -> int:
    v = os.getenv(name, "")
    if v.strip() == "":
        return default
    try:
        return int(v)
    except ValueError:
        return default


def _str_env(name: str, default: str) -> str:
    return os.getenv(name, "").strip() or default


@dataclass(frozen=True)
class _PrayerCfg:
    default_method: str
    default_asr: str
    default_high_latitude: str
    max_days: int
    log_level: str


def load_config() -> _PrayerCfg:
    """Read service defaults from the environment."""
    return _PrayerCfg(
        default_method=_str_env("PRAYER_DEFAULT_METHOD", "MuslimWorldLeague"),
        default_asr=_str_env("PRAYER_DEFAULT_ASR", "standard"),
        default_high_latitude=_str_env("PRAYER_HIGH_LATITUDE", "none"),
        max_days=max(1, _int_env("PRAYER_MAX_DAYS", 31)),
        log_level=_str_env("LOG_LEVEL", "INFO").upper(),
    )


CFG = load_config()
