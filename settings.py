from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

DEFAULT_SENSOR_DATA_URL = "http://localhost:8000/sensorData"
POLL_INTERVAL_SECONDS = 5.0

_SENSOR_DATA_URL_ENV = "SENSOR_DATA_URL"
_FETCH_TIMEOUT_ENV = "SENSOR_FETCH_TIMEOUT"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    sensor_data_url: str
    poll_interval: float
    fetch_timeout: Optional[float]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_timeout(default: Optional[float]) -> Optional[float]:
    value = os.getenv(_FETCH_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        sensor_data_url=_read_str_env(_SENSOR_DATA_URL_ENV, DEFAULT_SENSOR_DATA_URL),
        poll_interval=POLL_INTERVAL_SECONDS,
        fetch_timeout=_read_timeout(None),
        log_level=_read_log_level("INFO"),
    )
