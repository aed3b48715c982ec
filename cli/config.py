from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from settings import DEFAULT_SENSOR_DATA_URL

DEFAULT_TIMEOUT = 30.0

_URL_ENV = "SENSOR_DATA_URL"
_TIMEOUT_ENV = "SENSOR_FETCH_TIMEOUT"


@dataclass(frozen=True)
class CLIConfig:
    sensor_data_url: str = DEFAULT_SENSOR_DATA_URL
    timeout: float = DEFAULT_TIMEOUT


def _read_float(value: Optional[str], default: float) -> float:
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


def load_config(
    sensor_data_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> CLIConfig:
    url = sensor_data_url or os.getenv(_URL_ENV) or DEFAULT_SENSOR_DATA_URL
    if timeout is None:
        timeout = _read_float(os.getenv(_TIMEOUT_ENV), DEFAULT_TIMEOUT)
    return CLIConfig(sensor_data_url=url.strip(), timeout=timeout)
