from __future__ import annotations

from typing import List, NoReturn, Optional

import httpx
import typer
from pydantic import ValidationError

from app.schemas import parse_readings
from cli.config import CLIConfig
from models.readings import Reading


class SensorClient:
    """Minimal synchronous client for the sensor endpoint."""

    def __init__(self, config: CLIConfig, client: Optional[httpx.Client] = None) -> None:
        self._config = config
        self._client = client or httpx.Client(timeout=config.timeout)

    def close(self) -> None:
        self._client.close()

    def fetch_readings(self) -> List[Reading]:
        url = self._config.sensor_data_url
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._fail(f"Request failed with status {exc.response.status_code}: {url}")
        except httpx.HTTPError as exc:
            self._fail(f"Could not reach {url}: {exc}")

        try:
            return parse_readings(response.json())
        except (ValidationError, ValueError):
            self._fail(f"Unexpected response payload from {url}.")

    @staticmethod
    def _fail(message: str) -> NoReturn:
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
