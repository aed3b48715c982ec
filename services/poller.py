"""Periodic fetching of sensor readings into the panel."""

from __future__ import annotations

import asyncio
import logging
from functools import lru_cache
from typing import Optional, Set

import httpx
from pydantic import ValidationError

from app.schemas import parse_readings
from services.panel import SensorPanel, build_default_panel
from settings import get_settings

logger = logging.getLogger(__name__)


class SensorPoller:
    """Fetches the full reading list now and then on every interval tick.

    Each tick spawns its own fetch, so a slow response never delays the next
    tick. Stopping cancels the ticker only; fetches already in flight run to
    completion and their results are dropped by the closed panel.
    """

    def __init__(
        self,
        panel: SensorPanel,
        url: str,
        interval: float,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("Poll interval must be positive.")
        self.panel = panel
        self.url = url
        self.interval = interval
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._ticker: Optional[asyncio.Task[None]] = None
        self._inflight: Set[asyncio.Task[bool]] = set()
        self._stopped = False

    @property
    def running(self) -> bool:
        return self._ticker is not None and not self._ticker.done()

    def start(self) -> None:
        """Schedule polling on the running event loop."""
        if self._stopped:
            raise RuntimeError("Poller has been stopped and cannot be restarted.")
        if self._ticker is not None:
            return
        self._ticker = asyncio.get_running_loop().create_task(self._run())
        logger.info(
            "Started sensor polling (every %.1fs)", self.interval, extra={"url": self.url}
        )

    async def stop(self) -> None:
        """Cancel the repeating fetch and release the HTTP client."""
        if self._stopped:
            return
        self._stopped = True
        self.panel.close()
        if self._ticker is not None:
            self._ticker.cancel()
            try:
                await self._ticker
            except asyncio.CancelledError:
                pass
        if self._inflight:
            await asyncio.gather(*self._inflight, return_exceptions=True)
        await self._client.aclose()
        logger.info("Stopped sensor polling", extra={"url": self.url})

    async def poll_once(self) -> bool:
        """Fetch one snapshot; failures are logged and leave the panel unchanged."""
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
            readings = parse_readings(response.json())
        except (httpx.HTTPError, ValidationError, ValueError):
            logger.exception("Error fetching sensor data", extra={"url": self.url})
            self.panel.mark_attempted()
            return False

        logger.debug(
            "Fetched sensor data",
            extra={
                "url": self.url,
                "status_code": response.status_code,
                "reading_count": len(readings),
            },
        )
        return self.panel.apply_snapshot(readings)

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        while True:
            task = loop.create_task(self.poll_once())
            self._inflight.add(task)
            task.add_done_callback(self._fetch_done)
            await asyncio.sleep(self.interval)

    def _fetch_done(self, task: asyncio.Task[bool]) -> None:
        self._inflight.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                "Unexpected error fetching sensor data",
                exc_info=exc,
                extra={"url": self.url},
            )
            self.panel.mark_attempted()


@lru_cache
def build_default_poller() -> SensorPoller:
    """Factory that wires the poller to the default panel and settings."""
    settings = get_settings()
    return SensorPoller(
        panel=build_default_panel(),
        url=settings.sensor_data_url,
        interval=settings.poll_interval,
        timeout=settings.fetch_timeout,
    )
