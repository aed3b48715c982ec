"""State container behind the sensor panel."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterable, List, Optional

from models.readings import Reading, SortConfig, SortField
from services.exporter import ExportFile, export_readings
from services.renderer import PanelView, render_panel
from services.sorting import next_sort_config, sort_readings

logger = logging.getLogger(__name__)


class SensorPanel:
    """Owns the reading list, loading flag and sort state.

    The poller replaces the list wholesale; sorting replaces it with a
    reordered copy. Readings themselves are never mutated.
    """

    def __init__(self) -> None:
        self._readings: List[Reading] = []
        self._loading = True
        self._sort_config: Optional[SortConfig] = None
        self._closed = False

    @property
    def readings(self) -> List[Reading]:
        return list(self._readings)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def sort_config(self) -> Optional[SortConfig]:
        return self._sort_config

    @property
    def closed(self) -> bool:
        return self._closed

    def apply_snapshot(self, readings: Iterable[Reading]) -> bool:
        """Replace the reading list with a fresh snapshot.

        Returns ``False`` when the panel is already closed and the snapshot
        was discarded.
        """
        if self._closed:
            logger.debug("Discarding snapshot for closed panel")
            return False
        self._readings = list(readings)
        self._loading = False
        return True

    def mark_attempted(self) -> None:
        if self._closed:
            return
        self._loading = False

    def sort(self, field: SortField | str) -> SortConfig:
        sort_field = SortField(field)
        config = next_sort_config(self._sort_config, sort_field)
        self._readings = sort_readings(self._readings, config)
        self._sort_config = config
        logger.info(
            "Sorted sensor readings",
            extra={
                "field": config.field.value,
                "direction": config.direction.value,
                "reading_count": len(self._readings),
            },
        )
        return config

    def render(self) -> PanelView:
        return render_panel(self._readings, self._loading, self._sort_config)

    def export(self) -> ExportFile:
        return export_readings(self._readings)

    def close(self) -> None:
        self._closed = True


@lru_cache
def build_default_panel() -> SensorPanel:
    """Factory for the application-wide panel instance."""
    return SensorPanel()
