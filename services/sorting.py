"""Ordering rules for the panel's reading list."""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from models.readings import Reading, SortConfig, SortDirection, SortField


def next_sort_config(current: Optional[SortConfig], field: SortField) -> SortConfig:
    """Resolve the direction for a header click on ``field``.

    Only an ascending sort on the same field flips to descending; every other
    prior state starts over at ascending.
    """
    if (
        current is not None
        and current.field is field
        and current.direction is SortDirection.ascending
    ):
        return SortConfig(field=field, direction=SortDirection.descending)
    return SortConfig(field=field, direction=SortDirection.ascending)


def _sort_key(field: SortField):
    # Absent values rank above every present value.
    def key(reading: Reading) -> Tuple[bool, float]:
        value = reading.value_of(field)
        if value is None:
            return (True, 0.0)
        return (False, value)

    return key


def sort_readings(readings: Iterable[Reading], config: SortConfig) -> List[Reading]:
    """Return a new, stably ordered list; the input is left untouched."""
    return sorted(
        readings,
        key=_sort_key(config.field),
        reverse=config.direction is SortDirection.descending,
    )
