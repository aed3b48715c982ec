"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class SortField(str, Enum):
    """Reading attributes the panel can be ordered by."""

    temperature = "temperature"
    pressure = "pressure"
    humidity = "humidity"


class SortDirection(str, Enum):
    ascending = "ascending"
    descending = "descending"


READING_ATTRIBUTES: Tuple[str, ...] = ("temperature", "humidity", "pressure")


@dataclass(frozen=True, slots=True)
class Reading:
    """A single sensor sample as delivered by the sensor endpoint.

    ``attribute_order`` records the key order of the source record and drives
    the spreadsheet column order; it takes no part in equality.
    """

    temperature: float
    humidity: float
    pressure: Optional[float] = None
    attribute_order: Tuple[str, ...] = field(default=READING_ATTRIBUTES, compare=False)

    def value_of(self, field: SortField) -> Optional[float]:
        return getattr(self, field.value)

    def to_record(self) -> Dict[str, float]:
        """Return the attributes that are present, in source key order."""
        record: Dict[str, float] = {}
        for name in self.attribute_order + READING_ATTRIBUTES:
            value = getattr(self, name)
            if value is not None and name not in record:
                record[name] = value
        return record


@dataclass(frozen=True, slots=True)
class SortConfig:
    field: SortField
    direction: SortDirection
