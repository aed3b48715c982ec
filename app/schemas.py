"""Pydantic schemas for the sensor endpoint payload and the panel API."""

from __future__ import annotations

from typing import Annotated, Any, List, Optional, Tuple

from pydantic import (
    BaseModel,
    Field,
    PrivateAttr,
    TypeAdapter,
    field_validator,
    model_validator,
)

from models.readings import READING_ATTRIBUTES, Reading, SortDirection, SortField

FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]


class ReadingPayload(BaseModel):
    """One element of the ``/sensorData`` response body."""

    temperature: FiniteFloat
    humidity: FiniteFloat
    pressure: Optional[FiniteFloat] = None

    _key_order: Tuple[str, ...] = PrivateAttr(default=READING_ATTRIBUTES)

    @field_validator("temperature", "humidity", "pressure", mode="before")
    @classmethod
    def _reject_booleans(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Reading values must be numbers, not booleans.")
        return value

    @model_validator(mode="wrap")
    @classmethod
    def _remember_key_order(cls, data: Any, handler: Any) -> "ReadingPayload":
        payload = handler(data)
        if isinstance(data, dict):
            payload._key_order = tuple(key for key in data if key in READING_ATTRIBUTES)
        return payload

    def to_reading(self) -> Reading:
        return Reading(
            temperature=self.temperature,
            humidity=self.humidity,
            pressure=self.pressure,
            attribute_order=self._key_order,
        )


reading_list_adapter = TypeAdapter(List[ReadingPayload])


def parse_readings(payload: object) -> List[Reading]:
    """Validate a decoded response body and convert it to readings."""
    return [item.to_reading() for item in reading_list_adapter.validate_python(payload)]


class SortState(BaseModel):
    field: SortField
    direction: SortDirection


class TableHeaderModel(BaseModel):
    field: SortField
    label: str
    sort_direction: Optional[SortDirection] = None


class TableRowModel(BaseModel):
    temperature: str
    pressure: str
    humidity: str


class ChartModel(BaseModel):
    field: SortField
    title: str
    label: str
    available: bool
    placeholder: Optional[str] = None
    positions: List[int] = Field(default_factory=list)
    values: List[Optional[float]] = Field(default_factory=list)
    image_url: Optional[str] = Field(
        default=None, description="Location of the rendered PNG when the chart is available."
    )


class PanelViewModel(BaseModel):
    """Serialized panel view returned by the JSON endpoints."""

    title: str
    subtitle: str
    loading: bool
    total_readings: int = Field(..., ge=0)
    sort: Optional[SortState] = None
    headers: List[TableHeaderModel] = Field(default_factory=list)
    rows: List[TableRowModel] = Field(default_factory=list)
    charts: List[ChartModel] = Field(default_factory=list)
