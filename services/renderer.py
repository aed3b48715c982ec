"""Turns the panel state into a view model for the HTML and JSON surfaces."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from models.readings import Reading, SortConfig, SortDirection, SortField

PAGE_TITLE = "SCADA HMI"
PAGE_SUBTITLE = "Life Sciences process"
TABLE_ROW_LIMIT = 5
NOT_AVAILABLE = "N/A"

_LABELS = {
    SortField.temperature: "Temperature (°C)",
    SortField.pressure: "Pressure (hPa)",
    SortField.humidity: "Humidity (%)",
}
_CHART_TITLES = {
    SortField.temperature: "Temperature Chart",
    SortField.pressure: "Pressure Chart",
    SortField.humidity: "Humidity Chart",
}
PRESSURE_PLACEHOLDER = "No data available for Pressure."


@dataclass
class TableHeader:
    field: SortField
    label: str
    sort_direction: Optional[SortDirection] = None


@dataclass
class TableRow:
    temperature: str
    pressure: str
    humidity: str


@dataclass
class ChartSeries:
    """One line chart bound to a single reading attribute."""

    field: SortField
    title: str
    label: str
    positions: List[int] = field(default_factory=list)
    values: List[Optional[float]] = field(default_factory=list)
    available: bool = False
    placeholder: Optional[str] = None


@dataclass
class PanelView:
    loading: bool
    title: str = PAGE_TITLE
    subtitle: str = PAGE_SUBTITLE
    total_readings: int = 0
    headers: List[TableHeader] = field(default_factory=list)
    rows: List[TableRow] = field(default_factory=list)
    charts: List[ChartSeries] = field(default_factory=list)
    sort_config: Optional[SortConfig] = None

    def chart(self, sort_field: SortField) -> Optional[ChartSeries]:
        for series in self.charts:
            if series.field is sort_field:
                return series
        return None


def format_value(value: Optional[float]) -> str:
    if value is None:
        return NOT_AVAILABLE
    return f"{value:.2f}"


def build_headers(sort_config: Optional[SortConfig]) -> List[TableHeader]:
    headers = []
    for sort_field in SortField:
        direction = None
        if sort_config is not None and sort_config.field is sort_field:
            direction = sort_config.direction
        headers.append(
            TableHeader(field=sort_field, label=_LABELS[sort_field], sort_direction=direction)
        )
    return headers


def build_rows(readings: Sequence[Reading]) -> List[TableRow]:
    recent = list(readings)[-TABLE_ROW_LIMIT:]
    return [
        TableRow(
            temperature=format_value(reading.temperature),
            pressure=format_value(reading.pressure),
            humidity=format_value(reading.humidity),
        )
        for reading in recent
    ]


def build_chart(readings: Sequence[Reading], sort_field: SortField) -> ChartSeries:
    values = [reading.value_of(sort_field) for reading in readings]
    # Only the optional attribute can be missing from every reading.
    available = sort_field is not SortField.pressure or any(
        value is not None for value in values
    )
    return ChartSeries(
        field=sort_field,
        title=_CHART_TITLES[sort_field],
        label=_LABELS[sort_field],
        positions=list(range(1, len(values) + 1)),
        values=values,
        available=available,
        placeholder=None if available else PRESSURE_PLACEHOLDER,
    )


def render_panel(
    readings: Sequence[Reading],
    loading: bool,
    sort_config: Optional[SortConfig] = None,
) -> PanelView:
    """Build the view for the current state; while loading only the indicator is shown."""
    if loading:
        return PanelView(loading=True, sort_config=sort_config)
    return PanelView(
        loading=False,
        total_readings=len(readings),
        headers=build_headers(sort_config),
        rows=build_rows(readings),
        charts=[build_chart(readings, sort_field) for sort_field in SortField],
        sort_config=sort_config,
    )
