"""PNG line charts for the panel's reading series."""

from __future__ import annotations

import io

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from models.readings import SortField  # noqa: E402
from services.renderer import ChartSeries  # noqa: E402

# Border and fill colours per series.
_COLORS = {
    SortField.temperature: ((1.0, 99 / 255, 132 / 255, 1.0), (1.0, 99 / 255, 132 / 255, 0.2)),
    SortField.pressure: ((54 / 255, 162 / 255, 235 / 255, 1.0), (54 / 255, 162 / 255, 235 / 255, 0.2)),
    SortField.humidity: ((75 / 255, 192 / 255, 192 / 255, 1.0), (75 / 255, 192 / 255, 192 / 255, 0.2)),
}


def render_chart_png(series: ChartSeries, width: float = 8.0, height: float = 3.5) -> bytes:
    """Render ``series`` as a line chart and return the encoded PNG."""
    if not series.available:
        raise ValueError(f"Chart for {series.field.value} has no data to plot.")

    line_color, fill_color = _COLORS[series.field]
    # Missing values become NaN so the line shows a gap.
    values = [float("nan") if value is None else value for value in series.values]

    fig, ax = plt.subplots(figsize=(width, height))
    try:
        ax.plot(
            series.positions,
            values,
            color=line_color,
            marker="o",
            markersize=3,
            markerfacecolor=fill_color,
            linewidth=1,
            label=series.label,
        )
        ax.set_title(series.title)
        ax.set_xlabel("Reading")
        ax.set_ylabel(series.label)
        ax.grid(True, alpha=0.3)
        ax.legend(loc="upper left", fontsize=8)
        fig.tight_layout()

        buffer = io.BytesIO()
        fig.savefig(buffer, format="png")
    finally:
        plt.close(fig)
    return buffer.getvalue()
