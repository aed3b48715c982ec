from __future__ import annotations

from typing import Iterable, List

import typer

from services.renderer import PanelView, TableRow


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def _format_table(labels: List[str], rows: Iterable[TableRow]) -> List[str]:
    cells = [labels] + [[row.temperature, row.pressure, row.humidity] for row in rows]
    widths = [max(len(line[index]) for line in cells) for index in range(len(labels))]
    lines = []
    for number, line in enumerate(cells):
        lines.append("  ".join(cell.rjust(width) for cell, width in zip(line, widths)))
        if number == 0:
            lines.append("  ".join("-" * width for width in widths))
    return lines


def echo_panel(view: PanelView) -> None:
    echo_heading(view.title)
    typer.echo(view.subtitle)
    typer.echo()

    if view.loading:
        typer.echo("Loading...")
        return

    labels = []
    for header in view.headers:
        label = header.label
        if header.sort_direction is not None:
            label = f"{label} [{header.sort_direction.value}]"
        labels.append(label)

    echo_heading(f"Latest readings ({len(view.rows)} of {view.total_readings})")
    if view.rows:
        for line in _format_table(labels, view.rows):
            typer.echo(line)
    else:
        typer.echo("No readings received.")

    typer.echo()
    echo_heading("Charts")
    for chart in view.charts:
        if chart.available:
            typer.echo(f"{chart.title}: {len(chart.positions)} points")
        else:
            typer.echo(f"{chart.title}: {chart.placeholder}")
