from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import typer

from cli.client import SensorClient
from cli.config import CLIConfig, load_config
from cli.render import echo_panel
from models.readings import SortField
from services.exporter import EXPORT_FILENAME
from services.panel import SensorPanel


@dataclass
class CLIState:
    config: CLIConfig
    client: SensorClient


app = typer.Typer(
    help="Inspect and export readings from the sensor data endpoint.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    return state


def _load_panel(state: CLIState) -> SensorPanel:
    panel = SensorPanel()
    panel.apply_snapshot(state.client.fetch_readings())
    return panel


@app.callback()
def main(
    ctx: typer.Context,
    url: Optional[str] = typer.Option(
        None,
        "--url",
        "-u",
        help="Sensor data URL (defaults to SENSOR_DATA_URL env or http://localhost:8000/sensorData).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the sensor endpoint.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(sensor_data_url=url, timeout=timeout)
    client = SensorClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("snapshot")
def snapshot_command(
    ctx: typer.Context,
    sort: Optional[SortField] = typer.Option(
        None,
        "--sort",
        "-s",
        help="Order readings by this field before rendering.",
    ),
    descending: bool = typer.Option(
        False,
        "--descending",
        help="Sort in descending order (requires --sort).",
    ),
) -> None:
    """Fetch readings once and print the latest table."""
    state = _get_state(ctx)
    if descending and sort is None:
        raise typer.BadParameter("--descending requires --sort.")
    panel = _load_panel(state)
    if sort is not None:
        panel.sort(sort)
        if descending:
            # A second click on the same header flips to descending.
            panel.sort(sort)
    echo_panel(panel.render())


@app.command("export")
def export_command(
    ctx: typer.Context,
    path: Path = typer.Argument(
        Path(EXPORT_FILENAME),
        dir_okay=False,
        writable=True,
        help="Destination spreadsheet file.",
    ),
    sort: Optional[SortField] = typer.Option(
        None,
        "--sort",
        "-s",
        help="Order readings by this field before exporting.",
    ),
) -> None:
    """Fetch readings once and write them to a spreadsheet."""
    state = _get_state(ctx)
    panel = _load_panel(state)
    if sort is not None:
        panel.sort(sort)
    export = panel.export()
    path.write_bytes(export.content)
    typer.secho(
        f"Exported {len(panel.readings)} readings to {path}",
        fg=typer.colors.GREEN,
    )
