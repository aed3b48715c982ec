"""HTTP route definitions for the panel."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from app.schemas import (
    ChartModel,
    PanelViewModel,
    SortState,
    TableHeaderModel,
    TableRowModel,
)
from models.readings import SortField
from services.charts import render_chart_png
from services.panel import SensorPanel, build_default_panel
from services.renderer import PanelView

router = APIRouter()


def get_panel() -> SensorPanel:
    return build_default_panel()


def to_view_model(view: PanelView, request: Request) -> PanelViewModel:
    sort_state = None
    if view.sort_config is not None:
        sort_state = SortState(
            field=view.sort_config.field, direction=view.sort_config.direction
        )
    return PanelViewModel(
        title=view.title,
        subtitle=view.subtitle,
        loading=view.loading,
        total_readings=view.total_readings,
        sort=sort_state,
        headers=[
            TableHeaderModel(
                field=header.field,
                label=header.label,
                sort_direction=header.sort_direction,
            )
            for header in view.headers
        ],
        rows=[
            TableRowModel(
                temperature=row.temperature,
                pressure=row.pressure,
                humidity=row.humidity,
            )
            for row in view.rows
        ],
        charts=[
            ChartModel(
                field=chart.field,
                title=chart.title,
                label=chart.label,
                available=chart.available,
                placeholder=chart.placeholder,
                positions=chart.positions,
                values=chart.values,
                image_url=(
                    str(request.url_for("panel_chart", field=chart.field.value))
                    if chart.available
                    else None
                ),
            )
            for chart in view.charts
        ],
    )


@router.get(
    "/panel",
    response_model=PanelViewModel,
    summary="Current panel view: loading state, recent readings and chart series.",
)
async def get_panel_view(
    request: Request,
    panel: SensorPanel = Depends(get_panel),
) -> PanelViewModel:
    return to_view_model(panel.render(), request)


@router.post(
    "/panel/sort/{field}",
    response_model=PanelViewModel,
    summary="Sort readings by a field, toggling between ascending and descending.",
)
async def sort_panel(
    request: Request,
    field: SortField,
    panel: SensorPanel = Depends(get_panel),
) -> PanelViewModel:
    panel.sort(field)
    return to_view_model(panel.render(), request)


@router.get(
    "/panel/export",
    summary="Download all readings as a spreadsheet.",
    response_class=Response,
)
async def export_panel(panel: SensorPanel = Depends(get_panel)) -> Response:
    export = panel.export()
    return Response(
        content=export.content,
        media_type=export.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export.filename}"'},
    )


@router.get(
    "/panel/charts/{field}.png",
    name="panel_chart",
    summary="Line chart of one reading attribute over the whole list.",
    response_class=Response,
)
async def get_panel_chart(
    field: SortField,
    panel: SensorPanel = Depends(get_panel),
) -> Response:
    view = panel.render()
    chart = view.chart(field)
    if view.loading or chart is None or not chart.available:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No chart available for {field.value}.",
        )
    return Response(content=render_chart_png(chart), media_type="image/png")


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /ui for the sensor panel."}
