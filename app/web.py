from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from models.readings import SortDirection, SortField
from services.panel import SensorPanel, build_default_panel
from settings import get_settings


templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent / "templates"))

_SORT_MARKERS = {
    SortDirection.ascending: "▲",
    SortDirection.descending: "▼",
}


def get_panel() -> SensorPanel:
    return build_default_panel()


router = APIRouter(include_in_schema=False)


@router.get("/ui", name="ui_index", response_class=HTMLResponse)
async def ui_index(
    request: Request,
    panel: SensorPanel = Depends(get_panel),
) -> HTMLResponse:
    view = panel.render()
    return templates.TemplateResponse(
        request,
        "ui/index.html",
        {
            "view": view,
            "sort_markers": _SORT_MARKERS,
            "refresh_seconds": int(get_settings().poll_interval),
        },
    )


@router.post("/ui/sort/{field}", name="ui_sort")
async def ui_sort(
    request: Request,
    field: SortField,
    panel: SensorPanel = Depends(get_panel),
) -> RedirectResponse:
    panel.sort(field)
    return RedirectResponse(
        url=str(request.url_for("ui_index")),
        status_code=status.HTTP_303_SEE_OTHER,
    )
