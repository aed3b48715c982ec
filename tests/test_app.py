import io
import time
from typing import Iterator, List

import httpx
import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from app.main import create_app
from models.readings import Reading
from services.panel import SensorPanel
from services.poller import SensorPoller

SENSOR_URL = "http://sensors.test/sensorData"


class FakeSensorEndpoint:
    def __init__(self, payload: object = None) -> None:
        self.payload: object = [] if payload is None else payload
        self.requests = 0

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests += 1
        return httpx.Response(200, json=self.payload)


def _install(monkeypatch, endpoint: FakeSensorEndpoint, panel: SensorPanel) -> List[SensorPoller]:
    pollers: List[SensorPoller] = []

    def build_test_poller() -> SensorPoller:
        poller = SensorPoller(
            panel,
            SENSOR_URL,
            interval=60.0,
            client=httpx.AsyncClient(transport=httpx.MockTransport(endpoint)),
        )
        pollers.append(poller)
        return poller

    build_test_poller.cache_clear = lambda: None  # type: ignore[attr-defined]

    monkeypatch.setattr("app.main.build_default_poller", build_test_poller)
    monkeypatch.setattr("app.api.build_default_panel", lambda: panel)
    monkeypatch.setattr("app.web.build_default_panel", lambda: panel)
    return pollers


@pytest.fixture
def panel() -> SensorPanel:
    return SensorPanel()


@pytest.fixture
def api_client(panel, monkeypatch) -> Iterator[TestClient]:
    _install(monkeypatch, FakeSensorEndpoint(), panel)
    with TestClient(create_app()) as client:
        _wait_until_loaded(client)
        yield client


def _wait_until_loaded(client: TestClient, timeout: float = 5.0) -> dict:
    deadline = time.monotonic() + timeout
    last_payload: dict | None = None
    while time.monotonic() < deadline:
        response = client.get("/panel")
        assert response.status_code == 200
        last_payload = response.json()
        if not last_payload["loading"]:
            return last_payload
        time.sleep(0.02)
    pytest.fail(f"Panel never finished loading: {last_payload}")


def _chart(payload: dict, field: str) -> dict:
    return next(chart for chart in payload["charts"] if chart["field"] == field)


def test_lifespan_polls_on_startup_and_stops_on_shutdown(panel, monkeypatch) -> None:
    endpoint = FakeSensorEndpoint(
        [{"temperature": 20.123, "humidity": 55.456, "pressure": 1012.789}]
    )
    pollers = _install(monkeypatch, endpoint, panel)

    with TestClient(create_app()) as client:
        payload = _wait_until_loaded(client)
        assert pollers[0].running is True

    assert endpoint.requests == 1
    assert pollers[0].running is False
    assert panel.closed is True
    assert payload["title"] == "SCADA HMI"
    assert payload["total_readings"] == 1
    assert payload["rows"] == [
        {"temperature": "20.12", "pressure": "1012.79", "humidity": "55.46"}
    ]
    pressure = _chart(payload, "pressure")
    assert pressure["available"] is True
    assert pressure["image_url"].endswith("/panel/charts/pressure.png")


def test_panel_view_without_pressure(api_client: TestClient, panel) -> None:
    panel.apply_snapshot([Reading(temperature=20, humidity=50)])

    payload = api_client.get("/panel").json()

    assert payload["rows"] == [{"temperature": "20.00", "pressure": "N/A", "humidity": "50.00"}]
    pressure = _chart(payload, "pressure")
    assert pressure["available"] is False
    assert pressure["placeholder"] == "No data available for Pressure."
    assert pressure["image_url"] is None

    assert api_client.get("/panel/charts/pressure.png").status_code == 404
    temperature_response = api_client.get("/panel/charts/temperature.png")
    assert temperature_response.status_code == 200
    assert temperature_response.headers["content-type"] == "image/png"


def test_sort_endpoint_toggles_direction(api_client: TestClient, panel) -> None:
    panel.apply_snapshot(
        [
            Reading(temperature=22.0, humidity=40.0),
            Reading(temperature=18.0, humidity=45.0),
            Reading(temperature=25.0, humidity=42.0),
        ]
    )

    first = api_client.post("/panel/sort/temperature").json()
    second = api_client.post("/panel/sort/temperature").json()
    third = api_client.post("/panel/sort/temperature").json()

    assert first["sort"] == {"field": "temperature", "direction": "ascending"}
    assert [row["temperature"] for row in first["rows"]] == ["18.00", "22.00", "25.00"]
    assert second["sort"] == {"field": "temperature", "direction": "descending"}
    assert [row["temperature"] for row in second["rows"]] == ["25.00", "22.00", "18.00"]
    assert third["sort"]["direction"] == "ascending"


def test_sort_endpoint_rejects_unknown_field(api_client: TestClient) -> None:
    response = api_client.post("/panel/sort/altitude")

    assert response.status_code == 422


def test_export_endpoint_downloads_spreadsheet(api_client: TestClient, panel) -> None:
    panel.apply_snapshot(
        [
            Reading(temperature=20.0, humidity=50.0, pressure=1000.0),
            Reading(temperature=21.0, humidity=51.0, pressure=1001.0),
            Reading(temperature=22.0, humidity=52.0, pressure=1002.0),
        ]
    )

    response = api_client.get("/panel/export")

    assert response.status_code == 200
    assert response.headers["content-disposition"] == 'attachment; filename="sensor_data.xlsx"'
    workbook = load_workbook(io.BytesIO(response.content))
    rows = list(workbook["SensorData"].iter_rows(values_only=True))
    assert rows[0] == ("temperature", "humidity", "pressure")
    assert len(rows) == 4


def test_ui_renders_table_and_sorts(api_client: TestClient, panel) -> None:
    panel.apply_snapshot([Reading(temperature=20.123, humidity=55.456)])

    response = api_client.get("/ui")

    assert response.status_code == 200
    assert "Loading..." not in response.text
    assert "20.12" in response.text
    assert "No data available for Pressure." in response.text
    assert "Export to Excel" in response.text

    redirected = api_client.post("/ui/sort/humidity")
    assert redirected.status_code == 200
    assert "▲" in redirected.text


def test_ui_while_loading(monkeypatch) -> None:
    panel = SensorPanel()
    monkeypatch.setattr("app.web.build_default_panel", lambda: panel)

    # Without the lifespan the poller never runs and the panel stays loading.
    client = TestClient(create_app())
    response = client.get("/ui")

    assert response.status_code == 200
    assert "Loading..." in response.text
    assert "<table>" not in response.text


def test_health(api_client: TestClient) -> None:
    assert api_client.get("/health").json() == {"status": "ok"}
