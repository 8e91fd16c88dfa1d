"""Tests for the HTTP boundary and its response envelopes."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import cptec_forecast.api.endpoints as endpoints
from conftest import CITY_PATH, CONDITIONS_PATH, FORECAST_PATH, FakeGeolocator, latin1
from cptec_forecast.config import CONDITIONS_UNAVAILABLE_TEXT, NOT_AVAILABLE
from cptec_forecast.errors import ForecastUnavailableError, InvalidInputError
from cptec_forecast.main import create_app


@pytest.fixture
def state(healthy_routes):
    return {"routes": healthy_routes, "geolocator": FakeGeolocator(address={"suburb": "Asa Norte"})}


@pytest.fixture
def client(monkeypatch, make_service, state):
    def _service():
        _, service = make_service(state["routes"], state["geolocator"])
        return service

    monkeypatch.setattr(endpoints, "get_weather_service", _service)
    return TestClient(create_app())


def test_success_envelope(client) -> None:
    response = client.get("/weather/", params={"name": "Brasília"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    data = body["data"]
    assert data["location_label"] == "Brasília - DF"
    assert [day["day"] for day in data["forecast"]] == [1, 2, 3]
    assert data["current_conditions"]["station_code"] == "SBBR"


def test_coordinates(client) -> None:
    response = client.get("/weather/", params={"lat": -15.79, "lon": -47.88})

    assert response.status_code == 200
    assert response.json()["data"]["location_label"] == "Brasília - DF"


def test_degraded_conditions(client, state) -> None:
    state["routes"][CONDITIONS_PATH] = (503, b"")
    response = client.get("/weather/", params={"name": "Brasília"})

    assert response.status_code == 200
    conditions = response.json()["data"]["current_conditions"]
    assert conditions["description"] == CONDITIONS_UNAVAILABLE_TEXT
    assert conditions["temperature"] == NOT_AVAILABLE


@pytest.mark.parametrize(
    "params",
    [
        {},
        {"name": "  "},
        {"lat": -15.79},
        {"lon": -47.88},
        {"name": "Brasília", "lat": -15.79, "lon": -47.88},
        {"lat": 120, "lon": -47.88},
        {"lat": "north", "lon": -47.88},
    ],
)
def test_invalid_input(client, params) -> None:
    response = client.get("/weather/", params=params)

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"]


def test_missing_input_message(client) -> None:
    response = client.get("/weather/")
    assert response.json()["message"] == InvalidInputError.default_message


def test_city_not_found(client, state) -> None:
    state["routes"][CITY_PATH] = (200, latin1("<cidades></cidades>"))
    response = client.get("/weather/", params={"name": "Atlantis"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": "Cidade 'Atlantis' não encontrada no diretório de previsão.",
    }


def test_location_not_found(client, state) -> None:
    state["geolocator"] = FakeGeolocator(empty=True)
    response = client.get("/weather/", params={"lat": 0, "lon": -30})

    assert response.status_code == 500
    assert response.json()["success"] is False


def test_forecast_unavailable(client, state) -> None:
    state["routes"][FORECAST_PATH] = (502, b"")
    response = client.get("/weather/", params={"name": "Brasília"})

    assert response.status_code == 500
    assert response.json()["message"] == ForecastUnavailableError.default_message


def test_health(client) -> None:
    response = client.get("/weather/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_info(client) -> None:
    assert client.get("/weather/info").json()["service"] == "CPTEC Forecast Service"
    assert client.get("/api").json()["weather"] == "/weather"


def test_partial_coordinates_message(client) -> None:
    response = client.get("/weather/", params={"lat": -15.79})
    assert response.json()["message"] == "Latitude (lat) e Longitude (lon) são obrigatórias."
