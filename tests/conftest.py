"""Shared fixtures: canned CPTEC documents, a mock transport and a fake geocoder."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Awaitable, Callable, Dict, List, Optional, Union

import httpx
import pytest

from cptec_forecast.weather.client import CptecClient
from cptec_forecast.weather.geocoding import LocationResolver
from cptec_forecast.weather.service import WeatherService

BASE_URL = "http://cptec.test/XML"

CITY_PATH = "/XML/listaCidades"
FORECAST_PATH = "/XML/cidade/222/previsao.xml"
CONDITIONS_PATH = "/XML/capitais/condicoesAtuais.xml"

XML_DECLARATION = '<?xml version="1.0" encoding="ISO-8859-1"?>'


def latin1(body: str) -> bytes:
    return (XML_DECLARATION + body).encode("iso-8859-1")


def city_xml(*cities: tuple) -> bytes:
    entries = "".join(
        f"<cidade><nome>{name}</nome><uf>{uf}</uf><id>{code}</id></cidade>"
        for name, uf, code in cities
    )
    return latin1(f"<cidades>{entries}</cidades>")


def forecast_xml(days: List[tuple], updated: Optional[str] = "2024-05-10") -> bytes:
    entries = "".join(
        f"<previsao><dia>{day}</dia><tempo>{code}</tempo>"
        f"<maxima>{tmax}</maxima><minima>{tmin}</minima><iuv>{uv}</iuv></previsao>"
        for day, code, tmax, tmin, uv in days
    )
    updated_tag = f"<atualizacao>{updated}</atualizacao>" if updated else ""
    return latin1(
        f"<cidade><nome>Brasília</nome><uf>DF</uf>{updated_tag}{entries}</cidade>"
    )


def metar_xml(code: str, temperature: str = "24", extra: str = "") -> str:
    return (
        f"<metar><codigo>{code}</codigo><atualizacao>10/05/2024 12:00:00</atualizacao>"
        f"<pressao>1017</pressao><temperatura>{temperature}</temperatura><tempo>ps</tempo>"
        f"<tempo_desc>Predomínio de Sol</tempo_desc><umidade>45</umidade>"
        f"<vento_dir>90</vento_dir><vento_int>11</vento_int>"
        f"<visibilidade>>10000</visibilidade>{extra}</metar>"
    )


def conditions_xml(*metars: str) -> bytes:
    return latin1(f"<capitais>{''.join(metars)}</capitais>")


BRASILIA_CITY = city_xml(("Brasília", "DF", 222))
THREE_DAYS = forecast_xml([
    ("2024-05-10", "ps", 28, 15, 9.0),
    ("2024-05-11", "pn", 27, 16, 8.5),
    ("2024-05-12", "c", 24, 17, 6.0),
])
CAPITALS = conditions_xml(metar_xml("SBGR", temperature="19"), metar_xml("SBBR"))

Route = Union[tuple, Callable[[httpx.Request], Union[httpx.Response, Awaitable[httpx.Response]]]]


class FakeCptec:
    """MockTransport handler serving canned responses by URL path."""

    def __init__(self, routes: Dict[str, Route]):
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404)
        if callable(route):
            return route(request)
        status, body = route
        return httpx.Response(status, content=body)

    def paths(self) -> List[str]:
        return [request.url.path for request in self.requests]

    def client(self) -> CptecClient:
        transport = httpx.MockTransport(self.handler)
        return CptecClient(base_url=BASE_URL, http_client=httpx.AsyncClient(transport=transport))


def connect_error(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


def read_timeout(request: httpx.Request) -> httpx.Response:
    raise httpx.ReadTimeout("timed out", request=request)


class FakeGeolocator:
    """Stands in for geopy's Nominatim."""

    def __init__(self, address: Optional[dict] = None, error: Optional[Exception] = None, empty: bool = False):
        self.address = address
        self.error = error
        self.empty = empty
        self.calls: List[tuple] = []

    def reverse(self, query, **kwargs):
        self.calls.append((query, kwargs))
        if self.error is not None:
            raise self.error
        if self.empty:
            return None
        return SimpleNamespace(raw={"address": self.address or {}})


@pytest.fixture
def healthy_routes() -> Dict[str, Route]:
    return {
        CITY_PATH: (200, BRASILIA_CITY),
        FORECAST_PATH: (200, THREE_DAYS),
        CONDITIONS_PATH: (200, CAPITALS),
    }


@pytest.fixture
def make_service():
    def _make(routes: Dict[str, Route], geolocator: Optional[FakeGeolocator] = None):
        fake = FakeCptec(routes)
        resolver = LocationResolver(geolocator=geolocator or FakeGeolocator())
        return fake, WeatherService(client=fake.client(), resolver=resolver)

    return _make
