# -*- coding: utf-8 -*-
"""
Общие фикстуры: конфигурация, шина событий и заглушка HTTP-транспорта (без сети).
"""
import httpx
import pytest

from config.app_config import WeatherConfig
from core.event_bus import WeatherEventBus

TEST_BASE_URL = "https://weather.test/data/2.5/weather"

LONDON_PAYLOAD = {
    "coord": {"lon": -0.1257, "lat": 51.5085},
    "weather": [
        {"id": 800, "main": "Clear", "description": "clear sky", "icon": "01d"},
        {"id": 701, "main": "Mist", "description": "mist", "icon": "50d"},
    ],
    "main": {"temp": 288.15, "feels_like": 287.5, "humidity": 72},
    "name": "London",
    "cod": 200,
}


class TransportStub:
    """Считает вызовы и отдаёт ответы через httpx.MockTransport."""

    def __init__(self, handler):
        self.handler = handler
        self.calls = 0
        self.requests = []

    def __call__(self, request: httpx.Request):
        self.calls += 1
        self.requests.append(request)
        return self.handler(request)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def json_handler(payload, status_code: int = 200):
    def handler(request):
        return httpx.Response(status_code, json=payload)
    return handler


def connection_refused(request):
    raise httpx.ConnectError("[Errno 111] Connection refused", request=request)


@pytest.fixture
def config():
    return WeatherConfig(api_key="test-key", base_url=TEST_BASE_URL)


@pytest.fixture
def unconfigured():
    return WeatherConfig(api_key="", base_url=TEST_BASE_URL)


@pytest.fixture
def event_bus():
    bus = WeatherEventBus()
    yield bus
    bus.clear_all_handlers()
