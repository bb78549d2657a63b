# -*- coding: utf-8 -*-
"""
Тесты для core/utils/api_client.py
Тестирует:
- Валидацию ввода и конфигурации (без обращения к сети)
- Построение URL
- Классификацию ошибок транспорта, HTTP-статусов и тела ответа
- Внешний таймаут и отмену
"""
import asyncio

import httpx
import pytest

from conftest import LONDON_PAYLOAD, TEST_BASE_URL, TransportStub, connection_refused, json_handler
from config.app_config import WeatherConfig
from core.exceptions import ConfigError, NetworkError, ParseError, ProtocolError, ValidationError
from core.utils.api_client import FetchResult, WeatherApiClient
from core.utils.validator import MAX_CITY_LENGTH


async def test_success_returns_valid_model(config):
    stub = TransportStub(json_handler(LONDON_PAYLOAD))
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data("London")

    assert result.ok
    assert result.error is None
    assert result.data.is_valid
    assert result.data.city_name == "London"
    assert stub.calls == 1


async def test_city_name_comes_from_payload(config):
    payload = dict(LONDON_PAYLOAD, name="City of London")
    stub = TransportStub(json_handler(payload))
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data("london")

    assert result.data.city_name == "City of London"


@pytest.mark.parametrize("city", ["", "   ", "\t\n"])
async def test_blank_city_is_validation_error(config, city):
    stub = TransportStub(json_handler(LONDON_PAYLOAD))
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data(city)

    assert isinstance(result.error, ValidationError)
    assert result.message
    assert stub.calls == 0


async def test_non_string_city_is_validation_error(config):
    stub = TransportStub(json_handler(LONDON_PAYLOAD))
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data(None)

    assert isinstance(result.error, ValidationError)
    assert stub.calls == 0


async def test_too_long_city_is_validation_error(config):
    stub = TransportStub(json_handler(LONDON_PAYLOAD))
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data("x" * (MAX_CITY_LENGTH + 1))

    assert isinstance(result.error, ValidationError)
    assert str(MAX_CITY_LENGTH) in result.message
    assert stub.calls == 0


@pytest.mark.parametrize("api_key",["", "   ", "YOUR_API_KEY_HERE"])
async def test_missing_api_key_is_config_error(api_key):
    stub = TransportStub(json_handler(LONDON_PAYLOAD))
    config = WeatherConfig(api_key=api_key, base_url=TEST_BASE_URL)
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data("Paris")

    assert isinstance(result.error, ConfigError)
    assert not result.ok
    assert stub.calls == 0


async def test_request_url_encodes_city_and_key(config):
    stub = TransportStub(json_handler(LONDON_PAYLOAD))
    async with WeatherApiClient(config, transport=stub.transport) as client:
        await client.get_weather_data("  New   York ")

    request = stub.requests[0]
    assert request.method == "GET"
    assert str(request.url).startswith(TEST_BASE_URL + "?")
    assert request.url.params["q"] == "New York"
    assert request.url.params["appid"] == "test-key"
    assert "q=New+York" in str(request.url)


def test_build_url_with_existing_query():
    client = WeatherApiClient(WeatherConfig(api_key="k", base_url="https://weather.test/w?units=metric"))
    assert client.build_url("Tōkyō & Co") == "https://weather.test/w?units=metric&q=T%C5%8Dky%C5%8D+%26+Co&appid=k"


async def test_connection_failure_is_network_error(config):
    stub = TransportStub(connection_refused)
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, NetworkError)
    assert "Connection refused" in result.message
    assert stub.calls == 1


async def test_timeout_is_network_error(config):
    def timeout(request):
        raise httpx.ReadTimeout("", request=request)

    async with WeatherApiClient(config, transport=TransportStub(timeout).transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, NetworkError)
    assert result.message.endswith("ReadTimeout")


async def test_corrupt_gzip_body_is_parse_error(config):
    def handler(request):
        return httpx.Response(200, content=b"definitely not gzip", headers={"content-encoding": "gzip"})

    stub = TransportStub(handler)
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, ParseError)
    assert result.message.startswith("Data processing error")
    assert stub.calls == 1


async def test_request_error_is_network_error(config):
    def handler(request):
        raise httpx.TooManyRedirects("Exceeded maximum allowed redirects.", request=request)

    async with WeatherApiClient(config, transport=TransportStub(handler).transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, NetworkError)
    assert result.message == "Request failed: Exceeded maximum allowed redirects."


async def test_invalid_url_is_config_error(config):
    def handler(request):
        raise httpx.InvalidURL("Invalid port: '99999'")

    async with WeatherApiClient(config, transport=TransportStub(handler).transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, ConfigError)
    assert "Invalid port" in result.message


async def test_http_error_status_is_protocol_error(config):
    stub = TransportStub(json_handler({"cod": 401, "message": "Invalid API key"}, status_code=401))
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, ProtocolError)
    assert result.error.status_code == 401
    assert result.message == "HTTP error 401: Invalid API key"


async def test_http_error_without_json_body(config):
    def handler(request):
        return httpx.Response(503, text="<html>down</html>")

    async with WeatherApiClient(config, transport=TransportStub(handler).transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, ProtocolError)
    assert result.error.status_code == 503
    assert result.message == "HTTP error 503: Service Unavailable"


async def test_undecodable_body_is_parse_error(config):
    def handler(request):
        return httpx.Response(200, content=b"\xff\xfe\xfa{", headers={"content-type": "application/json; charset=utf-8"})

    async with WeatherApiClient(config, transport=TransportStub(handler).transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, ParseError)
    assert result.message.startswith("Data processing error")


async def test_malformed_json_is_parse_error(config):
    def handler(request):
        return httpx.Response(200, text="{not json")

    async with WeatherApiClient(config, transport=TransportStub(handler).transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, ParseError)
    assert "JSON parsing failed" in result.message


async def test_missing_required_fields_is_parse_error(config):
    stub = TransportStub(json_handler({"name": "", "weather": []}))
    async with WeatherApiClient(config, transport=stub.transport) as client:
        result = await client.get_weather_data("London")

    assert isinstance(result.error, ParseError)
    assert result.data is None
    assert "missing required fields" in result.message
    assert "name" in result.message


async def test_concurrent_calls_are_independent(config):
    stub = TransportStub(lambda request: httpx.Response(200, json=dict(LONDON_PAYLOAD, name=request.url.params["q"])))
    async with WeatherApiClient(config, transport=stub.transport) as client:
        results = await asyncio.gather(
            client.get_weather_data("Paris"),
            client.get_weather_data("Paris"),
            client.get_weather_data("Berlin"),
        )

    assert stub.calls == 3
    assert [r.data.city_name for r in results] == ["Paris", "Paris", "Berlin"]


async def test_caller_imposed_timeout_cancels_request(config):
    async def slow(request):
        await asyncio.sleep(10)
        return httpx.Response(200, json=LONDON_PAYLOAD)

    async with WeatherApiClient(config, transport=TransportStub(slow).transport) as client:
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(client.get_weather_data("London"), timeout=0.05)


def test_client_requires_configuration():
    with pytest.raises(RuntimeError):
        WeatherApiClient(None)


async def test_injected_http_client_is_not_closed(config):
    http_client = httpx.AsyncClient(transport=TransportStub(json_handler(LONDON_PAYLOAD)).transport)
    async with WeatherApiClient(config, http_client=http_client) as client:
        await client.get_weather_data("London")

    assert not http_client.is_closed
    await http_client.aclose()


def test_fetch_result_helpers():
    failure = FetchResult.failure(NetworkError("Network connection error: refused"))
    assert not failure.ok
    assert failure.message == "Network connection error: refused"
    assert FetchResult().ok is False
