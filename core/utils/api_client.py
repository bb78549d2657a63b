# -*- coding: utf-8 -*-
"""
Асинхронный клиент OpenWeatherMap (current weather).

Поддерживает:
- Один запрос на вызов: await client.get_weather_data("London")
- Классификацию результата: успех / ValidationError / ConfigError /
  NetworkError / ProtocolError / ParseError
- Никаких повторов, кэша и собственных таймаутов: таймаут — на стороне вызывающего
  (asyncio.wait_for), отмена задачи пробрасывается как есть

Клиент НЕ публикует события — это делает WeatherService (или вызывающий код).
"""
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlencode

import httpx

from config.app_config import WeatherConfig
from core.exceptions import (
    ConfigError,
    NetworkError,
    ParseError,
    ProtocolError,
    ValidationError,
    WeatherError,
)
from core.models.weather_response import WeatherData
from core.utils.response_parser import parse_weather_data
from core.utils.validator import normalize_city_name

logger = logging.getLogger("api_client")


@dataclass(frozen=True)
class FetchResult:
    """Итог одного запроса: либо валидная модель, либо ошибка-значение."""
    data: Optional[WeatherData] = None
    error: Optional[WeatherError] = None

    @classmethod
    def success(cls, data: WeatherData) -> "FetchResult":
        return cls(data=data)

    @classmethod
    def failure(cls, error: WeatherError) -> "FetchResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None and self.data is not None

    @property
    def message(self) -> str:
        return str(self.error) if self.error is not None else ""


class WeatherApiClient:
    """Клиент для OpenWeatherMap API."""

    def __init__(
        self,
        config: WeatherConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if config is None:
            # Нарушение контракта, а не ошибка времени выполнения
            raise RuntimeError("WeatherApiClient requires a configuration source")
        self.config = config
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=config.request_timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "WeatherApiClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    def build_url(self, city: str) -> str:
        """Собирает URL запроса: {base_url}?q={city}&appid={api_key}."""
        query = urlencode({"q": city, "appid": self.config.api_key})
        separator = "&" if "?" in self.config.base_url else "?"
        return f"{self.config.base_url}{separator}{query}"

    async def get_weather_data(self, city: str) -> FetchResult:
        """
        Получает текущую погоду для города.

        Args:
            city (str): Название города

        Returns:
            FetchResult: модель с is_valid == True или ошибка-значение
        """
        # === 1. ВАЛИДАЦИЯ ВВОДА ===
        try:
            city = normalize_city_name(city)
        except ValueError as e:
            return self._fail(ValidationError(f"City name is invalid: {e}"))
        if not city:
            return self._fail(ValidationError("City name cannot be empty"))

        # === 2. ПРОВЕРКА КОНФИГУРАЦИИ ===
        if not self.config.is_api_key_configured():
            return self._fail(ConfigError(
                "API key not configured. Set OPENWEATHER_API_KEY or provide config.json"
            ))

        # === 3. ЗАПРОС ===
        url = self.build_url(city)
        logger.info(f"🌍 Запрос погоды для: {city}")
        try:
            response = await self._client.get(url)
        except httpx.DecodingError as e:
            return self._fail(ParseError(f"Data processing error: {self._describe(e)}"))
        except httpx.TransportError as e:
            return self._fail(NetworkError(f"Network connection error: {self._describe(e)}"))
        except httpx.RequestError as e:
            return self._fail(NetworkError(f"Request failed: {self._describe(e)}"))
        except httpx.InvalidURL as e:
            return self._fail(ConfigError(f"Invalid base URL {self.config.base_url!r}: {e}"))

        # === 4. КЛАССИФИКАЦИЯ ОТВЕТА ===
        if not response.is_success:
            return self._fail(ProtocolError(
                f"HTTP error {response.status_code}: {self._error_reason(response)}",
                status_code=response.status_code,
            ))

        try:
            body = response.content.decode(response.charset_encoding or "utf-8")
        except (UnicodeDecodeError, LookupError) as e:
            return self._fail(ParseError(f"Data processing error: {e}"))

        # === 5. РАЗБОР ===
        try:
            weather = parse_weather_data(body)
        except ParseError as e:
            return self._fail(e)

        if not weather.is_valid:
            missing = ", ".join(weather.missing_fields())
            return self._fail(ParseError(f"Weather data is missing required fields: {missing}"))

        logger.info(f"✅ Погода получена: {weather.city_name}, {weather.primary_description}")
        return FetchResult.success(weather)

    # === ВСПОМОГАТЕЛЬНОЕ ===
    @staticmethod
    def _fail(error: WeatherError) -> FetchResult:
        logger.error(f"❌ {error.kind}: {error}")
        return FetchResult.failure(error)

    @staticmethod
    def _describe(exc: Exception) -> str:
        return str(exc) or exc.__class__.__name__

    @staticmethod
    def _error_reason(response: httpx.Response) -> str:
        # OpenWeatherMap кладёт причину в {"cod": ..., "message": ...}
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict) and isinstance(payload.get("message"), str) and payload["message"]:
            return payload["message"]
        return response.reason_phrase or "Unknown error"

