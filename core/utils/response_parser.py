# -*- coding: utf-8 -*-
"""
Разбор JSON-ответа OpenWeatherMap в WeatherData.

Двухуровневая политика:
1. Структурный разбор терпим к схеме: лишние поля игнорируются, null = отсутствует.
   Ошибка здесь — только если это не JSON или не объект ожидаемой формы.
2. Отсутствие обязательных полей НЕ выбрасывает исключение:
   модель возвращается с is_valid == False, проверка — на вызывающей стороне.
"""

import json
import logging
from typing import Union

from pydantic import ValidationError as PydanticValidationError

from core.exceptions import ParseError
from core.models.weather_response import (
    MainBlock,
    OpenWeatherPayload,
    WeatherCondition,
    WeatherData,
)

logger = logging.getLogger("response_parser")


def parse_weather_data(raw_body: Union[str, bytes]) -> WeatherData:
    """
    Преобразует тело ответа в WeatherData.

    Args:
        raw_body (str | bytes): Сырой JSON от API

    Returns:
        WeatherData: Модель (может быть невалидной — проверяйте is_valid)

    Raises:
        ParseError: Тело не является JSON-объектом ожидаемой формы
    """
    try:
        data = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
        logger.error(f"❌ JSON parsing failed: {e}")
        raise ParseError(f"JSON parsing failed: {e}") from e

    if not isinstance(data, dict):
        logger.error(f"❌ Ожидался JSON-объект, получено: {type(data).__name__}")
        raise ParseError(f"JSON parsing failed: expected an object, got {type(data).__name__}")

    try:
        payload = OpenWeatherPayload.model_validate(data)
    except PydanticValidationError as e:
        logger.error(f"❌ Неожиданная структура ответа: {e.error_count()} ошибок")
        raise ParseError(f"JSON parsing failed: unexpected payload shape ({e.errors()[0]['msg']})") from e

    # пустые описания и пробелы в имени отбрасывает сама WeatherData
    descriptions = [condition.description for condition in (payload.weather or []) if condition is not None]
    temperature = payload.main.temp if payload.main is not None else None

    weather = WeatherData(
        city_name=payload.name or "",
        temperature_kelvin=temperature,
        descriptions=descriptions,
    )
    logger.debug(f"Разобран ответ: {weather}")
    return weather


def serialize_weather_data(weather: WeatherData) -> str:
    """Собирает тело ответа в формате провайдера (обратная операция к parse_weather_data)."""
    payload = OpenWeatherPayload(
        name=weather.city_name,
        weather=[WeatherCondition(description=d) for d in weather.descriptions],
        main=MainBlock(temp=weather.temperature_kelvin),
    )
    return payload.model_dump_json(exclude_none=True)
