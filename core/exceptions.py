# -*- coding: utf-8 -*-
"""
Типизированные ошибки конвейера погоды.

Клиент API не выбрасывает их наружу: каждая ошибка возвращается
как значение внутри FetchResult, а подписчики получают только str(error).
"""

from typing import Optional


class WeatherError(Exception):
    """Базовая ошибка запроса погоды."""

    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(WeatherError):
    """Некорректный ввод (пустой город). До сети не доходит."""

    kind = "validation"


class ConfigError(WeatherError):
    """API-ключ не настроен. До сети не доходит."""

    kind = "config"


class NetworkError(WeatherError):
    """Ошибка транспорта: DNS, отказ соединения, таймаут."""

    kind = "network"


class ProtocolError(WeatherError):
    """HTTP-статус вне диапазона 2xx."""

    kind = "protocol"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ParseError(WeatherError):
    """Тело ответа не разбирается или не содержит обязательных полей."""

    kind = "parse"


__all__ = [
    "WeatherError",
    "ValidationError",
    "ConfigError",
    "NetworkError",
    "ProtocolError",
    "ParseError",
]
