# -*- coding: utf-8 -*-
"""
Форматирование погодной сводки (текст).
"""

from core.models.weather_response import WeatherData


def format_weather_summary(weather: WeatherData) -> str:
    """
    Формирует текстовую сводку.

    Returns:
        str: "Weather in London: 15.0°C (59.0°F), clear sky"
    """
    if weather.temperature_kelvin is None:
        temperature = "n/a"
    else:
        temperature = f"{weather.temperature_celsius:.1f}°C ({weather.temperature_fahrenheit:.1f}°F)"
    description = ", ".join(weather.descriptions) or "n/a"
    return f"Weather in {weather.city_name}: {temperature}, {description}"
