# weather_app.py
# -*- coding: utf-8 -*-
"""
Точка входа: запрос погоды для города с выводом результата через подписчиков.

Запуск:
    python weather_app.py London
    python weather_app.py "New York" config.json
"""
import asyncio
import logging
import sys
from typing import List, Optional

from config.app_config import WeatherConfig
from core.models.weather_response import WeatherData
from core.utils.formatter import format_weather_summary
from process_manager import ProcessManager

DEFAULT_CITY = "London"

logger = logging.getLogger("weather_app")


def on_weather_received(weather: WeatherData):
    logger.info(f"🌤️ {format_weather_summary(weather)}")
    logger.info(f"Description: {weather.primary_description}")


def on_weather_failed(message: str):
    logger.error(f"❌ Failed to get weather data: {message}")


async def run(city: str, manager: ProcessManager) -> int:
    """Один запрос погоды. Возвращает код выхода."""
    manager.initialize()
    try:
        manager.event_bus.subscribe_data_received(on_weather_received)
        manager.event_bus.subscribe_request_failed(on_weather_failed)
        result = await manager.weather_service.request_weather(city)
        return 0 if result.ok else 1
    finally:
        await manager.shutdown()


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    city = argv[0] if argv else DEFAULT_CITY
    config = WeatherConfig.from_json(argv[1]) if len(argv) > 1 else None
    return asyncio.run(run(city, ProcessManager(config=config)))


if __name__ == "__main__":
    sys.exit(main())
