# -*- coding: utf-8 -*-
"""
Тонкая обёртка: запрос погоды + пересылка результата в шину событий.
"""

import logging

from core.event_bus import WeatherEventBus
from core.utils.api_client import FetchResult, WeatherApiClient

logger = logging.getLogger("weather_service")


class WeatherService:
    def __init__(self, client: WeatherApiClient, event_bus: WeatherEventBus):
        self.client = client
        self.event_bus = event_bus

    async def request_weather(self, city: str) -> FetchResult:
        """
        Запрашивает погоду и публикует итог:
        валидная модель → канал data received, любая ошибка → канал request failed.
        """
        result = await self.client.get_weather_data(city)
        self.forward(result)
        return result

    def forward(self, result: FetchResult) -> None:
        if result.ok:
            delivered = self.event_bus.publish_data_received(result.data)
            logger.debug(f"📤 weather_data_received доставлено {delivered} подписчикам")
        else:
            message = result.message or "Unknown error occurred"
            delivered = self.event_bus.publish_request_failed(message)
            logger.debug(f"📤 weather_request_failed доставлено {delivered} подписчикам")
