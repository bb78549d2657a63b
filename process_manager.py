# process_manager.py
# -*- coding: utf-8 -*-
"""
Координатор зависимостей процесса.
Инициализирует все сервисы один раз при старте и закрывает их при завершении.
Экземпляр создаётся в точке входа и передаётся явно — глобального доступа нет.
"""

import logging
from pathlib import Path
from typing import Optional

import httpx

from config.app_config import WeatherConfig
from config.logging_config import setup_logging
from core.event_bus import WeatherEventBus
from core.utils.api_client import WeatherApiClient
from core.weather_service import WeatherService

logger = logging.getLogger("process_manager")


class ProcessManager:
    """
    Единый контекст приложения. Все зависимости инициализируются здесь.
    """

    def __init__(
        self,
        config: Optional[WeatherConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        configure_logging: bool = True,
        log_dir: Optional[Path] = None,
    ):
        self._initialized = False
        self._configure_logging = configure_logging
        self._log_dir = log_dir
        self._transport = transport
        # Конфигурация (может быть передана явно, иначе читается из окружения)
        self._config: Optional[WeatherConfig] = config
        # Сервисы
        self._event_bus: Optional[WeatherEventBus] = None
        self._api_client: Optional[WeatherApiClient] = None
        self._weather_service: Optional[WeatherService] = None

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self):
        """Синхронная инициализация всех компонентов."""
        if self._initialized:
            return

        # 1. Загрузка конфигурации
        if self._config is None:
            self._config = WeatherConfig.load()

        # 2. Логирование
        if self._configure_logging:
            setup_logging(self._config.log_level, log_dir=self._log_dir)

        # 3. Шина событий — одна на процесс
        self._event_bus = WeatherEventBus()

        # 4. Клиент API и сервис пересылки
        self._api_client = WeatherApiClient(self._config, transport=self._transport)
        self._weather_service = WeatherService(self._api_client, self._event_bus)

        self._initialized = True
        if not self._config.is_api_key_configured():
            logger.warning("⚠️ API key не настроен — запросы будут завершаться ConfigError")
        logger.info("✅ ProcessManager: initialized")

    async def shutdown(self):
        """Завершение: закрываем HTTP-клиент и снимаем подписки."""
        if not self._initialized:
            return

        try:
            await self._api_client.aclose()
        finally:
            self._event_bus.clear_all_handlers()
            self._initialized = False
            logger.info("🛑 ProcessManager: shut down")

    # === ДОСТУП К КОМПОНЕНТАМ ===
    @property
    def config(self) -> WeatherConfig:
        self._require_initialized()
        return self._config

    @property
    def event_bus(self) -> WeatherEventBus:
        self._require_initialized()
        return self._event_bus

    @property
    def api_client(self) -> WeatherApiClient:
        self._require_initialized()
        return self._api_client

    @property
    def weather_service(self) -> WeatherService:
        self._require_initialized()
        return self._weather_service

    def _require_initialized(self):
        if not self._initialized:
            raise RuntimeError("ProcessManager.initialize() must be called before use")
