# -*- coding: utf-8 -*-
"""
Шина событий (Event Bus) для погодных данных.

Архитектурный принцип:
- Производители (WeatherService или любой вызывающий код) → публикуют события
- Потребители (UI, логирование, хранилище) → подписываются на события
- event_bus.py НЕ импортирует api_client/weather_service — зависимости только в одну сторону
- Один экземпляр на процесс: создаётся в ProcessManager и передаётся явно

Использование:

# Потребитель:
def on_weather(data):
    print(data.city_name)

subscription = event_bus.subscribe_data_received(on_weather)

# Производитель:
event_bus.publish_data_received(weather_data)

# Отписка:
event_bus.unsubscribe(subscription)
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from core.models.weather_response import WeatherData
from core.utils.error_handler import safe_call

# Настройка логгера
logger = logging.getLogger("event_bus")

# Типы событий
DATA_RECEIVED = "weather_data_received"
REQUEST_FAILED = "weather_request_failed"
EVENT_TYPES = (DATA_RECEIVED, REQUEST_FAILED)

# Типы обработчиков
DataReceivedHandler = Callable[[WeatherData], None]
RequestFailedHandler = Callable[[str], None]
Handler = Callable[[Any], None]


@dataclass(frozen=True)
class Subscription:
    """Дескриптор подписки — нужен только для unsubscribe()."""
    event_type: str
    handler_id: int


class WeatherEventBus:
    """
    Синхронная шина с двумя независимыми каналами.

    Публикация вызывает всех подписчиков канала по порядку подписки до возврата
    из publish. Исключение в обработчике логируется и не прерывает остальных.
    Итерация идёт по снимку списка, поэтому подписка/отписка во время рассылки безопасна.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._ids = itertools.count(1)
        # Реестр обработчиков: event_type → [(handler_id, handler), ...]
        self._handlers: Dict[str, List[Tuple[int, Handler]]] = {event_type: [] for event_type in EVENT_TYPES}

    # === ПОДПИСКА ===
    def subscribe(self, event_type: str, handler: Handler) -> Subscription:
        """
        Подписка на событие.

        Args:
            event_type (str): DATA_RECEIVED или REQUEST_FAILED
            handler (callable): Функция с одним аргументом (WeatherData или str)

        Returns:
            Subscription: дескриптор для отписки
        """
        self._check_event_type(event_type)
        if not callable(handler):
            raise TypeError(f"Handler for {event_type} must be callable, got {handler!r}")
        with self._lock:
            handler_id = next(self._ids)
            self._handlers[event_type].append((handler_id, handler))
        logger.debug("Зарегистрирован обработчик #%s для события: %s", handler_id, event_type)
        return Subscription(event_type=event_type, handler_id=handler_id)

    def subscribe_data_received(self, handler: DataReceivedHandler) -> Subscription:
        return self.subscribe(DATA_RECEIVED, handler)

    def subscribe_request_failed(self, handler: RequestFailedHandler) -> Subscription:
        return self.subscribe(REQUEST_FAILED, handler)

    def unsubscribe(self, subscription: Subscription) -> bool:
        """
        Отписка от события.

        Returns:
            bool: False, если подписка уже снята или не найдена
        """
        with self._lock:
            handlers = self._handlers.get(subscription.event_type, [])
            for index, (handler_id, _) in enumerate(handlers):
                if handler_id == subscription.handler_id:
                    del handlers[index]
                    logger.debug("Обработчик #%s удалён для события: %s", handler_id, subscription.event_type)
                    return True
        logger.warning("Обработчик #%s не найден для события: %s", subscription.handler_id, subscription.event_type)
        return False

    # === ПУБЛИКАЦИЯ ===
    def emit_event_sync(self, event_type: str, payload: Any) -> int:
        """
        Синхронная публикация события всем подписчикам канала.

        Returns:
            int: Количество обработчиков, отработавших без ошибок
        """
        self._check_event_type(event_type)
        with self._lock:
            snapshot = list(self._handlers[event_type])

        if not snapshot:
            logger.debug("Нет обработчиков для события: %s", event_type)
            return 0

        logger.debug("Публикация события: %s, подписчиков: %s", event_type, len(snapshot))
        delivered = 0
        for handler_id, handler in snapshot:
            if safe_call(handler, payload, context={"event_type": event_type, "handler_id": handler_id}):
                delivered += 1
        return delivered

    def publish_data_received(self, data: WeatherData) -> int:
        if not isinstance(data, WeatherData) or not data.is_valid:
            raise ValueError(f"Only valid WeatherData can be published, got {data!r}")
        return self.emit_event_sync(DATA_RECEIVED, data)

    def publish_request_failed(self, message: str) -> int:
        if not isinstance(message, str) or not message.strip():
            raise ValueError("Failure message must be a non-empty string")
        return self.emit_event_sync(REQUEST_FAILED, message)

    # === СЛУЖЕБНОЕ ===
    def handler_count(self, event_type: str) -> int:
        self._check_event_type(event_type)
        with self._lock:
            return len(self._handlers[event_type])

    def clear_all_handlers(self) -> None:
        """Очищает все зарегистрированные обработчики. Используется в тестах и при shutdown."""
        with self._lock:
            for handlers in self._handlers.values():
                handlers.clear()
        logger.info("Все обработчики событий очищены.")

    @staticmethod
    def _check_event_type(event_type: str) -> None:
        if event_type not in EVENT_TYPES:
            raise ValueError(f"Unknown event type: {event_type!r}")
