"""Module placeholder."""
# config/app_config.py
import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger("app_config")

DEFAULT_BASE_URL = "http://api.openweathermap.org/data/2.5/weather"
# Заглушки из шаблона config.json — считаем, что ключ не задан
PLACEHOLDER_KEYS = {"YOUR_API_KEY_HERE", "YOUR_API_KEY", "<api-key>"}


def _parse_timeout(value) -> Optional[float]:
    """Секунды таймаута; пусто — None. Нечисловое значение — ValueError."""
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"timeout must be a number, got {value!r}")
    return float(value)


@dataclass(frozen=True)
class WeatherConfig:
    api_key: str = ""
    base_url: str = DEFAULT_BASE_URL
    request_timeout: Optional[float] = None  # None — без таймаута на уровне конвейера
    log_level: str = "INFO"

    def is_api_key_configured(self) -> bool:
        key = (self.api_key or "").strip()
        return bool(key) and key not in PLACEHOLDER_KEYS

    @classmethod
    def load(cls) -> "WeatherConfig":
        try:
            timeout = _parse_timeout(os.getenv("WEATHER_REQUEST_TIMEOUT", ""))
        except (TypeError, ValueError) as e:
            logger.warning(f"⚠️ WEATHER_REQUEST_TIMEOUT проигнорирован: {e}")
            timeout = None
        return cls(
            api_key=os.getenv("OPENWEATHER_API_KEY", ""),
            base_url=os.getenv("OPENWEATHER_BASE_URL", "") or DEFAULT_BASE_URL,
            request_timeout=timeout,
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "WeatherConfig":
        """
        Читает config.json вида {"openWeatherMapApiKey": "...", "baseUrl": "..."}.
        Отсутствующий или битый файл — ненастроенная конфигурация, а не падение.
        """
        path = Path(path)
        if not path.exists():
            logger.warning(f"⚠️ Файл конфигурации не найден: {path}")
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"⚠️ Не удалось прочитать {path}: {e}")
            return cls()
        if not isinstance(raw, dict):
            logger.warning(f"⚠️ {path}: ожидался JSON-объект")
            return cls()

        try:
            timeout = _parse_timeout(raw.get("requestTimeout"))
        except (TypeError, ValueError) as e:
            logger.warning(f"⚠️ {path}: некорректный requestTimeout: {e}")
            return cls()
        return cls(
            api_key=str(raw.get("openWeatherMapApiKey") or ""),
            base_url=str(raw.get("baseUrl") or DEFAULT_BASE_URL),
            request_timeout=timeout,
            log_level=str(raw.get("logLevel") or "INFO"),
        )
