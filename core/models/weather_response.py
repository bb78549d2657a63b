# core/models/weather_response.py
# -*- coding: utf-8 -*-
"""
Модели ответа погодного API.

- WeatherData — неизменяемое наблюдение, которое видят подписчики
- OpenWeatherPayload и вложенные схемы — Pydantic-схемы сырого JSON
  (лишние поля игнорируются, null считается отсутствием значения)
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

KELVIN_OFFSET = 273.15


def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin - KELVIN_OFFSET


def kelvin_to_fahrenheit(kelvin: float) -> float:
    return (kelvin - KELVIN_OFFSET) * 9 / 5 + 32


@dataclass(frozen=True)
class WeatherData:
    city_name: str = ""
    temperature_kelvin: Optional[float] = None
    descriptions: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # одни правила очистки для парсера, сериализатора и is_valid
        city = self.city_name.strip() if isinstance(self.city_name, str) else ""
        descriptions = tuple(d for d in self.descriptions if isinstance(d, str) and d.strip())
        object.__setattr__(self, "city_name", city)
        object.__setattr__(self, "descriptions", descriptions)

    @property
    def is_valid(self) -> bool:
        """Единственный фильтр перед отправкой модели подписчикам."""
        return bool(self.city_name) and len(self.descriptions) > 0

    @property
    def primary_description(self) -> str:
        return self.descriptions[0] if self.descriptions else ""

    @property
    def temperature_celsius(self) -> Optional[float]:
        if self.temperature_kelvin is None:
            return None
        return kelvin_to_celsius(self.temperature_kelvin)

    @property
    def temperature_fahrenheit(self) -> Optional[float]:
        if self.temperature_kelvin is None:
            return None
        return kelvin_to_fahrenheit(self.temperature_kelvin)

    def missing_fields(self) -> List[str]:
        """Список незаполненных обязательных полей (для сообщения об ошибке)."""
        missing = []
        if not self.city_name:
            missing.append("name")
        if not self.descriptions:
            missing.append("weather[].description")
        return missing


# === Pydantic-схемы сырого ответа ===
class WeatherCondition(BaseModel):
    model_config = ConfigDict(extra="ignore")

    description: Optional[str] = None


class MainBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    # строки, bool, NaN и Infinity не принимаются
    temp: Optional[float] = Field(default=None, strict=True, allow_inf_nan=False)


class OpenWeatherPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    weather: Optional[List[Optional[WeatherCondition]]] = None
    main: Optional[MainBlock] = None
