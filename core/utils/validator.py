"""Module placeholder."""
# core/utils/validator.py
import re

MAX_CITY_LENGTH = 100


def normalize_city_name(text: str) -> str:
    """Нормализация названия города: схлопываем пробелы. Слишком длинное имя — ValueError, не обрезка."""
    if not isinstance(text, str):
        raise ValueError("Input must be a string")
    text = re.sub(r"\s+", " ", text).strip()
    if len(text) > MAX_CITY_LENGTH:
        raise ValueError(f"longer than {MAX_CITY_LENGTH} characters")
    return text
