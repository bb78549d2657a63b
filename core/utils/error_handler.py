# -*- coding: utf-8 -*-
"""
Утилита для централизованной обработки ошибок.
"""

import logging
from typing import Any, Callable, Optional

logger = logging.getLogger("error_handler")


def log_exception(exception: Exception, message: str = "Необработанное исключение", context: Optional[dict] = None):
    """
    Просто логирует исключение без выбрасывания.

    Args:
        exception (Exception): Исключение
        message (str): Описание
        context (dict): Контекст (event_type, handler и т.п.)
    """
    log_context = f" | Контекст: {context}" if context else ""
    logger.error(f"{message}{log_context} | Ошибка: {exception!r}", exc_info=exception)


def safe_call(func: Callable[..., Any], *args, context: Optional[dict] = None, **kwargs) -> bool:
    """
    Вызов обработчика с изоляцией ошибок.

    Returns:
        True, если обработчик отработал без исключения.
    """
    try:
        func(*args, **kwargs)
        return True
    except Exception as e:
        name = getattr(func, "__qualname__", repr(func))
        log_exception(e, f"Ошибка при вызове {name}", context)
        return False
