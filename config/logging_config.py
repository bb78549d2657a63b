"""Module placeholder."""
# config/logging_config.py
import logging
import logging.handlers
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-15s | %(message)s"
LOG_FILE_NAME = "weather.log"

# имена обработчиков, по которым повторный вызов узнаёт уже подключённые
CONSOLE_HANDLER = "weather-console"
FILE_HANDLER = "weather-file"


def setup_logging(log_level: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """
    Логирование конвейера погоды: консоль всегда, файл weather.log — только если задан log_dir.
    Повторный вызов меняет уровень, но не дублирует обработчики.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(log_level).upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    installed = {handler.get_name() for handler in root.handlers}

    if CONSOLE_HANDLER not in installed:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if log_dir is not None and FILE_HANDLER not in installed:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / LOG_FILE_NAME,
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
            delay=True,
        )
        file_handler.set_name(FILE_HANDLER)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # каждый запрос httpx пишет INFO-строку — оставляем только предупреждения
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("logging_config").debug("🔧 Логирование инициализировано")
    return root
