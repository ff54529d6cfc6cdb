"""Утилиты для настройки логирования сервиса поиска."""
from __future__ import annotations

import logging
import os
from pathlib import Path

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def resolve_log_level(level_name: str | None = None) -> int:
    """Вернуть числовой уровень логирования; неизвестные имена дают INFO."""
    name = (level_name or os.getenv("SEARCHENGINE_LOG_LEVEL", "INFO")).upper()
    level = getattr(logging, name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


def setup_logging(level_name: str | None = None, log_file: str | Path | None = None) -> int:
    """Настроить логирование в файл и консоль и вернуть выбранный уровень.

    Повторный вызов ничего не меняет, если у корневого логгера уже есть обработчики.
    """
    root_logger = logging.getLogger()
    level = resolve_log_level(level_name)
    if root_logger.handlers:
        return root_logger.level

    log_path = Path(log_file or os.getenv("SEARCHENGINE_LOG_FILE", "searchengine.log"))
    log_path.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = logging.FileHandler(log_path, encoding="utf-8")
    file_handler.setFormatter(formatter)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)

    root_logger.setLevel(level)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(stream_handler)

    # uvicorn пишет через наши обработчики
    for logger_name in _SERVER_LOGGERS:
        server_logger = logging.getLogger(logger_name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(level)
    return level
