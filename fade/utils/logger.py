"""Настройка журналирования.

Формат: [HH:MM:SS] LEVEL   fade.services.gif_service: сообщение
Пользовательский вывод (параметры, прогресс) идёт в stdout через `fade.ui.console`,
журнал пишется в stderr.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER = "fade"
LOG_FORMAT = "[%(asctime)s] %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%H:%M:%S"


def configure_logger(verbose: bool = False, stream: Optional[TextIO] = None) -> logging.Logger:
    """Настраивает корневой логгер приложения.

    Повторный вызов заменяет ранее установленный обработчик, а не добавляет второй.

    Args:
        verbose: Включить уровень DEBUG.
        stream: Поток вывода, по умолчанию stderr.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        if getattr(handler, "_fade_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._fade_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Возвращает логгер модуля внутри иерархии `fade`."""
    if name != ROOT_LOGGER and not name.startswith(ROOT_LOGGER + "."):
        name = f"{ROOT_LOGGER}.{name}"
    return logging.getLogger(name)
