"""Иерархия ошибок приложения.

Все ошибки неустранимы в пределах одного запуска: утилита сообщает о проблеме
и завершается. Частично записанный GIF не считается результатом.
"""
from __future__ import annotations


class FadeError(Exception):
    """Базовая ошибка утилиты."""


class ConfigurationError(FadeError):
    """Недопустимые параметры запуска или несовместимые изображения."""


class InputError(FadeError, IOError):
    """Исходный файл отсутствует, является каталогом или не читается."""


class OutputError(FadeError, IOError):
    """Не удалось записать каталог вывода, кадр PNG или файл JSON."""


class EncodeInitError(FadeError):
    """Кодировщик GIF не может быть создан для заданного пути или размеров."""


class EncodeFrameError(FadeError):
    """Кадр не удалось закодировать в GIF."""
