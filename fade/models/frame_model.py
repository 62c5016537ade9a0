"""Модели кадров анимации и параметров расписания."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from PIL import Image

from fade.models.errors import ConfigurationError

DEFAULT_FRAME_COUNT = 10
DEFAULT_ENDPOINT_DURATION_MS = 1000.0
DEFAULT_CONVERSION_SPEED = 10
MIN_CONVERSION_SPEED = 1
MAX_CONVERSION_SPEED = 30


@dataclass(frozen=True)
class FrameSpec:
    """Готовый кадр выходной последовательности.

    Fields:
        index: Порядковый номер кадра в анимации (с нуля).
        image: Изображение кадра.
        duration_ms: Длительность показа, мс.
        is_endpoint: True для кадров-оригиналов, False для промежуточных.
    """
    index: int
    image: Image.Image
    duration_ms: float
    is_endpoint: bool = False

    @property
    def name(self) -> str:
        return f"{self.index:04d}"


@dataclass(frozen=True)
class ScheduleConfig:
    """Параметры расписания кадров.

    Fields:
        frame_count: Количество кадров на один переход (оригинал + промежуточные).
        endpoint_duration_ms: Длительность кадров-оригиналов, мс.
        step_duration_ms: Длительность промежуточных кадров, мс.
        conversion_speed: Скорость кодирования GIF, 1..30 (30 — быстрее, хуже качество).
    """
    frame_count: int = DEFAULT_FRAME_COUNT
    endpoint_duration_ms: float = DEFAULT_ENDPOINT_DURATION_MS
    step_duration_ms: float = DEFAULT_ENDPOINT_DURATION_MS / DEFAULT_FRAME_COUNT
    conversion_speed: int = DEFAULT_CONVERSION_SPEED

    @classmethod
    def create(
        cls,
        frame_count: int = DEFAULT_FRAME_COUNT,
        endpoint_duration_ms: float = DEFAULT_ENDPOINT_DURATION_MS,
        step_duration_ms: Optional[float] = None,
        conversion_speed: int = DEFAULT_CONVERSION_SPEED,
    ) -> "ScheduleConfig":
        """Проверяет параметры и собирает конфигурацию.

        Если `step_duration_ms` не задан, он выводится из количества кадров:
        секунда делится на `frame_count`.

        Raises:
            ConfigurationError: при недопустимом значении любого параметра.
        """
        if frame_count < 1:
            raise ConfigurationError(f"Количество кадров должно быть >= 1, получено {frame_count}")
        if not MIN_CONVERSION_SPEED <= conversion_speed <= MAX_CONVERSION_SPEED:
            raise ConfigurationError(
                f"Скорость конвертации должна быть в диапазоне "
                f"{MIN_CONVERSION_SPEED}..{MAX_CONVERSION_SPEED}, получено {conversion_speed}"
            )
        if step_duration_ms is None:
            step_duration_ms = 1000.0 / frame_count
        if not (math.isfinite(endpoint_duration_ms) and math.isfinite(step_duration_ms)):
            raise ConfigurationError(
                f"Длительность кадра должна быть конечным числом, получено "
                f"{endpoint_duration_ms} / {step_duration_ms}"
            )
        if endpoint_duration_ms < 0 or step_duration_ms < 0:
            raise ConfigurationError("Длительность кадра не может быть отрицательной")
        return cls(
            frame_count=frame_count,
            endpoint_duration_ms=float(endpoint_duration_ms),
            step_duration_ms=float(step_duration_ms),
            conversion_speed=conversion_speed,
        )
