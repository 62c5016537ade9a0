"""Построение промежуточных кадров между двумя изображениями.

Принципы:
- SRP: сервис знает только про одну пару изображений; порядок пар задаёт планировщик.
- Попиксельная математика делегируется `BlendService`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

import numpy as np
from PIL import Image

from fade.models.frame_model import FrameSpec
from fade.models.image_model import ColorMode, ImageData
from fade.services.blend_service import MAX_WEIGHT, BlendService
from fade.utils.logger import get_logger

logger = get_logger(__name__)


def step_weight(step: int, frame_count: int) -> int:
    """Вес изображения A на шаге `step` (1 <= step < frame_count).

    Не возрастает и никогда не достигает 0. При `frame_count <= 255` строго
    меньше 255; при большем количестве кадров первые шаги дают ровно 255.
    """
    return MAX_WEIGHT - (step * MAX_WEIGHT) // frame_count


@dataclass
class InterpolationService:
    _blend_service: BlendService = field(default_factory=BlendService)

    def interpolate(self, image_a: ImageData, image_b: ImageData, frame_count: int,
                    endpoint_duration_ms: float, step_duration_ms: float,
                    start_index: int = 0) -> List[FrameSpec]:
        """Возвращает `frame_count` кадров перехода A -> B.

        Первый кадр — само изображение A с длительностью `endpoint_duration_ms`,
        остальные — смеси с длительностью `step_duration_ms`. Кадр B сюда
        не входит: его выдаст следующая пара.
        """
        return list(self.iter_interpolate(
            image_a, image_b, frame_count, endpoint_duration_ms, step_duration_ms, start_index
        ))

    def iter_interpolate(self, image_a: ImageData, image_b: ImageData, frame_count: int,
                         endpoint_duration_ms: float, step_duration_ms: float,
                         start_index: int = 0) -> Iterator[FrameSpec]:
        """Ленивая версия `interpolate`: кадры создаются по одному."""
        yield FrameSpec(
            index=start_index,
            image=image_a.pil_image,
            duration_ms=endpoint_duration_ms,
            is_endpoint=True,
        )
        if frame_count < 2:
            return

        # режим выбирается один раз на пару
        mode = ColorMode.for_pair(image_a.mode, image_b.mode)
        array_a = self._to_array(image_a, mode)
        array_b = self._to_array(image_b, mode)
        logger.debug(
            "Interpolating %s -> %s: %d frames, mode %s",
            image_a.label, image_b.label, frame_count, mode.value,
        )

        for step in range(1, frame_count):
            weight = step_weight(step, frame_count)
            blended = self._blend_service.blend_arrays(array_a, array_b, weight, mode)
            yield FrameSpec(
                index=start_index + step,
                image=Image.fromarray(blended),
                duration_ms=step_duration_ms,
            )

    # ---- Helpers ----
    def _to_array(self, image: ImageData, mode: ColorMode) -> np.ndarray:
        src = image.pil_image
        if src.mode != mode.value:
            src = src.convert(mode.value)
        return np.asarray(src, dtype=np.uint8)
