"""Планировщик анимации: обходит все пары изображений по кругу.

image0 -> image1 -> ... -> imageN-1 -> image0. Последняя пара замыкает цикл,
поэтому GIF проигрывается без скачка.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence

from fade.models.frame_model import FrameSpec, ScheduleConfig
from fade.models.image_model import ImageData
from fade.services.interpolation_service import InterpolationService


def total_frames(images_count: int, config: ScheduleConfig) -> int:
    return images_count * config.frame_count


@dataclass
class SchedulerService:
    _interpolation_service: InterpolationService = field(default_factory=InterpolationService)

    def schedule(self, images: Sequence[ImageData], config: ScheduleConfig) -> List[FrameSpec]:
        """Возвращает все кадры анимации в порядке показа.

        Длина результата равна `len(images) * config.frame_count`. Проверки
        (не менее двух изображений, одинаковые размеры) выполняются до вызова.
        """
        return list(self.iter_schedule(images, config))

    def iter_schedule(self, images: Sequence[ImageData], config: ScheduleConfig) -> Iterator[FrameSpec]:
        """Ленивая версия `schedule`; удобна для вывода прогресса."""
        count = len(images)
        for i, image_a in enumerate(images):
            image_b = images[(i + 1) % count]
            yield from self._interpolation_service.iter_interpolate(
                image_a,
                image_b,
                config.frame_count,
                config.endpoint_duration_ms,
                config.step_duration_ms,
                start_index=i * config.frame_count,
            )
