"""Экспорт animation.json с таблицей длительностей кадров (формат apngasm).

Таблица повторяет расписание `SchedulerService`: кадр-оригинал каждого перехода
получает длительность важного кадра, остальные — длительность шага.
"""
from __future__ import annotations

from pathlib import Path
from typing import List

import numpy as np

from fade.models.errors import OutputError
from fade.models.frame_model import ScheduleConfig
from fade.utils.logger import get_logger

logger = get_logger(__name__)

SIDECAR_FILENAME = "animation.json"


def format_duration(duration_ms: float) -> str:
    """Кратчайшая запись числа одинарной точности без хвостовых нулей: 100.0 -> "100"."""
    return np.format_float_positional(np.float32(duration_ms), trim="-")


class SidecarService:
    def render(self, images_count: int, frame_count: int, endpoint_duration_ms: float,
               step_duration_ms: float, name: str = "output") -> str:
        """Формирует текст JSON без обращения к диску.

        Returns:
            Объект с ключами name, loops (0), skip_first (false) и frames —
            по одной записи {"NNNN": "<мс>/1000"} на кадр, без запятой после последней.
        """
        endpoint = format_duration(endpoint_duration_ms)
        step = format_duration(step_duration_ms)

        entries: List[str] = []
        for image_index in range(images_count):
            for k in range(frame_count):
                index = image_index * frame_count + k
                duration = endpoint if k == 0 else step
                entries.append(f'\t\t{{"{index:04d}": "{duration}/1000"}}')

        header = (
            "{\n"
            f'\t"name": "{name}",\n'
            '\t"loops": 0,\n'
            '\t"skip_first": false,\n'
            '\t"frames": [\n'
        )
        return header + ",\n".join(entries) + "\n\t]\n}"

    def write(self, output_dir: str | Path, images_count: int, config: ScheduleConfig,
              name: str = "output") -> Path:
        """Сохраняет animation.json в каталог вывода.

        Raises:
            OutputError: если файл не удаётся записать.
        """
        path = Path(output_dir) / SIDECAR_FILENAME
        text = self.render(
            images_count,
            config.frame_count,
            config.endpoint_duration_ms,
            config.step_duration_ms,
            name=name,
        )
        try:
            path.write_text(text, encoding="utf-8")
        except OSError as exc:
            raise OutputError(f"Не удалось записать {path}: {exc}") from exc
        logger.debug("Sidecar %s: %d frames", path, images_count * config.frame_count)
        return path
