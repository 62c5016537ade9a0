"""Параметры одного запуска, собранные из командной строки."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from fade.models.frame_model import ScheduleConfig

DEFAULT_OUTPUT = "output.gif"


@dataclass(frozen=True)
class RunOptions:
    """Неизменяемый набор параметров запуска.

    Fields:
        images: Пути к исходным изображениям в порядке показа.
        output_path: Путь итогового GIF.
        output_dir: Каталог для GIF, кадров PNG и animation.json.
        write_frames: Сохранять каждый кадр в PNG.
        write_json: Сохранять animation.json для apngasm.
        resize: Целевой размер (ширина, высота) или None.
        schedule: Параметры расписания кадров.
    """
    images: List[Path]
    output_path: Path = Path(DEFAULT_OUTPUT)
    output_dir: Path = Path(".")
    write_frames: bool = False
    write_json: bool = False
    resize: Optional[Tuple[int, int]] = None
    schedule: ScheduleConfig = field(default_factory=ScheduleConfig)

    @property
    def total_frames(self) -> int:
        return self.schedule.frame_count * len(self.images)


def resolve_output(raw: str) -> Tuple[Path, Path]:
    """Разбирает аргумент `-o` на путь GIF и каталог вывода.

    Путь, оканчивающийся разделителем, трактуется как каталог: GIF получает
    имя по умолчанию внутри него. Обратные слэши приводятся к прямым.
    """
    normalized = raw.replace("\\", "/")
    if normalized.endswith("/"):
        output_dir = Path(normalized)
        return output_dir / DEFAULT_OUTPUT, output_dir
    output_path = Path(normalized)
    return output_path, output_path.parent
