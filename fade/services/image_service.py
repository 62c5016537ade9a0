"""Загрузка изображений с диска, изменение размера и сохранение кадров.

Принципы:
- SRP: класс отвечает только за ввод-вывод изображений и базовое извлечение свойств.
- LSP/ISP: возвращает `ImageData` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from PIL import Image, UnidentifiedImageError

from fade.models.errors import InputError, OutputError
from fade.models.frame_model import FrameSpec
from fade.models.image_model import ImageData
from fade.utils.logger import get_logger

logger = get_logger(__name__)

PATTERN_WILDCARD = "*"


class ImageService:
    def load_image(self, file_path: str | Path) -> ImageData:
        """Загружает изображение с диска и возвращает его вместе с метаданными.

        Args:
            file_path: Путь до файла изображения.

        Returns:
            `ImageData` c `PIL.Image.Image` (в режиме RGB или RGBA), размерами, режимом и размером файла.

        Raises:
            InputError: если путь не существует, указывает на каталог
                или файл не распознан как изображение.
        """
        path = Path(file_path)
        if not path.exists():
            raise InputError(f"Файл не найден: {path}")
        if path.is_dir():
            raise InputError(f"Ожидался файл, а не каталог: {path}")

        try:
            with Image.open(path) as opened:
                opened.load()
                pil_image = opened.copy() if opened.mode in ("RGB", "RGBA") else opened
                image = ImageData.from_pil(pil_image, path=path, size_bytes=self._file_size(path))
        except UnidentifiedImageError as exc:
            raise InputError(f"Файл не является изображением: {path}") from exc
        except (OSError, ValueError) as exc:
            raise InputError(f"Не удалось прочитать {path}: {exc}") from exc

        logger.debug("Loaded %s: %d x %d %s", path, image.width, image.height, image.mode)
        return image

    def resize(self, image: ImageData, size: Tuple[int, int]) -> ImageData:
        """Точное изменение размера методом ближайшего соседа (пропорции не сохраняются)."""
        if image.size == tuple(size):
            return image
        resized = image.pil_image.resize(size, Image.Resampling.NEAREST)
        return ImageData.from_pil(resized, path=image.path, size_bytes=image.size_bytes)

    def expand_pattern(self, pattern: str, directory: Optional[str | Path] = None) -> List[Path]:
        """Раскрывает шаблон вида `*.png`: все файлы каталога с этим окончанием имени.

        Звёздочки просто удаляются из шаблона, остаток сравнивается с концом имени.
        Результат отсортирован по имени.
        """
        suffix = pattern.replace(PATTERN_WILDCARD, "")
        base = Path(directory) if directory is not None else Path.cwd()
        matches = sorted(p for p in base.iterdir() if p.is_file() and p.name.endswith(suffix))
        if directory is None:
            return [Path(p.name) for p in matches]
        return matches

    def collect_paths(self, args: Sequence[str], directory: Optional[str | Path] = None) -> List[Path]:
        """Превращает позиционные аргументы в список путей.

        Единственный аргумент со звёздочкой раскрывается как шаблон.
        """
        if len(args) == 1 and PATTERN_WILDCARD in args[0]:
            return self.expand_pattern(args[0], directory)
        return [Path(a) for a in args]

    def save_frame(self, frame: FrameSpec, output_dir: str | Path) -> Path:
        """Сохраняет кадр в PNG с именем по номеру кадра (0000.png, 0001.png, ...).

        Raises:
            OutputError: если файл не удаётся записать.
        """
        path = Path(output_dir) / f"{frame.name}.png"
        try:
            frame.image.save(path, format="PNG")
        except OSError as exc:
            raise OutputError(f"Не удалось сохранить кадр {path}: {exc}") from exc
        return path

    # ---- Helpers ----
    def _file_size(self, path: Path) -> Optional[int]:
        try:
            return path.stat().st_size
        except OSError:
            return None
