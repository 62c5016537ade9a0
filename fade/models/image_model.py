"""Модели данных для исходных изображений.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image

# GIF хранит ширину и высоту логического экрана в 16 битах
MAX_DIMENSION = 0xFFFF

Pixel = Tuple[int, ...]


class ColorMode(Enum):
    """Режим смешивания: без альфа-канала или с ним."""
    OPAQUE = "RGB"
    ALPHA = "RGBA"

    @classmethod
    def for_pair(cls, mode_a: str, mode_b: str) -> "ColorMode":
        """Альфа-режим, если хотя бы одно из изображений несёт альфа-канал."""
        if mode_a == "RGBA" or mode_b == "RGBA":
            return cls.ALPHA
        return cls.OPAQUE


@dataclass(frozen=True)
class ImageData:
    """Неизменяемая модель изображения и его метаданные.

    Fields:
        path: Путь к исходному файлу (None для изображений, созданных в памяти).
        pil_image: Изображение PIL в режиме "RGB" или "RGBA".
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL, "RGB" | "RGBA".
        size_bytes: Размер файла, если доступен.
    """
    path: Optional[Path]
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int]

    @classmethod
    def from_pil(cls, pil_image: Image.Image, path: Optional[Path] = None,
                 size_bytes: Optional[int] = None) -> "ImageData":
        """Упаковывает готовое изображение PIL, приводя режим к RGB/RGBA."""
        pil_image = normalize_mode(pil_image)
        width, height = pil_image.size
        return cls(
            path=path,
            pil_image=pil_image,
            width=width,
            height=height,
            mode=pil_image.mode,
            size_bytes=size_bytes,
        )

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    @property
    def label(self) -> str:
        return str(self.path) if self.path is not None else "<memory>"


def normalize_mode(image: Image.Image) -> Image.Image:
    """Приводит изображение к "RGB" или "RGBA" в зависимости от наличия прозрачности."""
    if image.mode in ("RGB", "RGBA"):
        return image
    has_alpha = image.mode in ("LA", "PA", "La", "RGBa") or "transparency" in image.info
    return image.convert("RGBA" if has_alpha else "RGB")
