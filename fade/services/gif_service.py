"""Запись кадров в анимированный GIF через Pillow.

Принципы:
- SRP: сервис только кодирует кадры; их порядок и длительности задаёт планировщик.
- Кадры не переупорядочиваются. Pillow пишет GIF целиком, поэтому кадры
  накапливаются до `finish()`.
- Pillow склеивает подряд идущие одинаковые кадры, суммируя их задержки.
"""
from __future__ import annotations

import struct
from pathlib import Path
from typing import BinaryIO, List, Optional

from PIL import Image

from fade.models.errors import EncodeFrameError, EncodeInitError
from fade.models.frame_model import MAX_CONVERSION_SPEED, MIN_CONVERSION_SPEED, FrameSpec
from fade.models.image_model import MAX_DIMENSION
from fade.utils.logger import get_logger

logger = get_logger(__name__)

# до этой скорости включительно палитра строится медианным сечением с дизерингом
QUALITY_SPEED_LIMIT = 10

# поле задержки в GIF двухбайтовое
MAX_DELAY_HUNDREDTHS = 0xFFFF


def delay_hundredths(duration_ms: float) -> int:
    """Задержка кадра GIF в сотых долях секунды.

    Остаток отбрасывается, слишком длинные задержки насыщаются до 65535.
    """
    return min(int(duration_ms) // 10, MAX_DELAY_HUNDREDTHS)


class GifSink:
    """Приёмник кадров для одного GIF-файла.

    Использование:
        with GifSink.open(path, width, height, speed) as sink:
            sink.set_loop_forever()
            for frame in frames:
                sink.push(frame)

    При выходе из блока без ошибки вызывается `finish()`, при ошибке — `abort()`:
    незаконченный файл удаляется.
    """

    def __init__(self, stream: BinaryIO, path: Path, width: int, height: int, speed: int) -> None:
        self._stream = stream
        self._path = path
        self._width = width
        self._height = height
        self._speed = speed
        self._loop: Optional[int] = None
        self._frames: List[Image.Image] = []
        self._durations: List[int] = []
        self._has_alpha = False
        self._closed = False

    @classmethod
    def open(cls, path: str | Path, width: int, height: int, speed: int = QUALITY_SPEED_LIMIT) -> "GifSink":
        """Создаёт файл и приёмник кадров.

        Raises:
            EncodeInitError: если размеры или скорость вне допустимого диапазона
                либо файл не удаётся создать.
        """
        path = Path(path)
        if not (0 < width <= MAX_DIMENSION and 0 < height <= MAX_DIMENSION):
            raise EncodeInitError(f"Недопустимый размер GIF: {width} x {height}")
        if not MIN_CONVERSION_SPEED <= speed <= MAX_CONVERSION_SPEED:
            raise EncodeInitError(f"Недопустимая скорость конвертации: {speed}")
        try:
            stream = path.open("wb")
        except OSError as exc:
            raise EncodeInitError(f"Не удалось создать файл {path}: {exc}") from exc
        logger.debug("Opened GIF %s (%d x %d, speed %d)", path, width, height, speed)
        return cls(stream, path, width, height, speed)

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    def set_loop_forever(self) -> None:
        """Бесконечный повтор (расширение NETSCAPE2.0 со счётчиком 0)."""
        self._loop = 0

    def push(self, frame: FrameSpec) -> None:
        """Добавляет кадр в конец анимации.

        Raises:
            EncodeFrameError: если приёмник закрыт, размер кадра не совпадает
                с размером GIF или режим кадра не поддерживается.
        """
        if self._closed:
            raise EncodeFrameError(f"Кадр {frame.name}: GIF {self._path} уже закрыт")
        image = frame.image
        if image.size != (self._width, self._height):
            raise EncodeFrameError(
                f"Кадр {frame.name}: размер {image.size[0]} x {image.size[1]} "
                f"не совпадает с {self._width} x {self._height}"
            )
        if image.mode not in ("RGB", "RGBA"):
            raise EncodeFrameError(f"Кадр {frame.name}: неподдерживаемый режим {image.mode}")

        try:
            prepared = self._prepare(image)
        except (ValueError, OSError) as exc:
            raise EncodeFrameError(f"Кадр {frame.name}: {exc}") from exc
        self._frames.append(prepared)
        self._durations.append(delay_hundredths(frame.duration_ms) * 10)

    def finish(self) -> None:
        """Записывает все кадры в файл и закрывает его.

        Raises:
            EncodeFrameError: если кадров нет или Pillow не смог записать поток.
        """
        if self._closed:
            return
        if not self._frames:
            self.abort()
            raise EncodeFrameError(f"Нет кадров для записи в {self._path}")

        params = {
            "format": "GIF",
            "save_all": True,
            "append_images": self._frames[1:],
            "duration": self._durations,
        }
        if self._loop is not None:
            params["loop"] = self._loop
        if self._has_alpha:
            # прозрачные кадры не должны накладываться на предыдущие
            params["disposal"] = 2

        try:
            self._frames[0].save(self._stream, **params)
        except (ValueError, OSError, struct.error) as exc:
            self.abort()
            raise EncodeFrameError(f"Не удалось записать {self._path}: {exc}") from exc
        self._stream.close()
        self._closed = True
        logger.debug("Wrote %d frames to %s", len(self._frames), self._path)

    def abort(self) -> None:
        """Закрывает и удаляет незаконченный файл."""
        if self._closed:
            return
        self._stream.close()
        self._closed = True
        self._path.unlink(missing_ok=True)
        logger.debug("Aborted GIF %s", self._path)

    def __enter__(self) -> "GifSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.finish()
        else:
            self.abort()

    # ---- Helpers ----
    def _prepare(self, image: Image.Image) -> Image.Image:
        """Готовит кадр к записи: палитра для RGB, как есть для RGBA.

        RGBA-кадры отдаются Pillow без квантования, иначе потеряется прозрачность.
        """
        if image.mode == "RGBA":
            self._has_alpha = True
            return image.copy()
        if self._speed <= QUALITY_SPEED_LIMIT:
            return image.quantize(
                colors=256,
                method=Image.Quantize.MEDIANCUT,
                dither=Image.Dither.FLOYDSTEINBERG,
            )
        return image.quantize(
            colors=256,
            method=Image.Quantize.FASTOCTREE,
            dither=Image.Dither.NONE,
        )
