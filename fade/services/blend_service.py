"""Смешивание пикселей двух изображений с целочисленным весом.

Вес 255 означает «полностью A», 0 — «полностью B». Вся арифметика целочисленная
с отбрасыванием дробной части, поэтому результат воспроизводим бит в бит.
"""
from __future__ import annotations

from typing import Sequence

import numpy as np

from fade.models.image_model import ColorMode, Pixel

MAX_WEIGHT = 0xFF
# Цвет умножается и на вес, и на собственную альфу: делим на 255 * 255
PREMULTIPLIED_DIVISOR = 0xFE01


class BlendService:
    def blend_pixel(self, pixel_a: Sequence[int], pixel_b: Sequence[int], weight: int,
                    mode: ColorMode) -> Pixel:
        """Смешивает два пикселя.

        Args:
            pixel_a: Пиксель первого изображения (3 или 4 канала).
            pixel_b: Пиксель второго изображения (3 или 4 канала).
            weight: Вес пикселя A, 0..255.
            mode: `ColorMode.OPAQUE` — RGB, `ColorMode.ALPHA` — RGBA с предумножением при чтении.

        Returns:
            Кортеж из 3 (OPAQUE) или 4 (ALPHA) каналов.
        """
        inverse = MAX_WEIGHT - weight
        # uint8-значения numpy переполнились бы при умножении
        pixel_a = [int(v) for v in pixel_a]
        pixel_b = [int(v) for v in pixel_b]
        if mode is ColorMode.OPAQUE:
            return tuple(
                (pixel_a[c] * weight + pixel_b[c] * inverse) // MAX_WEIGHT
                for c in range(3)
            )

        alpha_a = pixel_a[3] if len(pixel_a) > 3 else MAX_WEIGHT
        alpha_b = pixel_b[3] if len(pixel_b) > 3 else MAX_WEIGHT
        rgb = tuple(
            (pixel_a[c] * alpha_a * weight + pixel_b[c] * alpha_b * inverse) // PREMULTIPLIED_DIVISOR
            for c in range(3)
        )
        alpha = (alpha_a * weight + alpha_b * inverse) // MAX_WEIGHT
        return rgb + (alpha,)

    def blend_arrays(self, array_a: np.ndarray, array_b: np.ndarray, weight: int,
                     mode: ColorMode) -> np.ndarray:
        """То же, что `blend_pixel`, но сразу для целого кадра.

        Args:
            array_a: uint8-массив (H, W, 3|4).
            array_b: uint8-массив той же высоты и ширины.
            weight: Вес кадра A, 0..255.
            mode: Режим смешивания.

        Returns:
            uint8-массив (H, W, 3) для OPAQUE или (H, W, 4) для ALPHA.
        """
        inverse = MAX_WEIGHT - weight
        a = np.asarray(array_a, dtype=np.uint32)
        b = np.asarray(array_b, dtype=np.uint32)

        if mode is ColorMode.OPAQUE:
            out = (a[..., :3] * weight + b[..., :3] * inverse) // MAX_WEIGHT
            return out.astype(np.uint8)

        a = self._with_alpha(a)
        b = self._with_alpha(b)
        alpha_a = a[..., 3:4]
        alpha_b = b[..., 3:4]
        rgb = (a[..., :3] * alpha_a * weight + b[..., :3] * alpha_b * inverse) // PREMULTIPLIED_DIVISOR
        alpha = (alpha_a * weight + alpha_b * inverse) // MAX_WEIGHT
        return np.concatenate([rgb, alpha], axis=-1).astype(np.uint8)

    # ---------- Вспомогательные функции ----------
    def _with_alpha(self, arr: np.ndarray) -> np.ndarray:
        """Дополняет RGB-массив непрозрачным альфа-каналом."""
        if arr.shape[-1] == 4:
            return arr
        opaque = np.full(arr.shape[:-1] + (1,), MAX_WEIGHT, dtype=arr.dtype)
        return np.concatenate([arr, opaque], axis=-1)
