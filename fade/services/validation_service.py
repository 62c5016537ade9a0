"""Единый проход проверок перед запуском конвейера.

Каждая проверка возвращает `ValidationResult`: либо успех, либо конкретную ошибку.
Результат потребляется один раз, до первого обращения к интерполяции.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from fade.models.errors import ConfigurationError, FadeError, InputError
from fade.models.image_model import MAX_DIMENSION, ImageData

MIN_IMAGES = 2


@dataclass(frozen=True)
class ValidationResult:
    error: Optional[FadeError] = None

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls()

    @classmethod
    def failure(cls, error: FadeError) -> "ValidationResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class ValidationService:
    def validate_paths(self, paths: Sequence[Path]) -> ValidationResult:
        """Проверяет, что каждый путь — существующий файл и путей не меньше двух."""
        if not paths:
            return ValidationResult.failure(ConfigurationError("Не указаны изображения"))
        for path in paths:
            if not path.exists():
                return ValidationResult.failure(InputError(f"Файл не найден: {path}"))
            if path.is_dir():
                return ValidationResult.failure(InputError(f"Ожидался файл, а не каталог: {path}"))
        return self._validate_count(len(paths))

    def validate_limits(self, images: Sequence[ImageData]) -> ValidationResult:
        """Ширина и высота каждого изображения не больше 65535."""
        for image in images:
            if image.width > MAX_DIMENSION:
                return ValidationResult.failure(ConfigurationError(
                    f"Ширина {image.label} должна быть <= {MAX_DIMENSION}, получено {image.width}"
                ))
            if image.height > MAX_DIMENSION:
                return ValidationResult.failure(ConfigurationError(
                    f"Высота {image.label} должна быть <= {MAX_DIMENSION}, получено {image.height}"
                ))
        return ValidationResult.success()

    def validate_images(self, images: Sequence[ImageData]) -> ValidationResult:
        """Итоговая проверка набора: не меньше двух изображений, лимиты, одинаковые размеры."""
        count = self._validate_count(len(images))
        if not count.ok:
            return count
        limits = self.validate_limits(images)
        if not limits.ok:
            return limits

        first = images[0]
        for image in images[1:]:
            if image.size != first.size:
                return ValidationResult.failure(ConfigurationError(
                    f"Изображения разного размера: {first.width} x {first.height} ({first.label}), "
                    f"{image.width} x {image.height} ({image.label})"
                ))
        return ValidationResult.success()

    # ---- Helpers ----
    def _validate_count(self, count: int) -> ValidationResult:
        if count < MIN_IMAGES:
            return ValidationResult.failure(ConfigurationError(
                f"Нужно не меньше {MIN_IMAGES} изображений, получено {count}"
            ))
        return ValidationResult.success()
