"""Контроллер приложения: оркестрация сервисов для одного запуска.

SOLID:
- SRP: класс связывает сервисы в конвейер (без попиксельной логики).
- DIP: зависит от сервисов как от ролей; конкретные реализации подставляются полями.
Clean Code:
- Шаги конвейера компактны; тяжёлая логика вынесена в сервисы.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from fade.models.errors import OutputError
from fade.models.image_model import ImageData
from fade.models.run_options import RunOptions
from fade.services.gif_service import GifSink
from fade.services.image_service import ImageService
from fade.services.scheduler_service import SchedulerService
from fade.services.sidecar_service import SidecarService
from fade.services.validation_service import ValidationService
from fade.ui.console import ConsoleView
from fade.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class AppController:
    """Выполняет запуск по готовым `RunOptions`.

    Ответственности:
    - Подготовка каталога вывода и animation.json.
    - Загрузка и проверка изображений через `ImageService` и `ValidationService`.
    - Передача кадров из `SchedulerService` в `GifSink` (и в PNG при `-w`).
    - Отображение прогресса через `ConsoleView`.
    """
    view: ConsoleView

    _image_service: ImageService = field(default_factory=ImageService)
    _validation_service: ValidationService = field(default_factory=ValidationService)
    _scheduler_service: SchedulerService = field(default_factory=SchedulerService)
    _sidecar_service: SidecarService = field(default_factory=SidecarService)

    def run(self, options: RunOptions) -> Path:
        """Строит GIF и возвращает путь к нему.

        Raises:
            FadeError: любая ошибка конфигурации, ввода-вывода или кодирования.
        """
        self._validation_service.validate_paths(options.images).raise_for_error()
        if options.write_json and not options.write_frames:
            logger.warning("Writing apngasm json without writing frames to disk (-a without -w)")

        self.view.show_parameters(options)
        self._ensure_output_dir(options.output_dir)

        if options.write_json:
            path = self._sidecar_service.write(options.output_dir, len(options.images), options.schedule)
            logger.info("Wrote json to %s", path)

        images = self._load_images(options)
        width, height = images[0].size
        total = options.total_frames

        with GifSink.open(options.output_path, width, height, options.schedule.conversion_speed) as sink:
            sink.set_loop_forever()
            for frame in self._scheduler_service.iter_schedule(images, options.schedule):
                self.view.show_progress(frame.index + 1, total)
                if options.write_frames:
                    self._image_service.save_frame(frame, options.output_dir)
                sink.push(frame)

        self.view.show_done()
        logger.info("Saved %s (%d frames)", options.output_path, total)
        return options.output_path

    # ---- Helpers ----
    def _ensure_output_dir(self, output_dir: Path) -> None:
        if output_dir.exists():
            if not output_dir.is_dir():
                raise OutputError(f"Каталог вывода является файлом: {output_dir}")
            return
        try:
            output_dir.mkdir(parents=True)
        except OSError as exc:
            raise OutputError(f"Не удалось создать каталог {output_dir}: {exc}") from exc
        logger.info("Created %s directory", output_dir)

    def _load_images(self, options: RunOptions) -> List[ImageData]:
        """Загружает, проверяет лимиты, при необходимости масштабирует и сверяет размеры."""
        images: List[ImageData] = []
        for path in options.images:
            self.view.show_opening(str(path))
            images.append(self._image_service.load_image(path))

        # лимит проверяется до изменения размера, совпадение размеров после него
        self._validation_service.validate_limits(images).raise_for_error()
        if options.resize is not None:
            images = [self._image_service.resize(image, options.resize) for image in images]
        self._validation_service.validate_images(images).raise_for_error()
        return images
