from __future__ import annotations

import argparse
from typing import Optional, Sequence

from fade.controllers.app_controller import AppController
from fade.models.errors import ConfigurationError, FadeError
from fade.models.frame_model import DEFAULT_CONVERSION_SPEED, DEFAULT_ENDPOINT_DURATION_MS, DEFAULT_FRAME_COUNT, ScheduleConfig
from fade.models.image_model import MAX_DIMENSION
from fade.models.run_options import DEFAULT_OUTPUT, RunOptions, resolve_output
from fade.services.image_service import ImageService
from fade.ui.console import ConsoleView
from fade.utils.logger import configure_logger, get_logger

logger = get_logger(__name__)

USAGE = "fade <file 1> <file 2> [options]"
EXAMPLES = """Examples :
\tfade image1.jpg image2.jpg will create an animation from the 2 images
\tfade "*.png" -o o.gif -n 50 will take every images in the directory that end with .png,
\t\toutput the result to o.gif and with 50 frames per images"""

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class FadeApp:
    """Приложение командной строки: разбор аргументов и запуск контроллера."""

    def __init__(self, view: Optional[ConsoleView] = None) -> None:
        self._view = view or ConsoleView()
        self._image_service = ImageService()
        self._parser = self._build_parser()
        self._controller = AppController(view=self._view, _image_service=self._image_service)

    @property
    def parser(self) -> argparse.ArgumentParser:
        return self._parser

    def run(self, argv: Sequence[str]) -> int:
        """Выполняет запуск и возвращает код завершения процесса."""
        if not argv:
            self._parser.print_help(self._view.stream)
            return EXIT_OK

        args = self._parser.parse_args(list(argv))
        configure_logger(verbose=args.verbose)
        try:
            options = self.build_options(args)
            self._controller.run(options)
        except FadeError as exc:
            logger.error("%s", exc)
            return EXIT_FAILURE
        except KeyboardInterrupt:
            logger.error("Interrupted")
            return EXIT_INTERRUPTED
        return EXIT_OK

    def build_options(self, args: argparse.Namespace) -> RunOptions:
        """Собирает `RunOptions` из разобранных аргументов.

        Raises:
            ConfigurationError: при недопустимых значениях.
        """
        images = self._image_service.collect_paths(args.images)
        if not images:
            raise ConfigurationError("Не указаны изображения")

        # -d фиксирует обе длительности, иначе шаг выводится из -n
        if args.durations is not None:
            endpoint_ms, step_ms = args.durations
        else:
            endpoint_ms, step_ms = DEFAULT_ENDPOINT_DURATION_MS, None
        schedule = ScheduleConfig.create(
            frame_count=args.frame_count,
            endpoint_duration_ms=endpoint_ms,
            step_duration_ms=step_ms,
            conversion_speed=args.speed,
        )

        resize = None
        if args.resize is not None:
            width, height = args.resize
            if not (0 < width <= MAX_DIMENSION and 0 < height <= MAX_DIMENSION):
                raise ConfigurationError(
                    f"Размер должен быть в диапазоне 1..{MAX_DIMENSION}, получено {width} x {height}"
                )
            resize = (width, height)

        output_path, output_dir = resolve_output(args.output)
        return RunOptions(
            images=images,
            output_path=output_path,
            output_dir=output_dir,
            write_frames=args.write_frames,
            write_json=args.write_json,
            resize=resize,
            schedule=schedule,
        )

    # ---- Helpers ----
    def _build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog="fade",
            usage=USAGE,
            description="Create a looping GIF that cross-fades between images.",
            epilog=EXAMPLES,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        parser.add_argument("images", nargs="*", metavar="file",
                            help="Images in display order, or a single pattern such as \"*.png\".")
        parser.add_argument("-o", dest="output", metavar="<output path>", default=DEFAULT_OUTPUT,
                            help="Set output path.")
        parser.add_argument("-w", dest="write_frames", action="store_true",
                            help="Write frames to disk.")
        parser.add_argument("-a", dest="write_json", action="store_true",
                            help="Write a .json used by apngasm.")
        parser.add_argument("-n", dest="frame_count", metavar="<count>", type=int, default=DEFAULT_FRAME_COUNT,
                            help="Set frames count.")
        parser.add_argument("-d", dest="durations", metavar=("<important>", "<standard>"), nargs=2, type=float,
                            help="Set durations of frame in ms.")
        parser.add_argument("-s", dest="speed", metavar="<speed>", type=int, default=DEFAULT_CONVERSION_SPEED,
                            help="Set gif conversion speed. Must be between 1 and 30, 30 is loss quality but faster.")
        parser.add_argument("-r", dest="resize", metavar=("<width>", "<height>"), nargs=2, type=int,
                            help="Resize image.")
        parser.add_argument("-v", "--verbose", action="store_true",
                            help="Show debug logging.")
        return parser
