from __future__ import annotations

import sys
from typing import Optional, TextIO

from fade.models.run_options import RunOptions


class ConsoleView:
    """Пользовательский вывод в терминал: сводка параметров и строка прогресса."""

    def __init__(self, stream: Optional[TextIO] = None) -> None:
        self._stream = stream or sys.stdout

    @property
    def stream(self) -> TextIO:
        return self._stream

    # public API (called from controller)
    def show_parameters(self, options: RunOptions) -> None:
        schedule = options.schedule
        lines = [
            "Parameters :",
            f"\tImages : {', '.join(str(p) for p in options.images)}",
            f"\tOutput : {options.output_path}",
            f"\tOutput directory : {options.output_dir}",
            f"\tTotal of frames : {options.total_frames}",
            f"\tDuration of standard frames : {schedule.step_duration_ms:g}ms, "
            f"duration of important frames : {schedule.endpoint_duration_ms:g}ms",
            f"\tWrite frames to disk : {self._flag(options.write_frames)}",
            f"\tWrite .json for apngasm : {self._flag(options.write_json)}",
            f"\tSpeed of conversion : {schedule.conversion_speed}",
        ]
        if options.resize is not None:
            lines.append(f"\tResize : true, width : {options.resize[0]}, height : {options.resize[1]}")
        else:
            lines.append("\tResize : false")
        self._write("\n".join(lines) + "\n\n")

    def show_opening(self, label: str) -> None:
        self._write(f"Opening {label}\n")

    def show_progress(self, current: int, total: int) -> None:
        # carriage return keeps the counter on one line
        self._write(f"\rCreating and writing frame {current:04d} out of {total:04d}")

    def show_done(self) -> None:
        self._write("\nDone !\n")

    # helpers
    def _flag(self, value: bool) -> str:
        return "true" if value else "false"

    def _write(self, text: str) -> None:
        self._stream.write(text)
        self._stream.flush()
