import io
from unittest.mock import MagicMock

import pytest
from PIL import Image

from fade.controllers.app_controller import AppController
from fade.models.errors import ConfigurationError, InputError
from fade.models.frame_model import ScheduleConfig
from fade.models.run_options import RunOptions
from fade.ui.console import ConsoleView


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def controller(output):
    return AppController(view=ConsoleView(output))


def test_run_builds_gif(controller, write_png, tmp_path, output):
    images = [write_png("a.png", (0, 0, 0)), write_png("b.png", (255, 255, 255))]
    options = RunOptions(
        images=images,
        output_path=tmp_path / "out.gif",
        output_dir=tmp_path,
        schedule=ScheduleConfig.create(frame_count=3),
    )

    result = controller.run(options)

    assert result == tmp_path / "out.gif"
    with Image.open(result) as gif:
        assert gif.n_frames == 6
    text = output.getvalue()
    assert "Total of frames : 6" in text
    assert "\rCreating and writing frame 0006 out of 0006" in text
    assert text.endswith("Done !\n")


def test_dimension_mismatch_stops_before_interpolation(output, write_png, tmp_path):
    scheduler = MagicMock()
    controller = AppController(view=ConsoleView(output), _scheduler_service=scheduler)
    options = RunOptions(
        images=[write_png("a.png", (0, 0, 0), size=(10, 10)), write_png("b.png", (0, 0, 0), size=(10, 11))],
        output_path=tmp_path / "out.gif",
        output_dir=tmp_path,
    )

    with pytest.raises(ConfigurationError):
        controller.run(options)

    scheduler.iter_schedule.assert_not_called()
    assert not (tmp_path / "out.gif").exists()


def test_oversized_image_is_rejected_before_resize(output, write_png, tmp_path):
    scheduler = MagicMock()
    controller = AppController(view=ConsoleView(output), _scheduler_service=scheduler)
    options = RunOptions(
        images=[write_png("big.png", (0, 0, 0), size=(65536, 1)), write_png("b.png", (0, 0, 0))],
        output_path=tmp_path / "out.gif",
        output_dir=tmp_path,
        resize=(4, 3),
    )

    with pytest.raises(ConfigurationError):
        controller.run(options)

    scheduler.iter_schedule.assert_not_called()


def test_resize_makes_images_compatible(controller, write_png, tmp_path):
    options = RunOptions(
        images=[write_png("a.png", (0, 0, 0), size=(10, 10)), write_png("b.png", (255, 0, 0), size=(5, 7))],
        output_path=tmp_path / "out.gif",
        output_dir=tmp_path,
        resize=(8, 8),
        schedule=ScheduleConfig.create(frame_count=2),
    )

    controller.run(options)

    with Image.open(tmp_path / "out.gif") as gif:
        assert gif.size == (8, 8)
        assert gif.n_frames == 4


def test_missing_input_is_reported(controller, tmp_path):
    options = RunOptions(images=[tmp_path / "missing.png"], output_path=tmp_path / "out.gif", output_dir=tmp_path)

    with pytest.raises(InputError):
        controller.run(options)


def test_writes_frames_and_json(controller, write_png, tmp_path):
    out_dir = tmp_path / "frames"
    options = RunOptions(
        images=[write_png("a.png", (0, 0, 0)), write_png("b.png", (255, 255, 255))],
        output_path=out_dir / "anim.gif",
        output_dir=out_dir,
        write_frames=True,
        write_json=True,
        schedule=ScheduleConfig.create(frame_count=3, endpoint_duration_ms=100.0, step_duration_ms=10.0),
    )

    controller.run(options)

    assert sorted(p.name for p in out_dir.glob("*.png")) == [f"{i:04d}.png" for i in range(6)]
    assert (out_dir / "animation.json").read_text(encoding="utf-8").count("/1000") == 6
    with Image.open(out_dir / "0003.png") as endpoint:
        assert endpoint.getpixel((0, 0)) == (255, 255, 255)


def test_json_without_frames_logs_warning(controller, write_png, tmp_path, caplog):
    options = RunOptions(
        images=[write_png("a.png", (0, 0, 0)), write_png("b.png", (255, 255, 255))],
        output_path=tmp_path / "out.gif",
        output_dir=tmp_path,
        write_json=True,
        schedule=ScheduleConfig.create(frame_count=2),
    )

    controller.run(options)

    assert any(r.levelname == "WARNING" and "-a without -w" in r.getMessage() for r in caplog.records)
