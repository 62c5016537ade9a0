import pytest

from fade.models.frame_model import ScheduleConfig
from fade.services.scheduler_service import SchedulerService, total_frames


@pytest.fixture
def scheduler():
    return SchedulerService()


@pytest.fixture
def three_images(make_image):
    return [make_image((0, 0, 0)), make_image((255, 255, 255)), make_image((255, 0, 0))]


def test_schedule_length_is_images_times_frame_count(scheduler, three_images):
    config = ScheduleConfig.create(frame_count=4)

    frames = scheduler.schedule(three_images, config)

    assert len(frames) == 12
    assert len(frames) == total_frames(len(three_images), config)
    assert [f.index for f in frames] == list(range(12))


def test_endpoints_are_source_images_in_order(scheduler, three_images):
    config = ScheduleConfig.create(frame_count=4, endpoint_duration_ms=100.0, step_duration_ms=10.0)

    frames = scheduler.schedule(three_images, config)

    endpoints = [f for f in frames if f.is_endpoint]
    assert [f.index for f in endpoints] == [0, 4, 8]
    assert [f.image for f in endpoints] == [image.pil_image for image in three_images]
    assert all(f.duration_ms == 100.0 for f in endpoints)
    assert all(f.duration_ms == 10.0 for f in frames if not f.is_endpoint)


def test_last_pair_wraps_to_first_image(scheduler, three_images):
    config = ScheduleConfig.create(frame_count=4)

    frames = scheduler.schedule(three_images, config)

    # red -> black, weight 192: 255 * 192 / 255
    assert frames[9].image.getpixel((0, 0)) == (192, 0, 0)
    assert frames[11].image.getpixel((0, 0)) == (64, 0, 0)


def test_two_images_with_ten_frames(scheduler, make_image):
    images = [make_image((200, 100, 50)), make_image((0, 0, 0))]
    config = ScheduleConfig.create(frame_count=10, endpoint_duration_ms=100.0, step_duration_ms=10.0)

    frames = scheduler.schedule(images, config)

    assert len(frames) == 20
    assert frames[1].image.getpixel((0, 0)) == (180, 90, 45)
    assert [f.duration_ms for f in frames[:11]] == [100.0] + [10.0] * 9 + [100.0]


def test_iter_schedule_matches_schedule(scheduler, three_images):
    config = ScheduleConfig.create(frame_count=3)

    eager = scheduler.schedule(three_images, config)
    lazy = list(scheduler.iter_schedule(three_images, config))

    assert [(f.index, f.duration_ms, f.image.tobytes()) for f in eager] == \
        [(f.index, f.duration_ms, f.image.tobytes()) for f in lazy]


def test_default_step_duration_follows_frame_count():
    assert ScheduleConfig.create(frame_count=20).step_duration_ms == 50.0
    assert ScheduleConfig().step_duration_ms == 100.0


def test_explicit_step_duration_wins():
    config = ScheduleConfig.create(frame_count=20, endpoint_duration_ms=500.0, step_duration_ms=25.0)
    assert config.step_duration_ms == 25.0
    assert config.endpoint_duration_ms == 500.0
