import threading

import pytest

from stripzoom.config import RenderConfig
from stripzoom.view import MAX_SHRINK_RATIO, ViewController, ViewTransform


WIDTH = 800
HEIGHT = 400


@pytest.fixture
def config():
    return RenderConfig(areas=4)


@pytest.fixture
def controller(config):
    return ViewController(config, WIDTH, HEIGHT)


def test_initial_view(controller, config):
    view = controller.snapshot()
    assert view == ViewTransform(config.center_x, config.center_y,
                                 config.scale_x, config.scale_y)
    assert controller.speed == config.speed
    assert controller.fps == 0
    assert not controller.stop_requested


def test_view_mapping():
    view = ViewTransform(1.0, -1.0, 8.0, 4.0)
    assert view.map_x(0, 800) == pytest.approx(-3.0)
    assert view.map_x(400, 800) == pytest.approx(1.0)
    assert view.map_y(400, 400) == pytest.approx(1.0)
    assert view.map_x(400, 800, center_x=0.0) == pytest.approx(0.0)


def test_autoscroll_step(controller):
    controller.on_frame_elapsed(16)
    view = controller.snapshot()
    assert view.scale_x == pytest.approx(7.9872)
    assert view.scale_y == pytest.approx(3.9936)
    assert view.center_x == 0.0
    assert view.center_y == 0.0


def test_autoscroll_is_frame_rate_independent(config):
    slow = ViewController(config, WIDTH, HEIGHT)
    fast = ViewController(config, WIDTH, HEIGHT)
    slow.on_frame_elapsed(32)
    fast.on_frame_elapsed(16)
    fast.on_frame_elapsed(16)
    assert fast.snapshot().scale_x == pytest.approx(slow.snapshot().scale_x, rel=1e-5)


def test_shrink_ratio_is_clamped(controller):
    controller.on_frame_elapsed(1_000_000)
    view = controller.snapshot()
    assert view.scale_x == pytest.approx(8.0 * (1 - MAX_SHRINK_RATIO))
    assert view.scale_y > 0


def test_scale_stays_positive_over_many_frames(controller):
    for _ in range(2000):
        controller.on_frame_elapsed(50)
    view = controller.snapshot()
    assert view.scale_x > 0
    assert view.scale_y > 0


def test_fps_after_full_history(controller):
    for _ in range(99):
        controller.on_frame_elapsed(20)
    assert controller.fps == 0
    controller.on_frame_elapsed(20)
    assert controller.fps == 50


def test_fps_tracks_recent_frames(controller):
    for _ in range(100):
        controller.on_frame_elapsed(20)
    for _ in range(100):
        controller.on_frame_elapsed(10)
    assert controller.fps == 100


def test_drag_round_trip_keeps_center(controller):
    before = controller.snapshot()
    controller.on_drag_start(123, 321)
    controller.on_drag(123, 321)
    after = controller.snapshot()
    assert after.center_x == pytest.approx(before.center_x)
    assert after.center_y == pytest.approx(before.center_y)


def test_drag_pans_with_pointer(controller):
    controller.on_drag_start(400, 200)
    controller.on_drag(500, 150)
    view = controller.snapshot()
    # 100 px right and 50 px up at 8.0 / 800 and 4.0 / 400 units per pixel
    assert view.center_x == pytest.approx(-1.0)
    assert view.center_y == pytest.approx(0.5)
    assert view.scale_x == 8.0


def test_grabbed_point_stays_under_pointer(controller):
    controller.on_drag_start(100, 80)
    grabbed_x = controller.snapshot().map_x(100, WIDTH)
    grabbed_y = controller.snapshot().map_y(80, HEIGHT)

    controller.on_drag(260, 10)
    view = controller.snapshot()
    assert view.map_x(260, WIDTH) == pytest.approx(grabbed_x)
    assert view.map_y(10, HEIGHT) == pytest.approx(grabbed_y)


def test_drag_pauses_and_restores_autoscroll(controller, config):
    controller.on_drag_start(10, 10)
    assert controller.speed == 0.0

    controller.on_frame_elapsed(16)
    assert controller.snapshot().scale_x == 8.0

    controller.on_drag_end()
    assert controller.speed == config.speed


def test_drag_without_start_is_ignored(controller, config):
    controller.on_drag(500, 300)
    controller.on_drag_end()
    assert controller.snapshot().center_x == 0.0
    assert controller.speed == config.speed


def test_wheel_during_drag_keeps_autoscroll_paused(controller, config):
    controller.on_drag_start(400, 200)
    controller.on_zoom_input(-5, 3)
    assert controller.speed == 0.0

    controller.on_frame_elapsed(16)
    controller.on_drag(500, 150)
    view = controller.snapshot()
    assert view.scale_x == 8.0
    assert view.center_x == pytest.approx(-1.0)
    assert view.center_y == pytest.approx(0.5)

    controller.on_drag_end()
    assert controller.speed == pytest.approx(config.speed + 15 * config.zoom_sensitivity)


def test_repeated_drag_start_keeps_saved_speed(controller, config):
    controller.on_drag_start(10, 10)
    controller.on_drag_start(20, 20)
    assert controller.speed == 0.0

    controller.on_drag(20, 20)
    assert controller.snapshot().center_x == pytest.approx(0.0)

    controller.on_drag_end()
    assert controller.speed == config.speed


def test_zoom_input(controller, config):
    controller.on_zoom_input(-1, 3)
    assert controller.speed == pytest.approx(config.speed + 3 * config.zoom_sensitivity)

    controller.on_zoom_input(4, 3)
    assert controller.speed == pytest.approx(config.speed - 9 * config.zoom_sensitivity)


def test_negative_speed_zooms_out(controller):
    controller.on_zoom_input(10, 3)
    assert controller.speed < 0
    controller.on_frame_elapsed(16)
    assert controller.snapshot().scale_x > 8.0


def test_stop_requested(controller):
    controller.on_stop_requested()
    assert controller.stop_requested


def test_reset(controller, config):
    for _ in range(100):
        controller.on_frame_elapsed(20)
    controller.on_drag_start(0, 0)
    controller.on_drag(100, 100)
    controller.on_zoom_input(-5, 3)

    controller.reset()

    assert controller.snapshot() == ViewTransform(
        config.center_x, config.center_y, config.scale_x, config.scale_y
    )
    assert controller.speed == config.speed
    assert controller.fps == 50


def test_concurrent_updates_are_not_lost(config):
    controller = ViewController(config.with_overrides(speed=0.0), WIDTH, HEIGHT)

    def spin():
        for _ in range(1000):
            controller.on_zoom_input(-1, 1)

    threads = [threading.Thread(target=spin) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert controller.speed == pytest.approx(4000 * config.zoom_sensitivity)
