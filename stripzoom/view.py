"""
View state for the strip-zoom viewer.

The ViewController owns the view transform, the autoscroll speed and the
frame-time history. Input handlers and the frame loop only touch that
state through the controller's methods, all of which run under a single
lock held just long enough to read or update the fields.
"""

import threading
from collections import deque
from dataclasses import dataclass


# Ceiling on the per-frame shrink ratio; keeps the scale positive
MAX_SHRINK_RATIO = 0.5


@dataclass(frozen=True)
class ViewTransform:
    """Complex-plane rectangle shown on screen: width scale_x, height scale_y."""

    center_x: float
    center_y: float
    scale_x: float
    scale_y: float

    def map_x(self, screen_x, screen_width, center_x=None):
        """Map a screen column to a real coordinate."""
        if center_x is None:
            center_x = self.center_x
        return screen_x * self.scale_x / screen_width - self.scale_x / 2.0 + center_x

    def map_y(self, screen_y, screen_height, center_y=None):
        """Map a screen row to an imaginary coordinate."""
        if center_y is None:
            center_y = self.center_y
        return screen_y * self.scale_y / screen_height - self.scale_y / 2.0 + center_y


class ViewController:
    """
    Thread-safe holder of the view transform and autoscroll state.

    Usage:
        controller = ViewController(config, 1280, 720)

        # In the frame loop:
        view = controller.snapshot()
        ... render view ...
        controller.on_frame_elapsed(elapsed_ms)

        # From input handlers:
        controller.on_drag_start(x, y)
        controller.on_drag(x, y)
        controller.on_drag_end()
        controller.on_zoom_input(rotation, scroll_amount)
        controller.on_stop_requested()
    """

    def __init__(self, config, screen_width, screen_height):
        """
        Initialize the controller.

        Args:
            config: RenderConfig with the initial view and autoscroll speed
            screen_width, screen_height: Viewport size in pixels
        """
        self.config = config
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.lock = threading.Lock()

        self._view = ViewTransform(
            config.center_x, config.center_y, config.scale_x, config.scale_y
        )
        self._speed = config.speed

        # Frame timing
        self._frame_times = deque([0.0] * config.history_size, maxlen=config.history_size)
        self._frames = 0
        self._fps = 0

        # Drag state, captured at drag start
        self._dragging = False
        self._drag_speed = 0.0
        self._drag_center_x = 0.0
        self._drag_center_y = 0.0
        self._drag_x = 0.0
        self._drag_y = 0.0

        self._stop_requested = False

    def snapshot(self):
        """Return the current view transform."""
        with self.lock:
            return self._view

    @property
    def fps(self):
        """Smoothed frames per second, 0 until the history has filled once."""
        with self.lock:
            return self._fps

    @property
    def speed(self):
        with self.lock:
            return self._speed

    @property
    def stop_requested(self):
        with self.lock:
            return self._stop_requested

    def on_frame_elapsed(self, elapsed_ms):
        """
        Record a frame time and apply one step of autoscroll.

        The scale shrinks by elapsed_ms * speed of itself, so the zoom rate
        on screen is the same at any frame rate.
        """
        with self.lock:
            self._frame_times.append(elapsed_ms)
            self._frames += 1

            history_size = self._frame_times.maxlen
            if self._frames >= history_size:
                total = sum(self._frame_times)
                if total > 0:
                    self._fps = round(1000 * history_size / total)

            ratio = min(elapsed_ms * self._speed, MAX_SHRINK_RATIO)
            view = self._view
            self._view = ViewTransform(
                view.center_x,
                view.center_y,
                view.scale_x - view.scale_x * ratio,
                view.scale_y - view.scale_y * ratio,
            )

    def on_drag_start(self, screen_x, screen_y):
        """Grab the complex point under the pointer and pause autoscroll."""
        with self.lock:
            view = self._view
            self._drag_x = view.map_x(screen_x, self.screen_width)
            self._drag_y = view.map_y(screen_y, self.screen_height)
            self._drag_center_x = view.center_x
            self._drag_center_y = view.center_y
            # A repeated button-down (release lost to another window) keeps
            # the speed saved by the first one
            if not self._dragging:
                self._drag_speed = self._speed
                self._speed = 0.0
                self._dragging = True

    def on_drag(self, screen_x, screen_y):
        """Move the center so the grabbed point stays under the pointer."""
        with self.lock:
            if not self._dragging:
                return
            view = self._view
            current_x = view.map_x(screen_x, self.screen_width, self._drag_center_x)
            current_y = view.map_y(screen_y, self.screen_height, self._drag_center_y)
            self._view = ViewTransform(
                self._drag_center_x - (current_x - self._drag_x),
                self._drag_center_y - (current_y - self._drag_y),
                view.scale_x,
                view.scale_y,
            )

    def on_drag_end(self):
        """Resume autoscroll at the speed it had before the drag."""
        with self.lock:
            if not self._dragging:
                return
            self._speed = self._drag_speed
            self._dragging = False

    def on_zoom_input(self, rotation, scroll_amount=1):
        """
        Change the autoscroll speed from a wheel event.

        Negative rotation (wheel away from the user) zooms in faster;
        enough positive rotation stops the zoom and then reverses it.
        During a drag the change is applied to the saved speed and takes
        effect on release.
        """
        delta = rotation * scroll_amount * self.config.zoom_sensitivity
        with self.lock:
            if self._dragging:
                self._drag_speed -= delta
            else:
                self._speed -= delta

    def on_stop_requested(self):
        with self.lock:
            self._stop_requested = True

    def reset(self):
        """Return to the initial view and autoscroll speed."""
        config = self.config
        with self.lock:
            self._view = ViewTransform(
                config.center_x, config.center_y, config.scale_x, config.scale_y
            )
            self._speed = config.speed
            self._dragging = False
