"""
Parallel frame renderer for the strip-zoom viewer.

The FrameRenderer class handles:
- Splitting the viewport into strips (ScreenArea)
- Rendering every strip on a thread pool for each frame
- Waiting for all strips before compositing them into one RGB frame
"""

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .area import partition_viewport
from .colormaps import get_colormap
from .compute import warmup_jit


logger = logging.getLogger(__name__)


class FrameRenderer:
    """
    Renders whole frames by fanning a view transform out to every strip.

    Usage:
        with FrameRenderer(config, 1280, 720) as renderer:
            renderer.warmup()

            # In your frame loop:
            frame = renderer.render(controller.snapshot())
            display(frame)

    Attributes:
        width, height: Viewport dimensions
        max_n: Maximum iteration count
        max_radius: Escape radius
        palette: (max_n + 1, 3) uint8 RGB palette shared by all strips
        areas: The ScreenArea strips, left to right
        frame: (height, width, 3) uint8 composited frame, reused every frame
    """

    def __init__(self, config, width, height):
        """
        Initialize the renderer.

        Args:
            config: RenderConfig with iteration limits, palette and area count
            width, height: Viewport dimensions in pixels
        """
        self.width = width
        self.height = height
        self.max_n = config.max_n
        self.max_radius = config.max_radius
        self.palette = get_colormap(config.colormap, config.max_n)

        self.areas = partition_viewport(width, height, config.areas)
        self.frame = np.zeros((height, width, 3), dtype=np.uint8)

        # One worker per strip; the strips share no mutable state
        self.executor = ThreadPoolExecutor(
            max_workers=len(self.areas), thread_name_prefix='stripzoom-area'
        )
        logger.info("Renderer ready: %dx%d, %d areas, max_n=%d",
                    width, height, len(self.areas), self.max_n)

    def warmup(self):
        """Compile the kernels before the first frame."""
        logger.info("Compiling kernels (first run only)...")
        warmup_jit(self.palette)

    def render(self, view):
        """
        Render one frame.

        Args:
            view: ViewTransform snapshot shared by every strip

        Returns:
            The composited frame array (same object every call).

        Any exception raised while rendering a strip propagates here.
        """
        futures = [
            self.executor.submit(area.calculate, view, self.max_n,
                                 self.max_radius, self.palette)
            for area in self.areas
        ]
        # Join before touching any strip image
        images = [future.result() for future in futures]

        for area, image in zip(self.areas, images):
            self.frame[area.offset_y:area.offset_y + area.height,
                       area.offset_x:area.offset_x + area.width] = image
        return self.frame

    def close(self):
        """Shut down the worker pool."""
        self.executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
