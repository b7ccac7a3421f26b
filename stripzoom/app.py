"""
Main application module for the strip-zoom viewer.

Contains the StripZoomApp class which handles:
- Window (or fullscreen) setup and the frame loop
- User input (drag to pan, wheel to change zoom speed, keyboard)
- Presenting rendered frames and the FPS readout
"""

import logging
import time

import pygame

from .config import RenderConfig
from .renderer import FrameRenderer
from .view import ViewController


logger = logging.getLogger(__name__)


class StripZoomApp:
    """
    Main application class for the strip-zoom viewer.

    Handles the pygame window, event loop, and hands input to the
    ViewController and view snapshots to the FrameRenderer.
    """

    # Default configuration
    DEFAULT_WIDTH = 1280
    DEFAULT_HEIGHT = 640

    # Scroll units per wheel notch, as reported by desktop toolkits
    WHEEL_SCROLL_AMOUNT = 3

    FPS_POSITION = (20, 20)
    FPS_COLOR = (192, 192, 192)

    CAPTION = "Mandelbrot Zoom - Drag to pan, wheel to change zoom speed, R to reset"

    def __init__(self, config=None, width=None, height=None, fullscreen=False):
        """
        Initialize the application.

        Args:
            config: RenderConfig (default RenderConfig())
            width: Window width in pixels (default 1280, ignored in fullscreen)
            height: Window height in pixels (default 640, ignored in fullscreen)
            fullscreen: Use the whole desktop instead of a window
        """
        self.config = config or RenderConfig()
        self.width = width or self.DEFAULT_WIDTH
        self.height = height or self.DEFAULT_HEIGHT
        self.fullscreen = fullscreen

        # Pygame state (initialized in run())
        self.screen = None
        self.font = None

        # Components
        self.renderer = None
        self.controller = None

    def run(self):
        """Run the frame loop until a stop is requested."""
        try:
            self._init_pygame()
            self._init_components()

            last_time = time.perf_counter()
            while not self.controller.stop_requested:
                self._handle_events()
                self._draw(self.renderer.render(self.controller.snapshot()))

                current_time = time.perf_counter()
                self.controller.on_frame_elapsed((current_time - last_time) * 1000.0)
                last_time = current_time
        except Exception:
            logger.exception("Frame loop terminated")
            raise
        finally:
            if self.renderer is not None:
                self.renderer.close()
            pygame.quit()
            logger.info("Display released")

    def _init_pygame(self):
        """Initialize pygame and create the display."""
        pygame.init()
        if self.fullscreen:
            self.screen = pygame.display.set_mode(
                (0, 0), pygame.FULLSCREEN | pygame.DOUBLEBUF
            )
            self.width, self.height = self.screen.get_size()
        else:
            self.screen = pygame.display.set_mode(
                (self.width, self.height), pygame.DOUBLEBUF
            )
        pygame.font.init()
        self.font = pygame.font.SysFont('Arial', 14)

    def _init_components(self):
        """Create the renderer and controller, and compile the kernels."""
        self.renderer = FrameRenderer(self.config, self.width, self.height)
        self.controller = ViewController(self.config, self.width, self.height)

        pygame.display.set_caption("Compiling (first run only)...")
        self.renderer.warmup()
        pygame.display.set_caption(self.CAPTION)

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.controller.on_stop_requested()
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)
            elif event.type == pygame.MOUSEWHEEL:
                # Wheel up is a negative rotation: zoom in faster
                self.controller.on_zoom_input(-event.y, self.WHEEL_SCROLL_AMOUNT)
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.controller.on_drag_start(*event.pos)
            elif event.type == pygame.MOUSEMOTION and event.buttons[0]:
                self.controller.on_drag(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.controller.on_drag_end()

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_ESCAPE:
            self.controller.on_stop_requested()
        elif event.key == pygame.K_r:
            self.controller.reset()

    def _draw(self, frame):
        """Present a rendered frame with the FPS overlay."""
        # surfarray is indexed (x, y); the frame is (y, x)
        pygame.surfarray.blit_array(self.screen, frame.swapaxes(0, 1))

        fps = self.controller.fps
        if fps > 0:
            text = self.font.render(f"FPS: {fps}", True, self.FPS_COLOR)
            self.screen.blit(text, self.FPS_POSITION)

        pygame.display.flip()


def run(config=None, width=None, height=None, fullscreen=False):
    """
    Run the strip-zoom viewer.

    Args:
        config: RenderConfig (default RenderConfig())
        width: Window width (default 1280)
        height: Window height (default 640)
        fullscreen: Use the whole desktop
    """
    app = StripZoomApp(config, width, height, fullscreen)
    try:
        app.run()
    except KeyboardInterrupt:
        logger.info("Interrupted")
