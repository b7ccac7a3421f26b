"""
Mandelbrot Strip-Zoom Package

A real-time, continuously zooming Mandelbrot viewer using Pygame for
display and Numba for JIT-compiled computation. The viewport is split into
vertical strips rendered in parallel; each strip evaluates only half of its
pixels on a checkerboard and interpolates the rest.

Quick Start:
    from stripzoom import run
    run()

Or from command line:
    python -m stripzoom

Package Structure:
    - compute.py: JIT-compiled escape-count and strip kernels
    - colormaps.py: Palette definitions (Classic, Green)
    - area.py: Screen strips and viewport partitioning
    - renderer.py: Parallel frame rendering and compositing
    - view.py: Thread-safe view transform, autoscroll and FPS state
    - config.py: Startup constants
    - app.py: Main application and frame loop

Controls:
    - Drag: Pan around
    - Scroll: Speed up, slow down or reverse the zoom
    - R: Reset to default view
    - ESC: Quit
"""

from .app import run, StripZoomApp
from .area import ScreenArea, partition_viewport
from .colormaps import COLORMAPS, get_colormap, list_colormap_names
from .config import RenderConfig
from .renderer import FrameRenderer
from .view import ViewController, ViewTransform

__version__ = "1.0.0"
__all__ = [
    "run",
    "StripZoomApp",
    "ScreenArea",
    "partition_viewport",
    "COLORMAPS",
    "get_colormap",
    "list_colormap_names",
    "RenderConfig",
    "FrameRenderer",
    "ViewController",
    "ViewTransform",
]
