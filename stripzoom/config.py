"""
Startup configuration for the strip-zoom viewer.

All values are fixed for the lifetime of a run. The command line in
__main__.py builds one of these with with_overrides().
"""

import os
from dataclasses import dataclass, field, replace

from .colormaps import COLORMAPS


def _default_area_count():
    # One strip per hardware thread
    return os.cpu_count() or 4


@dataclass(frozen=True)
class RenderConfig:
    """
    Constants shared by the renderer and the view controller.

    Attributes:
        max_n: Maximum iteration count (higher = more detail, lower fps)
        max_radius: Escape radius for the orbit
        areas: Number of screen strips computed in parallel
        center_x, center_y: Initial view center in the complex plane
        scale_x, scale_y: Initial width/height of the view in the complex plane
        speed: Initial autoscroll speed (fraction of scale shrunk per ms)
        history_size: Number of frame times averaged for the FPS readout
        zoom_sensitivity: Autoscroll speed change per wheel unit
        colormap: Name of the palette in COLORMAPS
    """

    max_n: int = 50
    max_radius: float = 50.0
    areas: int = field(default_factory=_default_area_count)
    center_x: float = 0.0
    center_y: float = 0.0
    scale_x: float = 8.0
    scale_y: float = 4.0
    speed: float = 0.0001
    history_size: int = 100
    zoom_sensitivity: float = 0.00002
    colormap: str = 'Classic'

    def __post_init__(self):
        if self.max_n < 1:
            raise ValueError(f"max_n must be at least 1, got {self.max_n}")
        if self.max_radius <= 0:
            raise ValueError(f"max_radius must be positive, got {self.max_radius}")
        if self.areas < 1:
            raise ValueError(f"areas must be at least 1, got {self.areas}")
        if self.scale_x <= 0 or self.scale_y <= 0:
            raise ValueError(
                f"scale must be positive, got ({self.scale_x}, {self.scale_y})"
            )
        if self.history_size < 1:
            raise ValueError(f"history_size must be at least 1, got {self.history_size}")
        if self.colormap not in COLORMAPS:
            raise ValueError(
                f"unknown colormap {self.colormap!r}, "
                f"expected one of {sorted(COLORMAPS)}"
            )

    def with_overrides(self, **overrides):
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)
