"""
Screen areas: the vertical strips the viewport is split into.

Each ScreenArea owns a preallocated iteration buffer and RGB image that
are overwritten in place every frame. Only the area's own calculate()
call writes to them.
"""

import numpy as np

from .compute import calculate_strip


class ScreenArea:
    """
    One strip of the viewport.

    Attributes:
        width, height: Strip size in pixels
        offset_x, offset_y: Top-left corner of the strip in the viewport
        screen_width, screen_height: Full viewport size in pixels
        buffer: (height, width) int32 palette indices from the last frame
        image: (height, width, 3) uint8 RGB image from the last frame
    """

    def __init__(self, width, height, offset_x, offset_y, screen_width, screen_height):
        self.width = width
        self.height = height
        self.offset_x = offset_x
        self.offset_y = offset_y
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.buffer = np.zeros((height, width), dtype=np.int32)
        self.image = np.zeros((height, width, 3), dtype=np.uint8)

    def calculate(self, view, max_n, max_radius, palette):
        """
        Render this strip for a view transform.

        Args:
            view: ViewTransform snapshot for the frame
            max_n: Maximum iteration count
            max_radius: Escape radius
            palette: (max_n + 1, 3) uint8 RGB array

        Returns:
            The strip's image (the same array every frame).
        """
        return calculate_strip(
            self.buffer, self.image,
            self.offset_x, self.offset_y, self.screen_width, self.screen_height,
            view, max_n, max_radius, palette
        )

    def __repr__(self):
        return (f"ScreenArea({self.width}x{self.height} "
                f"at ({self.offset_x}, {self.offset_y}))")


def partition_viewport(screen_width, screen_height, count):
    """
    Split the viewport into count side-by-side strips.

    Every strip is screen_width // count wide except the last, which also
    takes the leftover columns, so the strips cover the viewport exactly.

    Raises:
        ValueError if count is not between 1 and screen_width
    """
    if count < 1:
        raise ValueError(f"need at least one area, got {count}")
    if count > screen_width:
        raise ValueError(
            f"cannot split {screen_width} columns into {count} areas"
        )

    area_width = screen_width // count
    areas = []
    for i in range(count):
        offset_x = i * area_width
        width = area_width if i < count - 1 else screen_width - offset_x
        areas.append(ScreenArea(width, screen_height, offset_x, 0,
                                screen_width, screen_height))
    return areas
