"""
Escape-count and strip-rendering kernels using Numba JIT compilation.

This module contains all the performance-critical computation functions
that are JIT-compiled for speed. These functions handle:
- Escape iteration counting for z -> z² + c
- The checkerboard pass that evaluates every other pixel of a strip
- Interpolation of the skipped pixels from their evaluated neighbours
- Palette lookup into an RGB image

All kernels are compiled with nogil=True so several strips can be
computed at the same time from a thread pool.
"""

import numpy as np
from numba import jit


@jit(nopython=True, nogil=True, cache=True)
def escape_count(cr, ci, max_n, max_radius):
    """
    Count iterations until the orbit of c = cr + ci·i leaves the escape radius.

    Args:
        cr, ci: Real and imaginary parts of c
        max_n: Maximum iteration count
        max_radius: Escape radius

    Returns:
        The iteration n in [1, max_n] at which |z| first exceeds max_radius,
        or max_n + 1 if the orbit stays inside for max_n iterations.
    """
    max_radius_sq = max_radius * max_radius
    n = 1
    zr = 0.0
    zi = 0.0
    while n <= max_n:
        zr1 = zr * zr - zi * zi
        zi1 = 2.0 * zr * zi
        zr = zr1 + cr
        zi = zi1 + ci
        # Per-component pre-check before the squared norm
        if abs(zr) > max_radius or abs(zi) > max_radius or zr * zr + zi * zi > max_radius_sq:
            break
        n += 1
    return n


@jit(nopython=True, nogil=True, cache=True)
def palette_index(count, max_n):
    """Map a raw escape count to its palette slot (non-escaped -> 0)."""
    if count > max_n:
        return 0
    return count


@jit(nopython=True, nogil=True, cache=True)
def checkerboard_pass(buffer, offset_x, offset_y, screen_width, screen_height,
                      center_x, center_y, scale_x, scale_y, max_n, max_radius):
    """
    Evaluate the pixels of a strip where (x + y) is even.

    Args:
        buffer: (height, width) int array owned by the strip, modified in place
        offset_x, offset_y: Position of the strip in the full viewport
        screen_width, screen_height: Full viewport size in pixels
        center_x, center_y, scale_x, scale_y: View transform snapshot
        max_n: Maximum iteration count
        max_radius: Escape radius

    Odd pixels are left untouched; interpolate_pass fills them in.
    """
    height, width = buffer.shape
    step_x = scale_x / screen_width
    origin_x = offset_x * step_x - scale_x / 2.0 + center_x
    step_y = scale_y / screen_height
    origin_y = offset_y * step_y - scale_y / 2.0 + center_y

    for y in range(height):
        ci = y * step_y + origin_y
        for x in range(y % 2, width, 2):
            cr = x * step_x + origin_x
            buffer[y, x] = palette_index(escape_count(cr, ci, max_n, max_radius), max_n)


@jit(nopython=True, nogil=True, cache=True)
def interpolate_pass(buffer):
    """
    Fill the pixels where (x + y) is odd from their even neighbours.

    Edge columns copy their single horizontal neighbour, interior pixels
    average the 4-neighbour cross, and interior pixels on the first or last
    row average left and right only. Every neighbour read here is an even
    cell, so the order of the writes does not matter.
    """
    height, width = buffer.shape

    for y in range(height):
        for x in range(1 - y % 2, width, 2):
            if width == 1:
                # No horizontal neighbour; odd cells start at row 1, the cell above is even
                buffer[y, x] = buffer[y - 1, x]
            elif x == 0:
                buffer[y, x] = buffer[y, x + 1]
            elif x == width - 1:
                buffer[y, x] = buffer[y, x - 1]
            elif y > 0 and y < height - 1:
                buffer[y, x] = (buffer[y, x - 1] + buffer[y, x + 1] +
                                buffer[y - 1, x] + buffer[y + 1, x]) // 4
            else:
                buffer[y, x] = (buffer[y, x - 1] + buffer[y, x + 1]) // 2


@jit(nopython=True, nogil=True, cache=True)
def colorize(buffer, max_n, palette, out):
    """
    Apply a palette to a buffer of palette indices.

    Args:
        buffer: (height, width) int array from the checkerboard/interpolation passes
        max_n: Maximum iteration count (indices are clamped to it)
        palette: (max_n + 1, 3) uint8 RGB array
        out: Output RGB image array (height, width, 3), modified in place
    """
    height, width = buffer.shape
    for y in range(height):
        for x in range(width):
            idx = min(buffer[y, x], max_n)
            out[y, x, 0] = palette[idx, 0]
            out[y, x, 1] = palette[idx, 1]
            out[y, x, 2] = palette[idx, 2]


def calculate_strip(buffer, image, offset_x, offset_y, screen_width, screen_height,
                    view, max_n, max_radius, palette):
    """
    Run all three passes for one strip.

    Args:
        buffer: (height, width) int32 scratch buffer, overwritten
        image: (height, width, 3) uint8 image, overwritten
        offset_x, offset_y: Position of the strip in the full viewport
        screen_width, screen_height: Full viewport size in pixels
        view: ViewTransform snapshot
        max_n: Maximum iteration count
        max_radius: Escape radius
        palette: (max_n + 1, 3) uint8 RGB array

    Returns:
        The image array.
    """
    checkerboard_pass(
        buffer, offset_x, offset_y, screen_width, screen_height,
        float(view.center_x), float(view.center_y),
        float(view.scale_x), float(view.scale_y),
        int(max_n), float(max_radius)
    )
    interpolate_pass(buffer)
    colorize(buffer, max_n, palette, image)
    return image


def warmup_jit(palette):
    """
    Warm up JIT compilation with small dummy arrays.

    Call this once at startup to pre-compile the Numba functions,
    avoiding a delay on the first frame.

    Args:
        palette: The palette array that will be used for rendering
    """
    max_n = palette.shape[0] - 1
    buffer = np.zeros((4, 4), dtype=np.int32)
    image = np.zeros((4, 4, 3), dtype=np.uint8)
    checkerboard_pass(buffer, 0, 0, 4, 4, 0.0, 0.0, 4.0, 4.0, max_n, 2.0)
    interpolate_pass(buffer)
    colorize(buffer, max_n, palette, image)
