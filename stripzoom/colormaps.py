"""
Palette definitions for the strip-zoom viewer.

Each palette function returns a numpy array of shape (max_n + 1, 3) with
RGB values (uint8). Index n is the color for a pixel whose orbit escaped
at iteration n; index 0 is shared by "escaped immediately" and "never
escaped", so both render black in the default palette.

To add a new palette:
1. Define a create_colormap_xxx(max_n) function that returns the color array
2. Add it to the COLORMAPS dictionary at the bottom of this file
"""

import numpy as np


def hsb_to_rgb(h, s, b):
    """
    Convert HSB (0-1 range) to RGB (0-255 range).

    Only the fractional part of the hue is used, so hues above 1.0 wrap
    around the color wheel. Channels are rounded half up.
    """
    if s == 0:
        v = int(b * 255 + 0.5)
        return (v, v, v)

    h = (h - np.floor(h)) * 6
    i = int(h)
    f = h - i
    p = b * (1 - s)
    q = b * (1 - s * f)
    t = b * (1 - s * (1 - f))

    if i == 0:
        r, g, bl = b, t, p
    elif i == 1:
        r, g, bl = q, b, p
    elif i == 2:
        r, g, bl = p, b, t
    elif i == 3:
        r, g, bl = p, q, b
    elif i == 4:
        r, g, bl = t, p, b
    else:
        r, g, bl = b, p, q

    return (int(r * 255 + 0.5), int(g * 255 + 0.5), int(bl * 255 + 0.5))


def create_colormap_classic(max_n):
    """
    Classic palette: black -> teal -> violet -> bright red.

    Hue, saturation and brightness all rise linearly with n / max_n, so
    deep-escaping pixels near the set boundary are the brightest.
    """
    colors = np.zeros((max_n + 1, 3), dtype=np.uint8)
    for n in range(max_n + 1):
        br = n / max_n
        colors[n] = hsb_to_rgb(0.5 + br / 2.0, 0.5 + br / 2.0, br)
    return colors


def create_colormap_green(max_n):
    """Green palette: black -> pure green."""
    colors = np.zeros((max_n + 1, 3), dtype=np.uint8)
    for n in range(max_n + 1):
        colors[n, 1] = n * 255 // max_n
    return colors


# Registry of all available palettes.
# Keys are display names, values are factory functions taking max_n.
COLORMAPS = {
    'Classic': create_colormap_classic,
    'Green': create_colormap_green,
}


def get_colormap(name, max_n):
    """
    Get a palette by name.

    Args:
        name: Key from COLORMAPS dictionary
        max_n: Maximum iteration count; the palette has max_n + 1 entries

    Returns:
        Palette array (max_n + 1, 3) of uint8 RGB values

    Raises:
        KeyError if name not found
    """
    return COLORMAPS[name](max_n)


def get_default_colormap(max_n):
    """Get the default palette (Classic)."""
    return create_colormap_classic(max_n)


def list_colormap_names():
    """Get list of available palette names."""
    return list(COLORMAPS.keys())
