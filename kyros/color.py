# color.py

import colorsys
from typing import Tuple

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
HUE_STEP = 9.0


def colorize(count: int, max_iterations: int) -> Tuple[int, int, int]:
    """
    Returns an (R, G, B) tuple for an escape iteration count.
    count == 0 is white (escaped before the first step), count == max_iterations
    is black (presumed interior). Anything else walks the hue wheel 9 degrees
    per iteration at full saturation and value.
    """
    if count == 0:
        return WHITE
    if count == max_iterations:
        return BLACK

    hue = (HUE_STEP * count) % 360.0
    r, g, b = colorsys.hsv_to_rgb(hue / 360.0, 1.0, 1.0)
    return (round(r * 255), round(g * 255), round(b * 255))
