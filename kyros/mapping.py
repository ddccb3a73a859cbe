from __future__ import annotations

from kyros.errors import InvalidDimensions

PLANE_MIN = -2.0
PLANE_SPAN = 4.0


def to_plane(pixel_index: int, axis_length: int) -> float:
    """Map a pixel index on an axis of ``axis_length`` pixels onto [-2, 2]."""
    if axis_length < 2:
        raise InvalidDimensions(f"Axis length must be at least 2, got {axis_length}.")
    return PLANE_SPAN * pixel_index / (axis_length - 1) + PLANE_MIN
