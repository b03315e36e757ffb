"""Outline tracing of an opaque region for vector export.

AIDEV-NOTE: Only the first boundary loop found in row-major order is
traced. Holes and disconnected islands are not part of the outline; this
is a known limitation of the vector export, not something to patch over
here.
"""

import logging

import numpy as np

from models import Point

logger = logging.getLogger(__name__)

# Pixels with alpha above this count as inside the outline
OPACITY_THRESHOLD = 128

# Direction codes: 0 up, 1 right, 2 down, 3 left
DX = (0, 1, 0, -1)
DY = (-1, 0, 1, 0)


def _find_start(opaque: list[list[bool]], width: int, height: int) -> Point | None:
    """First opaque pixel (row-major) sitting on a top edge."""
    for y in range(height):
        row = opaque[y]
        above = opaque[y - 1] if y > 0 else None
        for x in range(width):
            if row[x] and (above is None or not above[x]):
                return Point(x, y)
    return None


def trace_points(rgba: np.ndarray) -> list[Point] | None:
    """Walk the outline of the first opaque region.

    Args:
        rgba: RGBA uint8 array of shape (height, width, 4)

    Returns:
        Boundary lattice points in walking order (start point first, not
        repeated at the end), or None if there is no opaque pixel or the
        walk cannot close.
    """
    height, width = rgba.shape[:2]
    opaque = (rgba[:, :, 3] > OPACITY_THRESHOLD).tolist()

    def is_opaque(x: int, y: int) -> bool:
        return 0 <= x < width and 0 <= y < height and opaque[y][x]

    start = _find_start(opaque, width, height)
    if start is None:
        logger.debug("No opaque pixel to trace")
        return None

    path = []
    x, y = start
    direction = 0
    max_steps = 4 * width * height + 4

    while True:
        path.append(Point(x, y))
        for turn in range(4):
            # Favor turning left, then straight, right, back
            candidate = (direction + 3 + turn) % 4
            nx, ny = x + DX[candidate], y + DY[candidate]
            if is_opaque(nx, ny):
                direction = candidate
                x, y = nx, ny
                break
        else:
            logger.debug("Outline walk stuck at (%d, %d)", x, y)
            return None

        if (x, y) == start:
            return path
        if len(path) > max_steps:
            logger.warning("Outline walk did not close after %d steps", max_steps)
            return None


def format_path(points: list[Point]) -> str:
    """Serialize lattice points as closed SVG path data."""
    commands = [
        f"{'M' if i == 0 else 'L'} {x},{y}" for i, (x, y) in enumerate(points)
    ]
    return " ".join(commands) + " Z"


def trace_contour(rgba: np.ndarray) -> str | None:
    """Trace the cutout outline as SVG path data.

    Returns:
        Path data like ``"M 3,0 L 4,0 ... Z"``, or None if no closed
        outline is available
    """
    points = trace_points(rgba)
    if points is None:
        return None
    logger.info("Traced outline with %d points", len(points))
    return format_path(points)
