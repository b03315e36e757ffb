"""Freehand brush editing of selection masks.

AIDEV-NOTE: A stroke is a sequence of circular stamps. Pointer samples can
be far apart during fast motion, so the gap between two samples is filled
with interpolated stamps spaced at most about a quarter radius apart.
"""

import math

import numpy as np

from models import Point, SelectionMode

from .mask_ops import empty_mask


def stamp(mask: np.ndarray, center: Point, radius: int, add: bool) -> np.ndarray:
    """Paint or erase a filled circle.

    Args:
        mask: Current 0/1 mask of shape (height, width)
        center: Circle center (x, y), may lie outside the mask
        radius: Circle radius in pixels
        add: Set cells to 1 if True, to 0 if False

    Returns:
        New mask with the circle applied, clipped to the mask bounds
    """
    result = mask.copy()
    _paint_circle(result, center, radius, add)
    return result


def _paint_circle(target: np.ndarray, center: Point, radius: int, add: bool) -> None:
    height, width = target.shape[:2]
    cx, cy = int(center[0]), int(center[1])

    x0, x1 = max(cx - radius, 0), min(cx + radius, width - 1)
    y0, y1 = max(cy - radius, 0), min(cy + radius, height - 1)
    if x0 > x1 or y0 > y1:
        return

    # Squared distance avoids a square root per cell
    ys, xs = np.ogrid[y0 : y1 + 1, x0 : x1 + 1]
    inside = (xs - cx) ** 2 + (ys - cy) ** 2 <= radius * radius
    window = target[y0 : y1 + 1, x0 : x1 + 1]
    window[inside] = 1 if add else 0


def _round_half_up(value: float) -> int:
    # Halves go up, not to even
    return math.floor(value + 0.5)


def stroke_points(prev: Point, curr: Point, radius: int) -> list[Point]:
    """Stamp centers needed to connect two pointer samples.

    Returns:
        Points from prev towards curr (curr included), rounded to pixels
    """
    distance = math.hypot(curr[0] - prev[0], curr[1] - prev[1])
    spacing = max(radius, 1) / 4
    steps = max(1, _round_half_up(distance / spacing))

    points = []
    for i in range(steps + 1):
        t = i / steps
        x = _round_half_up(prev[0] * (1 - t) + curr[0] * t)
        y = _round_half_up(prev[1] * (1 - t) + curr[1] * t)
        point = Point(x, y)
        if not points or points[-1] != point:
            points.append(point)
    return points


def stroke(
    mask: np.ndarray, prev: Point, curr: Point, radius: int, add: bool
) -> np.ndarray:
    """Apply one pointer movement of a brush stroke."""
    result = mask.copy()
    for point in stroke_points(prev, curr, radius):
        _paint_circle(result, point, radius, add)
    return result


def stroke_polarity(mode: SelectionMode) -> bool:
    """True if a stroke in this mode paints, False if it erases."""
    return mode != SelectionMode.SUBTRACT


def stroke_base(
    mask: np.ndarray | None, mode: SelectionMode, width: int, height: int
) -> np.ndarray:
    """Mask a new stroke starts from.

    AIDEV-NOTE: A NEW-mode stroke starts from scratch rather than from the
    prior selection.
    """
    if mode == SelectionMode.NEW or mask is None:
        return empty_mask(width, height)
    return mask.copy()
