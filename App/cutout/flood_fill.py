"""Color-based region growing (magic wand selection).

AIDEV-NOTE: The tolerance is compared against the raw Euclidean RGB
distance (0-441.7), not a percentage. A tolerance of 100 therefore never
reaches strongly dissimilar colors. Keep it that way unless the slider
semantics change too.
"""

import logging

import numpy as np

from models import Point

logger = logging.getLogger(__name__)


def flood_select(buffer: np.ndarray, seed: Point, tolerance: float) -> np.ndarray:
    """Select all pixels connected to the seed with a similar color.

    Args:
        buffer: RGBA uint8 array of shape (height, width, 4)
        seed: Start pixel (x, y)
        tolerance: Maximum RGB distance from the seed color

    Returns:
        uint8 mask of shape (height, width) holding 0/1. All zero when the
        buffer is empty or the seed lies outside it.

    AIDEV-NOTE: Breadth-first over 4-connected neighbors. The reference
    color is always the seed's own color, never a running average. The
    queue is a plain list with a moving head index and the visited set is
    a bytearray over linear pixel indices, so each pixel is tested once.
    """
    height, width = buffer.shape[:2]
    mask = np.zeros((height, width), dtype=np.uint8)

    seed_x, seed_y = int(seed[0]), int(seed[1])
    if width == 0 or height == 0 or not (0 <= seed_x < width and 0 <= seed_y < height):
        logger.debug("Seed %s outside %dx%d buffer, empty selection", seed, width, height)
        return mask

    # Precompute which pixels are close enough to the seed color
    rgb = buffer[:, :, :3].astype(np.int32)
    seed_rgb = rgb[seed_y, seed_x]
    distance = np.sqrt(((rgb - seed_rgb) ** 2).sum(axis=2))
    within = (distance <= tolerance).ravel().tolist()

    selected = bytearray(width * height)
    visited = bytearray(width * height)
    start = seed_y * width + seed_x
    visited[start] = 1
    queue = [start]
    head = 0

    while head < len(queue):
        index = queue[head]
        head += 1
        if not within[index]:
            continue

        selected[index] = 1
        x = index % width

        # Right, left, down, up
        if x + 1 < width and not visited[index + 1]:
            visited[index + 1] = 1
            queue.append(index + 1)
        if x > 0 and not visited[index - 1]:
            visited[index - 1] = 1
            queue.append(index - 1)
        if index + width < width * height and not visited[index + width]:
            visited[index + width] = 1
            queue.append(index + width)
        if index >= width and not visited[index - width]:
            visited[index - width] = 1
            queue.append(index - width)

    mask = np.frombuffer(bytes(selected), dtype=np.uint8).reshape(height, width).copy()
    logger.info(
        "Flood fill from (%d, %d) at tolerance %s selected %d pixels",
        seed_x,
        seed_y,
        tolerance,
        int(mask.sum()),
    )
    return mask
