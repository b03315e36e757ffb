"""Bounding box extraction for selection masks."""

import numpy as np

from models import Bounds


def mask_bounds(mask: np.ndarray | None) -> Bounds | None:
    """Tight bounding box of all true cells.

    Args:
        mask: 2D mask, any nonzero value counts as selected

    Returns:
        Bounds of the selection, or None if nothing is selected
    """
    if mask is None:
        return None

    rows = np.flatnonzero(mask.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(mask.any(axis=0))

    min_x, max_x = int(cols[0]), int(cols[-1])
    min_y, max_y = int(rows[0]), int(rows[-1])
    return Bounds(
        min_x=min_x,
        min_y=min_y,
        width=max_x - min_x + 1,
        height=max_y - min_y + 1,
    )
