"""Boolean algebra over binary selection masks.

AIDEV-NOTE: Every function here returns a freshly allocated mask and never
writes into its inputs. Callers replace their mask value instead of
editing it in place.
"""

import numpy as np

from models import SelectionMode


def empty_mask(width: int, height: int) -> np.ndarray:
    """All-zero mask of the given size."""
    return np.zeros((height, width), dtype=np.uint8)


def check_shape(mask: np.ndarray, shape: tuple[int, ...]) -> None:
    """Fail fast when a mask does not match the image it is applied to.

    Raises:
        ValueError: If the mask's (height, width) differs from shape
    """
    if tuple(mask.shape[:2]) != tuple(shape[:2]):
        raise ValueError(
            f"Mask shape {tuple(mask.shape[:2])} does not match image shape "
            f"{tuple(shape[:2])}"
        )


def combine(
    existing: np.ndarray | None,
    fresh: np.ndarray,
    mode: SelectionMode,
) -> np.ndarray:
    """Merge a freshly computed region into the current selection.

    Args:
        existing: Current mask, or None when nothing is selected yet
        fresh: Newly computed mask of the same shape
        mode: NEW replaces, ADD unions, SUBTRACT removes fresh from existing

    Returns:
        New uint8 mask of 0/1
    """
    if existing is None:
        existing = np.zeros_like(fresh, dtype=np.uint8)
    check_shape(existing, fresh.shape)

    if mode == SelectionMode.ADD:
        result = (existing != 0) | (fresh != 0)
    elif mode == SelectionMode.SUBTRACT:
        result = (existing != 0) & (fresh == 0)
    else:
        result = fresh != 0
    return result.astype(np.uint8)


def invert(mask: np.ndarray) -> np.ndarray:
    """Swap selected and unselected cells."""
    return (mask == 0).astype(np.uint8)
