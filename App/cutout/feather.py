"""Edge feathering: turn a hard selection into a soft alpha ramp.

AIDEV-NOTE: Taps that fall outside the image are dropped without
renormalizing the kernel, so values near the image border come out darker
than in the interior. Exported cutouts depend on this falloff matching the
previous renderer, so renormalization is opt-in (normalize_edges=True).
"""

import math

import numpy as np


def gaussian_kernel(radius: int) -> np.ndarray:
    """Normalized 1D Gaussian kernel of size 2 * radius + 1.

    AIDEV-NOTE: sigma = radius / 2, chosen for a visibly strong effect at
    small radii.
    """
    sigma = radius / 2
    sigma_sq = sigma * sigma
    weights = np.array(
        [math.exp(-0.5 * (i - radius) ** 2 / sigma_sq) for i in range(2 * radius + 1)],
        dtype=np.float64,
    )
    return weights / weights.sum()


def _blur_pass(
    values: np.ndarray, kernel: np.ndarray, axis: int, normalize: bool
) -> np.ndarray:
    """Convolve along one axis summing only in-bounds taps."""
    radius = len(kernel) // 2
    length = values.shape[axis]
    out = np.zeros_like(values, dtype=np.float64)
    mass = np.zeros(length, dtype=np.float64)

    for i, weight in enumerate(kernel):
        offset = i - radius
        # out[k] += weight * values[k + offset] for all k with 0 <= k + offset < length
        dst = slice(max(0, -offset), min(length, length - offset))
        src = slice(max(0, offset), min(length, length + offset))
        if dst.start >= dst.stop:
            continue
        if axis == 1:
            out[:, dst] += weight * values[:, src]
        else:
            out[dst, :] += weight * values[src, :]
        mass[dst] += weight

    if normalize:
        if axis == 1:
            out /= mass[np.newaxis, :]
        else:
            out /= mass[:, np.newaxis]
    return out


def feather(mask: np.ndarray, radius: int, normalize_edges: bool = False) -> np.ndarray:
    """Blur a binary mask into an 8-bit alpha ramp.

    Args:
        mask: 0/1 mask of shape (height, width)
        radius: Smoothing radius in pixels; 0 disables blurring
        normalize_edges: Divide by the kernel mass actually used near the
            image border instead of letting values fall off

    Returns:
        uint8 array of shape (height, width) with values 0-255
    """
    scaled = (mask != 0).astype(np.float64) * 255.0
    if radius <= 0 or scaled.size == 0:
        return scaled.astype(np.uint8)

    kernel = gaussian_kernel(radius)
    horizontal = _blur_pass(scaled, kernel, axis=1, normalize=normalize_edges)
    vertical = _blur_pass(horizontal, kernel, axis=0, normalize=normalize_edges)
    return np.clip(np.rint(vertical), 0, 255).astype(np.uint8)
