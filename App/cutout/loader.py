"""Image loading and conversion into pixel buffers."""

from pathlib import Path

import numpy as np
from PIL import Image


def load_image(file_path: str | Path, max_width: int | None = None) -> Image.Image:
    """Load and validate an image file.

    Args:
        file_path: Path to image file (PNG, JPG, etc.)
        max_width: Downscale so the image is at most this wide, if given

    Returns:
        PIL Image in RGBA mode

    Raises:
        ValueError: If file cannot be loaded or is invalid
    """
    try:
        image = Image.open(file_path)
        image.load()
    except Exception as e:
        raise ValueError(f"Failed to load image: {e}") from e

    # AIDEV-NOTE: Always convert to RGBA for consistent processing
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    if max_width is not None:
        image = fit_to_width(image, max_width)
    return image


def fit_to_width(image: Image.Image, max_width: int) -> Image.Image:
    """Shrink an image to fit a display width, never enlarging it.

    AIDEV-NOTE: Selection happens in the fitted image's pixel space, so
    exported cutouts have the fitted resolution.
    """
    scale = min(1.0, max_width / image.width)
    if scale >= 1.0:
        return image
    new_size = (max(1, int(image.width * scale)), max(1, int(image.height * scale)))
    return image.resize(new_size, Image.Resampling.LANCZOS)


def to_pixel_buffer(image: Image.Image) -> np.ndarray:
    """Read-only RGBA array of shape (height, width, 4)."""
    buffer = np.array(image.convert("RGBA"), dtype=np.uint8)
    buffer.setflags(write=False)
    return buffer
