"""Cropping a selection out of the source image and drawing text on it.

AIDEV-NOTE: Texts are drawn with their top edge on the given y coordinate
(Pillow anchor "la"), in insertion order, so later texts cover earlier ones.
"""

import logging
from typing import Iterable

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from models import AppliedText, Bounds, CroppedArtifact, Point

from .bounds import mask_bounds
from .feather import feather
from .mask_ops import check_shape

logger = logging.getLogger(__name__)

# Bold sans-serif faces tried in order before Pillow's built-in font
BOLD_FONT_CANDIDATES = (
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "Arial Bold.ttf",
    "arialbd.ttf",
)


def load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a bold sans-serif font at the given pixel size."""
    for name in BOLD_FONT_CANDIDATES:
        try:
            return ImageFont.truetype(name, size)
        except OSError:
            continue
    logger.warning("No bold TrueType font found, using Pillow default font")
    return ImageFont.load_default(size=size)


def crop(buffer: np.ndarray, feathered: np.ndarray, bounds: Bounds) -> np.ndarray:
    """Cut the bounded region out of the source, weighted by the alpha ramp.

    Args:
        buffer: Source RGBA array of shape (height, width, 4)
        feathered: uint8 alpha ramp of shape (height, width)
        bounds: Region to cut, usually from the sharp mask

    Returns:
        RGBA uint8 array of shape (bounds.height, bounds.width, 4). Pixels
        with zero alpha in the ramp are fully transparent black.
    """
    check_shape(feathered, buffer.shape)
    rows = slice(bounds.min_y, bounds.min_y + bounds.height)
    cols = slice(bounds.min_x, bounds.min_x + bounds.width)

    region = buffer[rows, cols]
    weight = feathered[rows, cols].astype(np.float64) / 255.0

    result = region.copy()
    alpha = np.rint(region[:, :, 3].astype(np.float64) * weight)
    result[:, :, 3] = np.clip(alpha, 0, 255).astype(np.uint8)
    result[weight == 0] = 0
    return result


def isolate(
    buffer: np.ndarray,
    mask: np.ndarray,
    feather_radius: int,
    normalize_edges: bool = False,
) -> CroppedArtifact | None:
    """Feather the mask and crop the selection out of the source.

    Returns:
        CroppedArtifact, or None when nothing is selected

    AIDEV-NOTE: The crop box comes from the sharp mask, so the soft edge
    outside the selection is clipped away.
    """
    check_shape(mask, buffer.shape)
    bounds = mask_bounds(mask)
    if bounds is None:
        return None

    ramp = feather(mask, feather_radius, normalize_edges=normalize_edges)
    pixels = crop(buffer, ramp, bounds)
    logger.info(
        "Isolated %dx%d region at (%d, %d) with feather radius %d",
        bounds.width,
        bounds.height,
        bounds.min_x,
        bounds.min_y,
        feather_radius,
    )
    return CroppedArtifact(pixels=pixels, origin=bounds.origin)


def overlay_text(
    target: Image.Image,
    texts: Iterable[AppliedText],
    origin: Point = Point(0, 0),
) -> Image.Image:
    """Draw texts over an image.

    Args:
        target: Image to draw on (left untouched)
        texts: Texts positioned in source-image coordinates
        origin: Source-image position of the target's top-left corner

    Returns:
        New RGBA image with all texts composited on top
    """
    result = target.convert("RGBA")
    for applied in texts:
        layer = Image.new("RGBA", result.size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        x = applied.position.x - origin[0]
        y = applied.position.y - origin[1]
        draw.text(
            (x, y),
            applied.text,
            fill=applied.rgb + (255,),
            font=load_font(applied.size),
            anchor="la",
        )
        result = Image.alpha_composite(result, layer)
    return result


def artifact_image(artifact: CroppedArtifact) -> Image.Image:
    """Wrap the artifact pixels in a Pillow image."""
    return Image.fromarray(artifact.pixels)


def render_export(
    artifact: CroppedArtifact, texts: Iterable[AppliedText]
) -> Image.Image:
    """Raster export: the cutout with all applied texts on top."""
    return overlay_text(artifact_image(artifact), texts, artifact.origin)
