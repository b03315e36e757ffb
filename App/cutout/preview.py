"""Preview rendering of the editor canvas and the isolated cutout.

AIDEV-NOTE: Layer order of the canvas preview is fixed:
1. base image
2. applied texts
3. selection tint
4. dashed selection bounds
5. active tool preview (text ghost or brush cursor)
Only the first two layers ever reach exported pixels.
"""

from typing import Iterable

import numpy as np
from PIL import Image, ImageDraw

from models import AppliedText, Bounds, CroppedArtifact, Point, SelectionMode

from .compositing import load_font, overlay_text, render_export

SELECTION_TINT = (0, 255, 255)
BOUNDS_OUTLINE = (255, 255, 255, 230)  # white at 0.9 opacity
DASH_LENGTH = 4
GHOST_TEXT_ALPHA = 0.6
BRUSH_ADD_COLOR = (34, 211, 238)
BRUSH_ERASE_COLOR = (244, 63, 94)


def selection_tint(mask: np.ndarray, opacity: int) -> Image.Image:
    """Translucent cyan layer over the selected cells.

    Args:
        mask: 0/1 mask of shape (height, width)
        opacity: Tint opacity in percent (0-100)
    """
    height, width = mask.shape[:2]
    layer = np.zeros((height, width, 4), dtype=np.uint8)
    selected = mask != 0
    layer[selected, :3] = SELECTION_TINT
    layer[selected, 3] = int(round(opacity * 2.55))
    return Image.fromarray(layer)


def _dashed_line(
    draw: ImageDraw.ImageDraw,
    start: tuple[int, int],
    end: tuple[int, int],
    fill: tuple[int, int, int, int],
) -> None:
    (x0, y0), (x1, y1) = start, end
    length = max(abs(x1 - x0), abs(y1 - y0))
    step_x = (x1 > x0) - (x1 < x0)
    step_y = (y1 > y0) - (y1 < y0)
    for offset in range(0, length + 1, 2 * DASH_LENGTH):
        dash_end = min(offset + DASH_LENGTH - 1, length)
        draw.line(
            [
                (x0 + step_x * offset, y0 + step_y * offset),
                (x0 + step_x * dash_end, y0 + step_y * dash_end),
            ],
            fill=fill,
        )


def draw_bounds_outline(image: Image.Image, bounds: Bounds) -> Image.Image:
    """Dashed rectangle hugging the outside of the selection bounds."""
    layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    left, top = bounds.min_x - 1, bounds.min_y - 1
    right, bottom = bounds.max_x + 1, bounds.max_y + 1
    _dashed_line(draw, (left, top), (right, top), BOUNDS_OUTLINE)
    _dashed_line(draw, (right, top), (right, bottom), BOUNDS_OUTLINE)
    _dashed_line(draw, (right, bottom), (left, bottom), BOUNDS_OUTLINE)
    _dashed_line(draw, (left, bottom), (left, top), BOUNDS_OUTLINE)
    return Image.alpha_composite(image, layer)


def draw_text_ghost(
    image: Image.Image, text: AppliedText, committed: bool
) -> Image.Image:
    """Text tool preview, faded while it only follows the pointer."""
    alpha = 255 if committed else int(round(255 * GHOST_TEXT_ALPHA))
    layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    draw.text(
        text.position,
        text.text,
        fill=text.rgb + (alpha,),
        font=load_font(text.size),
        anchor="la",
    )
    return Image.alpha_composite(image, layer)


def draw_brush_cursor(
    image: Image.Image, center: Point, brush_size: int, mode: SelectionMode
) -> Image.Image:
    """Brush footprint; red when erasing, cyan otherwise."""
    color = BRUSH_ERASE_COLOR if mode == SelectionMode.SUBTRACT else BRUSH_ADD_COLOR
    radius = brush_size / 2
    layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    draw.ellipse(
        [center.x - radius, center.y - radius, center.x + radius, center.y + radius],
        fill=color + (51,),
        outline=color + (255,),
    )
    return Image.alpha_composite(image, layer)


def render_canvas(
    base: Image.Image,
    texts: Iterable[AppliedText] = (),
    mask: np.ndarray | None = None,
    bounds: Bounds | None = None,
    opacity: int = 40,
    text_preview: tuple[AppliedText, bool] | None = None,
    brush_preview: tuple[Point, int, SelectionMode] | None = None,
) -> Image.Image:
    """Compose the full-image editor preview.

    Args:
        base: Source image
        texts: Applied texts
        mask: Current selection mask, if any
        bounds: Bounds of the current selection, if any
        opacity: Selection tint opacity in percent
        text_preview: (text, committed) for the text tool
        brush_preview: (pointer, brush size, mode) for the brush tool

    Returns:
        RGBA image the size of base
    """
    canvas = overlay_text(base, texts)
    if mask is not None:
        canvas = Image.alpha_composite(canvas, selection_tint(mask, opacity))
    if bounds is not None:
        canvas = draw_bounds_outline(canvas, bounds)
    if text_preview is not None:
        canvas = draw_text_ghost(canvas, *text_preview)
    if brush_preview is not None:
        canvas = draw_brush_cursor(canvas, *brush_preview)
    return canvas


def render_cutout_preview(
    artifact: CroppedArtifact, texts: Iterable[AppliedText], scale: float = 1.0
) -> Image.Image:
    """Isolated cutout with texts, resized for display."""
    image = render_export(artifact, texts)
    if scale == 1.0:
        return image
    size = (max(1, round(image.width * scale)), max(1, round(image.height * scale)))
    return image.resize(size, Image.Resampling.LANCZOS)
