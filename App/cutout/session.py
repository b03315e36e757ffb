"""Editing session: holds the current selection state for one image.

AIDEV-NOTE: The session never edits a mask in place. Every action computes
a new SessionState from the previous one and swaps it in, so a snapshot
handed out earlier (e.g. to a background export) stays valid. Bounds and
feathered masks are derived on demand and never cached.
"""

import logging
from dataclasses import replace

import numpy as np
from PIL import Image

from models import (
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT,
    DEFAULT_TEXT_COLOR,
    AppliedText,
    Bounds,
    CroppedArtifact,
    EditorConfig,
    Point,
    SessionState,
    Tool,
)

from . import brush
from .bounds import mask_bounds
from .compositing import isolate, render_export
from .flood_fill import flood_select
from .loader import to_pixel_buffer
from .mask_ops import combine, invert
from .preview import render_canvas, render_cutout_preview
from .svg_export import build_svg

logger = logging.getLogger(__name__)


class EditorSession:
    """Selection, isolation and export workflow for a single image."""

    def __init__(
        self,
        image: Image.Image,
        config: EditorConfig | None = None,
        normalize_feather_edges: bool = False,
    ):
        self.image = image.convert("RGBA")
        self.buffer = to_pixel_buffer(self.image)
        self.config = config or EditorConfig()
        self.normalize_feather_edges = normalize_feather_edges
        self.state = SessionState()

        # Text tool draft, not part of the exported state until applied
        self.text_draft = AppliedText(DEFAULT_TEXT, DEFAULT_TEXT_COLOR, DEFAULT_FONT_SIZE)

        self.pointer: Point | None = None
        self._last_stroke_point: Point | None = None

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def mask(self) -> np.ndarray | None:
        return self.state.mask

    @property
    def bounds(self) -> Bounds | None:
        """Bounds of the current selection, derived fresh from the mask."""
        return mask_bounds(self.state.mask)

    @property
    def texts(self) -> tuple[AppliedText, ...]:
        return self.state.texts

    @property
    def artifact(self) -> CroppedArtifact | None:
        return self.state.artifact

    @property
    def is_painting(self) -> bool:
        return self._last_stroke_point is not None

    def _locked(self, action: str) -> bool:
        # AIDEV-NOTE: Once isolated, the selection is frozen until reset
        if self.state.artifact is not None:
            logger.debug("Ignoring %s: selection already isolated", action)
            return True
        return False

    def _set_mask(self, mask: np.ndarray) -> None:
        self.state = replace(self.state, mask=mask)

    # --- Pointer dispatch ---

    def set_tool(self, tool: Tool) -> None:
        self.state = replace(self.state, tool=tool)

    def press(self, point: Point) -> None:
        """Pointer pressed on the canvas with the active tool."""
        point = Point(*point)
        tool = self.state.tool
        if tool == Tool.WAND:
            self.magic_wand(point)
        elif tool == Tool.BRUSH:
            self.begin_stroke(point)
        elif tool == Tool.TEXT:
            self.place_text(point)

    def move(self, point: Point) -> None:
        """Pointer moved; extends a brush stroke in progress."""
        self.pointer = Point(*point)
        if self.state.tool == Tool.BRUSH and self.is_painting:
            self.continue_stroke(self.pointer)

    def release(self) -> None:
        self.end_stroke()

    # --- Selection ---

    def magic_wand(self, seed: Point) -> None:
        """Select the region around seed and merge it per selection mode."""
        if self._locked("magic wand"):
            return
        fresh = flood_select(self.buffer, Point(*seed), self.config.tolerance)
        self._set_mask(combine(self.state.mask, fresh, self.config.selection_mode))

    def begin_stroke(self, point: Point) -> None:
        if self._locked("brush stroke"):
            return
        mode = self.config.selection_mode
        base = brush.stroke_base(self.state.mask, mode, self.width, self.height)
        self._set_mask(
            brush.stamp(
                base, Point(*point), self.config.brush_radius, brush.stroke_polarity(mode)
            )
        )
        self._last_stroke_point = Point(*point)

    def continue_stroke(self, point: Point) -> None:
        if self._last_stroke_point is None or self.state.mask is None:
            return
        if self._locked("brush stroke"):
            return
        point = Point(*point)
        self._set_mask(
            brush.stroke(
                self.state.mask,
                self._last_stroke_point,
                point,
                self.config.brush_radius,
                brush.stroke_polarity(self.config.selection_mode),
            )
        )
        self._last_stroke_point = point

    def end_stroke(self) -> None:
        self._last_stroke_point = None

    def invert_selection(self) -> None:
        if self.state.mask is None:
            logger.debug("Ignoring invert: nothing selected")
            return
        if self._locked("invert"):
            return
        self._set_mask(invert(self.state.mask))

    # --- Text ---

    def place_text(self, point: Point) -> None:
        """Pin the text draft at a position before applying it."""
        self.state = replace(self.state, pending_text_position=Point(*point))

    def apply_text(
        self,
        text: str | None = None,
        color: str | None = None,
        size: int | None = None,
    ) -> AppliedText | None:
        """Commit the text draft at the pinned position.

        Returns:
            The applied text, or None if there is no text or no position
        """
        position = self.state.pending_text_position
        content = self.text_draft.text if text is None else text
        if not content or position is None:
            logger.debug("Ignoring apply text: missing text or position")
            return None

        applied = AppliedText(
            text=content,
            color=color or self.text_draft.color,
            size=size or self.text_draft.size,
            position=position,
        )
        self.state = replace(
            self.state,
            texts=self.state.texts + (applied,),
            pending_text_position=None,
        )
        self.text_draft = AppliedText(DEFAULT_TEXT, applied.color, applied.size)
        return applied

    # --- Isolation and export ---

    def isolate(self) -> CroppedArtifact | None:
        """Cut the feathered selection out of the image."""
        if self.state.mask is None:
            logger.debug("Ignoring isolate: nothing selected")
            return None
        artifact = isolate(
            self.buffer,
            self.state.mask,
            self.config.feather_radius,
            normalize_edges=self.normalize_feather_edges,
        )
        self.state = replace(self.state, artifact=artifact)
        return artifact

    def _require_artifact(self) -> CroppedArtifact:
        if self.state.artifact is None:
            raise RuntimeError("Nothing isolated yet; call isolate() first")
        return self.state.artifact

    def export_raster(self) -> Image.Image:
        """Cutout with applied texts, ready for a raster encoder."""
        return render_export(self._require_artifact(), self.state.texts)

    def export_svg(self) -> str:
        """Outline-clipped vector export.

        Raises:
            ContourNotFoundError: If the cutout has no traceable outline
        """
        return build_svg(self._require_artifact(), self.state.texts)

    # --- Preview ---

    def render_preview(self) -> Image.Image:
        """Full-image editor preview for the current tool and pointer."""
        text_preview = None
        brush_preview = None
        tool = self.state.tool

        if tool == Tool.TEXT and self.text_draft.text:
            pinned = self.state.pending_text_position
            position = pinned or self.pointer
            if position is not None:
                text_preview = (replace(self.text_draft, position=position), pinned is not None)
        elif tool == Tool.BRUSH and self.pointer is not None and self.state.artifact is None:
            brush_preview = (self.pointer, self.config.brush_size, self.config.selection_mode)

        return render_canvas(
            self.image,
            texts=self.state.texts,
            mask=self.state.mask,
            bounds=self.bounds,
            opacity=self.config.selection_opacity,
            text_preview=text_preview,
            brush_preview=brush_preview,
        )

    def render_cutout_preview(self) -> Image.Image:
        return render_cutout_preview(
            self._require_artifact(), self.state.texts, self.config.preview_scale
        )

    def reset(self) -> None:
        """Drop the selection, texts and cutout and restore default settings."""
        self.state = SessionState()
        self.config = EditorConfig()
        self.text_draft = AppliedText(DEFAULT_TEXT, DEFAULT_TEXT_COLOR, DEFAULT_FONT_SIZE)
        self.pointer = None
        self._last_stroke_point = None
        logger.info("Session reset")
