"""Data models and constants for the Magic Wand cutout editor."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, NamedTuple

from PIL import ImageColor

if TYPE_CHECKING:
    import numpy as np

# Configuration file path
CONFIG_FILE = Path.home() / ".magicwand_config.json"

# AIDEV-NOTE: Hard bounds of the configuration surface - keep in sync with
# the validation in EditorConfig.__post_init__
TOLERANCE_RANGE = (0, 100)
BRUSH_SIZE_RANGE = (2, 100)  # px
OPACITY_RANGE = (0, 100)  # percent
FEATHER_RADIUS_RANGE = (0, 30)  # px
FONT_SIZE_RANGE = (8, 200)  # px
PREVIEW_SCALE_RANGE = (0.1, 5.0)

DEFAULT_TEXT = "Hello World"
DEFAULT_TEXT_COLOR = "#FFFFFF"
DEFAULT_FONT_SIZE = 48


class ContourNotFoundError(Exception):
    """Raised when no closed outline can be traced for vector export."""


class SelectionMode(Enum):
    """How a freshly computed region combines with the current mask."""

    NEW = "new"  # Replace the current selection
    ADD = "add"  # Union with the current selection
    SUBTRACT = "subtract"  # Remove from the current selection


class Tool(Enum):
    """Active pointer tool of an editing session."""

    WAND = "wand"
    BRUSH = "brush"
    TEXT = "text"


class Point(NamedTuple):
    """Integer pixel coordinate."""

    x: int
    y: int


@dataclass(frozen=True)
class Bounds:
    """Minimal axis-aligned box around the true cells of a mask.

    AIDEV-NOTE: Always derived from a mask, never stored next to one.
    """

    min_x: int
    min_y: int
    width: int
    height: int

    @property
    def origin(self) -> Point:
        return Point(self.min_x, self.min_y)

    @property
    def max_x(self) -> int:
        return self.min_x + self.width - 1

    @property
    def max_y(self) -> int:
        return self.min_y + self.height - 1


def _check_range(name: str, value: float, bounds: tuple[float, float]) -> None:
    low, high = bounds
    if not low <= value <= high:
        raise ValueError(f"{name} must be within [{low}, {high}], got {value}")


def parse_hex_color(color: str) -> tuple[int, int, int]:
    """Parse a ``#rgb`` or ``#rrggbb`` string into an RGB tuple.

    Raises:
        ValueError: If the string is not a hex color
    """
    if not isinstance(color, str) or not color.startswith("#") or len(color) not in (4, 7):
        raise ValueError(f"Invalid hex color: {color!r}")
    r, g, b = ImageColor.getrgb(color)[:3]
    return (r, g, b)


@dataclass(frozen=True)
class AppliedText:
    """A text label placed on the image.

    AIDEV-NOTE: Position is in source-image pixels; the glyph top edge sits
    on position.y (not the baseline).
    """

    text: str
    color: str = DEFAULT_TEXT_COLOR  # Hex string, e.g. "#FFFFFF"
    size: int = DEFAULT_FONT_SIZE  # px
    position: Point = Point(0, 0)

    def __post_init__(self):
        parse_hex_color(self.color)
        _check_range("size", self.size, FONT_SIZE_RANGE)
        object.__setattr__(self, "position", Point(*self.position))

    @property
    def rgb(self) -> tuple[int, int, int]:
        return parse_hex_color(self.color)


@dataclass
class EditorConfig:
    """User-adjustable editor settings."""

    # Magic wand
    tolerance: int = 20  # Raw RGB distance (0-100)
    selection_mode: SelectionMode = SelectionMode.NEW

    # Brush
    brush_size: int = 30  # Brush diameter in px (2-100)

    # Preview only, never baked into exported pixels
    selection_opacity: int = 40  # percent (0-100)
    preview_scale: float = 1.0  # cutout preview zoom (0.1-5.0)

    # Export
    feather_radius: int = 2  # Edge smoothing in px (0-30)

    def __post_init__(self):
        if isinstance(self.selection_mode, str):
            self.selection_mode = SelectionMode(self.selection_mode)
        if isinstance(self.tolerance, bool) or not isinstance(self.tolerance, int):
            raise ValueError(f"tolerance must be an integer, got {self.tolerance!r}")
        _check_range("tolerance", self.tolerance, TOLERANCE_RANGE)
        _check_range("brush_size", self.brush_size, BRUSH_SIZE_RANGE)
        _check_range("selection_opacity", self.selection_opacity, OPACITY_RANGE)
        _check_range("feather_radius", self.feather_radius, FEATHER_RADIUS_RANGE)
        _check_range("preview_scale", self.preview_scale, PREVIEW_SCALE_RANGE)

    @property
    def brush_radius(self) -> int:
        """Stamp radius derived from the brush diameter."""
        return self.brush_size // 2


@dataclass(frozen=True)
class CroppedArtifact:
    """Result of isolating a selection.

    AIDEV-NOTE: pixels is an RGBA uint8 array of shape (height, width, 4),
    alpha-weighted by the feathered mask. origin is where it was cut from
    the source image, used to place texts relative to the crop.
    """

    pixels: "np.ndarray"
    origin: Point

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass
class SessionState:
    """Snapshot of an editing session.

    AIDEV-NOTE: Replaced as a whole value on every edit. The mask is None
    until the first selection is made.
    """

    mask: "np.ndarray | None" = None  # (height, width) of 0/1
    texts: tuple[AppliedText, ...] = field(default_factory=tuple)
    artifact: CroppedArtifact | None = None
    tool: Tool = Tool.WAND
    pending_text_position: Point | None = None
