"""Selection and cutout engine for the Magic Wand editor.

AIDEV-NOTE: This package turns a user's clicks and strokes into an
isolated, feathered cutout. Organized into modular components:
- flood_fill: Magic wand region growing
- mask_ops: Mask boolean algebra (new/add/subtract, invert)
- brush: Freehand brush stamping and stroke interpolation
- feather: Gaussian edge feathering
- bounds: Selection bounding box
- compositing: Cropping and text overlay
- contour: Outline tracing for vector export
- svg_export: SVG document assembly
- preview: Layered canvas and cutout previews
- loader: Image loading and pixel buffers
- session: EditorSession tying it all together
"""

from .session import EditorSession
from .svg_export import build_svg, encode_png

__all__ = ["EditorSession", "build_svg", "encode_png"]
