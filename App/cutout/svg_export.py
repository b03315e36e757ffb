"""SVG export of an isolated cutout.

AIDEV-NOTE: The document embeds the cropped raster as a PNG data URI and
clips it with the traced outline. Texts stay live <text> elements placed
relative to the crop's top-left corner.
"""

import base64
import io
import logging
from typing import Iterable

import svg
from PIL import Image

from models import AppliedText, ContourNotFoundError, CroppedArtifact

from .compositing import artifact_image
from .contour import trace_contour

logger = logging.getLogger(__name__)

CLIP_PATH_ID = "cutout-path"
FONT_FAMILY = "sans-serif"


def escape_xml(text: str) -> str:
    """Escape the five XML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


def encode_png(image: Image.Image) -> bytes:
    """Encode an image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def png_data_uri(image: Image.Image) -> str:
    """Inline an image as a base64 PNG data URI."""
    encoded = base64.b64encode(encode_png(image)).decode("ascii")
    return f"data:image/png;base64,{encoded}"


def text_elements(
    texts: Iterable[AppliedText], artifact: CroppedArtifact
) -> list[svg.Element]:
    """One <text> element per applied text, offset by the crop origin."""
    elements: list[svg.Element] = []
    for applied in texts:
        elements.append(
            svg.Text(
                x=applied.position.x - artifact.origin.x,
                y=applied.position.y - artifact.origin.y,
                text=escape_xml(applied.text),
                font_family=FONT_FAMILY,
                font_size=applied.size,
                font_weight="bold",
                fill=applied.color,
                dominant_baseline="hanging",
            )
        )
    return elements


def build_svg(artifact: CroppedArtifact, texts: Iterable[AppliedText] = ()) -> str:
    """Build the vector export document.

    Args:
        artifact: Isolated cutout
        texts: Applied texts in source-image coordinates

    Returns:
        SVG document as a string

    Raises:
        ContourNotFoundError: If no closed outline can be traced
    """
    path_data = trace_contour(artifact.pixels)
    if path_data is None:
        raise ContourNotFoundError(
            "Could not find an outline to build the SVG from."
        )

    width, height = artifact.width, artifact.height
    elements: list[svg.Element] = [
        svg.Defs(
            elements=[
                svg.ClipPath(
                    id=CLIP_PATH_ID,
                    elements=[svg.Path(d=path_data)],  # type: ignore[arg-type]
                )
            ]
        ),
        svg.Image(
            href=png_data_uri(artifact_image(artifact)),
            width=width,
            height=height,
            clip_path=f"url(#{CLIP_PATH_ID})",
        ),
    ]
    elements.extend(text_elements(texts, artifact))

    document = svg.SVG(
        width=width,
        height=height,
        viewBox=svg.ViewBoxSpec(0, 0, width, height),
        elements=elements,
    )
    logger.info("Built SVG export %dx%d", width, height)
    return document.as_str()
