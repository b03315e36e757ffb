"""Magic Wand cutout - command line entry point."""

import argparse
import logging
import sys
from pathlib import Path

from config_manager import ConfigManager
from cutout import EditorSession, encode_png
from cutout.loader import load_image
from models import (
    CONFIG_FILE,
    DEFAULT_FONT_SIZE,
    DEFAULT_TEXT_COLOR,
    ContourNotFoundError,
    EditorConfig,
    Point,
    SelectionMode,
    Tool,
)

logger = logging.getLogger("magicwand")


def parse_point(value: str) -> Point:
    """Parse "x,y" into a Point."""
    try:
        x, y = value.split(",")
        return Point(int(x), int(y))
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Expected x,y but got {value!r}") from e


def parse_stroke(value: str) -> list[Point]:
    """Parse "x,y;x,y;..." into a brush stroke."""
    return [parse_point(part) for part in value.split(";") if part.strip()]


def parse_text(value: str) -> tuple[str, Point]:
    """Parse "content@x,y" into text content and position."""
    content, sep, position = value.rpartition("@")
    if not sep or not content:
        raise argparse.ArgumentTypeError(f"Expected content@x,y but got {value!r}")
    return content, parse_point(position)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Cut a region out of an image by color or brush selection."
    )
    parser.add_argument("image", type=Path, help="Input image file")
    parser.add_argument(
        "--seed", type=parse_point, action="append", default=[],
        help="Magic wand click as x,y (repeatable)",
    )
    parser.add_argument("--tolerance", type=int, help="Color tolerance (0-100)")
    parser.add_argument(
        "--mode", choices=[mode.value for mode in SelectionMode],
        help="How each selection combines with the previous one",
    )
    parser.add_argument(
        "--brush", type=parse_stroke, action="append", default=[],
        help="Brush stroke as x,y;x,y;... (repeatable)",
    )
    parser.add_argument("--brush-size", type=int, help="Brush diameter (2-100)")
    parser.add_argument("--invert", action="store_true", help="Invert the selection")
    parser.add_argument("--feather", type=int, help="Edge smoothing radius (0-30)")
    parser.add_argument("--max-width", type=int, help="Downscale input to this width")
    parser.add_argument(
        "--text", type=parse_text, action="append", default=[],
        help="Text overlay as content@x,y (repeatable)",
    )
    parser.add_argument("--text-color", default=DEFAULT_TEXT_COLOR)
    parser.add_argument("--text-size", type=int, default=DEFAULT_FONT_SIZE)
    parser.add_argument("--png", type=Path, help="Write the raster cutout here")
    parser.add_argument("--svg", type=Path, help="Write the vector cutout here")
    parser.add_argument("--preview", type=Path, help="Write the canvas preview here")
    parser.add_argument("--config", type=Path, default=CONFIG_FILE,
                        help="Settings file (default: %(default)s)")
    parser.add_argument("--save-config", action="store_true",
                        help="Persist the effective settings")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def effective_config(args: argparse.Namespace, base: EditorConfig) -> EditorConfig:
    """Overlay command line settings on the stored configuration."""
    return EditorConfig(
        tolerance=base.tolerance if args.tolerance is None else args.tolerance,
        selection_mode=SelectionMode(args.mode) if args.mode else base.selection_mode,
        brush_size=base.brush_size if args.brush_size is None else args.brush_size,
        selection_opacity=base.selection_opacity,
        preview_scale=base.preview_scale,
        feather_radius=base.feather_radius if args.feather is None else args.feather,
    )


def run(args: argparse.Namespace) -> int:
    """Execute the cutout pipeline for parsed arguments.

    Returns:
        Process exit code
    """
    config_manager = ConfigManager(args.config)
    try:
        config = effective_config(args, config_manager.load())
        image = load_image(args.image, max_width=args.max_width)
    except ValueError as e:
        logger.error("%s", e)
        return 1
    logger.info("Loaded %s (%dx%d)", args.image, image.width, image.height)

    if args.save_config:
        ok, error = config_manager.save(config)
        if not ok:
            logger.warning("Could not save config: %s", error)

    session = EditorSession(image, config)

    session.set_tool(Tool.WAND)
    for seed in args.seed:
        session.magic_wand(seed)

    session.set_tool(Tool.BRUSH)
    for stroke in args.brush:
        if not stroke:
            continue
        session.press(stroke[0])
        for point in stroke[1:]:
            session.move(point)
        session.release()

    if args.invert:
        session.invert_selection()

    session.set_tool(Tool.TEXT)
    for content, position in args.text:
        session.press(position)
        try:
            session.apply_text(content, args.text_color, args.text_size)
        except ValueError as e:
            logger.error("Invalid text %r: %s", content, e)
            return 1

    if args.preview:
        session.render_preview().save(args.preview, format="PNG")
        logger.info("Wrote preview to %s", args.preview)

    if not (args.png or args.svg):
        return 0

    if session.isolate() is None:
        logger.error("Nothing selected; no cutout to export")
        return 1

    if args.png:
        args.png.write_bytes(encode_png(session.export_raster()))
        logger.info("Wrote PNG cutout to %s", args.png)

    if args.svg:
        try:
            document = session.export_svg()
        except ContourNotFoundError as e:
            logger.error("SVG export failed: %s", e)
            return 1
        args.svg.write_text(document, encoding="utf-8")
        logger.info("Wrote SVG cutout to %s", args.svg)

    return 0


def main(argv: list[str] | None = None) -> int:
    """Launch the Magic Wand cutout command line tool."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
