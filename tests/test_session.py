"""Tests for the editing session workflow."""

import numpy as np
import pytest
from PIL import Image

from cutout.session import EditorSession
from models import (
    AppliedText,
    Bounds,
    ContourNotFoundError,
    EditorConfig,
    Point,
    SelectionMode,
    Tool,
)


@pytest.fixture
def session(split_image):
    return EditorSession(split_image, EditorConfig(tolerance=10, feather_radius=0))


def test_magic_wand_new_selection(session):
    session.magic_wand(Point(2, 2))

    assert session.mask.sum() == 50
    assert session.bounds == Bounds(0, 0, 5, 10)


def test_add_and_subtract_modes(session):
    session.magic_wand(Point(2, 2))
    session.config.selection_mode = SelectionMode.ADD
    session.magic_wand(Point(7, 7))
    assert session.mask.sum() == 100

    session.config.selection_mode = SelectionMode.SUBTRACT
    session.magic_wand(Point(1, 1))
    assert session.mask[:, 5:].all()
    assert not session.mask[:, :5].any()
    assert session.bounds == Bounds(5, 0, 5, 10)


def test_edits_replace_the_mask_value(session):
    session.magic_wand(Point(2, 2))
    before = session.mask
    snapshot = before.copy()

    session.invert_selection()

    assert session.mask is not before
    np.testing.assert_array_equal(before, snapshot)
    assert session.mask[:, 5:].all()


def test_brush_stroke_via_pointer_events(session):
    session.config.brush_size = 4  # radius 2
    session.set_tool(Tool.BRUSH)

    session.press(Point(0, 5))
    session.move(Point(9, 5))
    session.release()

    assert session.mask[5].all()
    assert not session.is_painting
    # Moving without a press does not paint
    session.move(Point(5, 0))
    assert session.mask[0, 5] == 0


def test_new_mode_stroke_discards_prior_selection(session):
    session.magic_wand(Point(2, 2))
    session.config.brush_size = 2
    session.set_tool(Tool.BRUSH)

    session.press(Point(8, 8))
    session.release()

    assert session.bounds == Bounds(7, 7, 3, 3)


def test_subtract_mode_stroke_erases(session):
    session.magic_wand(Point(2, 2))
    session.config.selection_mode = SelectionMode.SUBTRACT
    session.config.brush_size = 2
    session.set_tool(Tool.BRUSH)

    session.press(Point(2, 2))
    session.release()

    assert session.mask[2, 2] == 0
    assert session.mask.sum() == 50 - 5


def test_invert_without_selection_is_ignored(session):
    session.invert_selection()
    assert session.mask is None


def test_apply_text_needs_a_position(session):
    session.set_tool(Tool.TEXT)
    assert session.apply_text("nowhere") is None

    session.press(Point(3, 4))
    applied = session.apply_text("Hi", "#00FF00", 12)

    assert applied == AppliedText("Hi", "#00FF00", 12, Point(3, 4))
    assert session.texts == (applied,)
    assert session.state.pending_text_position is None


def test_texts_keep_insertion_order(session):
    for i in range(3):
        session.place_text(Point(i, i))
        session.apply_text(f"t{i}")
    assert [t.text for t in session.texts] == ["t0", "t1", "t2"]


def test_isolate_and_export(session):
    session.magic_wand(Point(2, 2))
    session.place_text(Point(1, 1))
    session.apply_text("A", "#FFFFFF", 8)

    artifact = session.isolate()

    assert artifact.origin == Point(0, 0)
    assert (artifact.width, artifact.height) == (5, 10)
    raster = session.export_raster()
    assert raster.size == (5, 10)
    assert raster.mode == "RGBA"
    assert "<clipPath" in session.export_svg()


def test_isolated_selection_is_frozen(session):
    session.magic_wand(Point(2, 2))
    session.isolate()
    frozen = session.mask

    session.config.selection_mode = SelectionMode.ADD
    session.magic_wand(Point(7, 7))
    session.invert_selection()

    assert session.mask is frozen


def test_isolate_without_selection(session):
    assert session.isolate() is None
    with pytest.raises(RuntimeError):
        session.export_raster()
    with pytest.raises(RuntimeError):
        session.export_svg()


def test_svg_export_fails_for_single_pixel_selection():
    pixels = np.zeros((10, 10, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    pixels[5, 5] = (255, 255, 255, 255)
    session = EditorSession(Image.fromarray(pixels), EditorConfig(tolerance=0, feather_radius=0))

    session.magic_wand(Point(5, 5))
    session.isolate()

    assert session.artifact.width == 1
    with pytest.raises(ContourNotFoundError):
        session.export_svg()


def test_reset_clears_everything(session):
    session.magic_wand(Point(2, 2))
    session.place_text(Point(1, 1))
    session.apply_text("x")
    session.isolate()
    session.config.tolerance = 90

    session.reset()

    assert session.mask is None
    assert session.bounds is None
    assert session.texts == ()
    assert session.artifact is None
    assert session.config == EditorConfig()


def test_preview_tints_selection(session):
    session.config.selection_opacity = 100
    session.magic_wand(Point(7, 7))

    preview = session.render_preview()

    assert preview.size == (10, 10)
    r, g, b, a = preview.getpixel((7, 7))
    assert (r, g, b) == (0, 255, 255)
    assert preview.getpixel((2, 5))[:3] == (255, 0, 0)


def test_preview_without_selection_is_the_image(session, split_image):
    preview = session.render_preview()
    np.testing.assert_array_equal(np.array(preview), np.array(split_image))


def test_cutout_preview_scales(session):
    session.magic_wand(Point(2, 2))
    session.isolate()
    session.config.preview_scale = 2.0

    assert session.render_cutout_preview().size == (10, 20)


def test_source_image_is_read_only(session):
    with pytest.raises(ValueError):
        session.buffer[0, 0, 0] = 1


def test_session_accepts_rgb_images():
    image = Image.new("RGB", (4, 3), (9, 9, 9))
    session = EditorSession(image)
    assert session.buffer.shape == (3, 4, 4)
    session.magic_wand(Point(0, 0))
    assert session.mask.sum() == 12
