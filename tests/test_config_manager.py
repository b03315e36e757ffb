"""Tests for configuration validation and persistence."""

import json

import pytest

from config_manager import ConfigManager
from models import AppliedText, EditorConfig, Point, SelectionMode


def test_defaults():
    config = EditorConfig()
    assert config.tolerance == 20
    assert config.selection_mode == SelectionMode.NEW
    assert config.brush_size == 30
    assert config.brush_radius == 15
    assert config.selection_opacity == 40
    assert config.feather_radius == 2


@pytest.mark.parametrize(
    "field,value",
    [
        ("tolerance", -1),
        ("tolerance", 101),
        ("tolerance", 12.5),
        ("tolerance", True),
        ("brush_size", 1),
        ("brush_size", 101),
        ("selection_opacity", 101),
        ("feather_radius", 31),
        ("preview_scale", 0.0),
    ],
)
def test_out_of_range_values_are_rejected(field, value):
    with pytest.raises(ValueError):
        EditorConfig(**{field: value})


def test_mode_accepts_string_value():
    assert EditorConfig(selection_mode="subtract").selection_mode == SelectionMode.SUBTRACT


@pytest.mark.parametrize("color", ["red", "#12", "#GGGGGG", "123456"])
def test_text_rejects_bad_colors(color):
    with pytest.raises(ValueError):
        AppliedText("x", color, 20, Point(0, 0))


def test_text_rejects_bad_size():
    with pytest.raises(ValueError):
        AppliedText("x", "#FFF", 4, Point(0, 0))


def test_save_and_load_round_trip(tmp_path):
    manager = ConfigManager(tmp_path / "config.json")
    config = EditorConfig(
        tolerance=55,
        selection_mode=SelectionMode.ADD,
        brush_size=12,
        selection_opacity=70,
        preview_scale=2.5,
        feather_radius=9,
    )

    ok, error = manager.save(config)

    assert ok and error is None
    assert json.loads((tmp_path / "config.json").read_text())["selection_mode"] == "add"
    assert manager.load() == config


def test_missing_file_gives_defaults(tmp_path):
    assert ConfigManager(tmp_path / "missing.json").load() == EditorConfig()


def test_partial_file_falls_back_per_field(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"tolerance": 5}))

    config = ConfigManager(path).load()

    assert config.tolerance == 5
    assert config.brush_size == EditorConfig().brush_size


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps({"feather_radius": 99}),
        json.dumps([1, 2]),
        json.dumps({"brush_size": "30"}),
        json.dumps({"selection_mode": "lasso"}),
    ],
)
def test_unusable_file_gives_defaults(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content)
    assert ConfigManager(path).load() == EditorConfig()


def test_save_reports_failure(tmp_path):
    ok, error = ConfigManager(tmp_path / "no" / "such" / "dir.json").save(EditorConfig())
    assert not ok
    assert error


def test_boolean_tolerance_in_file_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"tolerance": True}))
    assert ConfigManager(path).load().tolerance == EditorConfig().tolerance
