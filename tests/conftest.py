"""Shared fixtures for cutout tests."""

import numpy as np
import pytest
from PIL import Image

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


def solid_buffer(width, height, color=(10, 20, 30, 255)):
    buffer = np.zeros((height, width, 4), dtype=np.uint8)
    buffer[:, :] = color
    return buffer


def rect_alpha(width, height, box, alpha=255):
    """RGBA array with an opaque rectangle box=(x, y, w, h)."""
    rgba = np.zeros((height, width, 4), dtype=np.uint8)
    x, y, w, h = box
    rgba[y : y + h, x : x + w] = (200, 100, 50, alpha)
    return rgba


@pytest.fixture
def uniform_buffer():
    return solid_buffer(10, 10)


@pytest.fixture
def split_buffer():
    """10x10 image, left half red and right half blue."""
    buffer = np.zeros((10, 10, 4), dtype=np.uint8)
    buffer[:, :5] = RED
    buffer[:, 5:] = BLUE
    return buffer


@pytest.fixture
def split_image(split_buffer):
    return Image.fromarray(split_buffer)


@pytest.fixture
def rng():
    return np.random.default_rng(1234)
