"""Tests for mask boolean algebra."""

import numpy as np
import pytest

from cutout.mask_ops import check_shape, combine, empty_mask, invert
from models import SelectionMode


@pytest.fixture
def masks(rng):
    existing = rng.integers(0, 2, size=(12, 9), dtype=np.uint8)
    fresh = rng.integers(0, 2, size=(12, 9), dtype=np.uint8)
    return existing, fresh


def test_new_returns_fresh(masks):
    existing, fresh = masks
    result = combine(existing, fresh, SelectionMode.NEW)
    np.testing.assert_array_equal(result, fresh)
    assert result is not fresh


def test_add_is_superset_of_both(masks):
    existing, fresh = masks
    result = combine(existing, fresh, SelectionMode.ADD)
    assert (result >= existing).all()
    assert (result >= fresh).all()
    np.testing.assert_array_equal(result, existing | fresh)


def test_subtract_removes_fresh(masks):
    existing, fresh = masks
    result = combine(existing, fresh, SelectionMode.SUBTRACT)
    assert not (result & fresh).any()
    assert (result <= existing).all()


def test_subtract_right_half_leaves_left_half():
    existing = np.ones((10, 10), dtype=np.uint8)
    fresh = np.zeros((10, 10), dtype=np.uint8)
    fresh[:, 5:] = 1

    result = combine(existing, fresh, SelectionMode.SUBTRACT)

    assert result[:, :5].all()
    assert not result[:, 5:].any()


def test_missing_selection_counts_as_empty(masks):
    _, fresh = masks
    np.testing.assert_array_equal(combine(None, fresh, SelectionMode.ADD), fresh)
    assert combine(None, fresh, SelectionMode.SUBTRACT).sum() == 0
    np.testing.assert_array_equal(combine(None, fresh, SelectionMode.NEW), fresh)


def test_inputs_are_not_modified(masks):
    existing, fresh = masks
    existing_before, fresh_before = existing.copy(), fresh.copy()
    for mode in SelectionMode:
        combine(existing, fresh, mode)
    np.testing.assert_array_equal(existing, existing_before)
    np.testing.assert_array_equal(fresh, fresh_before)


def test_results_are_binary(masks):
    existing, fresh = masks
    for mode in SelectionMode:
        result = combine(existing * 3, fresh * 7, mode)
        assert set(np.unique(result)) <= {0, 1}


def test_invert_twice_is_identity(masks):
    existing, _ = masks
    np.testing.assert_array_equal(invert(invert(existing)), existing)
    assert not (invert(existing) & existing).any()


def test_empty_mask_shape():
    mask = empty_mask(7, 3)
    assert mask.shape == (3, 7)
    assert mask.sum() == 0


def test_shape_mismatch_is_rejected():
    with pytest.raises(ValueError):
        combine(np.zeros((4, 4), dtype=np.uint8), np.zeros((4, 5), dtype=np.uint8), SelectionMode.ADD)
    with pytest.raises(ValueError):
        check_shape(np.zeros((2, 3), dtype=np.uint8), (3, 2, 4))
