import numpy as np
import pytest

from kmeans.validation import as_points, rgb_to_points, validate_params


def test_validate_params_defaults_threshold_to_zero():
    assert validate_params(2, 1) == 0.0
    assert validate_params(5, 10, 0.25) == 0.25


@pytest.mark.parametrize("k,max_iter,threshold,message", [
    (1, 10, None, "k must be greater than or equal to 2."),
    (0, 10, None, "k must be greater than or equal to 2."),
    (2, 0, None, "max_iter must be greater than or equal to 1."),
    (2, 10, -0.5, "convergence_threshold must be positive"),
    (2, 10, -0.0, "convergence_threshold must be positive"),
])
def test_validate_params_rejects(k, max_iter, threshold, message):
    with pytest.raises(ValueError) as excinfo:
        validate_params(k, max_iter, threshold)
    assert str(excinfo.value) == message


def test_as_points_converts_nested_lists():
    X = as_points([[1, 2], [3, 4], [5, 6]])
    assert X.dtype == np.float64
    assert X.shape == (3, 2)


def test_as_points_rejects_mixed_dimensions():
    with pytest.raises(ValueError, match="same dimension"):
        as_points([[1.0, 2.0], [3.0]])


def test_as_points_rejects_flat_input():
    with pytest.raises(ValueError):
        as_points(np.array([1.0, 2.0, 3.0]))


def test_as_points_empty():
    assert as_points([]).shape == (0, 0)


def test_rgb_to_points_from_bytes_and_lists():
    expected = [[0.0, 128.0, 255.0], [1.0, 2.0, 3.0]]
    np.testing.assert_array_equal(rgb_to_points(bytes([0, 128, 255, 1, 2, 3])), expected)
    np.testing.assert_array_equal(rgb_to_points([0, 128, 255, 1, 2, 3]), expected)
    np.testing.assert_array_equal(rgb_to_points(np.array([0, 128, 255, 1, 2, 3], dtype=np.uint8)), expected)


def test_rgb_to_points_length_must_be_multiple_of_three():
    with pytest.raises(ValueError, match="multiple of 3"):
        rgb_to_points(bytes([0, 0, 0, 1]))


def test_rgb_to_points_rejects_out_of_range_values():
    with pytest.raises(ValueError):
        rgb_to_points([0, 0, 256])
    with pytest.raises(ValueError):
        rgb_to_points([0.5, 0.0, 1.0])
