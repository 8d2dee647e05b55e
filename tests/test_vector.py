import numpy as np
import pytest

from spheretracer.vector import (
    add,
    clamp,
    dot,
    magnitude,
    normalize,
    scale,
    sub,
    to_byte_color,
    vec,
)


@pytest.mark.parametrize("values", [
    [3.0, 4.0, 0.0],
    [0.001, 0.0, 0.0],
    [-2.0, 7.5, 1e3],
    [0.5, 0.1, -3.0],
])
def test_normalize_gives_unit_length(values):
    assert magnitude(normalize(vec(values))) == pytest.approx(1.0, abs=1e-12)


def test_normalize_keeps_direction():
    np.testing.assert_allclose(normalize(vec([0.0, 0.0, -4.0])), [0.0, 0.0, -1.0])


def test_normalize_zero_vector_raises():
    with pytest.raises(ZeroDivisionError):
        normalize(vec([0.0, 0.0, 0.0]))


def test_arithmetic():
    a = vec([1.0, 2.0, 3.0])
    b = vec([4.0, -5.0, 6.0])

    np.testing.assert_allclose(add(a, b), [5.0, -3.0, 9.0])
    np.testing.assert_allclose(sub(a, b), [-3.0, 7.0, -3.0])
    np.testing.assert_allclose(scale(a, -2.0), [-2.0, -4.0, -6.0])
    assert dot(a, b) == pytest.approx(4.0 - 10.0 + 18.0)
    assert magnitude(vec([2.0, 3.0, 6.0])) == pytest.approx(7.0)


def test_operations_leave_inputs_untouched():
    a = vec([1.0, 2.0, 3.0])
    scale(a, 10.0)
    add(a, a)
    normalize(a)
    np.testing.assert_array_equal(a, [1.0, 2.0, 3.0])


def test_vec_is_read_only():
    a = vec([1.0, 2.0, 3.0])
    with pytest.raises(ValueError):
        a[0] = 5.0


def test_vec_rejects_wrong_shape():
    with pytest.raises(ValueError):
        vec([1.0, 2.0])


def test_clamp():
    np.testing.assert_allclose(clamp(vec([-0.5, 0.5, 1.5]), 0.0, 1.0), [0.0, 0.5, 1.0])


def test_to_byte_color_truncates():
    np.testing.assert_array_equal(to_byte_color(vec([1.0, 0.5, 0.0])), [255, 127, 0])
    np.testing.assert_array_equal(to_byte_color(vec([0.999, 0.004, 0.1])), [254, 1, 25])
    assert to_byte_color(vec([0.0, 0.0, 0.0])).dtype == np.uint8


def test_to_byte_color_saturates_out_of_range():
    np.testing.assert_array_equal(to_byte_color(vec([1.5, 2.0, 1.0])), [255, 255, 255])
    np.testing.assert_array_equal(to_byte_color(vec([-0.5, -3.0, 0.5])), [0, 0, 127])


def test_to_byte_color_nan_is_black():
    np.testing.assert_array_equal(to_byte_color(vec([np.nan, 1.0, 0.0])), [0, 255, 0])
