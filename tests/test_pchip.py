"""Tests for the monotone piecewise cubic Hermite engine."""

import numpy as np
import pytest
from scipy.interpolate import PchipInterpolator

from pyscurv.errors import PreconditionError
from pyscurv.pchip import (
    HermitePoint,
    MonotoneSpline,
    get_hermite_derivative_interpolation,
    set_spline_pchip,
    sign_multiplied,
)


def _dense(x, per_interval=50):
    return np.unique(np.concatenate([
        np.linspace(x[i], x[i + 1], per_interval) for i in range(len(x) - 1)
    ]))


# --- sign_multiplied ---

@pytest.mark.parametrize("a, b, expected", [
    (2.0, 3.0, 1.0),
    (-2.0, 3.0, -1.0),
    (2.0, -3.0, -1.0),
    (-2.0, -3.0, 1.0),
    (0.0, 5.0, 0.0),
    (5.0, 0.0, 0.0),
    (0.0, 0.0, 0.0),
    (1e300, 1e300, 1.0),
    (-1e300, 1e300, -1.0),
    (1e-300, -1e-300, -1.0),
    (-1e-300, -1e-300, 1.0),
    (5e-324, 5e-324, 1.0),
])
def test_sign_multiplied(a, b, expected):
    assert sign_multiplied(a, b) == expected


def test_sign_multiplied_avoids_product_overflow():
    # The product itself overflows or underflows
    assert np.isinf(np.float64(1e300) * np.float64(-1e300))
    assert sign_multiplied(1e300, -1e300) == -1.0
    assert np.float64(1e-300) * np.float64(1e-300) == 0.0
    assert sign_multiplied(1e-300, 1e-300) == 1.0


# --- set_spline_pchip ---

def test_plateau_and_peak_example():
    x = [0.0, 1.0, 2.0, 3.0]
    f = [0.0, 1.0, 1.0, 0.0]
    d = set_spline_pchip(x, f)
    assert d[1] == 0.0
    assert d[2] == 0.0

    values = MonotoneSpline(x, f)(np.linspace(0.0, 3.0, 601))
    assert values.max() <= 1.0 + 1e-12
    assert values.min() >= -1e-12


def test_two_points_are_linear():
    d = set_spline_pchip([1.0, 3.0], [2.0, 6.0])
    np.testing.assert_array_equal(d, [2.0, 2.0])
    assert MonotoneSpline([1.0, 3.0], [2.0, 6.0])(2.0) == pytest.approx(4.0)


def test_flat_data_has_zero_derivatives():
    d = set_spline_pchip([0.0, 1.0, 2.0, 5.0], [3.0, 3.0, 3.0, 3.0])
    np.testing.assert_array_equal(d, np.zeros(4))


def test_fills_given_output_array():
    d = np.full(4, np.nan)
    out = set_spline_pchip([0.0, 1.0, 2.0, 3.0], [0.0, 1.0, 4.0, 9.0], d)
    assert out is d
    assert np.all(np.isfinite(d))


def test_derivative_zero_at_local_extrema():
    x = [0.0, 1.0, 2.5, 3.0, 4.0]
    f = [0.0, 2.0, 0.5, 1.0, -1.0]
    d = set_spline_pchip(x, f)
    assert d[1] == 0.0
    assert d[2] == 0.0
    assert d[3] == 0.0


def test_interior_derivative_between_secants():
    x = np.array([0.0, 0.5, 2.0, 2.2, 4.0])
    f = np.array([0.0, 0.3, 2.5, 2.6, 7.0])
    d = set_spline_pchip(x, f)
    secants = np.diff(f) / np.diff(x)
    for i in range(1, len(x) - 1):
        assert min(secants[i - 1], secants[i]) <= d[i] <= max(secants[i - 1], secants[i])


def test_endpoint_zeroed_when_sign_disagrees():
    # The three-point estimate at the left end is negative while the first secant is positive
    d = set_spline_pchip([0.0, 1.0, 2.0], [0.0, 0.1, 5.0])
    assert d[0] == 0.0


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_monotone_increasing_data_stays_monotone(seed):
    rng = np.random.default_rng(seed)
    x = np.cumsum(rng.uniform(0.05, 2.0, 12))
    f = np.cumsum(rng.exponential(1.0, 12))
    values = MonotoneSpline(x, f)(_dense(x))
    assert np.all(np.diff(values) >= -1e-12)


@pytest.mark.parametrize("seed", [4, 5, 6])
def test_monotone_decreasing_data_stays_monotone(seed):
    rng = np.random.default_rng(seed)
    x = np.cumsum(rng.uniform(0.05, 2.0, 10))
    f = -np.cumsum(rng.exponential(1.0, 10))
    values = MonotoneSpline(x, f)(_dense(x))
    assert np.all(np.diff(values) <= 1e-12)


@pytest.mark.parametrize("seed", [7, 8, 9])
def test_no_overshoot_in_any_bracket(seed):
    rng = np.random.default_rng(seed)
    x = np.cumsum(rng.uniform(0.1, 1.0, 15))
    f = rng.normal(size=15)
    spline = MonotoneSpline(x, f)
    for i in range(len(x) - 1):
        values = spline(np.linspace(x[i], x[i + 1], 40))
        lo, hi = min(f[i], f[i + 1]), max(f[i], f[i + 1])
        assert values.min() >= lo - 1e-12
        assert values.max() <= hi + 1e-12


@pytest.mark.parametrize("seed", [10, 11, 12])
def test_matches_scipy_pchip(seed):
    rng = np.random.default_rng(seed)
    x = np.cumsum(rng.uniform(0.1, 3.0, 9))
    f = rng.normal(scale=4.0, size=9)
    reference = PchipInterpolator(x, f)

    np.testing.assert_allclose(set_spline_pchip(x, f), reference.derivative()(x), rtol=1e-9, atol=1e-12)
    grid = _dense(x, 20)
    np.testing.assert_allclose(MonotoneSpline(x, f)(grid), reference(grid), rtol=1e-9, atol=1e-12)


@pytest.mark.parametrize("x, f", [
    ([0.0], [1.0]),
    ([], []),
    ([0.0, 1.0, 1.0], [0.0, 1.0, 2.0]),
    ([0.0, 2.0, 1.0], [0.0, 1.0, 2.0]),
    ([0.0, 1.0, 2.0], [0.0, 1.0]),
    ([0.0, np.nan, 2.0], [0.0, 1.0, 2.0]),
])
def test_invalid_control_points_raise(x, f):
    with pytest.raises(PreconditionError):
        set_spline_pchip(x, f)


def test_wrong_output_length_raises():
    with pytest.raises(PreconditionError):
        set_spline_pchip([0.0, 1.0, 2.0], [0.0, 1.0, 2.0], np.zeros(2))


# --- get_hermite_derivative_interpolation ---

def test_hermite_exact_at_bracket_ends():
    p1 = HermitePoint(0.1, 0.7, 3.0)
    p2 = HermitePoint(0.3, -1.9, -8.0)
    assert get_hermite_derivative_interpolation(p1, p2, 0.1) == 0.7
    assert get_hermite_derivative_interpolation(p1, p2, 0.3) == -1.9


def test_hermite_reproduces_cubic():
    # f(x) = x^3 is a cubic, so Hermite data with its exact derivatives reproduce it
    p1 = HermitePoint(1.0, 1.0, 3.0)
    p2 = HermitePoint(2.0, 8.0, 12.0)
    for xi in np.linspace(1.0, 2.0, 11):
        assert get_hermite_derivative_interpolation(p1, p2, xi) == pytest.approx(xi ** 3)


@pytest.mark.parametrize("p1, p2, xi", [
    (HermitePoint(0.0, 0.0), HermitePoint(1.0, 1.0), 1.5),
    (HermitePoint(0.0, 0.0), HermitePoint(1.0, 1.0), -0.1),
    (HermitePoint(1.0, 0.0), HermitePoint(1.0, 1.0), 1.0),
    (HermitePoint(2.0, 0.0), HermitePoint(1.0, 1.0), 1.5),
])
def test_hermite_preconditions(p1, p2, xi):
    with pytest.raises(PreconditionError):
        get_hermite_derivative_interpolation(p1, p2, xi)


# --- MonotoneSpline ---

def test_spline_passes_through_control_points():
    x = [0.0, 0.4, 1.1, 2.0, 2.2]
    f = [1.0, -0.5, 0.25, 3.0, 2.0]
    spline = MonotoneSpline(x, f)
    np.testing.assert_array_equal(spline(np.array(x)), f)
    assert isinstance(spline(1.1), float)


def test_spline_rejects_queries_outside_range():
    spline = MonotoneSpline([0.0, 1.0, 2.0], [0.0, 1.0, 0.0])
    with pytest.raises(PreconditionError):
        spline(2.5)
    with pytest.raises(PreconditionError):
        spline(np.array([0.5, -1.0]))


@pytest.mark.parametrize("x, f", [
    ([0.0, 1e-310, 1.0], [0.0, 1.0, 2.0]),
    ([0.0, 1.0], [-1e308, 1e308]),
])
def test_overflowing_secants_raise(x, f):
    with pytest.raises(PreconditionError):
        set_spline_pchip(x, f)
    with pytest.raises(PreconditionError):
        MonotoneSpline(x, f)
