"""
Piecewise Cubic Hermite Interpolating Polynomial (PCHIP).

Shape-preserving monotone cubic interpolation (Fritsch & Carlson; derivative
rules as in the SLATEC routine PCHIM). The interpolant is monotone on every
interval where the data are monotone and has no overshoot at local extrema
of the data, unlike an ordinary cubic spline.

This module is independent of any point-cloud type.
"""
import numpy as np

from .errors import PreconditionError


class HermitePoint:
    """Control point of a cubic Hermite curve: abscissa, value and derivative."""
    __slots__ = ('x', 'f', 'd')

    def __init__(self, x, f, d=0.0):
        self.x = float(x)
        self.f = float(f)
        self.d = float(d)

    def __iter__(self):
        return iter((self.x, self.f, self.d))

    def __eq__(self, other):
        if not isinstance(other, HermitePoint):
            return NotImplemented
        return tuple(self) == tuple(other)

    def __repr__(self):
        return f"HermitePoint(x={self.x!r}, f={self.f!r}, d={self.d!r})"


def sign_multiplied(arg1, arg2):
    """
    Sign of ``arg1 * arg2`` without forming the product.

    Returns -1.0, 0.0 or 1.0; 0.0 exactly when either argument is zero.
    Avoids the overflow/underflow of the product for extreme magnitudes.
    """
    return float(np.sign(arg1)) * float(np.sign(arg2))


def set_spline_pchip(x, f, d=None):
    """
    Derivatives at the control points of a monotone piecewise cubic Hermite interpolant.

    Args:
        x: strictly increasing abscissas, n >= 2
        f: function values at ``x``
        d: optional output array of length n, filled in place
    Returns:
        numpy array of n derivative values (``d`` itself when given)
    """
    x = np.asarray(x, dtype=np.float64)
    f = np.asarray(f, dtype=np.float64)
    n = x.size
    if x.ndim != 1 or n < 2:
        raise PreconditionError(f"PCHIP needs at least 2 control points, got {n}")
    if f.shape != x.shape:
        raise PreconditionError(f"x and f must have the same length, got {n} and {f.size}")
    if not (np.all(np.isfinite(x)) and np.all(np.isfinite(f))):
        raise PreconditionError("PCHIP control points must be finite")
    if np.any(np.diff(x) <= 0):
        raise PreconditionError("PCHIP abscissas must be strictly increasing")
    if d is None:
        d = np.empty(n, dtype=np.float64)
    elif len(d) != n:
        raise PreconditionError(f"Derivative array has length {len(d)}, expected {n}")
    # Finite control points can still give overflowing slopes
    with np.errstate(over='ignore'):
        secants = np.diff(f) / np.diff(x)
    if not np.all(np.isfinite(secants)):
        raise PreconditionError("PCHIP secant slopes overflow; control points are too close for their values")

    h1 = x[1] - x[0]
    del1 = (f[1] - f[0]) / h1

    # Two points: linear
    if n == 2:
        d[0] = del1
        d[n - 1] = del1
        return d

    h2 = x[2] - x[1]
    del2 = (f[2] - f[1]) / h2
    hsum = h1 + h2

    # Left end: shape-preserving three-point formula
    w1 = (h1 + hsum) / hsum
    w2 = -h1 / hsum
    d[0] = w1 * del1 + w2 * del2
    if sign_multiplied(d[0], del1) <= 0:
        d[0] = 0.0
    elif sign_multiplied(del1, del2) < 0:
        dmax = 3.0 * del1
        if abs(d[0]) > abs(dmax):
            d[0] = dmax

    for i in range(1, n - 1):
        if i > 1:
            h1 = h2
            h2 = x[i + 1] - x[i]
            hsum = h1 + h2
            del1 = del2
            del2 = (f[i + 1] - f[i]) / h2

        d[i] = 0.0
        # Extremum or flat secant: zero slope
        if sign_multiplied(del1, del2) > 0:
            # Brodlie modification of the Butland harmonic mean
            hsumt3 = 3.0 * hsum
            w1 = (hsum + h1) / hsumt3
            w2 = (hsum + h2) / hsumt3
            dmax = max(abs(del1), abs(del2))
            dmin = min(abs(del1), abs(del2))
            drat1 = del1 / dmax
            drat2 = del2 / dmax
            d[i] = dmin / (w1 * drat1 + w2 * drat2)

    # Right end
    w1 = -h2 / hsum
    w2 = (h2 + hsum) / hsum
    d[n - 1] = w1 * del1 + w2 * del2
    if sign_multiplied(d[n - 1], del2) <= 0:
        d[n - 1] = 0.0
    elif sign_multiplied(del1, del2) < 0:
        dmax = 3.0 * del2
        if abs(d[n - 1]) > abs(dmax):
            d[n - 1] = dmax
    return d


def get_hermite_derivative_interpolation(point1, point2, xi):
    """
    Value of the cubic Hermite curve between two adjacent control points.

    Args:
        point1: left HermitePoint
        point2: right HermitePoint
        xi: abscissa with ``point1.x <= xi <= point2.x``
    Returns:
        float; exactly ``point1.f`` at ``point1.x`` and ``point2.f`` at ``point2.x``
    """
    x1, x2 = point1.x, point2.x
    if not x1 < x2:
        raise PreconditionError(f"Hermite bracket must satisfy x1 < x2, got [{x1}, {x2}]")
    if not x1 <= xi <= x2:
        raise PreconditionError(f"xi={xi} lies outside the bracket [{x1}, {x2}]")
    if xi == x1:
        return point1.f
    if xi == x2:
        return point2.f

    h = x2 - x1
    t = (xi - x1) / h
    t2 = t * t
    t3 = t2 * t
    h00 = 2.0 * t3 - 3.0 * t2 + 1.0
    h10 = t3 - 2.0 * t2 + t
    h01 = -2.0 * t3 + 3.0 * t2
    h11 = t3 - t2
    return h00 * point1.f + h10 * h * point1.d + h01 * point2.f + h11 * h * point2.d


class MonotoneSpline:
    """
    Monotone PCHIP curve through a set of control points.

    Example:
        >>> spline = MonotoneSpline([0, 1, 2, 3], [0, 1, 1, 0])
        >>> spline(np.linspace(0, 3, 7))
    """
    def __init__(self, x, f):
        x = np.asarray(x, dtype=np.float64)
        f = np.asarray(f, dtype=np.float64)
        d = set_spline_pchip(x, f)
        self.x = x
        self.points = [HermitePoint(xk, fk, dk) for xk, fk, dk in zip(x, f, d)]

    @property
    def derivatives(self):
        return np.array([p.d for p in self.points])

    def evaluate(self, xi):
        """
        Evaluate the curve at one abscissa or an array of abscissas inside ``[x[0], x[-1]]``.
        """
        xi_arr = np.atleast_1d(np.asarray(xi, dtype=np.float64))
        lo, hi = self.x[0], self.x[-1]
        outside = (xi_arr < lo) | (xi_arr > hi) | ~np.isfinite(xi_arr)
        if np.any(outside):
            raise PreconditionError(
                f"Cannot evaluate at {xi_arr[outside][0]}: outside control range [{lo}, {hi}]"
            )
        # Interval k is [x[k], x[k + 1]]; the last knot belongs to the last interval
        brackets = np.clip(np.searchsorted(self.x, xi_arr, side='right') - 1, 0, len(self.x) - 2)
        values = np.array([
            get_hermite_derivative_interpolation(self.points[k], self.points[k + 1], v)
            for k, v in zip(brackets, xi_arr)
        ])
        return float(values[0]) if np.ndim(xi) == 0 else values

    __call__ = evaluate
