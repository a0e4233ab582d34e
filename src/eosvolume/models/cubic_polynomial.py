"""Real roots of normalized cubic polynomials, compiled with numba.

The polynomial is

.. math::
    z^3 + c_2 z^2 + c_1 z + c_0 = 0,

with the reduced (depressed) form :math:`z^3 + r_1 z + r_0 = 0` obtained by the shift
:math:`z \\rightarrow z - c_2 / 3`.

Cubic equations of state have analytic volume roots. They are not used by the volume
solvers, which only rely on the pressure relation, but they give cubic models an
independent way of reporting all roots (see
:meth:`~eosvolume.models.peng_robinson.PengRobinson.volume_roots`).

See also:

    - https://en.wikipedia.org/wiki/Cubic_equation
    - https://de.wikipedia.org/wiki/Kubische_Gleichung

"""

from __future__ import annotations

import numba as nb
import numpy as np

from .._core import NUMBA_CACHE, NUMBA_FAST_MATH

__all__ = [
    "get_root_case",
    "calculate_roots",
]


_COMPILE_KWARGS = dict(fastmath=NUMBA_FAST_MATH, cache=NUMBA_CACHE)
"""Keyword arguments for compiling functions in this module."""


@nb.njit(nb.f8(nb.f8, nb.f8), **_COMPILE_KWARGS)
def _reduced_r1(c2: float, c1: float) -> float:
    """:math:`r_1 = c_1 - \\frac{c_2^2}{3}`"""
    return c1 - c2**2 / 3.0


@nb.njit(nb.f8(nb.f8, nb.f8, nb.f8), **_COMPILE_KWARGS)
def _reduced_r0(c2: float, c1: float, c0: float) -> float:
    """:math:`r_0 = \\frac{2}{27} c_2^3 - \\frac{c_1 c_2}{3} + c_0`"""
    return 2.0 / 27.0 * c2**3 - (c1 * c2) / 3.0 + c0


@nb.njit(nb.i4(nb.f8, nb.f8, nb.f8, nb.f8), **_COMPILE_KWARGS)
def get_root_case(c2: float, c1: float, c0: float, eps: float) -> int:
    """Determine the case for the roots of the cubic polynomial.

    The cases are:

        - 3: Three distinct real roots.
        - 2: One real root and one root with multiplicity two.
        - 1: One real root and two complex conjugate roots.
        - 0: One real root with multiplicity three (triple root).

    Parameters:
        c2: Coefficient of the quadratic term.
        c1: Coefficient of the linear term.
        c0: Coefficient of the constant term.
        eps: Tolerance for determining whether the discriminant is zero.

    Returns:
        An integer indicating the case (0, 1, 2 or 3).

    """
    r1 = _reduced_r1(c2, c1)
    r0 = _reduced_r0(c2, c1, c0)

    # For normalized polynomials, this equals the discriminant of the original one.
    D = -(4 * r1**3 + 27 * r0**2)

    if D < -eps:
        return 1
    elif D > eps:
        return 3
    else:
        if np.abs(r1) < eps:
            return 0
        else:
            return 2


@nb.njit(nb.f8[:](nb.f8, nb.f8, nb.f8), **_COMPILE_KWARGS)
def _one_root(c2: float, c1: float, c0: float) -> np.ndarray:
    """Single real root, using the hyperbolic method."""
    r1 = _reduced_r1(c2, c1)
    r0 = _reduced_r0(c2, c1, c0)

    if r1 < 0.0:
        absg = np.abs(r0 / 2.0 * np.sqrt(27.0 / np.abs(r1**3)))
        t1 = -2.0 * np.sqrt(-r1 / 3.0)
        # Close to the two-root case, absg can fall slightly below 1.
        t2 = np.sign(r0) * np.cosh(np.arccosh(max(absg, 1.0)) / 3.0)
    elif r1 > 0.0:
        g = -r0 / 2.0 * np.sqrt(27.0 / r1**3)
        t1 = 2.0 * np.sqrt(r1 / 3.0)
        t2 = np.sinh(np.arcsinh(g) / 3.0)
    else:
        # Depressed polynomial z^3 + r0 = 0.
        t1 = 1.0
        t2 = -np.sign(r0) * np.abs(r0) ** (1.0 / 3.0)

    return np.array([t1 * t2]) - c2 / 3.0


@nb.njit(nb.f8[:](nb.f8, nb.f8, nb.f8), **_COMPILE_KWARGS)
def _two_roots(c2: float, c1: float, c0: float) -> np.ndarray:
    """Two real roots, one with multiplicity two, in ascending order."""
    r1 = _reduced_r1(c2, c1)
    r0 = _reduced_r0(c2, c1, c0)

    u = 3.0 * r0 / r1

    if u < -u / 2.0:
        return np.array([u, -u / 2.0]) - c2 / 3.0
    else:
        return np.array([-u / 2.0, u]) - c2 / 3.0


@nb.njit(nb.f8[:](nb.f8, nb.f8, nb.f8), **_COMPILE_KWARGS)
def _three_roots(c2: float, c1: float, c0: float) -> np.ndarray:
    """Three distinct real roots in ascending order, using the trigonometric method
    of Vieta."""
    r1 = _reduced_r1(c2, c1)
    r0 = _reduced_r0(c2, c1, c0)

    t1 = 2.0 * np.sqrt(-r1 / 3.0)
    g = -r0 / 2.0 * np.sqrt(27.0 / np.abs(r1**3))
    # Inaccuracies close to the two-root case can push the argument out of [-1, 1].
    g = min(max(g, -1.0), 1.0)
    t2 = np.arccos(g) / 3.0

    z1 = -t1 * np.cos(t2 - np.pi / 3.0)
    z2 = -t1 * np.cos(t2 + np.pi / 3.0)
    z3 = t1 * np.cos(t2)

    return np.array([z1, z2, z3]) - c2 / 3.0


@nb.njit(nb.f8[:](nb.f8, nb.f8, nb.f8, nb.f8), **_COMPILE_KWARGS)
def calculate_roots(c2: float, c1: float, c0: float, eps: float) -> np.ndarray:
    """Calculate the real roots of a cubic polynomial represented by its coefficients
    :math:`c_2, c_1, c_0`.

    Parameters:
        c2: Coefficient of the quadratic term.
        c1: Coefficient of the linear term.
        c0: Coefficient of the constant term.
        eps: Tolerance for determining whether the discriminant is zero.

    Returns:
        A 1D array containing the real root(s) in ascending order.

    """
    case = get_root_case(c2, c1, c0, eps)
    if case == 0:
        return np.array([-c2 / 3.0])
    elif case == 1:
        return _one_root(c2, c1, c0)
    elif case == 2:
        return _two_roots(c2, c1, c0)
    else:
        return _three_roots(c2, c1, c0)
