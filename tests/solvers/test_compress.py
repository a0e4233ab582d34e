"""Tests for the compressibility iteration, using the analytic roots of the
Peng-Robinson EoS and a bracketing root finder as references."""

from __future__ import annotations

import numpy as np
import pytest
from scipy.optimize import brentq

import eosvolume as ev
from tests.solvers import (
    P_LIQUID,
    P_VAPOR,
    T_SUB,
    ideal_gas,
    pr_co2,
    pr_mixture,
)


@pytest.mark.parametrize("p", [P_VAPOR, P_LIQUID])
def test_liquid_root(pr_co2: ev.PengRobinson, p: float) -> None:
    """From the default guess, the iteration converges to the smallest root."""
    roots = pr_co2.volume_roots(p, T_SUB, [1.0])
    assert roots.size == 3, "Test setup expects three roots."

    V = ev.volume_compress(pr_co2, p, T_SUB)
    np.testing.assert_allclose(V, roots[0], rtol=1e-10)

    _, dpdV = pr_co2.p_dpdV(V, T_SUB, np.array([1.0]))
    assert dpdV <= 0


@pytest.mark.parametrize("p", [P_VAPOR, P_LIQUID])
def test_vapor_root(pr_co2: ev.PengRobinson, p: float) -> None:
    roots = pr_co2.volume_roots(p, T_SUB, [1.0])
    V0 = pr_co2.x0_volume(p, T_SUB, np.array([1.0]), ev.Phase.vapor)
    V = ev.volume_compress(pr_co2, p, T_SUB, V0=V0)
    np.testing.assert_allclose(V, roots[-1], rtol=1e-10)


def test_brentq_reference(pr_mixture: ev.PengRobinson) -> None:
    """Supercritical mixture with a single root, compared with a bracketing solver."""
    p, T, z = 5e6, 450.0, np.array([0.3, 0.7])

    def residual(V: float) -> float:
        return pr_mixture.p_dpdV(V, T, z)[0] - p

    lb = pr_mixture.lb_volume(T, z)
    V_ref = brentq(residual, 1.001 * lb, 1.0, xtol=1e-16, rtol=1e-14)
    V = ev.volume_compress(pr_mixture, p, T, z)
    np.testing.assert_allclose(V, V_ref, rtol=1e-10)


@pytest.mark.parametrize("p", [P_VAPOR, P_LIQUID])
def test_start_at_root(pr_co2: ev.PengRobinson, p: float) -> None:
    """Starting at the root, one correction step suffices."""
    roots = pr_co2.volume_roots(p, T_SUB, [1.0])
    for V_root in [roots[0], roots[-1]]:
        V = ev.volume_compress(pr_co2, p, T_SUB, V0=V_root, max_iters=2)
        np.testing.assert_allclose(V, V_root, rtol=1e-12)


def test_unstable_initial_guess(pr_co2: ev.PengRobinson) -> None:
    """The middle root is mechanically unstable, the iteration must not accept it."""
    roots = pr_co2.volume_roots(P_VAPOR, T_SUB, [1.0])
    _, dpdV = pr_co2.p_dpdV(roots[1], T_SUB, np.array([1.0]))
    assert dpdV > 0, "Test setup expects an unstable middle root."
    assert np.isnan(ev.volume_compress(pr_co2, P_VAPOR, T_SUB, V0=roots[1]))


def test_guess_below_lower_bound(pr_co2: ev.PengRobinson) -> None:
    lb = pr_co2.lb_volume(T_SUB, np.array([1.0]))
    assert np.isnan(ev.volume_compress(pr_co2, P_VAPOR, T_SUB, V0=0.5 * lb))


def test_nan_guess(pr_co2: ev.PengRobinson) -> None:
    assert np.isnan(ev.volume_compress(pr_co2, P_VAPOR, T_SUB, V0=np.nan))


def test_iteration_limit(pr_co2: ev.PengRobinson) -> None:
    """Hitting the iteration limit is a failure."""
    assert np.isnan(ev.volume_compress(pr_co2, P_LIQUID, T_SUB, max_iters=1))


def test_ideal_gas(ideal_gas: ev.IdealGas) -> None:
    p, T = 2e5, 300.0
    V = ev.volume_compress(ideal_gas, p, T, 2.0, V0=0.01)
    np.testing.assert_allclose(V, 2.0 * ev.R_IDEAL_MOL * T / p, rtol=1e-12)
    # The ideal gas has no liquid branch.
    assert np.isnan(ev.volume_compress(ideal_gas, p, T))
    # Zero pressure at infinite volume
    assert ev.volume_compress(ideal_gas, 0.0, T, V0=np.inf) == np.inf


def test_composition_size(pr_mixture: ev.PengRobinson) -> None:
    with pytest.raises(ev.EoSModellingError):
        ev.volume_compress(pr_mixture, 1e6, 300.0, [1.0])


@pytest.mark.parametrize("p_val", [P_VAPOR, P_LIQUID])
def test_pressure_derivative(pr_co2: ev.PengRobinson, p_val: float) -> None:
    """The derivative with respect to the target pressure is the inverse slope at the
    root, independent of the path of the iteration."""
    p = ev.initAdArrays(p_val)
    V = ev.volume_compress(pr_co2, p, T_SUB)
    assert isinstance(V, ev.AdArray)
    V_ref = ev.volume_compress(pr_co2, p_val, T_SUB)
    np.testing.assert_allclose(V.val, V_ref, rtol=1e-12)

    _, dpdV = pr_co2.p_dpdV(V.val, T_SUB, np.array([1.0]))
    np.testing.assert_allclose(V.jac, [1.0 / dpdV], rtol=1e-10)


def test_temperature_derivative(pr_co2: ev.PengRobinson) -> None:
    h = 1e-3
    T = ev.initAdArrays(T_SUB)
    V = ev.volume_compress(pr_co2, P_LIQUID, T)
    V_plus = ev.volume_compress(pr_co2, P_LIQUID, T_SUB + h)
    V_minus = ev.volume_compress(pr_co2, P_LIQUID, T_SUB - h)
    np.testing.assert_allclose(V.jac, [(V_plus - V_minus) / (2 * h)], rtol=1e-5)


def test_derivatives_of_failure(pr_co2: ev.PengRobinson) -> None:
    p = ev.initAdArrays(P_LIQUID)
    V = ev.volume_compress(pr_co2, p, T_SUB, max_iters=1)
    assert isinstance(V, ev.AdArray)
    assert np.isnan(V.val)
