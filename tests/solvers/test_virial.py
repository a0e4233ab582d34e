"""Tests for the closed-form virial approximation."""

from __future__ import annotations

import numpy as np
import pytest

import eosvolume as ev
from tests.solvers import T_SUB, ideal_gas, pr_co2


@pytest.mark.parametrize("B", [1e-6, 1e-4, 0.5])
@pytest.mark.parametrize("p", [1e3, 1e5, 1e7])
@pytest.mark.parametrize("T", [100.0, 300.0, 1000.0])
def test_positive_coefficient_fails(B: float, p: float, T: float) -> None:
    """The larger root of the virial quadratic does not describe a gas for B > 0."""
    assert np.isnan(ev.volume_virial(B, p, T))


@pytest.mark.parametrize("z", [None, [1.0], [2.0, 0.5]])
def test_negative_discriminant(z) -> None:
    """Without real roots, the approximation falls back to exactly -2B."""
    B = -1e-3
    T = 300.0
    n = 1.0 if z is None else sum(z)
    # Discriminant 1 + 4 p B / (n R T) <= 0
    p = -n * ev.R_IDEAL_MOL * T / (4.0 * B) * 1.5
    assert ev.volume_virial(B, p, T, z) == -2.0 * B


def test_zero_coefficient_is_ideal() -> None:
    p, T = 1e5, 300.0
    np.testing.assert_allclose(
        ev.volume_virial(0.0, p, T, [2.0]), 2.0 * ev.R_IDEAL_MOL * T / p, rtol=1e-14
    )


def test_zero_pressure() -> None:
    assert ev.volume_virial(-1e-4, 0.0, 300.0) == np.inf


@pytest.mark.parametrize("p", [1e3, 1e5, 1e6])
def test_pressure_consistency(p: float) -> None:
    """The virial pressure of the virial volume is the input pressure, if the quadratic
    has real roots."""
    B, T = -1e-4, 300.0
    V = ev.volume_virial(B, p, T)
    assert np.isfinite(V)
    np.testing.assert_allclose(ev.pressure_virial(B, V, T), p, rtol=1e-10)


def test_model_argument(pr_co2: ev.PengRobinson, ideal_gas: ev.IdealGas) -> None:
    """A model provides the coefficient and the gas constant."""
    p = 1e5
    B = pr_co2.second_virial_coefficient(T_SUB, np.array([1.0]))
    assert B < 0
    assert ev.volume_virial(pr_co2, p, T_SUB) == ev.volume_virial(B, p, T_SUB)
    np.testing.assert_allclose(
        ev.volume_virial(ideal_gas, p, T_SUB),
        ev.R_IDEAL_MOL * T_SUB / p,
        rtol=1e-14,
    )
    np.testing.assert_allclose(
        ev.pressure_virial(pr_co2, 1e-2, T_SUB),
        ev.pressure_virial(B, 1e-2, T_SUB),
        rtol=1e-14,
    )


def test_virial_close_to_eos_at_low_density(pr_co2: ev.PengRobinson) -> None:
    """At low pressures, the virial volume approximates the vapor root."""
    p = 1e4
    V = ev.volume(pr_co2, p, T_SUB, phase="vapor")
    np.testing.assert_allclose(ev.volume_virial(pr_co2, p, T_SUB), V, rtol=1e-4)
