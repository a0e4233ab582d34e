"""Tests for the interpolation of the volume inside a pressure bracket."""

from __future__ import annotations

import numpy as np
import pytest

import eosvolume as ev
from tests.solvers import P_VAPOR, T_SUB, pr_co2

Z1 = np.array([1.0])


@pytest.fixture(scope="module")
def bracket(pr_co2: ev.PengRobinson) -> tuple[float, float, float, float]:
    """Two volumes around the vapor root and their pressures."""
    V = pr_co2.volume_roots(P_VAPOR, T_SUB, Z1)[-1]
    v1, v2 = 0.9 * V, 1.1 * V
    p1 = pr_co2.p_dpdV(v1, T_SUB, Z1)[0]
    p2 = pr_co2.p_dpdV(v2, T_SUB, Z1)[0]
    return v1, v2, p1, p2


def test_bracket_ends(pr_co2: ev.PengRobinson, bracket) -> None:
    """At the ends of the bracket, the samples are reproduced exactly."""
    v1, v2, p1, p2 = bracket
    # On the vapor branch, the smaller volume has the higher pressure.
    assert p1 > p2
    for v_a, v_b in [(v1, v2), (v2, v1)]:
        assert ev.volume_bracket_refine(pr_co2, p2, T_SUB, Z1, v_a, v_b) == v2
        assert ev.volume_bracket_refine(pr_co2, p1, T_SUB, Z1, v_a, v_b) == v1


def test_interpolation(pr_co2: ev.PengRobinson, bracket) -> None:
    v1, v2, _, _ = bracket
    V = pr_co2.volume_roots(P_VAPOR, T_SUB, Z1)[-1]
    V_refined = ev.volume_bracket_refine(pr_co2, P_VAPOR, T_SUB, Z1, v1, v2)
    assert v1 < V_refined < v2
    np.testing.assert_allclose(V_refined, V, rtol=1e-3)


def test_outside_bracket(pr_co2: ev.PengRobinson, bracket) -> None:
    """Outside the bracket, the volume of the nearest end is returned."""
    v1, v2, p1, p2 = bracket
    assert ev.volume_bracket_refine(pr_co2, 0.5 * p2, T_SUB, Z1, v1, v2) == v2
    assert ev.volume_bracket_refine(pr_co2, 2.0 * p1, T_SUB, Z1, v1, v2) == v1


def test_degenerate_bracket(pr_co2: ev.PengRobinson, bracket) -> None:
    """A bracket of width zero around the target pressure cannot be interpolated.
    Outside of it, the nearest end is still returned."""
    v1, _, p1, _ = bracket
    assert np.isnan(ev.volume_bracket_refine(pr_co2, p1, T_SUB, Z1, v1, v1))
    assert ev.volume_bracket_refine(pr_co2, 0.5 * p1, T_SUB, Z1, v1, v1) == v1


def test_invalid_samples(pr_co2: ev.PengRobinson, bracket) -> None:
    v1, _, _, _ = bracket
    assert np.isnan(ev.volume_bracket_refine(pr_co2, P_VAPOR, T_SUB, Z1, v1, np.nan))
