"""Tests for the central definitions and utilities of the package."""

from __future__ import annotations

import numpy as np
import pytest

import eosvolume as ev


@pytest.mark.parametrize(
    ["alias", "phase"],
    [
        ("unknown", ev.Phase.unknown),
        ("stable", ev.Phase.stable),
        ("liquid", ev.Phase.liquid),
        ("l", ev.Phase.liquid),
        ("L", ev.Phase.liquid),
        ("vapor", ev.Phase.vapor),
        ("vapour", ev.Phase.vapor),
        ("gas", ev.Phase.vapor),
        ("v", ev.Phase.vapor),
        ("V", ev.Phase.vapor),
        ("g", ev.Phase.vapor),
        ("solid", ev.Phase.solid),
        ("S", ev.Phase.solid),
        (" Liquid ", ev.Phase.liquid),
        (ev.Phase.solid, ev.Phase.solid),
    ],
)
def test_phase_parse(alias, phase: ev.Phase) -> None:
    assert ev.Phase.parse(alias) is phase


@pytest.mark.parametrize("alias", ["", "x", "supercritical", 1, None])
def test_phase_parse_invalid(alias) -> None:
    with pytest.raises(ValueError):
        ev.Phase.parse(alias)


def test_concrete_phases() -> None:
    concrete = {phase for phase in ev.Phase if phase.is_concrete}
    assert concrete == {ev.Phase.liquid, ev.Phase.vapor, ev.Phase.solid}


def test_as_composition() -> None:
    np.testing.assert_array_equal(ev.as_composition(None), [1.0])
    np.testing.assert_array_equal(ev.as_composition(2), [2.0])
    np.testing.assert_array_equal(ev.as_composition([1, 2]), [1.0, 2.0])
    z = ev.as_composition(np.array([3]))
    assert z.dtype == float

    a = ev.initAdArrays(1.0)
    z = ev.as_composition((a, 2.0))
    assert isinstance(z, list) and z[0] is a


def test_safe_sum() -> None:
    assert ev.safe_sum([]) == 0
    assert ev.safe_sum([1.0, 2.0]) == 3.0
    a, b = ev.initAdArrays([1.0, 2.0])
    s = ev.safe_sum([a, b])
    assert s.val == 3.0 and np.all(s.jac == [1.0, 1.0])


def test_check_arraysize() -> None:
    model = ev.IdealGas(["A", "B"])
    ev.check_arraysize(model, [1.0, 2.0])
    with pytest.raises(ev.EoSModellingError):
        ev.check_arraysize(model, [1.0])


def test_defaults() -> None:
    """Without configuration file, the documented defaults hold."""
    assert ev.DEFAULT_MAX_ITERS == 100
    assert ev.DEFAULT_RTOL == 1e-12
    assert ev.DEFAULT_THREADED
    assert ev.GIBBS_PRESSURE_TOLERANCE == 0.03
