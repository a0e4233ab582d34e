"""Contains some fixtures shared by different testing modules."""

from __future__ import annotations

from typing import Any

import numpy as np
import pytest

import eosvolume as ev


class PRWithSolid(ev.PengRobinson):
    """Peng-Robinson model reporting its liquid branch as solid branch, for testing
    the solid candidate of the dispatcher."""

    def x0_volume_solid(self, T: Any, z: Any) -> Any:
        return self.x0_volume_liquid(T, z)


class UnstablePR(ev.PengRobinson):
    """Peng-Robinson model failing every stability test."""

    def isstable(self, V: Any, T: Any, z: Any) -> bool:
        return False


CO2 = dict(Tc=[304.1282], Pc=[7377300.0], omega=[0.22394])
"""Critical properties and acentric factor of CO2."""

CO2_H2S = dict(
    Tc=[304.1282, 373.1],
    Pc=[7377300.0, 9000000.0],
    omega=[0.22394, 0.1005],
    kij=np.array([[0.0, 0.0974], [0.0974, 0.0]]),
)
"""Parameters of a CO2-H2S mixture."""

T_SUB: float = 250.0
"""A temperature below the critical temperature of CO2. The saturation pressure is
around 1.8 MPa."""

P_VAPOR: float = 1.5e6
"""A pressure at :data:`T_SUB` with a stable vapor and a metastable liquid root."""

P_LIQUID: float = 3e6
"""A pressure at :data:`T_SUB` with a stable liquid and a metastable vapor root."""


@pytest.fixture(scope="module")
def pr_co2() -> ev.PengRobinson:
    """Peng-Robinson model for pure CO2."""
    return ev.PengRobinson(["CO2"], **CO2)


@pytest.fixture(scope="module")
def pr_mixture() -> ev.PengRobinson:
    """Peng-Robinson model for a binary mixture."""
    return ev.PengRobinson(["CO2", "H2S"], **CO2_H2S)


@pytest.fixture(scope="module")
def ideal_gas() -> ev.IdealGas:
    return ev.IdealGas()
