"""Selection of the stable volume root among several candidates.

At fixed pressure and temperature, the stable phase minimizes the Gibbs energy
``G = A + p V``. Candidates whose pressure ``-dA/dV`` deviates from the target by more
than :data:`~eosvolume._core.GIBBS_PRESSURE_TOLERANCE` are not roots and are rejected.

"""

from __future__ import annotations

import logging
from typing import Any, NamedTuple, Sequence

import numpy as np

from eosvolume import ad
from eosvolume._core import GIBBS_PRESSURE_TOLERANCE, Phase
from eosvolume.models.base import EoSModel
from eosvolume.utils.common import as_composition, check_arraysize
from eosvolume.utils.logging import time_logger

from .compress import _volume_compress

__all__ = ["VolumeLabel", "gibbs_energy", "volume_label", "label_and_volumes"]

logger = logging.getLogger(__name__)


class VolumeLabel(NamedTuple):
    """Result of the Gibbs comparison of volume candidates."""

    index: int
    """Position of the selected candidate, -1 if all candidates were rejected."""
    volume: Any
    """The selected volume, NaN if all candidates were rejected."""
    gibbs: float
    """Gibbs energy of the selected candidate, infinity if all were rejected."""


def gibbs_energy(model: EoSModel, p: Any, T: Any, z: Any, V: Any) -> float:
    """Gibbs energy ``A + p V`` of a volume candidate.

    Derivatives are ignored.

    Returns:
        Infinity if ``V`` is NaN or does not reproduce the pressure ``p`` within the
        relative tolerance. For the ideal gas at zero pressure the volume is infinite
        and the Helmholtz energy is returned.

    """
    V = ad.primal_value(V)
    if np.isnan(V):
        return np.inf

    p = ad.primal_value(p)
    f, dfdV = model.helmholtz_dV(V, T, z)
    f = ad.primal_value(f)
    dfdV = ad.primal_value(dfdV)

    if V == np.inf and dfdV == 0:
        return f

    deviation = np.abs(p + dfdV)
    if p != 0:
        deviation = deviation / np.abs(p)
    if not deviation <= GIBBS_PRESSURE_TOLERANCE:
        return np.inf
    return f + p * V


@time_logger(sections=["dispatch"])
def volume_label(
    models: Sequence[EoSModel],
    p: Any,
    T: Any,
    z: Any,
    volumes: Sequence[Any],
) -> VolumeLabel:
    """Selects the candidate with the lowest Gibbs energy.

    Candidates are compared in the given order with a strict less-than. Of several
    candidates with equal energy, the first one is selected.

    Parameters:
        models: The (sub-) model of each candidate.
        p: Pressure.
        T: Temperature.
        z: Mole amounts.
        volumes: The volume candidates.

    Returns:
        The selected candidate.

    """
    index = -1
    volume = float("nan")
    g_min = np.inf
    for i, (model, V) in enumerate(zip(models, volumes)):
        g = gibbs_energy(model, p, T, z, V)
        logger.debug(f"Volume candidate {i}: V={ad.primal_value(V)}, G={g}")
        if g < g_min:
            g_min = g
            index = i
            volume = V
    return VolumeLabel(index, volume, g_min)


def label_and_volumes(model: EoSModel, p: Any, T: Any, z: Any) -> tuple[int, Any, Any]:
    """Solves for the liquid and the vapor root of the fluid model and labels the stable
    one.

    The initial guesses are taken from ``model``, the roots are computed on its fluid
    sub-model, as for a liquid or vapor request to :func:`~eosvolume.solvers.volume`.

    Parameters:
        model: The equation of state.
        p: Pressure.
        T: Temperature.
        z: Mole amounts.

    Raises:
        EoSModellingError: If the size of ``z`` does not match the number of modelled
            components.

    Returns:
        A 3-tuple ``(label, V_liquid, V_vapor)`` with label ``0`` for a stable liquid
        and ``1`` for a stable vapor. If one root does not exist, the other one is
        reported for both phases.

    """
    z = as_composition(z)
    check_arraysize(model, z)
    fluid = model.fluid_model()

    Vl = _volume_compress(fluid, p, T, z, model.x0_volume(p, T, z, Phase.liquid))
    Vv = _volume_compress(fluid, p, T, z, model.x0_volume(p, T, z, Phase.vapor))

    if ad.isnan(Vl):
        return 1, Vv, Vv
    if ad.isnan(Vv):
        return 0, Vl, Vl

    gl = gibbs_energy(fluid, p, T, z, Vl)
    gv = gibbs_energy(fluid, p, T, z, Vv)
    return (1 if gv < gl else 0), Vl, Vv
