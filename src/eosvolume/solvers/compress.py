"""Volume root of the pressure equation ``p(V, T, z) = p`` by iterating on the
isothermal compressibility.

The iteration works in logarithmic volume space,

.. math::

    \\log V_{i+1} = \\log V_i + \\frac{p - p_i}{V_i \\frac{\\partial p}{\\partial V}_i},

which is the linearization of the pressure for a locally constant compressibility.
Starting from a liquid-like guess, the iterates increase monotonically towards the
root and never cross into the mechanically unstable region. Reaching such a region or
the lower volume bound of the model is treated as divergence.

"""

from __future__ import annotations

import logging
from typing import Any, Optional

import numpy as np

from eosvolume import ad
from eosvolume._core import DEFAULT_MAX_ITERS, DEFAULT_RTOL
from eosvolume.models.base import EoSModel
from eosvolume.numerics.fixpoint import fixpoint
from eosvolume.utils.common import as_composition, check_arraysize
from eosvolume.utils.logging import time_logger

__all__ = ["volume_compress"]

logger = logging.getLogger(__name__)


@time_logger(sections=["solvers"])
def volume_compress(
    model: EoSModel,
    p: Any,
    T: Any,
    z: Optional[Any] = None,
    V0: Optional[Any] = None,
    max_iters: int = DEFAULT_MAX_ITERS,
) -> Any:
    """Solves for the volume at given pressure, temperature and composition, starting
    from an initial guess.

    Parameters:
        model: The equation of state.
        p: Target pressure.
        T: Temperature.
        z: ``default=None``

            Mole amounts. Defaults to one mole of a pure substance.
        V0: ``default=None``

            Initial guess. Defaults to the liquid guess of the model.
        max_iters: ``default=100``

            Maximal number of iterations.

    Raises:
        EoSModellingError: If the size of ``z`` does not match the number of modelled
            components.

    Returns:
        The volume root, or NaN if the iteration failed.

    """
    z = as_composition(z)
    check_arraysize(model, z)
    if V0 is None:
        V0 = model.x0_volume_liquid(T, z)
    return _volume_compress(model, p, T, z, V0, max_iters=max_iters)


def _volume_compress(
    model: EoSModel,
    p: Any,
    T: Any,
    z: Any,
    V0: Any,
    max_iters: int = DEFAULT_MAX_ITERS,
    rtol: float = DEFAULT_RTOL,
) -> Any:
    """Iteration on normalized arguments, see :func:`volume_compress`.

    The iteration runs on plain numbers. If ``p``, ``T`` or ``z`` carry derivatives,
    one Newton step with them at the converged volume attaches the derivatives of the
    implicit function, e.g. ``dV/dp = 1 / (dp/dV)``.

    """
    if ad.isnan(V0):
        logger.debug("Skipping volume iteration for NaN initial guess.")
        return ad.nan_like(p)

    p_target = ad.primal_value(p)
    if p_target == 0 and ad.primal_value(V0) == np.inf:
        return ad.inf_like(p)

    lb_v = ad.primal_value(model.lb_volume(T, z))
    # Pressures closer than this to the target are considered exact.
    p_eps = 3.0 * np.spacing(np.abs(p_target))

    def compressibility_step(logV: float) -> float:
        V = np.exp(logV)
        if V < lb_v:
            logger.debug(f"Volume iterate {V} below lower bound {lb_v}.")
            return ad.nan_like(logV)

        p_i, dpdV_i = model.p_dpdV(V, T, z)
        p_i = ad.primal_value(p_i)
        dpdV_i = ad.primal_value(dpdV_i)

        if not dpdV_i <= 0:
            logger.debug(f"Mechanically unstable volume iterate {V}.")
            return ad.nan_like(logV)
        if np.abs(p_i - p_target) < p_eps:
            return logV
        if dpdV_i == 0:
            return ad.nan_like(logV)
        return logV + (p_target - p_i) / (V * dpdV_i)

    logV = fixpoint(
        compressibility_step,
        np.log(ad.primal_value(V0)),
        rtol=rtol,
        max_iters=max_iters,
    )
    if ad.isnan(logV):
        return ad.nan_like(p)
    V = float(np.exp(logV))

    if not (ad.has_derivatives(p) or ad.has_derivatives(T) or ad.has_derivatives(z)):
        return V
    p_V, dpdV = model.p_dpdV(V, T, z)
    return V - (p_V - p) / dpdV
