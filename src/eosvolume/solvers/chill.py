"""Continuation of a known volume root from one temperature to another.

Starting from a root ``v0`` at ``T0``, the temperature is moved towards the target in
steps predicted from the local curvature of the Helmholtz energy. Each accepted
temperature is accompanied by a first-order volume correction

.. math::

    \\Delta v = \\frac{\\partial V}{\\partial p} (p - p_i)
    + \\frac{\\partial V}{\\partial T} (T - T_i),

with ``dV/dp = -1 / A_VV`` and ``dV/dT = -A_VT / A_VV``. The continuation is useful
where the compressibility iteration has no good initial guess, for example close to a
phase boundary at low temperatures.

"""

from __future__ import annotations

import logging
from typing import Any

from eosvolume import ad
from eosvolume._core import DEFAULT_MAX_ITERS
from eosvolume.models.base import EoSModel
from eosvolume.utils.common import as_composition, check_arraysize
from eosvolume.utils.logging import time_logger

__all__ = ["volume_chill"]

logger = logging.getLogger(__name__)

MAX_INVALID_PREDICTIONS: int = 10
"""Number of consecutive non-positive volume predictions after which the continuation
is aborted."""


@time_logger(sections=["solvers"])
def volume_chill(
    model: EoSModel,
    p: Any,
    T: Any,
    z: Any,
    v0: Any,
    T0: Any,
    T_tol: float = 0.01,
    max_iters: int = DEFAULT_MAX_ITERS,
) -> Any:
    """Tracks a volume root from ``(v0, T0)`` to the target temperature ``T``.

    Parameters:
        model: The equation of state.
        p: Target pressure.
        T: Target temperature.
        z: Mole amounts.
        v0: Known volume root at ``T0``.
        T0: Starting temperature.
        T_tol: ``default=0.01``

            Relative tolerance on the predicted temperature step.
        max_iters: ``default=100``

            Maximal number of iterations.

    Raises:
        EoSModellingError: If the size of ``z`` does not match the number of modelled
            components.

    Returns:
        The volume at the target temperature. NaN if the continuation failed, and the
        last iterate if the iteration limit was reached.

    """
    z = as_composition(z)
    check_arraysize(model, z)

    v = v0
    T_i = T0
    T_target = ad.primal_value(T)
    num_invalid = 0

    for i in range(max_iters):
        hessian, gradient, _ = model.helmholtz_hessian(v, T_i, z)
        A_VV = hessian[0][0]
        A_VT = hessian[0][1]
        p_i = -gradient[0]

        dVdT = -A_VT / A_VV
        dVdp = -1.0 / A_VV
        dTdp = -1.0 / A_VT
        dT = dTdp * (p - p_i)
        T_new = T_i + dT

        # A prediction beyond the target is replaced by the midpoint.
        overshoot = (ad.primal_value(T_new) - T_target) * (
            ad.primal_value(T_i) - T_target
        ) < 0
        if overshoot:
            T_i = (T_i + T) / 2.0
        else:
            T_i = T_new

        dv = dVdp * (p - p_i) + dVdT * (T - T_i)
        v_new = v + dv
        v_valid = ad.primal_value(v_new) > 0
        if v_valid:
            v = v_new
            num_invalid = 0
        else:
            num_invalid += 1
            if num_invalid >= MAX_INVALID_PREDICTIONS:
                logger.debug(
                    f"Continuation aborted after {num_invalid} invalid volume"
                    + " predictions."
                )
                return ad.nan_like(v)

        if not ad.isfinite(v):
            return v
        if abs(ad.primal_value(dT)) < T_tol * T_target and v_valid:
            logger.debug(f"Continuation converged in {i + 1} iterations.")
            return v

    logger.debug(
        f"Continuation reached {max_iters} iterations at T={ad.primal_value(T_i)}."
    )
    return v
