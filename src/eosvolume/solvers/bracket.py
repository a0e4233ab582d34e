"""Volume estimate from two known ``(V, p)`` samples enclosing the target pressure.

Within the bracket, the logarithm of the volume is interpolated with a cubic Hermite
polynomial in the pressure. The tangents are the exact slopes
``d log V / dp = 1 / (V dp/dV)``, so the interpolant reproduces both samples and their
compressibilities.

"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
from scipy.interpolate import CubicHermiteSpline

from eosvolume import ad
from eosvolume.models.base import EoSModel
from eosvolume.utils.common import as_composition, check_arraysize

__all__ = ["volume_bracket_refine"]

logger = logging.getLogger(__name__)


def volume_bracket_refine(
    model: EoSModel, p: Any, T: Any, z: Any, v1: Any, v2: Any
) -> float:
    """Interpolates the volume at pressure ``p`` between the volumes ``v1`` and
    ``v2``.

    Parameters:
        model: The equation of state.
        p: Target pressure.
        T: Temperature.
        z: Mole amounts.
        v1: First volume of the bracket.
        v2: Second volume of the bracket.

    Raises:
        EoSModellingError: If the size of ``z`` does not match the number of modelled
            components.

    Returns:
        The interpolated volume if ``p`` lies inside the pressure bracket, the volume of
        the nearest bracket end if it lies outside and NaN if the samples are invalid.
        Derivatives are not propagated.

    """
    z = as_composition(z)
    check_arraysize(model, z)
    p = float(ad.primal_value(p))

    samples = []
    for v in (v1, v2):
        v = float(ad.primal_value(v))
        p_v, dpdV_v = model.p_dpdV(v, T, z)
        samples.append((float(ad.primal_value(p_v)), float(ad.primal_value(dpdV_v)), v))
    if any(np.isnan(s[0]) for s in samples):
        logger.debug("Pressure bracket with invalid samples.")
        return float("nan")
    # Sorted by pressure, not by volume.
    (p_lo, dpdV_lo, v_lo), (p_hi, dpdV_hi, v_hi) = sorted(samples, key=lambda s: s[0])

    if p_lo <= p <= p_hi:
        if p_lo == p_hi:
            logger.debug("Degenerate pressure bracket.")
            return float("nan")
        if p == p_lo:
            return v_lo
        if p == p_hi:
            return v_hi
        if dpdV_lo == 0 or dpdV_hi == 0:
            logger.debug("Bracket end with zero pressure slope.")
            return float("nan")
        spline = CubicHermiteSpline(
            np.array([p_lo, p_hi]),
            np.log([v_lo, v_hi]),
            np.array([1.0 / (v_lo * dpdV_lo), 1.0 / (v_hi * dpdV_hi)]),
        )
        return float(np.exp(spline(p)))
    elif p < p_lo:
        return v_lo
    elif p > p_hi:
        return v_hi
    else:
        # NaN target pressure
        return float("nan")
