"""Volume at given pressure, temperature and composition, for a requested or the stable
phase.

The dispatcher obtains initial guesses from the model, solves for the volume roots
with the compressibility iteration (:mod:`~eosvolume.solvers.compress`) and, if the
phase is not given, selects the root with the lowest Gibbs energy
(:mod:`~eosvolume.solvers.selection`).

All roots are computed with plain numbers. If any input carries derivatives, they are
restored afterwards by :func:`volume_ad`.

Example:

    .. code-block:: python

        import eosvolume as ev

        model = ev.PengRobinson(["CO2"], Tc=[304.13], Pc=[7.3773e6], omega=[0.22394])
        V_stable = ev.volume(model, 5e6, 280.0)
        V_liquid = ev.volume(model, 5e6, 280.0, phase="liquid")

"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Optional

import numpy as np

from eosvolume import ad
from eosvolume._core import DEFAULT_THREADED, Phase
from eosvolume.models.base import EoSModel
from eosvolume.utils.common import as_composition, check_arraysize
from eosvolume.utils.logging import time_logger

from .compress import _volume_compress
from .selection import volume_label

__all__ = ["volume", "volume_impl", "volume_ad"]

logger = logging.getLogger(__name__)


@time_logger(sections=["dispatch"])
def volume(
    model: EoSModel,
    p: Any,
    T: Any,
    z: Optional[Any] = None,
    phase: Phase | str = Phase.unknown,
    threaded: Optional[bool] = None,
    vol0: Optional[Any] = None,
) -> Any:
    """Calculates the volume of the amounts ``z`` at pressure ``p`` and temperature
    ``T``.

    Every returned root is mechanically stable, i.e. ``dp/dV <= 0``. Note that for
    mixtures, a mechanically stable root can still split into several phases. Use
    ``phase='stable'`` to run the stability test of the model on the result.

    Parameters:
        model: The equation of state.
        p: Pressure.
        T: Temperature.
        z: ``default=None``

            Mole amounts. Defaults to one mole of a pure substance, a number is
            interpreted as the amount of a pure substance.
        phase: ``default=Phase.unknown``

            The phase of the root. For ``unknown`` and ``stable``, the root with the
            lowest Gibbs energy among the vapor, liquid and solid candidates is
            returned. Strings like ``'liquid'``, ``'l'``, ``'gas'`` or ``'v'`` are
            accepted.
        threaded: ``default=None``

            Solve for the candidates concurrently. Defaults to the configured
            behavior (concurrent).
        vol0: ``default=None``

            Initial guess for the volume. Overrides the phase-based initial guesses.

    Raises:
        EoSModellingError: If the size of ``z`` does not match the number of modelled
            components.
        ValueError: If ``phase`` is not a recognized phase.

    Returns:
        The volume. NaN if no root was found, infinity for a vanishing pressure and an
        unknown phase.

    """
    z = as_composition(z)
    phase = Phase.parse(phase)
    if threaded is None:
        threaded = DEFAULT_THREADED

    p_ = ad.primal_value(p)
    T_ = ad.primal_value(T)
    z_ = np.array([ad.primal_value(z_i) for z_i in z], dtype=float)
    vol0_ = None if vol0 is None else ad.primal_value(vol0)

    V = volume_impl(model, p_, T_, z_, phase, threaded, vol0_)
    return volume_ad(model, V, T, z, p)


def volume_ad(model: EoSModel, V: Any, T: Any, z: Any, p: Any) -> Any:
    """Recovers the derivatives of a volume root computed with plain numbers.

    If ``p``, ``T`` or ``z`` carry derivatives, a single Newton step
    ``V - (p(V) - p) / (dp/dV)`` is evaluated with them. At the root, the result has the
    value ``V`` and the derivatives of the implicit function, e.g.
    ``dV/dp = 1 / (dp/dV)``.

    """
    if not (ad.has_derivatives(p) or ad.has_derivatives(T) or ad.has_derivatives(z)):
        return V
    if not ad.isfinite(V):
        return ad.nan_like(p) if ad.isnan(V) else ad.inf_like(p)

    p_V, dpdV = model.p_dpdV(V, T, z)
    return V - (p_V - p) / dpdV


def volume_impl(
    model: EoSModel,
    p: Any,
    T: Any,
    z: Any,
    phase: Phase = Phase.unknown,
    threaded: bool = True,
    vol0: Optional[Any] = None,
) -> Any:
    """Solves for the volume on normalized arguments, see :func:`volume`.

    Models with a more efficient way to compute their volume can bypass this function.

    Raises:
        EoSModellingError: If the size of ``z`` does not match the number of modelled
            components.

    """
    check_arraysize(model, z)
    fluid = model.fluid_model()
    solid = model.solid_model()

    if vol0 is not None and not ad.isnan(vol0):
        if phase == Phase.solid:
            return _volume_compress(solid, p, T, z, vol0)
        V = _volume_compress(fluid, p, T, z, vol0)
        if ad.isnan(V) and solid is not fluid:
            logger.debug("Volume from initial guess not found on fluid, trying solid.")
            return _volume_compress(solid, p, T, z, vol0)
        return V

    if phase.is_concrete:
        V0 = model.x0_volume(p, T, z, phase)
        submodel = solid if phase == Phase.solid else fluid
        return _volume_compress(submodel, p, T, z, V0)

    if ad.primal_value(p) == 0:
        return float("inf")

    Vg0 = fluid.x0_volume(p, T, z, Phase.vapor)
    Vl0 = fluid.x0_volume(p, T, z, Phase.liquid)
    Vs0 = solid.x0_volume_solid(T, z)
    candidates = [(fluid, Vg0), (fluid, Vl0), (solid, Vs0)]

    if threaded:
        with ThreadPoolExecutor(max_workers=len(candidates)) as executor:
            futures = [
                None
                if ad.isnan(V0)
                else executor.submit(_volume_compress, submodel, p, T, z, V0)
                for submodel, V0 in candidates
            ]
            volumes = [
                float("nan") if future is None else future.result()
                for future in futures
            ]
    else:
        volumes = [
            _volume_compress(submodel, p, T, z, V0) for submodel, V0 in candidates
        ]

    label = volume_label([fluid, fluid, solid], p, T, z, volumes)
    logger.debug(f"Selected volume candidate {label.index} at p={p}, T={T}.")

    if phase == Phase.stable and not model.isstable(label.volume, T, z):
        logger.debug(f"Selected volume {label.volume} is not stable.")
        return float("nan")
    return label.volume
