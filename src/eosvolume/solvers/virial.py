"""Closed-form volume and pressure in the second-virial (low-density) approximation

.. math::

    Z = \\frac{p V}{n R T} = 1 + \\frac{B}{V},

where ``B`` is the extensive second virial coefficient of the amounts ``z``.

"""

from __future__ import annotations

from typing import Any, Optional

from eosvolume import ad
from eosvolume._core import R_IDEAL_MOL
from eosvolume.models.base import EoSModel
from eosvolume.utils.common import as_composition, safe_sum

__all__ = ["volume_virial", "pressure_virial"]


def _virial_coefficient(model_or_B: EoSModel | Any, T: Any, z: Any, R: float):
    if isinstance(model_or_B, EoSModel):
        return model_or_B.second_virial_coefficient(T, z), model_or_B.Rgas()
    return model_or_B, R


def volume_virial(
    model_or_B: EoSModel | Any,
    p: Any,
    T: Any,
    z: Optional[Any] = None,
    R: float = R_IDEAL_MOL,
) -> Any:
    """Volume root of the virial approximation.

    Solves ``a V^2 - V - B = 0`` with ``a = p / (n R T)`` for its larger root.

    Parameters:
        model_or_B: A model providing the second virial coefficient and the gas
            constant, or the (extensive) second virial coefficient itself.
        p: Pressure.
        T: Temperature.
        z: ``default=None``

            Mole amounts. Defaults to one mole of a pure substance.
        R: ``default=R_IDEAL_MOL``

            Gas constant. Ignored if a model is passed.

    Returns:
        NaN if ``B > 0``, ``-2 B`` if the quadratic has no real root and the larger
        root otherwise. Infinity at zero pressure.

    """
    z = as_composition(z)
    B, R = _virial_coefficient(model_or_B, T, z, R)
    if ad.primal_value(B) > 0:
        return ad.nan_like(B)

    a = p / (R * T * safe_sum(list(z)))
    if ad.primal_value(a) == 0:
        return ad.inf_like(a)
    Delta = 1.0 + 4.0 * a * B
    if ad.primal_value(Delta) <= 0:
        return -2.0 * B
    return (1.0 + ad.sqrt(Delta)) / (2.0 * a)


def pressure_virial(
    model_or_B: EoSModel | Any,
    V: Any,
    T: Any,
    z: Optional[Any] = None,
    R: float = R_IDEAL_MOL,
) -> Any:
    """Pressure ``(1 + B / V) n R T / V`` of the virial approximation.

    Parameters are as in :func:`volume_virial`, with the volume ``V`` replacing the
    pressure.

    """
    z = as_composition(z)
    B, R = _virial_coefficient(model_or_B, T, z, R)
    return (1.0 + B / V) * safe_sum(list(z)) * R * T / V
