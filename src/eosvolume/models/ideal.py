"""Ideal gas model, ``p V = n R T``.

Mostly used as the simplest consumer of the solver interface and as a limit case for
tests: the volume root is known analytically, there is no liquid branch and the
second virial coefficient vanishes.

"""

from __future__ import annotations

from typing import Any, Sequence

from eosvolume import ad
from eosvolume.utils.common import safe_sum

from .base import EoSModel

__all__ = ["IdealGas"]


def _mixing_entropy_term(z: Any, n: Any) -> Any:
    """Returns ``sum_i z_i log(z_i / n)``, skipping absent components."""
    terms = [z_i * ad.log(z_i / n) for z_i in z if ad.primal_value(z_i) > 0]
    return safe_sum(terms) if terms else 0.0


class IdealGas(EoSModel):
    """Ideal gas mixture.

    Parameters:
        components: ``default=('ideal gas',)``

            Names of the modelled components.
        R: ``default=None``

            Gas constant. Defaults to :data:`~eosvolume._core.R_IDEAL_MOL`.

    """

    def __init__(
        self, components: Sequence[str] = ("ideal gas",), R: float | None = None
    ) -> None:
        super().__init__(components)
        self._R = R

    def Rgas(self) -> float:
        if self._R is None:
            return super().Rgas()
        return self._R

    def helmholtz(self, V: Any, T: Any, z: Any) -> Any:
        R = self.Rgas()
        n = safe_sum(list(z))
        return n * R * T * (ad.log(n / V) - 1.0) + R * T * _mixing_entropy_term(z, n)

    def helmholtz_derivatives(self, V: Any, T: Any, z: Any) -> tuple[Any, Any, Any]:
        nRT = safe_sum(list(z)) * self.Rgas() * T
        return self.helmholtz(V, T, z), -nRT / V, nRT / V**2

    def helmholtz_hessian(self, V: Any, T: Any, z: Any) -> tuple[Any, Any, Any]:
        R = self.Rgas()
        n = safe_sum(list(z))
        f = self.helmholtz(V, T, z)
        dfdV = -n * R * T / V
        dfdT = n * R * (ad.log(n / V) - 1.0) + R * _mixing_entropy_term(z, n)
        d2fdV2 = n * R * T / V**2
        d2fdVdT = -n * R / V
        return [[d2fdV2, d2fdVdT], [d2fdVdT, 0.0]], [dfdV, dfdT], f

    def lb_volume(self, T: Any, z: Any) -> float:
        return 0.0

    def second_virial_coefficient(self, T: Any, z: Any) -> float:
        return 0.0

    def x0_volume_liquid(self, T: Any, z: Any) -> float:
        return float("nan")
