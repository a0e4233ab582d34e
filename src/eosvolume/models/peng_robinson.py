"""Peng-Robinson equation of state with the van der Waals one-fluid mixing rule.

The Helmholtz energy is expressed in terms of the extensive quantities

.. math::

    n = \\sum_i z_i,~~B = \\sum_i z_i b_i,~~
    A(T) = \\sum_i \\sum_j z_i z_j \\sqrt{a_i a_j} (1 - k_{ij})
    \\alpha_i^{1/2}(T) \\alpha_j^{1/2}(T),

with the classical temperature dependency
:math:`\\alpha_i^{1/2} = 1 + m_i (1 - \\sqrt{T / T_{c,i}})`. The pressure reads

.. math::

    p = \\frac{n R T}{V - B} - \\frac{A}{V^2 + 2 B V - B^2}.

All functions are written against the numeric interface in :mod:`eosvolume.ad`, such
that temperatures and compositions may carry derivatives.

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

import numpy as np

from eosvolume import ad
from eosvolume.utils.common import EoSModellingError, safe_sum

from .base import EoSModel
from .cubic_polynomial import calculate_roots

__all__ = [
    "A_CRIT",
    "B_CRIT",
    "Z_CRIT",
    "PengRobinson",
]

logger = logging.getLogger(__name__)


A_CRIT: float = (
    1
    / 512
    * (
        -59
        + 3 * np.cbrt(276231 - 192512 * np.sqrt(2))
        + 3 * np.cbrt(276231 + 192512 * np.sqrt(2))
    )
)
"""Critical, non-dimensional cohesion value in the Peng-Robinson EoS,
~ 0.457235529."""


B_CRIT: float = (
    1
    / 32
    * (-1 - 3 * np.cbrt(16 * np.sqrt(2) - 13) + 3 * np.cbrt(16 * np.sqrt(2) + 13))
)
"""Critical, non-dimensional covolume in the Peng-Robinson EoS, ~ 0.077796073."""


Z_CRIT: float = (
    1 / 32 * (11 + np.cbrt(16 * np.sqrt(2) - 13) - np.cbrt(16 * np.sqrt(2) + 13))
)
"""Critical compressibility factor in the Peng-Robinson EoS, ~ 0.307401308."""


_SQRT2: float = np.sqrt(2.0)
_DELTA_1: float = 1.0 + _SQRT2
_DELTA_2: float = 1.0 - _SQRT2


def cohesion_correction_weight(omega: np.ndarray) -> np.ndarray:
    """Weight ``m`` in the temperature dependency of the cohesion,
    ``m = 0.37464 + 1.54226 omega - 0.26992 omega^2``."""
    return 0.37464 + 1.54226 * omega - 0.26992 * omega**2


class PengRobinson(EoSModel):
    """Peng-Robinson model for a mixture of components.

    Parameters:
        components: Names of the components.
        Tc: Critical temperatures ``[K]``, one per component.
        Pc: Critical pressures ``[Pa]``, one per component.
        omega: Acentric factors, one per component.
        kij: ``default=None``

            Symmetric matrix of binary interaction parameters. Zero if not given.

    Raises:
        EoSModellingError: If the parameters are not given for every component.

    """

    def __init__(
        self,
        components: Sequence[str],
        Tc: Sequence[float],
        Pc: Sequence[float],
        omega: Sequence[float],
        kij: Optional[np.ndarray] = None,
    ) -> None:
        super().__init__(components)

        ncomp = self.num_components
        self.Tc: np.ndarray = np.atleast_1d(np.asarray(Tc, dtype=float))
        """Critical temperatures."""
        self.Pc: np.ndarray = np.atleast_1d(np.asarray(Pc, dtype=float))
        """Critical pressures."""
        self.omega: np.ndarray = np.atleast_1d(np.asarray(omega, dtype=float))
        """Acentric factors."""

        for name, param in [("Tc", self.Tc), ("Pc", self.Pc), ("omega", self.omega)]:
            if param.shape != (ncomp,):
                raise EoSModellingError(
                    f"Parameter {name} of shape {param.shape} given for {ncomp}"
                    + " component(s)."
                )

        if kij is None:
            kij = np.zeros((ncomp, ncomp))
        kij = np.asarray(kij, dtype=float)
        if kij.shape != (ncomp, ncomp):
            raise EoSModellingError(
                f"Binary interaction parameters of shape {kij.shape} given for"
                + f" {ncomp} component(s)."
            )
        if not np.allclose(kij, kij.T):
            raise EoSModellingError("Binary interaction parameters must be symmetric.")
        self.kij: np.ndarray = kij
        """Binary interaction parameters."""

        R = self.Rgas()
        self.a_crit: np.ndarray = A_CRIT * (R * self.Tc) ** 2 / self.Pc
        """Cohesion parameters ``a_i`` at the critical points ``[Pa m^6 / mol^2]``."""
        self.b: np.ndarray = B_CRIT * R * self.Tc / self.Pc
        """Covolumes ``b_i`` ``[m^3 / mol]``."""
        self.m: np.ndarray = cohesion_correction_weight(self.omega)
        """Weights in the temperature dependency of the cohesion."""

        self._a_ij: np.ndarray = np.sqrt(np.outer(self.a_crit, self.a_crit)) * (
            1.0 - self.kij
        )

    def covolume(self, z: Any) -> Any:
        """Extensive covolume ``B = sum_i z_i b_i``."""
        return safe_sum([z_i * b_i for z_i, b_i in zip(z, self.b)])

    def cohesion(self, T: Any, z: Any) -> tuple[Any, Any, Any]:
        """Extensive cohesion ``A(T)`` and its first and second temperature derivative.

        Returns:
            A 3-tuple ``(A, dA/dT, d2A/dT2)``.

        """
        s: list[Any] = []
        ds: list[Any] = []
        d2s: list[Any] = []
        for Tc, m in zip(self.Tc, self.m):
            sqrt_Tr = ad.sqrt(T / Tc)
            s.append(1.0 + m * (1.0 - sqrt_Tr))
            ds.append(-m / (2.0 * Tc * sqrt_Tr))
            d2s.append(m / (4.0 * Tc**2 * sqrt_Tr**3))

        a: list[Any] = []
        da: list[Any] = []
        d2a: list[Any] = []
        ncomp = self.num_components
        for i in range(ncomp):
            for j in range(ncomp):
                zz = z[i] * z[j] * self._a_ij[i, j]
                a.append(zz * (s[i] * s[j]))
                da.append(zz * (ds[i] * s[j] + s[i] * ds[j]))
                d2a.append(zz * (d2s[i] * s[j] + 2.0 * ds[i] * ds[j] + s[i] * d2s[j]))

        return safe_sum(a), safe_sum(da), safe_sum(d2a)

    def _ideal_helmholtz(self, V: Any, T: Any, z: Any, n: Any) -> tuple[Any, Any]:
        """Ideal part of the Helmholtz energy and its temperature derivative."""
        R = self.Rgas()
        mix = [z_i * ad.log(z_i / n) for z_i in z if ad.primal_value(z_i) > 0]
        dfdT = n * R * (ad.log(n / V) - 1.0) + R * (safe_sum(mix) if mix else 0.0)
        return T * dfdT, dfdT

    def _attraction_log(self, V: Any, B: Any) -> Any:
        """``log((V + delta_1 B) / (V + delta_2 B)) / (2 sqrt(2) B)``."""
        return ad.log((V + _DELTA_1 * B) / (V + _DELTA_2 * B)) / (2.0 * _SQRT2 * B)

    def helmholtz(self, V: Any, T: Any, z: Any) -> Any:
        R = self.Rgas()
        n = safe_sum(list(z))
        B = self.covolume(z)
        A, _, _ = self.cohesion(T, z)
        f_id, _ = self._ideal_helmholtz(V, T, z, n)
        f_res = -n * R * T * ad.log(1.0 - B / V) - A * self._attraction_log(V, B)
        return f_id + f_res

    def helmholtz_derivatives(self, V: Any, T: Any, z: Any) -> tuple[Any, Any, Any]:
        R = self.Rgas()
        n = safe_sum(list(z))
        B = self.covolume(z)
        A, _, _ = self.cohesion(T, z)
        Q = V**2 + 2.0 * B * V - B**2

        f = self.helmholtz(V, T, z)
        dfdV = -n * R * T / (V - B) + A / Q
        d2fdV2 = n * R * T / (V - B) ** 2 - A * (2.0 * V + 2.0 * B) / Q**2
        return f, dfdV, d2fdV2

    def helmholtz_hessian(self, V: Any, T: Any, z: Any) -> tuple[Any, Any, Any]:
        R = self.Rgas()
        n = safe_sum(list(z))
        B = self.covolume(z)
        A, dA, d2A = self.cohesion(T, z)
        Q = V**2 + 2.0 * B * V - B**2
        log_term = self._attraction_log(V, B)
        log_rep = ad.log(1.0 - B / V)
        f_id, dfdT_id = self._ideal_helmholtz(V, T, z, n)

        f = f_id - n * R * T * log_rep - A * log_term
        dfdV = -n * R * T / (V - B) + A / Q
        dfdT = dfdT_id - n * R * log_rep - dA * log_term
        d2fdV2 = n * R * T / (V - B) ** 2 - A * (2.0 * V + 2.0 * B) / Q**2
        d2fdVdT = -n * R / (V - B) + dA / Q
        d2fdT2 = -d2A * log_term

        return [[d2fdV2, d2fdVdT], [d2fdVdT, d2fdT2]], [dfdV, dfdT], f

    def p_dpdV(self, V: Any, T: Any, z: Any) -> tuple[Any, Any]:
        # Cheaper than the default, which evaluates the Helmholtz energy as well.
        R = self.Rgas()
        n = safe_sum(list(z))
        B = self.covolume(z)
        A, _, _ = self.cohesion(T, z)
        Q = V**2 + 2.0 * B * V - B**2
        p = n * R * T / (V - B) - A / Q
        dpdV = -n * R * T / (V - B) ** 2 + A * (2.0 * V + 2.0 * B) / Q**2
        return p, dpdV

    def lb_volume(self, T: Any, z: Any) -> Any:
        return self.covolume(z)

    def x0_volume_liquid(self, T: Any, z: Any) -> Any:
        return 1.01 * self.lb_volume(T, z)

    def second_virial_coefficient(self, T: Any, z: Any) -> Any:
        n = safe_sum(list(z))
        A, _, _ = self.cohesion(T, z)
        return self.covolume(z) - A / (n * self.Rgas() * T)

    def volume_roots(self, p: float, T: float, z: Any) -> np.ndarray:
        """Analytic volume roots of the cubic polynomial in the compressibility
        factor.

        Derivatives are ignored. Roots with a volume below the covolume are
        discarded.

        Parameters:
            p: Pressure.
            T: Temperature.
            z: Mole amounts.

        Returns:
            The physical volume roots in ascending order.

        """
        p = float(ad.primal_value(p))
        T = float(ad.primal_value(T))
        z = np.array([ad.primal_value(z_i) for z_i in z], dtype=float)
        R = self.Rgas()
        n = float(z.sum())
        b = float(self.covolume(z)) / n
        a = float(self.cohesion(T, z)[0]) / n**2

        A_ = a * p / (R * T) ** 2
        B_ = b * p / (R * T)
        c2 = B_ - 1.0
        c1 = A_ - 2.0 * B_ - 3.0 * B_**2
        c0 = B_**3 + B_**2 - A_ * B_

        Z = calculate_roots(c2, c1, c0, 1e-14)
        Z = Z[Z > B_]
        logger.debug(f"Cubic roots at p={p}, T={T}: {Z}")
        return Z * n * R * T / p
