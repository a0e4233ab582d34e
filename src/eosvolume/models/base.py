"""Base class defining the capabilities a model must provide to the volume solvers.

The volume solvers borrow a model, they never mutate it. All quantities are
extensive: ``V`` is the total volume of the amounts ``z`` (mole numbers), and the
Helmholtz energy is the total energy of these amounts.

Temperatures and compositions may be derivative-tracking values
(:class:`~eosvolume.ad.AdArray`). Implementations should therefore express their
arithmetic with the operators and the functions in :mod:`eosvolume.ad`.

"""

from __future__ import annotations

import abc
from typing import Any, Sequence

import numpy as np

from eosvolume import ad
from eosvolume._core import R_IDEAL_MOL, Phase
from eosvolume.utils.common import EoSModellingError, safe_sum

__all__ = ["EoSModel"]


class EoSModel(abc.ABC):
    """Abstract equation of state, as seen by the volume solvers.

    Derived classes must implement the Helmholtz energy with its derivatives, a lower
    bound for the volume and the second virial coefficient. Everything else has a
    default implementation based on those.

    Parameters:
        components: Names of the modelled components.

    Raises:
        EoSModellingError: If no components are passed.

    """

    def __init__(self, components: Sequence[str]) -> None:
        if len(components) == 0:
            raise EoSModellingError(
                "Cannot create an equation of state without components."
            )

        self.components: list[str] = list(components)
        """Names of the modelled components."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.components})"

    @property
    def num_components(self) -> int:
        """Number of modelled components, i.e. the size of valid compositions."""
        return len(self.components)

    @abc.abstractmethod
    def helmholtz(self, V: Any, T: Any, z: Any) -> Any:
        """Total Helmholtz energy ``[J]`` of the amounts ``z`` in the volume ``V``."""
        ...

    @abc.abstractmethod
    def helmholtz_derivatives(self, V: Any, T: Any, z: Any) -> tuple[Any, Any, Any]:
        """Helmholtz energy and its first and second derivative with respect to the
        volume.

        Returns:
            A 3-tuple ``(A, dA/dV, d2A/dV2)``.

        """
        ...

    @abc.abstractmethod
    def helmholtz_hessian(self, V: Any, T: Any, z: Any) -> tuple[Any, Any, Any]:
        """Helmholtz energy with its gradient and Hessian in the ``(V, T)`` space.

        Returns:
            A 3-tuple ``(hessian, gradient, A)`` where ``hessian`` is a ``(2, 2)``
            nested sequence ``[[A_VV, A_VT], [A_TV, A_TT]]`` and ``gradient`` the
            sequence ``[A_V, A_T]``.

        """
        ...

    @abc.abstractmethod
    def lb_volume(self, T: Any, z: Any) -> Any:
        """Lower bound of the volume. Volumes below are not physical."""
        ...

    @abc.abstractmethod
    def second_virial_coefficient(self, T: Any, z: Any) -> Any:
        """Second virial coefficient ``B`` for the amounts ``z``, such that the
        compressibility factor is ``1 + B / V`` at low densities."""
        ...

    def x0_volume_liquid(self, T: Any, z: Any) -> Any:
        """Initial guess for the liquid volume root, slightly above the lower bound.

        Models without a liquid branch should return NaN.

        """
        return 1.25 * self.lb_volume(T, z)

    def Rgas(self) -> float:
        """The gas constant used by the model."""
        return R_IDEAL_MOL

    def helmholtz_dV(self, V: Any, T: Any, z: Any) -> tuple[Any, Any]:
        """Helmholtz energy and its derivative with respect to the volume."""
        A, dAdV, _ = self.helmholtz_derivatives(V, T, z)
        return A, dAdV

    def pressure(self, V: Any, T: Any, z: Any) -> Any:
        """Pressure ``p = -dA/dV``."""
        return -self.helmholtz_dV(V, T, z)[1]

    def p_dpdV(self, V: Any, T: Any, z: Any) -> tuple[Any, Any]:
        """Pressure and its derivative with respect to the volume."""
        _, dAdV, d2AdV2 = self.helmholtz_derivatives(V, T, z)
        return -dAdV, -d2AdV2

    def x0_volume(self, p: Any, T: Any, z: Any, phase: Phase) -> Any:
        """Initial guess for the volume root of a concrete phase.

        Raises:
            ValueError: If ``phase`` is not one of liquid, vapor or solid.

        """
        phase = Phase.parse(phase)
        if phase == Phase.liquid:
            return self.x0_volume_liquid(T, z)
        elif phase == Phase.vapor:
            return self.x0_volume_gas(p, T, z)
        elif phase == Phase.solid:
            return self.x0_volume_solid(T, z)
        raise ValueError(f"No initial volume guess defined for phase {phase}.")

    def x0_volume_gas(self, p: Any, T: Any, z: Any) -> Any:
        """Initial guess for the vapor volume root.

        Uses the virial approximation, and the ideal gas volume where the former
        is not available.

        """
        # Local import, the solver package imports the models.
        from eosvolume.solvers.virial import volume_virial

        V = volume_virial(self, p, T, z)
        if ad.isfinite(V) and V > 0:
            return V
        if ad.primal_value(p) == 0:
            return float("inf")
        return safe_sum(list(z)) * self.Rgas() * T / p

    def x0_volume_solid(self, T: Any, z: Any) -> Any:
        """Initial guess for the solid volume root. Defaults to NaN, i.e. the model has
        no solid branch."""
        return float("nan")

    def fluid_model(self) -> EoSModel:
        """The model describing the fluid phases (vapor and liquid)."""
        return self

    def solid_model(self) -> EoSModel:
        """The model describing solid phases."""
        return self

    def isstable(self, V: Any, T: Any, z: Any) -> bool:
        """Stability test of the state ``(V, T, z)``.

        The default implementation checks mechanical stability ``dp/dV <= 0`` only,
        which is sufficient for pure components. Mixture models should override this
        with a test for diffusive stability.

        """
        if ad.isnan(V):
            return False
        if np.isinf(ad.primal_value(V)):
            return True
        _, dpdV = self.p_dpdV(V, T, z)
        return bool(ad.primal_value(dpdV) <= 0)
