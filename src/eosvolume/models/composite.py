"""Pairing of a fluid model with a distinct model for the solid phase."""

from __future__ import annotations

from typing import Any

from eosvolume.utils.common import EoSModellingError

from .base import EoSModel

__all__ = ["CompositeModel"]


class CompositeModel(EoSModel):
    """Model consisting of a fluid sub-model and a solid sub-model.

    Thermodynamic functions are evaluated with the fluid sub-model. The volume solvers
    access the solid sub-model through :meth:`solid_model` when a solid root is
    requested.

    Parameters:
        fluid: Model for the vapor and liquid phases.
        solid: Model for the solid phase.

    Raises:
        EoSModellingError: If the sub-models do not model the same components.

    """

    def __init__(self, fluid: EoSModel, solid: EoSModel) -> None:
        if fluid.components != solid.components:
            raise EoSModellingError(
                f"Fluid model components {fluid.components} do not match the solid"
                + f" model components {solid.components}."
            )
        super().__init__(fluid.components)
        self.fluid: EoSModel = fluid
        """Sub-model for the fluid phases."""
        self.solid: EoSModel = solid
        """Sub-model for the solid phase."""

    def __repr__(self) -> str:
        return f"CompositeModel(fluid={self.fluid!r}, solid={self.solid!r})"

    def fluid_model(self) -> EoSModel:
        return self.fluid

    def solid_model(self) -> EoSModel:
        return self.solid

    def Rgas(self) -> float:
        return self.fluid.Rgas()

    def helmholtz(self, V: Any, T: Any, z: Any) -> Any:
        return self.fluid.helmholtz(V, T, z)

    def helmholtz_derivatives(self, V: Any, T: Any, z: Any) -> tuple[Any, Any, Any]:
        return self.fluid.helmholtz_derivatives(V, T, z)

    def helmholtz_hessian(self, V: Any, T: Any, z: Any) -> tuple[Any, Any, Any]:
        return self.fluid.helmholtz_hessian(V, T, z)

    def p_dpdV(self, V: Any, T: Any, z: Any) -> tuple[Any, Any]:
        return self.fluid.p_dpdV(V, T, z)

    def lb_volume(self, T: Any, z: Any) -> Any:
        return self.fluid.lb_volume(T, z)

    def second_virial_coefficient(self, T: Any, z: Any) -> Any:
        return self.fluid.second_virial_coefficient(T, z)

    def x0_volume_liquid(self, T: Any, z: Any) -> Any:
        return self.fluid.x0_volume_liquid(T, z)

    def x0_volume_gas(self, p: Any, T: Any, z: Any) -> Any:
        return self.fluid.x0_volume_gas(p, T, z)

    def x0_volume_solid(self, T: Any, z: Any) -> Any:
        return self.solid.x0_volume_solid(T, z)

    def isstable(self, V: Any, T: Any, z: Any) -> bool:
        return self.fluid.isstable(V, T, z)
