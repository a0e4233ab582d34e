"""Contains utility functions for handling compositions, as well as a custom
exception class :class:`EoSModellingError`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Sequence, TypeVar, cast

import numpy as np

if TYPE_CHECKING:
    from eosvolume.models.base import EoSModel

__all__ = [
    "safe_sum",
    "as_composition",
    "check_arraysize",
    "EoSModellingError",
]


_Addable = TypeVar("_Addable")
"""A type variable representing any type supporting the + overload.

Note:
    Used in :func:`safe_sum` to state that the return value type is the same as the
    argument type.

"""


def safe_sum(x: Sequence[_Addable]) -> _Addable:
    """Safely sum the elements, without creating a first addition with 0.

    Important for AD arrays, which would otherwise be combined with a plain zero.

    Parameters:
        x: A sequence of any objects which support the ``+`` operation.

    Returns:
        The sum of ``x``.

    """
    if len(x) >= 1:
        sum_ = x[0]
        for i in range(1, len(x)):
            sum_ = sum_ + x[i]  # type: ignore[operator]
        return sum_
    else:
        return cast(_Addable, 0)


def as_composition(z: Optional[Any]) -> Any:
    """Brings the composition argument into a uniform shape.

    ``None`` is interpreted as one mole of a pure substance, a bare number as the amount
    of a pure substance. Sequences of floats are converted to numpy arrays, sequences
    containing AD arrays are returned as lists.

    Parameters:
        z: Mole amounts, one per component.

    Returns:
        A one-dimensional container of mole amounts.

    """
    if z is None:
        return np.array([1.0])
    if np.isscalar(z):
        return np.array([float(z)])
    if isinstance(z, np.ndarray):
        return np.atleast_1d(z.astype(float, copy=False))
    z = list(z)
    if all(np.isscalar(z_) for z_ in z):
        return np.array(z, dtype=float)
    return z


def check_arraysize(model: EoSModel, z: Sequence) -> None:
    """Checks that the number of mole amounts matches the number of components
    modelled by ``model``.

    Raises:
        EoSModellingError: If the sizes do not match.

    """
    ncomp = model.num_components
    if len(z) != ncomp:
        raise EoSModellingError(
            f"Composition of size {len(z)} passed to {type(model).__name__} modelling"
            + f" {ncomp} component(s)."
        )


class EoSModellingError(Exception):
    """Custom exception class to alert the user when an equation of state is
    inconsistently used.

    Such usage includes for example:

    - passing a composition whose size does not match the number of modelled
      components,
    - creating a model without any components,
    - passing parameter arrays of inconsistent shape to a model.

    Numerical failures of the volume solvers are never reported with this exception,
    they are signaled by a NaN volume.

    """
