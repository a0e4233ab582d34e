"""Numeric functions acting on plain numbers, numpy arrays and :class:`AdArray`.

Together with the arithmetic operators of :class:`AdArray`, these functions form the
numeric-value interface the solvers are written against. A solver body using only
these functions serves both plain values and derivative-tracking values.

"""

from __future__ import annotations

import numpy as np

from eosvolume.ad.forward_mode import AdArray

__all__ = [
    "exp",
    "log",
    "sqrt",
    "abs",
    "sign",
    "isnan",
    "isfinite",
    "primal_value",
    "has_derivatives",
    "nan_like",
    "inf_like",
]


def exp(var):
    if isinstance(var, AdArray):
        val = np.exp(var.val)
        der = var.diagvec_mul_jac(val)
        return AdArray(val, der)
    else:
        return np.exp(var)


def log(var):
    if not isinstance(var, AdArray):
        return np.log(var)

    val = np.log(var.val)
    der = var.diagvec_mul_jac(1 / var.val)
    return AdArray(val, der)


def sqrt(var):
    if not isinstance(var, AdArray):
        return np.sqrt(var)

    val = np.sqrt(var.val)
    der = var.diagvec_mul_jac(0.5 / val)
    return AdArray(val, der)


def sign(var):
    if not isinstance(var, AdArray):
        return np.sign(var)
    else:
        return np.sign(var.val)


def abs(var):
    if not isinstance(var, AdArray):
        return np.abs(var)
    else:
        val = np.abs(var.val)
        jac = var.diagvec_mul_jac(sign(var))
        return AdArray(val, jac)


def isnan(var) -> bool:
    """NaN check on the value, derivatives are ignored."""
    return bool(np.any(np.isnan(primal_value(var))))


def isfinite(var) -> bool:
    """Finiteness check on the value, derivatives are ignored."""
    return bool(np.all(np.isfinite(primal_value(var))))


def primal_value(var):
    """Strips derivative information.

    Lists and tuples are processed element-wise, anything that is not an
    :class:`AdArray` is returned as is.

    """
    if isinstance(var, AdArray):
        return var.val
    if isinstance(var, (list, tuple)):
        return type(var)(primal_value(v) for v in var)
    return var


def has_derivatives(var) -> bool:
    """Returns True if ``var`` or any element of ``var`` carries derivatives."""
    if isinstance(var, AdArray):
        return True
    if isinstance(var, (list, tuple)):
        return any(has_derivatives(v) for v in var)
    return False


def nan_like(var):
    """Returns the failure value (NaN) in the representation of ``var``.

    For an :class:`AdArray` the derivatives of the returned value are NaN as well,
    such that no derivative information survives a failure.

    """
    if isinstance(var, AdArray):
        return AdArray(var.val * np.nan, var.jac * np.nan)
    return float("nan")


def inf_like(var):
    """Returns positive infinity in the representation of ``var``.

    For an :class:`AdArray` the derivatives of the returned value are zero.

    """
    if isinstance(var, AdArray):
        return AdArray(np.inf + 0.0 * var.val, 0.0 * var.jac)
    return float("inf")
