"""Forward mode automatic differentiation for scalar and small vector quantities.

An :class:`AdArray` carries a value and its derivatives (Jacobian) with respect to a
fixed set of independent variables. The Jacobian is stored dense, with the variables
along the last axis:

- scalar value: ``jac.shape == (num_vars,)``
- value of shape ``(n,)``: ``jac.shape == (n, num_vars)``

Constants mixed into the arithmetic are cast to arrays with a zero Jacobian.

Comparison operators act on the values only. This is what iterative solvers need to
take branching decisions, while derivatives are carried along the arithmetic.

"""

from __future__ import annotations

from typing import Any

import numpy as np

__all__ = ["AdArray", "initAdArrays"]


def initAdArrays(variables):
    """Initializes independent variables.

    Parameters:
        variables: A single number or array, or a list of numbers and arrays.
            Each entry is one (block of) independent variable(s).

    Returns:
        A single :class:`AdArray` if ``variables`` is not a list, otherwise a list of
        AD arrays with the Jacobians being identity blocks in the joint variable space.

    """
    if not isinstance(variables, list):
        val = np.asarray(variables, dtype=float)
        if val.ndim == 0:
            return AdArray(float(val), np.ones(1))
        return AdArray(val, np.eye(val.size))

    num_val = [np.asarray(v).size for v in variables]
    num_total = sum(num_val)
    ad_arrays = []
    offset = 0
    for i, var in enumerate(variables):
        val = np.asarray(var, dtype=float)
        n = num_val[i]
        jac = np.zeros((n, num_total))
        # set jacobian of variable i to I
        jac[:, offset : offset + n] = np.eye(n)
        offset += n
        if val.ndim == 0:
            ad_arrays.append(AdArray(float(val), jac[0]))
        else:
            ad_arrays.append(AdArray(val, jac))

    return ad_arrays


class AdArray:
    """Value with forward-mode derivatives.

    Parameters:
        val: The value, a number or a numpy array.
        jac: The derivatives of ``val``. Defaults to zero (a constant).

    """

    __array_ufunc__ = None
    """Makes numpy scalars and arrays defer to the reflected operators of this class."""

    def __init__(self, val: Any = 1.0, jac: Any = 0.0) -> None:
        self.val = val
        self.jac = jac

    def __repr__(self) -> str:
        return f"AdArray(val={self.val!r}, jac={self.jac!r})"

    def __add__(self, other):
        b = _cast(other)
        return AdArray(self.val + b.val, self.jac + b.jac)

    def __radd__(self, other):
        return self.__add__(other)

    def __sub__(self, other):
        b = _cast(other)
        return AdArray(self.val - b.val, self.jac - b.jac)

    def __rsub__(self, other):
        return -self.__sub__(other)

    def __mul__(self, other):
        if not isinstance(other, AdArray):  # other is a constant
            val = self.val * other
            jac = self.diagvec_mul_jac(other)
        else:
            val = self.val * other.val
            jac = self.diagvec_mul_jac(other.val) + other.diagvec_mul_jac(self.val)
        return AdArray(val, jac)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __pow__(self, other):
        if not isinstance(other, AdArray):
            val = self.val**other
            jac = self.diagvec_mul_jac(other * self.val ** (other - 1))
        else:
            val = self.val**other.val
            jac = self.diagvec_mul_jac(
                other.val * self.val ** (other.val - 1)
            ) + other.diagvec_mul_jac(self.val**other.val * np.log(self.val))
        return AdArray(val, jac)

    def __rpow__(self, other):
        val = other**self.val
        jac = self.diagvec_mul_jac(other**self.val * np.log(other))
        return AdArray(val, jac)

    def __truediv__(self, other):
        if not isinstance(other, AdArray):
            inv = 1.0 / np.asarray(other)
            return AdArray(self.val * inv, self.diagvec_mul_jac(inv))
        val = self.val / other.val
        jac = self.diagvec_mul_jac(1.0 / other.val) - other.diagvec_mul_jac(
            self.val / other.val**2
        )
        return AdArray(val, jac)

    def __rtruediv__(self, other):
        val = other / self.val
        jac = self.diagvec_mul_jac(-other / self.val**2)
        return AdArray(val, jac)

    def __neg__(self):
        return AdArray(-self.val, -self.jac)

    def __abs__(self):
        return AdArray(np.abs(self.val), self.diagvec_mul_jac(np.sign(self.val)))

    def __lt__(self, other):
        return self.val < _val(other)

    def __le__(self, other):
        return self.val <= _val(other)

    def __gt__(self, other):
        return self.val > _val(other)

    def __ge__(self, other):
        return self.val >= _val(other)

    def diagvec_mul_jac(self, a):
        """Scales the Jacobian row-wise with ``a``, i.e. ``diag(a) @ jac``."""
        a = np.asarray(a)
        if np.ndim(self.jac) > a.ndim:
            return a[..., np.newaxis] * self.jac
        return a * self.jac


def _val(x):
    return x.val if isinstance(x, AdArray) else x


def _cast(variables):
    if isinstance(variables, AdArray):
        return variables
    return AdArray(variables)
