"""Successive substitution for scalar fixed-point problems ``x = f(x)``.

The driver is generic over the numeric-value interface in :mod:`eosvolume.ad`: the
iterates may be plain numbers or :class:`~eosvolume.ad.AdArray`. Convergence is judged
on the values only.

"""

from __future__ import annotations

import logging
from typing import Callable, TypeVar

import numpy as np

from eosvolume import ad

__all__ = ["fixpoint"]

logger = logging.getLogger(__name__)

_X = TypeVar("_X")


def fixpoint(
    f: Callable[[_X], _X],
    x0: _X,
    rtol: float = 1e-12,
    atol: float = 8 * np.finfo(float).eps,
    max_iters: int = 100,
) -> _X:
    """Iterates ``x_{i+1} = f(x_i)`` until two consecutive iterates agree.

    The iteration is converged if
    ``|x_{i+1} - x_i| <= max(atol, rtol * |x_{i+1}|)``.

    Parameters:
        f: The fixed-point map.
        x0: Initial iterate.
        rtol: ``default=1e-12``

            Relative tolerance.
        atol: ``default=8*eps``

            Absolute tolerance, relevant for iterates close to zero.
        max_iters: ``default=100``

            Maximal number of evaluations of ``f``.

    Returns:
        The converged iterate, or NaN (in the representation of the iterate) if ``f``
        returned NaN or the iteration did not converge within ``max_iters``.

    """
    x = x0
    for i in range(max_iters):
        x_new = f(x)
        if ad.isnan(x_new):
            logger.debug(f"Fixed-point map returned NaN in iteration {i + 1}.")
            return ad.nan_like(x_new)
        xv = ad.primal_value(x)
        xv_new = ad.primal_value(x_new)
        if np.abs(xv_new - xv) <= max(atol, rtol * np.abs(xv_new)):
            return x_new
        x = x_new

    logger.debug(f"Fixed-point iteration did not converge in {max_iters} iterations.")
    return ad.nan_like(x)
