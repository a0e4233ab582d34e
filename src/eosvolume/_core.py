"""This private module contains central assumptions and data for the entire
package.

Changes here should be done with much care.

Some defaults of the volume solvers can be overwritten in the ``[volume]`` section of
the configuration file ``eosvolume.cfg``, see :data:`eosvolume.config`.

"""

from __future__ import annotations

from enum import Enum

import eosvolume as ev

__all__ = [
    "R_IDEAL_MOL",
    "DEFAULT_MAX_ITERS",
    "DEFAULT_RTOL",
    "DEFAULT_THREADED",
    "GIBBS_PRESSURE_TOLERANCE",
    "Phase",
]


NUMBA_CACHE: bool = True
"""Flag to instruct the numba compiler to cache (!and use cached!) functions.

This might cause some confusion in the developing process due to some lack in numba's
caching functionality.

See Also:
    https://numba.readthedocs.io/en/stable/user/jit.html#cache

"""

NUMBA_FAST_MATH: bool = False
"""Flag to instruct the numba compiler to use it's ``fastmath`` functions.

To be used with care, due to loss in precision.

"""

R_IDEAL_MOL: float = 8.31446261815324
"""Universal gas constant in ``[J / K mol]``."""


_volume_config: dict = ev.config.get("volume", {})

DEFAULT_MAX_ITERS: int = int(_volume_config.get("max_iters", 100))
"""Maximal number of iterations of the compressibility solver. Defaults to 100."""

DEFAULT_RTOL: float = float(_volume_config.get("rtol", 1e-12))
"""Relative tolerance on the logarithm of the volume in the compressibility solver.
Defaults to ``1e-12``."""

DEFAULT_THREADED: bool = (
    str(_volume_config.get("threaded", "true")).strip().lower() == "true"
)
"""Whether the phase dispatcher solves the candidate roots concurrently by default."""

GIBBS_PRESSURE_TOLERANCE: float = 0.03
"""Maximal relative deviation between the pressure implied by a candidate volume and
the target pressure, before the candidate is rejected in the Gibbs comparison."""


class Phase(Enum):
    """Enum object for the phase a volume root is requested for.

    - :attr:`unknown`: the stable root among all candidates (Gibbs comparison).
    - :attr:`liquid`: root obtained from a liquid initial guess.
    - :attr:`vapor`: root obtained from a vapor initial guess.
    - :attr:`solid`: root obtained from a solid initial guess on the solid sub-model.
    - :attr:`stable`: like :attr:`unknown`, followed by a stability test.

    """

    unknown = "unknown"
    liquid = "liquid"
    vapor = "vapor"
    solid = "solid"
    stable = "stable"

    @classmethod
    def parse(cls, phase: Phase | str) -> Phase:
        """Converts ``phase`` into a member of this enum.

        Parameters:
            phase: A member, or one of the accepted string aliases (``'l'``,
                ``'liquid'``, ``'v'``, ``'g'``, ``'gas'``, ``'vapour'``, ``'s'``, ...).

        Raises:
            ValueError: If ``phase`` is not a recognized phase.

        """
        if isinstance(phase, cls):
            return phase
        if isinstance(phase, str):
            key = phase.strip()
            member = _PHASE_ALIASES.get(key, _PHASE_ALIASES.get(key.lower()))
            if member is not None:
                return member
        raise ValueError(f"Unknown phase specification {phase!r}.")

    @property
    def is_concrete(self) -> bool:
        """True for liquid, vapor and solid, i.e. phases with a single initial guess."""
        return self not in (Phase.unknown, Phase.stable)


_PHASE_ALIASES: dict[str, Phase] = {
    "unknown": Phase.unknown,
    "stable": Phase.stable,
    "liquid": Phase.liquid,
    "l": Phase.liquid,
    "vapor": Phase.vapor,
    "vapour": Phase.vapor,
    "gas": Phase.vapor,
    "v": Phase.vapor,
    "g": Phase.vapor,
    "solid": Phase.solid,
    "s": Phase.solid,
}
