"""Capability interface of equations of state, as consumed by the volume solvers, and
reference models implementing it.

The solvers only borrow models. Models with a solid branch either implement
:meth:`~eosvolume.models.base.EoSModel.x0_volume_solid` or are composed of a fluid and
a solid sub-model using :class:`~eosvolume.models.composite.CompositeModel`.

"""

__all__ = []

from . import base, composite, cubic_polynomial, ideal, peng_robinson
from .base import *
from .composite import *
from .ideal import *
from .peng_robinson import *

__all__.extend(base.__all__)
__all__.extend(composite.__all__)
__all__.extend(ideal.__all__)
__all__.extend(peng_robinson.__all__)
