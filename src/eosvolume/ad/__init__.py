"""Forward-mode automatic differentiation used to recover volume derivatives.

The sub-package defines the numeric-value interface of the solvers:
:class:`~eosvolume.ad.forward_mode.AdArray` provides the arithmetic and comparison
operators, :mod:`~eosvolume.ad.functions` the transcendental functions and the queries
for derivative information.

"""

__all__ = []

from . import forward_mode, functions
from .forward_mode import *
from .functions import *

__all__.extend(forward_mode.__all__)
__all__.extend(functions.__all__)
