"""Volume root solvers and the phase dispatcher.

- :mod:`~eosvolume.solvers.compress`: compressibility iteration from an initial guess.
- :mod:`~eosvolume.solvers.virial`: closed-form low-density approximation.
- :mod:`~eosvolume.solvers.chill`: temperature continuation of a known root.
- :mod:`~eosvolume.solvers.bracket`: interpolation inside a pressure bracket.
- :mod:`~eosvolume.solvers.selection`: Gibbs comparison of candidate roots.
- :mod:`~eosvolume.solvers.dispatch`: the entry point :func:`volume`.

"""

__all__ = []

from . import bracket, chill, compress, dispatch, selection, virial
from .bracket import *
from .chill import *
from .compress import *
from .dispatch import *
from .selection import *
from .virial import *

__all__.extend(bracket.__all__)
__all__.extend(chill.__all__)
__all__.extend(compress.__all__)
__all__.extend(dispatch.__all__)
__all__.extend(selection.__all__)
__all__.extend(virial.__all__)
