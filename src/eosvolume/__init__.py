"""   EosVolume.

Root directory for the EosVolume package. Contains the following sub-packages:

ad: Forward-mode derivative-tracking values and the numeric functions dispatching
    on them.

numerics: Generic iteration drivers.

models: Model capability interface and reference equations of state.

solvers: Volume root solvers, root selection and the phase dispatcher.

utils: Logging, error classes and composition helpers.


isort:skip_file

"""

import os
from pathlib import Path
import configparser


__version__ = "0.3.0"

# Try to read the config file from the directory where python process was launched
try:
    cwd = Path(os.getcwd())
    pth = cwd / Path("eosvolume.cfg")
    cfg = configparser.ConfigParser()
    cfg.read(pth)
    config = {section: dict(cfg[section]) for section in cfg.sections()}
except (OSError, configparser.Error):
    # the assumption is that no configurations are given
    config = {}

# ------------------------------------
# Simplified namespaces. Classes and functions a user is exposed to get a shortcut
# here.

from eosvolume.utils.logging import time_logger
from eosvolume.utils.common import (
    EoSModellingError,
    as_composition,
    check_arraysize,
    safe_sum,
)
from eosvolume._core import *

from eosvolume import ad
from eosvolume.ad import AdArray, initAdArrays

from eosvolume.numerics.fixpoint import fixpoint

from eosvolume import models
from eosvolume.models.base import EoSModel
from eosvolume.models.ideal import IdealGas
from eosvolume.models.peng_robinson import PengRobinson
from eosvolume.models.composite import CompositeModel

from eosvolume import solvers
from eosvolume.solvers.virial import volume_virial, pressure_virial
from eosvolume.solvers.compress import volume_compress
from eosvolume.solvers.chill import volume_chill
from eosvolume.solvers.bracket import volume_bracket_refine
from eosvolume.solvers.selection import VolumeLabel, volume_label, label_and_volumes
from eosvolume.solvers.dispatch import volume, volume_impl, volume_ad
