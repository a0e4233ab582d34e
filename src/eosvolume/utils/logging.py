"""Timing of the volume solvers.

Timing is switched on in the ``[logging]`` section of the configuration file
``eosvolume.cfg`` in the working directory. Each decorated entry point belongs to one
or more of the sections

    dispatch: The phase dispatcher and the root selection.
    solvers: The individual volume solvers (compressibility, continuation).

and ``all`` selects every section. Every timed call writes one line to
``EosVolumeTimings.log``, containing the qualified name of the function, the elapsed
time and a flag if the returned volume is NaN, i.e. if the solver failed.

Example section of eosvolume.cfg:

    [logging]
    active: True
    # optional, defaults to all
    sections: dispatch, solvers

Logging is off by default. The inner fixed-point maps are never timed, since they are
called in every iteration of every solver.

"""
from __future__ import annotations

import functools
import logging
import time
from typing import Callable, NamedTuple, Sequence

import numpy as np

import eosvolume as ev

__all__ = ["time_logger"]

TIMINGS_FILE: str = "EosVolumeTimings.log"
"""Name of the file the timings are written to, relative to the working directory."""


class _TimerSettings(NamedTuple):
    active: bool
    sections: frozenset[str]

    def logs(self, sections: Sequence[str]) -> bool:
        if not self.active:
            return False
        return "all" in self.sections or any(s in self.sections for s in sections)


def _read_settings(config: dict) -> _TimerSettings:
    section = config.get("logging", {})
    active = str(section.get("active", "false")).strip().lower() == "true"
    raw = str(section.get("sections", "all"))
    return _TimerSettings(active, frozenset(s.strip().lower() for s in raw.split(",")))


_settings = _read_settings(ev.config)

t_logger = logging.getLogger("EosVolumeTimer")
t_logger.setLevel(logging.INFO)

if _settings.active and not t_logger.hasHandlers():
    _handler = logging.FileHandler(TIMINGS_FILE)
    _handler.setLevel(logging.INFO)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    t_logger.addHandler(_handler)


def _failed(value) -> bool:
    # Solvers return the volume either bare or in a labelled result.
    value = getattr(value, "volume", value)
    try:
        return bool(np.any(np.isnan(ev.ad.primal_value(value))))
    except TypeError:
        return False


def time_logger(sections: Sequence[str]) -> Callable:
    """Decorator timing a solver entry point, if logging of any of ``sections`` is
    activated in the configuration.

    Parameters:
        sections: Sections the decorated function belongs to.

    """

    def decorator(func):
        if not _settings.logs(sections):
            return func

        @functools.wraps(func)
        def timed(*args, **kwargs):
            start = time.perf_counter()
            value = func(*args, **kwargs)
            elapsed = time.perf_counter() - start
            status = " (NaN)" if _failed(value) else ""
            name = f"{func.__module__}.{func.__qualname__}"
            t_logger.info(f"{name}: {elapsed:.8f} s{status}")
            return value

        return timed

    return decorator
