"""
Analysis configuration.

Frequency and distance ranges are given relative to a hexagonal lattice with
the same number of points, so one configuration serves point sets of any
size. A configuration file holds one ``key value`` pair per line; ``#``
starts a comment and unknown keys are ignored::

    # psa.cfg
    frange    10
    fbinsize  0.5
    rrange    8
    rbinsize  0.125
    spatial_backend delaunay

Author: psa developers
License: BSD-3-Clause
"""

import logging
from dataclasses import dataclass, fields
from pathlib import Path

import numba

from .errors import ConfigError
from .spatial.distances import BACKENDS

logger = logging.getLogger(__name__)

# Lower bounds applied to values read from configuration files.
_MINIMUMS = {
    "frange": 1.0,
    "fbinsize": 0.1,
    "rrange": 1.0,
    "rbinsize": 0.1,
}


@dataclass
class AnalysisConfig:
    """
    Parameters of the analysis drivers.

    Attributes
    ----------
    frange : float
        Frequency range, in multiples of the Nyquist frequency ``sqrt(N)/2``
        of a hexagonal lattice with N points.
    fbinsize : float
        Bins per unit frequency for the radial power and anisotropy curves.
    rrange : float
        Distance range of the RDF, in multiples of the nearest-neighbour
        distance of a hexagonal lattice with N points.
    rbinsize : float
        RDF bins per point, i.e. ``nbins = rbinsize * N``.
    spatial_backend : str
        Backend of the spatial statistics, ``"brute"`` or ``"delaunay"``.
    num_threads : int or None
        Worker threads for the Fourier transform. None keeps Numba's default.
        At most ``numba.config.NUMBA_NUM_THREADS``.
    """

    frange: float = 10.0
    fbinsize: float = 0.5
    rrange: float = 8.0
    rbinsize: float = 0.125
    spatial_backend: str = "brute"
    num_threads: int | None = None

    def __post_init__(self):
        for key in ("frange", "fbinsize", "rrange", "rbinsize"):
            if getattr(self, key) <= 0:
                raise ValueError(f"{key} must be > 0, got {getattr(self, key)}")
        if self.spatial_backend not in BACKENDS:
            raise ValueError(
                f"Unknown spatial backend '{self.spatial_backend}', "
                f"expected one of {sorted(BACKENDS)}"
            )
        if self.num_threads is not None:
            limit = numba.config.NUMBA_NUM_THREADS
            if not 1 <= self.num_threads <= limit:
                raise ValueError(
                    f"num_threads must be between 1 and {limit}, got {self.num_threads}"
                )


def load_config(path) -> AnalysisConfig:
    """
    Read an :class:`AnalysisConfig` from a ``key value`` file.

    Range and bin size values are raised to their minimums (1 for the
    ranges, 0.1 for the bin sizes).

    Parameters
    ----------
    path : str or Path
        Configuration file. If it does not exist, the defaults are returned.

    Returns
    -------
    AnalysisConfig

    Raises
    ------
    ConfigError
        If a value cannot be parsed or is rejected.
    """
    path = Path(path)
    if not path.is_file():
        logger.warning("Config file '%s' not found. Using defaults.", path)
        return AnalysisConfig()

    known = {f.name for f in fields(AnalysisConfig)}
    values = {}
    for line in path.read_text().splitlines():
        tokens = line.split("#", 1)[0].split()
        if len(tokens) < 2 or tokens[0] not in known:
            continue
        key, raw = tokens[0], tokens[1]
        try:
            if key == "spatial_backend":
                values[key] = raw
            elif key == "num_threads":
                values[key] = int(raw)
            else:
                values[key] = max(float(raw), _MINIMUMS[key])
        except ValueError as e:
            raise ConfigError(path, f"Invalid value '{raw}' for '{key}'") from e

    try:
        return AnalysisConfig(**values)
    except ValueError as e:
        raise ConfigError(path, str(e)) from e
