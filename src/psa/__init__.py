"""
psa - Point Set Analysis.

A Python package for evaluating the spatial and spectral quality of 2-D
point distributions on the unit torus, such as sampling patterns for
rendering and quasi-Monte Carlo integration.

Features
--------
- Direct (non-FFT) Fourier transform and periodogram of point sets
- Radially averaged power spectrum and anisotropy
- Radial distribution function (RDF)
- Radial power spectrum from the RDF via a windowed Hankel transform
- Effective Nyquist frequency and oscillations metric
- Nearest-neighbour distances and orientational order
- Averaging of all measures over many point sets

Quick Start
-----------
>>> import numpy as np
>>> from psa import analyze
>>> rng = np.random.default_rng(42)
>>> result = analyze(rng.random((1024, 2)))
>>> result.stats.effnyquist

References
----------
Schlömer, T. and Deussen, O., 2011. Accurate spectral analysis of
two-dimensional point sets. Journal of Graphics, GPU, and Game Tools, 15(3),
pp.152-160. DOI: 10.1080/2151237X.2011.609773

License
-------
BSD-3-Clause
"""

__version__ = "0.1.0"

# Data model
from .points import (
    Point,
    as_point_array,
    is_in_unit_torus,
    squared_toroidal_distance,
    toroidal_distance,
    wrap_unit_torus,
)
from .curve import Curve, integrate, ring_area
from .errors import ConfigError, CurveFormatError, PSAIOError

# Spectral measures
from .spectral import (
    ANISOTROPY_FLOOR_DB,
    Periodogram,
    Spectrum,
    blackman_window,
    j0f,
    point_set_spectrum,
    rdf_to_radial_power,
)

# Spatial measures
from .spatial import compute_rdf

# Statistics
from .statistics import (
    Statistics,
    effective_nyquist,
    oscillations_metric,
    spatial_statistics,
    spectral_statistics,
)

# Drivers
from .config import AnalysisConfig, load_config
from .analysis import MEASURES, Result, analyze, analyze_average

__all__ = [
    # Version
    "__version__",
    # Data model
    "Point",
    "as_point_array",
    "is_in_unit_torus",
    "squared_toroidal_distance",
    "toroidal_distance",
    "wrap_unit_torus",
    "Curve",
    "integrate",
    "ring_area",
    # Errors
    "PSAIOError",
    "CurveFormatError",
    "ConfigError",
    # Spectral
    "Spectrum",
    "point_set_spectrum",
    "Periodogram",
    "ANISOTROPY_FLOOR_DB",
    "j0f",
    "blackman_window",
    "rdf_to_radial_power",
    # Spatial
    "compute_rdf",
    # Statistics
    "Statistics",
    "effective_nyquist",
    "oscillations_metric",
    "spatial_statistics",
    "spectral_statistics",
    # Drivers
    "AnalysisConfig",
    "load_config",
    "MEASURES",
    "Result",
    "analyze",
    "analyze_average",
]
