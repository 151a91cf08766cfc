"""
Spectral measures of point sets.

This module provides:

- Direct Fourier transform of point sets on a centred frequency grid
- Periodograms with radial power and anisotropy reductions
- Radial power spectra derived from radial distribution functions
"""

from .spectrum import Spectrum, point_set_spectrum
from .periodogram import ANISOTROPY_FLOOR_DB, Periodogram, decibel
from .transform import blackman_window, j0f, rdf_to_radial_power

__all__ = [
    # Spectrum
    "Spectrum",
    "point_set_spectrum",
    # Periodogram
    "Periodogram",
    "ANISOTROPY_FLOOR_DB",
    "decibel",
    # RDF to radial power
    "j0f",
    "blackman_window",
    "rdf_to_radial_power",
]
