"""
Spatial measures of point sets on the unit torus.

This module provides:

- The radial distribution function (pair correlation)
- Nearest-neighbour statistics with brute-force and Delaunay backends
"""

from .rdf import compute_rdf
from .distances import BACKENDS, brute_force_statistics, delaunay_statistics

__all__ = [
    "compute_rdf",
    "BACKENDS",
    "brute_force_statistics",
    "delaunay_statistics",
]
