"""
Scalar quality measures of point sets.

Spatial statistics describe nearest-neighbour distances (and, with the
Delaunay backend, the orientational order). Spectral statistics are derived
from a radial power spectrum:

- the effective Nyquist frequency, below which the spectrum is suppressed,
- the oscillations metric, which measures ringing of the spectrum around
  the white noise level above the first peak.

The thresholds of both metrics are empirically tuned and follow the
published reference values.

References
----------
Schlömer, T. and Deussen, O., 2011. Accurate spectral analysis of
two-dimensional point sets. Journal of Graphics, GPU, and Game Tools, 15(3),
pp.152-160.

Heck, D., Schlömer, T. and Deussen, O., 2013. Blue noise sampling with
controlled aliasing. ACM Transactions on Graphics, 32(3).

Author: psa developers
License: BSD-3-Clause
"""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, fields

import numpy as np

from .curve import Curve, integrate, ring_area
from .points import as_point_array
from .spatial.distances import BACKENDS
from .spatial.rdf import compute_rdf
from .spectral.transform import rdf_to_radial_power

logger = logging.getLogger(__name__)


@dataclass
class Statistics:
    """
    Scalar measures of one point set, or their average over several sets.

    Attributes
    ----------
    mindist : float
        Global minimum toroidal distance.
    avgmindist : float
        Average distance of each point to its nearest neighbour.
    orientorder : float
        Six-fold orientational order parameter (0 without the Delaunay backend).
    effnyquist : float
        Effective Nyquist frequency.
    oscillations : float
        Oscillations metric.
    """

    mindist: float = 0.0
    avgmindist: float = 0.0
    orientorder: float = 0.0
    effnyquist: float = 0.0
    oscillations: float = 0.0

    def accumulate(self, other: "Statistics") -> None:
        """Add the fields of ``other``."""
        for f in fields(self):
            setattr(self, f.name, getattr(self, f.name) + getattr(other, f.name))

    def divide(self, f: float) -> None:
        """Scale all fields by ``1 / f``."""
        if f == 0:
            raise ValueError("Cannot divide statistics by zero")
        inv = 1.0 / f
        for fld in fields(self):
            setattr(self, fld.name, getattr(self, fld.name) * inv)


def effective_nyquist(rp: Curve, npoints: int) -> float:
    """
    Effective Nyquist frequency of a radial power spectrum.

    The cumulative power per unit frequency area,
    ``C(ν_i) = Σ_{j<=i} P(ν_j) · 2ν_j dν / ν_i²``, is searched upwards from
    ``sqrt(N)/2`` for a frequency where it exceeds 0.5. From there the
    search walks back to the last frequency where it was still below 0.1;
    half that frequency is returned.

    Parameters
    ----------
    rp : Curve
        Radial power spectrum over frequency.
    npoints : int
        Number of points.

    Returns
    -------
    float
        Effective Nyquist frequency, or 0 if no such crossing exists.
    """
    if rp.size < 2:
        return 0.0

    x = rp.x
    cumpower = np.cumsum(rp.y * rp.dx * 2.0 * x)
    cumpower[1:] /= x[1:] ** 2

    low = np.nonzero(cumpower[1:] < 0.1)[0] + 1
    if low.size == 0:
        return 0.0

    i0 = max(rp.to_index(math.sqrt(npoints) / 2), 0)
    high = np.nonzero(cumpower[i0:] > 0.5)[0] + i0
    high = high[high >= low[0]]
    if high.size == 0:
        return 0.0

    j = low[np.searchsorted(low, high[0], side="right") - 1]
    return float(rp.to_x(int(j)) / 2)


def oscillations_metric(rp: Curve, npoints: int) -> float:
    """
    Oscillations metric of a radial power spectrum.

    ``ν_osc`` is the lowest frequency at which the running maximum of the
    power reaches 0.98. The metric is

        10 · sqrt(2π ∫ (P(ν) - 1)² ν dν / A),

    integrated from ``ν_osc`` over ten times ``sqrt(N)/2`` (or up to the end of
    the curve), with ``A`` the area of that frequency ring.

    Parameters
    ----------
    rp : Curve
        Radial power spectrum over frequency.
    npoints : int
        Number of points.

    Returns
    -------
    float
        Oscillations metric, or 0 for curves too short to measure
        or without power.
    """
    if rp.size == 0:
        return 0.0

    nuosci = 0.0
    maxp = 0.0
    for i in range(rp.size):
        if maxp >= 0.98:
            break
        if rp[i] > maxp:
            maxp = rp[i]
            nuosci = rp.to_x(i)
    if maxp <= 0:
        return 0.0

    npeaks = 10.0
    maxfreq = math.sqrt(npoints) / 2
    x0 = nuosci
    x1 = min(x0 + npeaks * maxfreq, rp.x1)
    area = ring_area(x0, x1)
    if area <= 0:
        return 0.0

    nu = rp.x
    osci = rp.copy()
    osci.y[:] = np.where(nu < x0, 0.0, (rp.y - 1.0) ** 2 * nu)

    value = 2.0 * math.pi * integrate(osci, x0, x1) / area
    return 10.0 * math.sqrt(max(value, 0.0))


def spatial_statistics(points, npoints: int | None = None, backend: str = "brute") -> Statistics:
    """
    Nearest-neighbour statistics of a point set.

    Parameters
    ----------
    points : array_like
        Point set of shape (N, 2) with coordinates in [0, 1).
    npoints : int, optional
        Use only the first ``npoints`` points.
    backend : {"brute", "delaunay"}, optional
        ``"brute"`` compares all pairs and leaves ``orientorder`` at 0;
        ``"delaunay"`` uses a periodic Delaunay triangulation and also
        measures the orientational order. Default is ``"brute"``.

    Returns
    -------
    Statistics
        With ``mindist``, ``avgmindist`` and ``orientorder`` set. All zero
        for sets with fewer than two points.
    """
    try:
        compute = BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f"Unknown spatial backend '{backend}', expected one of {sorted(BACKENDS)}"
        ) from None

    pts = as_point_array(points, npoints)
    stats = Statistics()
    if len(pts) < 2:
        return stats

    stats.mindist, stats.avgmindist, stats.orientorder = compute(pts)
    return stats


def _averaged_radial_power(sets: Sequence[np.ndarray], npoints: int) -> Curve:
    """Radial power spectrum averaged over point sets, via their RDFs."""
    nbins = int(100 * math.sqrt(npoints))
    avgrp = Curve(nbins, 0, 0.5 * npoints)
    rdf = Curve(nbins, 0, 0.5)
    rp = Curve(nbins, 0, 0.5 * npoints)

    for i, pts in enumerate(sets):
        compute_rdf(pts, rdf)
        rdf_to_radial_power(rdf, npoints, rp)
        avgrp.accumulate(rp)
        logger.debug("Spectral statistics: set %d/%d done", i + 1, len(sets))

    avgrp.divide(len(sets))
    return avgrp


def spectral_statistics(source, npoints: int) -> Statistics:
    """
    Effective Nyquist frequency and oscillations metric.

    The full radial power spectrum is needed here, so rather than a dense
    periodogram it is derived from the RDF of each point set and averaged.

    Parameters
    ----------
    source : Curve, array_like or sequence of array_like
        A radial power spectrum, a single point set of shape (N, 2), or a
        sequence of point sets.
    npoints : int
        Number of points per set. Larger sets are truncated.

    Returns
    -------
    Statistics
        With ``effnyquist`` and ``oscillations`` set.
    """
    stats = Statistics()
    if npoints <= 0:
        return stats

    if isinstance(source, Curve):
        rp = source
    else:
        if isinstance(source, np.ndarray) and source.ndim == 2:
            sets = [source]
        else:
            sets = list(source)
            if sets and np.ndim(sets[0]) == 1:
                sets = [sets]
        if not sets:
            return stats
        rp = _averaged_radial_power([as_point_array(s, npoints) for s in sets], npoints)

    stats.effnyquist = effective_nyquist(rp, npoints)
    stats.oscillations = oscillations_metric(rp, npoints)
    return stats
