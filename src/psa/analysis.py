"""
Analysis of single point sets and averages over many point sets.

The drivers tie the measures together: a periodogram from the direct
Fourier transform and its radial reductions, the RDF, and the spatial and
spectral statistics. Curve ranges follow from :class:`~psa.config.AnalysisConfig`
and the number of points:

- frequencies are covered up to ``frange`` times the Nyquist frequency
  ``sqrt(N)/2`` of a hexagonal lattice with N points;
- distances are covered up to ``rrange`` times the nearest-neighbour
  distance ``sqrt(2 / (sqrt(3) N))`` of that lattice.

Author: psa developers
License: BSD-3-Clause
"""

import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import numpy as np

from .config import AnalysisConfig
from .curve import Curve
from .points import as_point_array
from .spatial.rdf import compute_rdf
from .spectral.periodogram import Periodogram
from .spectral.spectrum import point_set_spectrum
from .statistics import Statistics, spatial_statistics, spectral_statistics

logger = logging.getLogger(__name__)

MEASURES = ("spatial", "spectral", "rp", "rdf", "ani", "pspectrum")


@dataclass
class Result:
    """
    Measures of a point set, or averages over several point sets.

    Attributes
    ----------
    points : ndarray
        The analysed point set (the first one in averaged mode).
    npoints : int
        Number of points per set.
    nsets : int
        Number of point sets.
    stats : Statistics
        Scalar statistics.
    rp, rdf, ani : Curve or None
        Radial power spectrum, radial distribution function and anisotropy.
    spectrum : ndarray or None
        Periodogram raster, zero frequency at the centre.
    """

    points: np.ndarray
    npoints: int
    nsets: int = 1
    stats: Statistics = field(default_factory=Statistics)
    rp: Curve | None = None
    rdf: Curve | None = None
    ani: Curve | None = None
    spectrum: np.ndarray | None = None


def _select(measures: Iterable[str] | None) -> set[str]:
    if measures is None:
        return set(MEASURES)
    selected = set(measures)
    unknown = selected - set(MEASURES)
    if unknown:
        raise ValueError(f"Unknown measures {sorted(unknown)}, expected a subset of {MEASURES}")
    return selected


def _grid(npoints: int, config: AnalysisConfig) -> tuple[int, float]:
    """Half side of the frequency grid and the maximum RDF distance."""
    fnorm = 2.0 / math.sqrt(npoints)
    rnorm = 1.0 / math.sqrt(2.0 / (math.sqrt(3.0) * npoints))
    return int(config.frange / fnorm), config.rrange / rnorm


def _spectral_curves(result: Result, p: Periodogram, ftsize: int, config, selected) -> None:
    nbins = int(ftsize * config.fbinsize)
    if "rp" in selected:
        result.rp = Curve(nbins, 0, ftsize)
        p.radial_power(result.rp)
    if "ani" in selected:
        result.ani = Curve(nbins, 0, ftsize)
        p.anisotropy(result.ani)
    if "pspectrum" in selected:
        result.spectrum = p.to_image()


def _print_parameters(title, npoints, nsets, ftsize, maxdist, config, selected):
    print(f"{title}:")
    print(f"    npoints = {npoints}")
    print(f"    nsets = {nsets}")
    print(f"    grid size = {2 * ftsize}")
    print(f"    max distance = {maxdist:.4g}")
    print(f"    spatial backend = {config.spatial_backend}")
    print(f"    measures = {', '.join(m for m in MEASURES if m in selected)}")


def analyze(
    points,
    config: AnalysisConfig | None = None,
    measures: Iterable[str] | None = None,
    verbose: bool = False,
) -> Result:
    """
    Analyse a single point set.

    Parameters
    ----------
    points : array_like
        Point set of shape (N, 2) with coordinates in [0, 1).
    config : AnalysisConfig, optional
        Ranges and bin sizes. Default: ``AnalysisConfig()``.
    measures : iterable of str, optional
        Subset of :data:`MEASURES` to compute. Default: all.
    verbose : bool, optional
        If True, print the analysis parameters. Default is False.

    Returns
    -------
    Result

    Examples
    --------
    >>> import numpy as np
    >>> from psa import analyze
    >>> pts = np.random.default_rng(0).random((256, 2))
    >>> r = analyze(pts, measures=["rdf", "spatial"])
    >>> r.stats.mindist > 0
    True
    """
    config = config or AnalysisConfig()
    selected = _select(measures)
    pts = as_point_array(points)
    npoints = len(pts)
    result = Result(points=pts, npoints=npoints)
    if npoints == 0:
        logger.info("Empty point set, nothing to analyse")
        return result

    ftsize, maxdist = _grid(npoints, config)
    logger.info("Analysing %d points", npoints)
    if verbose:
        _print_parameters("Point set analysis", npoints, 1, ftsize, maxdist, config, selected)

    if "spatial" in selected:
        spatial = spatial_statistics(pts, npoints, backend=config.spatial_backend)
        result.stats.mindist = spatial.mindist
        result.stats.avgmindist = spatial.avgmindist
        result.stats.orientorder = spatial.orientorder
    if "spectral" in selected:
        spectral = spectral_statistics(pts, npoints)
        result.stats.effnyquist = spectral.effnyquist
        result.stats.oscillations = spectral.oscillations

    if ftsize > 0 and selected & {"rp", "ani", "pspectrum"}:
        s = point_set_spectrum(pts, 2 * ftsize, npoints, num_threads=config.num_threads)
        p = Periodogram.from_spectrum(s)
        p.divide(npoints)
        _spectral_curves(result, p, ftsize, config, selected)

    if "rdf" in selected:
        result.rdf = Curve(int(config.rbinsize * npoints), 0, maxdist)
        compute_rdf(pts, result.rdf)

    return result


def analyze_average(
    sets: Sequence,
    config: AnalysisConfig | None = None,
    measures: Iterable[str] | None = None,
    verbose: bool = False,
) -> Result:
    """
    Average the measures over several point sets.

    All sets are truncated to the size of the smallest one. Periodograms,
    RDFs and spatial statistics are accumulated set by set and then divided
    by the number of sets; the spectral statistics are computed from the
    averaged RDF-derived power spectrum of all sets.

    Parameters
    ----------
    sets : sequence of array_like
        Point sets of shape (N_i, 2) with coordinates in [0, 1).
    config : AnalysisConfig, optional
        Ranges and bin sizes. Default: ``AnalysisConfig()``.
    measures : iterable of str, optional
        Subset of :data:`MEASURES` to compute. Default: all.
    verbose : bool, optional
        If True, print the analysis parameters. Default is False.

    Returns
    -------
    Result
        ``points`` holds the first set.
    """
    config = config or AnalysisConfig()
    selected = _select(measures)
    arrays = [as_point_array(s) for s in sets]
    if not arrays:
        raise ValueError("Need at least one point set to average")

    nsets = len(arrays)
    npoints = min(len(a) for a in arrays)
    if any(len(a) != npoints for a in arrays):
        logger.info("Analyzing only the first %d points from each set", npoints)
    arrays = [a[:npoints] for a in arrays]

    result = Result(points=arrays[0], npoints=npoints, nsets=nsets)
    if npoints == 0:
        logger.info("Empty point sets, nothing to analyse")
        return result

    ftsize, maxdist = _grid(npoints, config)
    logger.info("Averaging %d sets of %d points", nsets, npoints)
    if verbose:
        _print_parameters("Averaged point set analysis", npoints, nsets, ftsize, maxdist,
                          config, selected)

    ft = ftsize > 0 and bool(selected & {"rp", "ani", "pspectrum"})
    p = Periodogram(2 * ftsize) if ft else None
    if "rdf" in selected:
        result.rdf = Curve(int(config.rbinsize * npoints), 0, maxdist)
        rdf = result.rdf.copy()

    for i, pts in enumerate(arrays):
        if ft:
            s = point_set_spectrum(pts, 2 * ftsize, num_threads=config.num_threads)
            p.accumulate(Periodogram.from_spectrum(s))
        if "spatial" in selected:
            result.stats.accumulate(
                spatial_statistics(pts, backend=config.spatial_backend)
            )
        if "rdf" in selected:
            compute_rdf(pts, rdf)
            result.rdf.accumulate(rdf)
        logger.debug("Set %d/%d done", i + 1, nsets)

    result.stats.divide(nsets)
    if "rdf" in selected:
        result.rdf.divide(nsets)

    if "spectral" in selected:
        spectral = spectral_statistics(arrays, npoints)
        result.stats.effnyquist = spectral.effnyquist
        result.stats.oscillations = spectral.oscillations

    if ft:
        p.divide(npoints * nsets)
        _spectral_curves(result, p, ftsize, config, selected)

    return result
