"""
Nearest-neighbour statistics of point sets on the unit torus.

Two interchangeable backends compute the global minimum distance, the
average nearest-neighbour distance and the orientational order of a point
set:

- ``"brute"`` compares all pairs; the orientational order is not available
  and reported as 0.
- ``"delaunay"`` triangulates the point set together with its periodic
  replicas near the domain boundary (``scipy.spatial.Delaunay``). Nearest
  neighbours are Delaunay neighbours, and the ring of neighbours around each
  vertex yields the six-fold orientational order parameter.

Both return ``(mindist, avgmindist, orientorder)``.

Author: psa developers
License: BSD-3-Clause
"""

import math
from collections.abc import Callable

import numpy as np
from scipy.spatial import Delaunay

from ..points import pairwise_toroidal_distances

_BLOCK_ELEMENTS = 1 << 20


def brute_force_statistics(points: np.ndarray) -> tuple[float, float, float]:
    """
    Nearest-neighbour distances by comparing all pairs, O(N²).

    Parameters
    ----------
    points : ndarray
        Point set of shape (N, 2), N >= 2.

    Returns
    -------
    mindist, avgmindist, orientorder : float
        ``orientorder`` is always 0.
    """
    npoints = len(points)
    nearest = np.empty(npoints)
    block = max(1, _BLOCK_ELEMENTS // npoints)
    for start in range(0, npoints, block):
        stop = min(start + block, npoints)
        d = pairwise_toroidal_distances(points[start:stop], points)
        rows = np.arange(stop - start)
        d[rows, rows + start] = np.inf
        nearest[start:stop] = d.min(axis=1)

    return float(nearest.min()), float(nearest.mean()), 0.0


def _replicate(points: np.ndarray) -> np.ndarray:
    """Append the periodic replicas of ``points`` that fall near the unit square."""
    e = 4.0 / math.sqrt(len(points))
    lo, hi = max(-e, -1.0), min(1.0 + e, 2.0)

    copies = [points]
    for u in (-1, 0, 1):
        for v in (-1, 0, 1):
            if u == 0 and v == 0:
                continue
            shifted = points + (u, v)
            inside = np.all((shifted >= lo) & (shifted <= hi), axis=1)
            copies.append(shifted[inside])
    return np.vstack(copies)


def delaunay_statistics(points: np.ndarray) -> tuple[float, float, float]:
    """
    Nearest-neighbour distances and orientational order from a periodic
    Delaunay triangulation.

    For every vertex the Delaunay neighbours are ordered counter-clockwise
    ``v_1 … v_k``, and the local order is ``|Σ_k exp(6i·arg(v_k - v_{k+1}))|``.
    The orientational order is the sum of the local orders divided by the
    total number of neighbours; it is 1 for a hexagonal lattice.

    Parameters
    ----------
    points : ndarray
        Point set of shape (N, 2), N >= 2, in [0, 1).

    Returns
    -------
    mindist, avgmindist, orientorder : float
    """
    npoints = len(points)
    vertices = _replicate(points)
    tri = Delaunay(vertices)
    indptr, indices = tri.vertex_neighbor_vertices

    mindist2 = np.inf
    avgmindist = 0.0
    acc = 0.0
    nacc = 0
    for i in range(npoints):
        neighbours = indices[indptr[i] : indptr[i + 1]]
        if neighbours.size == 0:
            continue

        offsets = vertices[neighbours] - vertices[i]
        order = np.argsort(np.arctan2(offsets[:, 1], offsets[:, 0]))
        ring = vertices[neighbours[order]]

        local2 = float(np.min(np.sum(offsets**2, axis=1)))
        mindist2 = min(mindist2, local2)
        avgmindist += math.sqrt(local2)

        edges = ring - np.roll(ring, -1, axis=0)
        angles = np.arctan2(edges[:, 1], edges[:, 0])
        acc += abs(np.sum(np.exp(6j * angles)))
        nacc += neighbours.size

    orientorder = acc / nacc if nacc else 0.0
    return math.sqrt(mindist2), avgmindist / npoints, float(orientorder)


BACKENDS: dict[str, Callable[[np.ndarray], tuple[float, float, float]]] = {
    "brute": brute_force_statistics,
    "delaunay": delaunay_statistics,
}
