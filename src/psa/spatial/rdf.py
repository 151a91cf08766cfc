"""
Radial distribution function of point sets on the unit torus.

Author: psa developers
License: BSD-3-Clause
"""

import math

import numpy as np

from ..curve import Curve
from ..points import as_point_array, pairwise_toroidal_distances

# Upper bound on the number of distances evaluated at once.
_BLOCK_ELEMENTS = 1 << 20


def compute_rdf(points, curve: Curve) -> None:
    """
    Compute the radial distribution function of a point set into ``curve``.

    All unordered pairs are binned by their toroidal distance; pairs beyond
    the curve's range are dropped. Each bin ``k`` is normalised by the number
    of pairs expected in its ring for a uniform random process,

        N (N - 1) / 2 · π · dx² · (2k + 1),

    so the result tends to 1 at large distances and drops below 1 where
    points repel each other.

    Parameters
    ----------
    points : array_like
        Point set of shape (N, 2) with coordinates in [0, 1).
    curve : Curve
        Pre-sized output curve over distance, overwritten in place.

    Notes
    -----
    This is a brute-force O(N²) pass without spatial acceleration, evaluated
    in row blocks to bound memory. Sets with fewer than two points give an
    all-zero curve.

    Examples
    --------
    >>> import numpy as np
    >>> from psa import Curve
    >>> rdf = Curve(50, 0.0, 0.25)
    >>> compute_rdf(np.random.default_rng(0).random((500, 2)), rdf)
    """
    pts = as_point_array(points)
    npoints = len(pts)
    curve.set_zero()
    if npoints < 2 or curve.size == 0:
        return

    bins = np.zeros(curve.size, dtype=np.int64)
    block = max(1, _BLOCK_ELEMENTS // npoints)
    cols = np.arange(npoints)
    for start in range(0, npoints - 1, block):
        stop = min(start + block, npoints - 1)
        d = pairwise_toroidal_distances(pts[start:stop], pts)
        upper = cols[None, :] > np.arange(start, stop)[:, None]
        idx = curve.to_index(d[upper])
        idx = idx[(idx >= 0) & (idx < curve.size)]
        bins += np.bincount(idx, minlength=curve.size)

    scale = npoints * (npoints - 1) / 2 * math.pi * curve.dx * curve.dx
    ring = 2 * np.arange(curve.size) + 1
    curve.y[:] = bins / (scale * ring)
