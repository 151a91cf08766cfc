"""
Points on the unit torus.

A point set is held as an ``(N, 2)`` float array with coordinates in
``[0, 1)``. The :class:`Point` value type and the helpers below describe the
periodic (wrap-around) geometry shared by the spatial and spectral measures.

Author: psa developers
License: BSD-3-Clause
"""

from typing import NamedTuple

import numpy as np


class Point(NamedTuple):
    """Immutable 2-D coordinate on the unit torus."""

    x: float
    y: float


def is_in_unit_torus(p: Point) -> bool:
    """Return True if ``p`` lies in ``[0, 1)²``."""
    return 0.0 <= p[0] < 1.0 and 0.0 <= p[1] < 1.0


def wrap_unit_torus(p: Point) -> Point:
    """
    Map a point lying at most one period outside ``[0, 1)²`` back inside.

    Parameters
    ----------
    p : Point
        Point with coordinates in ``[-1, 2)``.

    Returns
    -------
    Point
        The periodic image of ``p`` inside the unit square.
    """
    x, y = p
    x = x + 1.0 if x < 0.0 else (x - 1.0 if x >= 1.0 else x)
    y = y + 1.0 if y < 0.0 else (y - 1.0 if y >= 1.0 else y)
    return Point(x, y)


def squared_toroidal_distance(p: Point, q: Point) -> float:
    """Squared minimum-image distance between two points on the unit torus."""
    dx = abs(p[0] - q[0])
    dy = abs(p[1] - q[1])
    dx = 1.0 - dx if dx > 0.5 else dx
    dy = 1.0 - dy if dy > 0.5 else dy
    return dx * dx + dy * dy


def toroidal_distance(p: Point, q: Point) -> float:
    """
    Minimum-image distance between two points on the unit torus.

    The distance is ``sqrt(Σ_axis min(|Δ|, 1 - |Δ|)²)``. Both points must lie
    in ``[0, 1)²``; callers normalise other input with :func:`wrap_unit_torus`.

    Examples
    --------
    >>> round(toroidal_distance(Point(0.05, 0.5), Point(0.95, 0.5)), 6)
    0.1
    """
    return float(np.sqrt(squared_toroidal_distance(p, q)))


def pairwise_toroidal_distances(rows: np.ndarray, points: np.ndarray) -> np.ndarray:
    """
    Toroidal distances between every point in ``rows`` and every point in ``points``.

    Parameters
    ----------
    rows : ndarray
        Array of shape (M, 2).
    points : ndarray
        Array of shape (N, 2).

    Returns
    -------
    d : ndarray
        Array of shape (M, N).
    """
    delta = np.abs(rows[:, None, :] - points[None, :, :])
    delta = np.minimum(delta, 1.0 - delta)
    return np.sqrt(np.sum(delta**2, axis=-1))


def as_point_array(points, npoints: int | None = None) -> np.ndarray:
    """
    Coerce a point set to a float64 array of shape (N, 2).

    Parameters
    ----------
    points : array_like
        Sequence of ``(x, y)`` pairs, :class:`Point` objects or an array.
    npoints : int, optional
        If given, only the first ``npoints`` points are kept.

    Returns
    -------
    pts : ndarray
        Array of shape (N, 2).

    Raises
    ------
    ValueError
        If the input cannot be read as 2-D points, or ``npoints`` exceeds
        the number of available points.
    """
    pts = np.asarray(points, dtype=np.float64)
    if pts.size == 0:
        pts = pts.reshape(0, 2)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"Expected an array of 2-D points, got shape {pts.shape}")

    if npoints is not None:
        if npoints < 0 or npoints > len(pts):
            raise ValueError(
                f"npoints={npoints} is out of range for a set of {len(pts)} points"
            )
        pts = pts[:npoints]

    return pts
