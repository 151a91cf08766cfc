"""
Binned one-dimensional functions.

A :class:`Curve` stores ``n`` samples of a function over the half-open
interval ``[x0, x1)`` with uniform bin width ``dx = (x1 - x0) / n``. Radial
power spectra, anisotropy and radial distribution functions are all Curves,
so that results of many point sets can be accumulated bin by bin and then
averaged.

Author: psa developers
License: BSD-3-Clause
"""

import math
from pathlib import Path

import numpy as np

from .errors import CurveFormatError

# Bin positions within this fraction of a bin below an edge are assigned to
# the upper bin.
_EDGE_TOLERANCE = 1e-9


class Curve:
    """
    Uniformly binned real function over ``[x0, x1)``.

    Parameters
    ----------
    size : int
        Number of bins.
    x0, x1 : float
        Interval covered by the curve.

    Attributes
    ----------
    y : ndarray
        Bin values, zero after construction.
    x0, x1, dx : float
        Interval bounds and bin width.

    Examples
    --------
    >>> c = Curve(10, 0.0, 1.0)
    >>> c.to_index(0.35), c.to_x(3)
    (3, 0.30000000000000004)
    """

    def __init__(self, size: int, x0: float, x1: float):
        size = int(size)
        if size < 0:
            raise ValueError(f"Curve size must be non-negative, got {size}")
        self.x0 = float(x0)
        self.x1 = float(x1)
        self.dx = (self.x1 - self.x0) / size if size > 0 else 0.0
        self.y = np.zeros(size, dtype=np.float64)

    def __len__(self) -> int:
        return self.y.size

    def __getitem__(self, i):
        return self.y[i]

    def __setitem__(self, i, value):
        self.y[i] = value

    def __repr__(self) -> str:
        return f"Curve(size={self.size}, x0={self.x0!r}, x1={self.x1!r})"

    @property
    def size(self) -> int:
        return self.y.size

    @property
    def x(self) -> np.ndarray:
        """Left bin positions ``to_x(i)`` for all bins."""
        return self.x0 + np.arange(self.size) * self.dx

    def to_index(self, x):
        """Map a position (scalar or array) to its bin index, ``floor((x - x0) / dx)``."""
        t = np.floor((np.asarray(x, dtype=np.float64) - self.x0) / self.dx + _EDGE_TOLERANCE)
        if np.ndim(t) == 0:
            return int(t)
        return t.astype(np.int64)

    def to_x(self, index):
        """Map a bin index (scalar or array) to its position ``x0 + index * dx``."""
        if np.ndim(index) == 0:
            return self.x0 + index * self.dx
        return self.x0 + np.asarray(index) * self.dx

    def copy(self) -> "Curve":
        c = Curve(0, self.x0, self.x1)
        c.dx = self.dx
        c.y = self.y.copy()
        return c

    def accumulate(self, other: "Curve") -> None:
        """Add ``other`` bin by bin. Both curves must have the same number of bins."""
        if self.size != other.size:
            raise ValueError(
                f"Cannot accumulate curves of different sizes ({self.size} != {other.size})"
            )
        self.y += other.y

    def divide(self, f: float) -> None:
        """Scale all bins by ``1 / f``."""
        if f == 0:
            raise ValueError("Cannot divide a curve by zero")
        self.y *= 1.0 / f

    def set_zero(self) -> None:
        self.y[:] = 0.0

    def filter_gauss(self, sigma: float) -> None:
        """
        Smooth the curve in place with a truncated Gaussian kernel.

        Each bin becomes the weighted mean of the original values within
        ``±5 sigma`` bins. The window is clamped to the valid index range and
        the weights are renormalised, so no reflection or wrap-around takes
        place at the boundaries.

        Parameters
        ----------
        sigma : float
            Kernel standard deviation in bins. Values ``<= 0`` leave the curve
            unchanged.
        """
        if sigma <= 0:
            return

        original = self.y.copy()
        n = self.size
        for i in range(n):
            jmin = max(0, math.floor(i - 5.0 * sigma))
            jmax = min(n - 1, math.ceil(i + 5.0 * sigma))
            d = np.arange(jmin, jmax + 1) - i
            w = np.exp(-(d * d) / (2.0 * sigma * sigma))
            self.y[i] = np.sum(original[jmin : jmax + 1] * w) / np.sum(w)

    def save_txt(self, path) -> None:
        """Write the curve as a two-column ``x y`` text table."""
        with open(path, "w") as fp:
            for xi, yi in zip(self.x, self.y):
                fp.write(f"{xi:.9g} {yi:.9g}\n")

    @classmethod
    def load(cls, path) -> "Curve":
        """
        Read a two-column ``x y`` text table written by :meth:`save_txt`.

        The bin width is inferred from the first two x-values, and the bin
        boundaries are rebuilt as ``[x_first - dx/2, x_last + dx/2)``.

        Raises
        ------
        CurveFormatError
            If the file cannot be read or is malformed, holds fewer than two
            samples, or its first two x-values do not increase.
        """
        path = Path(path)
        try:
            text = path.read_text()
        except OSError as e:
            raise CurveFormatError(path, f"Could not read curve ({e.strerror})") from e

        xs, ys = [], []
        for lineno, line in enumerate(text.splitlines(), start=1):
            fields = line.split()
            if not fields:
                continue
            if len(fields) < 2:
                raise CurveFormatError(path, f"Expected two columns on line {lineno}")
            try:
                xs.append(float(fields[0]))
                ys.append(float(fields[1]))
            except ValueError as e:
                raise CurveFormatError(path, f"Invalid number on line {lineno}") from e

        if len(xs) < 2:
            raise CurveFormatError(path, "Need at least two samples to load a curve")

        n = len(xs)
        dx = xs[1] - xs[0]
        if dx <= 0:
            raise CurveFormatError(path, "x values must be increasing")
        c = cls(n, xs[0] - dx / 2, xs[-1] + dx / 2)
        c.y[:] = ys
        return c


def integrate(c: Curve, a: float | None = None, b: float | None = None) -> float:
    """
    Integrate a curve over ``[a, b]``.

    Trapezoid weights at the clamped boundary bins plus the interior samples
    at alternating offsets, scaled by ``dx``. If ``a > b`` the bounds are
    swapped and the result negated. Accuracy drops when the range spans only
    a few bins.

    Parameters
    ----------
    c : Curve
        Curve to integrate.
    a, b : float, optional
        Integration bounds. Default to the full range ``[c.x0, c.x1]``.

    Returns
    -------
    float
        Approximate integral.
    """
    if c.size == 0:
        return 0.0
    if a is None:
        a = c.x0
    if b is None:
        b = c.x1

    negate = a > b
    if negate:
        a, b = b, a

    last = c.size - 1
    i0 = min(max(c.to_index(a), 0), last)
    i1 = min(max(c.to_index(b + c.dx), 0), last)

    y = c.y
    T = 0.5 * (y[i0] + y[i1])
    # Even offsets from i0 go to T, the odd ones in between to M.
    T += np.sum(y[i0 + 2 : i1 : 2])
    M = np.sum(y[i0 + 1 : i1 - 1 : 2])
    area = float(c.dx * (T + M))
    return -area if negate else area


def ring_area(r0: float, r1: float) -> float:
    """Area of the annulus between radii ``r0`` and ``r1``."""
    return math.pi * (r1 * r1 - r0 * r0)
