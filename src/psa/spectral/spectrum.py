"""
Direct Fourier transform of point sets.

The spectrum of a point set ``{p_i}`` is evaluated at integer frequencies on
a square grid centred on zero frequency,

    F(wx, wy) = Σ_i exp(-2πi (wx·px_i + wy·py_i)),

by direct summation rather than an FFT: the points are not on a grid, and the
grid side is chosen from the frequency range of interest, not from the number
of points. The O(size² · N) kernel is compiled with Numba and runs in
parallel over grid columns.

Author: psa developers
License: BSD-3-Clause
"""

import math

import numba
import numpy as np
from numba import jit, prange

from ..points import as_point_array


@jit(nopython=True, parallel=True, cache=True)
def _dft_kernel(px, py, size, re, im):
    """Accumulate the point set DFT into ``re[y, x]`` and ``im[y, x]``."""
    size2 = size // 2
    npoints = px.shape[0]
    for x in prange(size):
        wx = float(x) - size2
        for y in range(size):
            wy = float(y) - size2
            fr = 0.0
            fi = 0.0
            for i in range(npoints):
                arg = -2.0 * math.pi * (wx * px[i] + wy * py[i])
                fr += math.cos(arg)
                fi += math.sin(arg)
            re[y, x] = fr
            im[y, x] = fi


class Spectrum:
    """
    Complex DFT coefficients of a point set on a ``size × size`` grid.

    Cell ``ft[y, x]`` holds the coefficient at frequency
    ``(x - size/2, y - size/2)``; the zero frequency sits at
    ``ft[size/2, size/2]``.

    Parameters
    ----------
    size : int
        Side of the frequency grid (positive and even).
    """

    def __init__(self, size: int):
        size = int(size)
        if size <= 0 or size % 2:
            raise ValueError(f"Spectrum size must be a positive even integer, got {size}")
        self.size = size
        self.ft = np.zeros((size, size), dtype=np.complex128)

    @property
    def real(self) -> np.ndarray:
        return self.ft.real

    @property
    def imag(self) -> np.ndarray:
        return self.ft.imag

    def frequencies(self) -> tuple[np.ndarray, np.ndarray]:
        """Integer frequency grids ``(wx, wy)`` matching ``ft``."""
        w = np.arange(self.size) - self.size // 2
        wx, wy = np.meshgrid(w, w)
        return wx, wy


def point_set_spectrum(
    points,
    size: int,
    npoints: int | None = None,
    num_threads: int | None = None,
) -> Spectrum:
    """
    Compute the Fourier spectrum of a point set by direct summation.

    Parameters
    ----------
    points : array_like
        Point set of shape (N, 2) with coordinates in [0, 1).
    size : int
        Side of the frequency grid (positive and even). Frequencies range
        over ``[-size/2, size/2)`` along each axis.
    npoints : int, optional
        Use only the first ``npoints`` points. Default: all points.
    num_threads : int, optional
        Number of worker threads for the parallel kernel. Default: Numba's
        current setting. The previous setting is restored on return.

    Returns
    -------
    spectrum : Spectrum
        The complex spectrum. Its squared magnitude is the periodogram.

    Notes
    -----
    Summation order is unspecified, so results from runs with different
    thread counts agree to floating point accumulation tolerance, not
    bitwise.

    Examples
    --------
    >>> import numpy as np
    >>> s = point_set_spectrum(np.array([[0.0, 0.0]]), size=8)
    >>> np.allclose(np.abs(s.ft), 1.0)
    True
    """
    pts = as_point_array(points, npoints)
    spectrum = Spectrum(size)

    re = np.zeros((spectrum.size, spectrum.size), dtype=np.float64)
    im = np.zeros((spectrum.size, spectrum.size), dtype=np.float64)
    px = np.ascontiguousarray(pts[:, 0])
    py = np.ascontiguousarray(pts[:, 1])

    previous = numba.get_num_threads()
    if num_threads is not None:
        numba.set_num_threads(num_threads)
    try:
        _dft_kernel(px, py, spectrum.size, re, im)
    finally:
        numba.set_num_threads(previous)

    spectrum.ft = re + 1j * im
    return spectrum
