"""
Periodograms and their radial reductions.

The periodogram is the squared magnitude of a point set spectrum, an
estimator of the power spectral density. For isotropic point processes the
interesting information is radial, so the field is reduced to curves over the
distance from zero frequency:

- the radially averaged power spectrum, and
- the anisotropy, i.e. the normalised variance of the power within each ring,
  in decibels.

Author: psa developers
License: BSD-3-Clause
"""

import numpy as np

from ..curve import Curve
from .spectrum import Spectrum

# Anisotropy reported for rings whose power does not vary at all.
ANISOTROPY_FLOOR_DB = -100.0


def decibel(x):
    """Convert a power ratio to decibels, ``10 log10(x)``."""
    return 10.0 * np.log10(x)


class Periodogram:
    """
    Real ``size × size`` power field on a centred integer frequency grid.

    Parameters
    ----------
    size : int
        Side of the grid. The field starts at zero, ready to accumulate
        periodograms of several point sets.

    Examples
    --------
    >>> import numpy as np
    >>> from psa import Curve, point_set_spectrum
    >>> s = point_set_spectrum(np.random.default_rng(1).random((64, 2)), size=16)
    >>> p = Periodogram.from_spectrum(s)
    >>> p.divide(64)
    >>> rp = Curve(8, 0, 8)
    >>> p.radial_power(rp)
    """

    def __init__(self, size: int):
        self.size = int(size)
        self.periodogram = np.zeros((self.size, self.size), dtype=np.float64)

    @classmethod
    def from_spectrum(cls, spectrum: Spectrum) -> "Periodogram":
        p = cls(spectrum.size)
        p.periodogram = spectrum.real**2 + spectrum.imag**2
        return p

    def copy(self) -> "Periodogram":
        p = Periodogram(self.size)
        p.periodogram = self.periodogram.copy()
        return p

    def accumulate(self, other: "Periodogram") -> None:
        """Add another periodogram of the same size cell by cell."""
        if self.size != other.size:
            raise ValueError(
                f"Cannot accumulate periodograms of different sizes ({self.size} != {other.size})"
            )
        self.periodogram += other.periodogram

    def divide(self, f: float) -> None:
        """Scale the field by ``1 / f``, ``f > 0``."""
        if not f > 0:
            raise ValueError(f"Periodogram divisor must be positive, got {f}")
        self.periodogram *= 1.0 / f

    def _ring_indices(self, curve: Curve) -> tuple[np.ndarray, np.ndarray]:
        """Curve bin of every cell, and the mask of cells inside the curve's range."""
        size2 = self.size // 2
        c = np.abs(np.arange(self.size) - size2)
        r = np.sqrt(c[:, None] ** 2 + c[None, :] ** 2)
        idx = curve.to_index(r)
        inside = (idx >= 0) & (idx < curve.size)
        return idx, inside

    def _radial_sums(self, curve: Curve):
        """Binned cells, their values, and the per-bin sums and counts."""
        idx, inside = self._ring_indices(curve)
        bins = idx[inside]
        values = self.periodogram[inside]
        sums = np.bincount(bins, weights=values, minlength=curve.size)
        counts = np.bincount(bins, minlength=curve.size)
        return bins, values, sums, counts

    def radial_power(self, curve: Curve) -> None:
        """
        Compute the radially averaged power spectrum into ``curve``.

        Every cell is assigned to the bin of its distance from the grid
        centre; each bin receives the mean power of its cells. Bins without
        cells are zero, and cells beyond the curve's range are ignored.

        Parameters
        ----------
        curve : Curve
            Pre-sized output curve over frequency, overwritten in place.
        """
        curve.set_zero()
        if curve.size == 0:
            return
        _, _, sums, counts = self._radial_sums(curve)
        populated = counts > 0
        curve.y[populated] = sums[populated] / counts[populated]

    def anisotropy(self, curve: Curve) -> None:
        """
        Compute the anisotropy curve into ``curve``.

        The anisotropy of a ring is the sample variance of the power of its
        cells divided by the squared mean power, in decibels. Rings without
        power are reported as 0 dB (ratio 1); rings with constant power as
        :data:`ANISOTROPY_FLOOR_DB`.

        Parameters
        ----------
        curve : Curve
            Pre-sized output curve over frequency, overwritten in place.
        """
        if curve.size == 0:
            return
        rp = curve.copy()
        self.radial_power(rp)

        bins, values, _, counts = self._radial_sums(curve)
        deviation = values - rp.y[bins]
        variance = np.bincount(bins, weights=deviation * deviation, minlength=curve.size)
        several = counts > 1
        variance[several] /= counts[several] - 1

        sqpow = rp.y * rp.y
        ratio = np.ones(curve.size)
        powered = sqpow > 0
        ratio[powered] = variance[powered] / sqpow[powered]

        ani = np.full(curve.size, ANISOTROPY_FLOOR_DB)
        positive = ratio > 0
        ani[positive] = decibel(ratio[positive])
        curve.y[:] = np.maximum(ani, ANISOTROPY_FLOOR_DB)

    def to_image(self, image: np.ndarray | None = None) -> np.ndarray:
        """
        Copy the field into a raster buffer.

        No tone mapping is applied; that is left to the renderer.

        Parameters
        ----------
        image : ndarray, optional
            Buffer of shape (size, size). Allocated if not given.

        Returns
        -------
        image : ndarray
            The buffer holding a copy of the periodogram, indexed ``[y, x]``.
        """
        if image is None:
            return self.periodogram.copy()
        if image.shape != self.periodogram.shape:
            raise ValueError(
                f"Image shape {image.shape} does not match periodogram size {self.size}"
            )
        image[...] = self.periodogram
        return image
