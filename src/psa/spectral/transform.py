"""
Radial power spectra from radial distribution functions.

For an isotropic point process the radially averaged power spectrum P(ν) and
the radial distribution function g(r) are related by a Hankel transform,

    P(ν) = 1 + 2π N ∫ (g(r) - 1) J0(2πνr) r dr.

Evaluating this integral on a single RDF curve is far cheaper than averaging
dense periodograms, which makes it the basis of the spectral statistics. The
RDF is only known up to a finite distance, so the integrand is tapered with a
Blackman window whose width adapts to the frequency.

Author: psa developers
License: BSD-3-Clause
"""

import math

import numpy as np

from ..curve import Curve, integrate

# Cephes single precision coefficients for J0.
_DR1 = 5.7831859629467845211
_JP = np.array([
    -6.068350350393235e-08,
    6.388945720783375e-06,
    -3.969646342510940e-04,
    1.332913422519003e-02,
    -1.729150680240724e-01,
])
_MO = np.array([
    -6.838999669318810e-02,
    1.864949361379502e-01,
    -2.145007480346739e-01,
    1.197549369473540e-01,
    -3.560281861530129e-03,
    -4.969382655296620e-02,
    -3.355424622293709e-06,
    7.978845717621440e-01,
])
_PH = np.array([
    3.242077816988247e01,
    -3.630592630518434e01,
    1.756221482109099e01,
    -4.974978466280903e00,
    1.001973420681837e00,
    -1.939906941791308e-01,
    6.490598792654666e-02,
    -1.249992184872738e-01,
])


def j0f(x):
    """
    Fast approximation of the Bessel function of the first kind J0.

    Rational polynomial approximation from the Cephes library, accurate to
    single precision: a power series in ``x²`` for ``|x| <= 2`` and the
    asymptotic modulus/phase form beyond.

    Parameters
    ----------
    x : array_like or float
        Argument(s).

    Returns
    -------
    ndarray or float
        J0(x).
    """
    x = np.abs(np.asarray(x, dtype=np.float64))
    out = np.empty_like(x)

    near = x <= 2.0
    z = x[near] ** 2
    out[near] = np.where(x[near] < 1e-3, 1.0 - 0.25 * z, (z - _DR1) * np.polyval(_JP, z))

    far = ~near
    q = 1.0 / x[far]
    p = np.sqrt(q) * np.polyval(_MO, q)
    xn = q * np.polyval(_PH, q * q) - math.pi / 4
    out[far] = p * np.cos(xn + x[far])

    if out.ndim == 0:
        return float(out)
    return out


def blackman_window(x, xlim: float):
    """
    Blackman taper over ``[0, xlim]``, zero beyond.

    ``w(x) = 0.43 + 0.5 cos(πx/xlim) + 0.08 cos(2πx/xlim)`` for ``x <= xlim``.
    """
    x = np.asarray(x, dtype=np.float64)
    w = 0.43 + 0.5 * np.cos(math.pi * x / xlim) + 0.08 * np.cos(2.0 * math.pi * x / xlim)
    return np.where(x > xlim, 0.0, w)


def rdf_to_radial_power(rdf: Curve, npoints: int, curve: Curve) -> None:
    """
    Derive a radial power spectrum from a radial distribution function.

    For each frequency bin ``u0`` of ``curve``::

        rp(u0) = |1 + 2π N ∫ (g(x) - 1) J0(2π u0 x) x w(x) dx|

    where ``w`` is a Blackman window of half-width
    ``rdf.x1 * clamp(4 u0 / sqrt(N), 0.2, 0.5)``: wide at low frequencies,
    where long-range correlations matter, and narrow at high frequencies,
    where truncating the RDF tail causes ringing.

    Parameters
    ----------
    rdf : Curve
        Radial distribution function over distance.
    npoints : int
        Number of points of the underlying point set(s).
    curve : Curve
        Pre-sized output curve over frequency, overwritten in place.
    """
    if npoints <= 0:
        curve.set_zero()
        return

    wstep = 1.0 / math.sqrt(npoints)
    x = rdf.x
    excess = (rdf.y - 1.0) * x
    tmp = rdf.copy()

    for i in range(curve.size):
        u0 = curve.to_x(i)
        u = 2.0 * math.pi * u0
        wndsize = rdf.x1 * min(0.5, max(0.2, 4.0 * u0 * wstep))
        tmp.y[:] = excess * j0f(u * x) * blackman_window(x, wndsize)
        curve[i] = abs(1.0 + 2.0 * math.pi * integrate(tmp) * npoints)
