"""Tests for the Fourier spectrum, periodogram and RDF transform."""

import math

import numba
import numpy as np
import pytest
from scipy.special import j0

from psa import (
    ANISOTROPY_FLOOR_DB,
    Curve,
    Periodogram,
    Spectrum,
    blackman_window,
    j0f,
    point_set_spectrum,
    rdf_to_radial_power,
)


class TestSpectrum:
    """Tests for the direct Fourier transform."""

    def test_single_point_at_origin(self):
        """Test that a point at the origin has unit magnitude everywhere."""
        s = point_set_spectrum(np.array([[0.0, 0.0]]), size=16)
        np.testing.assert_array_equal(np.abs(s.ft), 1.0)

    def test_single_point_unit_magnitude(self):
        """Test that any single point has unit magnitude everywhere."""
        s = point_set_spectrum([(0.3141, 0.7182)], size=12)
        np.testing.assert_allclose(np.abs(s.ft), 1.0, rtol=1e-12)

    def test_matches_direct_evaluation(self):
        """Test the kernel against a NumPy evaluation of the sum."""
        rng = np.random.default_rng(7)
        pts = rng.random((20, 2))
        s = point_set_spectrum(pts, size=10)

        wx, wy = s.frequencies()
        phase = -2j * np.pi * (wx[..., None] * pts[:, 0] + wy[..., None] * pts[:, 1])
        expected = np.exp(phase).sum(axis=-1)
        np.testing.assert_allclose(s.ft, expected, atol=1e-10)

    def test_zero_frequency_counts_points(self):
        """Test that the centre coefficient equals the number of points."""
        pts = np.random.default_rng(8).random((50, 2))
        s = point_set_spectrum(pts, size=8)
        assert s.ft[4, 4] == pytest.approx(50.0)

    def test_hermitian_symmetry(self):
        """Test that F(-w) is the complex conjugate of F(w)."""
        pts = np.random.default_rng(9).random((30, 2))
        s = point_set_spectrum(pts, size=14)
        inner = s.ft[1:, 1:]
        np.testing.assert_allclose(np.conj(inner), inner[::-1, ::-1], atol=1e-10)

    def test_npoints_truncates(self):
        """Test that only the first npoints points are transformed."""
        pts = np.random.default_rng(10).random((40, 2))
        a = point_set_spectrum(pts, size=8, npoints=25)
        b = point_set_spectrum(pts[:25], size=8)
        np.testing.assert_allclose(a.ft, b.ft)

    def test_thread_count_does_not_change_result(self):
        """Test that one worker thread gives the same coefficients."""
        pts = np.random.default_rng(11).random((64, 2))
        a = point_set_spectrum(pts, size=16)
        b = point_set_spectrum(pts, size=16, num_threads=1)
        np.testing.assert_allclose(a.ft, b.ft, atol=1e-9)

    def test_thread_count_is_restored(self):
        """Test that a per-call thread count does not change the global setting."""
        pts = np.random.default_rng(15).random((16, 2))
        before = numba.get_num_threads()
        point_set_spectrum(pts, size=4, num_threads=1)
        assert numba.get_num_threads() == before

    def test_thread_count_restored_after_error(self):
        """Test that an invalid thread count leaves the global setting unchanged."""
        pts = np.random.default_rng(16).random((16, 2))
        before = numba.get_num_threads()
        with pytest.raises(ValueError):
            point_set_spectrum(pts, size=4, num_threads=numba.config.NUMBA_NUM_THREADS + 1)
        assert numba.get_num_threads() == before

    def test_invalid_size(self):
        """Test that odd or non-positive sizes raise an error."""
        with pytest.raises(ValueError):
            Spectrum(7)
        with pytest.raises(ValueError):
            Spectrum(0)

    def test_frequencies(self):
        """Test the frequency grid layout."""
        wx, wy = Spectrum(4).frequencies()
        np.testing.assert_array_equal(wx[0], [-2, -1, 0, 1])
        np.testing.assert_array_equal(wy[:, 0], [-2, -1, 0, 1])


class TestPeriodogram:
    """Tests for the periodogram and its radial reductions."""

    def test_from_spectrum(self):
        """Test that the periodogram is the squared magnitude."""
        pts = np.random.default_rng(12).random((10, 2))
        s = point_set_spectrum(pts, size=8)
        p = Periodogram.from_spectrum(s)
        np.testing.assert_allclose(p.periodogram, np.abs(s.ft) ** 2)

    def test_zero_spectrum_has_zero_power(self):
        """Test that an all-zero spectrum gives zero radial power."""
        p = Periodogram.from_spectrum(Spectrum(16))
        rp = Curve(8, 0, 8)
        p.radial_power(rp)
        np.testing.assert_array_equal(rp.y, 0.0)

    def test_constant_field(self):
        """Test that a constant field gives a constant radial power."""
        p = Periodogram(16)
        p.periodogram[:] = 3.0
        rp = Curve(8, 0, 8)
        p.radial_power(rp)
        np.testing.assert_allclose(rp.y, 3.0)

    def test_radial_power_is_ring_mean(self):
        """Test the mean over the cells of a ring."""
        p = Periodogram(16)
        p.periodogram[:] = np.random.default_rng(13).random((16, 16))
        rp = Curve(8, 0, 8)
        p.radial_power(rp)

        c = np.abs(np.arange(16) - 8)
        r = np.sqrt(c[:, None] ** 2 + c[None, :] ** 2)
        ring = (r >= 2) & (r < 3)
        assert rp[2] == pytest.approx(p.periodogram[ring].mean())

    def test_unpopulated_bins_are_zero(self):
        """Test that bins without cells stay zero."""
        p = Periodogram(8)
        p.periodogram[:] = 1.0
        rp = Curve(20, 0, 2)
        p.radial_power(rp)
        # Bin [0.1, 0.2) contains no integer radius.
        assert rp[1] == 0.0
        assert rp[0] == 1.0

    def test_isotropic_field_anisotropy(self):
        """Test that rings of constant power report the anisotropy floor."""
        p = Periodogram(32)
        ani = Curve(16, 0, 16)
        c = np.abs(np.arange(32) - 16)
        r = np.sqrt(c[:, None] ** 2 + c[None, :] ** 2)
        p.periodogram[:] = 1.0 + ani.to_index(r)

        p.anisotropy(ani)
        np.testing.assert_allclose(ani.y, ANISOTROPY_FLOOR_DB)

    def test_zero_field_anisotropy(self):
        """Test that rings without power report 0 dB."""
        p = Periodogram(16)
        ani = Curve(8, 0, 8)
        p.anisotropy(ani)
        np.testing.assert_array_equal(ani.y, 0.0)

    def test_anisotropy_is_normalised_variance(self):
        """Test anisotropy against the sample variance of each ring."""
        rng = np.random.default_rng(14)
        p = Periodogram(16)
        p.periodogram[:] = rng.random((16, 16)) + 0.5
        ani = Curve(8, 0, 8)
        p.anisotropy(ani)

        c = np.abs(np.arange(16) - 8)
        r = np.sqrt(c[:, None] ** 2 + c[None, :] ** 2)
        for k in range(1, 8):
            cells = p.periodogram[(r >= k) & (r < k + 1)]
            expected = 10 * np.log10(cells.var(ddof=1) / cells.mean() ** 2)
            assert ani[k] == pytest.approx(expected)
        # A single cell has no variance.
        assert ani[0] == ANISOTROPY_FLOOR_DB

    def test_accumulate_and_divide(self):
        """Test averaging two periodograms."""
        a = Periodogram(8)
        a.periodogram[:] = 2.0
        b = a.copy()
        b.periodogram[:] = 4.0
        a.accumulate(b)
        a.divide(2)
        np.testing.assert_allclose(a.periodogram, 3.0)

    def test_accumulate_size_mismatch(self):
        """Test that periodograms of different sizes cannot be added."""
        with pytest.raises(ValueError):
            Periodogram(8).accumulate(Periodogram(10))

    def test_divide_nonpositive(self):
        """Test that the divisor must be positive."""
        with pytest.raises(ValueError):
            Periodogram(8).divide(0)
        with pytest.raises(ValueError):
            Periodogram(8).divide(-2)

    def test_to_image(self):
        """Test that the raster is an independent copy."""
        p = Periodogram(8)
        p.periodogram[:] = 1.5
        image = p.to_image()
        image[0, 0] = 0.0
        assert p.periodogram[0, 0] == 1.5

        buffer = np.zeros((8, 8))
        assert p.to_image(buffer) is buffer
        np.testing.assert_allclose(buffer, 1.5)

    def test_to_image_shape_mismatch(self):
        """Test that a buffer of the wrong shape is rejected."""
        with pytest.raises(ValueError):
            Periodogram(8).to_image(np.zeros((4, 4)))


class TestBessel:
    """Tests for the J0 approximation and the Blackman window."""

    def test_matches_scipy(self):
        """Test j0f against scipy.special.j0."""
        x = np.linspace(-30, 30, 2001)
        np.testing.assert_allclose(j0f(x), j0(x), atol=5e-6)

    def test_large_arguments(self):
        """Test the asymptotic branch."""
        x = np.linspace(30, 3000, 500)
        np.testing.assert_allclose(j0f(x), j0(x), atol=1e-6)

    def test_scalar(self):
        """Test scalar input and the value at zero."""
        assert isinstance(j0f(1.0), float)
        assert j0f(0.0) == 1.0
        assert j0f(2.404825557695773) == pytest.approx(0.0, abs=1e-6)

    def test_blackman_window(self):
        """Test the window at its centre, edge and beyond."""
        assert blackman_window(0.0, 2.0) == pytest.approx(1.01)
        assert blackman_window(2.0, 2.0) == pytest.approx(0.01)
        assert blackman_window(2.5, 2.0) == 0.0
        w = blackman_window(np.linspace(0, 2, 11), 2.0)
        assert np.all(np.diff(w) < 0)


class TestRDFToRadialPower:
    """Tests for the Hankel transform of the RDF."""

    def test_uncorrelated_rdf(self):
        """Test that a flat RDF of 1 gives a flat spectrum of 1."""
        rdf = Curve(400, 0, 0.5)
        rdf.y[:] = 1.0
        rp = Curve(100, 0, 128)
        rdf_to_radial_power(rdf, 256, rp)
        np.testing.assert_allclose(rp.y, 1.0)

    def test_no_points(self):
        """Test that zero points give a zero curve."""
        rdf = Curve(10, 0, 0.5)
        rp = Curve(10, 0, 5)
        rp.y[:] = 7.0
        rdf_to_radial_power(rdf, 0, rp)
        np.testing.assert_array_equal(rp.y, 0.0)

    def test_hard_core_rdf(self):
        """Test a step RDF: suppressed low frequencies, white noise at high ones."""
        npoints = 1024
        r0 = 1 / math.sqrt(math.pi * npoints)
        rdf = Curve(1600, 0, 0.5)
        rdf.y[:] = np.where(rdf.x < r0, 0.0, 1.0)
        rp = Curve(1600, 0, 0.5 * npoints)
        rdf_to_radial_power(rdf, npoints, rp)

        assert np.all(np.isfinite(rp.y))
        assert np.all(rp.y >= 0)
        assert rp[0] < 0.2
        assert rp[1250] == pytest.approx(1.0, abs=0.1)
