"""Tests for Chebyshev series evaluation."""

import unittest

import numpy as np

from ephloom.errors import InsufficientCoefficientsError
from ephloom.jpl.chebyshev import (
    chebyshev_basis,
    chebyshev_derivative_basis,
    evaluate_series,
    normalized_time,
)
from ephloom.jpl.header import LayoutEntry
from ephloom.jpl.record_store import DataRecord

RECORD_START = 100.0
STEP = 8.0


def make_record(values):
    """A record starting at RECORD_START with `values` placed from entry 2."""
    coefficients = np.zeros(40)
    coefficients[0] = RECORD_START
    coefficients[1] = RECORD_START + STEP
    coefficients[2 : 2 + len(values)] = values
    return DataRecord(index=0, coefficients=coefficients)


class TestChebyshevBasis(unittest.TestCase):
    """Test the polynomial recurrences."""

    def test_basis_matches_closed_form(self):
        x = 0.3
        t = chebyshev_basis(x, 5)
        expected = [1.0, x, 2 * x**2 - 1, 4 * x**3 - 3 * x, 8 * x**4 - 8 * x**2 + 1]
        np.testing.assert_allclose(t, expected, rtol=1e-14)

    def test_derivative_basis_matches_closed_form(self):
        x = -0.6
        dt = chebyshev_derivative_basis(x, chebyshev_basis(x, 5))
        expected = [0.0, 1.0, 4 * x, 12 * x**2 - 3, 32 * x**3 - 16 * x]
        np.testing.assert_allclose(dt, expected, rtol=1e-14, atol=1e-15)

    def test_agrees_with_numpy(self):
        coeffs = np.array([0.5, -1.25, 0.75, 0.1, -0.02])
        x = 0.42
        ours = coeffs @ chebyshev_basis(x, len(coeffs))
        self.assertAlmostEqual(ours, np.polynomial.chebyshev.chebval(x, coeffs), places=14)

        derivative = np.polynomial.chebyshev.chebder(coeffs)
        ours = coeffs @ chebyshev_derivative_basis(x, chebyshev_basis(x, len(coeffs)))
        self.assertAlmostEqual(
            ours, np.polynomial.chebyshev.chebval(x, derivative), places=13
        )


class TestNormalizedTime(unittest.TestCase):
    """Test locating a time inside a record."""

    def test_midpoint_of_single_interval(self):
        self.assertEqual(normalized_time(104.0, RECORD_START, STEP, 1), (0, 0.0))

    def test_sub_interval_selection(self):
        index, x = normalized_time(107.0, RECORD_START, STEP, 4)
        self.assertEqual(index, 3)
        self.assertAlmostEqual(x, 0.0)

    def test_end_of_record_is_clamped(self):
        self.assertEqual(normalized_time(108.0, RECORD_START, STEP, 4), (3, 1.0))

    def test_start_of_record(self):
        self.assertEqual(normalized_time(100.0, RECORD_START, STEP, 4), (0, -1.0))


class TestEvaluateSeries(unittest.TestCase):
    """Test position and velocity evaluation."""

    def test_three_coefficient_series(self):
        """Position sums coefficients times T, velocity uses dT and the chain rule."""
        record = make_record([1.0, 2.0, 3.0, 0.0, 1.0, 0.0, 0.0, 0.0, 1.0])
        entry = LayoutEntry(2, 3, 1)

        # t = 106 is three quarters through the record: x = 0.5
        position, velocity = evaluate_series(record, entry, 106.0, STEP)

        np.testing.assert_allclose(position, [0.5, 0.5, -0.5], atol=1e-15)
        # Raw derivatives (8, 1, 2) scaled by 2 * 1 / 8
        np.testing.assert_allclose(velocity, [2.0, 0.25, 0.5], atol=1e-15)

    def test_continuity_across_sub_intervals(self):
        """The same line split over two sub-intervals joins up."""
        # x(t) = t - RECORD_START; sub-interval 0 covers [0, 4], 1 covers [4, 8]
        sub0 = [2.0, 2.0, 0.0, 0.0, 0.0, 0.0]
        sub1 = [6.0, 2.0, 0.0, 0.0, 0.0, 0.0]
        record = make_record(sub0 + sub1)
        entry = LayoutEntry(2, 2, 2)

        before, v_before = evaluate_series(record, entry, 104.0 - 1e-9, STEP)
        after, v_after = evaluate_series(record, entry, 104.0, STEP)

        self.assertLess(abs(before[0] - after[0]), 1e-6)
        self.assertAlmostEqual(after[0], 4.0)
        self.assertAlmostEqual(v_before[0], 1.0)
        self.assertAlmostEqual(v_after[0], 1.0)

    def test_evaluation_is_reproducible(self):
        record = make_record(np.linspace(-1.0, 1.0, 15))
        entry = LayoutEntry(2, 5, 1)
        first = evaluate_series(record, entry, 102.7, STEP)
        second = evaluate_series(record, entry, 102.7, STEP)
        np.testing.assert_array_equal(first[0], second[0])
        np.testing.assert_array_equal(first[1], second[1])

    def test_single_coefficient_needs_no_velocity(self):
        record = make_record([7.0, 8.0, 9.0])
        entry = LayoutEntry(2, 1, 1)

        with self.assertRaises(InsufficientCoefficientsError) as cm:
            evaluate_series(record, entry, 104.0, STEP)
        self.assertEqual(cm.exception.coefficient_count, 1)

        position, velocity = evaluate_series(record, entry, 104.0, STEP, velocity=False)
        np.testing.assert_array_equal(position, [7.0, 8.0, 9.0])
        np.testing.assert_array_equal(velocity, [0.0, 0.0, 0.0])

    def test_empty_series(self):
        record = make_record([])
        with self.assertRaises(InsufficientCoefficientsError):
            evaluate_series(record, LayoutEntry(2, 0, 1), 104.0, STEP, velocity=False)


if __name__ == "__main__":
    unittest.main()
