"""Tests for coordinate transforms and result rendering."""

import math
import unittest

import numpy as np

from ephloom.bodies import Body
from ephloom.flags import AngleUnit, RequestFlags, Shape
from ephloom.state import StateVector
from ephloom.transforms import (
    cartesian_to_polar,
    normalize_angle,
    polar_to_cartesian,
    render,
)


def make_state(position, velocity=(0.0, 0.0, 0.0)):
    return StateVector(
        np.array(position, dtype=float),
        np.array(velocity, dtype=float),
        Body.MARS,
        Body.SOLAR_SYSTEM_BARYCENTER,
    )


class TestNormalizeAngle(unittest.TestCase):
    def test_range(self):
        self.assertEqual(normalize_angle(0.0), 0.0)
        self.assertAlmostEqual(normalize_angle(-math.pi / 2), 1.5 * math.pi)
        self.assertAlmostEqual(normalize_angle(5 * math.pi), math.pi)
        self.assertEqual(normalize_angle(2 * math.pi), 0.0)

    def test_tiny_negative(self):
        result = normalize_angle(-1e-18)
        self.assertGreaterEqual(result, 0.0)
        self.assertLess(result, 2 * math.pi)


class TestCartesianToPolar(unittest.TestCase):
    """Test conversion from Cartesian to polar states."""

    def test_unit_x(self):
        np.testing.assert_array_equal(
            cartesian_to_polar([1.0, 0.0, 0.0, 0.0, 0.0, 0.0]),
            [0.0, 0.0, 1.0, 0.0, 0.0, 0.0],
        )

    def test_longitude_is_positive(self):
        polar = cartesian_to_polar([0.0, -2.0, 0.0, 0.0, 0.0, 0.0])
        self.assertAlmostEqual(polar[0], 1.5 * math.pi)
        self.assertAlmostEqual(polar[2], 2.0)

    def test_latitude(self):
        polar = cartesian_to_polar([1.0, 0.0, 1.0, 0.0, 0.0, 0.0])
        self.assertAlmostEqual(polar[1], math.pi / 4)
        self.assertAlmostEqual(polar[2], math.sqrt(2))

    def test_rates(self):
        # Moving along +y at (1, 0, 0): one radian of longitude per day
        polar = cartesian_to_polar([1.0, 0.0, 0.0, 0.0, 1.0, 0.0])
        self.assertAlmostEqual(polar[3], 1.0)
        self.assertAlmostEqual(polar[4], 0.0)
        self.assertAlmostEqual(polar[5], 0.0)

        # Moving radially outward
        polar = cartesian_to_polar([3.0, 4.0, 0.0, 0.6, 0.8, 0.0])
        self.assertAlmostEqual(polar[3], 0.0)
        self.assertAlmostEqual(polar[5], 1.0)

    def test_origin(self):
        np.testing.assert_array_equal(
            cartesian_to_polar([0.0, 0.0, 0.0, 1.0, 1.0, 1.0]), np.zeros(6)
        )

    def test_polar_axis(self):
        # Moving along +x away from the north pole: latitude falls, longitude 0
        polar = cartesian_to_polar([0.0, 0.0, 2.0, 0.1, 0.0, 0.5])
        self.assertAlmostEqual(polar[0], 0.0)
        self.assertAlmostEqual(polar[1], math.pi / 2)
        self.assertEqual(polar[3], 0.0)
        self.assertAlmostEqual(polar[4], -0.05)
        self.assertAlmostEqual(polar[5], 0.5)

    def test_polar_axis_round_trip(self):
        for xyz in (
            [0.0, 0.0, 2.0, 0.1, 0.0, 0.5],
            [0.0, 0.0, -1.0, 0.0, -0.2, 0.3],
            [0.0, 0.0, 3.0, -0.01, 0.02, 0.0],
            [0.0, 0.0, 1.0, 0.0, 0.0, 0.1],
        ):
            np.testing.assert_allclose(
                polar_to_cartesian(cartesian_to_polar(xyz)), xyz, atol=1e-12
            )

    def test_round_trip(self):
        for xyz in (
            [1.0, 2.0, 3.0, 0.01, -0.02, 0.005],
            [-0.5, 0.3, -0.2, -0.001, 0.0, 0.002],
            [5.2, -1.1, 0.1, 0.0, 0.007, 0.0],
        ):
            np.testing.assert_allclose(
                polar_to_cartesian(cartesian_to_polar(xyz)), xyz, atol=1e-12
            )


class TestRender(unittest.TestCase):
    """Test how flags shape a composed state."""

    def setUp(self):
        self.state = make_state([0.0, 1.0, 0.0], [-0.01, 0.0, 0.0])

    def test_cartesian_passthrough(self):
        result = render(self.state, RequestFlags(shape=Shape.CARTESIAN))
        np.testing.assert_array_equal(result, [0.0, 1.0, 0.0, -0.01, 0.0, 0.0])

    def test_cartesian_ignores_angle_unit(self):
        degrees = render(self.state, RequestFlags(shape=Shape.CARTESIAN))
        radians = render(
            self.state,
            RequestFlags(shape=Shape.CARTESIAN, angle_unit=AngleUnit.RADIANS),
        )
        np.testing.assert_array_equal(degrees, radians)

    def test_polar_degrees(self):
        result = render(self.state, RequestFlags())
        self.assertAlmostEqual(result[0], 90.0)
        self.assertAlmostEqual(result[1], 0.0)
        self.assertAlmostEqual(result[2], 1.0)
        self.assertAlmostEqual(result[3], math.degrees(0.01))
        self.assertAlmostEqual(result[5], 0.0)

    def test_polar_radians(self):
        result = render(self.state, RequestFlags(angle_unit=AngleUnit.RADIANS))
        self.assertAlmostEqual(result[0], math.pi / 2)
        self.assertAlmostEqual(result[3], 0.01)

    def test_distance_not_scaled(self):
        state = make_state([3.0, 0.0, 4.0], [0.3, 0.0, 0.4])
        degrees = render(state, RequestFlags())
        radians = render(state, RequestFlags(angle_unit=AngleUnit.RADIANS))
        self.assertAlmostEqual(degrees[2], 5.0)
        self.assertAlmostEqual(degrees[5], 0.5)
        self.assertEqual(degrees[2], radians[2])
        self.assertEqual(degrees[5], radians[5])
        self.assertAlmostEqual(degrees[1], math.degrees(radians[1]))

    def test_velocity_off(self):
        for shape in (Shape.CARTESIAN, Shape.POLAR):
            result = render(self.state, RequestFlags(shape=shape, velocity=False))
            np.testing.assert_array_equal(result[3:], [0.0, 0.0, 0.0])

    def test_zero_state(self):
        state = StateVector.zero(Body.SUN, Body.SUN)
        np.testing.assert_array_equal(render(state, RequestFlags()), np.zeros(6))


if __name__ == "__main__":
    unittest.main()
