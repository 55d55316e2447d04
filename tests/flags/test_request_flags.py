"""Tests for request flags and the integer bit field."""

import unittest

from ephloom.flags import (
    FLAG_BARYCTR,
    FLAG_HELCTR,
    FLAG_JPLEPH,
    FLAG_MOSEPH,
    FLAG_RADIANS,
    FLAG_SPEED,
    FLAG_SWIEPH,
    FLAG_XYZ,
    AngleUnit,
    Backend,
    Center,
    RequestFlags,
    Shape,
)


class TestRequestFlags(unittest.TestCase):
    def test_defaults(self):
        flags = RequestFlags()
        self.assertEqual(flags.backend, Backend.JPL)
        self.assertEqual(flags.center, Center.BARYCENTRIC)
        self.assertEqual(flags.shape, Shape.POLAR)
        self.assertEqual(flags.angle_unit, AngleUnit.DEGREES)
        self.assertTrue(flags.velocity)

    def test_frozen(self):
        with self.assertRaises(AttributeError):
            RequestFlags().velocity = False


class TestFromBits(unittest.TestCase):
    """Test decoding of the conventional bit field."""

    def test_no_bits(self):
        flags = RequestFlags.from_bits(0)
        self.assertEqual(flags.backend, Backend.JPL)
        self.assertEqual(flags.center, Center.BARYCENTRIC)
        self.assertEqual(flags.shape, Shape.POLAR)
        self.assertEqual(flags.angle_unit, AngleUnit.DEGREES)
        self.assertFalse(flags.velocity)

    def test_backend_choice(self):
        self.assertEqual(RequestFlags.from_bits(FLAG_JPLEPH).backend, Backend.JPL)
        self.assertEqual(RequestFlags.from_bits(FLAG_SWIEPH).backend, Backend.SWISS)
        self.assertEqual(
            RequestFlags.from_bits(FLAG_JPLEPH | FLAG_SWIEPH).backend, Backend.JPL
        )
        self.assertEqual(RequestFlags.from_bits(FLAG_MOSEPH).backend, Backend.MOSHIER)
        self.assertEqual(
            RequestFlags.from_bits(FLAG_MOSEPH | FLAG_SWIEPH).backend, Backend.SWISS
        )
        self.assertEqual(
            RequestFlags.from_bits(FLAG_MOSEPH | FLAG_JPLEPH).backend, Backend.JPL
        )

    def test_heliocentric_wins(self):
        flags = RequestFlags.from_bits(FLAG_HELCTR | FLAG_BARYCTR)
        self.assertEqual(flags.center, Center.HELIOCENTRIC)

    def test_representation_bits(self):
        flags = RequestFlags.from_bits(FLAG_XYZ | FLAG_RADIANS | FLAG_SPEED)
        self.assertEqual(flags.shape, Shape.CARTESIAN)
        self.assertEqual(flags.angle_unit, AngleUnit.RADIANS)
        self.assertTrue(flags.velocity)

    def test_to_bits_inverts_from_bits(self):
        for flags in (
            RequestFlags(),
            RequestFlags(backend=Backend.SWISS, velocity=False),
            RequestFlags(backend=Backend.MOSHIER, center=Center.HELIOCENTRIC),
            RequestFlags(shape=Shape.CARTESIAN, angle_unit=AngleUnit.RADIANS),
        ):
            self.assertEqual(RequestFlags.from_bits(flags.to_bits()), flags)

    def test_to_bits(self):
        self.assertEqual(
            RequestFlags().to_bits(), FLAG_JPLEPH | FLAG_BARYCTR | FLAG_SPEED
        )


if __name__ == "__main__":
    unittest.main()
