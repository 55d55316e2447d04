"""
Request flags for ephemeris lookups.

RequestFlags replaces the conventional integer bit field with one enum per
independent choice, so conflicting combinations cannot be expressed. The bit
field is still accepted through RequestFlags.from_bits for callers that speak
it.
"""

from dataclasses import dataclass
from enum import Enum


class Backend(Enum):
    """Which ephemeris source answers the request."""

    JPL = "jpl"
    SWISS = "swiss"
    MOSHIER = "moshier"


class Center(Enum):
    """Origin of the returned vector when no explicit center is given."""

    BARYCENTRIC = "barycentric"
    HELIOCENTRIC = "heliocentric"


class Shape(Enum):
    CARTESIAN = "cartesian"
    POLAR = "polar"


class AngleUnit(Enum):
    DEGREES = "degrees"
    RADIANS = "radians"


# Conventional bit values
FLAG_JPLEPH = 1
FLAG_SWIEPH = 2
FLAG_MOSEPH = 4
FLAG_HELCTR = 8
FLAG_SPEED = 256
FLAG_XYZ = 4096
FLAG_RADIANS = 8192
FLAG_BARYCTR = 16384


@dataclass(frozen=True)
class RequestFlags:
    """Orthogonal choices controlling how a lookup is computed and rendered."""

    backend: Backend = Backend.JPL
    center: Center = Center.BARYCENTRIC
    shape: Shape = Shape.POLAR
    angle_unit: AngleUnit = AngleUnit.DEGREES
    velocity: bool = True

    @classmethod
    def from_bits(cls, bits: int) -> "RequestFlags":
        """
        Build flags from a conventional integer bit field.

        Backend choice is deterministic: JPL when its bit is set or the Swiss
        bit is not; otherwise Swiss. Moshier wins only when it is the sole
        backend bit. Heliocentric beats barycentric if both are set.

        Args:
            bits: Bit field combining the FLAG_* values

        Returns:
            Equivalent RequestFlags
        """
        if bits & FLAG_MOSEPH and not bits & (FLAG_JPLEPH | FLAG_SWIEPH):
            backend = Backend.MOSHIER
        elif bits & FLAG_JPLEPH or not bits & FLAG_SWIEPH:
            backend = Backend.JPL
        else:
            backend = Backend.SWISS

        return cls(
            backend=backend,
            center=Center.HELIOCENTRIC if bits & FLAG_HELCTR else Center.BARYCENTRIC,
            shape=Shape.CARTESIAN if bits & FLAG_XYZ else Shape.POLAR,
            angle_unit=AngleUnit.RADIANS if bits & FLAG_RADIANS else AngleUnit.DEGREES,
            velocity=bool(bits & FLAG_SPEED),
        )

    def to_bits(self) -> int:
        """Inverse of from_bits for the choices this class can express."""
        bits = {
            Backend.JPL: FLAG_JPLEPH,
            Backend.SWISS: FLAG_SWIEPH,
            Backend.MOSHIER: FLAG_MOSEPH,
        }[self.backend]
        if self.center is Center.HELIOCENTRIC:
            bits |= FLAG_HELCTR
        else:
            bits |= FLAG_BARYCTR
        if self.shape is Shape.CARTESIAN:
            bits |= FLAG_XYZ
        if self.angle_unit is AngleUnit.RADIANS:
            bits |= FLAG_RADIANS
        if self.velocity:
            bits |= FLAG_SPEED
        return bits
