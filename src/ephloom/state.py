"""
State vectors produced by body composition.
"""

from dataclasses import dataclass

import numpy as np

from .bodies import Body


@dataclass(frozen=True)
class StateVector:
    """
    Position (AU) and velocity (AU/day) of a target relative to a center.

    Components are equatorial Cartesian, as stored in the ephemeris file.
    """

    position: np.ndarray
    velocity: np.ndarray
    target: Body
    center: Body

    @classmethod
    def zero(cls, target: Body, center: Body) -> "StateVector":
        return cls(np.zeros(3), np.zeros(3), target, center)

    def as_array(self) -> np.ndarray:
        """The six components (x, y, z, vx, vy, vz) as one array."""
        return np.concatenate([self.position, self.velocity])
