"""
The bodies an ephemeris lookup can name, and where their series live in
the file's layout table.
"""

from enum import Enum
from typing import Dict, Optional


class Body(Enum):
    """
    Bodies that can be targets or centers of an ephemeris lookup.

    Most bodies own a coefficient series in the file (see SERIES_SLOTS).
    EARTH is derived from the Earth-Moon barycenter and Moon series, and
    SOLAR_SYSTEM_BARYCENTER is the origin of every raw series.
    """

    MERCURY = "mercury"
    VENUS = "venus"
    EARTH_MOON_BARYCENTER = "earth_moon_barycenter"
    MARS = "mars"
    JUPITER = "jupiter"
    SATURN = "saturn"
    URANUS = "uranus"
    NEPTUNE = "neptune"
    PLUTO = "pluto"
    MOON = "moon"
    SUN = "sun"
    EARTH = "earth"
    SOLAR_SYSTEM_BARYCENTER = "solar_system_barycenter"

    @property
    def slot(self) -> Optional[int]:
        """Index of this body's row in the file's layout table, if it has one."""
        return SERIES_SLOTS.get(self)

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()

    @classmethod
    def from_name(cls, name: str) -> "Body":
        """
        Look up a body by name, case-insensitively.

        Accepts enum names ("EARTH_MOON_BARYCENTER"), values ("sun") and the
        short aliases in BODY_ALIASES ("emb", "ssb").

        Raises:
            ValueError: If the name matches no body
        """
        key = name.strip().lower().replace("-", "_").replace(" ", "_")
        if key in BODY_ALIASES:
            return BODY_ALIASES[key]
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown body: {name}")

    @classmethod
    def from_planet_number(cls, number: int) -> "Body":
        """
        Map the conventional planet numbering (0 Sun, 1 Moon, 2 Mercury ...
        9 Pluto, 14 Earth) to a Body.

        Raises:
            ValueError: If the number has no file-backed body
        """
        try:
            return PLANET_NUMBERS[number]
        except KeyError:
            raise ValueError(f"No ephemeris body for planet number {number}")


# Row of each body in the 13-slot layout table. Slots 11 and 12 hold the
# nutation and libration series, which are not bodies.
SERIES_SLOTS: Dict[Body, int] = {
    Body.MERCURY: 0,
    Body.VENUS: 1,
    Body.EARTH_MOON_BARYCENTER: 2,
    Body.MARS: 3,
    Body.JUPITER: 4,
    Body.SATURN: 5,
    Body.URANUS: 6,
    Body.NEPTUNE: 7,
    Body.PLUTO: 8,
    Body.MOON: 9,
    Body.SUN: 10,
}

NUTATION_SLOT = 11
LIBRATION_SLOT = 12

DERIVED_BODIES = frozenset({Body.EARTH, Body.SOLAR_SYSTEM_BARYCENTER})

BODY_ALIASES: Dict[str, Body] = {
    "emb": Body.EARTH_MOON_BARYCENTER,
    "ssb": Body.SOLAR_SYSTEM_BARYCENTER,
    "barycenter": Body.SOLAR_SYSTEM_BARYCENTER,
}

PLANET_NUMBERS: Dict[int, Body] = {
    0: Body.SUN,
    1: Body.MOON,
    2: Body.MERCURY,
    3: Body.VENUS,
    4: Body.MARS,
    5: Body.JUPITER,
    6: Body.SATURN,
    7: Body.URANUS,
    8: Body.NEPTUNE,
    9: Body.PLUTO,
    14: Body.EARTH,
}


def _check_catalogue() -> None:
    missing = set(Body) - set(SERIES_SLOTS) - DERIVED_BODIES
    if missing:
        raise RuntimeError(f"Bodies without a series slot: {sorted(b.name for b in missing)}")
    slots = sorted(SERIES_SLOTS.values())
    if len(set(slots)) != len(slots):
        raise RuntimeError("Two bodies share a layout slot")


_check_catalogue()
