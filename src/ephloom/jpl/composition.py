"""
Combining per-body series into the state of a target relative to a center.

Raw series in the file are barycentric, except the Moon's, which is stored
relative to the Earth-Moon barycenter. The Earth has no series of its own and
is derived from the barycenter and Moon series using the Earth/Moon mass
ratio from the header.
"""

from typing import Dict, Iterable, Set, Tuple

import numpy as np

from ..bodies import Body
from ..constants import EARTH_MOON_MASS_RATIO
from ..errors import UnknownBodyError
from ..logging import get_logger
from ..state import StateVector
from .chebyshev import evaluate_series
from .header import EphemerisHeader
from .record_store import DataRecord

logger = get_logger(__name__)

Vector6 = Tuple[np.ndarray, np.ndarray]


def required_series(body: Body) -> Set[Body]:
    """Bodies whose raw series are needed to place `body` in the barycentric frame."""
    if body is Body.SOLAR_SYSTEM_BARYCENTER:
        return set()
    if body in (Body.MOON, Body.EARTH):
        return {Body.MOON, Body.EARTH_MOON_BARYCENTER}
    return {body}


def check_bodies(header: EphemerisHeader, bodies: Iterable[Body]) -> None:
    """
    Make sure every series the given bodies depend on is in the file.

    Raises:
        UnknownBodyError: If a body lacks a slot or its slot is unpopulated
    """
    for body in bodies:
        for needed in required_series(body):
            slot = needed.slot
            if slot is None or not header.entry(slot).populated:
                raise UnknownBodyError(body)


def _mass_ratio(header: EphemerisHeader) -> float:
    emrat = header.constants.get("EMRAT", 0.0)
    if emrat > 0:
        return emrat
    logger.warning(
        f"Header has no Earth/Moon mass ratio; using {EARTH_MOON_MASS_RATIO:.6f}"
    )
    return EARTH_MOON_MASS_RATIO


def compose_state(
    record: DataRecord,
    header: EphemerisHeader,
    t: float,
    target: Body,
    center: Body,
    velocity: bool = True,
) -> StateVector:
    """
    State of `target` relative to `center` at time t.

    Rules, in order:
      1. Each distinct series involved is evaluated once.
      2. The Moon's working vector is its raw series plus the Earth-Moon
         barycenter.
      3. target == center gives the exact zero vector.
      4. A solar-system-barycenter center returns the target unchanged.
      5. Otherwise the center's working vector is subtracted.

    Args:
        record: Data record covering t
        header: Header of the file the record came from
        t: Julian date (dynamical time)
        target: Body to locate
        center: Origin of the result
        velocity: Whether to compute velocities

    Returns:
        The relative StateVector

    Raises:
        UnknownBodyError: If either body has no series in the file
        InsufficientCoefficientsError: If a needed series is too short
    """
    check_bodies(header, (target, center))

    if target == center:
        return StateVector.zero(target, center)

    raw: Dict[Body, Vector6] = {}
    for body in required_series(target) | required_series(center):
        entry = header.entry(body.slot)
        raw[body] = evaluate_series(record, entry, t, header.step_days, velocity)

    def working(body: Body) -> Vector6:
        if body is Body.SOLAR_SYSTEM_BARYCENTER:
            return np.zeros(3), np.zeros(3)
        if body is Body.MOON:
            moon_pos, moon_vel = raw[Body.MOON]
            emb_pos, emb_vel = raw[Body.EARTH_MOON_BARYCENTER]
            return moon_pos + emb_pos, moon_vel + emb_vel
        if body is Body.EARTH:
            moon_pos, moon_vel = raw[Body.MOON]
            emb_pos, emb_vel = raw[Body.EARTH_MOON_BARYCENTER]
            scale = 1.0 / (1.0 + _mass_ratio(header))
            return emb_pos - moon_pos * scale, emb_vel - moon_vel * scale
        return raw[body]

    target_pos, target_vel = working(target)
    if center is Body.SOLAR_SYSTEM_BARYCENTER:
        return StateVector(target_pos, target_vel, target, center)

    center_pos, center_vel = working(center)
    return StateVector(target_pos - center_pos, target_vel - center_vel, target, center)
