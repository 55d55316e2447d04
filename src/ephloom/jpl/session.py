"""
Sessions over an open ephemeris file.

A session owns the file handle, its parsed header and the record store, and
turns lookup requests into rendered six-component results.
"""

import time
from typing import Any, BinaryIO, Dict, Optional, Tuple, Union

import numpy as np

from ..bodies import Body
from ..constants import COEFFICIENT_COUNT
from ..errors import BackendUnavailableError, NotOpenError, OpenError
from ..flags import Backend, Center, RequestFlags
from ..logging import get_logger
from ..paths import de_number_from_filename, resolve_ephemeris_path
from ..space_time.delta_t import ut_to_et
from ..state import StateVector
from ..transforms import render
from .composition import compose_state
from .header import EphemerisHeader, parse_header
from .record_store import CacheInfo, RecordStore

logger = get_logger(__name__)

BodyLike = Union[Body, int, str]


def as_body(body: BodyLike) -> Body:
    """Accept a Body, a conventional planet number, or a body name."""
    if isinstance(body, Body):
        return body
    if isinstance(body, int):
        return Body.from_planet_number(body)
    return Body.from_name(body)


class EphemerisSession:
    """
    An open JPL-format ephemeris file and its parsed header.

    Sessions are independent of each other, so several files can be open at
    once. A session can be reopened on another file, which closes the first.
    Lookups on one session may run from several threads; record reads are
    serialized inside the record store.

    Example:
        with EphemerisSession("de430.bin") as session:
            xyz = session.lookup(2451545.0, Body.MARS, Body.SUN)
    """

    def __init__(
        self,
        path: Optional[str] = None,
        *,
        search_path: Optional[str] = None,
        cache_size: int = 0,
        coefficient_count: int = COEFFICIENT_COUNT,
    ):
        """
        Initialize a session, opening `path` if given.

        Args:
            path: Ephemeris file to open
            search_path: Extra directories to search for relative paths
            cache_size: Number of data records to keep cached (0 = none)
            coefficient_count: Floats per record; the record size is 8x this
        """
        self.search_path = search_path
        self.cache_size = cache_size
        self.coefficient_count = coefficient_count
        self.path: Optional[str] = None
        self._file: Optional[BinaryIO] = None
        self._header: Optional[EphemerisHeader] = None
        self._store: Optional[RecordStore] = None
        if path is not None:
            self.open(path)

    def __enter__(self) -> "EphemerisSession":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        return self._store is not None

    @property
    def header(self) -> EphemerisHeader:
        if self._header is None:
            raise NotOpenError()
        return self._header

    @property
    def de_number(self) -> int:
        if self.path is None:
            raise NotOpenError()
        return de_number_from_filename(self.path)

    def open(self, path: str) -> Tuple[float, float, float]:
        """
        Open an ephemeris file, closing any file this session already holds.

        Args:
            path: File path, or a name to resolve through the search path

        Returns:
            (valid_start, valid_end, step_days)

        Raises:
            OpenError: If the file cannot be found or opened
            TruncatedHeaderError, ShortReadError, InvalidHeaderError: If the
                header cannot be read
        """
        if self.is_open:
            self.close()

        start_time = time.time()
        full_path = resolve_ephemeris_path(path, self.search_path)
        try:
            stream = open(full_path, "rb")
        except OSError as e:
            raise OpenError(full_path, str(e)) from e

        try:
            header = parse_header(
                stream,
                record_size=self.coefficient_count * 8,
                coefficient_count=self.coefficient_count,
            )
        except Exception:
            stream.close()
            raise

        self.path = full_path
        self._file = stream
        self._header = header
        self._store = RecordStore(
            stream, header, self.coefficient_count, cache_size=self.cache_size
        )

        logger.info(
            f"Opened {full_path}: JD {header.valid_start} to {header.valid_end}, "
            f"step {header.step_days} days ({time.time() - start_time:.3f}s)"
        )
        return header.valid_start, header.valid_end, header.step_days

    def close(self) -> None:
        """Close the file and drop the header and any cached records."""
        if self._store is not None:
            self._store.close()
        if self._file is not None:
            self._file.close()
            logger.info(f"Closed {self.path}")
        self._store = None
        self._file = None
        self._header = None
        self.path = None

    def _require_store(self) -> RecordStore:
        if self._store is None:
            raise NotOpenError()
        return self._store

    def state(
        self,
        t: float,
        target: BodyLike,
        center: BodyLike = Body.SOLAR_SYSTEM_BARYCENTER,
        velocity: bool = True,
    ) -> StateVector:
        """
        Equatorial Cartesian state of target relative to center.

        Args:
            t: Julian date (dynamical time)
            target: Body to locate
            center: Origin of the result
            velocity: Whether to compute velocities

        Returns:
            StateVector in AU and AU/day

        Raises:
            NotOpenError, OutOfRangeError, ShortReadError, UnknownBodyError,
            InsufficientCoefficientsError
        """
        store = self._require_store()
        record = store.fetch(t)
        return compose_state(
            record, store.header, t, as_body(target), as_body(center), velocity
        )

    def lookup(
        self,
        t: float,
        target: BodyLike,
        center: BodyLike = Body.SOLAR_SYSTEM_BARYCENTER,
        flags: Optional[RequestFlags] = None,
    ) -> np.ndarray:
        """
        Six rendered components for target relative to center at time t.

        A heliocentric request replaces the center with the Sun before the
        state is composed; the remaining flags only change representation.

        Args:
            t: Julian date (dynamical time)
            target: Body to locate
            center: Origin when flags don't ask for a heliocentric result
            flags: Backend, center, shape, angle unit and velocity choices

        Returns:
            Array of 6 floats

        Raises:
            BackendUnavailableError: If a non-JPL backend is requested
            plus everything state() raises
        """
        flags = flags or RequestFlags()
        if flags.backend is not Backend.JPL:
            raise BackendUnavailableError(flags.backend.name)

        center_body = as_body(center)
        if flags.center is Center.HELIOCENTRIC:
            center_body = Body.SUN

        state = self.state(t, target, center_body, velocity=flags.velocity)
        return render(state, flags)

    def calc(self, t: float, body: BodyLike, flags: Optional[RequestFlags] = None) -> np.ndarray:
        """Position of a body relative to the origin implied by flags (barycentric by default)."""
        return self.lookup(t, body, Body.SOLAR_SYSTEM_BARYCENTER, flags)

    def calc_ut(
        self, t_ut: float, body: BodyLike, flags: Optional[RequestFlags] = None
    ) -> np.ndarray:
        """Like calc, for a universal-time Julian date."""
        return self.calc(ut_to_et(t_ut), body, flags)

    def cache_info(self) -> CacheInfo:
        return self._require_store().cache_info()

    def get_info(self) -> Dict[str, Any]:
        """
        Summarize the open file.

        Raises:
            NotOpenError: If no file is open
        """
        header = self.header
        populated = {
            body.name: header.entry(body.slot)
            for body in Body
            if body.slot is not None and header.entry(body.slot).populated
        }
        return {
            "path": self.path,
            "de_number": self.de_number,
            "valid_start": header.valid_start,
            "valid_end": header.valid_end,
            "step_days": header.step_days,
            "record_count": header.record_count,
            "au": header.au,
            "earth_moon_mass_ratio": header.earth_moon_mass_ratio,
            "constant_count": header.constant_count,
            "layout": populated,
        }
