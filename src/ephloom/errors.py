"""
Exception hierarchy for ephemeris file access and lookups.

Every failure raised by ephloom derives from EphemerisError so callers can
catch the whole family at once. Nothing here is retried: a short or corrupt
read is not transient, and a lookup either yields a full state vector or
raises.
"""

from typing import Optional


class EphemerisError(Exception):
    """Base class for all ephloom errors."""

    pass


class NotOpenError(EphemerisError):
    """Raised when a read or lookup is attempted without an open ephemeris file."""

    def __init__(self, message: str = "No ephemeris file is open"):
        super().__init__(message)


class BackendUnavailableError(EphemerisError):
    """Raised when a backend other than the JPL file reader is requested."""

    def __init__(self, backend: str):
        self.backend = backend
        super().__init__(f"Ephemeris backend {backend} is not available")


class FileError(EphemerisError):
    """Base class for failures reading the ephemeris file itself."""

    pass


class OpenError(FileError):
    """Raised when the ephemeris file cannot be located or opened."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open ephemeris file {path}: {reason}")


class TruncatedHeaderError(FileError):
    """Raised when the file holds fewer bytes than one header record."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Truncated header: expected {expected} bytes, got {actual}"
        )


class ShortReadError(FileError):
    """Raised when a data record read returns fewer bytes than a record holds."""

    def __init__(
        self,
        expected: int,
        actual: int,
        record_index: Optional[int] = None,
        reason: Optional[str] = None,
    ):
        self.expected = expected
        self.actual = actual
        self.record_index = record_index
        message = f"Short read: expected {expected} bytes, got {actual}"
        if record_index is not None:
            message += f" (record {record_index})"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class InvalidHeaderError(FileError, ValueError):
    """Raised when a parsed header violates the interval or step invariants."""

    pass


class EphemerisLookupError(EphemerisError):
    """Base class for failures of a single lookup."""

    pass


class OutOfRangeError(EphemerisLookupError, ValueError):
    """Raised when the requested time lies outside the file's validity interval."""

    def __init__(self, t: float, valid_start: float, valid_end: float):
        self.t = t
        self.valid_start = valid_start
        self.valid_end = valid_end
        super().__init__(
            f"JD {t} is outside the ephemeris range [{valid_start}, {valid_end}]"
        )


class UnknownBodyError(EphemerisLookupError, ValueError):
    """Raised when a body has no populated coefficient layout in the file."""

    def __init__(self, body: object):
        self.body = body
        name = getattr(body, "name", body)
        super().__init__(f"No coefficient series for body {name} in this file")


class InsufficientCoefficientsError(EphemerisLookupError):
    """Raised when a series has too few coefficients to yield a derivative."""

    def __init__(self, coefficient_count: int, required: int = 2):
        self.coefficient_count = coefficient_count
        self.required = required
        super().__init__(
            f"Series has {coefficient_count} coefficients per component, "
            f"at least {required} required"
        )
