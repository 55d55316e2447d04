"""
Locating ephemeris files on disk.

Relative file names are searched for in, in order: an explicit search path,
the directories listed in EPHLOOM_EPHE_PATH, ./ephe and the current
directory.
"""

import os
from typing import List, Optional

from .errors import OpenError
from .logging import get_logger

logger = get_logger(__name__)

EPHE_PATH_ENV_VAR = "EPHLOOM_EPHE_PATH"
DEFAULT_SEARCH_DIRS = ["./ephe", "./"]


def search_dirs(search_path: Optional[str] = None) -> List[str]:
    """
    Directories to search for a relative ephemeris file name.

    Args:
        search_path: Extra directories (os.pathsep separated) searched first

    Returns:
        Directories in search order
    """
    dirs: List[str] = []
    for value in (search_path, os.environ.get(EPHE_PATH_ENV_VAR)):
        if value:
            dirs.extend(d for d in value.split(os.pathsep) if d)
    dirs.extend(DEFAULT_SEARCH_DIRS)
    return dirs


def resolve_ephemeris_path(filename: str, search_path: Optional[str] = None) -> str:
    """
    Find an ephemeris file.

    Args:
        filename: Absolute path, or a name to look up in the search directories
        search_path: Extra directories searched before the defaults

    Returns:
        Path to an existing file

    Raises:
        OpenError: If the file cannot be found
    """
    if os.path.isabs(filename):
        if os.path.isfile(filename):
            return filename
        raise OpenError(filename, "file does not exist")

    for directory in search_dirs(search_path):
        candidate = os.path.join(directory, filename)
        if os.path.isfile(candidate):
            logger.debug(f"Resolved {filename} to {candidate}")
            return candidate

    raise OpenError(filename, "not found in " + ", ".join(search_dirs(search_path)))


def de_number_from_filename(path: str) -> int:
    """
    Guess the JPL DE series number from a file name such as "lnxp1600p2200.430".

    Returns:
        405, 406, 430 or 431; 431 when the name gives no hint
    """
    name = os.path.basename(path).lower()
    for number in (405, 406, 430, 431):
        if f"de{number}" in name or name.endswith(f".{number}"):
            return number
    return 431
