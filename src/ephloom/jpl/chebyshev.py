"""
Chebyshev evaluation of a body's position and velocity from a data record.

Each body's coefficients inside a record are laid out by sub-interval, then
by component (x, y, z), innermost by Chebyshev order:

    offset + l * 3 * n + c * n + i

for sub-interval l, component c and order i, where n is the number of
coefficients per component.
"""

import math
from typing import Tuple

import numpy as np

from ..errors import InsufficientCoefficientsError
from .header import LayoutEntry
from .record_store import DataRecord


def chebyshev_basis(x: float, n: int) -> np.ndarray:
    """
    Chebyshev polynomials T_0..T_{n-1} at x.

    T_0 = 1, T_1 = x, T_k = 2x T_{k-1} - T_{k-2}
    """
    t = np.empty(n)
    t[0] = 1.0
    if n > 1:
        t[1] = x
    for k in range(2, n):
        t[k] = 2.0 * x * t[k - 1] - t[k - 2]
    return t


def chebyshev_derivative_basis(x: float, t: np.ndarray) -> np.ndarray:
    """
    Derivatives dT_0..dT_{n-1} at x, given the basis t from chebyshev_basis.

    dT_0 = 0, dT_1 = 1, dT_k = 2x dT_{k-1} + 2 T_{k-1} - dT_{k-2}
    """
    n = len(t)
    dt = np.empty(n)
    dt[0] = 0.0
    if n > 1:
        dt[1] = 1.0
    for k in range(2, n):
        dt[k] = 2.0 * x * dt[k - 1] + 2.0 * t[k - 1] - dt[k - 2]
    return dt


def normalized_time(
    t: float, record_start: float, step_days: float, sub_intervals: int
) -> Tuple[int, float]:
    """
    Locate t inside a record.

    Args:
        t: Julian date to evaluate at
        record_start: The record's start epoch
        step_days: Length of a record in days
        sub_intervals: Number of sub-intervals the body's series is split into

    Returns:
        (sub-interval index, Chebyshev argument in [-1, 1])
    """
    fraction = (t - record_start) / step_days
    scaled = sub_intervals * fraction
    index = min(max(math.floor(scaled), 0), sub_intervals - 1)
    return index, 2.0 * (scaled - index) - 1.0


def evaluate_series(
    record: DataRecord,
    entry: LayoutEntry,
    t: float,
    step_days: float,
    velocity: bool = True,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate one body's series at time t.

    Velocity is the derivative of the series scaled by
    2 * sub_intervals / step_days, which converts the [-1, 1] argument's rate
    into AU/day.

    Args:
        record: Data record covering t
        entry: The body's layout entry
        t: Julian date (dynamical time)
        step_days: Record length from the header
        velocity: Whether to compute the velocity components

    Returns:
        (position[3], velocity[3]); velocity is zero when not requested

    Raises:
        InsufficientCoefficientsError: If velocity is requested with fewer
            than 2 coefficients per component, or the series is empty
    """
    n = entry.coefficient_count
    required = 2 if velocity else 1
    if n < required:
        raise InsufficientCoefficientsError(n, required)

    index, x = normalized_time(t, record.record_start, step_days, entry.sub_intervals)
    start = entry.offset + index * 3 * n
    block = record.coefficients[start : start + 3 * n].reshape(3, n)

    basis = chebyshev_basis(x, n)
    position = block @ basis

    if not velocity:
        return position, np.zeros(3)

    rate = block @ chebyshev_derivative_basis(x, basis)
    return position, rate * (2.0 * entry.sub_intervals / step_days)
