"""
Quantities derived from a fitted total fault count B.

Given B, the proportionality constant K follows in closed form:

    K = n / Σ (B - i + 1)·Xi

and with (B, K, n) the model predicts

    X(n+1) = 1 / (K·(B - n))              mean time to next failure
    T_end  = (1 + 1/2 + ... + 1/m) / K    m = floor(B) - n remaining faults

A prediction of "never" is returned as ``math.inf``; an undefined K is
returned as ``None``.
"""

import math
from typing import List, Optional, Union
import numpy as np

from .data import IntervalSequence
from .equation import STABILITY_THRESHOLD, weighted_denominator


def is_never(value: Optional[float]) -> bool:
    """True for the positive-infinity "no further failure expected" value."""
    return value is not None and math.isinf(value) and value > 0


def compute_k(b: float, seq: IntervalSequence) -> Optional[float]:
    """
    Per-fault hazard proportionality constant K.

    Args:
        b: Estimated total fault count
        seq: Observed intervals

    Returns:
        K, or None when the weighted denominator is numerically zero
    """
    denom = weighted_denominator(b, seq)
    if abs(denom) < STABILITY_THRESHOLD:
        return None
    return seq.n / denom


def mean_time_to_next_failure(b: float, k: float, n: int) -> float:
    """
    Expected duration until failure n + 1.

    Returns math.inf when B <= n (no faults left) or when K·(B - n) is
    numerically zero.
    """
    if b <= n:
        return math.inf
    denom = k * (b - n)
    if abs(denom) < STABILITY_THRESHOLD:
        return math.inf
    return 1.0 / denom


def harmonic_number(m: int) -> float:
    """H(m) = Σ 1/i for i = 1..m, 0 for m <= 0."""
    if m <= 0:
        return 0.0
    return float(np.sum(1.0 / np.arange(1, m + 1, dtype=np.float64)))


def time_to_end_of_testing(b: float, k: float, n: int) -> float:
    """
    Expected remaining test time until the last whole fault is found.

    Each remaining fault takes longer to find as the hazard drops, so
    the sum of the expected intervals is the harmonic number of the
    remaining count divided by K.

    Args:
        b: Estimated total fault count
        k: Proportionality constant
        n: Failures observed so far

    Returns:
        Remaining time; 0.0 when floor(B) <= n
    """
    remaining = int(math.floor(b)) - n
    if remaining <= 0:
        return 0.0
    return harmonic_number(remaining) / k


def failure_intensity(b: float, k: float, failures_found: int) -> float:
    """Hazard rate K·(B - failures_found), clipped at zero."""
    return max(0.0, k * (b - failures_found))


def expected_intervals(b: float, k: float, n: int, steps: int) -> List[float]:
    """
    Expected durations of the next ``steps`` inter-failure intervals.

    Interval n + j has mean 1 / (K·(B - n - j + 1)). The forecast stops
    early once the model has no whole faults left (n + j > floor(B)).
    """
    remaining = int(math.floor(b)) - n
    intervals = []
    for j in range(1, min(steps, max(remaining, 0)) + 1):
        intervals.append(mean_time_to_next_failure(b - j + 1, k, n))
    return intervals


def reliability(
    b: float, k: float, n: int, t: Union[float, np.ndarray]
) -> Union[float, np.ndarray]:
    """
    Probability of no failure within time t of the current period.

    R(t) = exp(-K·(B - n)·t)
    """
    rate = failure_intensity(b, k, n)
    result = np.exp(-rate * np.asarray(t, dtype=np.float64))
    if np.ndim(result) == 0:
        return float(result)
    return result
