"""
Maximum-likelihood estimating equation of the Jelinski-Moranda model.

For a candidate total fault count B the equation reads

    f(B) = Σ 1/(B - i + 1) - n·ΣXi / Σ (B - i + 1)·Xi,    i = 1..n

and the estimate of B is its root. There is no closed form, so the
root is located numerically by :mod:`jmrel.solver`.

An undefined evaluation (B outside the domain, or an unstable
denominator) is returned as ``None`` rather than raised.
"""

from typing import Optional
import numpy as np

from .data import IntervalSequence


# Denominators below this magnitude are treated as zero
STABILITY_THRESHOLD = 1e-12


def hazard_terms(b: float, seq: IntervalSequence) -> np.ndarray:
    """Remaining-fault terms B - i + 1 for i = 1..n."""
    return b - seq.indices + 1.0


def weighted_denominator(b: float, seq: IntervalSequence) -> float:
    """Σ (B - i + 1)·Xi, shared by the estimating equation and K."""
    return float(np.dot(hazard_terms(b, seq), seq.values))


def estimating_equation(b: float, seq: IntervalSequence) -> Optional[float]:
    """
    Evaluate f(B) for the given interval sequence.

    Args:
        b: Candidate total fault count
        seq: Observed inter-failure intervals

    Returns:
        f(B), or None when any hazard term B - i + 1 is not strictly
        positive or the weighted denominator is numerically zero
    """
    terms = hazard_terms(b, seq)
    if np.any(terms <= 0):
        return None

    sum_inv = float(np.sum(1.0 / terms))
    denom = float(np.dot(terms, seq.values))

    if abs(denom) < STABILITY_THRESHOLD:
        return None

    return sum_inv - (seq.n * seq.sum_xi) / denom
