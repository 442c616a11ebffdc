"""
Inter-failure interval data.

The Jelinski-Moranda model is fitted to an ordered sequence of
inter-failure durations X1..Xn. This module wraps that sequence in an
immutable container and offers the conversion from cumulative failure
times, which is how test logs are often recorded.
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Union
import numpy as np


class EmptySequenceError(ValueError):
    """Raised when an interval sequence contains no values."""


@dataclass(frozen=True, eq=False)
class IntervalSequence:
    """
    Ordered, immutable sequence of inter-failure intervals.

    Positivity is not checked: zero or negative durations are accepted
    and simply lead to undefined or fallback results further down the
    pipeline.
    """

    values: np.ndarray
    sum_xi: float = field(init=False)

    def __post_init__(self):
        values = np.array(self.values, dtype=np.float64).ravel()
        if values.size == 0:
            raise EmptySequenceError("interval sequence is empty")
        values.setflags(write=False)

        object.__setattr__(self, "values", values)
        object.__setattr__(self, "sum_xi", float(np.sum(values)))

    @classmethod
    def from_values(
        cls, values: Union["IntervalSequence", Iterable[float]]
    ) -> "IntervalSequence":
        """Build a sequence, passing existing instances through."""
        if isinstance(values, cls):
            return values
        return cls(np.fromiter(values, dtype=np.float64))

    @classmethod
    def from_cumulative_times(cls, times: Sequence[float]) -> "IntervalSequence":
        """
        Convert cumulative failure times into inter-failure intervals.

        The first interval is the first failure time; every later one is
        the difference to the previous failure.

        Args:
            times: Cumulative failure times t1, t2, ..., tn

        Returns:
            IntervalSequence of the successive differences
        """
        t = np.asarray(times, dtype=np.float64).ravel()
        if t.size == 0:
            raise EmptySequenceError("no failure times given")
        return cls(np.diff(np.concatenate([[0.0], t])))

    @property
    def n(self) -> int:
        """Number of observed failures."""
        return int(self.values.size)

    @property
    def indices(self) -> np.ndarray:
        """Failure indices 1..n as floats."""
        return np.arange(1, self.n + 1, dtype=np.float64)

    @property
    def cumulative_times(self) -> np.ndarray:
        """Cumulative failure times (running sum of the intervals)."""
        return np.cumsum(self.values)

    def __len__(self) -> int:
        return self.n

    def __iter__(self):
        return iter(self.values.tolist())
