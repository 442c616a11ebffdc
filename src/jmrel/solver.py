"""
Bracketing root finder for the total fault count B.

The estimating equation is only defined for B > n - 1 and its root can
sit arbitrarily far above n for weak reliability growth, so the search
runs in two phases:

    Searching → Bracketed → Converged / Narrowed / Exhausted

1. Expand a bracket [n + ε, right] with arithmetically growing width
   until f changes sign.
2. Bisect the bracket for a bounded number of iterations.

If no sign change is found the solver falls back to B = n + 1. The
fallback is a fixed policy rather than an estimate; it keeps the
pipeline total for every finite input.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple, Union
import warnings

from .data import IntervalSequence
from .equation import estimating_equation


class FallbackEstimateWarning(RuntimeWarning):
    """Issued when no sign change is found and B falls back to n + 1."""


class SearchState(Enum):
    """How a root search ended."""

    CONVERGED = "converged"                  # |f(m)| below tolerance
    NARROWED = "narrowed"                    # bracket width below tolerance
    EXHAUSTED_ITERATIONS = "exhausted"       # bisection budget used up
    UNDEFINED_MIDPOINT = "undefined_midpoint"
    FALLBACK = "fallback"                    # no bracket, B = n + 1


@dataclass
class SolverConfig:
    """Configuration for the bracketing root finder."""

    # Bracket search
    boundary_offset: float = 1e-8    # left end sits at n + offset
    initial_width: float = 1.0
    expansion_step: float = 2.0      # attempt k widens to left + k·step
    max_expansions: int = 1000
    max_span: float = 1e6            # right end never passes n + max_span

    # Bisection
    max_bisections: int = 200
    tolerance: float = 1e-9          # |f(m)| considered zero
    width_tolerance: float = 1e-10


@dataclass
class Bracket:
    """Candidate interval [a, b] for the root with the function values at its ends."""

    a: float
    b: float
    f_a: Optional[float]
    f_b: Optional[float]

    @property
    def width(self) -> float:
        return abs(self.b - self.a)

    @property
    def has_sign_change(self) -> bool:
        """True when both ends are defined and f does not keep its sign."""
        if self.f_a is None or self.f_b is None:
            return False
        return self.f_a * self.f_b <= 0


@dataclass
class RootResult:
    """
    Outcome of a root search.

    ``b`` is always finite. ``state`` tells which stopping condition
    produced it.
    """

    b: float
    state: SearchState
    expansions: int = 0
    iterations: int = 0
    f_value: Optional[float] = None
    initial_bracket: Optional[Bracket] = None
    message: Optional[str] = None

    @property
    def used_fallback(self) -> bool:
        return self.state is SearchState.FALLBACK

    @property
    def converged(self) -> bool:
        """True when the bisection met the tolerance or narrowed the bracket."""
        return self.state in (SearchState.CONVERGED, SearchState.NARROWED)


class BracketingRootFinder:
    """
    Expanding-bracket bisection solver for the estimating equation.

    Example:
        >>> finder = BracketingRootFinder()
        >>> result = finder.solve(IntervalSequence([10, 20, 30]))
        >>> result.converged
        True
    """

    def __init__(self, config: SolverConfig = None):
        self.config = config or SolverConfig()

    def find_bracket(self, seq: IntervalSequence) -> Tuple[Bracket, int]:
        """
        Search for an interval on which f changes sign.

        The left end stays just inside the domain while the right end
        moves outwards: attempt k sets right = left + k·expansion_step.

        Args:
            seq: Observed intervals

        Returns:
            Tuple of the last bracket tried and the number of expansions
        """
        cfg = self.config
        n = seq.n

        left = n + cfg.boundary_offset
        right = left + cfg.initial_width
        bracket = Bracket(
            a=left,
            b=right,
            f_a=estimating_equation(left, seq),
            f_b=estimating_equation(right, seq),
        )

        expansions = 0
        while not bracket.has_sign_change and expansions < cfg.max_expansions:
            right = left + (expansions + 1) * cfg.expansion_step
            bracket.b = right
            bracket.f_b = estimating_equation(right, seq)
            expansions += 1
            if right > n + cfg.max_span:
                break

        return bracket, expansions

    def bisect(self, seq: IntervalSequence, bracket: Bracket) -> RootResult:
        """
        Bisect a sign-changing bracket.

        Stops on the first of: an undefined midpoint, |f(m)| below
        tolerance, bracket width below width_tolerance, or the
        iteration budget running out. The midpoint is returned in every
        case.
        """
        cfg = self.config
        a, b = bracket.a, bracket.b
        f_a = bracket.f_a

        for iteration in range(1, cfg.max_bisections + 1):
            m = 0.5 * (a + b)
            f_m = estimating_equation(m, seq)

            if f_m is None:
                return RootResult(m, SearchState.UNDEFINED_MIDPOINT,
                                  iterations=iteration)
            if abs(f_m) < cfg.tolerance:
                return RootResult(m, SearchState.CONVERGED,
                                  iterations=iteration, f_value=f_m)

            if f_a * f_m <= 0:
                b = m
            else:
                a, f_a = m, f_m

            if abs(b - a) < cfg.width_tolerance:
                m = 0.5 * (a + b)
                return RootResult(m, SearchState.NARROWED, iterations=iteration,
                                  f_value=estimating_equation(m, seq))

        m = 0.5 * (a + b)
        return RootResult(m, SearchState.EXHAUSTED_ITERATIONS,
                          iterations=cfg.max_bisections,
                          f_value=estimating_equation(m, seq))

    def solve(self, seq: IntervalSequence) -> RootResult:
        """
        Estimate B for the given intervals.

        Never raises for a non-empty finite sequence. When no bracket is
        found the fallback B = n + 1 is returned and a
        FallbackEstimateWarning is issued.
        """
        bracket, expansions = self.find_bracket(seq)

        if not bracket.has_sign_change:
            message = (
                f"no sign change of the estimating equation within "
                f"{expansions} bracket expansions; using fallback B = n + 1"
            )
            warnings.warn(message, FallbackEstimateWarning, stacklevel=2)
            return RootResult(
                b=seq.n + 1.0,
                state=SearchState.FALLBACK,
                expansions=expansions,
                f_value=estimating_equation(seq.n + 1.0, seq),
                message=message,
            )

        initial = Bracket(bracket.a, bracket.b, bracket.f_a, bracket.f_b)
        result = self.bisect(seq, bracket)
        result.expansions = expansions
        result.initial_bracket = initial
        return result


def find_b(
    intervals: Union[IntervalSequence, Iterable[float]],
    config: SolverConfig = None,
) -> float:
    """
    Estimate the total fault count B from inter-failure intervals.

    Args:
        intervals: Observed intervals (n >= 1)
        config: Optional solver configuration

    Returns:
        Finite estimate of B
    """
    seq = IntervalSequence.from_values(intervals)
    return BracketingRootFinder(config).solve(seq).b
