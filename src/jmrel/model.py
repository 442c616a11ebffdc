"""
Jelinski-Moranda parameter estimation workflow.

Ties the pipeline together:

    intervals → B (root finder) → K → {X(n+1), T_end}

Example usage:
    >>> from jmrel import estimate_parameters
    >>> estimate = estimate_parameters([10, 20, 30])
    >>> print(estimate.summary())
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Union
import json
import math

import numpy as np

from .data import IntervalSequence
from .solver import BracketingRootFinder, SearchState, SolverConfig
from .predictions import (
    compute_k,
    expected_intervals,
    mean_time_to_next_failure,
    reliability,
    time_to_end_of_testing,
)


def json_time(value: Optional[float]) -> Dict[str, Any]:
    """JSON-safe rendering of a predicted time (infinity is not valid JSON)."""
    if value is None:
        return {"value": None, "never": False, "defined": False}
    if math.isinf(value):
        return {"value": None, "never": True, "defined": True}
    return {"value": value, "never": False, "defined": True}


def format_time(value: Optional[float], precision: int = 6) -> str:
    """Human-readable predicted time: "n/a" when undefined, "never" for infinity."""
    if value is None:
        return "n/a"
    if math.isinf(value):
        return "never (no further failures expected)"
    return f"{value:.{precision}f}"


@dataclass
class JMEstimate:
    """
    Fitted Jelinski-Moranda parameters and predictions.

    ``k`` and the two predicted times are None when K is undefined for the
    data (weighted denominator numerically zero). A predicted time of
    ``math.inf`` means no further failure is expected.
    """

    n: int
    sum_xi: float
    b: float
    k: Optional[float]
    mean_time_to_next_failure: Optional[float]
    time_to_end_of_testing: Optional[float]

    # Solver diagnostics
    solver_state: SearchState = SearchState.CONVERGED
    expansions: int = 0
    iterations: int = 0
    warning: Optional[str] = None

    @property
    def remaining_faults(self) -> float:
        """Estimated faults still latent (B - n)."""
        return self.b - self.n

    @property
    def converged(self) -> bool:
        return self.solver_state in (SearchState.CONVERGED, SearchState.NARROWED)

    @property
    def used_fallback(self) -> bool:
        return self.solver_state is SearchState.FALLBACK

    def summary(self) -> str:
        """Generate a text summary of the estimate."""
        k_text = "n/a" if self.k is None else f"{self.k:.8f}"
        lines = [
            "Jelinski-Moranda Model",
            "=" * 50,
            f"Number of failures n = {self.n}",
            f"Sum of intervals = {self.sum_xi:.6f}",
            f"Estimated total faults (B) = {self.b:.6f}",
            f"Proportionality constant (K) = {k_text}",
            f"Mean time to next failure X(n+1) = "
            f"{format_time(self.mean_time_to_next_failure)}",
            f"Time to end of testing T_end = "
            f"{format_time(self.time_to_end_of_testing)}",
            f"Solver: {self.solver_state.value} "
            f"({self.expansions} expansions, {self.iterations} bisections)",
        ]
        if self.warning:
            lines.append(f"Warning: {self.warning}")
        lines.append("=" * 50)
        return "\n".join(lines)

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "n": self.n,
            "sum_xi": self.sum_xi,
            "b": self.b,
            "k": self.k,
            "remaining_faults": self.remaining_faults,
            "mean_time_to_next_failure": json_time(self.mean_time_to_next_failure),
            "time_to_end_of_testing": json_time(self.time_to_end_of_testing),
            "solver": {
                "state": self.solver_state.value,
                "expansions": self.expansions,
                "iterations": self.iterations,
                "warning": self.warning,
            },
        }

    def to_json(self, indent: int = 2) -> str:
        """Export as JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, filepath: str):
        """Save the estimate to a JSON file."""
        with open(filepath, 'w') as f:
            f.write(self.to_json())


class JelinskiMorandaModel:
    """
    Jelinski-Moranda software reliability model.

    Each latent fault contributes the same constant hazard K, so after
    i - 1 fixes the failure rate is K·(B - i + 1).
    """

    def __init__(self, config: SolverConfig = None):
        self.config = config or SolverConfig()
        self.finder = BracketingRootFinder(self.config)
        self.intervals: Optional[IntervalSequence] = None
        self.estimate: Optional[JMEstimate] = None

    def fit(self, intervals: Union[IntervalSequence, Iterable[float]]) -> JMEstimate:
        """
        Fit B and K to observed inter-failure intervals.

        Args:
            intervals: Ordered inter-failure durations (at least one)

        Returns:
            JMEstimate with parameters and predictions
        """
        seq = IntervalSequence.from_values(intervals)
        root = self.finder.solve(seq)

        b = root.b
        k = compute_k(b, seq)
        if k is None:
            next_failure = None
            end_of_testing = None
        else:
            next_failure = mean_time_to_next_failure(b, k, seq.n)
            end_of_testing = time_to_end_of_testing(b, k, seq.n)

        self.intervals = seq
        self.estimate = JMEstimate(
            n=seq.n,
            sum_xi=seq.sum_xi,
            b=b,
            k=k,
            mean_time_to_next_failure=next_failure,
            time_to_end_of_testing=end_of_testing,
            solver_state=root.state,
            expansions=root.expansions,
            iterations=root.iterations,
            warning=root.message,
        )
        return self.estimate

    def require_fit(self) -> JMEstimate:
        """Return the current estimate, raising if fit() has not run."""
        if self.estimate is None:
            raise RuntimeError("model has not been fitted; call fit() first")
        return self.estimate

    def predict_intervals(self, steps: int) -> List[float]:
        """Expected durations of the next ``steps`` failures."""
        est = self.require_fit()
        if est.k is None:
            return []
        return expected_intervals(est.b, est.k, est.n, steps)

    def fitted_intervals(self) -> np.ndarray:
        """Model-expected durations 1/(K·(B - i + 1)) of the observed intervals."""
        est = self.require_fit()
        if est.k is None:
            return np.full(est.n, np.nan)
        terms = est.b - self.intervals.indices + 1.0
        with np.errstate(divide='ignore'):
            return 1.0 / (est.k * terms)

    def reliability(self, t: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Probability of surviving time t without the next failure."""
        est = self.require_fit()
        if est.k is None:
            raise RuntimeError("K is undefined for the fitted data")
        return reliability(est.b, est.k, est.n, t)


def estimate_parameters(
    intervals: Union[IntervalSequence, Iterable[float]],
    config: SolverConfig = None,
) -> JMEstimate:
    """
    Estimate Jelinski-Moranda parameters in one call.

    Args:
        intervals: Ordered inter-failure durations (at least one)
        config: Optional solver configuration

    Returns:
        JMEstimate
    """
    return JelinskiMorandaModel(config).fit(intervals)
