"""
jmrel
=====

Software reliability estimation with the Jelinski-Moranda model.

From a sequence of observed inter-failure intervals the package fits
the total fault count B and the per-fault hazard constant K, then
predicts the mean time to the next failure and the expected remaining
time to the end of testing.

License: MIT
"""

__version__ = "0.1.0"

from .data import (
    IntervalSequence,
    EmptySequenceError,
)

from .equation import (
    STABILITY_THRESHOLD,
    estimating_equation,
    weighted_denominator,
)

from .solver import (
    SolverConfig,
    SearchState,
    Bracket,
    RootResult,
    BracketingRootFinder,
    FallbackEstimateWarning,
    find_b,
)

from .predictions import (
    compute_k,
    mean_time_to_next_failure,
    time_to_end_of_testing,
    harmonic_number,
    failure_intensity,
    expected_intervals,
    reliability,
    is_never,
)

from .model import (
    JMEstimate,
    JelinskiMorandaModel,
    estimate_parameters,
)

from .parsing import (
    NoNumbersError,
    parse_numbers,
    parse_intervals,
)

__all__ = [
    # Version info
    "__version__",

    # Data
    "IntervalSequence",
    "EmptySequenceError",

    # Estimating equation
    "STABILITY_THRESHOLD",
    "estimating_equation",
    "weighted_denominator",

    # Root finder
    "SolverConfig",
    "SearchState",
    "Bracket",
    "RootResult",
    "BracketingRootFinder",
    "FallbackEstimateWarning",
    "find_b",

    # Predictions
    "compute_k",
    "mean_time_to_next_failure",
    "time_to_end_of_testing",
    "harmonic_number",
    "failure_intensity",
    "expected_intervals",
    "reliability",
    "is_never",

    # Model
    "JMEstimate",
    "JelinskiMorandaModel",
    "estimate_parameters",

    # Parsing
    "NoNumbersError",
    "parse_numbers",
    "parse_intervals",
]
