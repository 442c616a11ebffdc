"""
Extraction of interval values from free-form text.

Intervals are typically pasted from a test log, so anything that is not
a number is ignored. A comma is read as a decimal separator ("1,5" is
1.5); values must therefore be separated by whitespace or by a comma
followed by whitespace.
"""

import re
from typing import List, Optional

from .data import EmptySequenceError, IntervalSequence


NUMBER_PATTERN = re.compile(r"[+-]?\d*\.?\d+")


class NoNumbersError(EmptySequenceError):
    """Raised when no numeric token could be extracted from the input."""


def parse_numbers(text: Optional[str]) -> List[float]:
    """
    Extract all numeric tokens from text, in order.

    Args:
        text: Free-form input (None is treated as empty)

    Returns:
        List of parsed values
    """
    if text is None:
        return []

    values = []
    for token in NUMBER_PATTERN.findall(text.replace(",", ".")):
        try:
            values.append(float(token))
        except ValueError:
            continue
    return values


def parse_intervals(text: Optional[str], cumulative: bool = False) -> IntervalSequence:
    """
    Parse an interval sequence from text.

    Args:
        text: Free-form input
        cumulative: Interpret the values as cumulative failure times

    Returns:
        IntervalSequence

    Raises:
        NoNumbersError: If the text contains no numbers
    """
    values = parse_numbers(text)
    if not values:
        raise NoNumbersError("no numbers found in input")
    if cumulative:
        return IntervalSequence.from_cumulative_times(values)
    return IntervalSequence(values)
