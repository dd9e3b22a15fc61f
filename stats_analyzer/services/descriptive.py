"""Descriptive statistics over a sample set.

Every public function validates its argument with :func:`validate_samples`
before computing, so all of them fail the same way on bad input. None of
them mutate or reorder the caller's sequence.
"""
from __future__ import annotations

import logging
import math
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass
from numbers import Real
from types import MappingProxyType
from typing import Any, Callable, Mapping

from stats_analyzer.services.errors import EmptyInputError, InvalidTypeError

__all__: list[str] = [
    "Summary",
    "STATISTICS",
    "validate_samples",
    "average",
    "maximum",
    "minimum",
    "median",
    "mode",
    "value_range",
    "range_",
    "standard_deviation",
    "summary",
]

logger = logging.getLogger(__name__)

Samples = tuple[Real, ...]


@dataclass(frozen=True)
class Summary:
    """All seven statistics of one sample set."""

    average: float
    maximum: Real
    median: Real
    minimum: Real
    mode: tuple[Real, ...]
    range: Real
    standard_deviation: float


def validate_samples(values: Any) -> Samples:
    """
    Check that *values* is a non-empty sequence of finite real numbers.
    Returns a tuple snapshot of the samples.
    Raises InvalidTypeError or EmptyInputError.
    """
    if not isinstance(values, Sequence) or isinstance(values, (str, bytes, bytearray)):
        logger.debug("Rejected samples of type %s", type(values).__name__)
        raise InvalidTypeError("The passed argument is not an array.")
    if len(values) == 0:
        logger.debug("Rejected empty samples")
        raise EmptyInputError("The passed array contains no elements.")
    samples = tuple(values)
    for index, value in enumerate(samples):
        if not _is_finite_real(value):
            logger.debug("Rejected sample %r at index %d", value, index)
            raise InvalidTypeError(
                f"The passed array contains not just numbers (index {index}: {value!r})."
            )
    return samples


def _is_finite_real(value: Any) -> bool:
    # bool is an int subclass but not a sample
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints and fractions too large for a float
        return False


# Helpers below take an already validated snapshot.

def _magnitude(samples: Samples) -> float:
    return float(max(abs(_minimum(samples)), abs(_maximum(samples))))


def _average(samples: Samples) -> float:
    try:
        return math.fsum(samples) / len(samples)
    except OverflowError:
        # the sum leaves float range even though the mean cannot
        scale = _magnitude(samples)
        return math.fsum(x / scale for x in samples) / len(samples) * scale


def _maximum(samples: Samples) -> Real:
    return max(samples)


def _minimum(samples: Samples) -> Real:
    return min(samples)


def _median(samples: Samples) -> Real:
    ordered = sorted(samples)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    low, high = ordered[mid - 1], ordered[mid]
    middle = (low + high) / 2
    if math.isinf(middle):
        middle = low / 2 + high / 2
    return middle


def _mode(samples: Samples) -> tuple[Real, ...]:
    counts = Counter(samples)
    top = max(counts.values())
    return tuple(sorted(value for value, count in counts.items() if count == top))


def _range(samples: Samples) -> Real:
    return _maximum(samples) - _minimum(samples)


def _standard_deviation(samples: Samples) -> float:
    if _minimum(samples) == _maximum(samples):
        return 0.0
    # Deviations are taken in units of the largest magnitude so squaring
    # neither overflows near the float limit nor underflows for subnormals.
    scale = _magnitude(samples)
    avg = _average(samples) / scale
    deviations = [x / scale - avg for x in samples]
    variance = math.fsum(d * d for d in deviations) / len(samples)
    return math.sqrt(variance) * scale


def average(values: Sequence[Real]) -> float:
    """Arithmetic mean of the samples."""
    return _average(validate_samples(values))


def maximum(values: Sequence[Real]) -> Real:
    """Largest sample."""
    return _maximum(validate_samples(values))


def minimum(values: Sequence[Real]) -> Real:
    """Smallest sample."""
    return _minimum(validate_samples(values))


def median(values: Sequence[Real]) -> Real:
    """
    Middle sample of a sorted copy, or the mean of the two middle samples
    when the count is even.
    """
    return _median(validate_samples(values))


def mode(values: Sequence[Real]) -> tuple[Real, ...]:
    """
    Every value sharing the highest frequency, sorted ascending.
    When all values are unique, all of them are returned.
    """
    return _mode(validate_samples(values))


def value_range(values: Sequence[Real]) -> Real:
    """Difference between the largest and the smallest sample."""
    return _range(validate_samples(values))


range_ = value_range


def standard_deviation(values: Sequence[Real]) -> float:
    """Population standard deviation (divides by the sample count)."""
    return _standard_deviation(validate_samples(values))


def summary(values: Sequence[Real]) -> Summary:
    """
    Compute average, maximum, median, minimum, mode, range and standard
    deviation in one call.
    Raises InvalidTypeError or EmptyInputError for a malformed sample set.
    """
    samples = validate_samples(values)
    result = Summary(
        average=_average(samples),
        maximum=_maximum(samples),
        median=_median(samples),
        minimum=_minimum(samples),
        mode=_mode(samples),
        range=_range(samples),
        standard_deviation=_standard_deviation(samples),
    )
    logger.debug("Summarized %d samples", len(samples))
    return result


STATISTICS: Mapping[str, Callable[[Sequence[Real]], Any]] = MappingProxyType({
    "average": average,
    "maximum": maximum,
    "median": median,
    "minimum": minimum,
    "mode": mode,
    "range": value_range,
    "standardDeviation": standard_deviation,
})
