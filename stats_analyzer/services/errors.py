"""Input errors raised by the statistics helpers."""
from __future__ import annotations

__all__: list[str] = [
    "StatisticsInputError",
    "InvalidTypeError",
    "EmptyInputError",
]


class StatisticsInputError(Exception):
    """Base class for rejected sample sets."""


class InvalidTypeError(StatisticsInputError, TypeError):
    """The argument is not a sequence of finite real numbers."""


class EmptyInputError(StatisticsInputError, ValueError):
    """The sequence has no elements."""
