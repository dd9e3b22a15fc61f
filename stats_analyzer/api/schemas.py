from enum import Enum
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from stats_analyzer.services.descriptive import STATISTICS, validate_samples
from stats_analyzer.services.errors import StatisticsInputError

Number = Union[int, float]

# Path parameter for /statistics/{name}, one member per entry in STATISTICS
StatisticName = Enum("StatisticName", {name: name for name in STATISTICS}, type=str)


# Input schema for /summary and /statistics/{name}
class SamplesIn(BaseModel):
    # Items stay untyped so pydantic never coerces "3" or true into a number
    numbers: List[Any]

    @field_validator('numbers')
    def check_samples(cls, v):
        # Same rules as the library; pydantic only reports ValueError
        try:
            validate_samples(v)
        except StatisticsInputError as exc:
            raise ValueError(str(exc)) from exc
        return v

    model_config = {"extra": "forbid"}  # Forbid extra fields in input


# Output schema for /summary
class SummaryOut(BaseModel):
    average: float
    maximum: Number
    median: Number
    minimum: Number
    mode: List[Number]    # Most frequent values, ascending
    range: Number         # maximum - minimum
    standard_deviation: float = Field(alias="standardDeviation")  # Population formula

    model_config = ConfigDict(populate_by_name=True)


# Output schema for /statistics/{name}
class StatisticOut(BaseModel):
    statistic: str
    value: Union[Number, List[Number]]
