from dataclasses import asdict

from fastapi import APIRouter, HTTPException

from stats_analyzer.services.descriptive import STATISTICS, summary
from stats_analyzer.services.errors import StatisticsInputError
from stats_analyzer.api.schemas import SamplesIn, StatisticName, StatisticOut, SummaryOut
from stats_analyzer.observability.metrics import SAMPLE_SIZE

router = APIRouter()


@router.post("/summary", response_model=SummaryOut)
async def summarize(body: SamplesIn):
    """
    Accepts a JSON payload with 'numbers'.
    Returns average, maximum, median, minimum, mode, range and standardDeviation.
    Responds with 400 Bad Request for malformed input.
    """
    SAMPLE_SIZE.labels("/summary").observe(len(body.numbers))
    try:
        return SummaryOut(**asdict(summary(body.numbers)))
    except StatisticsInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.post("/statistics/{name}", response_model=StatisticOut)
async def statistic(name: StatisticName, body: SamplesIn):
    """
    Computes a single statistic, e.g. /statistics/median.
    Gives the same value as the matching field of /summary.
    """
    SAMPLE_SIZE.labels("/statistics/{name}").observe(len(body.numbers))
    try:
        value = STATISTICS[name.value](body.numbers)
    except StatisticsInputError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return StatisticOut(statistic=name.value, value=value)
