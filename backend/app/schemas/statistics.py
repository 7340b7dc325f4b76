from datetime import date

from pydantic import BaseModel

from app.stats.periods import Period


class SeriesPointResponse(BaseModel):
    label: str
    value: float


class MetricStatistics(BaseModel):
    total: float | None = None  # Not reported for sleep
    average: float
    count: int
    series: list[SeriesPointResponse]


class StatisticsResponse(BaseModel):
    period: Period
    start_date: date
    end_date: date
    calories: MetricStatistics
    exercise: MetricStatistics
    sleep: MetricStatistics
