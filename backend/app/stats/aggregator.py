"""
Aggregator - Reduces bucketed samples into totals, averages and chart series.

Calories and exercise are summed per bucket. Sleep is averaged, except for
day buckets where the last sleep record of the day is shown as-is: records
are consumed in the order the store returned them (insertion order), so a
later entry for the same night replaces an earlier one.
"""
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from app.services.statistics_config import StatisticsConfig, get_statistics_config
from app.stats.buckets import Bucketizer, build_buckets
from app.stats.periods import DateRange, Period, resolve_period
from app.stats.records import MetricKind, Sample, to_samples

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SeriesPoint:
    label: str
    value: float


@dataclass
class AggregateResult:
    """Summary of one metric over one period."""
    total: Optional[float]  # None for averaged metrics (sleep)
    average: float
    count: int
    series: list[SeriesPoint] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "average": self.average,
            "count": self.count,
            "series": [{"label": p.label, "value": p.value} for p in self.series],
        }


@dataclass
class PeriodSummary:
    """Statistics for calories, exercise and sleep over one resolved period."""
    period: Period
    date_range: DateRange
    calories: AggregateResult
    exercise: AggregateResult
    sleep: AggregateResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "period": self.period.value,
            "start_date": self.date_range.start.isoformat(),
            "end_date": self.date_range.end.isoformat(),
            "calories": self.calories.to_dict(),
            "exercise": self.exercise.to_dict(),
            "sleep": self.sleep.to_dict(),
        }


def _series(bucketizer: Bucketizer, values: list[float]) -> list[SeriesPoint]:
    return [SeriesPoint(label=label, value=value) for label, value in zip(bucketizer.labels, values)]


def _aggregate_summed(assigned: list[tuple[int, float]], bucketizer: Bucketizer) -> AggregateResult:
    values = [0.0] * len(bucketizer)
    for position, value in assigned:
        values[position] += value

    count = len(assigned)
    total = sum(value for _, value in assigned)
    return AggregateResult(
        total=total,
        average=total / count if count else 0.0,
        count=count,
        series=_series(bucketizer, values),
    )


def _aggregate_sleep(assigned: list[tuple[int, float]], bucketizer: Bucketizer) -> AggregateResult:
    count = len(assigned)
    average = sum(hours for _, hours in assigned) / count if count else 0.0

    if bucketizer.is_daily:
        values = [0.0] * len(bucketizer)
        for position, hours in assigned:
            # Last record wins
            values[position] = hours
    else:
        totals = [0.0] * len(bucketizer)
        counts = [0] * len(bucketizer)
        for position, hours in assigned:
            totals[position] += hours
            counts[position] += 1
        values = [t / c if c else 0.0 for t, c in zip(totals, counts)]

    return AggregateResult(
        total=None,
        average=average,
        count=count,
        series=_series(bucketizer, values),
    )


def aggregate(kind: MetricKind, samples: Iterable[Sample], bucketizer: Bucketizer) -> AggregateResult:
    """
    Aggregate samples of one metric into the given buckets.

    Only samples that land in a bucket contribute to total, average and
    count, so the series always sums to the total for summed metrics.
    Empty input yields zeros with a zero-filled series.
    """
    assigned: list[tuple[int, float]] = []
    skipped = 0
    for sample in samples:
        position = bucketizer.assign(sample.date)
        if position is None:
            skipped += 1
            continue
        assigned.append((position, sample.value))

    if skipped:
        logger.debug(
            "Samples outside period buckets",
            extra={"kind": kind.value, "skipped": skipped},
        )

    if kind is MetricKind.SLEEP:
        return _aggregate_sleep(assigned, bucketizer)
    return _aggregate_summed(assigned, bucketizer)


def summarize_period(
    period: Any,
    now: date | datetime,
    diet_records: Iterable[Any],
    exercise_records: Iterable[Any],
    sleep_records: Iterable[Any],
    owner_id: Optional[int] = None,
    config: Optional[StatisticsConfig] = None,
) -> PeriodSummary:
    """Resolve, bucketize and aggregate all three charted metrics."""
    config = config or get_statistics_config()
    resolved = Period.parse(period)
    date_range = resolve_period(resolved, now, config)
    bucketizer = build_buckets(resolved, date_range, now, config)

    return PeriodSummary(
        period=resolved,
        date_range=date_range,
        calories=aggregate(
            MetricKind.CALORIES,
            to_samples(diet_records, MetricKind.CALORIES, owner_id),
            bucketizer,
        ),
        exercise=aggregate(
            MetricKind.EXERCISE,
            to_samples(exercise_records, MetricKind.EXERCISE, owner_id),
            bucketizer,
        ),
        sleep=aggregate(
            MetricKind.SLEEP,
            to_samples(sleep_records, MetricKind.SLEEP, owner_id),
            bucketizer,
        ),
    )
