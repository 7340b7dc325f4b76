"""
Goal Progress Evaluator - Derives a 0-100 completion value for a goal.

Progress is recomputed from the user's records on every call and never
stored. Any failure (unknown goal type, missing data, malformed record)
results in 0 rather than an error.
"""
import logging
import math
from collections.abc import Iterable
from datetime import date, datetime, timedelta
from typing import Any, Optional

from app.schemas.enums import GoalType
from app.services.statistics_config import StatisticsConfig, get_statistics_config
from app.stats.periods import DateRange, as_date
from app.stats.records import MetricKind, Sample, coerce_date, read_field, to_samples

logger = logging.getLogger(__name__)

MAX_PROGRESS = 100

# Record metric feeding each goal type
GOAL_METRICS: dict[GoalType, MetricKind] = {
    GoalType.WEIGHT: MetricKind.WEIGHT,
    GoalType.CALORIES: MetricKind.CALORIES,
    GoalType.EXERCISE: MetricKind.EXERCISE,
    GoalType.SLEEP: MetricKind.SLEEP,
}


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def progress_window(
    goal: Any,
    now: date | datetime,
    config: Optional[StatisticsConfig] = None,
) -> DateRange:
    """
    Date range whose records count toward the goal.

    Starts at the goal's creation day (or ``default_window_days`` ago when
    unknown) and ends at the deadline or today, whichever comes first.
    """
    config = config or get_statistics_config()
    today = as_date(now)

    start = coerce_date(read_field(goal, "created_at"))
    if start is None:
        start = today - timedelta(days=config.goals.default_window_days)

    deadline = coerce_date(read_field(goal, "deadline"))
    if deadline is None:
        raise ValueError("Goal has no valid deadline")

    return DateRange(start=start, end=min(deadline, today))


def _weight_progress(samples: list[Sample], target: float) -> float:
    if not samples:
        return 0
    ordered = sorted(samples, key=lambda s: s.date)
    initial = ordered[0].value
    latest = ordered[-1].value

    target_change = abs(target - initial)
    if target_change == 0:
        return 0
    return abs(latest - initial) / target_change * 100


def _ratio_progress(current: float, target: float) -> float:
    if target <= 0:
        return 0
    return current / target * 100


def _compute_progress(
    goal: Any,
    records: Iterable[Any],
    now: date | datetime,
    config: StatisticsConfig,
) -> int:
    goal_type = GoalType(read_field(goal, "goal_type"))
    target = float(read_field(goal, "target"))
    window = progress_window(goal, now, config)

    samples = [
        s for s in to_samples(records, GOAL_METRICS[goal_type])
        if s.date in window
    ]

    if goal_type is GoalType.WEIGHT:
        raw = _weight_progress(samples, target)
    elif goal_type is GoalType.SLEEP:
        if not samples:
            return 0
        raw = _ratio_progress(sum(s.value for s in samples) / len(samples), target)
    else:
        raw = _ratio_progress(sum(s.value for s in samples), target)

    progress = max(0, min(MAX_PROGRESS, round_half_up(raw)))

    deadline_passed = window.end < as_date(now)
    if deadline_passed and progress >= MAX_PROGRESS:
        progress = MAX_PROGRESS

    return progress


def calculate_progress(
    goal: Any,
    records: Iterable[Any],
    now: date | datetime,
    config: Optional[StatisticsConfig] = None,
) -> int:
    """Progress of ``goal`` in percent (0-100) given the relevant records."""
    config = config or get_statistics_config()
    try:
        return _compute_progress(goal, records, now, config)
    except (ArithmeticError, TypeError, ValueError) as exc:
        logger.debug(
            "Goal progress unavailable",
            extra={"goal_id": read_field(goal, "id"), "error": str(exc)},
        )
        return 0
