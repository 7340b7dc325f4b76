"""
Period Resolver - Maps a period keyword to a concrete calendar date range.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Callable, Optional

from app.services.statistics_config import StatisticsConfig, get_statistics_config

logger = logging.getLogger(__name__)


class Period(str, Enum):
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"

    @classmethod
    def parse(cls, value: Any) -> "Period":
        """Parse an exact lowercase keyword; anything else falls back to MONTH."""
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.MONTH
        try:
            return cls(value)
        except ValueError:
            logger.debug("Unknown period keyword, using month", extra={"period": value})
            return cls.MONTH

    @property
    def is_daily(self) -> bool:
        """True when the period is charted per day rather than per month."""
        return self in (Period.WEEK, Period.MONTH)


@dataclass(frozen=True)
class DateRange:
    """Calendar date range, inclusive on both ends."""
    start: date
    end: date

    def __contains__(self, day: object) -> bool:
        return isinstance(day, date) and self.start <= day <= self.end

    def days(self) -> list[date]:
        """Every calendar day from start to end."""
        span = (self.end - self.start).days
        return [self.start + timedelta(days=offset) for offset in range(span + 1)]


def as_date(now: date | datetime) -> date:
    return now.date() if isinstance(now, datetime) else now


def quarter_start_month_index(now: date | datetime, config: Optional[StatisticsConfig] = None) -> int:
    """
    Zero-based month index where the quarter starts.

    Clamps to January instead of rolling into the previous year, so a quarter
    requested in January to March is shorter than four months.
    """
    config = config or get_statistics_config()
    current_month_index = as_date(now).month - 1
    return max(0, current_month_index - config.periods.quarter_lookback_months)


def _resolve_week(now: date | datetime, config: StatisticsConfig) -> DateRange:
    today = as_date(now)
    return DateRange(start=today - timedelta(days=config.periods.week_days), end=today)


def _resolve_month(now: date | datetime, config: StatisticsConfig) -> DateRange:
    today = as_date(now)
    return DateRange(start=today.replace(day=1), end=today)


def _resolve_quarter(now: date | datetime, config: StatisticsConfig) -> DateRange:
    today = as_date(now)
    start_month = quarter_start_month_index(today, config) + 1
    return DateRange(start=date(today.year, start_month, 1), end=today)


def _resolve_year(now: date | datetime, config: StatisticsConfig) -> DateRange:
    today = as_date(now)
    return DateRange(start=date(today.year, 1, 1), end=today)


_RESOLVERS: dict[Period, Callable[[date | datetime, StatisticsConfig], DateRange]] = {
    Period.WEEK: _resolve_week,
    Period.MONTH: _resolve_month,
    Period.QUARTER: _resolve_quarter,
    Period.YEAR: _resolve_year,
}


def resolve_period(
    period: Any,
    now: date | datetime,
    config: Optional[StatisticsConfig] = None,
) -> DateRange:
    """Resolve a period keyword against ``now``. Never raises for bad keywords."""
    config = config or get_statistics_config()
    return _RESOLVERS[Period.parse(period)](now, config)
