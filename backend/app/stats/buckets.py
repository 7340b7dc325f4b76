"""
Bucketizer - Splits a resolved period into labelled chart buckets.

Week and month periods are bucketed per calendar day, quarter and year
periods per calendar month of the current year.
"""
import calendar
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Optional

from app.services.statistics_config import StatisticsConfig, get_statistics_config
from app.stats.periods import DateRange, Period, as_date, quarter_start_month_index

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


def day_label(day: date) -> str:
    """Short label such as ``"Mar 5"``."""
    return f"{MONTH_ABBREVIATIONS[day.month - 1]} {day.day}"


@dataclass(frozen=True)
class Bucket:
    """Labelled sub-range of a period, inclusive on both ends."""
    label: str
    start: date
    end: date


class Bucketizer(ABC):
    """Ordered buckets for one period, plus record-to-bucket assignment."""

    is_daily: bool = False

    def __init__(self, date_range: DateRange, buckets: list[Bucket]):
        self.date_range = date_range
        self.buckets = buckets

    def __len__(self) -> int:
        return len(self.buckets)

    @property
    def labels(self) -> list[str]:
        return [bucket.label for bucket in self.buckets]

    def assign(self, day: Optional[date]) -> Optional[int]:
        """Index of the bucket holding ``day``; None if it falls outside the period."""
        if day not in self.date_range:
            return None
        return self._locate(day)

    @abstractmethod
    def _locate(self, day: date) -> Optional[int]:
        """Bucket index for a day already known to be inside the range."""


class DailyBucketizer(Bucketizer):
    """One bucket per calendar day, optionally keeping only the trailing days."""

    is_daily = True

    def __init__(self, date_range: DateRange, keep_last: Optional[int] = None):
        days = date_range.days()
        if keep_last is not None:
            days = days[-keep_last:]

        self._index: dict[date, int] = {day: position for position, day in enumerate(days)}
        super().__init__(
            date_range,
            [Bucket(label=day_label(day), start=day, end=day) for day in days],
        )

    def _locate(self, day: date) -> Optional[int]:
        return self._index.get(day)


class MonthlyBucketizer(Bucketizer):
    """One bucket per month between two zero-based month indices of one year."""

    def __init__(self, date_range: DateRange, year: int, first_month: int, last_month: int):
        self.year = year
        # Fixed 12-slot array: month index -> bucket position
        self._slots: list[Optional[int]] = [None] * 12

        buckets = []
        for position, month_index in enumerate(range(first_month, last_month + 1)):
            self._slots[month_index] = position
            month = month_index + 1
            last_day = calendar.monthrange(year, month)[1]
            buckets.append(
                Bucket(
                    label=MONTH_ABBREVIATIONS[month_index],
                    start=date(year, month, 1),
                    end=date(year, month, last_day),
                )
            )

        super().__init__(date_range, buckets)

    def _locate(self, day: date) -> Optional[int]:
        if day.year != self.year:
            return None
        return self._slots[day.month - 1]


def _week_buckets(date_range: DateRange, now: date | datetime, config: StatisticsConfig) -> Bucketizer:
    return DailyBucketizer(date_range, keep_last=config.periods.week_days)


def _month_buckets(date_range: DateRange, now: date | datetime, config: StatisticsConfig) -> Bucketizer:
    return DailyBucketizer(date_range)


def _quarter_buckets(date_range: DateRange, now: date | datetime, config: StatisticsConfig) -> Bucketizer:
    today = as_date(now)
    return MonthlyBucketizer(
        date_range,
        year=today.year,
        first_month=quarter_start_month_index(today, config),
        last_month=today.month - 1,
    )


def _year_buckets(date_range: DateRange, now: date | datetime, config: StatisticsConfig) -> Bucketizer:
    # All twelve months, including those not reached yet
    return MonthlyBucketizer(date_range, year=as_date(now).year, first_month=0, last_month=11)


_FACTORIES: dict[Period, Callable[[DateRange, date | datetime, StatisticsConfig], Bucketizer]] = {
    Period.WEEK: _week_buckets,
    Period.MONTH: _month_buckets,
    Period.QUARTER: _quarter_buckets,
    Period.YEAR: _year_buckets,
}


def build_buckets(
    period: Period,
    date_range: DateRange,
    now: date | datetime,
    config: Optional[StatisticsConfig] = None,
) -> Bucketizer:
    """Build the bucketizer for an already resolved period."""
    config = config or get_statistics_config()
    return _FACTORIES[Period.parse(period)](date_range, now, config)
