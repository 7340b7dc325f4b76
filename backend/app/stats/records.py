"""
Record snapshots consumed by the statistics engine.

Store rows (ORM objects, pydantic models or plain dicts) are reduced to
``Sample(date, value)`` pairs before any bucketing happens. Rows that cannot
be reduced are dropped here, so the rest of the engine only ever sees
well-formed samples.
"""
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600


class MetricKind(str, Enum):
    """Numeric payload carried by each health record variant."""
    CALORIES = "calories"
    EXERCISE = "exercise"
    SLEEP = "sleep"
    WEIGHT = "weight"


# Attribute holding the payload for directly stored metrics
VALUE_FIELDS: dict[MetricKind, str] = {
    MetricKind.CALORIES: "calories",
    MetricKind.EXERCISE: "duration_minutes",
    MetricKind.WEIGHT: "weight_kg",
}


@dataclass(frozen=True)
class Sample:
    """One record reduced to its calendar day and numeric value."""
    date: date
    value: float


def read_field(record: Any, name: str) -> Any:
    """Read a field from an ORM object, a pydantic model or a mapping."""
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def coerce_date(value: Any) -> Optional[date]:
    """Return a calendar date for date, datetime or ISO ``YYYY-MM-DD`` input."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError:
            return None
    return None


def coerce_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
    return None


def sleep_hours(bedtime: Any, waketime: Any) -> Optional[float]:
    """
    Derive hours slept from a bedtime/waketime pair.

    Negative intervals clamp to 0. Returns None when either instant is
    missing or the pair cannot be subtracted (e.g. naive vs aware).
    """
    start = coerce_datetime(bedtime)
    end = coerce_datetime(waketime)
    if start is None or end is None:
        return None

    try:
        seconds = (end - start).total_seconds()
    except TypeError:
        return None

    return max(0.0, seconds / SECONDS_PER_HOUR)


def record_value(record: Any, kind: MetricKind) -> Optional[float]:
    """Numeric payload of a record for the given metric, or None if malformed."""
    if kind is MetricKind.SLEEP:
        return sleep_hours(read_field(record, "bedtime"), read_field(record, "waketime"))

    value = read_field(record, VALUE_FIELDS[kind])
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def to_samples(
    records: Iterable[Any],
    kind: MetricKind,
    owner_id: Optional[int] = None,
) -> list[Sample]:
    """
    Reduce records to samples, preserving input order.

    Records owned by someone other than ``owner_id`` (when given) and
    malformed records are skipped.
    """
    samples: list[Sample] = []
    dropped = 0

    for record in records:
        if owner_id is not None and read_field(record, "user_id") not in (None, owner_id):
            dropped += 1
            continue

        day = coerce_date(read_field(record, "date"))
        value = record_value(record, kind)
        if day is None or value is None:
            dropped += 1
            continue

        samples.append(Sample(date=day, value=value))

    if dropped:
        logger.debug(
            "Dropped records during sampling",
            extra={"kind": kind.value, "dropped": dropped, "kept": len(samples)},
        )

    return samples
