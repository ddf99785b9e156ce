"""Week grid construction for the activity calendar.

The grid starts on the Sunday on or before the earliest recorded day and
runs week by week until the week containing today. Every week holds exactly
seven consecutive days, Sunday first, and there are no gaps between weeks.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterator, Mapping, Optional, Tuple, Union

from ghostcal.core.activity import ZERO_HOURS, DayHours, format_date_key
from ghostcal.core.classify import (
    DEFAULT_THRESHOLDS,
    Category,
    IntensityLevel,
    IntensityThresholds,
    classify,
)
from ghostcal.core.errors import EmptyInputError
from ghostcal.utils.log import get_logger

logger = get_logger()

DAYS_PER_WEEK = 7
DEFAULT_WINDOW_WEEKS = 26


@dataclass(frozen=True)
class DaySlot:
    """One calendar day with its hours and classification."""

    day: date
    human: float
    agent: float
    category: Category
    human_level: IntensityLevel
    agent_level: IntensityLevel

    @property
    def key(self) -> str:
        return format_date_key(self.day)

    @property
    def is_ghost(self) -> bool:
        return self.category is Category.AGENT_ONLY


@dataclass(frozen=True)
class Week:
    """Seven consecutive day slots, index 0 is Sunday."""

    days: Tuple[DaySlot, ...]

    def __post_init__(self) -> None:
        if len(self.days) != DAYS_PER_WEEK:
            raise ValueError(f"A week needs {DAYS_PER_WEEK} days, got {len(self.days)}")

    @property
    def sunday(self) -> date:
        return self.days[0].day

    @property
    def month(self) -> int:
        """Representative month of the week (the month of its Sunday)."""
        return self.days[0].day.month

    def __len__(self) -> int:
        return len(self.days)

    def __iter__(self) -> Iterator[DaySlot]:
        return iter(self.days)

    def __getitem__(self, index: int) -> DaySlot:
        return self.days[index]


Grid = Tuple[Week, ...]


def sunday_on_or_before(day: date) -> date:
    """Return ``day`` itself if it is a Sunday, else the preceding Sunday."""
    # date.weekday() is Monday=0 .. Sunday=6; shift so Sunday=0.
    return day - timedelta(days=(day.weekday() + 1) % 7)


def _as_date(now: Optional[Union[date, datetime]]) -> date:
    if now is None:
        return datetime.now().date()
    if isinstance(now, datetime):
        return now.date()
    return now


def make_slot(
    day: date, hours: DayHours, thresholds: IntensityThresholds = DEFAULT_THRESHOLDS
) -> DaySlot:
    category, human_level, agent_level = classify(hours.human, hours.agent, thresholds)
    return DaySlot(day, hours.human, hours.agent, category, human_level, agent_level)


def build_grid(
    activity: Mapping[date, DayHours],
    now: Optional[Union[date, datetime]] = None,
    thresholds: IntensityThresholds = DEFAULT_THRESHOLDS,
) -> Grid:
    """Build the full week grid for a date-keyed activity record.

    Args:
        activity: Normalized record (see ``normalize_activity``).
        now: Reference "today"; defaults to the local current time. Only the
            calendar date is used, so today's row is always included.
        thresholds: Intensity thresholds used to classify each day.

    Records dated after the week containing today are not drawn; they still
    count in ``count_aggregates``.

    Raises:
        EmptyInputError: if ``activity`` has no keys, or none of them fall in
            or before the week containing today.
    """
    if not activity:
        raise EmptyInputError("No activity records to build a calendar from")

    days = sorted(activity)
    today = _as_date(now)
    start = sunday_on_or_before(days[0])
    if start > today:
        raise EmptyInputError(f"No activity on or before {today.isoformat()}")

    weeks = []
    sunday = start
    while sunday <= today:
        slots = []
        for offset in range(DAYS_PER_WEEK):
            day = sunday + timedelta(days=offset)
            slots.append(make_slot(day, activity.get(day, ZERO_HOURS), thresholds))
        weeks.append(Week(tuple(slots)))
        sunday += timedelta(days=DAYS_PER_WEEK)

    logger.debug(
        "[grid] Built calendar grid",
        extra={
            "start": start.isoformat(),
            "today": today.isoformat(),
            "weeks": len(weeks),
            "records": len(days),
        },
    )
    return tuple(weeks)


def windowed(grid: Grid, size: int = DEFAULT_WINDOW_WEEKS) -> Grid:
    """Return the trailing ``size`` weeks of ``grid`` (the whole grid if shorter)."""
    if size < 1:
        raise ValueError(f"Window size must be at least 1 week, got {size}")
    return tuple(grid[-size:])


def iter_days(grid: Grid) -> Iterator[DaySlot]:
    for week in grid:
        yield from week


__all__ = [
    "DAYS_PER_WEEK",
    "DEFAULT_WINDOW_WEEKS",
    "DaySlot",
    "Grid",
    "Week",
    "build_grid",
    "iter_days",
    "make_slot",
    "sunday_on_or_before",
    "windowed",
]
