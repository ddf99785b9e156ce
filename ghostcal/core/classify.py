"""Day classification and aggregate counting.

Every day carries two hours values: the human track (the main session) and
the agent track (subagents). A day is classified into exactly one
:class:`Category` and each track is quantized into an :class:`IntensityLevel`
independently.

The quantization thresholds are fixed design constants. They are never
rescaled against the observed maximum, so the same number of hours always
renders the same way regardless of the rest of the data.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Mapping, NamedTuple, Protocol

from ghostcal.core.errors import InvalidHoursError


class Category(str, Enum):
    """Activity category of a single day."""

    IDLE = "idle"
    HUMAN_ONLY = "human_only"
    AGENT_ONLY = "ghost"
    BOTH = "both"


class IntensityLevel(IntEnum):
    """Ordinal bucket for an hours value."""

    NONE = 0
    LIGHT = 1
    MODERATE = 2
    HEAVY = 3


@dataclass(frozen=True)
class IntensityThresholds:
    """Hour boundaries between intensity levels.

    ``hours <= floor`` is NONE, ``< moderate`` is LIGHT, ``< heavy`` is
    MODERATE and anything else is HEAVY.
    """

    floor: float = 0.0
    moderate: float = 1.0
    heavy: float = 4.0

    def __post_init__(self) -> None:
        if not self.floor < self.moderate < self.heavy:
            raise ValueError(
                "Intensity thresholds must be strictly increasing: "
                f"floor={self.floor}, moderate={self.moderate}, heavy={self.heavy}"
            )


DEFAULT_THRESHOLDS = IntensityThresholds()


class Classification(NamedTuple):
    category: Category
    human_level: IntensityLevel
    agent_level: IntensityLevel


class HoursPair(Protocol):
    human: float
    agent: float


def _check_hours(hours: float, track: str) -> float:
    try:
        value = float(hours)
    except (TypeError, ValueError) as exc:
        raise InvalidHoursError(f"{track} hours must be a number, got {hours!r}", hours) from exc
    if math.isnan(value) or math.isinf(value):
        raise InvalidHoursError(f"{track} hours must be finite, got {hours!r}", hours)
    if value < 0:
        raise InvalidHoursError(f"{track} hours must not be negative, got {hours!r}", hours)
    return value


def intensity_level(
    hours: float, thresholds: IntensityThresholds = DEFAULT_THRESHOLDS
) -> IntensityLevel:
    """Quantize an hours value into an intensity level."""
    if hours <= thresholds.floor:
        return IntensityLevel.NONE
    if hours < thresholds.moderate:
        return IntensityLevel.LIGHT
    if hours < thresholds.heavy:
        return IntensityLevel.MODERATE
    return IntensityLevel.HEAVY


def categorize(human: float, agent: float) -> Category:
    """Return the category for a pair of hours values.

    Precedence is BOTH > AGENT_ONLY > HUMAN_ONLY > IDLE.
    """
    if human > 0 and agent > 0:
        return Category.BOTH
    if agent > 0:
        return Category.AGENT_ONLY
    if human > 0:
        return Category.HUMAN_ONLY
    return Category.IDLE


def classify(
    human: float, agent: float, thresholds: IntensityThresholds = DEFAULT_THRESHOLDS
) -> Classification:
    """Classify a day from its human and agent hours.

    Raises:
        InvalidHoursError: if either value is negative or not finite.
    """
    human = _check_hours(human, "human")
    agent = _check_hours(agent, "agent")
    return Classification(
        categorize(human, agent),
        intensity_level(human, thresholds),
        intensity_level(agent, thresholds),
    )


@dataclass(frozen=True)
class Aggregates:
    """Category counts over a whole activity record."""

    both: int = 0
    human_only: int = 0
    ghost: int = 0
    total_active_days: int = 0
    recorded_days: int = 0

    @property
    def ghost_percent(self) -> int:
        """Share of active days that were Ghost Days, rounded to a whole percent."""
        if self.total_active_days == 0:
            return 0
        return round(self.ghost / self.total_active_days * 100)


def count_aggregates(activity: Mapping[object, HoursPair]) -> Aggregates:
    """Count categories across every key of ``activity``.

    This runs over the full record, not just the displayed window.
    """
    counts = {category: 0 for category in Category}
    for hours in activity.values():
        human = _check_hours(hours.human, "human")
        agent = _check_hours(hours.agent, "agent")
        counts[categorize(human, agent)] += 1

    return Aggregates(
        both=counts[Category.BOTH],
        human_only=counts[Category.HUMAN_ONLY],
        ghost=counts[Category.AGENT_ONLY],
        total_active_days=len(activity) - counts[Category.IDLE],
        recorded_days=len(activity),
    )


__all__ = [
    "Aggregates",
    "Category",
    "Classification",
    "DEFAULT_THRESHOLDS",
    "IntensityLevel",
    "IntensityThresholds",
    "categorize",
    "classify",
    "count_aggregates",
    "intensity_level",
]
