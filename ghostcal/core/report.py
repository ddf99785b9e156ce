"""Assemble everything the presentation layer needs from one payload."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

from ghostcal.core.activity import ActivityPayload, format_date_key, normalize_activity
from ghostcal.core.calendar_grid import DEFAULT_WINDOW_WEEKS, Grid, build_grid, windowed
from ghostcal.core.classify import (
    DEFAULT_THRESHOLDS,
    Aggregates,
    IntensityThresholds,
    count_aggregates,
)
from ghostcal.core.month_labels import LabelHeader, compress_months
from ghostcal.utils.log import get_logger

logger = get_logger()


@dataclass(frozen=True)
class CalendarReport:
    """Classified display window plus summary figures for the full record."""

    window: Grid
    header: LabelHeader
    aggregates: Aggregates
    first_day: date
    last_day: date
    # Passed through from the payload, not recomputed.
    human_hours: Optional[float] = None
    agent_hours: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-ready representation."""
        aggregates = self.aggregates
        return {
            "period": {
                "first": format_date_key(self.first_day),
                "last": format_date_key(self.last_day),
            },
            "aggregates": {
                "both": aggregates.both,
                "human_only": aggregates.human_only,
                "ghost": aggregates.ghost,
                "total_active_days": aggregates.total_active_days,
                "recorded_days": aggregates.recorded_days,
                "ghost_percent": aggregates.ghost_percent,
            },
            "hours": {"human": self.human_hours, "agent": self.agent_hours},
            "header": [{"month": run.month, "weeks": run.weeks} for run in self.header],
            "weeks": [
                [
                    {
                        "date": slot.key,
                        "category": slot.category.value,
                        "human_level": int(slot.human_level),
                        "agent_level": int(slot.agent_level),
                    }
                    for slot in week
                ]
                for week in self.window
            ],
        }


def build_report(
    payload: ActivityPayload,
    now: Optional[Union[date, datetime]] = None,
    window_weeks: int = DEFAULT_WINDOW_WEEKS,
    thresholds: IntensityThresholds = DEFAULT_THRESHOLDS,
) -> CalendarReport:
    """Build the calendar report for ``payload``.

    Raises:
        EmptyInputError: if the payload has no dated records.
        InvalidActivityError: if a date key cannot be parsed.
        InvalidHoursError: if a record holds negative or non-finite hours.
    """
    record = normalize_activity(payload.by_date)
    grid = build_grid(record, now=now, thresholds=thresholds)
    window = windowed(grid, window_weeks)
    report = CalendarReport(
        window=window,
        header=compress_months(window),
        aggregates=count_aggregates(record),
        first_day=min(record),
        last_day=max(record),
        human_hours=payload.main_hours,
        agent_hours=payload.subagent_hours,
    )
    logger.debug(
        "[report] Built calendar report",
        extra={
            "grid_weeks": len(grid),
            "window_weeks": len(window),
            "active_days": report.aggregates.total_active_days,
            "ghost_days": report.aggregates.ghost,
        },
    )
    return report


__all__ = ["CalendarReport", "build_report"]
