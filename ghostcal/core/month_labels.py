"""Month header labels for the calendar grid.

Each week is represented by the month of its Sunday. Consecutive weeks in the
same month collapse into one :class:`MonthRun` so the header can print the
month name once and pad it to the width of its weeks.
"""

from __future__ import annotations

from typing import Iterable, List, NamedTuple, Sequence

from ghostcal.core.calendar_grid import Week
from ghostcal.core.errors import EmptyInputError


class MonthRun(NamedTuple):
    month: int  # 1-12
    weeks: int


LabelHeader = List[MonthRun]


def run_length_encode(values: Iterable[int]) -> List[MonthRun]:
    """Collapse consecutive equal values into ``(value, count)`` runs."""
    runs: List[MonthRun] = []
    for value in values:
        if runs and runs[-1].month == value:
            runs[-1] = MonthRun(value, runs[-1].weeks + 1)
        else:
            runs.append(MonthRun(value, 1))
    return runs


def compress_months(weeks: Sequence[Week]) -> LabelHeader:
    """Build the month header for a sequence of weeks.

    Raises:
        EmptyInputError: if ``weeks`` is empty.
    """
    if not weeks:
        raise EmptyInputError("No weeks to label")
    return run_length_encode(week.month for week in weeks)


def expand_months(header: Iterable[MonthRun]) -> List[int]:
    """Inverse of :func:`run_length_encode`."""
    months: List[int] = []
    for run in header:
        months.extend([run.month] * run.weeks)
    return months


__all__ = ["LabelHeader", "MonthRun", "compress_months", "expand_months", "run_length_encode"]
