"""Terminal rendering of the two-track activity calendar."""

from __future__ import annotations

from typing import List

from rich.console import Console
from rich.text import Text

from ghostcal.core.calendar_grid import DAYS_PER_WEEK, Grid
from ghostcal.core.classify import IntensityLevel
from ghostcal.core.month_labels import MonthRun
from ghostcal.core.report import CalendarReport
from ghostcal.core.theme import THEME_DARK, Theme

BLOCKS = ("░", "▒", "▓", "█")
WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# Width of "Sun  " in front of every row
LABEL_WIDTH = 5
TRACK_GAP = "  "


def block_for(level: IntensityLevel) -> str:
    return BLOCKS[int(level)]


def format_month_header(header: List[MonthRun], cell_width: int = 1) -> str:
    """Lay out month names over their weeks.

    Each run gets ``weeks * cell_width`` columns; the name is padded to fit
    or cut when the run is narrower than the name.
    """
    parts = []
    for run in header:
        space = run.weeks * cell_width
        parts.append(MONTH_NAMES[run.month - 1].ljust(space)[:space])
    return "".join(parts)


def build_track_rows(window: Grid, theme: Theme) -> List[Text]:
    """One line per weekday: the YOU cells, then the AI cells."""
    colors = theme.colors
    rows: List[Text] = []
    for weekday in range(DAYS_PER_WEEK):
        human_cells = Text()
        agent_cells = Text()
        for week in window:
            slot = week[weekday]
            if slot.is_ghost:
                human_cells.append(block_for(slot.human_level), style=colors.ghost_human)
                agent_cells.append(block_for(slot.agent_level), style=colors.ghost_agent)
            else:
                human_cells.append(block_for(slot.human_level), style=colors.human)
                agent_cells.append(block_for(slot.agent_level), style=colors.agent)

        label = WEEKDAY_LABELS[weekday].ljust(LABEL_WIDTH)
        row = Text()
        row.append(label, style=colors.human)
        row.append_text(human_cells)
        row.append(TRACK_GAP)
        row.append(label, style=colors.agent)
        row.append_text(agent_cells)
        rows.append(row)
    return rows


def _legend(theme: Theme) -> Text:
    colors = theme.colors
    legend = Text("  ")
    legend.append("█", style=colors.human)
    legend.append(" You  ")
    legend.append("█", style=colors.agent)
    legend.append(" AI  ")
    legend.append("█", style=colors.ghost_agent)
    legend.append(f" Ghost Day  {''.join(BLOCKS)} = none→light→heavy")
    return legend


def render_calendar(console: Console, report: CalendarReport, theme: Theme = THEME_DARK) -> None:
    """Print the calendar, legend and summary for ``report``."""
    colors = theme.colors
    aggregates = report.aggregates

    console.print()
    title = Text("  ")
    title.append("ghostcal", style=colors.title)
    title.append("  you vs AI activity calendar", style=colors.muted)
    console.print(title)
    console.print("  " + "═" * 52, style=colors.rule)
    console.print()

    months = format_month_header(report.header)
    indent = " " * LABEL_WIDTH
    console.print(Text(indent + months + TRACK_GAP + indent + months, style=colors.muted))
    for row in build_track_rows(report.window, theme):
        console.print(row)

    console.print()
    console.print(_legend(theme))
    console.print()

    period = Text("  ")
    period.append("▸ Period:", style=colors.heading)
    period.append(f"      {report.first_day.isoformat()} → {report.last_day.isoformat()}")
    console.print(period)

    active = Text("  ")
    active.append("▸ Active Days:", style=colors.heading)
    active.append(f" {aggregates.total_active_days} total")
    console.print(active)

    both = Text("  ├─ Both active:    ")
    both.append(str(aggregates.both), style=colors.both_count)
    both.append(" days")
    console.print(both)

    console.print(Text(f"  ├─ You only:       {aggregates.human_only} days"))

    ghost = Text("  └─ Ghost Days:     ")
    ghost.append(str(aggregates.ghost), style=colors.ghost_count)
    ghost.append(" days ")
    ghost.append("(AI worked while you rested)", style=colors.muted)
    console.print(ghost)

    if report.human_hours is not None:
        console.print()
        human_hours = Text("  ")
        human_hours.append("Your hours:", style=colors.human)
        human_hours.append(f"  {report.human_hours:.1f}h")
        console.print(human_hours)
        agent_hours = Text("  ")
        agent_hours.append("AI hours:", style=colors.agent)
        agent_hours.append(f"    {report.agent_hours or 0.0:.1f}h")
        console.print(agent_hours)

    if aggregates.ghost > 0:
        console.print()
        console.print(
            Text(
                f"  👻 {aggregates.ghost} Ghost Days · AI was "
                f"{aggregates.ghost_percent}% of your active days",
                style=colors.ghost_banner,
            )
        )
    console.print()


__all__ = [
    "BLOCKS",
    "block_for",
    "build_track_rows",
    "format_month_header",
    "render_calendar",
]
